"""Bill-of-materials rows for compo products and their total cost.

Quantity and cost are kept exactly as typed. Only total_cost() interprets
them, reading the leading number of each value and treating anything
unparsable as 0.
"""

from __future__ import annotations

import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from product_engine.models.rows import CompoItem

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("product", "unit", "quantity", "cost")

_LEADING_NUMBER = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def parse_number(text: str) -> Decimal:
    """Leading decimal number of ``text``, or 0.

    ``"12.5kg"`` -> 12.5, ``"abc"`` -> 0, ``""`` -> 0.
    """
    match = _LEADING_NUMBER.match(text or "")
    if not match:
        return Decimal("0")
    try:
        return Decimal(match.group(0).strip())
    except InvalidOperation:
        return Decimal("0")


class CompoList:
    """Component rows of a compo (bundle) product."""

    def __init__(self):
        self._items: list[CompoItem] = []

    @property
    def items(self) -> list[CompoItem]:
        return list(self._items)

    def get_item(self, item_id: int) -> Optional[CompoItem]:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def add_item(self) -> CompoItem:
        next_id = max((i.id for i in self._items), default=0) + 1
        item = CompoItem(id=next_id)
        self._items.append(item)
        return item

    def update_item(self, item_id: int, field: str, value: str) -> bool:
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Unknown compo field: {field}. Editable: {list(EDITABLE_FIELDS)}")
        item = self.get_item(item_id)
        if item is None:
            logger.debug(f"update_item ignored: no compo item {item_id}")
            return False
        setattr(item, field, "" if value is None else str(value))
        return True

    def remove_item(self, item_id: int) -> bool:
        remaining = [i for i in self._items if i.id != item_id]
        if len(remaining) == len(self._items):
            return False
        self._items = remaining
        return True

    def total_cost(self) -> Decimal:
        """Sum of quantity x cost over all rows."""
        return sum(
            (parse_number(i.quantity) * parse_number(i.cost) for i in self._items),
            Decimal("0"),
        )
