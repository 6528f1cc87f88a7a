"""
Unit/Price Matrix: Packing Units with Per-Tier Prices

Collection rules:
- Never fewer than one unit row
- At most one row is the default sales unit and at most one the default
  purchase unit; a row that becomes one of them stops being the other
- Each row owns its own price vector over the shared tier columns
"""
from __future__ import annotations
from decimal import Decimal
from typing import Any, Optional, Sequence
import logging

from product_engine.models.rows import PriceCell, UnitRow

logger = logging.getLogger(__name__)

SETTABLE_FIELDS = (
    "packing_label",
    "parts_count",
    "last_cost",
    "avg_cost",
    "is_default_sales",
    "is_default_purchase",
)


class UnitPriceMatrix:
    """Ordered unit rows sharing one set of price-tier columns."""

    def __init__(self, tier_ids: Sequence[str]):
        if not tier_ids:
            raise ValueError("UnitPriceMatrix needs at least one price tier")
        self._rows: list[UnitRow] = [UnitRow(id=1, price_vector=self._blank_vector(tier_ids))]

    @property
    def rows(self) -> list[UnitRow]:
        return list(self._rows)

    def tier_columns(self) -> list[str]:
        """Column headers, read from the first row's vector."""
        return [cell.tier_id for cell in self._rows[0].price_vector]

    def get_unit(self, unit_id: int) -> Optional[UnitRow]:
        for row in self._rows:
            if row.id == unit_id:
                return row
        return None

    def default_sales_unit(self) -> Optional[UnitRow]:
        return next((r for r in self._rows if r.is_default_sales), None)

    def default_purchase_unit(self) -> Optional[UnitRow]:
        return next((r for r in self._rows if r.is_default_purchase), None)

    # --- Rows ---

    def add_unit(self) -> UnitRow:
        next_id = max(r.id for r in self._rows) + 1
        row = UnitRow(id=next_id, price_vector=self._blank_vector(self.tier_columns()))
        self._rows.append(row)
        return row

    def remove_unit(self, unit_id: int) -> bool:
        if len(self._rows) <= 1:
            logger.debug("remove_unit ignored: at least one unit row is required")
            return False
        remaining = [r for r in self._rows if r.id != unit_id]
        if len(remaining) == len(self._rows):
            return False
        self._rows = remaining
        return True

    # --- Fields ---

    def set_field(self, unit_id: int, field: str, value: Any) -> bool:
        """Validated update of one scalar field.

        The two default flags are routed through their exclusive setters.
        Raises ValueError for an unknown field or a value of the wrong type.
        """
        if field not in SETTABLE_FIELDS:
            raise ValueError(f"Unknown unit field: {field}. Settable: {list(SETTABLE_FIELDS)}")
        if field == "is_default_sales":
            return self.set_default_sales(unit_id, value)
        if field == "is_default_purchase":
            return self.set_default_purchase(unit_id, value)

        row = self.get_unit(unit_id)
        if row is None:
            logger.debug(f"set_field ignored: no unit {unit_id}")
            return False
        validated = UnitRow.model_validate({**row.model_dump(), field: value})
        setattr(row, field, getattr(validated, field))
        return True

    def set_default_sales(self, unit_id: int, flag: bool = True) -> bool:
        row = self.get_unit(unit_id)
        if row is None:
            logger.debug(f"set_default_sales ignored: no unit {unit_id}")
            return False
        if not flag:
            row.is_default_sales = False
            return True
        for other in self._rows:
            other.is_default_sales = other.id == unit_id
        row.is_default_purchase = False
        return True

    def set_default_purchase(self, unit_id: int, flag: bool = True) -> bool:
        row = self.get_unit(unit_id)
        if row is None:
            logger.debug(f"set_default_purchase ignored: no unit {unit_id}")
            return False
        if not flag:
            row.is_default_purchase = False
            return True
        for other in self._rows:
            other.is_default_purchase = other.id == unit_id
        row.is_default_sales = False
        return True

    def set_price(self, unit_id: int, tier_id: str, amount: Any) -> bool:
        row = self.get_unit(unit_id)
        if row is None:
            logger.debug(f"set_price ignored: no unit {unit_id}")
            return False
        for cell in row.price_vector:
            if cell.tier_id == tier_id:
                cell.amount = PriceCell(tier_id=tier_id, amount=amount).amount
                return True
        logger.debug(f"set_price ignored: unknown tier {tier_id!r}")
        return False

    @staticmethod
    def _blank_vector(tier_ids: Sequence[str]) -> list[PriceCell]:
        return [PriceCell(tier_id=tier_id, amount=Decimal("0")) for tier_id in tier_ids]
