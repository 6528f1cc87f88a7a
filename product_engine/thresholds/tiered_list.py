"""
Tiered Threshold List: Capped, Auto-Renumbered Level Rows

Used for demand levels, expiry levels and price-based discount tiers:
- At most ``max_levels`` rows (5 by default)
- ``level`` always equals 1 + position; restored after every removal
- Range bounds stored as typed, never validated against each other
"""
from __future__ import annotations
from typing import Any, Optional
import logging

from product_engine.models.rows import RangeDomain, ThresholdRow

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("range_from", "range_to", "notify")


class TieredThresholdList:
    """Ordered threshold rows with a capacity cap."""

    def __init__(self, domain: RangeDomain = RangeDomain.QUANTITY, max_levels: int = 5):
        self.domain = domain
        self.max_levels = max_levels
        self._rows: list[ThresholdRow] = []

    @property
    def rows(self) -> list[ThresholdRow]:
        return list(self._rows)

    @property
    def is_full(self) -> bool:
        return len(self._rows) >= self.max_levels

    def __len__(self) -> int:
        return len(self._rows)

    def add_row(self) -> Optional[ThresholdRow]:
        """Append the next level. Returns None when the list is full."""
        if self.is_full:
            logger.debug(f"add_row ignored: {self.domain.value} list at {self.max_levels} levels")
            return None
        row = ThresholdRow(level=len(self._rows) + 1)
        self._rows.append(row)
        return row

    def update_row(self, index: int, field: str, value: Any) -> bool:
        """Set one field of the row at ``index``.

        Raises ValueError for a field that is not editable (``level`` is
        owned by the list).
        """
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Unknown threshold field: {field}. Editable: {list(EDITABLE_FIELDS)}")
        if not 0 <= index < len(self._rows):
            logger.debug(f"update_row ignored: index {index} out of range")
            return False
        row = self._rows[index]
        if field == "notify":
            row.notify = bool(value)
        else:
            setattr(row, field, "" if value is None else str(value))
        return True

    def remove_row(self, index: int) -> bool:
        if not 0 <= index < len(self._rows):
            logger.debug(f"remove_row ignored: index {index} out of range")
            return False
        del self._rows[index]
        self._renumber()
        return True

    def _renumber(self):
        for position, row in enumerate(self._rows):
            row.level = position + 1
