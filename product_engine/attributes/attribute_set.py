"""
Attribute rows and the variant list derived from them.

Every row mutation regenerates the variants from scratch, so the variant
list always equals regenerate(rows) except for the two edits a user can make
on it directly (apply toggle, manual removal). Those survive only until the
next row mutation.
"""
from __future__ import annotations
from typing import Optional
import logging

from product_engine.attributes.combinations import regenerate
from product_engine.catalog import AttributeCatalog
from product_engine.config import VariantConfig
from product_engine.models.rows import AttributeRow, Variant

logger = logging.getLogger(__name__)


class AttributeSet:
    """Attribute rows plus their derived variants."""

    def __init__(
        self,
        catalog: Optional[AttributeCatalog] = None,
        config: Optional[VariantConfig] = None,
    ):
        self.catalog = catalog
        self.config = config or VariantConfig()
        self._rows: list[AttributeRow] = []
        self._variants: list[Variant] = []

    # --- Queries ---

    @property
    def rows(self) -> list[AttributeRow]:
        """Copies of the rows. Edits go through the row commands."""
        return [row.model_copy(deep=True) for row in self._rows]

    def get_row(self, row_id: int) -> Optional[AttributeRow]:
        for row in self._rows:
            if row.id == row_id:
                return row
        return None

    def get_derived_variants(self) -> list[Variant]:
        """Copies of the current variants."""
        return [variant.model_copy(deep=True) for variant in self._variants]

    # --- Row mutations (each one regenerates) ---

    def add_row(self) -> AttributeRow:
        next_id = max((r.id for r in self._rows), default=0) + 1
        row = AttributeRow(id=next_id)
        self._rows.append(row)
        self._regenerate()
        return row

    def set_attribute_key(self, row_id: int, key: str) -> bool:
        row = self.get_row(row_id)
        if row is None:
            logger.debug(f"set_attribute_key ignored: no row {row_id}")
            return False
        if key and self.catalog and not self.catalog.is_valid_key(key):
            logger.debug(f"set_attribute_key ignored: unknown attribute {key!r}")
            return False
        row.attribute_key = key
        self._regenerate()
        return True

    def set_values(self, row_id: int, values: list[str]) -> bool:
        row = self.get_row(row_id)
        if row is None:
            logger.debug(f"set_values ignored: no row {row_id}")
            return False
        deduped = list(dict.fromkeys(values))
        rejected = [v for v in deduped if not self._value_allowed(row, v)]
        if rejected:
            logger.debug(f"set_values ignored: {rejected} not offered for {row.attribute_key!r}")
            return False
        row.values = deduped
        self._regenerate()
        return True

    def toggle_value(self, row_id: int, value: str) -> bool:
        row = self.get_row(row_id)
        if row is None:
            logger.debug(f"toggle_value ignored: no row {row_id}")
            return False
        if value in row.values:
            row.values = [v for v in row.values if v != value]
        elif self._value_allowed(row, value):
            row.values = [*row.values, value]
        else:
            logger.debug(f"toggle_value ignored: {value!r} not offered for {row.attribute_key!r}")
            return False
        self._regenerate()
        return True

    def set_apply(self, row_id: int, flag: bool) -> bool:
        row = self.get_row(row_id)
        if row is None:
            return False
        row.apply = bool(flag)
        self._regenerate()
        return True

    def remove_row(self, row_id: int) -> bool:
        remaining = [r for r in self._rows if r.id != row_id]
        if len(remaining) == len(self._rows):
            return False
        self._rows = remaining
        self._regenerate()
        return True

    # --- Direct edits on the derived list (lost on next regeneration) ---

    def toggle_variant_apply(self, variant_id: int) -> bool:
        for variant in self._variants:
            if variant.id == variant_id:
                variant.apply = not variant.apply
                return True
        return False

    def remove_variant(self, variant_id: int) -> bool:
        remaining = [v for v in self._variants if v.id != variant_id]
        if len(remaining) == len(self._variants):
            return False
        self._variants = remaining
        return True

    # --- Internals ---

    def _value_allowed(self, row: AttributeRow, value: str) -> bool:
        if self.catalog is None or not row.attribute_key:
            return True
        return self.catalog.is_valid_value(row.attribute_key, value)

    def _regenerate(self):
        self._variants = regenerate(self._rows, self.config)
        logger.debug(f"Regenerated {len(self._variants)} variants from {len(self._rows)} rows")
