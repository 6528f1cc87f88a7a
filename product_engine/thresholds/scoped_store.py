"""
Scoped Threshold Store: One Active Threshold List per Scope

Two modes:
- GLOBAL: a single list shared by every scope
- PER_SCOPE: one list per scope key (branch id), created on first access

All reads and writes go through resolve(), the only place that decides
which list is active. With PER_SCOPE and no active key nothing resolves,
and every mutation becomes a no-op.
"""
from __future__ import annotations
from typing import Any, Optional
import logging

from product_engine.catalog import BranchDirectory
from product_engine.models.rows import RangeDomain, ScopeMode, ThresholdRow
from product_engine.thresholds.tiered_list import TieredThresholdList

logger = logging.getLogger(__name__)


class ScopedThresholdStore:
    """Global list plus lazily created per-scope lists."""

    def __init__(
        self,
        name: str,
        domain: RangeDomain = RangeDomain.QUANTITY,
        max_levels: int = 5,
        allow_per_scope: bool = True,
        scopes: Optional[BranchDirectory] = None,
    ):
        self.name = name
        self.domain = domain
        self.max_levels = max_levels
        self.allow_per_scope = allow_per_scope
        self.scopes = scopes

        self.scope_mode = ScopeMode.GLOBAL
        self.active_scope_key = ""
        self.global_list = TieredThresholdList(domain, max_levels)
        self.per_scope_lists: dict[str, TieredThresholdList] = {}

    # --- Mode & key ---

    def set_scope_mode(self, mode: ScopeMode | str) -> bool:
        mode = ScopeMode(mode)
        if mode == ScopeMode.PER_SCOPE and not self.allow_per_scope:
            logger.debug(f"{self.name}: per-scope mode not available")
            return False
        self.scope_mode = mode
        return True

    def set_active_scope(self, scope_key: str) -> bool:
        if scope_key and self.scopes and not self.scopes.is_valid(scope_key):
            logger.debug(f"{self.name}: unknown scope {scope_key!r}")
            return False
        self.active_scope_key = scope_key or ""
        return True

    # --- Resolution ---

    def resolve(self) -> Optional[TieredThresholdList]:
        """Return the active list, or None when PER_SCOPE has no key."""
        if self.scope_mode == ScopeMode.GLOBAL:
            return self.global_list
        if not self.active_scope_key:
            return None
        if self.active_scope_key not in self.per_scope_lists:
            self.per_scope_lists[self.active_scope_key] = TieredThresholdList(
                self.domain, self.max_levels
            )
        return self.per_scope_lists[self.active_scope_key]

    def get_active_threshold_list(self) -> list[ThresholdRow]:
        active = self.resolve()
        return active.rows if active is not None else []

    def can_add_row(self) -> bool:
        """Mirror of the add control's enabled state."""
        active = self.resolve()
        return active is not None and not active.is_full

    # --- Mutations on the active list ---

    def add_row(self) -> Optional[ThresholdRow]:
        active = self.resolve()
        if active is None:
            logger.debug(f"{self.name}: add_row ignored, no active scope")
            return None
        return active.add_row()

    def update_row(self, index: int, field: str, value: Any) -> bool:
        active = self.resolve()
        if active is None:
            logger.debug(f"{self.name}: update_row ignored, no active scope")
            return False
        return active.update_row(index, field, value)

    def remove_row(self, index: int) -> bool:
        active = self.resolve()
        if active is None:
            logger.debug(f"{self.name}: remove_row ignored, no active scope")
            return False
        return active.remove_row(index)

    def snapshot(self) -> dict:
        return {
            "scope_mode": self.scope_mode.value,
            "active_scope_key": self.active_scope_key,
            "domain": self.domain.value,
            "global": [r.model_dump() for r in self.global_list.rows],
            "per_scope": {
                key: [r.model_dump() for r in lst.rows]
                for key, lst in self.per_scope_lists.items()
            },
        }
