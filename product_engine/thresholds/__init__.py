from product_engine.thresholds.scoped_store import ScopedThresholdStore
from product_engine.thresholds.tiered_list import EDITABLE_FIELDS, TieredThresholdList

__all__ = ["EDITABLE_FIELDS", "ScopedThresholdStore", "TieredThresholdList"]
