"""Pydantic records for every row the product form edits."""
from product_engine.models.details import ProductDetails
from product_engine.models.rows import (
    Attachment,
    AttributeRow,
    CompoItem,
    PhotoEntry,
    PriceCell,
    ProductType,
    RangeDomain,
    ScopeMode,
    ThresholdRow,
    TrackInventoryType,
    UnitRow,
    Variant,
)

__all__ = [
    "Attachment",
    "AttributeRow",
    "CompoItem",
    "PhotoEntry",
    "PriceCell",
    "ProductDetails",
    "ProductType",
    "RangeDomain",
    "ScopeMode",
    "ThresholdRow",
    "TrackInventoryType",
    "UnitRow",
    "Variant",
]
