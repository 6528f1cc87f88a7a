"""
Product Form: The Owned State Tree

One ProductForm holds every component of a product being created. Each
component owns its own subtree; the form only wires providers and config
into them and adds the few rules that span components (compo products
cannot gain attribute rows).

Usage:
    form = ProductForm()
    row = form.add_attribute_row()
    form.attributes.set_attribute_key(row.id, "color")
    form.attributes.set_values(row.id, ["Red", "Blue"])
    form.attributes.get_derived_variants()
"""
from __future__ import annotations
from typing import Any, Optional
import logging

from product_engine.attributes.attribute_set import AttributeSet
from product_engine.catalog import AttributeCatalog, BranchDirectory
from product_engine.config import EngineConfig
from product_engine.form.barcodes import BarcodeList
from product_engine.media.attachments import AttachmentList
from product_engine.media.gallery import PhotoGallery
from product_engine.models.details import ProductDetails
from product_engine.models.rows import AttributeRow, ProductType, RangeDomain
from product_engine.thresholds.scoped_store import ScopedThresholdStore
from product_engine.units.compo import CompoList
from product_engine.units.price_matrix import UnitPriceMatrix

logger = logging.getLogger(__name__)

THRESHOLD_STORES = ("demand_levels", "expiry_levels", "discount_tiers")


class ProductForm:
    """Complete state of one product-creation form."""

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        catalog: Optional[AttributeCatalog] = None,
        branches: Optional[BranchDirectory] = None,
    ):
        self.config = config or EngineConfig.default()
        self.catalog = catalog or AttributeCatalog.default()
        self.branches = branches or BranchDirectory.default()
        max_levels = self.config.thresholds.max_levels

        self.details = ProductDetails()
        self.barcodes = BarcodeList()
        self.attachments = AttachmentList()
        self.attributes = AttributeSet(catalog=self.catalog, config=self.config.variants)
        self.demand_levels = ScopedThresholdStore(
            "demand_levels", RangeDomain.QUANTITY, max_levels, scopes=self.branches,
        )
        self.expiry_levels = ScopedThresholdStore(
            "expiry_levels", RangeDomain.DAYS, max_levels, allow_per_scope=False,
        )
        self.discount_tiers = ScopedThresholdStore(
            "discount_tiers", RangeDomain.PRICE, max_levels, allow_per_scope=False,
        )
        self.units = UnitPriceMatrix(self.config.pricing.tier_ids)
        self.compo = CompoList()
        self.photos = PhotoGallery()

    # --- Details ---

    def update_detail(self, field: str, value: Any) -> bool:
        """Validated assignment of one scalar field.

        Raises ValueError for an unknown field or a value the field rejects.
        """
        if field not in ProductDetails.model_fields:
            raise ValueError(f"Unknown product field: {field}")
        setattr(self.details, field, value)
        return True

    @property
    def is_compo(self) -> bool:
        return self.details.product_type == ProductType.COMPO

    # --- Cross-component rules ---

    def add_attribute_row(self) -> Optional[AttributeRow]:
        """Add an attribute row unless the product is a compo."""
        if self.is_compo:
            logger.debug("add_attribute_row ignored: compo products have no attributes")
            return None
        return self.attributes.add_row()

    def threshold_store(self, name: str) -> ScopedThresholdStore:
        if name not in THRESHOLD_STORES:
            raise ValueError(f"Unknown threshold store: {name}. Available: {list(THRESHOLD_STORES)}")
        return getattr(self, name)

    # --- Snapshot ---

    def snapshot(self) -> dict[str, Any]:
        """JSON-ready view of the whole tree."""
        return {
            "details": self.details.model_dump(mode="json"),
            "barcodes": {
                "codes": self.barcodes.codes,
                "filled_count": self.barcodes.filled_count(),
            },
            "attachments": [a.model_dump(mode="json") for a in self.attachments.attachments],
            "attributes": [r.model_dump(mode="json") for r in self.attributes.rows],
            "variants": [v.model_dump(mode="json") for v in self.attributes.get_derived_variants()],
            "thresholds": {
                name: self.threshold_store(name).snapshot() for name in THRESHOLD_STORES
            },
            "units": {
                "tier_columns": self.units.tier_columns(),
                "rows": [u.model_dump(mode="json") for u in self.units.rows],
            },
            "compo": {
                "items": [i.model_dump(mode="json") for i in self.compo.items],
                "total_cost": f"{self.compo.total_cost():.2f}",
            },
            "photos": [p.model_dump(mode="json") for p in self.photos.photos],
        }
