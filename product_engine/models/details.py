"""Scalar product fields edited on the form's general tabs."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from product_engine.models.rows import ProductType, TrackInventoryType


class ProductDetails(BaseModel):
    """Flat bag of the form's single-value fields.

    Assignment is validated, so ``details.product_type = "compo"`` coerces
    to the enum and an unknown product type raises.
    """

    model_config = ConfigDict(validate_assignment=True)

    # Basic info
    name: str = ""
    name_second_language: str = ""
    code: str = ""
    language: str = ""
    note_type: str = ""
    description: str = ""
    stock_type: str = ""
    gst_code: str = ""
    egs_code: str = ""
    model: str = ""
    version: str = ""
    country: str = ""
    supplier: str = ""
    manufacturer: str = ""

    # General info
    product_type: ProductType = ProductType.INVENTORY
    track_inventory: TrackInventoryType = TrackInventoryType.QUANTITY
    total_quantity: str = ""
    sales_tax: str = ""
    purchase_tax: str = ""
    cost_center: str = ""
    sales_enabled: bool = True
    purchase_enabled: bool = True
    gs1_barcode: str = ""
    notes: str = ""

    # Discounts
    based_on_selling_price: bool = False
    discount_type: str = ""
    max_discount: str = ""
    customer_discount: str = ""
    default_discount: str = ""
