"""Product configuration state engine.

Pure, synchronous state components behind a product-creation form:
- Attribute rows expanded into sellable variants
- Capped, renumbered threshold lists, optionally one per branch
- Unit/price matrix with exclusive default units
- Bill-of-materials cost, photo gallery, barcodes and attachments

ProductForm owns one instance of each; CommandRegistry exposes them to a UI.
"""
from product_engine.commands import CommandRegistry, build_form_registry
from product_engine.config import EngineConfig
from product_engine.form import ProductForm

__all__ = ["CommandRegistry", "EngineConfig", "ProductForm", "build_form_registry"]
