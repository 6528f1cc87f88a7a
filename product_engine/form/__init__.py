from product_engine.form.barcodes import BarcodeList
from product_engine.form.product_form import THRESHOLD_STORES, ProductForm

__all__ = ["BarcodeList", "ProductForm", "THRESHOLD_STORES"]
