from product_engine.units.compo import CompoList, parse_number
from product_engine.units.price_matrix import SETTABLE_FIELDS, UnitPriceMatrix

__all__ = ["CompoList", "SETTABLE_FIELDS", "UnitPriceMatrix", "parse_number"]
