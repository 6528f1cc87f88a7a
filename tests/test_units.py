"""Test the unit/price matrix and compo cost."""
from decimal import Decimal

import pytest
from pydantic import ValidationError

from product_engine.units.compo import CompoList, parse_number
from product_engine.units.price_matrix import UnitPriceMatrix

TIERS = ["retail", "wholesale"]


def _matrix(n=3):
    matrix = UnitPriceMatrix(TIERS)
    for _ in range(n - 1):
        matrix.add_unit()
    return matrix


def test_starts_with_one_unit():
    matrix = UnitPriceMatrix(TIERS)
    assert len(matrix.rows) == 1
    assert matrix.tier_columns() == TIERS


def test_add_unit_clones_tier_template():
    matrix = _matrix(2)
    row = matrix.rows[1]
    assert row.id == 2
    assert [c.tier_id for c in row.price_vector] == TIERS
    assert all(c.amount == 0 for c in row.price_vector)
    assert not row.is_default_sales and not row.is_default_purchase


def test_remove_never_below_one():
    matrix = _matrix(2)
    assert matrix.remove_unit(1)
    assert not matrix.remove_unit(2)
    assert len(matrix.rows) == 1
    assert not matrix.remove_unit(42)


def test_remove_unknown_is_noop():
    matrix = _matrix(3)
    assert not matrix.remove_unit(42)
    assert len(matrix.rows) == 3


def test_default_sales_is_exclusive():
    matrix = _matrix(3)
    matrix.set_default_sales(1)
    matrix.set_default_sales(3)
    assert [r.is_default_sales for r in matrix.rows] == [False, False, True]
    assert matrix.default_sales_unit().id == 3


def test_default_sales_clears_same_row_purchase():
    matrix = _matrix(3)
    matrix.set_default_purchase(2)
    matrix.set_default_sales(2)
    row = matrix.get_unit(2)
    assert row.is_default_sales
    assert not row.is_default_purchase
    assert matrix.default_purchase_unit() is None


def test_default_purchase_clears_same_row_sales():
    matrix = _matrix(2)
    matrix.set_default_sales(1)
    matrix.set_default_purchase(1)
    assert matrix.get_unit(1).is_default_purchase
    assert not matrix.get_unit(1).is_default_sales


def test_flags_independent_across_rows():
    matrix = _matrix(2)
    matrix.set_default_sales(1)
    matrix.set_default_purchase(2)
    assert matrix.default_sales_unit().id == 1
    assert matrix.default_purchase_unit().id == 2


def test_clearing_flag_has_no_cross_row_effect():
    matrix = _matrix(2)
    matrix.set_default_sales(1)
    matrix.set_default_purchase(2)
    matrix.set_default_sales(2, False)
    assert matrix.default_sales_unit().id == 1
    matrix.set_default_sales(1, False)
    assert matrix.default_sales_unit() is None
    assert matrix.default_purchase_unit().id == 2


def test_set_default_unknown_unit_keeps_existing():
    matrix = _matrix(2)
    matrix.set_default_sales(1)
    assert not matrix.set_default_sales(99)
    assert matrix.default_sales_unit().id == 1


def test_set_field_routes_default_flags():
    matrix = _matrix(2)
    matrix.set_default_purchase(1)
    matrix.set_field(2, "is_default_purchase", True)
    assert matrix.default_purchase_unit().id == 2


def test_set_field_coerces_numbers():
    matrix = _matrix(1)
    assert matrix.set_field(1, "last_cost", "12.50")
    assert matrix.set_field(1, "packing_label", "Box of 12")
    assert matrix.set_field(1, "parts_count", 12)
    row = matrix.get_unit(1)
    assert row.last_cost == Decimal("12.50")
    assert row.parts_count == Decimal("12")
    assert row.packing_label == "Box of 12"


def test_set_field_errors():
    matrix = _matrix(1)
    with pytest.raises(ValueError, match="Unknown unit field"):
        matrix.set_field(1, "price_vector", [])
    with pytest.raises(ValidationError):
        matrix.set_field(1, "avg_cost", "abc")
    assert not matrix.set_field(5, "packing_label", "x")


def test_set_price_touches_one_cell():
    matrix = _matrix(2)
    assert matrix.set_price(2, "wholesale", "9.99")
    assert [c.amount for c in matrix.get_unit(2).price_vector] == [Decimal("0"), Decimal("9.99")]
    assert all(c.amount == 0 for c in matrix.get_unit(1).price_vector)
    assert not matrix.set_price(2, "vip", 1)


def test_matrix_needs_tiers():
    with pytest.raises(ValueError):
        UnitPriceMatrix([])


# --- Compo ---

@pytest.mark.parametrize("text,expected", [
    ("3", Decimal("3")),
    ("2.5", Decimal("2.5")),
    ("12kg", Decimal("12")),
    (" .5", Decimal("0.5")),
    ("-4", Decimal("-4")),
    ("abc", Decimal("0")),
    ("", Decimal("0")),
])
def test_parse_number(text, expected):
    assert parse_number(text) == expected


def test_compo_total_cost():
    compo = CompoList()
    a = compo.add_item()
    b = compo.add_item()
    compo.update_item(a.id, "quantity", "2")
    compo.update_item(a.id, "cost", "10.5")
    compo.update_item(b.id, "quantity", "three")
    compo.update_item(b.id, "cost", "100")
    assert compo.total_cost() == Decimal("21.0")
    # Display text is kept verbatim
    assert compo.get_item(b.id).quantity == "three"

    compo.update_item(b.id, "quantity", "1")
    assert compo.total_cost() == Decimal("121.0")
    compo.remove_item(a.id)
    assert compo.total_cost() == Decimal("100")


def test_compo_empty_total_and_ids():
    compo = CompoList()
    assert compo.total_cost() == 0
    compo.add_item()
    second = compo.add_item()
    compo.remove_item(1)
    assert compo.add_item().id == second.id + 1
    assert not compo.update_item(99, "unit", "box")
    with pytest.raises(ValueError):
        compo.update_item(second.id, "id", "5")
