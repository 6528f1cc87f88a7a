"""Test tiered threshold lists and scoped stores."""
import pytest
from product_engine.catalog import BranchDirectory
from product_engine.models.rows import RangeDomain, ScopeMode
from product_engine.thresholds.scoped_store import ScopedThresholdStore
from product_engine.thresholds.tiered_list import TieredThresholdList


def _levels(rows):
    return [r.level for r in rows]


def test_add_row_numbers_levels():
    lst = TieredThresholdList()
    for _ in range(3):
        lst.add_row()
    assert _levels(lst.rows) == [1, 2, 3]
    row = lst.rows[0]
    assert (row.range_from, row.range_to, row.notify) == ("", "", False)


def test_cap_at_five_is_noop():
    lst = TieredThresholdList()
    for _ in range(5):
        lst.add_row()
    before = lst.rows
    assert lst.add_row() is None
    after = lst.rows
    assert len(after) == 5
    assert all(a is b for a, b in zip(before, after))


def test_remove_renumbers():
    lst = TieredThresholdList()
    for _ in range(5):
        lst.add_row()
    for i, row in enumerate(lst.rows):
        lst.update_row(i, "range_from", str(i * 10))
    assert lst.remove_row(2)
    assert _levels(lst.rows) == [1, 2, 3, 4]
    assert [r.range_from for r in lst.rows] == ["0", "10", "30", "40"]


def test_levels_contiguous_after_mixed_sequence():
    lst = TieredThresholdList()
    for op in ["add", "add", "add", "rm0", "add", "add", "add", "add", "rm3", "rm0", "add"]:
        if op == "add":
            lst.add_row()
        else:
            lst.remove_row(int(op[2:]))
        assert _levels(lst.rows) == list(range(1, len(lst) + 1))
        assert len(lst) <= 5


def test_update_row_stores_text_without_validation():
    lst = TieredThresholdList(RangeDomain.DAYS)
    lst.add_row()
    lst.update_row(0, "range_from", "50.5")
    lst.update_row(0, "range_to", "10")
    lst.update_row(0, "notify", True)
    row = lst.rows[0]
    assert (row.range_from, row.range_to, row.notify) == ("50.5", "10", True)


def test_update_row_out_of_range_is_noop():
    lst = TieredThresholdList()
    lst.add_row()
    assert not lst.update_row(3, "range_from", "1")
    assert not lst.update_row(-1, "range_from", "1")
    assert not lst.remove_row(-1)
    assert len(lst) == 1


def test_update_row_rejects_level_field():
    lst = TieredThresholdList()
    lst.add_row()
    with pytest.raises(ValueError, match="Unknown threshold field"):
        lst.update_row(0, "level", 4)


def test_global_store_targets_global_list():
    store = ScopedThresholdStore("demand_levels")
    store.add_row()
    store.add_row()
    assert len(store.global_list) == 2
    assert store.per_scope_lists == {}


def test_per_scope_without_key_rejects_add():
    store = ScopedThresholdStore("demand_levels")
    store.set_scope_mode(ScopeMode.PER_SCOPE)
    assert store.add_row() is None
    assert not store.can_add_row()
    assert store.get_active_threshold_list() == []
    assert len(store.global_list) == 0


def test_per_scope_lists_are_isolated():
    store = ScopedThresholdStore("demand_levels")
    store.set_scope_mode("per_scope")
    store.set_active_scope("A")
    store.add_row()
    store.update_row(0, "range_to", "100")

    store.set_active_scope("B")
    assert store.get_active_threshold_list() == []
    store.add_row()
    store.add_row()
    store.remove_row(0)

    store.set_active_scope("A")
    rows = store.get_active_threshold_list()
    assert len(rows) == 1
    assert rows[0].range_to == "100"
    assert len(store.per_scope_lists["B"]) == 1


def test_switching_mode_keeps_both_sides():
    store = ScopedThresholdStore("demand_levels")
    store.add_row()
    store.set_scope_mode(ScopeMode.PER_SCOPE)
    store.set_active_scope("branch-1")
    store.add_row()
    store.add_row()
    store.set_scope_mode(ScopeMode.GLOBAL)
    assert len(store.get_active_threshold_list()) == 1
    store.set_scope_mode(ScopeMode.PER_SCOPE)
    assert len(store.get_active_threshold_list()) == 2


def test_per_scope_cap_is_per_list():
    store = ScopedThresholdStore("demand_levels", max_levels=2)
    store.set_scope_mode(ScopeMode.PER_SCOPE)
    store.set_active_scope("A")
    store.add_row()
    store.add_row()
    assert store.add_row() is None
    store.set_active_scope("B")
    assert store.add_row() is not None


def test_global_only_store_refuses_per_scope():
    store = ScopedThresholdStore("expiry_levels", RangeDomain.DAYS, allow_per_scope=False)
    assert not store.set_scope_mode(ScopeMode.PER_SCOPE)
    assert store.scope_mode == ScopeMode.GLOBAL
    assert store.add_row() is not None


def test_unknown_branch_rejected():
    store = ScopedThresholdStore("demand_levels", scopes=BranchDirectory.default())
    assert not store.set_active_scope("branch-9")
    assert store.set_active_scope("branch-2")
    assert store.active_scope_key == "branch-2"
    assert store.set_active_scope("")
    assert store.active_scope_key == ""
