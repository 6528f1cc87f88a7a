"""Test the product form HTTP transport."""
import pytest
from fastapi.testclient import TestClient

from api.main import app
from api.router import get_session_store
from api.sessions import FormSessionStore


@pytest.fixture
def store():
    return FormSessionStore()


@pytest.fixture
def client(store):
    app.dependency_overrides[get_session_store] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def _run(client, name, session="s1", **args):
    return client.post(
        f"/api/product-form/commands/{name}",
        json={"args": args},
        headers={"X-Form-Session": session},
    )


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"


def test_command_updates_state(client):
    resp = _run(client, "attributes.add_row")
    assert resp.status_code == 200
    body = resp.json()
    row_id = body["result"]["id"]
    _run(client, "attributes.set_attribute_key", row_id=row_id, key="color")
    _run(client, "attributes.set_values", row_id=row_id, values=["Red", "Blue"])

    variants = client.get("/api/product-form/variants", headers={"X-Form-Session": "s1"}).json()
    assert variants["count"] == 2
    assert [v["display_name"] for v in variants["data"]] == ["Red", "Blue"]


def test_sessions_are_isolated(client):
    _run(client, "photos.add_photo", session="a", handle="img-1")
    state_a = client.get("/api/product-form/state", headers={"X-Form-Session": "a"}).json()
    state_b = client.get("/api/product-form/state", headers={"X-Form-Session": "b"}).json()
    assert len(state_a["photos"]) == 1
    assert state_b["photos"] == []


def test_thresholds_endpoint(client):
    _run(client, "demand_levels.set_scope_mode", mode="per_scope")
    resp = client.get("/api/product-form/thresholds/demand_levels", headers={"X-Form-Session": "s1"})
    assert resp.json()["can_add_row"] is False

    _run(client, "demand_levels.set_active_scope", scope_key="branch-2")
    _run(client, "demand_levels.add_row")
    body = client.get("/api/product-form/thresholds/demand_levels", headers={"X-Form-Session": "s1"}).json()
    assert body["active_scope_key"] == "branch-2"
    assert [r["level"] for r in body["data"]] == [1]

    assert client.get("/api/product-form/thresholds/nope").status_code == 404


def test_unknown_command_404(client):
    assert _run(client, "units.explode").status_code == 404


def test_bad_arguments_400(client):
    resp = _run(client, "units.set_field", unit_id=1, field="avg_cost", value="abc")
    assert resp.status_code == 400
    resp = _run(client, "units.remove_unit", nope=1)
    assert resp.status_code == 400


def test_list_commands(client):
    names = {c["name"] for c in client.get("/api/product-form/commands").json()}
    assert "units.set_default_sales" in names
    assert "expiry_levels.add_row" in names


def test_discard_session(client):
    _run(client, "barcodes.add", session="gone")
    resp = client.delete("/api/product-form/session", headers={"X-Form-Session": "gone"})
    assert resp.status_code == 204
    resp = client.delete("/api/product-form/session", headers={"X-Form-Session": "gone"})
    assert resp.status_code == 404


def _state(client, session="s1"):
    return client.get("/api/product-form/state", headers={"X-Form-Session": session}).json()


def test_wrong_typed_value_is_rejected_and_session_stays_usable(client):
    row_id = _run(client, "attributes.add_row").json()["result"]["id"]
    assert _run(client, "attributes.toggle_value", row_id=row_id, value=7).status_code == 400
    assert _state(client)["attributes"][0]["values"] == []

    assert _run(client, "attributes.set_attribute_key", row_id=row_id, key="color").status_code == 200
    assert _run(client, "attributes.add_row").status_code == 200
    resp = _run(client, "attributes.set_values", row_id=row_id, values=["Red", "Blue"])
    assert resp.status_code == 200
    assert [v["display_name"] for v in resp.json()["state"]["variants"]] == ["Red", "Blue"]


def test_string_is_not_a_value_list(client):
    row_id = _run(client, "attributes.add_row").json()["result"]["id"]
    assert _run(client, "attributes.set_values", row_id=row_id, values="Red").status_code == 400
    assert _state(client)["attributes"][0]["values"] == []


def test_boolean_strings_are_coerced(client):
    _run(client, "units.set_default_sales", unit_id=1, flag=True)
    resp = _run(client, "units.set_default_sales", unit_id=1, flag="false")
    assert resp.status_code == 200
    assert resp.json()["state"]["units"]["rows"][0]["is_default_sales"] is False


def test_numeric_index_strings(client):
    _run(client, "expiry_levels.add_row")
    resp = _run(client, "expiry_levels.update_row", index="0", field="range_to", value="30")
    assert resp.status_code == 200
    assert resp.json()["result"] is True
    assert _run(client, "expiry_levels.update_row", index="first", field="notify", value=True).status_code == 400


def test_reads_do_not_create_sessions(client, store):
    _run(client, "barcodes.add", session="real")
    assert store.session_count == 1
    for path in ("/state", "/variants", "/commands", "/thresholds/demand_levels"):
        resp = client.get(f"/api/product-form{path}", headers={"X-Form-Session": "ghost"})
        assert resp.status_code == 200
    assert store.session_count == 1
    assert _state(client, session="ghost")["photos"] == []
