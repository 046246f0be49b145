"""
API integration tests: the page's input and rendering surfaces end to end.

Tests:
1.    health
2.    bread scenario over HTTP
3-4.  validation errors return 400 with the invalid fields
5-6.  deletes need confirm=true, unknown ids are no-ops
7.    edit returns the draft and removes the material
8.    legacy material edit warns
9.    recipe line for a deleted material adds nothing
10.   labor preview
11.   wallet expenses update and dashboard restore
12.   deleting the only product resets the wallet
13-14. JSON booleans in number fields are rejected, not read as 1
"""

import json

import pytest

from costbook.storage import MATERIALS_KEY


def _add_flour(client):
    resp = client.post("/api/materials/", json={"name": "Flour", "price": 100, "qty": 5})
    assert resp.status_code == 200
    return resp.json()


def _save_bread(client, flour_id):
    client.post("/api/recipe/lines", json={"material_id": str(flour_id), "qty": "2"})
    resp = client.post("/api/products/", json={
        "name": "Bread", "selling_price": 100, "labor_minutes": 30, "labor_rate": 20,
    })
    assert resp.status_code == 200
    return resp.json()


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_bread_scenario(client):
    flour = _add_flour(client)
    assert flour["cost_per_unit"] == pytest.approx(20.0)

    options = client.get("/api/materials/options").json()
    assert options == [{"value": str(flour["id"]), "label": "Flour (₱20.00)"}]

    line = client.post("/api/recipe/lines", json={"material_id": options[0]["value"], "qty": 2}).json()
    assert line["added"] is True
    assert line["recipe"]["total_display"] == "40.00"

    saved = client.post("/api/products/", json={
        "name": "Bread", "selling_price": "100", "labor_minutes": "30", "labor_rate": "20",
    }).json()
    product = saved["product"]
    assert product["labor_cost"] == pytest.approx(10.0)
    assert product["total_cost"] == pytest.approx(50.0)
    assert product["profit"] == pytest.approx(50.0)
    assert product["margin_display"] == "50.0%"
    assert saved["recipe"]["lines"] == []

    wallet = client.get("/api/wallet/").json()
    assert wallet["total_revenue_display"] == "100.00"
    assert wallet["total_cost_display"] == "50.00"
    assert wallet["net_profit_display"] == "50.00"


def test_add_material_validation(client, store):
    resp = client.post("/api/materials/", json={"name": "Flour", "price": "-1", "qty": ""})
    assert resp.status_code == 400
    assert resp.json()["detail"] == {"message": "Please fill all fields", "fields": ["price", "qty"]}
    assert client.get("/api/materials/").json() == []
    assert store.get_item(MATERIALS_KEY) is None


def test_save_product_validation(client):
    resp = client.post("/api/products/", json={"name": "Bread", "selling_price": 100})
    assert resp.status_code == 400
    assert resp.json()["detail"]["fields"] == ["materials_or_labor"]
    assert client.get("/api/products/").json() == []


def test_delete_material_needs_confirmation(client):
    flour = _add_flour(client)
    resp = client.delete(f"/api/materials/{flour['id']}")
    assert resp.status_code == 409
    assert resp.json()["detail"]["message"] == "Are you sure you want to delete this material?"
    assert len(client.get("/api/materials/").json()) == 1

    resp = client.delete(f"/api/materials/{flour['id']}", params={"confirm": "true"})
    assert resp.json() == {"ok": True, "removed": True}
    assert client.get("/api/materials/").json() == []
    assert client.get("/api/materials/options").json() == []


def test_delete_unknown_ids_are_noops(client):
    resp = client.delete("/api/materials/12345", params={"confirm": "true"})
    assert resp.json()["removed"] is False
    resp = client.delete("/api/products/12345", params={"confirm": "true"})
    assert resp.status_code == 200
    assert resp.json()["removed"] is False


def test_edit_material(client):
    flour = _add_flour(client)
    draft = client.post(f"/api/materials/{flour['id']}/edit", params={"confirm": "true"}).json()
    assert draft == {"name": "Flour", "price": 100.0, "qty": 5.0, "warning": None, "removed": True}
    assert client.get("/api/materials/").json() == []

    assert client.post("/api/materials/999/edit").status_code == 404


def test_edit_legacy_material_warns(client, store, clock):
    from costbook.workspace import Workspace
    from costbook.main import app

    store.set_item(MATERIALS_KEY, json.dumps([{"id": 1, "name": "Old Salt", "costPerUnit": 2.5}]))
    app.state.workspace = Workspace.load(store, clock=clock)

    draft = client.post("/api/materials/1/edit", params={"confirm": "true"}).json()
    assert draft["price"] == 0
    assert draft["qty"] == 1
    assert draft["warning"] == "Old item detected. Please re-enter Price and Qty."


def test_recipe_line_for_deleted_material(client):
    flour = _add_flour(client)
    client.delete(f"/api/materials/{flour['id']}", params={"confirm": "true"})
    resp = client.post("/api/recipe/lines", json={"material_id": flour["id"], "qty": 2})
    assert resp.status_code == 200
    assert resp.json()["added"] is False
    assert resp.json()["recipe"]["lines"] == []

    resp = client.post("/api/recipe/lines", json={"material_id": "", "qty": 2})
    assert resp.status_code == 400


def test_labor_preview(client):
    resp = client.get("/api/products/labor-preview", params={"minutes": "45", "rate": "20"})
    assert resp.json() == {"labor_cost": 15.0, "labor_cost_display": "15.00"}
    assert client.get("/api/products/labor-preview").json()["labor_cost_display"] == "0.00"


def test_expenses_and_dashboard(client):
    flour = _add_flour(client)
    _save_bread(client, flour["id"])

    wallet = client.put("/api/wallet/", json={"extra_expenses": "20"}).json()
    assert wallet["net_profit"] == pytest.approx(30.0)

    board = client.get("/api/dashboard").json()
    assert board["extra_expenses"] == pytest.approx(20.0)
    assert board["wallet"]["net_profit_display"] == "30.00"
    assert [p["name"] for p in board["products"]] == ["Bread"]
    assert board["materials"][0]["cost_per_unit_display"] == "₱20.00"

    wallet = client.put("/api/wallet/", json={"extra_expenses": "not a number"}).json()
    assert wallet["extra_expenses"] == 0


def test_delete_only_product_resets_wallet(client):
    flour = _add_flour(client)
    bread = _save_bread(client, flour["id"])["product"]
    client.put("/api/wallet/", json={"extra_expenses": 5})

    resp = client.delete(f"/api/products/{bread['id']}")
    assert resp.status_code == 409
    assert resp.json()["detail"]["message"] == "Delete this audit?"

    resp = client.delete(f"/api/products/{bread['id']}", params={"confirm": "true"}).json()
    assert resp["removed"] is True
    assert resp["wallet"]["total_revenue"] == 0
    assert resp["wallet"]["total_cost"] == 0
    assert resp["wallet"]["net_profit"] == pytest.approx(-5.0)


@pytest.mark.parametrize("body,bad", [
    ({"name": "Salt", "price": True, "qty": 1}, ["price"]),
    ({"name": "Salt", "price": 10, "qty": False}, ["qty"]),
])
def test_boolean_numbers_are_rejected(client, body, bad):
    resp = client.post("/api/materials/", json=body)
    assert resp.status_code == 400
    assert resp.json()["detail"]["fields"] == bad
    assert client.get("/api/materials/").json() == []


def test_boolean_selling_price_is_rejected(client):
    resp = client.post("/api/products/", json={
        "name": "Bread", "selling_price": True, "labor_minutes": 30, "labor_rate": 20,
    })
    assert resp.status_code == 400
    assert resp.json()["detail"]["fields"] == ["selling_price"]
