import pytest

from app.models.order import Order, OrderStatus


def test_list_requires_authentication(client, orders) -> None:
    assert client.get("/api/v1/orders").status_code == 401


def test_employee_sees_only_assigned_orders(client, users, orders, auth_headers) -> None:
    r = client.get("/api/v1/orders", headers=auth_headers(users["juan"]))
    assert r.status_code == 200
    assert sorted(o["folio"] for o in r.json()) == [101, 102, 103]


def test_admin_sees_every_order(client, users, orders, auth_headers) -> None:
    r = client.get("/api/v1/orders", headers=auth_headers(users["admin"]))
    assert r.status_code == 200
    assert sorted(o["folio"] for o in r.json()) == [101, 102, 103, 201]


def test_order_dto_uses_client_keys(client, users, orders, auth_headers) -> None:
    r = client.get(f"/api/v1/orders/{orders[101].id}", headers=auth_headers(users["juan"]))
    assert r.status_code == 200
    body = r.json()
    assert body["folio"] == 101
    assert body["estado"] == "AGENDADO"
    assert body["idEstado"] == 1
    assert body["cliente"] == "Cliente Uno"
    assert body["region"]["nombre"] == "Norte"
    assert body["direccion"] == "Calle 1"
    assert body["fechaFinalizado"] is None
    assert "fechaRegistro" in body and "horasTrabajo" in body


def test_other_employees_order_is_not_found(client, users, orders, auth_headers) -> None:
    headers = auth_headers(users["juan"])
    assert client.get(f"/api/v1/orders/{orders[201].id}", headers=headers).status_code == 404
    r = client.put(f"/api/v1/orders/{orders[201].id}/status/2", headers=headers)
    assert r.status_code == 404


def test_forward_transitions(client, db, users, orders, auth_headers) -> None:
    headers = auth_headers(users["juan"])
    order_id = orders[101].id

    r = client.put(f"/api/v1/orders/{order_id}/status/2", headers=headers)
    assert r.status_code == 200
    assert r.json()["estado"] == "EN PROCESO"
    assert r.json()["fechaFinalizado"] is None

    r = client.put(f"/api/v1/orders/{order_id}/status/3", headers=headers)
    assert r.status_code == 200
    assert r.json()["estado"] == "REALIZADO"
    assert r.json()["fechaFinalizado"] is not None

    db.expire_all()
    assert db.get(Order, order_id).status == OrderStatus.REALIZADO


@pytest.mark.parametrize(
    "folio,target",
    [
        (101, 3),  # pula EN PROCESO
        (101, 1),  # mesmo estado
        (102, 1),  # volta
        (103, 1),
        (103, 2),
        (103, 3),  # REALIZADO é terminal
    ],
)
def test_invalid_transitions_conflict(client, db, users, orders, auth_headers, folio, target) -> None:
    before = orders[folio].status_id
    r = client.put(f"/api/v1/orders/{orders[folio].id}/status/{target}", headers=auth_headers(users["juan"]))
    assert r.status_code == 409
    assert r.json()["detail"]["code"] == "INVALID_TRANSITION"

    db.expire_all()
    assert db.get(Order, orders[folio].id).status_id == before


@pytest.mark.parametrize("target", [0, 4])
def test_unknown_status_code_is_rejected(client, users, orders, auth_headers, target) -> None:
    r = client.put(f"/api/v1/orders/{orders[101].id}/status/{target}", headers=auth_headers(users["juan"]))
    assert r.status_code == 422


def test_admin_creates_order(client, users, auth_headers) -> None:
    body = {"folio": 500, "client_name": "Nuevo", "assigned_user_id": users["juan"].id}
    r = client.post("/api/v1/orders", json=body, headers=auth_headers(users["admin"]))
    assert r.status_code == 201
    assert r.json()["estado"] == "AGENDADO"
    assert r.json()["cliente"] == "Nuevo"

    r = client.get("/api/v1/orders", headers=auth_headers(users["juan"]))
    assert [o["folio"] for o in r.json()] == [500]


def test_employee_cannot_create_order(client, users, auth_headers) -> None:
    r = client.post("/api/v1/orders", json={"folio": 501}, headers=auth_headers(users["juan"]))
    assert r.status_code == 403


def test_duplicate_folio_conflicts(client, users, orders, auth_headers) -> None:
    r = client.post("/api/v1/orders", json={"folio": 101}, headers=auth_headers(users["admin"]))
    assert r.status_code == 409
    assert r.json()["code"] == "UNIQUE_VIOLATION"


def test_create_order_validates_body(client, users, auth_headers) -> None:
    r = client.post("/api/v1/orders", json={"folio": 0}, headers=auth_headers(users["admin"]))
    assert r.status_code == 422
    r = client.post("/api/v1/orders", json={"folio": 9, "work_hours": -1}, headers=auth_headers(users["admin"]))
    assert r.status_code == 422
