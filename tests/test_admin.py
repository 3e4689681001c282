from fastapi.testclient import TestClient

from storefront.db import SessionLocal
from storefront.main import app
from storefront.models.admin import Admin

client = TestClient(app)

SUPER_ID = "super-admin-1"
PLAIN_ID = "plain-admin-1"


def setup_module(module):
    db = SessionLocal()
    try:
        if not db.query(Admin).filter(Admin.id == SUPER_ID).first():
            db.add(Admin(id=SUPER_ID, email="root@storefront.test", name="Root", role="super_admin"))
            db.add(Admin(id=PLAIN_ID, email="staff@storefront.test", name="Staff", role="admin"))
            db.commit()
    finally:
        db.close()


def _payload(**overrides):
    body = {
        "email": "new.admin@storefront.test",
        "password": "secret123",
        "name": "New Admin",
        "role": "admin",
        "current_admin_id": SUPER_ID,
    }
    body.update(overrides)
    return body


def test_only_super_admin_can_register():
    res = client.post("/api/admin/register", json=_payload(current_admin_id=PLAIN_ID))
    assert res.status_code == 403
    res = client.post("/api/admin/register", json=_payload(current_admin_id=None))
    assert res.status_code == 403


def test_validation_errors():
    res = client.post("/api/admin/register", json=_payload(name="  "))
    assert res.status_code == 400
    assert res.json()["detail"] == "All fields are required"

    res = client.post("/api/admin/register", json=_payload(password="12345"))
    assert res.status_code == 400
    assert "at least 6 characters" in res.json()["detail"]

    res = client.post("/api/admin/register", json=_payload(role="owner"))
    assert res.status_code == 400


def test_register_admin_and_reject_duplicate():
    res = client.post("/api/admin/register", json=_payload(email="Fresh@Storefront.test", role="super_admin"))
    assert res.status_code == 201
    body = res.json()
    assert body["email"] == "fresh@storefront.test"
    assert body["role"] == "super_admin"
    assert app.state.identity.accounts["fresh@storefront.test"]["id"] == body["id"]

    res = client.post("/api/admin/register", json=_payload(email="fresh@storefront.test"))
    assert res.status_code == 409


def test_camel_case_admin_id_is_accepted():
    body = _payload(email="camel@storefront.test")
    body["currentAdminId"] = body.pop("current_admin_id")
    res = client.post("/api/admin/register", json=body)
    assert res.status_code == 201
