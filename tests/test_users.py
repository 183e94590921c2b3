"""Tests for account provisioning by staff and admins."""

NEW_USER = {
    "email": "anna@example.com",
    "password": "secret123",
    "first_name": "anna",
    "last_name": "lee",
}


def test_staff_creates_member(client, fake_db, staff_headers):
    payload = {**NEW_USER, "org_id": "org-1", "location_id": "loc-1"}
    response = client.post("/api/v1/users", json=payload, headers=staff_headers)
    assert response.status_code == 201
    body = response.json()
    assert body["role"] == "member"
    assert body["role_assigned"] is True

    profile = next(p for p in fake_db.tables["profiles"] if p["id"] == body["profile_id"])
    assert profile["username"] == "annal"
    assert profile["display_name"] == "Anna L"
    assert fake_db.auth.users[body["user_id"]].email_confirmed is True
    roles = [r for r in fake_db.tables["user_roles"] if r["user_id"] == body["profile_id"]]
    assert [r["role"] for r in roles] == ["member"]


def test_member_without_scope_gets_no_role(client, fake_db, admin_headers):
    response = client.post("/api/v1/users", json=NEW_USER, headers=admin_headers)
    assert response.status_code == 201
    assert response.json()["role_assigned"] is False


def test_staff_cannot_create_staff_or_admin(client, fake_db, staff_headers):
    for role in ("staff", "admin"):
        payload = {**NEW_USER, "role": role, "org_id": "org-1", "location_id": "loc-1"}
        response = client.post("/api/v1/users", json=payload, headers=staff_headers)
        assert response.status_code == 403
        assert response.json()["detail"] == "Staff cannot create admin or staff users"
    assert not any(p["email"] == "anna@example.com" for p in fake_db.tables["profiles"])


def test_admin_creates_staff(client, admin_headers):
    payload = {**NEW_USER, "role": "staff", "org_id": "org-1", "location_id": "loc-1"}
    response = client.post("/api/v1/users", json=payload, headers=admin_headers)
    assert response.status_code == 201
    assert response.json()["role"] == "staff"
    assert response.json()["role_assigned"] is True


def test_elevated_role_requires_scope(client, admin_headers):
    response = client.post("/api/v1/users", json={**NEW_USER, "role": "admin"}, headers=admin_headers)
    assert response.status_code == 400


def test_super_user_without_role_is_admin(client, fake_db):
    token = fake_db.add_account("root@example.com", app_metadata={"type": "super_user"})
    payload = {**NEW_USER, "role": "admin", "org_id": "org-1", "location_id": "loc-1"}
    response = client.post("/api/v1/users", json=payload, headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 201


def test_member_cannot_create_users(client, member_headers):
    assert client.post("/api/v1/users", json=NEW_USER, headers=member_headers).status_code == 403


def test_role_insert_failure_keeps_account(client, fake_db, admin_headers):
    from postgrest.exceptions import APIError

    fake_db.failures[("user_roles", "insert")] = APIError({
        "message": "insert or update violates foreign key constraint",
        "code": "23503",
        "hint": None,
        "details": None,
    })
    payload = {**NEW_USER, "org_id": "org-9", "location_id": "loc-9"}
    response = client.post("/api/v1/users", json=payload, headers=admin_headers)
    assert response.status_code == 201
    assert response.json()["role_assigned"] is False
