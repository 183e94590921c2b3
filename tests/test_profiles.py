"""Tests for the profiles API."""
from postgrest.exceptions import APIError

NEW_PROFILE = {
    "email": "anna@example.com",
    "first_name": "anna",
    "last_name": "lee",
}


def test_check_username(client, fake_db):
    fake_db.add_account("janed@example.com")
    response = client.get("/api/v1/profiles/check-username", params={"username": "janed"})
    assert response.status_code == 200
    assert response.json() == {"available": False, "username": "janed"}

    response = client.get("/api/v1/profiles/check-username", params={"username": "annal"})
    assert response.json() == {"available": True, "username": "annal"}


def test_check_username_excludes_own_record(client, fake_db):
    fake_db.add_account("janed@example.com")
    profile_id = fake_db.tables["profiles"][0]["id"]
    response = client.get(
        "/api/v1/profiles/check-username",
        params={"username": "janed", "exclude_id": profile_id},
    )
    assert response.json()["available"] is True


def test_check_username_requires_value(client):
    assert client.get("/api/v1/profiles/check-username").status_code == 400
    assert client.get("/api/v1/profiles/check-username", params={"username": ""}).status_code == 400


def test_check_email(client, fake_db):
    fake_db.add_account("jane@example.com")
    response = client.get("/api/v1/profiles/check-email", params={"email": "jane@example.com"})
    assert response.json() == {"available": False, "email": "jane@example.com"}
    assert client.get("/api/v1/profiles/check-email").status_code == 400


def test_check_lookup_failure_is_500(client, fake_db):
    fake_db.failures[("profiles", "select")] = APIError({
        "message": "connection reset", "code": "08006", "hint": None, "details": None,
    })
    response = client.get("/api/v1/profiles/check-username", params={"username": "janed"})
    assert response.status_code == 500


def test_create_profile_derives_identity(client, fake_db, admin_headers):
    response = client.post("/api/v1/profiles", json=NEW_PROFILE, headers=admin_headers)
    assert response.status_code == 201
    body = response.json()
    assert body["display_name"] == "Anna L"
    assert body["username"] == "annal"
    assert body["auth_id"] is None
    assert len(fake_db.auth.users) == 1  # only the admin


def test_create_profile_with_password_creates_confirmed_auth_user(client, fake_db, staff_headers):
    payload = {**NEW_PROFILE, "password": "secret123", "confirm_password": "secret123"}
    response = client.post("/api/v1/profiles", json=payload, headers=staff_headers)
    assert response.status_code == 201
    user = fake_db.auth.users[response.json()["auth_id"]]
    assert user.email_confirmed is True


def test_create_profile_password_mismatch(client, admin_headers):
    payload = {**NEW_PROFILE, "password": "secret123", "confirm_password": "secret456"}
    response = client.post("/api/v1/profiles", json=payload, headers=admin_headers)
    assert response.status_code == 400


def test_create_profile_duplicate_username_conflicts(client, admin_headers):
    client.post("/api/v1/profiles", json=NEW_PROFILE, headers=admin_headers)
    payload = {**NEW_PROFILE, "email": "anna2@example.com"}
    response = client.post("/api/v1/profiles", json=payload, headers=admin_headers)
    assert response.status_code == 409


def test_member_cannot_create_profile(client, member_headers):
    response = client.post("/api/v1/profiles", json=NEW_PROFILE, headers=member_headers)
    assert response.status_code == 403


def test_list_and_get_profiles(client, fake_db, staff_headers):
    fake_db.add_account("jane@example.com")
    response = client.get("/api/v1/profiles", headers=staff_headers)
    assert response.status_code == 200
    usernames = [p["username"] for p in response.json()]
    assert usernames == ["staff", "jane"]

    profile_id = response.json()[1]["id"]
    response = client.get(f"/api/v1/profiles/{profile_id}", headers=staff_headers)
    assert response.json()["email"] == "jane@example.com"

    assert client.get("/api/v1/profiles/999", headers=staff_headers).status_code == 404


def test_update_profile(client, fake_db, admin_headers):
    fake_db.add_account("jane@example.com")
    profile_id = fake_db.tables["profiles"][-1]["id"]
    response = client.put(
        f"/api/v1/profiles/{profile_id}",
        json={"dupr_score_doubles": 4.25, "dupr_type": "self"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["dupr_score_doubles"] == 4.25
    assert response.json()["updated_at"] is not None


def test_update_profile_errors(client, fake_db, admin_headers):
    fake_db.add_account("jane@example.com")
    profile_id = fake_db.tables["profiles"][-1]["id"]
    assert client.put(f"/api/v1/profiles/{profile_id}", json={}, headers=admin_headers).status_code == 400
    assert client.put("/api/v1/profiles/999", json={"city": "Boise"}, headers=admin_headers).status_code == 404
    response = client.put(
        f"/api/v1/profiles/{profile_id}", json={"username": "admin"}, headers=admin_headers
    )
    assert response.status_code == 409


def test_delete_profile_removes_auth_user(client, fake_db, admin_headers):
    fake_db.add_account("jane@example.com")
    profile = fake_db.tables["profiles"][-1]
    response = client.delete(f"/api/v1/profiles/{profile['id']}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Profile deleted successfully"}
    assert fake_db.auth.admin.deleted == [profile["auth_id"]]
    assert client.delete(f"/api/v1/profiles/{profile['id']}", headers=admin_headers).status_code == 404


def test_staff_cannot_delete_profile(client, fake_db, staff_headers):
    fake_db.add_account("jane@example.com")
    profile_id = fake_db.tables["profiles"][-1]["id"]
    assert client.delete(f"/api/v1/profiles/{profile_id}", headers=staff_headers).status_code == 403


def test_own_profile(client, member_headers):
    response = client.get("/api/v1/profiles/me", headers=member_headers)
    assert response.status_code == 200
    assert response.json()["email"] == "member@example.com"

    response = client.put(
        "/api/v1/profiles/me",
        json={"display_name": "Mem", "city": "Austin"},
        headers=member_headers,
    )
    assert response.status_code == 200
    assert response.json()["display_name"] == "Mem"
    assert response.json()["city"] == "Austin"


def test_own_profile_cannot_change_username(client, member_headers):
    response = client.put("/api/v1/profiles/me", json={"username": "boss"}, headers=member_headers)
    # Unknown fields are ignored, leaving nothing to update
    assert response.status_code == 400


def test_own_profile_missing(client, fake_db):
    token = fake_db.add_account("ghost@example.com", with_profile=False)
    response = client.get("/api/v1/profiles/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 404


def test_update_rederives_cleared_identity(client, fake_db, admin_headers):
    fake_db.add_account("jane@example.com")
    profile_id = fake_db.tables["profiles"][-1]["id"]
    response = client.put(
        f"/api/v1/profiles/{profile_id}",
        json={"first_name": "jane", "last_name": "doe", "username": "", "display_name": ""},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["username"] == "janed"
    assert response.json()["display_name"] == "Jane D"


def test_update_rederives_from_stored_names(client, fake_db, admin_headers):
    fake_db.add_account("jane@example.com", first_name="Jane", last_name="Doe")
    profile_id = fake_db.tables["profiles"][-1]["id"]
    response = client.put(
        f"/api/v1/profiles/{profile_id}",
        json={"last_name": "Smith", "username": None},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["username"] == "janes"
    assert response.json()["last_name"] == "Smith"


def test_update_keeps_username_when_nothing_to_derive(client, fake_db, admin_headers):
    fake_db.add_account("jane@example.com", first_name="")
    profile_id = fake_db.tables["profiles"][-1]["id"]
    response = client.put(
        f"/api/v1/profiles/{profile_id}",
        json={"username": "", "city": "Boise"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["username"] == "jane"


def test_update_missing_profile_with_cleared_username(client, admin_headers):
    response = client.put("/api/v1/profiles/999", json={"username": ""}, headers=admin_headers)
    assert response.status_code == 404


def test_own_profile_rederives_cleared_display_name(client, member_headers):
    response = client.put("/api/v1/profiles/me", json={"display_name": ""}, headers=member_headers)
    assert response.status_code == 200
    assert response.json()["display_name"] == "Test U"
