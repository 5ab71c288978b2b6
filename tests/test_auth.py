import pytest

from study_tracker.auth import check_admin_access
from study_tracker.config import parse_csv
from study_tracker.errors import AdminAccessDenied

from conftest import OTHER_USER, USER


def test_admin_in_allow_list():
    check_admin_access("admin@example.com", ["admin@example.com", "boss@example.com"])


def test_non_member_is_denied():
    with pytest.raises(AdminAccessDenied):
        check_admin_access("user@example.com", ["admin@example.com"])


def test_missing_allow_list_is_denied():
    with pytest.raises(AdminAccessDenied):
        check_admin_access("admin@example.com", [])


def test_missing_email_is_denied():
    with pytest.raises(AdminAccessDenied):
        check_admin_access(None, ["admin@example.com"])


def test_parse_admin_email_list():
    assert parse_csv(" a@example.com, b@example.com ,,") == ("a@example.com", "b@example.com")
    assert parse_csv(None) == ()


def test_missing_token_is_unauthorized(anonymous_client):
    response = anonymous_client.get("/api/users/me")
    assert response.status_code == 401


def test_invalid_token_is_unauthorized(anonymous_client):
    response = anonymous_client.get("/api/users/me", headers={"Authorization": "Bearer nope"})
    assert response.status_code == 401


def test_valid_token_resolves_user(anonymous_client, fake_db):
    fake_db.auth.tokens["good-token"] = USER
    response = anonymous_client.get("/api/users/me", headers={"Authorization": "Bearer good-token"})
    assert response.status_code == 200
    assert response.json()["id"] == USER.id
    assert response.json()["email"] == USER.email


def test_admin_route_forbidden_for_regular_user(client):
    response = client.get("/api/admin/stats")
    assert response.status_code == 403


def test_admin_route_forbidden_without_allow_list(anonymous_client, fake_db):
    fake_db.auth.tokens["other-token"] = OTHER_USER
    response = anonymous_client.get("/api/admin/stats", headers={"Authorization": "Bearer other-token"})
    assert response.status_code == 403
