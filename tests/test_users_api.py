"""
Integration tests for /users: registration, login, profile, password,
admin promotion and listing.
"""

import uuid

import pytest

from fitness_api.core.errors import AuthErrorKind
from scripts.promote_admin import promote

pytestmark = pytest.mark.integration


class TestRegister:
    def test_register_and_duplicate(self, register_user):
        """Worked example: first registration 201, same email again 409."""
        first = register_user("a@b.com", password="longenough", mobile_no="12345678901")
        assert first.status_code == 201
        assert first.json() == {"message": "Registered Successfully"}

        second = register_user("a@b.com")
        assert second.status_code == 409
        assert second.json() == {"error": "Email already in use"}

    @pytest.mark.parametrize("email", ["plain", "a@b", "a b@c.com", ""])
    def test_invalid_email(self, register_user, email):
        resp = register_user(email)
        assert resp.status_code == 400
        assert resp.json() == {"error": "Email Invalid"}

    @pytest.mark.parametrize("mobile_no", ["1234567890", "123456789012", "abcdefghijk"])
    def test_invalid_mobile(self, register_user, mobile_no):
        resp = register_user(mobile_no=mobile_no)
        assert resp.status_code == 400
        assert resp.json() == {"error": "Mobile number invalid"}

    @pytest.mark.parametrize("password", ["", "1234567"])
    def test_short_password(self, register_user, password):
        resp = register_user(password=password)
        assert resp.status_code == 400
        assert resp.json() == {"error": "Password must be atleast 8 characters"}

    def test_password_of_eight_characters_is_enough(self, register_user):
        assert register_user(password="12345678").status_code == 201

    def test_format_checked_before_uniqueness(self, register_user):
        assert register_user("a@b.com").status_code == 201
        resp = register_user("a@b.com", password="short")
        assert resp.status_code == 400

    def test_missing_field_is_400(self, client):
        resp = client.post("/users", json={"email": "a@b.com", "password": "longenough"})
        assert resp.status_code == 400
        assert "mobileNo" in resp.json()["error"]

    def test_password_is_stored_hashed(self, app, register_user):
        from fitness_api.models.user import User

        register_user("a@b.com", password="longenough", firstName="Ann", lastName="Lee")
        db = app.state.session_factory()
        try:
            user = db.query(User).filter(User.email == "a@b.com").one()
        finally:
            db.close()
        assert user.hashed_password != "longenough"
        assert user.first_name == "Ann"
        assert user.is_admin is False


class TestLogin:
    def test_login_returns_verifiable_token(self, app, register_user, client):
        register_user("a@b.com")
        resp = client.post("/users/login", json={"email": "a@b.com", "password": "longenough"})
        assert resp.status_code == 200
        identity = app.state.token_service.verify(resp.json()["access"])
        assert identity.is_admin is False
        uuid.UUID(identity.id)

    def test_invalid_email_format(self, client):
        resp = client.post("/users/login", json={"email": "nope", "password": "longenough"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "Invalid Email"}

    def test_unknown_email(self, client):
        resp = client.post("/users/login", json={"email": "ghost@b.com", "password": "longenough"})
        assert resp.status_code == 404
        assert resp.json() == {"error": "No email found"}

    def test_wrong_password(self, register_user, client):
        register_user("a@b.com")
        resp = client.post("/users/login", json={"email": "a@b.com", "password": "wrong-password"})
        assert resp.status_code == 401
        assert resp.json() == {"error": "Email and password do not match"}


class TestCheckEmail:
    def test_duplicate(self, register_user, client):
        register_user("a@b.com")
        resp = client.post("/users/check-email", json={"email": "a@b.com"})
        assert resp.status_code == 409
        assert resp.json() == {"message": "Duplicate email found"}

    def test_free(self, client):
        resp = client.post("/users/check-email", json={"email": "free@b.com"})
        assert resp.status_code == 404
        assert resp.json() == {"message": "No duplicate email found"}

    def test_invalid(self, client):
        resp = client.post("/users/check-email", json={"email": "nope"})
        assert resp.status_code == 400


class TestProfile:
    def test_requires_token(self, client):
        resp = client.get("/users/profile")
        assert resp.status_code == 401
        assert resp.json() == {"error": "Authentication required"}
        assert resp.headers["WWW-Authenticate"] == "Bearer"

    def test_rejects_bad_token(self, client, auth_headers):
        resp = client.get("/users/profile", headers=auth_headers("garbage"))
        assert resp.status_code == 401
        assert "error" in resp.json()

    def test_rejects_expired_token(self, app, client, user_token, auth_headers):
        from datetime import timedelta

        tokens = app.state.token_service
        identity = tokens.verify(user_token)
        expired = tokens.create_access_token(identity, expires_delta=timedelta(seconds=-5))
        resp = client.get("/users/profile", headers=auth_headers(expired))
        assert resp.status_code == 401
        assert resp.json() == {"error": "Token expired"}

    def test_logs_rejection_kind(self, client, auth_headers, caplog):
        with caplog.at_level("INFO", logger="fitness_api.api.deps"):
            client.get("/users/profile", headers=auth_headers("garbage"))
        assert AuthErrorKind.malformed.value in caplog.text

    def test_get_profile(self, client, user_token, auth_headers):
        resp = client.get("/users/profile", headers=auth_headers(user_token))
        assert resp.status_code == 200
        user = resp.json()["user"]
        assert user["email"] == "a@b.com"
        assert user["mobileNo"] == "12345678901"
        assert user["isAdmin"] is False
        assert "password" not in user
        assert "hashedPassword" not in user and "hashed_password" not in user

    def test_update_profile(self, client, user_token, auth_headers):
        resp = client.put(
            "/users/profile",
            json={"firstName": "Ann", "mobileNo": "09998887777"},
            headers=auth_headers(user_token),
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["message"] == "Profile updated successfully"
        assert body["user"]["firstName"] == "Ann"
        assert body["user"]["mobileNo"] == "09998887777"

    def test_update_profile_validates_mobile(self, client, user_token, auth_headers):
        resp = client.put("/users/profile", json={"mobileNo": "123"}, headers=auth_headers(user_token))
        assert resp.status_code == 400
        assert resp.json() == {"error": "Mobile number invalid"}


class TestPassword:
    def test_update_password(self, client, user_token, auth_headers, login_user):
        resp = client.patch(
            "/users/password",
            json={"newPassword": "brand-new-secret"},
            headers=auth_headers(user_token),
        )
        assert resp.status_code == 200
        assert resp.json() == {"message": "Password reset successfully"}
        assert login_user("a@b.com", "brand-new-secret")

        old = client.post("/users/login", json={"email": "a@b.com", "password": "longenough"})
        assert old.status_code == 401

    def test_short_new_password(self, client, user_token, auth_headers):
        resp = client.patch("/users/password", json={"newPassword": "short"}, headers=auth_headers(user_token))
        assert resp.status_code == 400

    def test_requires_token(self, client):
        assert client.patch("/users/password", json={"newPassword": "brand-new-secret"}).status_code == 401


class TestAdminPromotion:
    def _user_id(self, client, token, auth_headers):
        return client.get("/users/profile", headers=auth_headers(token)).json()["user"]["id"]

    def test_non_admin_is_forbidden(self, client, user_token, other_token, auth_headers):
        target = self._user_id(client, other_token, auth_headers)
        resp = client.patch(f"/users/{target}/admin", headers=auth_headers(user_token))
        assert resp.status_code == 403
        assert resp.json() == {"error": "Admin access required"}

    def test_admin_promotes(self, client, admin_token, user_token, auth_headers):
        target = self._user_id(client, user_token, auth_headers)
        resp = client.patch(f"/users/{target}/admin", headers=auth_headers(admin_token))
        assert resp.status_code == 200
        body = resp.json()
        assert body["message"] == "User updated successfully"
        assert body["updatedUser"]["id"] == target
        assert body["updatedUser"]["isAdmin"] is True

    def test_invalid_id(self, client, admin_token, auth_headers):
        resp = client.patch("/users/not-an-id/admin", headers=auth_headers(admin_token))
        assert resp.status_code == 400
        assert resp.json() == {"error": "Invalid User ID"}

    def test_unknown_user(self, client, admin_token, auth_headers):
        resp = client.patch(f"/users/{uuid.uuid4()}/admin", headers=auth_headers(admin_token))
        assert resp.status_code == 404
        assert resp.json() == {"error": "User not found"}

    def test_bootstrap_script(self, app, client, register_user, login_user):
        register_user("boss@b.com")
        assert promote(app.state.session_factory, "boss@b.com") is True
        assert promote(app.state.session_factory, "ghost@b.com") is False
        identity = app.state.token_service.verify(login_user("boss@b.com"))
        assert identity.is_admin is True


class TestListUsers:
    def test_requires_token(self, client):
        assert client.get("/users").status_code == 401

    def test_lists_without_passwords(self, client, user_token, other_token, auth_headers):
        resp = client.get("/users", headers=auth_headers(user_token))
        assert resp.status_code == 200
        users = resp.json()
        assert {u["email"] for u in users} == {"a@b.com", "other@b.com"}
        for user in users:
            assert not any("password" in key.lower() for key in user)
