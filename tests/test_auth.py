# tests/test_auth.py
"""
Tests des flux d'authentification et du profil
Exécuter: pytest tests/test_auth.py -v
"""
import pytest


SIGNUP = {
    "email": "Jane.Buyer@Example.com",
    "password": "secret123",
    "role": "buyer",
    "first_name": "Jane",
    "last_name": "Buyer",
    "parish": "Kingston",
}


class TestSignUp:
    def test_creates_account_and_profile(self, client, identity, db):
        response = client.post("/api/auth/signup", json=SIGNUP)

        assert response.status_code == 201
        body = response.json()
        assert body["session"]["access_token"].startswith("access-")
        assert body["user"]["email"] == "jane.buyer@example.com"
        assert body["user"]["role"] == "buyer"
        assert body["user"]["name"] == "Jane Buyer"
        assert body["user"]["account_status"] == "active"

        account = identity.accounts[body["user"]["id"]]
        assert account["redirect_to"] == "https://marketplace.framer.website/confirm-email"
        assert account["metadata"]["role"] == "buyer"
        assert db.get("users", body["user"]["id"])["parish"] == "Kingston"

    def test_requires_confirmation(self, client, identity):
        identity.confirm_on_signup = False
        body = client.post("/api/auth/signup", json=SIGNUP).json()
        assert body["requires_confirmation"] is True
        assert "session" not in body

    def test_duplicate_email(self, client):
        client.post("/api/auth/signup", json=SIGNUP)
        response = client.post("/api/auth/signup", json=SIGNUP)
        assert response.status_code == 400
        assert response.json()["error"] == "User already registered"

    def test_admin_role_refused(self, client):
        response = client.post("/api/auth/signup", json={**SIGNUP, "role": "admin"})
        assert response.status_code == 400

    def test_profile_failure_deletes_account(self, client, identity, db):
        db.failing_tables.add("users")
        response = client.post("/api/auth/signup", json=SIGNUP)

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to create user profile"
        assert len(identity.deleted) == 1
        assert identity.accounts == {}


class TestSignIn:
    def test_success(self, client, buyer):
        response = client.post("/api/auth/signin", json={"email": buyer.email, "password": "secret123"})
        assert response.status_code == 200
        assert response.json()["user"]["id"] == buyer.id
        assert response.json()["session"]["refresh_token"]

    def test_wrong_password(self, client, buyer):
        response = client.post("/api/auth/signin", json={"email": buyer.email, "password": "nope"})
        assert response.status_code == 401

    def test_missing_profile(self, client, identity):
        identity.register("orphan", "orphan@example.com")
        response = client.post("/api/auth/signin", json={"email": "orphan@example.com", "password": "secret123"})
        assert response.status_code == 404
        assert response.json()["error"] == "User profile not found"

    def test_inactive(self, client, make_actor):
        sleeper = make_actor("agent", email="sleeper@example.com", account_status="inactive")
        response = client.post("/api/auth/signin", json={"email": sleeper.email, "password": "secret123"})
        assert response.status_code == 403


def test_refresh(client, buyer):
    session = client.post("/api/auth/signin", json={"email": buyer.email, "password": "secret123"}).json()["session"]

    response = client.post("/api/auth/refresh", json={"refresh_token": session["refresh_token"]})
    assert response.status_code == 200
    assert response.json()["session"]["access_token"] != session["access_token"]

    assert client.post("/api/auth/refresh", json={"refresh_token": "stale"}).status_code == 401


@pytest.mark.parametrize("email", ["buyer-1@example.com", "nobody@example.com"])
def test_forgot_password_does_not_reveal_accounts(client, buyer, identity, email):
    response = client.post("/api/auth/forgot-password", json={"email": email})

    assert response.status_code == 200
    assert response.json() == {
        "message": "If an account exists with this email, a password reset link has been sent."
    }
    assert identity.reset_requests[-1] == (email, "https://marketplace.framer.website/reset-password")


class TestResetPassword:
    def test_resets(self, client, buyer, identity):
        token = identity.issue_token(buyer.id)
        response = client.post("/api/auth/reset-password", json={"token": token, "new_password": "n3w-secret"})
        assert response.status_code == 200
        assert identity.accounts[buyer.id]["password"] == "n3w-secret"

    def test_invalid_token(self, client):
        response = client.post("/api/auth/reset-password", json={"token": "expired", "new_password": "n3w-secret"})
        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid or expired reset token")

    def test_short_password(self, client, buyer, identity):
        token = identity.issue_token(buyer.id)
        response = client.post("/api/auth/reset-password", json={"token": token, "new_password": "abc"})
        assert response.status_code == 400
        assert response.json()["error"] == "Password must be at least 6 characters"


class TestUpdatePassword:
    def test_updates(self, client, buyer, identity):
        response = client.post(
            "/api/auth/update-password",
            json={"current_password": "secret123", "new_password": "even-better"},
            headers=buyer.headers
        )
        assert response.status_code == 200
        assert identity.accounts[buyer.id]["password"] == "even-better"

    def test_wrong_current_password(self, client, buyer, identity):
        response = client.post(
            "/api/auth/update-password",
            json={"current_password": "guess", "new_password": "even-better"},
            headers=buyer.headers
        )
        assert response.status_code == 401
        assert response.json()["error"] == "Current password is incorrect"
        assert identity.accounts[buyer.id]["password"] == "secret123"

    def test_requires_auth(self, client):
        response = client.post(
            "/api/auth/update-password",
            json={"current_password": "a", "new_password": "bbbbbb"}
        )
        assert response.status_code == 401


class TestConfirmEmail:
    def test_confirms(self, client, buyer, identity):
        identity.accounts[buyer.id]["confirmed"] = False
        token = identity.issue_token(buyer.id)

        body = client.post("/api/auth/confirm-email", json={"token": token}).json()

        assert body["message"] == "Email confirmed successfully. Please sign in."
        assert body["requires_signin"] is True
        assert body["user"]["id"] == buyer.id
        assert identity.accounts[buyer.id]["confirmed"] is True

    def test_already_confirmed(self, client, buyer, identity):
        token = identity.issue_token(buyer.id)
        body = client.post("/api/auth/confirm-email", json={"token": token}).json()
        assert body["message"] == "Email is already confirmed. Please sign in."

    def test_invalid_token(self, client):
        assert client.post("/api/auth/confirm-email", json={"token": "bad"}).status_code == 400


class TestProfile:
    def test_get_profile(self, client, buyer):
        body = client.get("/api/user/profile", headers=buyer.headers).json()
        assert body["user"]["email"] == buyer.email
        assert body["user"]["first_name"] == "Jane"

    def test_name_recomputed(self, client, buyer):
        body = client.put("/api/user/profile", json={"last_name": "Campbell"}, headers=buyer.headers).json()
        assert body["user"]["last_name"] == "Campbell"
        assert body["user"]["name"] == "Jane Campbell"

    def test_explicit_name_kept(self, client, buyer):
        body = client.put(
            "/api/user/profile",
            json={"first_name": "J.", "name": "JD"},
            headers=buyer.headers
        ).json()
        assert body["user"]["name"] == "JD"

    def test_update_email(self, client, buyer, identity, db):
        response = client.put("/api/user/email", json={"new_email": "New.Address@Example.com"}, headers=buyer.headers)

        assert response.status_code == 200
        assert response.json()["message"] == "Email updated successfully"
        assert identity.accounts[buyer.id]["email"] == "new.address@example.com"
        assert db.get("users", buyer.id)["email"] == "new.address@example.com"

    def test_account_status(self, client, agent):
        body = client.get("/api/user/account-status", headers=agent.headers).json()
        assert body == {"account_status": "active", "role": "agent"}
