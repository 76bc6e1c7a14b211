"""HTTP tests for the /auth endpoints."""

from __future__ import annotations

import pytest
from sqlalchemy import func, select

from donorlink.models import Account, PendingAccount, UserProfile
from tests.factories.account import (
    DEFAULT_PASSWORD,
    DonationCenterAccountFactory,
    UserAccountFactory,
)

BASE = "/api/v1/auth"
ADMIN = "admin@donorlink.test"


def _signup_user(client, **overrides):
    payload = {"email": "a@x.com", "username": "a", "password": "p1", **overrides}
    return client.post(f"{BASE}/signup", json=payload)


def _signup_center(client, **overrides):
    payload = {
        "email": "dc@x.com",
        "username": "dc",
        "password": "p2",
        "organization_name": "Central Blood Bank",
        "city": "Madrid",
        **overrides,
    }
    return client.post(f"{BASE}/signup?role=donation_center", json=payload)


def _pending_id(session) -> int:
    return session.scalars(select(PendingAccount.id)).one()


def _login(client, email, password):
    return client.post(f"{BASE}/login", json={"email": email, "password": password})


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


# -------------------------------- Signup ----------------------------------- #


class TestSignup:
    def test_user_signup_returns_account_profile_and_token(self, client):
        resp = _signup_user(client, first_name="Ada", phone_number="+34 600")

        assert resp.status_code == 200
        body = resp.get_json()
        assert body["account"]["email"] == "a@x.com"
        assert body["account"]["phone_number"] == "+34 600"
        assert "password_hash" not in body["account"]
        assert "password" not in body["account"]
        assert body["profile"]["first_name"] == "Ada"
        assert body["profile"]["id"] == body["account"]["id"]
        assert body["token"]

    def test_role_defaults_to_user(self, client, session):
        _signup_user(client)
        assert session.scalar(select(func.count()).select_from(UserProfile)) == 1

    def test_repeated_signup_is_duplicate_email(self, client):
        assert _signup_user(client).status_code == 200

        resp = _signup_user(client)

        assert resp.status_code == 400
        assert resp.mimetype == "application/problem+json"
        problem = resp.get_json()
        assert problem["code"] == "duplicate_email"
        assert problem["detail"] == "This account already exists, please login"

    def test_taken_username_is_conflict(self, client):
        _signup_user(client)

        resp = _signup_user(client, email="b@x.com")

        assert resp.status_code == 409
        assert resp.get_json()["code"] == "conflict"

    def test_invalid_body_is_unprocessable(self, client):
        resp = client.post(f"{BASE}/signup", json={"email": "not-an-email", "password": "p"})

        assert resp.status_code == 422
        errors = resp.get_json()["details"]["errors"]
        assert "email" in errors
        assert "username" in errors

    def test_unknown_role_is_unprocessable(self, client):
        resp = client.post(f"{BASE}/signup?role=admin", json={})
        assert resp.status_code == 422

    def test_donation_center_signup_is_pending(self, client, session, outbox):
        resp = _signup_center(client)

        assert resp.status_code == 200
        assert resp.get_json() == {"status": "pending"}
        assert session.scalar(select(func.count()).select_from(Account)) == 0

        pending_id = _pending_id(session)
        [message] = outbox.sent_to(ADMIN)
        assert f"http://testserver{BASE}/approve/{pending_id}" in message.body
        assert f"http://testserver{BASE}/reject/{pending_id}" in message.body

    def test_donation_center_requires_organization_name(self, client):
        resp = _signup_center(client, organization_name=None)
        assert resp.status_code == 422

    def test_pending_center_cannot_log_in(self, client):
        _signup_center(client)

        resp = _login(client, "dc@x.com", "p2")

        assert resp.status_code == 400
        assert resp.get_json()["code"] == "invalid_credentials"


# --------------------------- Approve / Reject ------------------------------ #


class TestReview:
    def test_approve_then_reject_is_not_found(self, client, session, outbox):
        _signup_center(client)
        pending_id = _pending_id(session)

        approved = client.get(f"{BASE}/approve/{pending_id}")
        assert approved.status_code == 200
        assert approved.get_json() == {"status": "approved"}
        assert outbox.sent_to("dc@x.com")

        rejected = client.get(f"{BASE}/reject/{pending_id}")
        assert rejected.status_code == 404
        assert rejected.get_json()["code"] == "not_found"

    def test_approved_center_logs_in_with_donation_center_role(self, client, session):
        _signup_center(client)
        client.get(f"{BASE}/approve/{_pending_id(session)}")

        resp = _login(client, "dc@x.com", "p2")

        assert resp.status_code == 200
        assert resp.get_json()["role"] == "donation_center"

    def test_approved_center_keeps_its_pending_id(self, client, session):
        user_id = _signup_user(client).get_json()["account"]["id"]
        _signup_center(client)
        pending_id = _pending_id(session)

        client.get(f"{BASE}/approve/{pending_id}")
        body = _login(client, "dc@x.com", "p2").get_json()

        assert body["account"]["id"] == pending_id
        assert body["role"] == "donation_center"
        assert session.get(Account, user_id).email == "a@x.com"

    def test_reject_discards_signup(self, client, session, outbox):
        _signup_center(client)
        pending_id = _pending_id(session)

        resp = client.get(f"{BASE}/reject/{pending_id}")

        assert resp.get_json() == {"status": "rejected"}
        assert session.scalar(select(func.count()).select_from(PendingAccount)) == 0
        assert outbox.sent_to("dc@x.com")
        assert client.get(f"{BASE}/approve/{pending_id}").status_code == 404

    def test_approve_store_failure_is_bad_request(self, client, session):
        _signup_center(client)
        pending_id = _pending_id(session)
        _signup_user(client, email="dc@x.com", username="someone")

        resp = client.get(f"{BASE}/approve/{pending_id}")

        assert resp.status_code == 400
        assert resp.get_json()["code"] == "store_failure"
        assert session.get(PendingAccount, pending_id) is not None

    def test_unknown_pending_id(self, client):
        assert client.get(f"{BASE}/approve/424242").status_code == 404


# --------------------------------- Login ----------------------------------- #


class TestLogin:
    def test_login_returns_account_and_token(self, client):
        UserAccountFactory(email="a@x.com")

        resp = _login(client, "a@x.com", DEFAULT_PASSWORD)

        assert resp.status_code == 200
        body = resp.get_json()
        assert body["account"]["email"] == "a@x.com"
        assert "password_hash" not in body["account"]
        assert body["role"] == "user"
        assert body["token"]

    @pytest.mark.parametrize(
        "email,password", [("a@x.com", "wrong"), ("ghost@x.com", DEFAULT_PASSWORD)]
    )
    def test_bad_credentials_share_one_answer(self, client, email, password):
        UserAccountFactory(email="a@x.com")

        resp = _login(client, email, password)

        assert resp.status_code == 400
        problem = resp.get_json()
        assert problem["code"] == "invalid_credentials"
        assert problem["detail"] == "Invalid credentials"


# ----------------------------- Self-service -------------------------------- #


class TestSelfService:
    def test_patch_updates_phone_only(self, client):
        UserAccountFactory(email="a@x.com", username="alice")

        resp = client.patch(
            f"{BASE}/",
            json={"email": "a@x.com", "password": DEFAULT_PASSWORD, "phone_number": "555"},
        )

        assert resp.status_code == 200
        account = resp.get_json()["account"]
        assert account["phone_number"] == "555"
        assert account["username"] == "alice"

    def test_patch_with_wrong_password(self, client):
        UserAccountFactory(email="a@x.com")

        resp = client.patch(
            f"{BASE}/", json={"email": "a@x.com", "password": "bad", "phone_number": "555"}
        )

        assert resp.status_code == 400
        assert resp.get_json()["code"] == "invalid_credentials"

    def test_patch_requires_phone_number_key(self, client):
        UserAccountFactory(email="a@x.com")

        resp = client.patch(f"{BASE}/", json={"email": "a@x.com", "password": DEFAULT_PASSWORD})

        assert resp.status_code == 422

    def test_delete_removes_account(self, client, session):
        UserAccountFactory(email="a@x.com")

        resp = client.delete(f"{BASE}/", json={"email": "a@x.com", "password": DEFAULT_PASSWORD})

        assert resp.status_code == 200
        assert resp.get_json()["account"]["email"] == "a@x.com"
        assert session.scalar(select(func.count()).select_from(Account)) == 0
        assert session.scalar(select(func.count()).select_from(UserProfile)) == 0
        assert _login(client, "a@x.com", DEFAULT_PASSWORD).status_code == 400

    def test_delete_with_wrong_password_keeps_account(self, client, session):
        UserAccountFactory(email="a@x.com")

        resp = client.delete(f"{BASE}/", json={"email": "a@x.com", "password": "bad"})

        assert resp.status_code == 400
        assert session.scalar(select(func.count()).select_from(Account)) == 1


# ------------------------------ Token check -------------------------------- #


class TestTokenProbe:
    def test_user_token(self, client):
        account = UserAccountFactory(email="a@x.com", profile__first_name="Ada")
        token = _login(client, "a@x.com", DEFAULT_PASSWORD).get_json()["token"]

        resp = client.get(f"{BASE}/test", headers=_bearer(token))

        assert resp.status_code == 200
        body = resp.get_json()
        assert body["status"] == "Authorized"
        assert body["role"] == "user"
        assert body["profile"]["id"] == account.id
        assert body["profile"]["first_name"] == "Ada"

    def test_donation_center_token(self, client):
        DonationCenterAccountFactory(email="dc@x.com")
        token = _login(client, "dc@x.com", DEFAULT_PASSWORD).get_json()["token"]

        body = client.get(f"{BASE}/test", headers=_bearer(token)).get_json()

        assert body["role"] == "donation_center"
        assert body["profile"]["organization_name"].startswith("Donation Center")

    def test_missing_token_is_unauthorized(self, client):
        resp = client.get(f"{BASE}/test")

        assert resp.status_code == 401
        assert resp.mimetype == "application/problem+json"
        assert resp.get_json()["code"] == "unauthorized"

    def test_garbage_token_is_unauthorized(self, client):
        resp = client.get(f"{BASE}/test", headers=_bearer("not.a.jwt"))
        assert resp.status_code == 401

    def test_expired_token_is_unauthorized(self, client, freeze_time):
        UserAccountFactory(email="a@x.com")
        with freeze_time("2020-01-01"):
            token = _login(client, "a@x.com", DEFAULT_PASSWORD).get_json()["token"]

        resp = client.get(f"{BASE}/test", headers=_bearer(token))

        assert resp.status_code == 401
        assert resp.get_json()["detail"] == "Token has expired"
