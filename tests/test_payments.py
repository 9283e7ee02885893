# tests/test_payments.py
"""Tests Stripe : Checkout, confirmation de paiement et client SDK"""
from types import SimpleNamespace

import pytest
import stripe as stripe_sdk

from app.core.config import settings
from app.core.errors import UpstreamError
from app.services.payments import StripeClient


def checkout(client, actor, plan_type, user_role):
    return client.post(
        "/api/stripe/checkout",
        json={"plan_type": plan_type, "user_role": user_role},
        headers=actor.headers
    )


class TestCheckout:
    def test_creates_subscription_session(self, client, agent, stripe):
        response = checkout(client, agent, "agent_monthly", "agent")

        assert response.status_code == 200
        assert response.json() == {
            "checkout_url": "https://checkout.stripe.com/c/pay/cs_test_1",
            "session_id": "cs_test_1",
        }
        params = stripe.created[0]
        assert params["mode"] == "subscription"
        assert params["line_items"] == [{"price": "price_agent_monthly", "quantity": 1}]
        assert params["metadata"] == {"user_id": agent.id, "user_role": "agent", "plan_type": "agent_monthly"}
        assert params["success_url"] == (
            "https://marketplace.framer.website/success?session_id={CHECKOUT_SESSION_ID}"
        )

    def test_plan_must_match_role(self, client, agent):
        response = checkout(client, agent, "buyer_monthly", "agent")
        assert response.status_code == 400
        assert response.json()["error"] == "Plan type does not match user role"

    def test_role_must_be_callers(self, client, buyer):
        response = checkout(client, buyer, "agent_monthly", "agent")
        assert response.status_code == 403
        assert response.json()["error"] == "User role mismatch"

    def test_unconfigured_plan(self, client, buyer, monkeypatch):
        monkeypatch.setattr(settings, "STRIPE_BUYER_YEARLY_PRICE_ID", "")
        response = checkout(client, buyer, "buyer_yearly", "buyer")
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid plan type"


class TestPaymentSuccess:
    def test_unpaid_session(self, client, agent, stripe):
        session_id = checkout(client, agent, "agent_monthly", "agent").json()["session_id"]
        response = client.post("/api/stripe/payment-success", json={"session_id": session_id}, headers=agent.headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Payment not completed"

    def test_session_of_another_user(self, client, agent, make_actor, stripe):
        session_id = checkout(client, agent, "agent_monthly", "agent").json()["session_id"]
        stripe.mark_paid(session_id)
        other = make_actor("agent")

        response = client.post("/api/stripe/payment-success", json={"session_id": session_id}, headers=other.headers)
        assert response.status_code == 403

    def test_paid_session_activates_subscription(self, client, agent, stripe, db):
        session_id = checkout(client, agent, "agent_monthly", "agent").json()["session_id"]
        stripe.mark_paid(session_id)

        response = client.post("/api/stripe/payment-success", json={"session_id": session_id}, headers=agent.headers)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Payment successful"
        assert body["subscription"]["status"] == "active"
        assert body["subscription"]["stripe_customer_id"] == "cus_test"
        assert body["subscription"]["plan_type"] == "agent_monthly"

    def test_resubscribing_updates_same_row(self, client, agent, stripe, db, subscribe):
        subscribe(agent.id, status="canceled")
        session_id = checkout(client, agent, "agent_yearly", "agent").json()["session_id"]
        stripe.mark_paid(session_id)

        client.post("/api/stripe/payment-success", json={"session_id": session_id}, headers=agent.headers)

        rows = db.rows("subscriptions")
        assert len(rows) == 1
        assert rows[0]["status"] == "active"
        assert rows[0]["plan_type"] == "agent_yearly"


class TestStripeClient:
    @pytest.fixture(autouse=True)
    def fresh_http_client(self, monkeypatch):
        monkeypatch.setattr(stripe_sdk, "default_http_client", None)

    def test_uses_requests_transport(self):
        StripeClient(secret_key="sk_test_1", timeout=5)
        assert isinstance(stripe_sdk.default_http_client, stripe_sdk.RequestsClient)

    def test_session_calls(self, monkeypatch):
        calls = []

        def fake_create(**params):
            calls.append(("create", params))
            return SimpleNamespace(id="cs_1", url="https://checkout.stripe.com/x")

        def fake_retrieve(session_id, **params):
            calls.append(("retrieve", session_id, params))
            return SimpleNamespace(
                id=session_id, payment_status="paid", customer="cus_1", subscription="sub_1",
                metadata=SimpleNamespace(user_id="u1", plan_type="agent_monthly")
            )

        monkeypatch.setattr(stripe_sdk.checkout.Session, "create", fake_create)
        monkeypatch.setattr(stripe_sdk.checkout.Session, "retrieve", fake_retrieve)
        client = StripeClient(secret_key="sk_test_1")

        session = client.create_checkout_session({"mode": "subscription", "metadata": {"user_id": "u1"}})
        assert session["id"] == "cs_1"
        assert session["url"] == "https://checkout.stripe.com/x"
        assert session["metadata"] == {}
        assert calls[0] == ("create", {
            "api_key": "sk_test_1", "mode": "subscription", "metadata": {"user_id": "u1"}
        })

        retrieved = client.retrieve_checkout_session("cs_1")
        assert calls[1] == ("retrieve", "cs_1", {"api_key": "sk_test_1"})
        assert retrieved["payment_status"] == "paid"
        assert retrieved["subscription"] == "sub_1"
        assert retrieved["metadata"] == {"user_id": "u1", "user_role": None, "plan_type": "agent_monthly"}

    def test_api_error(self, monkeypatch):
        def rejected(**params):
            raise stripe_sdk.InvalidRequestError("No such price: 'price_x'", "line_items")

        monkeypatch.setattr(stripe_sdk.checkout.Session, "create", rejected)
        with pytest.raises(UpstreamError) as exc:
            StripeClient(secret_key="sk").create_checkout_session({"mode": "subscription"})
        assert exc.value.message == "Payment provider error"
        assert "No such price" in exc.value.details

    def test_network_error(self, monkeypatch):
        def unreachable(session_id, **params):
            raise stripe_sdk.APIConnectionError("connection refused")

        monkeypatch.setattr(stripe_sdk.checkout.Session, "retrieve", unreachable)
        with pytest.raises(UpstreamError) as exc:
            StripeClient(secret_key="sk").retrieve_checkout_session("cs_1")
        assert exc.value.message == "Payment provider unavailable"
