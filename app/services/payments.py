"""
Paiements Stripe : session Checkout et enregistrement de l'abonnement.

Pas de webhook : le frontend rappelle /stripe/payment-success avec le
session_id après redirection.
"""
from typing import Any, Dict
import logging

import stripe
from supabase import Client

from app.core.config import settings
from app.core.errors import AuthorizationError, UpstreamError, ValidationError
from app.crud import get_subscription_crud
from app.models import (
    CheckoutRequest, CheckoutResponse, CurrentUser, Subscription, SubscriptionStatus
)

logger = logging.getLogger(__name__)

SESSION_FIELDS = ("id", "url", "payment_status", "customer", "subscription")
METADATA_FIELDS = ("user_id", "user_role", "plan_type")


def session_to_dict(session) -> Dict[str, Any]:
    """Checkout Session Stripe -> dict des seuls champs utilisés"""
    data = {field: getattr(session, field, None) for field in SESSION_FIELDS}
    metadata = getattr(session, "metadata", None)
    data["metadata"] = {
        key: getattr(metadata, key, None) for key in METADATA_FIELDS
    } if metadata is not None else {}
    return data


class StripeClient:
    """Façade sur le SDK Stripe (Checkout Sessions)"""

    def __init__(
        self,
        secret_key: str = settings.STRIPE_SECRET_KEY,
        timeout: int = settings.STRIPE_TIMEOUT
    ):
        self.api_key = secret_key
        if stripe.default_http_client is None:
            stripe.default_http_client = stripe.RequestsClient(timeout=timeout)

    def _call(self, action: str, method, *args, **params) -> Dict[str, Any]:
        try:
            session = method(*args, api_key=self.api_key, **params)
        except stripe.APIConnectionError as e:
            logger.error(f"✗ Stripe injoignable ({action}): {e}")
            raise UpstreamError("Payment provider unavailable", details=str(e))
        except stripe.StripeError as e:
            message = e.user_message or str(e)
            logger.error(f"✗ Erreur Stripe ({action}) {e.http_status}: {message}")
            raise UpstreamError("Payment provider error", details=message)
        return session_to_dict(session)

    def create_checkout_session(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return self._call("création de session", stripe.checkout.Session.create, **params)

    def retrieve_checkout_session(self, session_id: str) -> Dict[str, Any]:
        return self._call("lecture de session", stripe.checkout.Session.retrieve, session_id)


class PaymentService:
    def __init__(self, db: Client, stripe: StripeClient):
        self.subscriptions = get_subscription_crud(db)
        self.stripe = stripe

    def create_checkout(self, user: CurrentUser, request: CheckoutRequest, app_url: str) -> CheckoutResponse:
        plan = request.plan_type.value
        role = request.user_role.value

        if not plan.startswith(f"{role}_"):
            raise ValidationError("Plan type does not match user role")
        if user.role.value != role:
            raise AuthorizationError("User role mismatch")

        price_id = settings.stripe_price_map.get(plan)
        if not price_id:
            raise ValidationError("Invalid plan type")

        session = self.stripe.create_checkout_session({
            "mode": "subscription",
            "payment_method_types": ["card"],
            "line_items": [{"price": price_id, "quantity": 1}],
            "customer_email": user.email,
            "metadata": {"user_id": user.id, "user_role": role, "plan_type": plan},
            "success_url": f"{app_url}/success?session_id={{CHECKOUT_SESSION_ID}}",
            "cancel_url": f"{app_url}/cancel",
        })
        logger.info(f"✓ Session Checkout {session['id']} pour {user.id} ({plan})")
        return CheckoutResponse(checkout_url=session.get("url"), session_id=session["id"])

    def confirm_payment(self, user: CurrentUser, session_id: str) -> Subscription:
        """Session payée et appartenant à l'appelant -> abonnement actif"""
        session = self.stripe.retrieve_checkout_session(session_id)

        if session.get("payment_status") != "paid":
            raise ValidationError("Payment not completed")

        metadata = session.get("metadata") or {}
        if metadata.get("user_id") != user.id:
            raise AuthorizationError("Session does not belong to user")

        try:
            return self.subscriptions.upsert_for_user(user.id, {
                "status": SubscriptionStatus.active.value,
                "stripe_subscription_id": session.get("subscription"),
                "stripe_customer_id": session.get("customer"),
                "plan_type": metadata.get("plan_type"),
            })
        except Exception as e:
            raise UpstreamError("Failed to save subscription", details=str(e))
