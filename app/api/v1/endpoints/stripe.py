"""
Routes Stripe : Checkout et confirmation de paiement
"""
from fastapi import APIRouter, Depends
from supabase import Client
import logging

from app.api.deps import get_app_url, get_current_user, get_stripe_client
from app.db import get_supabase
from app.models import CheckoutRequest, CheckoutResponse, CurrentUser, PaymentSuccessRequest
from app.services.payments import PaymentService, StripeClient

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/checkout", response_model=CheckoutResponse)
def create_checkout(
    request: CheckoutRequest,
    app_url: str = Depends(get_app_url),
    user: CurrentUser = Depends(get_current_user),
    db: Client = Depends(get_supabase),
    stripe: StripeClient = Depends(get_stripe_client)
):
    """Session Checkout en mode abonnement pour le plan demandé"""
    return PaymentService(db, stripe).create_checkout(user, request, app_url)


@router.post("/payment-success")
def payment_success(
    request: PaymentSuccessRequest,
    user: CurrentUser = Depends(get_current_user),
    db: Client = Depends(get_supabase),
    stripe: StripeClient = Depends(get_stripe_client)
):
    """Appelé par le frontend après la redirection de Stripe"""
    subscription = PaymentService(db, stripe).confirm_payment(user, request.session_id)
    return {"message": "Payment successful", "subscription": subscription}
