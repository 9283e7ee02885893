"""
Routes d'authentification (délégation à Supabase Auth)
"""
from fastapi import APIRouter, Depends, status
from supabase import Client
import logging

from app.api.deps import get_app_url, get_current_user, get_identity_provider
from app.core.errors import MarketplaceError, UpstreamError
from app.db import get_supabase
from app.models import (
    ConfirmEmailRequest, CurrentUser, ForgotPasswordRequest, RefreshRequest,
    ResetPasswordRequest, SignInRequest, SignUpRequest, UpdatePasswordRequest
)
from app.services.accounts import AccountService
from app.services.identity import IdentityProvider

router = APIRouter()
logger = logging.getLogger(__name__)


def get_account_service(
    db: Client = Depends(get_supabase),
    identity: IdentityProvider = Depends(get_identity_provider)
) -> AccountService:
    return AccountService(db, identity)


@router.post("/signup", status_code=status.HTTP_201_CREATED)
def signup(
    request: SignUpRequest,
    app_url: str = Depends(get_app_url),
    accounts: AccountService = Depends(get_account_service)
):
    """Créer un compte acheteur ou agent"""
    try:
        return accounts.sign_up(request, app_url)
    except MarketplaceError:
        raise
    except Exception as e:
        logger.error(f"✗ Erreur inscription: {e}")
        raise UpstreamError("Failed to create account", details=str(e))


@router.post("/signin")
def signin(
    request: SignInRequest,
    accounts: AccountService = Depends(get_account_service)
):
    return accounts.sign_in(request)


@router.post("/refresh")
def refresh(
    request: RefreshRequest,
    accounts: AccountService = Depends(get_account_service)
):
    return accounts.refresh(request.refresh_token)


@router.post("/forgot-password")
def forgot_password(
    request: ForgotPasswordRequest,
    app_url: str = Depends(get_app_url),
    accounts: AccountService = Depends(get_account_service)
):
    """Réponse identique que le compte existe ou non"""
    return accounts.forgot_password(request.email, app_url)


@router.post("/reset-password")
def reset_password(
    request: ResetPasswordRequest,
    accounts: AccountService = Depends(get_account_service)
):
    return accounts.reset_password(request.token, request.new_password)


@router.post("/update-password")
def update_password(
    request: UpdatePasswordRequest,
    user: CurrentUser = Depends(get_current_user),
    accounts: AccountService = Depends(get_account_service)
):
    return accounts.update_password(user, request.current_password, request.new_password)


@router.post("/confirm-email")
def confirm_email(
    request: ConfirmEmailRequest,
    accounts: AccountService = Depends(get_account_service)
):
    return accounts.confirm_email(request.token)
