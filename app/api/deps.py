"""
Dépendances FastAPI partagées par les endpoints.
"""
from typing import Optional
import logging

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from supabase import Client

from app.core.config import settings
from app.core.errors import AuthenticationError, AuthorizationError
from app.crud import get_user_crud
from app.db import get_supabase
from app.models import AccountStatus, CurrentUser
from app.services.identity import IdentityProvider
from app.services.payments import StripeClient

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_identity_provider(db: Client = Depends(get_supabase)) -> IdentityProvider:
    return IdentityProvider(db)


def get_stripe_client() -> StripeClient:
    return StripeClient()


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    identity: IdentityProvider = Depends(get_identity_provider),
    db: Client = Depends(get_supabase)
) -> CurrentUser:
    """
    Bearer token -> utilisateur authentifié.

    401 si le header manque, si le token est refusé par Supabase ou s'il n'y
    a pas de profil ; 403 si le compte est inactif.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Missing or invalid Authorization header. Expected: Bearer <token>")

    account = identity.resolve_token(credentials.credentials)
    if account is None:
        raise AuthenticationError("Invalid or expired token")

    profile = get_user_crud(db).get_by_id(account.id)
    if profile is None:
        raise AuthenticationError("User not found in database")

    if profile.account_status != AccountStatus.ACTIVE:
        raise AuthorizationError("Account is inactive. Please contact support.")

    return CurrentUser(
        id=profile.id,
        email=profile.email,
        role=profile.role,
        account_status=profile.account_status,
        first_name=profile.first_name,
        last_name=profile.last_name,
        name=profile.name,
    )


def get_app_url(request: Request) -> str:
    """APP_URL, sinon l'Origin, sinon proto + Host de la requête"""
    if settings.APP_URL:
        return settings.APP_URL.rstrip("/")

    origin = request.headers.get("origin")
    if origin:
        return origin.rstrip("/")

    proto = request.headers.get("x-forwarded-proto", request.url.scheme)
    host = request.headers.get("host", request.url.netloc)
    return f"{proto}://{host}"
