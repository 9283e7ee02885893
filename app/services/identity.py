"""
Fournisseur d'identité (Supabase Auth).

Toute la vérification des tokens et la gestion des mots de passe sont
déléguées à Supabase ; ce module ne fait qu'adapter les réponses.
"""
from typing import Any, Callable, Dict, Optional, Tuple
import logging

from pydantic import BaseModel
from supabase import Client

from app.core.errors import AuthenticationError, UpstreamError, ValidationError
from app.core.supabase import SupabaseClient
from app.models import Session

logger = logging.getLogger(__name__)


class Identity(BaseModel):
    """Compte côté fournisseur"""
    id: str
    email: Optional[str] = None
    email_confirmed: bool = False


def _identity(user) -> Identity:
    return Identity(
        id=str(user.id),
        email=user.email,
        email_confirmed=bool(getattr(user, "email_confirmed_at", None)),
    )


def _session(session) -> Optional[Session]:
    if session is None:
        return None
    return Session(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        expires_at=session.expires_at,
    )


class IdentityProvider:
    def __init__(self, admin: Client, auth_client_factory: Callable[[], Client] = SupabaseClient.new_auth_client):
        self.admin = admin
        self.new_auth_client = auth_client_factory

    def resolve_token(self, token: str) -> Optional[Identity]:
        """Token -> compte, None si invalide ou expiré"""
        try:
            response = self.admin.auth.get_user(token)
        except Exception as e:
            logger.info(f"Token refusé: {e}")
            return None
        if response is None or response.user is None:
            return None
        return _identity(response.user)

    def sign_up(
        self,
        email: str,
        password: str,
        redirect_to: str,
        metadata: Dict[str, Any]
    ) -> Tuple[Identity, Optional[Session]]:
        try:
            response = self.new_auth_client().auth.sign_up({
                "email": email,
                "password": password,
                "options": {"email_redirect_to": redirect_to, "data": metadata},
            })
        except Exception as e:
            raise ValidationError(str(e) or "Failed to create user")
        if response.user is None:
            raise ValidationError("Failed to create user")
        return _identity(response.user), _session(response.session)

    def sign_in(self, email: str, password: str) -> Tuple[Identity, Session]:
        try:
            response = self.new_auth_client().auth.sign_in_with_password({
                "email": email,
                "password": password,
            })
        except Exception as e:
            raise AuthenticationError(str(e) or "Invalid email or password")
        if response.user is None or response.session is None:
            raise AuthenticationError("Invalid email or password")
        return _identity(response.user), _session(response.session)

    def refresh(self, refresh_token: str) -> Session:
        try:
            response = self.new_auth_client().auth.refresh_session(refresh_token)
        except Exception as e:
            raise AuthenticationError(str(e) or "Invalid or expired refresh token")
        if response.session is None:
            raise AuthenticationError("Invalid or expired refresh token")
        return _session(response.session)

    def send_password_reset(self, email: str, redirect_to: str) -> bool:
        """False en cas d'échec ; l'appelant ne doit pas le révéler"""
        try:
            self.new_auth_client().auth.reset_password_for_email(email, {"redirect_to": redirect_to})
            return True
        except Exception as e:
            logger.info(f"Reset password non envoyé: {e}")
            return False

    def update_user(self, user_id: str, attributes: Dict[str, Any]) -> None:
        """Mise à jour administrative (mot de passe, email, confirmation)"""
        try:
            self.admin.auth.admin.update_user_by_id(user_id, attributes)
        except Exception as e:
            raise UpstreamError("Failed to update account", details=str(e))

    def delete_user(self, user_id: str) -> None:
        try:
            self.admin.auth.admin.delete_user(user_id)
        except Exception as e:
            logger.error(f"✗ Compte {user_id} non supprimé: {e}")
