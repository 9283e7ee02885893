"""
Comptes : inscription, connexion, mots de passe et profil.
"""
from typing import Any, Dict, Optional
import logging

from supabase import Client

from app.core.config import settings
from app.core.errors import (
    AuthenticationError, AuthorizationError, NotFoundError, UpstreamError, ValidationError
)
from app.crud import get_user_crud
from app.models import (
    AccountStatus, CurrentUser, ProfileUpdate, SignInRequest, SignUpRequest, User
)
from app.services.identity import IdentityProvider

logger = logging.getLogger(__name__)

RESET_MESSAGE = "If an account exists with this email, a password reset link has been sent."


def full_name(first: Optional[str], last: Optional[str]) -> Optional[str]:
    name = f"{first or ''} {last or ''}".strip()
    return name or None


class AccountService:
    def __init__(self, db: Client, identity: IdentityProvider):
        self.users = get_user_crud(db)
        self.identity = identity

    def _check_password(self, password: str, label: str = "Password") -> None:
        if len(password) < settings.MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"{label} must be at least {settings.MIN_PASSWORD_LENGTH} characters"
            )

    def _profile(self, user_id: str) -> User:
        profile = self.users.get_by_id(user_id)
        if profile is None:
            raise NotFoundError("User profile not found")
        return profile

    # ========================================================================
    # AUTH
    # ========================================================================

    def sign_up(self, request: SignUpRequest, app_url: str) -> Dict[str, Any]:
        """
        Compte fournisseur + profil apparié 1:1.

        Si le profil ne peut pas être créé, le compte fournisseur est supprimé.
        """
        name = request.name or full_name(request.first_name, request.last_name)
        metadata = {
            "role": request.role.value,
            "first_name": request.first_name or "",
            "last_name": request.last_name or "",
            "name": name or "",
            "phone": request.phone or "",
            "country_of_residence": request.country_of_residence or "",
            "parish": request.parish or "",
        }
        identity, session = self.identity.sign_up(
            request.email, request.password, f"{app_url}/confirm-email", metadata
        )

        try:
            profile = self.users.create({
                "id": identity.id,
                "email": request.email,
                "role": request.role.value,
                "first_name": request.first_name,
                "last_name": request.last_name,
                "name": name,
                "phone": request.phone,
                "country_of_residence": request.country_of_residence,
                "parish": request.parish,
                "account_status": AccountStatus.ACTIVE.value,
            })
        except Exception as e:
            self.identity.delete_user(identity.id)
            raise UpstreamError("Failed to create user profile", details=str(e))

        logger.info(f"✓ Inscription {profile.id} ({request.role.value})")
        if session is not None:
            return {"user": profile, "session": session}
        return {
            "user": profile,
            "message": "Account created successfully. Please check your email to confirm your account.",
            "requires_confirmation": True,
        }

    def sign_in(self, request: SignInRequest) -> Dict[str, Any]:
        identity, session = self.identity.sign_in(request.email, request.password)
        profile = self._profile(identity.id)
        if profile.account_status != AccountStatus.ACTIVE:
            raise AuthorizationError("Account is inactive. Please contact support.")
        return {"user": profile, "session": session}

    def refresh(self, refresh_token: str) -> Dict[str, Any]:
        return {"session": self.identity.refresh(refresh_token)}

    def forgot_password(self, email: str, app_url: str) -> Dict[str, Any]:
        """Même réponse que l'email existe ou non (pas d'énumération)"""
        self.identity.send_password_reset(email, f"{app_url}/reset-password")
        return {"message": RESET_MESSAGE}

    def reset_password(self, token: str, new_password: str) -> Dict[str, Any]:
        self._check_password(new_password)
        identity = self.identity.resolve_token(token)
        if identity is None:
            raise ValidationError(
                "Invalid or expired reset token. Please request a new password reset link."
            )
        self.identity.update_user(identity.id, {"password": new_password})
        return {"message": "Password reset successfully"}

    def update_password(self, user: CurrentUser, current_password: str, new_password: str) -> Dict[str, Any]:
        self._check_password(new_password, "New password")
        try:
            self.identity.sign_in(user.email, current_password)
        except AuthenticationError:
            raise AuthenticationError("Current password is incorrect")
        self.identity.update_user(user.id, {"password": new_password})
        return {"message": "Password updated successfully"}

    def confirm_email(self, token: str) -> Dict[str, Any]:
        identity = self.identity.resolve_token(token)
        if identity is None:
            raise ValidationError("Invalid or expired confirmation token")

        if identity.email_confirmed:
            return {
                "user": self._profile(identity.id),
                "message": "Email is already confirmed. Please sign in.",
                "requires_signin": True,
            }

        self.identity.update_user(identity.id, {"email_confirm": True})
        return {
            "user": self._profile(identity.id),
            "message": "Email confirmed successfully. Please sign in.",
            "requires_signin": True,
        }

    # ========================================================================
    # PROFIL
    # ========================================================================

    def get_profile(self, user: CurrentUser) -> User:
        profile = self.users.get_by_id(user.id)
        if profile is None:
            raise NotFoundError("User not found")
        return profile

    def update_profile(self, user: CurrentUser, request: ProfileUpdate) -> User:
        """Mise à jour partielle ; name recalculé sauf s'il est fourni"""
        data = request.model_dump(exclude_unset=True)

        if "name" not in data and ("first_name" in data or "last_name" in data):
            current = self.get_profile(user)
            first = data.get("first_name", current.first_name)
            last = data.get("last_name", current.last_name)
            name = full_name(first, last)
            if name:
                data["name"] = name

        try:
            updated = self.users.update(user.id, data)
        except Exception as e:
            raise UpstreamError("Failed to update profile", details=str(e))
        if updated is None:
            raise NotFoundError("User not found")
        return updated

    def update_email(self, user: CurrentUser, new_email: str) -> Dict[str, Any]:
        """Fournisseur d'abord, puis profil"""
        email = new_email.lower()
        self.identity.update_user(user.id, {"email": email})
        try:
            profile = self.users.update(user.id, {"email": email})
        except Exception as e:
            raise UpstreamError("Failed to update email in profile", details=str(e))
        return {"message": "Email updated successfully", "user": profile}

    def account_status(self, user: CurrentUser) -> Dict[str, Any]:
        profile = self.get_profile(user)
        return {"account_status": profile.account_status, "role": profile.role}
