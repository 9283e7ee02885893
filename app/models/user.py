# app/models/user.py
from pydantic import BaseModel, EmailStr, Field, ConfigDict, field_validator
from typing import Optional
from datetime import datetime
from enum import Enum


class UserRole(str, Enum):
    """Rôles utilisateurs"""
    BUYER = "buyer"
    AGENT = "agent"
    ADMIN = "admin"


class AccountStatus(str, Enum):
    """Statut du compte"""
    ACTIVE = "active"
    INACTIVE = "inactive"


class SignupRole(str, Enum):
    """Rôles accessibles à l'inscription (pas d'admin en self-service)"""
    BUYER = "buyer"
    AGENT = "agent"


class ProfileFields(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    country_of_residence: Optional[str] = None
    parish: Optional[str] = None


# Inscription
class SignUpRequest(ProfileFields):
    email: EmailStr
    password: str = Field(..., min_length=1)
    role: SignupRole

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()


class SignInRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1)


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    token: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1)


class UpdatePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1)


class ConfirmEmailRequest(BaseModel):
    token: str = Field(..., min_length=1)
    redirect_to: Optional[str] = None


# Mise à jour du profil
class ProfileUpdate(ProfileFields):
    pass


class EmailUpdate(BaseModel):
    new_email: EmailStr


class Session(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    expires_at: Optional[int] = None


# Utilisateur authentifié résolu depuis le bearer token
class CurrentUser(BaseModel):
    id: str
    email: str
    role: UserRole
    account_status: AccountStatus = AccountStatus.ACTIVE
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    name: Optional[str] = None


# Complet
class User(ProfileFields):
    model_config = ConfigDict(from_attributes=True, extra="allow")

    id: str
    email: str
    role: UserRole
    account_status: AccountStatus = AccountStatus.ACTIVE
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
