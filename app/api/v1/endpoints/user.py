"""
Routes du profil de l'utilisateur connecté
"""
from fastapi import APIRouter, Depends

from app.api.deps import get_current_user
from app.api.v1.endpoints.auth import get_account_service
from app.models import CurrentUser, EmailUpdate, ProfileUpdate
from app.services.accounts import AccountService

router = APIRouter()


@router.get("/profile")
def get_profile(
    user: CurrentUser = Depends(get_current_user),
    accounts: AccountService = Depends(get_account_service)
):
    return {"user": accounts.get_profile(user)}


@router.put("/profile")
def update_profile(
    request: ProfileUpdate,
    user: CurrentUser = Depends(get_current_user),
    accounts: AccountService = Depends(get_account_service)
):
    """Mise à jour partielle du profil"""
    return {"user": accounts.update_profile(user, request)}


@router.put("/email")
def update_email(
    request: EmailUpdate,
    user: CurrentUser = Depends(get_current_user),
    accounts: AccountService = Depends(get_account_service)
):
    return accounts.update_email(user, request.new_email)


@router.get("/account-status")
def account_status(
    user: CurrentUser = Depends(get_current_user),
    accounts: AccountService = Depends(get_account_service)
):
    return accounts.account_status(user)
