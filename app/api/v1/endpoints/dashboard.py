"""
Tableaux de bord et compteurs
"""
from fastapi import APIRouter, Depends
from supabase import Client

from app.api.deps import get_current_user
from app.db import get_supabase
from app.models import CurrentUser
from app.services.analytics import DashboardService

router = APIRouter()
analytics_router = APIRouter()


@router.get("/agent")
def agent_dashboard(
    user: CurrentUser = Depends(get_current_user),
    db: Client = Depends(get_supabase)
):
    """Annonces de l'agent, candidatures reçues et compteurs"""
    return DashboardService(db).agent_dashboard(user)


@router.get("/buyer")
def buyer_dashboard(
    user: CurrentUser = Depends(get_current_user),
    db: Client = Depends(get_supabase)
):
    return DashboardService(db).buyer_dashboard(user)


@analytics_router.get("")
def analytics(
    user: CurrentUser = Depends(get_current_user),
    db: Client = Depends(get_supabase)
):
    """Compteurs agent pour agent/admin, acheteur sinon"""
    return DashboardService(db).analytics(user)
