"""
Routes API pour les recherches sauvegardées (acheteur)
"""
from fastapi import APIRouter, Depends, Query, status
from supabase import Client

from app.api.deps import get_current_user
from app.db import get_supabase
from app.models import CurrentUser, SavedSearchCreate, SavedSearchUpdate
from app.services.saved_searches import SavedSearchService

router = APIRouter()


@router.get("")
def list_saved_searches(
    user: CurrentUser = Depends(get_current_user),
    db: Client = Depends(get_supabase)
):
    return {"saved_searches": SavedSearchService(db).list(user)}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_saved_search(
    request: SavedSearchCreate,
    user: CurrentUser = Depends(get_current_user),
    db: Client = Depends(get_supabase)
):
    return {"saved_search": SavedSearchService(db).create(user, request)}


@router.put("")
def update_saved_search(
    request: SavedSearchUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: Client = Depends(get_supabase)
):
    return {"saved_search": SavedSearchService(db).update(user, request)}


@router.delete("")
def delete_saved_search(
    id: str = Query(..., min_length=1),
    user: CurrentUser = Depends(get_current_user),
    db: Client = Depends(get_supabase)
):
    SavedSearchService(db).delete(user, id)
    return {"message": "Saved search deleted successfully"}
