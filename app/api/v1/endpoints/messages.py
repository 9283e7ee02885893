"""
Routes API pour la messagerie acheteur <-> agent
"""
from fastapi import APIRouter, Depends, status
from typing import Optional
from supabase import Client

from app.api.deps import get_current_user
from app.db import get_supabase
from app.models import CurrentUser, MessageCreate
from app.services.messages import MessageService

router = APIRouter()


@router.get("")
def list_messages(
    listing_id: Optional[str] = None,
    application_id: Optional[str] = None,
    user: CurrentUser = Depends(get_current_user),
    db: Client = Depends(get_supabase)
):
    """Messages visibles par l'appelant, plus récents en premier"""
    messages = MessageService(db).list(user, listing_id=listing_id, application_id=application_id)
    return {"messages": messages}


@router.post("", status_code=status.HTTP_201_CREATED)
def send_message(
    request: MessageCreate,
    user: CurrentUser = Depends(get_current_user),
    db: Client = Depends(get_supabase)
):
    return {"message": MessageService(db).send(user, request)}
