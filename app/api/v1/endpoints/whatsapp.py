"""
Génération de liens WhatsApp
"""
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from typing import Optional

from app.api.deps import get_current_user
from app.models import CurrentUser
from app.services.whatsapp import generate_whatsapp_link

router = APIRouter()


class WhatsAppLinkRequest(BaseModel):
    phone_number: str = Field(..., min_length=1)
    message: Optional[str] = None


@router.post("/generate-link")
def generate_link(
    request: WhatsAppLinkRequest,
    user: CurrentUser = Depends(get_current_user)
):
    return {"whatsapp_url": generate_whatsapp_link(request.phone_number, request.message)}
