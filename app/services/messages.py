"""
Messagerie acheteur <-> agent.

L'acheteur écrit à un agent, l'agent à un acheteur ; l'admin lit tout
mais n'envoie pas.
"""
from typing import List, Optional
import logging

from supabase import Client

from app.core.config import settings
from app.core.errors import AuthorizationError, UpstreamError, ValidationError
from app.crud import get_message_crud, get_user_crud
from app.models import CurrentUser, Message, MessageCreate, SenderRole, UserRole

logger = logging.getLogger(__name__)


class MessageService:
    def __init__(self, db: Client):
        self.messages = get_message_crud(db)
        self.users = get_user_crud(db)

    def list(
        self,
        user: CurrentUser,
        listing_id: Optional[str] = None,
        application_id: Optional[str] = None
    ) -> List[Message]:
        filters = {"listing_id": listing_id, "application_id": application_id}
        if user.role == UserRole.BUYER:
            filters["buyer_id"] = user.id
        elif user.role == UserRole.AGENT:
            filters["agent_id"] = user.id

        try:
            return self.messages.list(limit=settings.MESSAGES_PAGE_SIZE, **filters)
        except Exception as e:
            raise UpstreamError("Failed to fetch messages", details=str(e))

    def _ensure_counterpart(self, user_id: Optional[str], role: UserRole, field: str) -> str:
        if not user_id:
            raise ValidationError(f"{field} is required")
        counterpart = self.users.get_by_id(user_id)
        if counterpart is None or counterpart.role != role:
            raise ValidationError(f"Invalid {field}")
        return user_id

    def send(self, user: CurrentUser, data: MessageCreate) -> Message:
        if user.role == UserRole.BUYER:
            buyer_id = user.id
            agent_id = self._ensure_counterpart(data.agent_id, UserRole.AGENT, "agent_id")
            sender_role = SenderRole.buyer
        elif user.role == UserRole.AGENT:
            agent_id = user.id
            buyer_id = self._ensure_counterpart(data.buyer_id, UserRole.BUYER, "buyer_id")
            sender_role = SenderRole.agent
        else:
            raise AuthorizationError("Only buyers and agents can send messages")

        try:
            return self.messages.create({
                "buyer_id": buyer_id,
                "agent_id": agent_id,
                "listing_id": data.listing_id,
                "application_id": data.application_id,
                "message": data.message,
                "sender_role": sender_role.value,
                "read": False,
            })
        except Exception as e:
            raise UpstreamError("Failed to send message", details=str(e))
