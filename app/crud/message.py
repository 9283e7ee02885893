# app/crud/message.py
"""
Opérations CRUD pour les messages acheteur <-> agent
"""

from typing import Any, Dict, List, Optional
from supabase import Client
import logging

from app.models import Message

logger = logging.getLogger(__name__)


class MessageCRUD:
    def __init__(self, db: Client):
        self.db = db
        self.table_name = "messages"

    def list(
        self,
        buyer_id: Optional[str] = None,
        agent_id: Optional[str] = None,
        listing_id: Optional[str] = None,
        application_id: Optional[str] = None,
        limit: int = 50
    ) -> List[Message]:
        """Messages filtrés, plus récents en premier"""
        query = self.db.table(self.table_name).select("*")

        if buyer_id:
            query = query.eq("buyer_id", buyer_id)
        if agent_id:
            query = query.eq("agent_id", agent_id)
        if listing_id:
            query = query.eq("listing_id", listing_id)
        if application_id:
            query = query.eq("application_id", application_id)

        response = query\
            .order("created_at", desc=True)\
            .limit(limit)\
            .execute()
        return [Message(**row) for row in response.data or []]

    def create(self, data: Dict[str, Any]) -> Message:
        response = self.db.table(self.table_name).insert(data).execute()
        if not response.data:
            raise Exception("Aucune donnée retournée après insertion")
        logger.info(f"✓ Message envoyé: {response.data[0]['id']}")
        return Message(**response.data[0])


def get_message_crud(db: Client) -> MessageCRUD:
    return MessageCRUD(db)
