# app/crud/subscription.py
"""
Opérations CRUD pour les abonnements
"""

from typing import Any, Dict, Optional
from supabase import Client
import logging

from app.core.clock import utc_now_iso
from app.models import Subscription, SubscriptionStatus

logger = logging.getLogger(__name__)


class SubscriptionCRUD:
    def __init__(self, db: Client):
        self.db = db
        self.table_name = "subscriptions"

    def get_active(self, user_id: str) -> Optional[Subscription]:
        """Abonnement actif d'un utilisateur, s'il existe"""
        response = self.db.table(self.table_name)\
            .select("*")\
            .eq("user_id", user_id)\
            .eq("status", SubscriptionStatus.active.value)\
            .limit(1)\
            .execute()

        if response.data:
            return Subscription(**response.data[0])
        return None

    def upsert_for_user(self, user_id: str, data: Dict[str, Any]) -> Subscription:
        """Crée ou met à jour l'abonnement d'un utilisateur (clé : user_id)"""
        payload = {"user_id": user_id, **data, "updated_at": utc_now_iso()}
        response = self.db.table(self.table_name)\
            .upsert(payload, on_conflict="user_id")\
            .execute()

        if not response.data:
            raise Exception("Aucune donnée retournée après upsert")

        logger.info(f"✓ Abonnement enregistré pour {user_id}")
        return Subscription(**response.data[0])


def get_subscription_crud(db: Client) -> SubscriptionCRUD:
    return SubscriptionCRUD(db)
