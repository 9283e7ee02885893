# app/crud/application.py
"""
Opérations CRUD pour les candidatures
"""

from typing import Any, Dict, List, Optional
from supabase import Client
import logging

from app.core.clock import utc_now_iso
from app.models import Application

logger = logging.getLogger(__name__)


class ApplicationCRUD:
    """Classe pour gérer les opérations CRUD sur les candidatures"""

    def __init__(self, db: Client):
        self.db = db
        self.table_name = "applications"

    def create(self, data: Dict[str, Any]) -> Application:
        """
        Créer une candidature

        La contrainte unique (listing_id, buyer_id) côté base fait échouer
        un doublon avec une APIError 23505, propagée à l'appelant.
        """
        response = self.db.table(self.table_name).insert(data).execute()

        if not response.data:
            raise Exception("Aucune donnée retournée après insertion")

        logger.info(f"✓ Candidature créée: {response.data[0]['id']}")
        return Application(**response.data[0])

    def get_by_id(self, application_id: str) -> Optional[Application]:
        response = self.db.table(self.table_name)\
            .select("*")\
            .eq("id", application_id)\
            .limit(1)\
            .execute()

        if response.data:
            return Application(**response.data[0])
        return None

    def find_for_buyer(self, listing_id: str, buyer_id: str) -> Optional[Application]:
        """Candidature existante pour le couple (annonce, acheteur)"""
        response = self.db.table(self.table_name)\
            .select("*")\
            .eq("listing_id", listing_id)\
            .eq("buyer_id", buyer_id)\
            .limit(1)\
            .execute()

        if response.data:
            return Application(**response.data[0])
        return None

    def update(self, application_id: str, data: Dict[str, Any]) -> Optional[Application]:
        try:
            payload = dict(data)
            payload["updated_at"] = utc_now_iso()

            response = self.db.table(self.table_name)\
                .update(payload)\
                .eq("id", application_id)\
                .execute()

            if response.data:
                logger.info(f"✓ Candidature mise à jour: {application_id}")
                return Application(**response.data[0])
            return None

        except Exception as e:
            logger.error(f"✗ Erreur mise à jour candidature {application_id}: {e}")
            raise

    def list_for_buyer(self, buyer_id: str) -> List[Application]:
        response = self.db.table(self.table_name)\
            .select("*")\
            .eq("buyer_id", buyer_id)\
            .order("created_at", desc=True)\
            .execute()
        return [Application(**row) for row in response.data or []]

    def list_for_listings(self, listing_ids: List[str]) -> List[Application]:
        """Candidatures reçues sur un ensemble d'annonces"""
        if not listing_ids:
            return []
        response = self.db.table(self.table_name)\
            .select("*")\
            .in_("listing_id", listing_ids)\
            .order("created_at", desc=True)\
            .execute()
        return [Application(**row) for row in response.data or []]

    def list_for_agent(self, agent_id: str) -> List[Application]:
        response = self.db.table(self.table_name)\
            .select("*")\
            .eq("agent_id", agent_id)\
            .execute()
        return [Application(**row) for row in response.data or []]


def get_application_crud(db: Client) -> ApplicationCRUD:
    return ApplicationCRUD(db)
