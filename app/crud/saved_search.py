"""
Opérations CRUD pour les recherches sauvegardées
"""
from typing import Any, Dict, List, Optional
from supabase import Client
import logging

from app.core.clock import utc_now_iso
from app.models import SavedSearch

logger = logging.getLogger(__name__)


class SavedSearchCRUD:
    """Toutes les opérations filtrent sur buyer_id (propriété)"""

    def __init__(self, db: Client):
        self.db = db
        self.table = "saved_searches"

    def list(self, buyer_id: str) -> List[SavedSearch]:
        result = self.db.table(self.table)\
            .select("*")\
            .eq("buyer_id", buyer_id)\
            .order("created_at", desc=True)\
            .execute()
        return [SavedSearch(**row) for row in result.data or []]

    def create(self, buyer_id: str, data: Dict[str, Any]) -> SavedSearch:
        result = self.db.table(self.table)\
            .insert({"buyer_id": buyer_id, **data})\
            .execute()
        if not result.data:
            raise Exception("Aucune donnée retournée après insertion")
        logger.info(f"✓ Recherche sauvegardée: {result.data[0]['id']}")
        return SavedSearch(**result.data[0])

    def update(self, search_id: str, buyer_id: str, data: Dict[str, Any]) -> Optional[SavedSearch]:
        payload = dict(data)
        payload["updated_at"] = utc_now_iso()
        result = self.db.table(self.table)\
            .update(payload)\
            .eq("id", search_id)\
            .eq("buyer_id", buyer_id)\
            .execute()
        if result.data:
            return SavedSearch(**result.data[0])
        return None

    def delete(self, search_id: str, buyer_id: str) -> None:
        self.db.table(self.table)\
            .delete()\
            .eq("id", search_id)\
            .eq("buyer_id", buyer_id)\
            .execute()
        logger.info(f"✓ Recherche supprimée: {search_id}")


def get_saved_search_crud(db: Client) -> SavedSearchCRUD:
    return SavedSearchCRUD(db)
