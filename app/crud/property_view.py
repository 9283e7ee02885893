"""
Opérations CRUD pour les vues d'annonces (property_views)
"""
from typing import List, Optional
from supabase import Client
import logging

from app.core.clock import utc_now_iso
from app.core.errors import is_unique_violation
from app.models import PropertyView

logger = logging.getLogger(__name__)


class PropertyViewCRUD:
    def __init__(self, db: Client):
        self.db = db
        self.table = "property_views"

    def record(self, buyer_id: str, listing_id: str) -> bool:
        """
        Enregistre une vue (dernière vue gagne).

        Returns:
            True si c'est la première vue de ce couple (buyer, listing)
        """
        now = utc_now_iso()
        try:
            self.db.table(self.table).insert({
                "buyer_id": buyer_id,
                "listing_id": listing_id,
                "viewed_at": now,
            }).execute()
            return True
        except Exception as e:
            # contrainte unique (buyer_id, listing_id) : vue répétée
            if not is_unique_violation(e):
                raise

        self.db.table(self.table)\
            .update({"viewed_at": now})\
            .eq("buyer_id", buyer_id)\
            .eq("listing_id", listing_id)\
            .execute()
        return False

    def get(self, buyer_id: str, listing_id: str) -> Optional[PropertyView]:
        result = self.db.table(self.table)\
            .select("*")\
            .eq("buyer_id", buyer_id)\
            .eq("listing_id", listing_id)\
            .limit(1)\
            .execute()
        if result.data:
            return PropertyView(**result.data[0])
        return None

    def recent(self, buyer_id: str, limit: int) -> List[PropertyView]:
        """Vues d'un acheteur, plus récentes en premier"""
        result = self.db.table(self.table)\
            .select("*")\
            .eq("buyer_id", buyer_id)\
            .order("viewed_at", desc=True)\
            .limit(limit)\
            .execute()
        return [PropertyView(**row) for row in result.data or []]


def get_property_view_crud(db: Client) -> PropertyViewCRUD:
    return PropertyViewCRUD(db)
