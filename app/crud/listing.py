"""
Opérations CRUD pour les annonces (listings)
"""
from typing import Any, Dict, List, Optional, Tuple
from supabase import Client
from app.core.clock import utc_now_iso
from app.models import Listing, ListingStatus
import logging

logger = logging.getLogger(__name__)


class ListingCRUD:
    def __init__(self, db: Client):
        self.db = db
        self.table = "listings"

    def create(self, data: Dict[str, Any]) -> Listing:
        """Créer une nouvelle annonce"""
        try:
            result = self.db.table(self.table).insert(data).execute()

            if result.data:
                logger.info(f"✓ Annonce créée: {result.data[0]['id']}")
                return Listing(**result.data[0])
            else:
                raise Exception("Erreur lors de la création")

        except Exception as e:
            logger.error(f"✗ Erreur création annonce: {e}")
            raise

    def get_by_id(self, listing_id: str) -> Optional[Listing]:
        """Récupérer une annonce par ID"""
        result = self.db.table(self.table)\
            .select("*")\
            .eq("id", listing_id)\
            .limit(1)\
            .execute()

        if result.data:
            return Listing(**result.data[0])
        return None

    def get_many(self, listing_ids: List[str]) -> Dict[str, Listing]:
        """Annonces indexées par ID"""
        if not listing_ids:
            return {}
        result = self.db.table(self.table)\
            .select("*")\
            .in_("id", listing_ids)\
            .execute()
        return {row["id"]: Listing(**row) for row in result.data or []}

    def list_by_agent(self, agent_id: str) -> List[Listing]:
        """Annonces d'un agent, plus récentes en premier"""
        result = self.db.table(self.table)\
            .select("*")\
            .eq("agent_id", agent_id)\
            .order("created_at", desc=True)\
            .execute()
        return [Listing(**row) for row in result.data or []]

    def browse(
        self,
        page: int = 1,
        limit: int = 20,
        location: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None
    ) -> Tuple[List[Listing], int]:
        """Annonces publiées avec filtres, plus récemment publiées en premier"""
        query = self.db.table(self.table)\
            .select("*", count="exact")\
            .eq("status", ListingStatus.approved.value)

        if location:
            query = query.ilike("location", f"%{location}%")
        if min_price is not None:
            query = query.gte("price", min_price)
        if max_price is not None:
            query = query.lte("price", max_price)

        start = (page - 1) * limit
        result = query\
            .order("published_at", desc=True)\
            .range(start, start + limit - 1)\
            .execute()

        listings = [Listing(**item) for item in result.data or []]
        return listings, result.count or 0

    def update(self, listing_id: str, data: Dict[str, Any]) -> Optional[Listing]:
        """Mettre à jour une annonce"""
        try:
            payload = dict(data)
            payload["updated_at"] = utc_now_iso()

            result = self.db.table(self.table)\
                .update(payload)\
                .eq("id", listing_id)\
                .execute()

            if result.data:
                logger.info(f"✓ Annonce mise à jour: {listing_id}")
                return Listing(**result.data[0])
            return None

        except Exception as e:
            logger.error(f"✗ Erreur mise à jour annonce {listing_id}: {e}")
            raise

    def increment_views(self, listing_id: str) -> Optional[int]:
        """
        Incrément atomique du compteur de vues.

        La fonction SQL increment_listing_views fait l'UPDATE ... SET views = views + 1
        côté base et renvoie la nouvelle valeur.
        """
        result = self.db.rpc("increment_listing_views", {"listing_id": listing_id}).execute()
        return result.data


def get_listing_crud(db: Client) -> ListingCRUD:
    return ListingCRUD(db)
