"""
Suivi des vues d'annonces par les acheteurs.

Une ligne par couple (buyer, listing), viewed_at rafraîchi à chaque vue ;
le compteur de l'annonce compte les visiteurs uniques.
"""
from typing import Any, Dict, List, Optional
import logging

from supabase import Client

from app.core.config import settings
from app.core.errors import NotFoundError, UpstreamError
from app.core.security import is_buyer, require_role
from app.crud import get_listing_crud, get_property_view_crud
from app.models import CurrentUser, Listing, ViewResult

logger = logging.getLogger(__name__)

BUYERS_ONLY = "Access denied. Buyers only."


def flatten_viewed_listing(listing: Listing, viewed_at) -> Dict[str, Any]:
    """Annonce + viewed_at, avec les alias attendus par le composant Framer"""
    item = listing.model_dump(mode="json")
    images = listing.images or []
    primary = images[0] if images else None
    item.update({
        "listing_id": listing.id,
        "images": images,
        "interior_details": listing.interior_details or [],
        "views": listing.views or 0,
        "viewed_at": viewed_at.isoformat() if hasattr(viewed_at, "isoformat") else viewed_at,
        "property_name": listing.title,
        "image": primary,
        "primary_image": primary,
        "address": listing.location,
    })
    return item


class ViewTracker:
    def __init__(self, db: Client):
        self.views = get_property_view_crud(db)
        self.listings = get_listing_crud(db)

    def record_view(self, user: CurrentUser, listing_id: str) -> ViewResult:
        require_role(user, is_buyer, BUYERS_ONLY)

        if self.listings.get_by_id(listing_id) is None:
            raise NotFoundError("Listing not found")

        try:
            is_new_view = self.views.record(user.id, listing_id)
        except Exception as e:
            raise UpstreamError("Failed to track view", details=str(e))

        incremented = False
        if is_new_view:
            try:
                new_count = self.listings.increment_views(listing_id)
                incremented = True
                logger.info(f"✓ Vues de {listing_id}: {new_count}")
            except Exception as e:
                logger.warning(f"Compteur de vues non incrémenté pour {listing_id}: {e}")
        else:
            logger.debug(f"Vue répétée de {listing_id} par {user.id}, compteur inchangé")

        return ViewResult(is_new_view=is_new_view, view_count_incremented=incremented)

    def has_viewed(self, user: CurrentUser, listing_id: str) -> Optional[str]:
        """viewed_at de la dernière vue, None si jamais vue"""
        require_role(user, is_buyer, BUYERS_ONLY)
        view = self.views.get(user.id, listing_id)
        return view.viewed_at.isoformat() if view else None

    def recently_viewed(self, user: CurrentUser, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        require_role(user, is_buyer, BUYERS_ONLY)

        if limit is None or limit < 1:
            limit = settings.RECENTLY_VIEWED_DEFAULT_LIMIT
        limit = min(limit, settings.RECENTLY_VIEWED_MAX_LIMIT)

        try:
            views = self.views.recent(user.id, limit)
            listings = self.listings.get_many([v.listing_id for v in views])
        except Exception as e:
            raise UpstreamError("Failed to fetch recently viewed properties", details=str(e))

        # les vues dont l'annonce a disparu sont ignorées
        return [
            flatten_viewed_listing(listings[v.listing_id], v.viewed_at)
            for v in views
            if v.listing_id in listings
        ]
