"""
Cycle de vie des annonces : création, mise à jour, validation admin, consultation publique.

    draft -> pending_review -> approved | rejected
    approved -> archived
"""
from typing import Optional
import logging

from supabase import Client

from app.core.clock import utc_now_iso
from app.core.config import settings
from app.core.errors import AuthorizationError, ConflictError, NotFoundError, UpstreamError
from app.core.security import ensure_owner, is_admin, is_agent, require_role
from app.crud import get_listing_crud, get_subscription_crud
from app.models import (
    BrowseFilters, CurrentUser, Listing, ListingCreate, ListingPage,
    ListingStatus, ListingUpdate
)
from app.services.transitions import LISTING_TRANSITIONS, ensure_transition

logger = logging.getLogger(__name__)


class ListingService:
    def __init__(self, db: Client, strict_transitions: Optional[bool] = None):
        self.listings = get_listing_crud(db)
        self.subscriptions = get_subscription_crud(db)
        self.strict = settings.STRICT_STATUS_TRANSITIONS if strict_transitions is None else strict_transitions

    def get(self, listing_id: str) -> Listing:
        listing = self.listings.get_by_id(listing_id)
        if listing is None:
            raise NotFoundError("Listing not found")
        return listing

    def create(self, user: CurrentUser, data: ListingCreate) -> Listing:
        """Nouvelle annonce appartenant à l'appelant, compteur de vues à 0"""
        require_role(user, is_agent, "Only agents can create listings")

        row = data.model_dump(mode="json")
        row.update({"agent_id": user.id, "views": 0})
        try:
            return self.listings.create(row)
        except Exception as e:
            raise UpstreamError("Failed to create listing", details=str(e))

    def update(self, user: CurrentUser, data: ListingUpdate) -> Listing:
        """Seules les clés fournies sont écrites"""
        require_role(user, is_agent, "Only agents can update listings")

        existing = self.get(data.listing_id)
        ensure_owner(existing.agent_id, user, "You do not have permission to update this listing")

        changes = data.changes()
        if data.status is not None:
            ensure_transition(LISTING_TRANSITIONS, existing.status, data.status, self.strict)

        try:
            updated = self.listings.update(data.listing_id, changes)
        except Exception as e:
            raise UpstreamError("Failed to update listing", details=str(e))
        if updated is None:
            raise NotFoundError("Listing not found")
        return updated

    def approve(self, user: CurrentUser, listing_id: str) -> Listing:
        """
        Publication par un admin.

        L'agent propriétaire doit avoir un abonnement actif au moment de
        l'approbation (pas au moment de la création).
        """
        require_role(user, is_admin, "Only admins can approve listings")

        listing = self.get(listing_id)
        self._ensure_pending(listing)

        if self.subscriptions.get_active(listing.agent_id) is None:
            logger.info(f"Approbation refusée pour {listing_id}: agent {listing.agent_id} non abonné")
            raise AuthorizationError("Agent not subscribed")

        try:
            approved = self.listings.update(listing_id, {
                "status": ListingStatus.approved.value,
                "published_at": utc_now_iso(),
            })
        except Exception as e:
            raise UpstreamError("Failed to approve listing", details=str(e))
        if approved is None:
            raise NotFoundError("Listing not found")
        logger.info(f"✓ Annonce publiée: {listing_id}")
        return approved

    def reject(self, user: CurrentUser, listing_id: str, reason: Optional[str] = None) -> Listing:
        require_role(user, is_admin, "Only admins can reject listings")

        listing = self.get(listing_id)
        self._ensure_pending(listing)

        changes = {"status": ListingStatus.rejected.value}
        if reason:
            changes["rejection_reason"] = reason
        try:
            rejected = self.listings.update(listing_id, changes)
        except Exception as e:
            raise UpstreamError("Failed to reject listing", details=str(e))
        if rejected is None:
            raise NotFoundError("Listing not found")
        return rejected

    def browse(self, filters: BrowseFilters) -> ListingPage:
        """Consultation publique : uniquement les annonces approuvées"""
        try:
            listings, total = self.listings.browse(
                page=filters.page, limit=filters.limit,
                location=filters.location,
                min_price=filters.min_price, max_price=filters.max_price
            )
        except Exception as e:
            raise UpstreamError("Failed to fetch listings", details=str(e))
        return ListingPage(listings=listings, total=total, page=filters.page, limit=filters.limit)

    @staticmethod
    def _ensure_pending(listing: Listing) -> None:
        if listing.status != ListingStatus.pending_review:
            raise ConflictError(
                f"Listing is not pending review. Current status: {listing.status.value}"
            )
