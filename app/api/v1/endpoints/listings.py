"""
Routes API pour les annonces : cycle de vie, consultation publique, vues
"""
from fastapi import APIRouter, Depends, Query, status
from typing import Optional
from supabase import Client
import logging

from app.api.deps import get_current_user
from app.core.errors import MarketplaceError, UpstreamError
from app.db import get_supabase
from app.models import (
    ApproveListingRequest, BrowseFilters, CurrentUser, ListingCreate, ListingPage,
    ListingUpdate, RecentlyViewedRequest, RejectListingRequest, TrackViewRequest,
    ViewResult
)
from app.services.listings import ListingService
from app.services.views import ViewTracker

router = APIRouter()
logger = logging.getLogger(__name__)


# ==================== CYCLE DE VIE ====================

@router.post("/create", status_code=status.HTTP_201_CREATED)
def create_listing(
    listing_data: ListingCreate,
    user: CurrentUser = Depends(get_current_user),
    db: Client = Depends(get_supabase)
):
    """Créer une annonce (agent ou admin), statut draft ou pending_review"""
    try:
        listing = ListingService(db).create(user, listing_data)
        return {"listing": listing}
    except MarketplaceError:
        raise
    except Exception as e:
        logger.error(f"Erreur lors de la création de l'annonce: {e}")
        raise UpstreamError("Failed to create listing", details=str(e))


@router.put("/update")
def update_listing(
    listing_data: ListingUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: Client = Depends(get_supabase)
):
    """Mise à jour partielle par l'agent propriétaire ou un admin"""
    try:
        listing = ListingService(db).update(user, listing_data)
        logger.info(f"Annonce {listing.id} mise à jour avec succès")
        return {"listing": listing}
    except MarketplaceError:
        raise
    except Exception as e:
        logger.error(f"Erreur lors de la mise à jour de l'annonce {listing_data.listing_id}: {e}")
        raise UpstreamError("Failed to update listing", details=str(e))


@router.post("/approve")
def approve_listing(
    request: ApproveListingRequest,
    user: CurrentUser = Depends(get_current_user),
    db: Client = Depends(get_supabase)
):
    listing = ListingService(db).approve(user, request.listing_id)
    return {"listing": listing}


@router.post("/reject")
def reject_listing(
    request: RejectListingRequest,
    user: CurrentUser = Depends(get_current_user),
    db: Client = Depends(get_supabase)
):
    listing = ListingService(db).reject(user, request.listing_id, request.rejection_reason)
    return {"listing": listing, "message": "Listing rejected successfully"}


@router.get("/browse", response_model=ListingPage)
def browse_listings(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    location: Optional[str] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    db: Client = Depends(get_supabase)
):
    """Annonces approuvées, publiques, plus récemment publiées en premier"""
    filters = BrowseFilters(
        page=page, limit=limit, location=location,
        min_price=min_price, max_price=max_price
    )
    return ListingService(db).browse(filters)


# ==================== VUES ====================

@router.post("/track-view", response_model=ViewResult)
def track_view(
    request: TrackViewRequest,
    user: CurrentUser = Depends(get_current_user),
    db: Client = Depends(get_supabase)
):
    """Enregistre la vue ; le compteur n'augmente qu'à la première vue"""
    return ViewTracker(db).record_view(user, request.listing_id)


@router.get("/track-view")
def has_viewed(
    listing_id: str = Query(..., min_length=1),
    user: CurrentUser = Depends(get_current_user),
    db: Client = Depends(get_supabase)
):
    viewed_at = ViewTracker(db).has_viewed(user, listing_id)
    return {
        "listing_id": listing_id,
        "has_viewed": viewed_at is not None,
        "viewed_at": viewed_at,
    }


@router.get("/recently-viewed")
def recently_viewed(
    limit: Optional[int] = None,
    user: CurrentUser = Depends(get_current_user),
    db: Client = Depends(get_supabase)
):
    """Annonces vues par l'acheteur, plus récentes en premier"""
    return {"properties": ViewTracker(db).recently_viewed(user, limit)}


@router.post("/recently-viewed")
def recently_viewed_post(
    request: Optional[RecentlyViewedRequest] = None,
    user: CurrentUser = Depends(get_current_user),
    db: Client = Depends(get_supabase)
):
    """Même réponse que le GET, pour les composants Framer qui ne font que du POST"""
    limit = request.limit if request is not None else None
    return {"properties": ViewTracker(db).recently_viewed(user, limit)}
