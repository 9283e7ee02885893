"""Recherches sauvegardées des acheteurs"""
from typing import List
import logging

from supabase import Client

from app.core.errors import NotFoundError, UpstreamError, ValidationError
from app.core.security import is_buyer, require_role
from app.crud import get_saved_search_crud
from app.models import CurrentUser, SavedSearch, SavedSearchCreate, SavedSearchUpdate

logger = logging.getLogger(__name__)

BUYERS_ONLY = "Access denied. Buyers only."


class SavedSearchService:
    def __init__(self, db: Client):
        self.searches = get_saved_search_crud(db)

    def list(self, user: CurrentUser) -> List[SavedSearch]:
        require_role(user, is_buyer, BUYERS_ONLY)
        try:
            return self.searches.list(user.id)
        except Exception as e:
            raise UpstreamError("Failed to fetch saved searches", details=str(e))

    def create(self, user: CurrentUser, data: SavedSearchCreate) -> SavedSearch:
        require_role(user, is_buyer, BUYERS_ONLY)
        try:
            return self.searches.create(user.id, data.model_dump())
        except Exception as e:
            raise UpstreamError("Failed to create saved search", details=str(e))

    def update(self, user: CurrentUser, data: SavedSearchUpdate) -> SavedSearch:
        require_role(user, is_buyer, BUYERS_ONLY)
        changes = data.model_dump(exclude_unset=True, exclude={"id"})
        if not changes:
            raise ValidationError("No fields to update")

        try:
            updated = self.searches.update(data.id, user.id, changes)
        except Exception as e:
            raise UpstreamError("Failed to update saved search", details=str(e))
        if updated is None:
            raise NotFoundError("Saved search not found")
        return updated

    def delete(self, user: CurrentUser, search_id: str) -> None:
        require_role(user, is_buyer, BUYERS_ONLY)
        if not search_id:
            raise ValidationError("Search ID is required")
        try:
            self.searches.delete(search_id, user.id)
        except Exception as e:
            raise UpstreamError("Failed to delete saved search", details=str(e))
