"""
Tableaux de bord agent / acheteur.

Les compteurs sont calculés sur les collections déjà chargées.
"""
from typing import Any, Dict, List, Union
import logging

from supabase import Client

from app.core.errors import UpstreamError
from app.core.security import is_agent, is_buyer, require_role
from app.crud import get_application_crud, get_listing_crud
from app.models import (
    AgentAnalytics, Application, ApplicationStatus, BuyerAnalytics, CurrentUser,
    Listing, ListingStatus
)

logger = logging.getLogger(__name__)

PENDING_APPLICATION_STATUSES = {ApplicationStatus.submitted, ApplicationStatus.under_review}


def agent_counts(listings: List[Listing], applications: List[Application]) -> AgentAnalytics:
    return AgentAnalytics(
        total_listings=len(listings),
        pending_listings=sum(1 for l in listings if l.status == ListingStatus.pending_review),
        approved_listings=sum(1 for l in listings if l.status == ListingStatus.approved),
        total_applications=len(applications),
        pending_applications=sum(1 for a in applications if a.status in PENDING_APPLICATION_STATUSES),
        accepted_applications=sum(1 for a in applications if a.status == ApplicationStatus.accepted),
    )


def buyer_counts(applications: List[Application]) -> BuyerAnalytics:
    def count(status: ApplicationStatus) -> int:
        return sum(1 for a in applications if a.status == status)

    return BuyerAnalytics(
        total_applications=len(applications),
        submitted_applications=count(ApplicationStatus.submitted),
        accepted_applications=count(ApplicationStatus.accepted),
        rejected_applications=count(ApplicationStatus.rejected),
    )


class DashboardService:
    def __init__(self, db: Client):
        self.listings = get_listing_crud(db)
        self.applications = get_application_crud(db)

    def _agent_data(self, user: CurrentUser):
        try:
            listings = self.listings.list_by_agent(user.id)
            applications = self.applications.list_for_listings([l.id for l in listings])
        except Exception as e:
            raise UpstreamError("Failed to fetch dashboard data", details=str(e))
        return listings, applications

    def _buyer_data(self, user: CurrentUser) -> List[Application]:
        try:
            return self.applications.list_for_buyer(user.id)
        except Exception as e:
            raise UpstreamError("Failed to fetch dashboard data", details=str(e))

    def agent_dashboard(self, user: CurrentUser) -> Dict[str, Any]:
        require_role(user, is_agent, "Access denied. Agents only.")
        listings, applications = self._agent_data(user)
        return {
            "listings": listings,
            "applications": applications,
            "analytics": agent_counts(listings, applications),
        }

    def buyer_dashboard(self, user: CurrentUser) -> Dict[str, Any]:
        require_role(user, is_buyer, "Access denied. Buyers only.")
        applications = self._buyer_data(user)
        return {
            "applications": applications,
            "analytics": buyer_counts(applications),
        }

    def analytics(self, user: CurrentUser) -> Union[AgentAnalytics, BuyerAnalytics]:
        """Compteurs agent pour agent/admin, compteurs acheteur sinon"""
        try:
            if is_agent(user.role):
                listings = self.listings.list_by_agent(user.id)
                applications = self.applications.list_for_agent(user.id)
                return agent_counts(listings, applications)
            return buyer_counts(self.applications.list_for_buyer(user.id))
        except Exception as e:
            raise UpstreamError("Failed to fetch analytics", details=str(e))
