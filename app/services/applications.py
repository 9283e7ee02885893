"""
Cycle de vie des candidatures.

    submitted -> viewed -> under_review -> accepted | rejected

Le passage à "viewed" horodate viewed_at une seule fois.
"""
from typing import Optional
import logging

from supabase import Client

from app.core.clock import utc_now_iso
from app.core.config import settings
from app.core.errors import ConflictError, NotFoundError, UpstreamError, is_unique_violation
from app.core.security import ensure_owner, is_agent, is_buyer, require_role
from app.crud import get_application_crud, get_listing_crud, get_user_crud
from app.models import (
    ApplicantProfile, Application, ApplicationIntake, ApplicationStatus,
    ApplicationSubmission, CurrentUser, Listing, ListingStatus,
    UpdateApplicationStatusRequest, UserRole
)
from app.services.intake import estimate_price, normalize_submission
from app.services.transitions import APPLICATION_TRANSITIONS, ensure_transition

logger = logging.getLogger(__name__)

ALREADY_APPLIED = "You have already applied to this listing"

SYSTEM_AGENT_PROFILE = {
    "role": UserRole.AGENT.value,
    "account_status": "active",
    "first_name": "System",
    "last_name": "Agent",
    "name": "System Agent",
}


def can_submit_via_fallback(role) -> bool:
    return is_buyer(role) or is_agent(role)


class ApplicationService:
    def __init__(self, db: Client, strict_transitions: Optional[bool] = None):
        self.applications = get_application_crud(db)
        self.listings = get_listing_crud(db)
        self.users = get_user_crud(db)
        self.strict = settings.STRICT_STATUS_TRANSITIONS if strict_transitions is None else strict_transitions

    # ========================================================================
    # CRÉATION
    # ========================================================================

    def create(self, user: CurrentUser, submission: ApplicationSubmission) -> Application:
        """
        Candidature d'un acheteur sur une annonce approuvée.

        Sans listing_id, une annonce brouillon est provisionnée pour un agent
        (l'appelant s'il est agent, sinon un agent existant, sinon l'agent
        système) : rattrapage des formulaires Framer incomplets.
        """
        intake = normalize_submission(submission)

        if intake.listing_id is None:
            require_role(user, can_submit_via_fallback, "Only buyers can submit applications")
            listing = self._provision_listing(user, intake)
            applicable = {ListingStatus.approved, ListingStatus.draft}
        else:
            require_role(user, is_buyer, "Only buyers can submit applications")
            listing = self.listings.get_by_id(intake.listing_id)
            if listing is None:
                raise NotFoundError("Listing not found")
            applicable = {ListingStatus.approved}

        if listing.status not in applicable:
            raise ConflictError("Listing is not available for applications")

        if self.applications.find_for_buyer(listing.id, user.id) is not None:
            raise ConflictError(ALREADY_APPLIED)

        self._merge_profile(user, intake.profile)

        row = {
            "listing_id": listing.id,
            "buyer_id": user.id,
            "agent_id": listing.agent_id,
            "status": ApplicationStatus.submitted.value,
            **intake.to_row(),
        }
        try:
            return self.applications.create(row)
        except Exception as e:
            # deux requêtes concurrentes : la contrainte unique tranche
            if is_unique_violation(e):
                raise ConflictError(ALREADY_APPLIED)
            logger.error(f"✗ Erreur création candidature: {e}")
            raise UpstreamError("Failed to create application", details=str(e))

    def _merge_profile(self, user: CurrentUser, profile: ApplicantProfile) -> None:
        """Fusion best-effort des champs d'identité dans le profil"""
        if profile.is_empty():
            return

        data = profile.model_dump(exclude_none=True)
        if profile.first_name or profile.last_name:
            first = profile.first_name or user.first_name or ""
            last = profile.last_name or user.last_name or ""
            full_name = f"{first} {last}".strip()
            if full_name:
                data["name"] = full_name

        try:
            self.users.update(user.id, data)
        except Exception as e:
            logger.warning(f"Profil {user.id} non mis à jour, candidature poursuivie: {e}")

    def _resolve_fallback_agent(self, user: CurrentUser) -> str:
        if user.role == UserRole.AGENT:
            return user.id

        agent = self.users.find_any_agent()
        if agent is not None:
            return agent.id

        system_agent = self.users.get_or_create_by_email(
            settings.SYSTEM_AGENT_EMAIL, SYSTEM_AGENT_PROFILE
        )
        logger.info(f"Agent système utilisé: {system_agent.id}")
        return system_agent.id

    def _provision_listing(self, user: CurrentUser, intake: ApplicationIntake) -> Listing:
        agent_id = self._resolve_fallback_agent(user)
        label = intake.property_type or "Property"
        location = intake.profile.parish or intake.profile.country_of_residence or "Not specified"

        try:
            listing = self.listings.create({
                "agent_id": agent_id,
                "title": f"{label} application",
                "description": "Created automatically from an application submitted without a listing",
                "price": estimate_price(intake.purchase_budget_range, intake.budget_range),
                "location": location,
                "property_type": intake.property_type,
                "listing_type": intake.application_type,
                "status": ListingStatus.draft.value,
                "views": 0,
                "images": [],
                "documents": [],
                "interior_details": [],
            })
        except Exception as e:
            raise UpstreamError("Failed to create listing for application", details=str(e))

        logger.info(f"Annonce brouillon {listing.id} créée pour une candidature sans listing_id")
        return listing

    # ========================================================================
    # STATUT
    # ========================================================================

    def update_status(self, user: CurrentUser, request: UpdateApplicationStatusRequest) -> Application:
        """Réservé à l'agent propriétaire de l'annonce ou à un admin"""
        require_role(user, is_agent, "Only agents can update application status")

        application = self.applications.get_by_id(request.application_id)
        if application is None:
            raise NotFoundError("Application not found")

        listing = self.listings.get_by_id(application.listing_id)
        owner_id = listing.agent_id if listing is not None else application.agent_id
        ensure_owner(owner_id, user, "You do not have permission to update this application")

        ensure_transition(APPLICATION_TRANSITIONS, application.status, request.status, self.strict)

        changes = {"status": request.status.value}
        if request.status == ApplicationStatus.viewed and application.viewed_at is None:
            changes["viewed_at"] = utc_now_iso()

        try:
            updated = self.applications.update(application.id, changes)
        except Exception as e:
            raise UpstreamError("Failed to update application status", details=str(e))
        if updated is None:
            raise NotFoundError("Application not found")
        return updated
