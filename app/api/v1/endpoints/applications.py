"""
Routes API pour les candidatures
"""
from fastapi import APIRouter, Depends, status
from supabase import Client
import logging

from app.api.deps import get_current_user
from app.core.errors import MarketplaceError, UpstreamError
from app.db import get_supabase
from app.models import ApplicationSubmission, CurrentUser, UpdateApplicationStatusRequest
from app.services.applications import ApplicationService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/create", status_code=status.HTTP_201_CREATED)
def create_application(
    submission: ApplicationSubmission,
    user: CurrentUser = Depends(get_current_user),
    db: Client = Depends(get_supabase)
):
    """
    Candidature sur une annonce approuvée.

    Accepte les noms de champs du formulaire Framer comme les noms directs.
    """
    try:
        application = ApplicationService(db).create(user, submission)
        return {"application": application}
    except MarketplaceError:
        raise
    except Exception as e:
        logger.error(f"Erreur lors de la création de la candidature: {e}")
        raise UpstreamError("Failed to create application", details=str(e))


@router.post("/update-status")
def update_application_status(
    request: UpdateApplicationStatusRequest,
    user: CurrentUser = Depends(get_current_user),
    db: Client = Depends(get_supabase)
):
    """Changement de statut par l'agent propriétaire de l'annonce ou un admin"""
    try:
        application = ApplicationService(db).update_status(user, request)
        return {"application": application}
    except MarketplaceError:
        raise
    except Exception as e:
        logger.error(f"Erreur mise à jour candidature {request.application_id}: {e}")
        raise UpstreamError("Failed to update application status", details=str(e))
