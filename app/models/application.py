# app/models/application.py
"""
Modèles Pydantic pour les candidatures (applications)
Une candidature représente la demande d'un acheteur sur une annonce
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Union
from datetime import datetime
from enum import Enum


class ApplicationStatus(str, Enum):
    """Statut de la candidature dans le pipeline de l'agent"""
    submitted = "submitted"          # Envoyée par l'acheteur
    viewed = "viewed"                # Ouverte par l'agent
    under_review = "under_review"    # En cours d'étude
    accepted = "accepted"            # Acceptée
    rejected = "rejected"            # Refusée


class ApplicationSubmission(BaseModel):
    """
    Corps brut envoyé par le formulaire Framer.

    Le même champ logique peut arriver sous plusieurs clés ; la résolution
    se fait dans app.services.intake.normalize_submission.
    """
    model_config = ConfigDict(extra="ignore")

    listing_id: Optional[str] = None
    message: Optional[str] = None
    application_type: Optional[str] = None      # "Buy" / "Rent"
    property_type: Optional[str] = None

    # Identité (fusionnée dans le profil)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    country: Optional[str] = None
    country_of_residence: Optional[str] = None
    parish: Optional[str] = None

    # Noms du formulaire
    employment_status: Optional[str] = None
    monthly_income: Optional[str] = None
    budget_range: Optional[str] = None
    purchase_budget: Optional[str] = None
    intended_income: Optional[str] = None
    government_approved: Optional[str] = None
    job_letter: Optional[str] = None
    checkbox1: Optional[Union[bool, str]] = None
    checkbox2: Optional[Union[bool, str]] = None
    checkbox3: Optional[Union[bool, str]] = None

    # Noms directs (compatibilité)
    documents: Optional[List[str]] = None
    employment_status_direct: Optional[str] = None
    monthly_income_range: Optional[str] = None
    purchase_budget_range: Optional[str] = None
    intended_move_in_timeframe: Optional[str] = None
    declaration_application_not_approval: Optional[Union[bool, str]] = None
    declaration_prepared_to_provide_docs: Optional[Union[bool, str]] = None
    declaration_actively_looking: Optional[Union[bool, str]] = None


class ApplicantProfile(BaseModel):
    """Champs d'identité à fusionner dans le profil acheteur"""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    country_of_residence: Optional[str] = None
    parish: Optional[str] = None

    def is_empty(self) -> bool:
        return not any(self.model_dump().values())


class ApplicationIntake(BaseModel):
    """Requête canonique, après résolution des alias"""
    listing_id: Optional[str] = None
    message: Optional[str] = None
    application_type: Optional[str] = None
    property_type: Optional[str] = None
    documents: List[str] = Field(default_factory=list)
    employment_status: Optional[str] = None
    monthly_income_range: Optional[str] = None
    budget_range: Optional[str] = None
    purchase_budget_range: Optional[str] = None
    intended_move_in_timeframe: Optional[str] = None
    declaration_application_not_approval: bool = False
    declaration_prepared_to_provide_docs: bool = False
    declaration_actively_looking: bool = False
    profile: ApplicantProfile = Field(default_factory=ApplicantProfile)

    def to_row(self) -> dict:
        """Colonnes de la table applications issues du formulaire"""
        return {
            "message": self.message,
            "documents": self.documents,
            "employment_status": self.employment_status,
            "monthly_income_range": self.monthly_income_range,
            "budget_range": self.budget_range,
            "purchase_budget_range": self.purchase_budget_range,
            "intended_move_in_timeframe": self.intended_move_in_timeframe,
            "declaration_application_not_approval": self.declaration_application_not_approval,
            "declaration_prepared_to_provide_docs": self.declaration_prepared_to_provide_docs,
            "declaration_actively_looking": self.declaration_actively_looking,
        }


class UpdateApplicationStatusRequest(BaseModel):
    application_id: str = Field(..., min_length=1)
    status: ApplicationStatus


class Application(BaseModel):
    """Modèle complet avec métadonnées"""
    model_config = ConfigDict(from_attributes=True, extra="allow")

    id: str
    listing_id: str
    buyer_id: str
    agent_id: str
    status: ApplicationStatus
    message: Optional[str] = None
    documents: Optional[List[str]] = None
    employment_status: Optional[str] = None
    monthly_income_range: Optional[str] = None
    budget_range: Optional[str] = None
    purchase_budget_range: Optional[str] = None
    intended_move_in_timeframe: Optional[str] = None
    declaration_application_not_approval: Optional[bool] = False
    declaration_prepared_to_provide_docs: Optional[bool] = False
    declaration_actively_looking: Optional[bool] = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    viewed_at: Optional[datetime] = None
