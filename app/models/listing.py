# app/models/listing.py

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from datetime import datetime
from enum import Enum


class ListingStatus(str, Enum):
    """
    Cycle de vie d'une annonce :
    - draft : créée par l'agent, pas encore soumise
    - pending_review : soumise, en attente de validation admin
    - approved : validée, visible par les acheteurs
    - rejected : refusée par l'admin
    - archived : retirée de la vue publique
    """
    draft = "draft"
    pending_review = "pending_review"
    approved = "approved"
    rejected = "rejected"
    archived = "archived"


class InitialListingStatus(str, Enum):
    """Statuts autorisés à la création"""
    draft = "draft"
    pending_review = "pending_review"


class ListingAttributes(BaseModel):
    """Attributs du formulaire Framer, tous optionnels"""
    property_type: Optional[str] = None        # Buy / Rent / Development
    property_category: Optional[str] = None    # Apartment, House, ...
    listing_type: Optional[str] = None
    street_address: Optional[str] = None
    parish: Optional[str] = None
    bedrooms: Optional[str] = None             # "1" .. "4+"
    bathrooms: Optional[str] = None
    property_size: Optional[str] = None        # "1,990 Sqft"
    availability_status: Optional[str] = None
    viewing_instructions: Optional[str] = None


class ListingCreate(ListingAttributes):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    price: float = Field(..., gt=0)
    location: str = Field(..., min_length=1)
    images: List[str] = Field(default_factory=list)
    documents: List[str] = Field(default_factory=list)
    interior_details: List[str] = Field(default_factory=list)
    status: InitialListingStatus = InitialListingStatus.draft

    @field_validator("title", "description", "location")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class ListingUpdate(ListingAttributes):
    """Tous les champs sont optionnels pour la mise à jour"""
    listing_id: str = Field(..., min_length=1)
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, gt=0)
    location: Optional[str] = Field(None, min_length=1)
    images: Optional[List[str]] = None
    documents: Optional[List[str]] = None
    interior_details: Optional[List[str]] = None
    status: Optional[ListingStatus] = None

    @field_validator("title", "description", "price", "location", "status", mode="before")
    @classmethod
    def not_null(cls, v):
        # omis = inchangé ; null explicite refusé
        if v is None:
            raise ValueError("must not be null")
        return v

    def changes(self) -> dict:
        """Seules les clés fournies sont écrites"""
        data = self.model_dump(exclude_unset=True, exclude={"listing_id"}, mode="json")
        return data


class ApproveListingRequest(BaseModel):
    listing_id: str = Field(..., min_length=1)


class RejectListingRequest(BaseModel):
    listing_id: str = Field(..., min_length=1)
    rejection_reason: Optional[str] = None


class Listing(ListingAttributes):
    """Modèle complet avec métadonnées"""
    model_config = ConfigDict(from_attributes=True, extra="allow")

    id: str
    agent_id: str
    title: str
    description: Optional[str] = None
    price: float
    location: Optional[str] = None
    status: ListingStatus
    images: Optional[List[str]] = None
    documents: Optional[List[str]] = None
    interior_details: Optional[List[str]] = None
    views: Optional[int] = 0
    rejection_reason: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    published_at: Optional[datetime] = None


class BrowseFilters(BaseModel):
    page: int = Field(1, ge=1)
    limit: int = Field(20, ge=1, le=100)
    location: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None


class ListingPage(BaseModel):
    listings: List[Listing]
    total: int
    page: int
    limit: int
