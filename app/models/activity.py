# app/models/activity.py
"""
Enregistrements annexes : vues, recherches sauvegardées, messages
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, Optional
from datetime import datetime
from enum import Enum


# ==========================================
# VUES
# ==========================================

class TrackViewRequest(BaseModel):
    listing_id: str = Field(..., min_length=1)


class ViewResult(BaseModel):
    message: str = "View tracked successfully"
    is_new_view: bool
    view_count_incremented: bool


class PropertyView(BaseModel):
    model_config = ConfigDict(extra="allow")

    buyer_id: str
    listing_id: str
    viewed_at: datetime


# ==========================================
# RECHERCHES SAUVEGARDÉES
# ==========================================

class SavedSearchCreate(BaseModel):
    name: str = Field(..., min_length=1)
    search_criteria: Dict[str, Any]
    alerts_enabled: bool = True


class SavedSearchUpdate(BaseModel):
    id: str = Field(..., min_length=1)
    name: Optional[str] = Field(None, min_length=1)
    search_criteria: Optional[Dict[str, Any]] = None
    alerts_enabled: Optional[bool] = None


class SavedSearch(BaseModel):
    model_config = ConfigDict(from_attributes=True, extra="allow")

    id: str
    buyer_id: str
    name: str
    search_criteria: Dict[str, Any]
    alerts_enabled: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ==========================================
# MESSAGES
# ==========================================

class SenderRole(str, Enum):
    buyer = "buyer"
    agent = "agent"


class MessageCreate(BaseModel):
    message: str = Field(..., min_length=1)
    agent_id: Optional[str] = None
    buyer_id: Optional[str] = None
    listing_id: Optional[str] = None
    application_id: Optional[str] = None


class Message(BaseModel):
    model_config = ConfigDict(from_attributes=True, extra="allow")

    id: str
    buyer_id: str
    agent_id: str
    listing_id: Optional[str] = None
    application_id: Optional[str] = None
    message: str
    sender_role: SenderRole
    read: bool = False
    created_at: Optional[datetime] = None


class RecentlyViewedRequest(BaseModel):
    limit: Optional[int] = None
