# app/models/subscription.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime
from enum import Enum


class SubscriptionStatus(str, Enum):
    active = "active"
    canceled = "canceled"
    past_due = "past_due"
    incomplete = "incomplete"


class PlanType(str, Enum):
    agent_monthly = "agent_monthly"
    agent_yearly = "agent_yearly"
    buyer_monthly = "buyer_monthly"
    buyer_yearly = "buyer_yearly"


class PlanRole(str, Enum):
    buyer = "buyer"
    agent = "agent"


class CheckoutRequest(BaseModel):
    plan_type: PlanType
    user_role: PlanRole


class CheckoutResponse(BaseModel):
    checkout_url: Optional[str]
    session_id: str


class PaymentSuccessRequest(BaseModel):
    session_id: str = Field(..., min_length=1)


class Subscription(BaseModel):
    model_config = ConfigDict(from_attributes=True, extra="allow")

    id: str
    user_id: str
    status: SubscriptionStatus
    stripe_subscription_id: Optional[str] = None
    stripe_customer_id: Optional[str] = None
    plan_type: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
