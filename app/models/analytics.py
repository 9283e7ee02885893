# app/models/analytics.py
"""Compteurs simples, pas de graphiques"""
from pydantic import BaseModel


class AgentAnalytics(BaseModel):
    total_listings: int = 0
    pending_listings: int = 0
    approved_listings: int = 0
    total_applications: int = 0
    pending_applications: int = 0
    accepted_applications: int = 0


class BuyerAnalytics(BaseModel):
    total_applications: int = 0
    submitted_applications: int = 0
    accepted_applications: int = 0
    rejected_applications: int = 0
