"""Endpoints API"""
from app.api.v1.endpoints import auth
from app.api.v1.endpoints import user
from app.api.v1.endpoints import listings
from app.api.v1.endpoints import applications
from app.api.v1.endpoints import saved_searches
from app.api.v1.endpoints import messages
from app.api.v1.endpoints import dashboard
from app.api.v1.endpoints import stripe
from app.api.v1.endpoints import storage
from app.api.v1.endpoints import whatsapp

__all__ = [
    "auth", "user", "listings", "applications", "saved_searches",
    "messages", "dashboard", "stripe", "storage", "whatsapp"
]
