"""Router API principal"""
from fastapi import APIRouter
from app.api.v1.endpoints import (
    auth, user, listings, applications, saved_searches,
    messages, dashboard, stripe, storage, whatsapp
)

# Créer le router principal
api_router = APIRouter()

# ==================== AUTH / USER ====================
api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(user.router, prefix="/user", tags=["User"])

# ==================== LISTINGS ====================
api_router.include_router(
    listings.router,
    prefix="/listings",
    tags=["Listings"]
)

# ==================== APPLICATIONS ====================
api_router.include_router(
    applications.router,
    prefix="/applications",
    tags=["Applications"]
)

# ==================== BUYER / AGENT ====================
api_router.include_router(saved_searches.router, prefix="/saved-searches", tags=["Saved searches"])
api_router.include_router(messages.router, prefix="/messages", tags=["Messages"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
api_router.include_router(dashboard.analytics_router, prefix="/analytics", tags=["Dashboard"])

# ==================== INTÉGRATIONS ====================
api_router.include_router(stripe.router, prefix="/stripe", tags=["Stripe"])
api_router.include_router(storage.router, prefix="/storage", tags=["Storage"])
api_router.include_router(whatsapp.router, prefix="/whatsapp", tags=["WhatsApp"])
