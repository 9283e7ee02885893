"""Framer Marketplace - Application principale"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import settings
from app.core.errors import register_exception_handlers
from app.api.v1.api import api_router
from app.db import get_supabase
import logging

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

ENDPOINTS = {
    "auth": [
        "POST /api/auth/signup",
        "POST /api/auth/signin",
        "POST /api/auth/refresh",
        "POST /api/auth/forgot-password",
        "POST /api/auth/reset-password",
        "POST /api/auth/update-password",
        "POST /api/auth/confirm-email",
    ],
    "user": [
        "GET /api/user/profile",
        "PUT /api/user/profile",
        "PUT /api/user/email",
        "GET /api/user/account-status",
    ],
    "listings": [
        "POST /api/listings/create",
        "PUT /api/listings/update",
        "POST /api/listings/approve",
        "POST /api/listings/reject",
        "GET /api/listings/browse",
        "GET /api/listings/track-view",
        "POST /api/listings/track-view",
        "GET /api/listings/recently-viewed",
        "POST /api/listings/recently-viewed",
    ],
    "applications": [
        "POST /api/applications/create",
        "POST /api/applications/update-status",
    ],
    "buyer_agent": [
        "GET/POST/PUT/DELETE /api/saved-searches",
        "GET/POST /api/messages",
        "GET /api/dashboard/agent",
        "GET /api/dashboard/buyer",
        "GET /api/analytics",
    ],
    "integrations": [
        "POST /api/stripe/checkout",
        "POST /api/stripe/payment-success",
        "POST /api/storage/upload",
        "POST /api/whatsapp/generate-link",
    ],
}

app = FastAPI(
    title=settings.APP_NAME,
    description="API Marketplace immobilier pour le frontend Framer",
    version=settings.VERSION,
    debug=settings.DEBUG
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.on_event("startup")
async def startup_event():
    try:
        get_supabase()
        logger.info("✓ Supabase connecté")
    except Exception as e:
        logger.error(f"✗ Erreur Supabase: {e}")


@app.get("/api")
async def root():
    return {
        "app": settings.APP_NAME,
        "version": settings.VERSION,
        "status": "running",
        "endpoints": ENDPOINTS
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


# Routes API
app.include_router(api_router, prefix="/api")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
