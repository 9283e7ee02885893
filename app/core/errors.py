"""Exceptions métier et conversion en réponses JSON."""

from typing import Any, Optional
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from postgrest.exceptions import APIError
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"


class MarketplaceError(Exception):
    """Erreur de base du backend."""

    status_code = 500

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(MarketplaceError):
    """Champ manquant ou invalide."""
    status_code = 400


class AuthenticationError(MarketplaceError):
    """Credential absent, invalide ou expiré."""
    status_code = 401


class AuthorizationError(MarketplaceError):
    """Mauvais rôle ou pas propriétaire de la ressource."""
    status_code = 403


class NotFoundError(MarketplaceError):
    status_code = 404


class ConflictError(MarketplaceError):
    """État incompatible (doublon, mauvais statut source)."""
    status_code = 400


class UpstreamError(MarketplaceError):
    """Échec Supabase / Stripe."""
    status_code = 500


def is_unique_violation(error: Exception) -> bool:
    """Vrai si l'erreur PostgREST est une violation de contrainte unique"""
    return isinstance(error, APIError) and error.code == UNIQUE_VIOLATION


def error_body(message: str, details: Optional[Any] = None) -> dict:
    body = {"error": message}
    if details is not None:
        body["details"] = details
    return body


async def marketplace_error_handler(request: Request, exc: MarketplaceError):
    if exc.status_code >= 500:
        logger.error(f"✗ {request.method} {request.url.path}: {exc.message} ({exc.details})")
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(error_body(exc.message, exc.details))
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content=jsonable_encoder(error_body("Invalid request body", exc.errors()))
    )


async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None)
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"✗ Erreur non gérée sur {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content=error_body("Internal server error"))


def register_exception_handlers(app: FastAPI) -> None:
    """Branche les handlers sur l'application FastAPI"""
    app.add_exception_handler(MarketplaceError, marketplace_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
