"""
Services métier du Marketplace

Chaque service reçoit le client Supabase et applique les règles
(rôles, propriété, transitions) avant d'appeler la couche CRUD.
"""

from .listings import ListingService
from .applications import ApplicationService
from .views import ViewTracker
from .identity import Identity, IdentityProvider
from .accounts import AccountService
from .payments import PaymentService, StripeClient
from .storage import StorageService
from .saved_searches import SavedSearchService
from .messages import MessageService
from .analytics import DashboardService

__all__ = [
    "ListingService",
    "ApplicationService",
    "ViewTracker",
    "Identity",
    "IdentityProvider",
    "AccountService",
    "PaymentService",
    "StripeClient",
    "StorageService",
    "SavedSearchService",
    "MessageService",
    "DashboardService",
]
