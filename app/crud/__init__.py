# app/crud/__init__.py
"""
Couche CRUD pour l'API Marketplace

Modules CRUD:
- User: profils et rôles
- Listing: annonces
- Application: candidatures
- PropertyView: vues d'annonces
- SavedSearch: recherches sauvegardées
- Message: messagerie acheteur / agent
- Subscription: abonnements Stripe
"""

from .user import UserCRUD, get_user_crud
from .listing import ListingCRUD, get_listing_crud
from .application import ApplicationCRUD, get_application_crud
from .property_view import PropertyViewCRUD, get_property_view_crud
from .saved_search import SavedSearchCRUD, get_saved_search_crud
from .message import MessageCRUD, get_message_crud
from .subscription import SubscriptionCRUD, get_subscription_crud

__all__ = [
    "UserCRUD",
    "get_user_crud",
    "ListingCRUD",
    "get_listing_crud",
    "ApplicationCRUD",
    "get_application_crud",
    "PropertyViewCRUD",
    "get_property_view_crud",
    "SavedSearchCRUD",
    "get_saved_search_crud",
    "MessageCRUD",
    "get_message_crud",
    "SubscriptionCRUD",
    "get_subscription_crud",
]
