# app/models/__init__.py
"""
Modèles Pydantic pour l'API Marketplace

Modules implémentés:
- User : comptes, rôles et sessions
- Listing : annonces et leur cycle de vie
- Application : candidatures des acheteurs
- Activity : vues, recherches sauvegardées, messages
- Subscription : abonnements Stripe
- Analytics : compteurs des tableaux de bord
"""

# ====================================
# USER MODELS
# ====================================
from .user import (
    UserRole,
    AccountStatus,
    SignupRole,
    ProfileFields,
    SignUpRequest,
    SignInRequest,
    RefreshRequest,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    UpdatePasswordRequest,
    ConfirmEmailRequest,
    ProfileUpdate,
    EmailUpdate,
    Session,
    CurrentUser,
    User
)

# ====================================
# LISTING MODELS
# ====================================
from .listing import (
    ListingStatus,
    InitialListingStatus,
    ListingAttributes,
    ListingCreate,
    ListingUpdate,
    ApproveListingRequest,
    RejectListingRequest,
    Listing,
    BrowseFilters,
    ListingPage
)

# ====================================
# APPLICATION MODELS
# ====================================
from .application import (
    ApplicationStatus,
    ApplicationSubmission,
    ApplicantProfile,
    ApplicationIntake,
    UpdateApplicationStatusRequest,
    Application
)

# ====================================
# ACTIVITY MODELS
# ====================================
from .activity import (
    TrackViewRequest,
    ViewResult,
    RecentlyViewedRequest,
    PropertyView,
    SavedSearchCreate,
    SavedSearchUpdate,
    SavedSearch,
    SenderRole,
    MessageCreate,
    Message
)

# ====================================
# SUBSCRIPTION / ANALYTICS MODELS
# ====================================
from .subscription import (
    SubscriptionStatus,
    PlanType,
    PlanRole,
    CheckoutRequest,
    CheckoutResponse,
    PaymentSuccessRequest,
    Subscription
)
from .analytics import AgentAnalytics, BuyerAnalytics

# ====================================
# EXPORTS
# ====================================
__all__ = [
    # User
    "UserRole",
    "AccountStatus",
    "SignupRole",
    "ProfileFields",
    "SignUpRequest",
    "SignInRequest",
    "RefreshRequest",
    "ForgotPasswordRequest",
    "ResetPasswordRequest",
    "UpdatePasswordRequest",
    "ConfirmEmailRequest",
    "ProfileUpdate",
    "EmailUpdate",
    "Session",
    "CurrentUser",
    "User",

    # Listing
    "ListingStatus",
    "InitialListingStatus",
    "ListingAttributes",
    "ListingCreate",
    "ListingUpdate",
    "ApproveListingRequest",
    "RejectListingRequest",
    "Listing",
    "BrowseFilters",
    "ListingPage",

    # Application
    "ApplicationStatus",
    "ApplicationSubmission",
    "ApplicantProfile",
    "ApplicationIntake",
    "UpdateApplicationStatusRequest",
    "Application",

    # Activity
    "TrackViewRequest",
    "ViewResult",
    "RecentlyViewedRequest",
    "PropertyView",
    "SavedSearchCreate",
    "SavedSearchUpdate",
    "SavedSearch",
    "SenderRole",
    "MessageCreate",
    "Message",

    # Subscription / Analytics
    "SubscriptionStatus",
    "PlanType",
    "PlanRole",
    "CheckoutRequest",
    "CheckoutResponse",
    "PaymentSuccessRequest",
    "Subscription",
    "AgentAnalytics",
    "BuyerAnalytics",
]
