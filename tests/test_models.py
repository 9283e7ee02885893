# tests/test_models.py
"""
Tests des modèles Pydantic
Exécuter: pytest tests/test_models.py -v
"""
import pytest
from pydantic import ValidationError

from app.models import (
    ListingCreate, ListingUpdate, ListingStatus, InitialListingStatus, Listing,
    SignUpRequest, SignupRole, ProfileUpdate,
    ApplicationSubmission, UpdateApplicationStatusRequest, ApplicationStatus,
    SavedSearchCreate, CheckoutRequest, PlanType, BrowseFilters
)


def test_listing_create_valid():
    """Test création annonce valide"""
    listing = ListingCreate(
        title="Modern apartment in Kingston",
        description="Two bedrooms, gated community, 24h security",
        price=500000,
        location="New Kingston",
        bedrooms="2",
        property_size="1,990 Sqft"
    )
    assert listing.status == InitialListingStatus.draft
    assert listing.images == []
    assert listing.interior_details == []
    assert listing.price == 500000.0


@pytest.mark.parametrize("price", [0, -1000.0])
def test_listing_create_non_positive_price(price):
    """Prix nul ou négatif refusé"""
    with pytest.raises(ValidationError):
        ListingCreate(title="Test", description="Desc", price=price, location="Kingston")


def test_listing_create_blank_title():
    with pytest.raises(ValidationError):
        ListingCreate(title="   ", description="Desc", price=10, location="Kingston")


def test_listing_create_rejects_published_status():
    """Seuls draft et pending_review sont acceptés à la création"""
    with pytest.raises(ValidationError):
        ListingCreate(title="T", description="D", price=10, location="L", status="approved")

    listing = ListingCreate(title="T", description="D", price=10, location="L", status="pending_review")
    assert listing.status == InitialListingStatus.pending_review


def test_listing_update_changes_only_supplied_keys():
    update = ListingUpdate(listing_id="abc", price=320000, status="pending_review")
    assert update.changes() == {"price": 320000.0, "status": "pending_review"}


def test_listing_update_invalid_status():
    with pytest.raises(ValidationError):
        ListingUpdate(listing_id="abc", status="published")


def test_listing_accepts_extra_columns():
    listing = Listing(
        id="l1", agent_id="a1", title="T", price=1.0, status="draft",
        views=None, some_new_column="kept"
    )
    assert listing.status == ListingStatus.draft
    assert listing.model_dump()["some_new_column"] == "kept"


def test_signup_lowercases_email_and_forbids_admin():
    request = SignUpRequest(email="Jane.Doe@Example.COM", password="secret1", role="buyer")
    assert request.email == "jane.doe@example.com"
    assert request.role == SignupRole.BUYER

    with pytest.raises(ValidationError):
        SignUpRequest(email="root@example.com", password="secret1", role="admin")


def test_profile_update_is_partial():
    update = ProfileUpdate(phone="+1 876 555 0100")
    assert update.model_dump(exclude_unset=True) == {"phone": "+1 876 555 0100"}


def test_application_submission_ignores_unknown_keys():
    submission = ApplicationSubmission(listing_id="l1", checkbox1="true", framer_internal="x")
    assert submission.checkbox1 == "true"
    assert not hasattr(submission, "framer_internal")


def test_application_status_domain():
    request = UpdateApplicationStatusRequest(application_id="a1", status="under_review")
    assert request.status == ApplicationStatus.under_review

    with pytest.raises(ValidationError):
        UpdateApplicationStatusRequest(application_id="a1", status="pending")


def test_saved_search_defaults():
    search = SavedSearchCreate(name="Kingston rentals", search_criteria={"location": "Kingston"})
    assert search.alerts_enabled is True


def test_checkout_request_plan_domain():
    assert CheckoutRequest(plan_type="agent_yearly", user_role="agent").plan_type == PlanType.agent_yearly
    with pytest.raises(ValidationError):
        CheckoutRequest(plan_type="agent_weekly", user_role="agent")


def test_browse_filters_bounds():
    assert BrowseFilters().limit == 20
    with pytest.raises(ValidationError):
        BrowseFilters(page=0)
    with pytest.raises(ValidationError):
        BrowseFilters(limit=101)
