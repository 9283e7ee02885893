# tests/test_listings.py
"""
Tests du cycle de vie des annonces
Exécuter: pytest tests/test_listings.py -v
"""
import pytest

from app.core.errors import ConflictError, NotFoundError
from app.models import ListingUpdate
from app.services.listings import ListingService


LISTING = {
    "title": "Garden cottage",
    "description": "Cosy two bedroom cottage",
    "price": 500000,
    "location": "Ocho Rios, St. Ann",
    "bedrooms": "2",
    "interior_details": ["Air conditioning", "Balcony"],
}


def test_agent_creates_draft_listing(client, agent, db):
    response = client.post("/api/listings/create", json=LISTING, headers=agent.headers)

    assert response.status_code == 201
    listing = response.json()["listing"]
    assert listing["status"] == "draft"
    assert listing["agent_id"] == agent.id
    assert listing["views"] == 0
    assert listing["interior_details"] == ["Air conditioning", "Balcony"]
    assert db.get("listings", listing["id"]) is not None


def test_buyer_cannot_create_listing(client, buyer):
    response = client.post("/api/listings/create", json=LISTING, headers=buyer.headers)
    assert response.status_code == 403
    assert response.json() == {"error": "Only agents can create listings"}


@pytest.mark.parametrize("override", [
    {"price": 0},
    {"title": ""},
    {"location": "   "},
    {"status": "approved"},
])
def test_create_validation(client, agent, override):
    response = client.post("/api/listings/create", json={**LISTING, **override}, headers=agent.headers)
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request body"


def test_create_requires_token(client):
    response = client.post("/api/listings/create", json=LISTING)
    assert response.status_code == 401
    assert response.json()["error"].startswith("Missing or invalid Authorization header")


def test_update_by_owner_writes_only_supplied_keys(client, agent, make_listing):
    listing = make_listing(agent.id, status="draft")

    response = client.put(
        "/api/listings/update",
        json={"listing_id": listing["id"], "price": 450000, "status": "pending_review"},
        headers=agent.headers
    )

    assert response.status_code == 200
    updated = response.json()["listing"]
    assert updated["price"] == 450000
    assert updated["status"] == "pending_review"
    assert updated["title"] == listing["title"]
    assert updated["updated_at"] is not None


def test_update_by_other_agent_forbidden(client, make_actor, agent, make_listing):
    other = make_actor("agent")
    listing = make_listing(agent.id, status="draft")

    response = client.put(
        "/api/listings/update",
        json={"listing_id": listing["id"], "title": "Mine now"},
        headers=other.headers
    )
    assert response.status_code == 403


def test_update_by_admin_allowed(client, admin, agent, make_listing):
    listing = make_listing(agent.id, status="draft")
    response = client.put(
        "/api/listings/update",
        json={"listing_id": listing["id"], "status": "approved"},
        headers=admin.headers
    )
    assert response.status_code == 200
    assert response.json()["listing"]["status"] == "approved"


def test_update_unknown_listing(client, agent):
    response = client.put(
        "/api/listings/update",
        json={"listing_id": "missing", "title": "x"},
        headers=agent.headers
    )
    assert response.status_code == 404
    assert response.json() == {"error": "Listing not found"}


@pytest.mark.parametrize("field", ["status", "price", "title", "description", "location"])
def test_update_explicit_null_rejected(client, agent, make_listing, db, field):
    listing = make_listing(agent.id, status="draft")

    response = client.put(
        "/api/listings/update",
        json={"listing_id": listing["id"], field: None},
        headers=agent.headers
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request body"
    assert db.get("listings", listing["id"])[field] == listing[field]


def test_update_omitted_fields_untouched():
    changes = ListingUpdate(listing_id="l1", bedrooms=None, title="New title").changes()
    assert changes == {"bedrooms": None, "title": "New title"}


def test_strict_transitions_reject_non_edges(db, agent, make_listing):
    listing = make_listing(agent.id, status="draft")
    service = ListingService(db, strict_transitions=True)

    with pytest.raises(ConflictError) as exc:
        service.update(agent.current, ListingUpdate(listing_id=listing["id"], status="approved"))
    assert exc.value.message == "Invalid status transition: draft -> approved"

    updated = service.update(agent.current, ListingUpdate(listing_id=listing["id"], status="pending_review"))
    assert updated.status.value == "pending_review"


def test_approve_requires_admin(client, agent, make_listing):
    listing = make_listing(agent.id, status="pending_review")
    response = client.post("/api/listings/approve", json={"listing_id": listing["id"]}, headers=agent.headers)
    assert response.status_code == 403


def test_approve_requires_pending_review(client, admin, agent, make_listing, subscribe):
    subscribe(agent.id)
    listing = make_listing(agent.id, status="draft")

    response = client.post("/api/listings/approve", json={"listing_id": listing["id"]}, headers=admin.headers)

    assert response.status_code == 400
    assert response.json()["error"] == "Listing is not pending review. Current status: draft"


def test_approve_requires_active_subscription(client, admin, agent, make_listing, subscribe, db):
    subscribe(agent.id, status="canceled")
    listing = make_listing(agent.id, status="pending_review")

    response = client.post("/api/listings/approve", json={"listing_id": listing["id"]}, headers=admin.headers)

    assert response.status_code == 403
    assert response.json()["error"] == "Agent not subscribed"
    assert db.get("listings", listing["id"])["status"] == "pending_review"


def test_approve_publishes(client, admin, agent, make_listing, subscribe):
    subscribe(agent.id)
    listing = make_listing(agent.id, status="pending_review", published_at=None)

    response = client.post("/api/listings/approve", json={"listing_id": listing["id"]}, headers=admin.headers)

    assert response.status_code == 200
    approved = response.json()["listing"]
    assert approved["status"] == "approved"
    assert approved["published_at"] is not None


def test_reject_stores_reason(client, admin, agent, make_listing, db):
    listing = make_listing(agent.id, status="pending_review")

    response = client.post(
        "/api/listings/reject",
        json={"listing_id": listing["id"], "rejection_reason": "Missing photos"},
        headers=admin.headers
    )

    assert response.status_code == 200
    assert response.json()["message"] == "Listing rejected successfully"
    assert db.get("listings", listing["id"])["rejection_reason"] == "Missing photos"


def test_reject_requires_pending_review(client, admin, agent, make_listing):
    listing = make_listing(agent.id, status="approved")
    response = client.post("/api/listings/reject", json={"listing_id": listing["id"]}, headers=admin.headers)
    assert response.status_code == 400


def test_reject_requires_admin(client, agent, make_listing, db):
    listing = make_listing(agent.id, status="pending_review")

    response = client.post("/api/listings/reject", json={"listing_id": listing["id"]}, headers=agent.headers)

    assert response.status_code == 403
    assert response.json()["error"] == "Only admins can reject listings"
    assert db.get("listings", listing["id"])["status"] == "pending_review"


@pytest.mark.parametrize("action", ["approve", "reject"])
def test_row_vanishing_mid_transition_is_not_found(db, admin, agent, make_listing, subscribe, monkeypatch, action):
    listing = make_listing(agent.id, status="pending_review")
    subscribe(agent.id)
    service = ListingService(db)
    monkeypatch.setattr(service.listings, "update", lambda listing_id, data: None)

    with pytest.raises(NotFoundError):
        getattr(service, action)(admin.current, listing["id"])


class TestBrowse:
    @pytest.fixture
    def catalog(self, agent, make_listing):
        make_listing(agent.id, title="Cheap", price=90000, status="approved",
                     published_at="2024-02-01T00:00:00+00:00", location="Kingston")
        make_listing(agent.id, title="Mid old", price=150000, status="approved",
                     published_at="2024-02-02T00:00:00+00:00", location="Montego Bay")
        make_listing(agent.id, title="Mid new", price=300000, status="approved",
                     published_at="2024-02-03T00:00:00+00:00", location="Kingston 10")
        make_listing(agent.id, title="Pending", price=200000, status="pending_review",
                     published_at=None, location="Kingston")
        make_listing(agent.id, title="Draft", price=200000, status="draft",
                     published_at=None, location="Kingston")

    def test_only_approved_newest_first(self, client, catalog):
        response = client.get("/api/listings/browse")

        assert response.status_code == 200
        body = response.json()
        assert [l["title"] for l in body["listings"]] == ["Mid new", "Mid old", "Cheap"]
        assert body["total"] == 3
        assert body["page"] == 1
        assert body["limit"] == 20

    def test_price_bounds_inclusive(self, client, catalog):
        response = client.get("/api/listings/browse?min_price=100000&max_price=300000")
        titles = [l["title"] for l in response.json()["listings"]]
        assert titles == ["Mid new", "Mid old"]

    def test_location_substring_case_insensitive(self, client, catalog):
        body = client.get("/api/listings/browse?location=kingston").json()
        assert [l["title"] for l in body["listings"]] == ["Mid new", "Cheap"]
        assert body["total"] == 2

    def test_total_independent_of_pagination(self, client, catalog):
        body = client.get("/api/listings/browse?page=2&limit=2").json()
        assert [l["title"] for l in body["listings"]] == ["Cheap"]
        assert body["total"] == 3

    def test_invalid_page(self, client, catalog):
        assert client.get("/api/listings/browse?page=0").status_code == 400
