# tests/conftest.py
"""
Fixtures partagées.

Les variables d'environnement doivent exister avant l'import de l'app
(Settings est instancié à l'import de app.core.config).
"""
import os

FAKE_KEY = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
    "eyJyb2xlIjoic2VydmljZV9yb2xlIiwiaXNzIjoic3VwYWJhc2UifQ."
    "c2lnbmF0dXJlLWZvci10ZXN0cy1vbmx5"
)

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", FAKE_KEY)
os.environ.setdefault("SUPABASE_SERVICE_KEY", FAKE_KEY)
os.environ.setdefault("APP_URL", "https://marketplace.framer.website")
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_marketplace")
os.environ.setdefault("STRIPE_AGENT_MONTHLY_PRICE_ID", "price_agent_monthly")
os.environ.setdefault("STRIPE_AGENT_YEARLY_PRICE_ID", "price_agent_yearly")
os.environ.setdefault("STRIPE_BUYER_MONTHLY_PRICE_ID", "price_buyer_monthly")
os.environ.setdefault("STRIPE_BUYER_YEARLY_PRICE_ID", "price_buyer_yearly")

from dataclasses import dataclass
from typing import Dict

import pytest
from fastapi.testclient import TestClient

from main import app
from app.api.deps import get_identity_provider, get_stripe_client
from app.db import get_supabase
from app.models import CurrentUser

from fakes import FakeIdentityProvider, FakeStripe, FakeSupabase


@dataclass
class Actor:
    id: str
    email: str
    role: str
    headers: Dict[str, str]

    @property
    def current(self) -> CurrentUser:
        return CurrentUser(id=self.id, email=self.email, role=self.role)


@pytest.fixture
def db():
    return FakeSupabase()


@pytest.fixture
def identity():
    return FakeIdentityProvider()


@pytest.fixture
def stripe():
    return FakeStripe()


@pytest.fixture
def client(db, identity, stripe):
    app.dependency_overrides[get_supabase] = lambda: db
    app.dependency_overrides[get_identity_provider] = lambda: identity
    app.dependency_overrides[get_stripe_client] = lambda: stripe
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_actor(db, identity):
    """Crée un compte + profil et renvoie les headers Bearer"""
    def _make(role: str, email: str = None, account_status: str = "active", **profile) -> Actor:
        email = email or f"{role}-{len(db.rows('users')) + 1}@example.com"
        row = db.add(
            "users",
            email=email,
            role=role,
            account_status=account_status,
            **profile
        )
        identity.register(row["id"], email)
        token = identity.issue_token(row["id"])
        return Actor(
            id=row["id"],
            email=email,
            role=role,
            headers={"Authorization": f"Bearer {token}"}
        )
    return _make


@pytest.fixture
def buyer(make_actor):
    return make_actor("buyer", first_name="Jane", last_name="Doe")


@pytest.fixture
def agent(make_actor):
    return make_actor("agent", first_name="Andre", last_name="Brown")


@pytest.fixture
def admin(make_actor):
    return make_actor("admin")


@pytest.fixture
def subscribe(db):
    def _subscribe(user_id: str, status: str = "active"):
        return db.add("subscriptions", user_id=user_id, status=status, plan_type="agent_monthly")
    return _subscribe


@pytest.fixture
def make_listing(db):
    def _make(agent_id: str, **fields):
        data = {
            "agent_id": agent_id,
            "title": "Ocean view villa",
            "description": "Three bedroom villa with pool",
            "price": 250000.0,
            "location": "Montego Bay, St. James",
            "status": "approved",
            "views": 0,
            "images": ["https://cdn.example.com/villa-1.jpg"],
            "documents": [],
            "interior_details": [],
        }
        data.update(fields)
        return db.add("listings", **data)
    return _make
