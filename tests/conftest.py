"""
Pytest fixtures and configuration for the storefront backend tests

This file provides shared fixtures that can be used across all test modules.
Supabase is replaced by the in-memory fake from tests/fakes.py.

Author: JRadiance
Date: 2026-02-09
"""
import os

# Settings() is built at import time and needs these
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-for-storefront")

import pytest

from storefront.core import database
from storefront.core.auth import TokenUser
from tests.factories import ADMIN_ID, AGENT_ID, CHIEF_ID, CUSTOMER_ID, SHEA_BUTTER_ID
from tests.fakes import FakeSupabase


@pytest.fixture
def fake_db(monkeypatch):
    """
    Provides an empty fake Supabase installed as the shared client

    Scope: function (fresh tables per test)
    """
    db = FakeSupabase()
    monkeypatch.setattr(database, "_client", db)
    return db


@pytest.fixture
def seeded_db(fake_db):
    """Fake Supabase with one profile per role"""
    fake_db.seed(
        "profiles",
        {"id": CHIEF_ID, "email": "chief@jradianceco.com", "full_name": "Chief Admin",
         "role": "chief_admin", "is_active": True, "created_at": "2026-01-01T00:00:00+00:00"},
        {"id": ADMIN_ID, "email": "admin@jradianceco.com", "full_name": "Store Admin",
         "role": "admin", "is_active": True, "created_at": "2026-01-02T00:00:00+00:00"},
        {"id": AGENT_ID, "email": "agent@jradianceco.com", "full_name": "Support Agent",
         "role": "agent", "is_active": True, "created_at": "2026-01-03T00:00:00+00:00"},
        {"id": CUSTOMER_ID, "email": "ada@example.com", "full_name": "Ada Obi",
         "role": "customer", "is_active": True, "created_at": "2026-01-04T00:00:00+00:00"},
    )
    return fake_db


@pytest.fixture
def chief():
    return TokenUser(id=CHIEF_ID, email="chief@jradianceco.com")


@pytest.fixture
def admin_user():
    return TokenUser(id=ADMIN_ID, email="admin@jradianceco.com")


@pytest.fixture
def agent():
    return TokenUser(id=AGENT_ID, email="agent@jradianceco.com")


@pytest.fixture
def customer():
    return TokenUser(id=CUSTOMER_ID, email="ada@example.com")


@pytest.fixture
def sample_product_row():
    """
    Provides a sample products row
    """
    return {
        "id": SHEA_BUTTER_ID,
        "name": "Whipped Shea Butter",
        "slug": "whipped-shea-butter",
        "description": "Raw shea butter whipped with coconut oil",
        "category": "body-care",
        "price": 8500,
        "discount_price": 7000,
        "stock_quantity": 12,
        "sku": "JR-SHEA-250",
        "images": ["https://jradianceco.com/products/1700000000000-abc123.jpg"],
        "attributes": {"size": "250ml"},
        "is_active": True,
        "created_at": "2026-01-10T00:00:00+00:00",
    }


@pytest.fixture
def client(seeded_db):
    """TestClient over the app with the seeded fake database"""
    from fastapi.testclient import TestClient
    from storefront.main import app

    return TestClient(app)
