"""
Pytest Configuration and Fixtures

Shared fixtures for all tests:
- Customer factories and stores
- FastAPI test clients
- Assertion helpers
"""

from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from mall_segmentation.core.config import Settings
from mall_segmentation.main import create_app
from mall_segmentation.models.customer import Customer, Gender
from mall_segmentation.store.memory_store import CustomerStore


# Customer fixtures

def make_customer(
    id: int = 1,
    age: int = 30,
    gender: Gender = Gender.MALE,
    annual_income: float = 50.0,
    spending_score: float = 50.0,
    cluster: Optional[int] = 0,
    customer_id: Optional[int] = None,
) -> Customer:
    """Build a customer with sensible defaults."""
    return Customer(
        id=id,
        customer_id=customer_id if customer_id is not None else id,
        gender=gender,
        age=age,
        annual_income=annual_income,
        spending_score=spending_score,
        cluster=cluster,
    )


@pytest.fixture
def customer_factory():
    """Provide the make_customer factory to tests"""
    return make_customer


@pytest.fixture
def mixed_customers() -> List[Customer]:
    """Small hand-built dataset spanning age buckets, genders and clusters"""
    return [
        make_customer(id=1, age=30, gender=Gender.MALE, annual_income=20.0, spending_score=80.0, cluster=1),
        make_customer(id=2, age=31, gender=Gender.FEMALE, annual_income=60.0, spending_score=45.0, cluster=0),
        make_customer(id=3, age=45, gender=Gender.MALE, annual_income=90.0, spending_score=15.0, cluster=2),
        make_customer(id=4, age=46, gender=Gender.FEMALE, annual_income=85.0, spending_score=90.0, cluster=3),
        make_customer(id=5, age=62, gender=Gender.MALE, annual_income=25.0, spending_score=20.0, cluster=None),
    ]


@pytest.fixture
def seeded_store() -> CustomerStore:
    """Store populated with the generated mall dataset (seed 42)"""
    return CustomerStore.from_seed(42)


# Application fixtures

@pytest.fixture
def test_settings() -> Settings:
    """Settings for tests: no rate limit, no API key, console logs"""
    return Settings(
        environment="test",
        rate_limit_enabled=False,
        api_key=None,
        json_logs=False,
        log_level="WARNING",
        dataset_csv_path=None,
    )


@pytest.fixture
def client(test_settings, seeded_store):
    """Provide FastAPI test client backed by the seeded store"""
    app = create_app(settings=test_settings, store=seeded_store)
    return TestClient(app)


@pytest.fixture
def empty_client(test_settings):
    """Provide FastAPI test client backed by an empty store"""
    app = create_app(settings=test_settings, store=CustomerStore())
    return TestClient(app)


# Assertion helpers

def assert_error_response(response, status_code: int):
    """Assert a flat JSON error body with the expected status"""
    assert response.status_code == status_code, response.text
    body = response.json()
    assert isinstance(body["error"], str), "error must be a plain message"
    assert body["error"], "error message must not be empty"
    return body
