"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.database import get_db
from app.db.models import Base, SavedPlan  # noqa: F401  (registers tables)
from app.calculations.plan import (
    FinancingPlan,
    ExpenseItem,
    RevenueItem,
    TenureUnit,
)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks integration tests")


# Create a shared test database engine
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


def override_get_db():
    """Override database dependency for testing."""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


# Override the dependency globally for all tests
app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test and drop after."""
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def db_session():
    """Create database session for test setup."""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def basic_plan():
    """$120k over 12 months at 6%, repayment enabled."""
    return FinancingPlan(
        loan_type="House Loan",
        loan_tenure=12,
        tenure_unit=TenureUnit.months,
        loan_amount=120000,
        has_monthly_repayment=True,
        annual_interest_rate=6.0,
        revenue_items=[RevenueItem(amount=15000), RevenueItem()],
        expense_items=[
            ExpenseItem(name="Rates", amount=200),
            ExpenseItem(name="Insurance", amount=100),
        ],
    )


@pytest.fixture
def plan_payload():
    """JSON body for the same plan as ``basic_plan``."""
    return {
        "loan_type": "House Loan",
        "loan_tenure": 12,
        "tenure_unit": "months",
        "loan_amount": 120000,
        "has_monthly_repayment": True,
        "annual_interest_rate": 6.0,
        "revenue_items": [
            {"amount": 15000, "period": "monthly"},
            {"amount": 0, "period": "monthly"},
        ],
        "expense_items": [
            {"name": "Rates", "amount": 200, "period": "monthly"},
            {"name": "Insurance", "amount": 100, "period": "monthly"},
        ],
    }


@pytest.fixture
def session_factory():
    """Session factory bound to the test database."""
    return TestingSessionLocal
