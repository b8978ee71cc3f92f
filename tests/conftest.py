"""
Pytest fixtures for the dues test suite.

Provides:
- Reference dates and the standard penalty policy
- Raw applicant mappings for the documented scenarios
- An in-memory SQLite session with the payment ledger table
"""

from datetime import date
from decimal import Decimal
from typing import Generator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from dues_engines.penalty import PenaltyPolicy
from dues_kernel.db.base import Base
from dues_kernel.domain.clock import DeterministicClock
from dues_kernel.logging_config import LogContext, reset_logging

import dues_kernel.models  # noqa: F401  (registers ShopPayment on Base)


REFERENCE_DATE = date(2025, 12, 23)
IMPLEMENTATION_DATE = date(2023, 3, 1)


@pytest.fixture(autouse=True)
def _clean_logging():
    """Reset logging state between tests."""
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()


@pytest.fixture
def as_of() -> date:
    return REFERENCE_DATE


@pytest.fixture
def policy() -> PenaltyPolicy:
    return PenaltyPolicy(daily_rate=Decimal("15"), implementation_date=IMPLEMENTATION_DATE)


@pytest.fixture
def clock() -> DeterministicClock:
    return DeterministicClock.on(REFERENCE_DATE)


@pytest.fixture
def active_only_applicant() -> dict:
    """Payment day 5, active lease from July 2024, no earlier leases."""
    return {
        "shopNo": "04",
        "applicantName": "Test Renter",
        "paymentDay": "5",
        "rentBase": "1000",
        "gstAmount": "180",
        "rentTotal": "1180",
        "rentStartDate": "2024-07-01",
    }


@pytest.fixture
def applicant_with_history(active_only_applicant) -> dict:
    """Active lease from July 2024 plus an expired lease in early 2023."""
    return {
        **active_only_applicant,
        "leaseHistory": [
            {
                "leaseDate": "2023-01-01",
                "expiryDate": "2023-06-30",
                "rentBase": "900",
                "gstAmount": "162",
                "rentTotal": "1062",
            },
        ],
    }


@pytest.fixture
def paid_july_to_february() -> frozenset[str]:
    return frozenset({
        "2024-07", "2024-08", "2024-09", "2024-10",
        "2024-11", "2024-12", "2025-01", "2025-02",
    })


@pytest.fixture
def sqlite_session() -> Generator[Session, None, None]:
    """Throwaway in-memory database holding the shop_payments table."""
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    factory = sessionmaker(bind=engine, expire_on_commit=False)
    session = factory()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()
