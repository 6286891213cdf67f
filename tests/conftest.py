"""
Shared fixtures for the SecurePay test suite.
"""

from datetime import datetime

import pytest

from securepay.dashboard.app import SecurePayDashboard
from securepay.models.records import MerchantRecord
from securepay.models.transaction import Category, Region, Transaction
from securepay.otp.mailer import LoggingMailer
from securepay.storage.record_store import InMemoryRecordStore
from securepay.storage.repository import SecurePayRepository

FIXED_NOW = datetime(2024, 6, 15, 14, 30, 0)


class FakeClock:
    """Manually advanced epoch-seconds clock."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def fixed_now():
    return lambda: FIXED_NOW


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def store():
    return InMemoryRecordStore()


@pytest.fixture
def repository(store):
    return SecurePayRepository(store)


@pytest.fixture
def mailer():
    return LoggingMailer()


@pytest.fixture
def safe_transaction():
    return Transaction(
        hour_of_day=14,
        category=Category.FOOD_DINING,
        customer_age=40,
        amount=5000,
        region=Region.GOA,
    )


@pytest.fixture
def risky_transaction():
    return Transaction(
        hour_of_day=2,
        category=Category.TRAVEL,
        customer_age=22,
        amount=60000,
        region=Region.ARUNACHAL_PRADESH,
    )


def make_merchant(
    upi_id: str = "travelco1234@paytm",
    business_type: Category = Category.TRAVEL,
    business_name: str = "TravelCo",
) -> MerchantRecord:
    return MerchantRecord(
        id="mrc_test",
        business_name=business_name,
        owner_name="Priya Sharma",
        email="owner@travelco.in",
        mobile="+91-98765-43210",
        business_type=business_type,
        address="12 MG Road",
        city="Bengaluru",
        state="Karnataka",
        zip_code="560001",
        upi_id=upi_id,
    )


@pytest.fixture
def merchant(repository):
    record = make_merchant()
    repository.add_merchant(record)
    return record


@pytest.fixture
def dashboard(store, mailer):
    return SecurePayDashboard({"dashboard": {"seed_admin": True}}, store=store, mailer=mailer)


@pytest.fixture
def client(dashboard):
    dashboard.app.config["TESTING"] = True
    return dashboard.app.test_client()
