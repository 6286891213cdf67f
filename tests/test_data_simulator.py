"""
Tests for the demo data simulator.
"""

from datetime import datetime

from securepay.ingestion.data_simulator import STATUS_BY_RISK_LEVEL, TransactionSimulator
from securepay.models.records import Role
from securepay.models.transaction import Region


def test_same_seed_same_data():
    first = TransactionSimulator({"seed": 7}).generate_transactions(20)
    second = TransactionSimulator({"seed": 7}).generate_transactions(20)

    assert first == second


def test_generated_transactions_are_in_range():
    simulator = TransactionSimulator({"seed": 1, "max_region_code": 4})

    for transaction in simulator.generate_transactions(200):
        assert 0 <= transaction.hour_of_day <= 23
        assert 18 <= transaction.customer_age <= 67
        assert 50 <= transaction.amount <= 100049
        assert transaction.region.value <= 4


def test_generate_users_and_merchants():
    simulator = TransactionSimulator({"seed": 3})

    users = simulator.generate_users(3)
    merchants = simulator.generate_merchants(2)

    assert [u.id for u in users] == ["usr_mock_001", "usr_mock_002", "usr_mock_003"]
    assert all(u.role == Role.USER for u in users)
    for user in users:
        Region.from_value(user.state)
    assert [m.upi_id for m in merchants] == ["merchant1@upi", "merchant2@upi"]


def test_payment_status_follows_risk_level():
    simulator = TransactionSimulator({"seed": 5})
    merchant = simulator.generate_merchants(1)[0]
    customer = simulator.generate_users(1)[0]

    for _ in range(30):
        payment = simulator.generate_payment(merchant, customer)
        assert payment.status == STATUS_BY_RISK_LEVEL[payment.assessment.risk_level]
        assert payment.category == merchant.business_type
        assert payment.customer_age == customer.age
        assert payment.timestamp.hour == payment.to_transaction().hour_of_day


def test_populate_repository(repository):
    simulator = TransactionSimulator({"seed": 11})

    counts = simulator.populate_repository(
        repository, users=4, merchants=3, payments_per_merchant=5
    )

    assert counts == {"users": 4, "merchants": 3, "transactions": 15}
    assert len(repository.get_users()) == 5
    assert repository.get_users()[0].role == Role.ADMIN

    transactions = repository.get_transactions()
    assert len(transactions) == 15
    timestamps = [t.timestamp for t in transactions]
    assert timestamps == sorted(timestamps, reverse=True)
    assert len(repository.get_merchant_transactions("merchant1@upi")) == 5


def test_payments_are_never_in_the_future():
    simulator = TransactionSimulator({"seed": 9, "history_days": 1})
    simulator.current_time = datetime(2024, 6, 15, 0, 30)
    merchant = simulator.generate_merchants(1)[0]

    for _ in range(100):
        payment = simulator.generate_payment(merchant)
        assert payment.timestamp <= simulator.current_time
        assert payment.timestamp.hour == payment.to_transaction().hour_of_day
