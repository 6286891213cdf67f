"""
Tests for the transaction model and coded enums.
"""

import numpy as np
import pytest

from securepay.models.transaction import Category, Region, Transaction


@pytest.mark.parametrize(
    "value",
    [Category.TRAVEL, 13, "13", "Travel", "travel", "TRAVEL", np.int64(13), 13.0],
)
def test_category_from_value(value):
    assert Category.from_value(value) == Category.TRAVEL


def test_multi_word_names():
    assert Category.from_value("shopping_net") == Category.SHOPPING_NET
    assert Category.from_value("Shopping-POS") == Category.SHOPPING_POS
    assert Region.from_value("Tamil Nadu") == Region.TAMIL_NADU
    assert Region.from_value(35) == Region.LADAKH


@pytest.mark.parametrize("value", [14, -1, 1.5, True, "Casino", None])
def test_unknown_category(value):
    with pytest.raises(ValueError):
        Category.from_value(value)


def test_region_codes_are_dense():
    assert [r.value for r in Region] == list(range(36))
    assert [c.value for c in Category] == list(range(14))


def test_transaction_coerces_enums():
    transaction = Transaction(hour_of_day=9, category="Home", customer_age=30,
                              amount=10.0, region=2)

    assert transaction.category == Category.HOME
    assert transaction.region == Region.ASSAM


@pytest.mark.parametrize(
    "field, value",
    [
        ("hour_of_day", 24),
        ("hour_of_day", -1),
        ("customer_age", 0),
        ("amount", -0.01),
        ("amount", float("nan")),
        ("amount", float("inf")),
    ],
)
def test_transaction_validation(field, value):
    data = {"hour_of_day": 9, "category": 1, "customer_age": 30, "amount": 10.0, "region": 5}
    data[field] = value

    with pytest.raises(ValueError):
        Transaction(**data)


def test_zero_amount_is_allowed():
    assert Transaction(9, Category.HOME, 30, 0, Region.GOA).amount == 0


def test_from_dict_accepts_dataset_columns():
    transaction = Transaction.from_dict(
        {"trans_hour": 3, "category": 6, "age": 24, "trans_amount": "75.5", "state": 0}
    )

    assert transaction == Transaction(3, Category.HOME, 24, 75.5, Region.ANDHRA_PRADESH)
    assert Transaction.from_dict(transaction.to_dict()) == transaction


def test_from_dict_missing_field():
    with pytest.raises(ValueError, match="Missing transaction field"):
        Transaction.from_dict({"hour_of_day": 3, "category": 6, "customer_age": 24, "amount": 1})


@pytest.mark.parametrize("amount", ["nan", "inf", "-inf"])
def test_from_dict_rejects_non_finite_amount(amount):
    with pytest.raises(ValueError, match="finite"):
        Transaction.from_dict(
            {"hour_of_day": 3, "category": 6, "customer_age": 24, "amount": amount, "region": 5}
        )
