"""
Tests for UPI id helpers.
"""

import pytest

from securepay.upi import (
    build_payment_uri,
    generate_merchant_upi_id,
    is_valid_upi_id,
    parse_upi_payload,
)


@pytest.mark.parametrize(
    "value, valid",
    [
        ("merchant@upi", True),
        ("chai.point-01@paytm", True),
        (" padded@okaxis ", True),
        ("a@upi", False),
        ("no-at-sign", False),
        ("name@up1", False),
        ("", False),
        (None, False),
    ],
)
def test_is_valid_upi_id(value, valid):
    assert is_valid_upi_id(value) is valid


def test_parse_plain_upi_id():
    payload = parse_upi_payload("  merchant1@upi ")

    assert payload.upi_id == "merchant1@upi"
    assert payload.amount is None
    assert payload.params == {}


def test_parse_intent_uri():
    payload = parse_upi_payload(
        "upi://pay?pa=freshmart1234@paytm&pn=Fresh%20Mart&am=250.00&cu=INR"
    )

    assert payload.upi_id == "freshmart1234@paytm"
    assert payload.amount == "250.00"
    assert payload.params["pn"] == "Fresh Mart"
    assert payload.params["cu"] == "INR"


def test_parse_bare_query_string():
    payload = parse_upi_payload("upi=shop@ybl&am=")

    assert payload.upi_id == "shop@ybl"
    assert payload.amount is None


def test_parse_garbage():
    payload = parse_upi_payload("hello world")

    assert payload.upi_id is None


def test_build_payment_uri_round_trips():
    uri = build_payment_uri("freshmart1234@paytm", "Fresh Mart", 99.5)

    assert uri == (
        "upi://pay?pa=freshmart1234@paytm&pn=Fresh%20Mart&am=99.50"
        "&mc=0000&mode=02&purpose=00"
    )
    payload = parse_upi_payload(uri)
    assert payload.upi_id == "freshmart1234@paytm"
    assert payload.amount == "99.50"


def test_build_payment_uri_without_amount():
    assert "am=" not in build_payment_uri("shop@ybl", "Shop")


def test_generate_merchant_upi_id():
    upi_id = generate_merchant_upi_id("Chai Point & Co.", 1718441400123)

    assert upi_id == "chaipointco0123@paytm"
    assert is_valid_upi_id(upi_id)
