"""
UPI id validation, payload parsing and payment intent URIs.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Optional
from urllib.parse import parse_qsl, quote, urlencode, urlsplit

UPI_ID_PATTERN = re.compile(r"^[a-zA-Z0-9.\-_]{2,256}@[a-zA-Z]{2,64}$")

# Looser form accepted when a bare id is scanned from a QR code
_PLAIN_UPI_ID = re.compile(r"^[a-zA-Z0-9_.\-]+@\w+$")


@dataclass
class UpiPayload:
    """Components of a scanned UPI QR code or intent string."""

    upi_id: Optional[str] = None
    amount: Optional[str] = None
    params: Dict[str, str] = field(default_factory=dict)


def is_valid_upi_id(value: str) -> bool:
    if not value:
        return False
    return bool(UPI_ID_PATTERN.match(value.strip()))


def parse_upi_payload(payload: str) -> UpiPayload:
    """Parse a plain UPI id or a ``upi://pay?...`` intent string."""
    clean = (payload or "").strip()
    result = UpiPayload()

    if _PLAIN_UPI_ID.match(clean):
        result.upi_id = clean
        return result

    if clean.lower().startswith("upi://"):
        query = urlsplit(clean).query
    else:
        query = clean

    for key, value in parse_qsl(query, keep_blank_values=True):
        result.params[key] = value

    result.upi_id = result.params.get("pa") or result.params.get("upi") or None
    result.amount = result.params.get("am") or None
    return result


def build_payment_uri(
    upi_id: str, payee_name: str, amount: Optional[float] = None
) -> str:
    """Build the intent string a merchant QR code encodes."""
    params = {"pa": upi_id, "pn": payee_name}
    if amount is not None:
        params["am"] = f"{amount:.2f}"
    params.update({"mc": "0000", "mode": "02", "purpose": "00"})
    return "upi://pay?" + urlencode(params, quote_via=quote, safe="@")


def generate_merchant_upi_id(business_name: str, timestamp_ms: int) -> str:
    """Derive a merchant UPI id from its business name and creation time."""
    slug = re.sub(r"[^a-z0-9]", "", business_name.lower())
    return f"{slug}{str(timestamp_ms)[-4:]}@paytm"
