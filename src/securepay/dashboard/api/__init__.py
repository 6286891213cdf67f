"""
HTTP API package for the SecurePay backend.
"""

from .payments_api import PaymentsAPI, create_payments_blueprint
from .merchants_api import MerchantsAPI, create_merchants_blueprint
from .users_api import create_users_blueprint
from .otp_api import create_otp_blueprint

__all__ = [
    "PaymentsAPI",
    "MerchantsAPI",
    "create_payments_blueprint",
    "create_merchants_blueprint",
    "create_users_blueprint",
    "create_otp_blueprint",
]
