"""
Scoring and processing components for the SecurePay backend.
"""

from .risk_scorer import RiskScorer, calculate_fraud_risk
from .merchant_verifier import MerchantVerifier
from .payment_processor import PaymentProcessor
from .account_service import AccountService

__all__ = [
    "RiskScorer",
    "calculate_fraud_risk",
    "MerchantVerifier",
    "PaymentProcessor",
    "AccountService",
]
