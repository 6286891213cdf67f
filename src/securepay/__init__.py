"""
SecurePay: UPI-style payment backend with rule-based fraud risk scoring.
"""

from .models import RiskAssessment, RiskLevel, Transaction, VerificationResult
from .processing import MerchantVerifier, RiskScorer, calculate_fraud_risk

__version__ = "0.1.0"

__all__ = [
    "RiskAssessment",
    "RiskLevel",
    "Transaction",
    "VerificationResult",
    "MerchantVerifier",
    "RiskScorer",
    "calculate_fraud_risk",
]
