"""
Data models for the SecurePay backend.
"""

from .transaction import Transaction, Category, Region
from .risk_assessment import (
    RiskAssessment,
    RiskLevel,
    VerificationResult,
    VerificationStatus,
)
from .records import MerchantRecord, PaymentRecord, PaymentStatus, Role, UserRecord

__all__ = [
    "Transaction",
    "Category",
    "Region",
    "RiskAssessment",
    "RiskLevel",
    "VerificationResult",
    "VerificationStatus",
    "MerchantRecord",
    "PaymentRecord",
    "PaymentStatus",
    "Role",
    "UserRecord",
]
