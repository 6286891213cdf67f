"""
Merchant verification from transaction history.
"""

import logging
from typing import Dict, Sequence, Any

import numpy as np

from ..models.risk_assessment import VerificationResult, VerificationStatus
from ..models.transaction import Transaction
from .risk_scorer import RiskScorer


class MerchantVerifier:
    """Aggregates per-transaction fraud decisions into a merchant trust status."""

    def __init__(self, risk_scorer: RiskScorer = None, config: Dict[str, Any] = None):
        """Initialize the merchant verifier."""
        self.risk_scorer = risk_scorer or RiskScorer()
        self.config = config or {}
        self.logger = logging.getLogger(__name__)

        self.max_fraud_rate = self.config.get("max_fraud_rate", 0.3)
        self.fraud_rate_penalty = self.config.get("fraud_rate_penalty", 0.5)
        self.amount_outlier_factor = self.config.get("amount_outlier_factor", 10)
        self.amount_outlier_penalty = self.config.get("amount_outlier_penalty", 0.2)
        self.max_night_share = self.config.get("max_night_share", 0.5)
        self.night_penalty = self.config.get("night_penalty", 0.3)

        self.verified_threshold = self.config.get("verified_threshold", 0.7)
        self.pending_threshold = self.config.get("pending_threshold", 0.4)

    def verify(self, transactions: Sequence[Transaction]) -> VerificationResult:
        """Verify a merchant from its past transactions.

        The three checks are independent and their penalties stack. The
        resulting score is not clamped, so it can drop below zero.
        """
        if len(transactions) == 0:
            return VerificationResult(
                verification_score=0,
                status=VerificationStatus.PENDING,
                flags=["No transaction history"],
            )

        verification_score = 1.0
        flags = []
        total = len(transactions)

        # Fraud rate
        fraud_count = sum(
            1 for txn in transactions if self.risk_scorer.assess(txn).is_fraud
        )
        fraud_rate = fraud_count / total
        if fraud_rate > self.max_fraud_rate:
            verification_score -= self.fraud_rate_penalty
            flags.append("High fraud rate detected")

        # Amount outliers
        amounts = np.array([txn.amount for txn in transactions], dtype=float)
        if amounts.max() > amounts.mean() * self.amount_outlier_factor:
            verification_score -= self.amount_outlier_penalty
            flags.append("Unusual transaction amount patterns")

        # Night-time share
        night_count = sum(
            1
            for txn in transactions
            if self.risk_scorer.is_high_risk_hour(txn.hour_of_day)
        )
        if night_count / total > self.max_night_share:
            verification_score -= self.night_penalty
            flags.append("Unusual transaction timing patterns")

        status = self.classify(verification_score)

        self.logger.info(
            f"Verified merchant history: {total} transactions, "
            f"fraud_rate={fraud_rate:.2f}, score={verification_score:.2f}, "
            f"status={status.value}"
        )

        return VerificationResult(
            verification_score=verification_score,
            status=status,
            flags=flags,
        )

    def classify(self, verification_score: float) -> VerificationStatus:
        """Map a verification score onto a status."""
        if verification_score >= self.verified_threshold:
            return VerificationStatus.VERIFIED
        elif verification_score >= self.pending_threshold:
            return VerificationStatus.PENDING
        else:
            return VerificationStatus.FLAGGED
