"""
Rule-based fraud risk scoring for individual transactions.
"""

import logging
from typing import Dict, List, Any, Optional

from ..models.risk_assessment import RiskAssessment, RiskLevel
from ..models.transaction import Category, Region, Transaction

HIGH_RISK_CATEGORIES = (
    Category.ENTERTAINMENT,
    Category.SHOPPING_NET,
    Category.SHOPPING_POS,
    Category.TRAVEL,
)
HIGH_RISK_HOURS = (0, 1, 2, 3, 4, 5, 22, 23)
HIGH_RISK_REGIONS = (Region.ANDHRA_PRADESH, Region.ARUNACHAL_PRADESH, Region.ASSAM)

DEFAULT_RULES = {
    "weights": {
        "category": 0.30,
        "low_amount": 0.10,
        "high_amount": 0.25,
        "time": 0.20,
        "age": 0.15,
        "region": 0.10,
    },
    "low_amount_threshold": 100,
    "high_amount_threshold": 50000,
    "high_risk_age_min": 18,
    "high_risk_age_max": 25,
    "medium_threshold": 0.3,
    "high_threshold": 0.7,
    "fraud_threshold": 0.5,
}


def _format_amount(amount: float, grouping: bool = True) -> str:
    """Render an amount the way it is shown to customers (no trailing .0).

    Grouped amounts keep up to three decimals, ungrouped ones are printed as is.
    """
    if grouping:
        return f"{amount:,.3f}".rstrip("0").rstrip(".")

    text = repr(float(amount))
    return text[:-2] if text.endswith(".0") else text


def _format_weight(weight: float) -> str:
    return f"+{weight:.0%} risk"


class RiskScorer:
    """Scores a transaction against a fixed set of weighted rules."""

    def __init__(self, config: Dict[str, Any] = None):
        """Initialize the risk scorer."""
        self.config = config or {}
        self.logger = logging.getLogger(__name__)

        self.weights = {**DEFAULT_RULES["weights"], **self.config.get("weights", {})}

        self.low_amount_threshold = self.config.get(
            "low_amount_threshold", DEFAULT_RULES["low_amount_threshold"]
        )
        self.high_amount_threshold = self.config.get(
            "high_amount_threshold", DEFAULT_RULES["high_amount_threshold"]
        )
        self.high_risk_age_min = self.config.get(
            "high_risk_age_min", DEFAULT_RULES["high_risk_age_min"]
        )
        self.high_risk_age_max = self.config.get(
            "high_risk_age_max", DEFAULT_RULES["high_risk_age_max"]
        )

        self.high_risk_categories = frozenset(
            Category.from_value(c)
            for c in self.config.get("high_risk_categories", HIGH_RISK_CATEGORIES)
        )
        self.high_risk_hours = frozenset(
            self.config.get("high_risk_hours", HIGH_RISK_HOURS)
        )
        self.high_risk_regions = frozenset(
            Region.from_value(r)
            for r in self.config.get("high_risk_regions", HIGH_RISK_REGIONS)
        )

        # Classification thresholds
        self.medium_threshold = self.config.get(
            "medium_threshold", DEFAULT_RULES["medium_threshold"]
        )
        self.high_threshold = self.config.get(
            "high_threshold", DEFAULT_RULES["high_threshold"]
        )
        self.fraud_threshold = self.config.get(
            "fraud_threshold", DEFAULT_RULES["fraud_threshold"]
        )

    def is_high_risk_hour(self, hour_of_day: int) -> bool:
        return hour_of_day in self.high_risk_hours

    def assess(self, transaction: Transaction) -> RiskAssessment:
        """Score a transaction.

        Rules are evaluated in a fixed order (category, amount, time, age,
        region) and the explanation list keeps that order. The score is
        clamped to 1.0 once all rules have been applied.
        """
        risk_score = 0.0
        risk_factors: List[str] = []

        category_risky = transaction.category in self.high_risk_categories
        amount_low = transaction.amount < self.low_amount_threshold
        amount_high = (
            not amount_low and transaction.amount > self.high_amount_threshold
        )
        time_risky = self.is_high_risk_hour(transaction.hour_of_day)
        age_risky = (
            self.high_risk_age_min
            <= transaction.customer_age
            <= self.high_risk_age_max
        )
        region_risky = transaction.region in self.high_risk_regions

        # 1. Category
        if category_risky:
            weight = self.weights["category"]
            risk_score += weight
            risk_factors.append(
                f"High-risk category: {transaction.category.display_name} - "
                f"This category has historically higher fraud rates "
                f"({_format_weight(weight)})"
            )

        # 2. Amount
        if amount_low:
            weight = self.weights["low_amount"]
            risk_score += weight
            risk_factors.append(
                f"Low amount: ₹{_format_amount(transaction.amount, grouping=False)} - "
                f"Amounts below ₹{_format_amount(self.low_amount_threshold, grouping=False)} "
                f"may indicate card testing ({_format_weight(weight)})"
            )
        elif amount_high:
            weight = self.weights["high_amount"]
            risk_score += weight
            risk_factors.append(
                f"High amount: ₹{_format_amount(transaction.amount)} - "
                f"Large transactions above ₹{_format_amount(self.high_amount_threshold)} "
                f"require extra verification ({_format_weight(weight)})"
            )

        # 3. Time of day
        if time_risky:
            weight = self.weights["time"]
            risk_score += weight
            risk_factors.append(
                f"Suspicious timing: {transaction.hour_of_day:02d}:00 - "
                f"Transactions between 10 PM - 6 AM have higher fraud rates "
                f"({_format_weight(weight)})"
            )

        # 4. Customer age
        if age_risky:
            weight = self.weights["age"]
            risk_score += weight
            risk_factors.append(
                f"Age factor: {transaction.customer_age} years - Age group "
                f"{self.high_risk_age_min}-{self.high_risk_age_max} shows higher "
                f"fraud involvement ({_format_weight(weight)})"
            )

        # 5. Region
        if region_risky:
            weight = self.weights["region"]
            risk_score += weight
            risk_factors.append(
                f"Geographic risk: High-risk region detected - This location has "
                f"elevated fraud activity ({_format_weight(weight)})"
            )

        # Safe notes are added for every rule that stayed quiet, even when one
        # weak rule fired, as long as the raw score is still below MEDIUM.
        if not risk_factors or risk_score < self.medium_threshold:
            if not category_risky:
                risk_factors.append(
                    f"✓ Safe category: {transaction.category.display_name} - "
                    f"Low fraud risk category"
                )
            if not amount_low and not amount_high:
                risk_factors.append(
                    f"✓ Normal amount: ₹{_format_amount(transaction.amount)} - "
                    f"Within typical transaction range"
                )
            if not time_risky:
                risk_factors.append(
                    f"✓ Safe timing: {transaction.hour_of_day:02d}:00 - "
                    f"Transaction during normal business hours"
                )
            if not age_risky:
                risk_factors.append(
                    f"✓ Low-risk age: {transaction.customer_age} years - "
                    f"Age group with lower fraud rates"
                )
            if not region_risky:
                risk_factors.append("✓ Safe location: Low-risk geographic region")

        risk_score = min(risk_score, 1.0)

        assessment = RiskAssessment(
            risk_score=risk_score,
            risk_level=self.classify(risk_score),
            risk_factors=risk_factors,
            is_fraud=risk_score >= self.fraud_threshold,
        )

        self.logger.debug(
            f"Assessed transaction: score={risk_score:.2f} "
            f"level={assessment.risk_level.value} fraud={assessment.is_fraud}"
        )
        return assessment

    def classify(self, risk_score: float) -> RiskLevel:
        """Map a risk score onto LOW / MEDIUM / HIGH."""
        if risk_score < self.medium_threshold:
            return RiskLevel.LOW
        elif risk_score < self.high_threshold:
            return RiskLevel.MEDIUM
        else:
            return RiskLevel.HIGH

    def get_rules(self) -> Dict[str, Any]:
        """Describe the active rule set."""
        return {
            "weights": dict(self.weights),
            "low_amount_threshold": self.low_amount_threshold,
            "high_amount_threshold": self.high_amount_threshold,
            "high_risk_categories": sorted(
                c.display_name for c in self.high_risk_categories
            ),
            "high_risk_hours": sorted(self.high_risk_hours),
            "high_risk_age_range": [self.high_risk_age_min, self.high_risk_age_max],
            "high_risk_regions": sorted(r.value for r in self.high_risk_regions),
            "medium_threshold": self.medium_threshold,
            "high_threshold": self.high_threshold,
            "fraud_threshold": self.fraud_threshold,
        }


_default_scorer: Optional[RiskScorer] = None


def calculate_fraud_risk(transaction: Transaction) -> RiskAssessment:
    """Score a transaction with the default rule set."""
    global _default_scorer
    if _default_scorer is None:
        _default_scorer = RiskScorer()
    return _default_scorer.assess(transaction)
