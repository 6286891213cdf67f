"""
Tests for rule-based transaction scoring.
"""

import pytest

from securepay.models.risk_assessment import RiskLevel
from securepay.models.transaction import Category, Region, Transaction
from securepay.processing.risk_scorer import RiskScorer, calculate_fraud_risk


def _txn(hour=14, category=Category.FOOD_DINING, age=40, amount=5000, region=Region.GOA):
    return Transaction(
        hour_of_day=hour,
        category=category,
        customer_age=age,
        amount=amount,
        region=region,
    )


@pytest.fixture
def scorer():
    return RiskScorer()


def test_no_rule_fires(scorer, safe_transaction):
    assessment = scorer.assess(safe_transaction)

    assert assessment.risk_score == 0
    assert assessment.risk_level == RiskLevel.LOW
    assert assessment.is_fraud is False
    assert assessment.risk_factors == [
        "✓ Safe category: Food Dining - Low fraud risk category",
        "✓ Normal amount: ₹5,000 - Within typical transaction range",
        "✓ Safe timing: 14:00 - Transaction during normal business hours",
        "✓ Low-risk age: 40 years - Age group with lower fraud rates",
        "✓ Safe location: Low-risk geographic region",
    ]


def test_all_rules_fire(scorer, risky_transaction):
    assessment = scorer.assess(risky_transaction)

    assert assessment.risk_score == pytest.approx(1.0)
    assert assessment.risk_score <= 1.0
    assert assessment.risk_level == RiskLevel.HIGH
    assert assessment.is_fraud is True
    assert assessment.risk_factors == [
        "High-risk category: Travel - This category has historically higher "
        "fraud rates (+30% risk)",
        "High amount: ₹60,000 - Large transactions above ₹50,000 require extra "
        "verification (+25% risk)",
        "Suspicious timing: 02:00 - Transactions between 10 PM - 6 AM have higher "
        "fraud rates (+20% risk)",
        "Age factor: 22 years - Age group 18-25 shows higher fraud involvement "
        "(+15% risk)",
        "Geographic risk: High-risk region detected - This location has elevated "
        "fraud activity (+10% risk)",
    ]


def test_category_and_low_amount_is_medium(scorer):
    assessment = scorer.assess(
        _txn(hour=10, category=Category.SHOPPING_NET, amount=50)
    )

    assert assessment.risk_score == pytest.approx(0.40)
    assert assessment.risk_level == RiskLevel.MEDIUM
    assert assessment.is_fraud is False
    assert assessment.risk_factors == [
        "High-risk category: Shopping Net - This category has historically higher "
        "fraud rates (+30% risk)",
        "Low amount: ₹50 - Amounts below ₹100 may indicate card testing (+10% risk)",
    ]


def test_fraud_threshold_is_inclusive(scorer):
    assessment = scorer.assess(_txn(hour=23, category=Category.TRAVEL))

    assert assessment.risk_score == pytest.approx(0.5)
    assert assessment.risk_level == RiskLevel.MEDIUM
    assert assessment.is_fraud is True


def test_weak_rule_keeps_safe_notes(scorer):
    assessment = scorer.assess(_txn(region=Region.ASSAM))

    assert assessment.risk_score == pytest.approx(0.10)
    assert assessment.risk_level == RiskLevel.LOW
    assert assessment.risk_factors[0].startswith("Geographic risk:")
    assert len(assessment.risk_factors) == 5
    assert all(f.startswith("✓") for f in assessment.risk_factors[1:])
    assert "✓ Safe location: Low-risk geographic region" not in assessment.risk_factors


def test_low_amount_gets_no_normal_amount_note(scorer):
    assessment = scorer.assess(_txn(amount=20))

    assert assessment.risk_score == pytest.approx(0.10)
    assert not any("Normal amount" in f for f in assessment.risk_factors)


def test_amounts_are_printed_unrounded(scorer):
    low = scorer.assess(_txn(amount=50.125))
    high = scorer.assess(_txn(amount=60000.5))
    normal = scorer.assess(_txn(amount=1234.25))

    assert low.risk_factors[0].startswith("Low amount: ₹50.125 - ")
    assert high.risk_factors[0].startswith("High amount: ₹60,000.5 - ")
    assert (
        "✓ Normal amount: ₹1,234.25 - Within typical transaction range"
        in normal.risk_factors
    )


@pytest.mark.parametrize(
    "amount, expected",
    [(99.99, 0.10), (100, 0.0), (50000, 0.0), (50000.01, 0.25)],
)
def test_amount_boundaries(scorer, amount, expected):
    assert scorer.assess(_txn(amount=amount)).risk_score == pytest.approx(expected)


@pytest.mark.parametrize(
    "hour, risky",
    [(0, True), (5, True), (6, False), (21, False), (22, True), (23, True)],
)
def test_hour_boundaries(scorer, hour, risky):
    assert scorer.is_high_risk_hour(hour) is risky
    expected = 0.20 if risky else 0.0
    assert scorer.assess(_txn(hour=hour)).risk_score == pytest.approx(expected)


@pytest.mark.parametrize("age, risky", [(17, False), (18, True), (25, True), (26, False)])
def test_age_boundaries(scorer, age, risky):
    expected = 0.15 if risky else 0.0
    assert scorer.assess(_txn(age=age)).risk_score == pytest.approx(expected)


def test_high_risk_regions(scorer):
    for region in (Region.ANDHRA_PRADESH, Region.ARUNACHAL_PRADESH, Region.ASSAM):
        assert scorer.assess(_txn(region=region)).risk_score == pytest.approx(0.10)
    assert scorer.assess(_txn(region=Region.BIHAR)).risk_score == 0


def test_score_stays_in_range_for_every_input(scorer):
    for category in Category:
        for hour in (1, 12):
            for amount in (10, 500, 90000):
                assessment = scorer.assess(
                    _txn(hour=hour, category=category, age=20, amount=amount,
                         region=Region.ASSAM)
                )
                assert 0 <= assessment.risk_score <= 1.0
                assert assessment.is_fraud == (assessment.risk_score >= 0.5)


def test_assessment_is_deterministic(scorer, risky_transaction):
    assert scorer.assess(risky_transaction) == scorer.assess(risky_transaction)


def test_classify_thresholds(scorer):
    assert scorer.classify(0.0) == RiskLevel.LOW
    assert scorer.classify(0.29) == RiskLevel.LOW
    assert scorer.classify(0.3) == RiskLevel.MEDIUM
    assert scorer.classify(0.69) == RiskLevel.MEDIUM
    assert scorer.classify(0.7) == RiskLevel.HIGH
    assert scorer.classify(1.0) == RiskLevel.HIGH


def test_config_overrides():
    scorer = RiskScorer(
        {
            "weights": {"category": 0.6},
            "high_risk_categories": ["Home"],
            "high_risk_regions": [13],
        }
    )

    assessment = scorer.assess(_txn(category=Category.HOME))
    assert assessment.risk_score == pytest.approx(0.6)
    assert assessment.is_fraud is True
    assert "(+60% risk)" in assessment.risk_factors[0]

    assert scorer.assess(_txn(region=Region.MAHARASHTRA)).risk_score == pytest.approx(0.1)
    assert scorer.assess(_txn(category=Category.TRAVEL)).risk_score == 0


def test_get_rules_describes_defaults(scorer):
    rules = scorer.get_rules()

    assert rules["weights"]["category"] == 0.30
    assert rules["high_risk_categories"] == [
        "Entertainment",
        "Shopping Net",
        "Shopping POS",
        "Travel",
    ]
    assert rules["high_risk_hours"] == [0, 1, 2, 3, 4, 5, 22, 23]
    assert rules["high_risk_regions"] == [0, 1, 2]


def test_calculate_fraud_risk_uses_default_rules(risky_transaction):
    assert calculate_fraud_risk(risky_transaction).is_fraud is True
