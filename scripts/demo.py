#!/usr/bin/env python3
"""
Demo script for the SecurePay backend.
Populates an in-memory store, makes a few payments and verifies merchants.
"""

import logging
from datetime import datetime

from securepay.ingestion.data_simulator import TransactionSimulator
from securepay.models.transaction import Category, Region, Transaction
from securepay.processing.account_service import AccountService
from securepay.processing.merchant_verifier import MerchantVerifier
from securepay.processing.payment_processor import PaymentProcessor
from securepay.processing.risk_scorer import RiskScorer
from securepay.storage.record_store import InMemoryRecordStore
from securepay.storage.repository import SecurePayRepository


class SecurePayDemo:
    """Walks through scoring, payments and merchant verification."""

    def __init__(self, seed: int = 42):
        """Initialize the demo."""
        self.logger = self._setup_logging()

        self.repository = SecurePayRepository(InMemoryRecordStore())
        self.risk_scorer = RiskScorer()
        self.merchant_verifier = MerchantVerifier(self.risk_scorer)
        self.processor = PaymentProcessor(self.repository, self.risk_scorer)
        self.accounts = AccountService(self.repository, self.merchant_verifier)
        self.simulator = TransactionSimulator({"seed": seed}, self.risk_scorer)

    def _setup_logging(self):
        """Setup logging configuration."""
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
        return logging.getLogger(__name__)

    def score_examples(self):
        """Score a handful of hand-picked transactions."""
        self.logger.info("=== Scoring sample transactions ===")
        examples = [
            Transaction(14, Category.GROCERY_POS, 40, 5000, Region.MAHARASHTRA),
            Transaction(2, Category.TRAVEL, 22, 60000, Region.ANDHRA_PRADESH),
            Transaction(23, Category.SHOPPING_NET, 30, 50, Region.KERALA),
        ]
        for transaction in examples:
            assessment = self.risk_scorer.assess(transaction)
            self.logger.info(
                f"{transaction.category.display_name} ₹{transaction.amount:.0f} at "
                f"{transaction.hour_of_day:02d}:00 -> {assessment.risk_level.value} "
                f"({assessment.risk_score:.2f}, fraud={assessment.is_fraud})"
            )
            for factor in assessment.risk_factors:
                self.logger.info(f"    {factor}")

    def populate(self):
        """Fill the store with simulated accounts and payments."""
        self.logger.info("=== Generating demo data ===")
        counts = self.simulator.populate_repository(
            self.repository, users=10, merchants=5, payments_per_merchant=20
        )
        self.logger.info(f"Generated {counts}")

    def make_payments(self):
        """Make live payments to the first simulated merchant."""
        self.logger.info("=== Making payments ===")
        merchant = self.repository.get_merchants()[0]
        customer = self.repository.get_users()[1]

        for hour, amount in [(10, 2500), (3, 75000), (23, 40)]:
            record = self.processor.make_payment(
                {
                    "upi_id": merchant.upi_id,
                    "amount": amount,
                    "customer_id": customer.id,
                    "timestamp": datetime.now().replace(hour=hour).isoformat(),
                }
            )
            self.logger.info(
                f"{record.id}: ₹{record.amount:.0f} to {record.upi_id} -> "
                f"{record.status.value}"
            )

    def verify_merchants(self):
        """Verify every merchant from its stored history."""
        self.logger.info("=== Verifying merchants ===")
        for merchant in self.repository.get_merchants():
            result = self.accounts.verify_merchant(merchant.upi_id)
            self.logger.info(
                f"{merchant.business_name} ({merchant.upi_id}): "
                f"{result.status.value} score={result.verification_score:.2f} "
                f"flags={result.flags}"
            )

    def run(self):
        """Run the complete demo."""
        self.score_examples()
        self.populate()
        self.make_payments()
        self.verify_merchants()
        self.logger.info(f"Statistics: {self.accounts.get_statistics()}")
        self.logger.info(f"Processor metrics: {self.processor.get_metrics()}")


def main():
    """Main demo function."""
    SecurePayDemo().run()


if __name__ == "__main__":
    main()
