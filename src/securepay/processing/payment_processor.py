"""
Payment processor: scores payments and records their outcome.
"""

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from ..exceptions import NotFoundError, ValidationError
from ..models.records import PaymentRecord, PaymentStatus, UserRecord
from ..models.risk_assessment import RiskAssessment
from ..models.transaction import Region, Transaction
from ..storage.repository import SecurePayRepository
from ..upi import is_valid_upi_id
from .risk_scorer import RiskScorer


class PaymentProcessor:
    """Initiates payments to registered merchants."""

    def __init__(
        self,
        repository: SecurePayRepository,
        risk_scorer: RiskScorer = None,
        config: Dict[str, Any] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """Initialize the payment processor."""
        self.repository = repository
        self.risk_scorer = risk_scorer or RiskScorer()
        self.config = config or {}
        self.clock = clock
        self.logger = logging.getLogger(__name__)

        self.max_workers = self.config.get("max_workers", 4)

        # Callbacks
        self.fraud_callback: Optional[Callable[[PaymentRecord], None]] = None

        # Metrics
        self.metrics = {
            "payments_processed": 0,
            "payments_blocked": 0,
            "processing_errors": 0,
            "start_time": self.clock(),
            "last_processed_time": None,
        }

    def set_fraud_callback(self, callback: Callable[[PaymentRecord], None]):
        """Set a callback invoked for every blocked payment."""
        self.fraud_callback = callback

    def make_payment(self, payment_data: Dict[str, Any]) -> PaymentRecord:
        """Score a payment to a merchant and persist the result."""
        try:
            upi_id = str(payment_data.get("upi_id") or "").strip()
            if not is_valid_upi_id(upi_id):
                raise ValidationError(
                    "Please enter a valid UPI ID (example: merchant@upi)"
                )

            merchant = self.repository.find_merchant_by_upi(upi_id)
            if merchant is None:
                raise NotFoundError("This merchant is not registered in our system.")

            amount = self._parse_amount(payment_data.get("amount"))
            timestamp = self._parse_timestamp(payment_data.get("timestamp"))

            customer = None
            customer_id = payment_data.get("customer_id")
            if customer_id:
                customer = self.repository.find_user(customer_id)
                if customer is None:
                    raise NotFoundError(f"Customer not found: {customer_id}")

            customer_age = self._resolve_age(payment_data, customer)
            region = self._resolve_region(payment_data, customer)

            try:
                transaction = Transaction(
                    hour_of_day=timestamp.hour,
                    category=merchant.business_type,
                    customer_age=customer_age,
                    amount=amount,
                    region=region,
                )
            except ValueError as e:
                raise ValidationError(str(e))

            assessment = self.risk_scorer.assess(transaction)
            status = PaymentStatus.BLOCKED if assessment.is_fraud else PaymentStatus.SUCCESS

            record = PaymentRecord(
                id=f"TXN_{int(timestamp.timestamp() * 1000)}",
                timestamp=timestamp,
                amount=amount,
                category=merchant.business_type,
                upi_id=upi_id,
                status=status,
                customer_age=customer_age,
                region=region,
                merchant_name=merchant.business_name,
                customer_id=customer.id if customer else None,
                assessment=assessment,
            )
            self.repository.add_transaction(record)

            self.metrics["payments_processed"] += 1
            self.metrics["last_processed_time"] = self.clock()
            if status == PaymentStatus.BLOCKED:
                self.metrics["payments_blocked"] += 1
                self.logger.warning(
                    f"Payment {record.id} to {upi_id} blocked "
                    f"(score={assessment.risk_score:.2f})"
                )
                if self.fraud_callback:
                    self.fraud_callback(record)
            else:
                self.logger.info(f"Payment {record.id} to {upi_id} succeeded")

            return record

        except (ValidationError, NotFoundError):
            self.metrics["processing_errors"] += 1
            raise

    def assess_batch(self, transactions: List[Transaction]) -> List[RiskAssessment]:
        """Score many transactions in parallel, preserving input order."""
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            return list(executor.map(self.risk_scorer.assess, transactions))

    def _parse_amount(self, value: Any) -> float:
        try:
            amount = float(value)
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid amount: {value!r}")

        if not math.isfinite(amount):
            raise ValidationError(f"Invalid amount: {value!r}")
        if amount <= 0:
            raise ValidationError("Amount must be greater than zero")
        return amount

    def _parse_timestamp(self, value: Any) -> datetime:
        if value is None:
            return self.clock()
        if isinstance(value, datetime):
            return value
        try:
            return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            raise ValidationError(f"Invalid timestamp: {value!r}")

    def _resolve_age(
        self, payment_data: Dict[str, Any], customer: Optional[UserRecord]
    ) -> int:
        age = customer.age if customer and customer.age else payment_data.get("customer_age")
        if age is None:
            raise ValidationError("Customer age is required")
        try:
            return int(age)
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid customer age: {age!r}")

    def _resolve_region(
        self, payment_data: Dict[str, Any], customer: Optional[UserRecord]
    ) -> Region:
        value = customer.state if customer and customer.state else payment_data.get("region")
        if value is None:
            raise ValidationError("Customer region is required")
        try:
            return Region.from_value(value)
        except ValueError as e:
            raise ValidationError(str(e))

    def get_metrics(self) -> Dict[str, Any]:
        """Get processing metrics."""
        uptime = (self.clock() - self.metrics["start_time"]).total_seconds()
        processed = self.metrics["payments_processed"]

        return {
            **self.metrics,
            "start_time": self.metrics["start_time"].isoformat(),
            "last_processed_time": self.metrics["last_processed_time"].isoformat()
            if self.metrics["last_processed_time"]
            else None,
            "uptime_seconds": uptime,
            "block_rate": self.metrics["payments_blocked"] / max(1, processed),
            "error_rate": self.metrics["processing_errors"] / max(1, processed),
        }

    def health_check(self) -> Dict[str, Any]:
        """Perform health check on the processor."""
        health_status = {
            "status": "healthy",
            "components": {"risk_scorer": "healthy"},
            "timestamp": self.clock().isoformat(),
        }

        if self.repository.store.ping():
            health_status["components"]["record_store"] = "healthy"
        else:
            health_status["components"]["record_store"] = "unhealthy"
            health_status["status"] = "unhealthy"

        return health_status
