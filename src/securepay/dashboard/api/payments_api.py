"""
Payments API endpoints: risk assessment, payment initiation and history.
"""

from typing import Any, Dict, List, Optional

from flask import Blueprint, jsonify, request

from ...exceptions import NotFoundError, ValidationError
from ...models.records import PaymentStatus
from ...models.transaction import Transaction
from ...processing.account_service import AccountService
from ...processing.payment_processor import PaymentProcessor
from ...processing.risk_scorer import RiskScorer
from ...storage.repository import SecurePayRepository


class PaymentsAPI:
    """API operations for payments and transaction history."""

    def __init__(
        self,
        repository: SecurePayRepository,
        payment_processor: PaymentProcessor,
        account_service: AccountService,
        risk_scorer: RiskScorer,
    ):
        """Initialize the payments API."""
        self.repository = repository
        self.payment_processor = payment_processor
        self.account_service = account_service
        self.risk_scorer = risk_scorer

    def assess(self, data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            transaction = Transaction.from_dict(data)
        except (TypeError, ValueError) as e:
            raise ValidationError(str(e))
        return self.risk_scorer.assess(transaction).to_dict()

    def get_transactions(
        self,
        status: Optional[str] = None,
        upi_id: Optional[str] = None,
        limit: int = 100,
    ) -> List[Dict[str, Any]]:
        """Get recent transactions with optional filtering."""
        status_filter = None
        if status:
            try:
                status_filter = PaymentStatus(status.capitalize())
            except ValueError:
                raise ValidationError(f"Invalid status: {status}")

        transactions = []
        for record in self.repository.get_transactions():
            if status_filter and record.status != status_filter:
                continue
            if upi_id and record.upi_id != upi_id:
                continue
            transactions.append(record.to_dict())
            if len(transactions) >= limit:
                break

        return transactions

    def get_transaction(self, transaction_id: str) -> Dict[str, Any]:
        record = self.repository.find_transaction(transaction_id)
        if record is None:
            raise NotFoundError("Transaction not found")
        return record.to_dict()

    def get_statistics(self) -> Dict[str, Any]:
        return {
            **self.account_service.get_statistics(),
            "processing": self.payment_processor.get_metrics(),
        }


def _parse_limit(value: Optional[str], default: int = 100) -> int:
    if value is None:
        return default
    try:
        limit = int(value)
    except ValueError:
        raise ValidationError(f"Invalid limit: {value}")
    if limit <= 0:
        raise ValidationError("Limit must be positive")
    return limit


def create_payments_blueprint(api: PaymentsAPI) -> Blueprint:
    """Build the payments blueprint around an API instance."""
    payments_bp = Blueprint("payments", __name__)

    @payments_bp.route("/api/assess", methods=["POST"])
    def assess_transaction():
        """Score a single transaction."""
        return jsonify(api.assess(request.get_json(silent=True) or {}))

    @payments_bp.route("/api/payments", methods=["POST"])
    def make_payment():
        """Initiate a payment to a registered merchant."""
        record = api.payment_processor.make_payment(request.get_json(silent=True) or {})
        return jsonify(record.to_dict()), 201

    @payments_bp.route("/api/transactions", methods=["GET"])
    def get_transactions():
        """Get recent transactions."""
        transactions = api.get_transactions(
            status=request.args.get("status"),
            upi_id=request.args.get("upi_id"),
            limit=_parse_limit(request.args.get("limit")),
        )
        return jsonify(transactions)

    @payments_bp.route("/api/transactions/<transaction_id>", methods=["GET"])
    def get_transaction(transaction_id):
        """Get a specific transaction."""
        return jsonify(api.get_transaction(transaction_id))

    @payments_bp.route("/api/statistics", methods=["GET"])
    def get_statistics():
        """Get admin statistics."""
        return jsonify(api.get_statistics())

    return payments_bp
