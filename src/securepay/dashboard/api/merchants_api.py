"""
Merchant onboarding and verification endpoints.
"""

from typing import Any, Dict, List

from flask import Blueprint, jsonify, request

from ...exceptions import NotFoundError, ValidationError
from ...models.transaction import Transaction
from ...processing.account_service import AccountService
from ...processing.merchant_verifier import MerchantVerifier
from ...storage.repository import SecurePayRepository
from ...upi import build_payment_uri, parse_upi_payload


class MerchantsAPI:
    """API operations for merchants."""

    def __init__(
        self,
        repository: SecurePayRepository,
        account_service: AccountService,
        merchant_verifier: MerchantVerifier,
    ):
        """Initialize the merchants API."""
        self.repository = repository
        self.account_service = account_service
        self.merchant_verifier = merchant_verifier

    def _merchant_view(self, merchant) -> Dict[str, Any]:
        data = merchant.to_dict()
        data["payment_uri"] = build_payment_uri(merchant.upi_id, merchant.business_name)
        return data

    def get_merchants(self) -> List[Dict[str, Any]]:
        return [self._merchant_view(m) for m in self.repository.get_merchants()]

    def get_merchant(self, upi_id: str) -> Dict[str, Any]:
        merchant = self.repository.find_merchant_by_upi(upi_id)
        if merchant is None:
            raise NotFoundError("Merchant not found")

        data = self._merchant_view(merchant)
        data["total_transactions"] = len(self.repository.get_merchant_transactions(upi_id))
        return data

    def onboard(self, form: Dict[str, Any]) -> Dict[str, Any]:
        return self._merchant_view(self.account_service.onboard_merchant(form))

    def verify_history(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Verify an explicit list of transactions."""
        items = data.get("transactions")
        if not isinstance(items, list):
            raise ValidationError("transactions must be a list")

        try:
            transactions = [Transaction.from_dict(item) for item in items]
        except (TypeError, ValueError) as e:
            raise ValidationError(str(e))

        return self.merchant_verifier.verify(transactions).to_dict()


def create_merchants_blueprint(api: MerchantsAPI) -> Blueprint:
    """Build the merchants blueprint around an API instance."""
    merchants_bp = Blueprint("merchants", __name__)

    @merchants_bp.route("/api/merchants", methods=["GET"])
    def get_merchants():
        """List onboarded merchants."""
        return jsonify(api.get_merchants())

    @merchants_bp.route("/api/merchants", methods=["POST"])
    def onboard_merchant():
        """Onboard a merchant."""
        return jsonify(api.onboard(request.get_json(silent=True) or {})), 201

    @merchants_bp.route("/api/merchants/verify", methods=["POST"])
    def verify_history():
        """Verify a merchant from a supplied transaction history."""
        return jsonify(api.verify_history(request.get_json(silent=True) or {}))

    @merchants_bp.route("/api/merchants/<upi_id>", methods=["GET"])
    def get_merchant(upi_id):
        """Get merchant details."""
        return jsonify(api.get_merchant(upi_id))

    @merchants_bp.route("/api/merchants/<upi_id>/verification", methods=["GET"])
    def get_verification(upi_id):
        """Verify a merchant from its stored payments."""
        return jsonify(api.account_service.verify_merchant(upi_id).to_dict())

    @merchants_bp.route("/api/upi/parse", methods=["POST"])
    def parse_upi():
        """Parse a scanned UPI QR payload."""
        data = request.get_json(silent=True) or {}
        payload = parse_upi_payload(data.get("payload", ""))
        return jsonify(
            {"upi_id": payload.upi_id, "amount": payload.amount, "params": payload.params}
        )

    return merchants_bp
