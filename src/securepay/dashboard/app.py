"""
Flask application exposing the SecurePay backend API.
"""

import logging
from typing import Any, Dict, Optional

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from ..exceptions import SecurePayError
from ..otp.mailer import Mailer, create_mailer
from ..otp.otp_service import OTPService
from ..processing.account_service import AccountService
from ..processing.merchant_verifier import MerchantVerifier
from ..processing.payment_processor import PaymentProcessor
from ..processing.risk_scorer import RiskScorer
from ..storage.record_store import RecordStore, create_record_store
from ..storage.repository import SecurePayRepository
from .api import (
    MerchantsAPI,
    PaymentsAPI,
    create_merchants_blueprint,
    create_otp_blueprint,
    create_payments_blueprint,
    create_users_blueprint,
)


class SecurePayDashboard:
    """Main backend application."""

    def __init__(
        self,
        config: Dict[str, Any],
        store: Optional[RecordStore] = None,
        mailer: Optional[Mailer] = None,
    ):
        """Initialize the application and its components."""
        self.config = config
        self.logger = logging.getLogger(__name__)

        dashboard_config = config.get("dashboard", {})

        self.app = Flask(__name__)
        CORS(self.app, origins=dashboard_config.get("cors_origins", "*"))

        # Initialize components
        self.store = store or create_record_store(config.get("storage", {}))
        self.repository = SecurePayRepository(self.store)

        self.risk_scorer = RiskScorer(config.get("risk_scorer", {}))
        self.merchant_verifier = MerchantVerifier(
            self.risk_scorer, config.get("merchant_verifier", {})
        )
        self.payment_processor = PaymentProcessor(
            self.repository, self.risk_scorer, config.get("payments", {})
        )
        self.account_service = AccountService(self.repository, self.merchant_verifier)

        self.mailer = mailer or create_mailer(config.get("smtp", {}))
        self.otp_service = OTPService(self.store, self.mailer, config.get("otp", {}))

        if dashboard_config.get("seed_admin", True):
            self.repository.ensure_admin_user()

        self._register_blueprints()
        self._register_routes()
        self._register_error_handlers()

    def _register_blueprints(self):
        """Register API blueprints."""
        payments_api = PaymentsAPI(
            self.repository,
            self.payment_processor,
            self.account_service,
            self.risk_scorer,
        )
        merchants_api = MerchantsAPI(
            self.repository, self.account_service, self.merchant_verifier
        )

        self.app.register_blueprint(create_payments_blueprint(payments_api))
        self.app.register_blueprint(create_merchants_blueprint(merchants_api))
        self.app.register_blueprint(
            create_users_blueprint(self.repository, self.account_service)
        )
        self.app.register_blueprint(create_otp_blueprint(self.otp_service))

    def _register_routes(self):
        """Register application-level routes."""

        @self.app.route("/api/health")
        def health_check():
            """Health check endpoint."""
            health = self.payment_processor.health_check()
            status_code = 200 if health["status"] == "healthy" else 503
            return jsonify(health), status_code

        @self.app.route("/api/rules")
        def get_rules():
            """Describe the active scoring rules."""
            return jsonify(self.risk_scorer.get_rules())

    def _register_error_handlers(self):
        """Map domain errors onto JSON responses."""

        @self.app.errorhandler(SecurePayError)
        def handle_domain_error(error):
            if error.status_code >= 500:
                self.logger.error(f"Request failed: {error.message}")
            return jsonify(error.to_dict()), error.status_code

        @self.app.errorhandler(ValueError)
        def handle_value_error(error):
            return jsonify({"error": str(error)}), 400

        @self.app.errorhandler(Exception)
        def handle_unexpected_error(error):
            if isinstance(error, HTTPException):
                return error
            self.logger.error(f"Unhandled error: {error}", exc_info=True)
            return jsonify({"error": "Internal server error"}), 500

    def run(self, host: str = "0.0.0.0", port: int = 4000, debug: bool = False):
        """Run the Flask application."""
        self.logger.info(f"Starting SecurePay backend on {host}:{port}")
        self.app.run(host=host, port=port, debug=debug)


def create_app(
    config: Dict[str, Any],
    store: Optional[RecordStore] = None,
    mailer: Optional[Mailer] = None,
) -> Flask:
    """Create and configure the Flask app."""
    dashboard = SecurePayDashboard(config, store=store, mailer=mailer)
    return dashboard.app
