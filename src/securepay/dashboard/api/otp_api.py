"""
Email OTP relay endpoints.
"""

from flask import Blueprint, jsonify, request

from ...otp.otp_service import OTPService


def create_otp_blueprint(otp_service: OTPService) -> Blueprint:
    """Build the OTP blueprint."""
    otp_bp = Blueprint("otp", __name__)

    @otp_bp.route("/api/send-otp", methods=["POST"])
    def send_otp():
        """Send an OTP to an email address."""
        data = request.get_json(silent=True) or {}
        return jsonify(otp_service.send_otp(data.get("email")))

    @otp_bp.route("/api/verify-otp", methods=["POST"])
    def verify_otp():
        """Verify an OTP."""
        data = request.get_json(silent=True) or {}
        return jsonify(otp_service.verify_otp(data.get("email"), data.get("otp")))

    return otp_bp
