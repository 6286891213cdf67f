"""
Exception hierarchy for the SecurePay backend.
"""

from typing import Optional


class SecurePayError(Exception):
    """Base class for domain errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"error": self.message}


class ValidationError(SecurePayError, ValueError):
    """Request data failed validation."""

    status_code = 400


class NotFoundError(SecurePayError):
    """A referenced record does not exist."""

    status_code = 404


class OTPError(SecurePayError):
    """Base class for OTP relay errors."""

    status_code = 400


class OTPValidationError(OTPError):
    """Missing, unknown, expired or mismatching OTP."""

    status_code = 400


class OTPCooldownError(OTPError):
    """OTP requested again before the resend cooldown elapsed."""

    status_code = 429

    def __init__(self, message: str, cooldown_ms: Optional[int] = None):
        super().__init__(message)
        self.cooldown_ms = cooldown_ms

    def to_dict(self):
        return {"error": self.message, "cooldown_ms": self.cooldown_ms}


class OTPDeliveryError(OTPError):
    """The OTP email could not be sent."""

    status_code = 500
