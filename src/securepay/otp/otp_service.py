"""
Email one-time-password relay with expiry and resend cooldown.
"""

import logging
import secrets
import time
from typing import Any, Callable, Dict

from ..exceptions import OTPCooldownError, OTPDeliveryError, OTPValidationError
from ..storage.record_store import RecordStore
from .mailer import Mailer


class OTPService:
    """Issues and verifies email OTPs."""

    def __init__(
        self,
        store: RecordStore,
        mailer: Mailer,
        config: Dict[str, Any] = None,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize the OTP service."""
        self.store = store
        self.mailer = mailer
        self.config = config or {}
        self.clock = clock
        self.logger = logging.getLogger(__name__)

        self.ttl_seconds = float(self.config.get("ttl_minutes", 5)) * 60
        self.cooldown_seconds = float(self.config.get("resend_cooldown_sec", 30))
        self.subject = self.config.get("subject", "Your SecurePay OTP")

    @staticmethod
    def _otp_key(email: str) -> str:
        return f"otp:{email}"

    @staticmethod
    def _last_sent_key(email: str) -> str:
        return f"otp_last_sent:{email}"

    @staticmethod
    def generate_otp() -> str:
        return str(100000 + secrets.randbelow(900000))

    def send_otp(self, email: str) -> Dict[str, Any]:
        """Generate an OTP for email and mail it."""
        if not email:
            raise OTPValidationError("Email is required")
        email_key = str(email).strip().lower()

        now = self.clock()
        last_sent = self.store.get(self._last_sent_key(email_key), 0)
        remaining = self.cooldown_seconds - (now - last_sent)
        if remaining > 0:
            raise OTPCooldownError(
                "Please wait before requesting another OTP",
                cooldown_ms=int(remaining * 1000),
            )

        otp = self.generate_otp()
        # Kept one extra TTL past expiry so verify can still report it as expired
        self.store.set(
            self._otp_key(email_key),
            {"otp": otp, "expires_at": now + self.ttl_seconds},
            ttl=self.ttl_seconds * 2,
        )

        minutes = int(self.ttl_seconds // 60)
        try:
            preview_url = self.mailer.send(
                to=str(email).strip(),
                subject=self.subject,
                text=f"Your OTP is {otp}. It expires in {minutes} minutes.",
                html=f"<p>Your OTP is <b>{otp}</b>. It expires in {minutes} minutes.</p>",
            )
        except Exception as e:
            self.logger.error(f"Failed to send OTP to {email_key}: {e}")
            raise OTPDeliveryError("Failed to send OTP")

        self.store.set(
            self._last_sent_key(email_key), self.clock(), ttl=self.cooldown_seconds
        )
        self.logger.info(f"OTP sent to {email_key}")

        return {
            "ok": True,
            "preview_url": preview_url,
            "cooldown_sec": int(self.cooldown_seconds),
        }

    def verify_otp(self, email: str, otp: str) -> Dict[str, Any]:
        """Check an OTP. A successful check consumes it."""
        if not email or not otp:
            raise OTPValidationError("Email and OTP are required")
        email_key = str(email).strip().lower()
        key = self._otp_key(email_key)

        record = self.store.get(key)
        if not record:
            raise OTPValidationError("OTP not found. Please request again.")

        if self.clock() > record["expires_at"]:
            self.store.delete(key)
            raise OTPValidationError("OTP expired. Please request again.")

        if str(record["otp"]) != str(otp).strip():
            raise OTPValidationError("Invalid OTP")

        self.store.delete(key)
        self.logger.info(f"OTP verified for {email_key}")
        return {"ok": True}
