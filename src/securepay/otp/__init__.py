"""
Email OTP relay components.
"""

from .mailer import Mailer, LoggingMailer, SMTPMailer, create_mailer
from .otp_service import OTPService

__all__ = ["Mailer", "LoggingMailer", "SMTPMailer", "create_mailer", "OTPService"]
