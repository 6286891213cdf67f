"""
HTTP layer for the SecurePay backend.
"""

from .app import SecurePayDashboard, create_app

__all__ = ["SecurePayDashboard", "create_app"]
