"""
Account creation, merchant onboarding and admin statistics.
"""

import logging
from datetime import date, datetime
from typing import Any, Callable, Dict, List

from ..exceptions import NotFoundError, ValidationError
from ..models.records import MerchantRecord, PaymentStatus, Role, UserRecord
from ..models.risk_assessment import VerificationResult
from ..models.transaction import Category, Region
from ..storage.repository import SecurePayRepository
from ..upi import generate_merchant_upi_id
from .merchant_verifier import MerchantVerifier

USER_REQUIRED_FIELDS = ["full_name", "email", "mobile", "state", "dob"]

MERCHANT_REQUIRED_FIELDS = [
    "business_name",
    "owner_name",
    "email",
    "mobile",
    "business_type",
    "address",
    "city",
    "state",
    "zip_code",
]


def calculate_age(date_of_birth: date, today: date) -> int:
    """Completed years between date_of_birth and today."""
    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


def _missing_fields(form: Dict[str, Any], required: List[str]) -> List[str]:
    return [name for name in required if not str(form.get(name) or "").strip()]


def _text(form: Dict[str, Any], name: str) -> str:
    return str(form[name]).strip()


class AccountService:
    """Manages customer accounts and merchant onboarding."""

    def __init__(
        self,
        repository: SecurePayRepository,
        merchant_verifier: MerchantVerifier = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """Initialize the account service."""
        self.repository = repository
        self.merchant_verifier = merchant_verifier or MerchantVerifier()
        self.clock = clock
        self.logger = logging.getLogger(__name__)

    def _timestamp_ms(self) -> int:
        return int(self.clock().timestamp() * 1000)

    def create_user(self, form: Dict[str, Any]) -> UserRecord:
        """Register a new customer account."""
        missing = _missing_fields(form, USER_REQUIRED_FIELDS)
        if missing:
            raise ValidationError(
                f"Please fill in all required fields: {', '.join(missing)}"
            )

        try:
            date_of_birth = date.fromisoformat(str(form["dob"]))
        except ValueError:
            raise ValidationError(f"Invalid date of birth: {form['dob']!r}")

        age = calculate_age(date_of_birth, self.clock().date())
        if age <= 0:
            raise ValidationError("Date of birth must be in the past")

        try:
            region = Region.from_value(_text(form, "state"))
        except ValueError as e:
            raise ValidationError(str(e))

        user = UserRecord(
            id=f"usr_{self._timestamp_ms()}",
            name=_text(form, "full_name"),
            email=_text(form, "email"),
            mobile=_text(form, "mobile"),
            role=Role.USER,
            state=region.display_name,
            date_of_birth=date_of_birth.isoformat(),
            age=age,
            bank=form.get("bank"),
            address=form.get("address"),
            zip_code=form.get("zip_code"),
        )
        self.repository.add_user(user)

        self.logger.info(f"Account created for {user.name} ({user.id})")
        return user

    def onboard_merchant(self, form: Dict[str, Any]) -> MerchantRecord:
        """Register a merchant and assign it a UPI id."""
        missing = _missing_fields(form, MERCHANT_REQUIRED_FIELDS)
        if missing:
            raise ValidationError(
                f"Please fill in all required fields: {', '.join(missing)}"
            )

        try:
            business_type = Category.from_value(form["business_type"])
        except ValueError as e:
            raise ValidationError(str(e))

        user = None
        user_id = form.get("user_id")
        if user_id:
            user = self.repository.find_user(user_id)
            if user is None:
                raise NotFoundError(f"User not found: {user_id}")

        timestamp_ms = self._timestamp_ms()
        merchant = MerchantRecord(
            id=f"mrc_{timestamp_ms}",
            business_name=_text(form, "business_name"),
            owner_name=_text(form, "owner_name"),
            email=_text(form, "email"),
            mobile=_text(form, "mobile"),
            business_type=business_type,
            address=_text(form, "address"),
            city=_text(form, "city"),
            state=_text(form, "state"),
            zip_code=_text(form, "zip_code"),
            upi_id=generate_merchant_upi_id(
                _text(form, "business_name"), timestamp_ms
            ),
        )
        self.repository.add_merchant(merchant)

        if user is not None and user.role == Role.USER:
            user.role = Role.MERCHANT
            self.repository.update_user(user)

        self.logger.info(
            f"Merchant account for {merchant.business_name} created "
            f"with UPI id {merchant.upi_id}"
        )
        return merchant

    def verify_merchant(self, upi_id: str) -> VerificationResult:
        """Verify a registered merchant from its stored payment history."""
        merchant = self.repository.find_merchant_by_upi(upi_id)
        if merchant is None:
            raise NotFoundError(f"Merchant not found: {upi_id}")

        history = [
            record.to_transaction()
            for record in self.repository.get_merchant_transactions(upi_id)
        ]
        return self.merchant_verifier.verify(history)

    def get_statistics(self) -> Dict[str, Any]:
        """Summary counts for the admin dashboard."""
        users = self.repository.get_users()
        merchants = self.repository.get_merchants()
        transactions = self.repository.get_transactions()

        by_status = {status.value: 0 for status in PaymentStatus}
        for transaction in transactions:
            by_status[transaction.status.value] += 1

        fraud_count = sum(t.fraud_risk for t in transactions)

        return {
            "total_users": sum(1 for u in users if u.role != Role.ADMIN),
            "total_merchants": len(merchants),
            "total_transactions": len(transactions),
            "transactions_by_status": by_status,
            "fraud_transactions": fraud_count,
            "fraud_rate": fraud_count / max(1, len(transactions)),
            "total_volume": sum(t.amount for t in transactions),
        }
