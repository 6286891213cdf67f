"""
Persisted record models for users, merchants and payments.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Optional, Any

from .risk_assessment import RiskAssessment
from .transaction import Category, Region, Transaction


class Role(Enum):
    """Account role enumeration."""

    ADMIN = "admin"
    USER = "user"
    MERCHANT = "merchant"


class PaymentStatus(Enum):
    """Payment outcome enumeration."""

    SUCCESS = "Success"
    FLAGGED = "Flagged"
    BLOCKED = "Blocked"


@dataclass
class UserRecord:
    """Stored customer / admin account."""

    id: str
    name: str
    email: str
    mobile: str
    role: Role = Role.USER
    state: Optional[str] = None
    date_of_birth: Optional[str] = None
    age: Optional[int] = None
    bank: Optional[str] = None
    address: Optional[str] = None
    zip_code: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "mobile": self.mobile,
            "role": self.role.value,
            "state": self.state,
            "date_of_birth": self.date_of_birth,
            "age": self.age,
            "bank": self.bank,
            "address": self.address,
            "zip_code": self.zip_code,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserRecord":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            email=data.get("email", ""),
            mobile=data.get("mobile", ""),
            role=Role(data.get("role", Role.USER.value)),
            state=data.get("state"),
            date_of_birth=data.get("date_of_birth"),
            age=data.get("age"),
            bank=data.get("bank"),
            address=data.get("address"),
            zip_code=data.get("zip_code"),
        )


@dataclass
class MerchantRecord:
    """Stored merchant onboarding details."""

    id: str
    business_name: str
    owner_name: str
    email: str
    mobile: str
    business_type: Category
    address: str
    city: str
    state: str
    zip_code: str
    upi_id: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "business_name": self.business_name,
            "owner_name": self.owner_name,
            "email": self.email,
            "mobile": self.mobile,
            "business_type": self.business_type.display_name,
            "address": self.address,
            "city": self.city,
            "state": self.state,
            "zip_code": self.zip_code,
            "upi_id": self.upi_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MerchantRecord":
        return cls(
            id=data["id"],
            business_name=data.get("business_name", ""),
            owner_name=data.get("owner_name", ""),
            email=data.get("email", ""),
            mobile=data.get("mobile", ""),
            business_type=Category.from_value(data["business_type"]),
            address=data.get("address", ""),
            city=data.get("city", ""),
            state=data.get("state", ""),
            zip_code=data.get("zip_code", ""),
            upi_id=data["upi_id"],
        )


@dataclass
class PaymentRecord:
    """Stored payment together with the assessment it was given."""

    id: str
    timestamp: datetime
    amount: float
    category: Category
    upi_id: str
    status: PaymentStatus
    customer_age: int
    region: Region
    merchant_name: Optional[str] = None
    customer_id: Optional[str] = None
    assessment: Optional[RiskAssessment] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def fraud_risk(self) -> int:
        """0 for legitimate, 1 for fraud."""
        return 1 if self.assessment and self.assessment.is_fraud else 0

    def to_transaction(self) -> Transaction:
        """Rebuild the scoring input for this payment."""
        return Transaction(
            hour_of_day=self.timestamp.hour,
            category=self.category,
            customer_age=self.customer_age,
            amount=self.amount,
            region=self.region,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat(),
            "amount": self.amount,
            "category": self.category.display_name,
            "upi_id": self.upi_id,
            "status": self.status.value,
            "fraud_risk": self.fraud_risk,
            "customer_age": self.customer_age,
            "region": self.region.value,
            "customer_location": self.region.display_name,
            "merchant_name": self.merchant_name,
            "customer_id": self.customer_id,
            "assessment": self.assessment.to_dict() if self.assessment else None,
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PaymentRecord":
        timestamp = data.get("timestamp")
        if isinstance(timestamp, str):
            timestamp = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))

        assessment_data = data.get("assessment")

        return cls(
            id=data["id"],
            timestamp=timestamp,
            amount=float(data["amount"]),
            category=Category.from_value(data["category"]),
            upi_id=data["upi_id"],
            status=PaymentStatus(data["status"]),
            customer_age=int(data["customer_age"]),
            region=Region.from_value(data["region"]),
            merchant_name=data.get("merchant_name"),
            customer_id=data.get("customer_id"),
            assessment=RiskAssessment.from_dict(assessment_data)
            if assessment_data
            else None,
            metadata=data.get("metadata", {}),
        )
