"""
Risk assessment and merchant verification result models.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Any


class RiskLevel(Enum):
    """Risk level enumeration."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class VerificationStatus(Enum):
    """Merchant verification status enumeration."""

    VERIFIED = "VERIFIED"
    PENDING = "PENDING"
    FLAGGED = "FLAGGED"


@dataclass
class RiskAssessment:
    """Outcome of scoring a single transaction."""

    risk_score: float
    risk_level: RiskLevel
    risk_factors: List[str] = field(default_factory=list)
    is_fraud: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert assessment to dictionary."""
        return {
            "risk_score": self.risk_score,
            "risk_level": self.risk_level.value,
            "risk_factors": list(self.risk_factors),
            "is_fraud": self.is_fraud,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RiskAssessment":
        """Create assessment from dictionary."""
        return cls(
            risk_score=float(data["risk_score"]),
            risk_level=RiskLevel(data["risk_level"]),
            risk_factors=list(data.get("risk_factors", [])),
            is_fraud=bool(data.get("is_fraud", False)),
        )


@dataclass
class VerificationResult:
    """Aggregated trust assessment for a merchant."""

    verification_score: float
    status: VerificationStatus
    flags: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert verification result to dictionary."""
        return {
            "verification_score": self.verification_score,
            "status": self.status.value,
            "flags": list(self.flags),
        }
