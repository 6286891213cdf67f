"""
Transaction data model for fraud risk scoring.
"""

import math
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any, Union


class _CodedEnum(Enum):
    """Enum with integer codes and human readable display names."""

    def __new__(cls, code: int, display_name: str):
        member = object.__new__(cls)
        member._value_ = code
        member.display_name = display_name
        return member

    @classmethod
    def from_value(cls, value: Union["_CodedEnum", int, str]):
        """Resolve a member from itself, its code, its display name or its key."""
        if isinstance(value, cls):
            return value

        if isinstance(value, bool):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")

        # Dataset columns arrive as numpy integers or integral floats
        if isinstance(value, numbers.Real) and float(value).is_integer():
            try:
                return cls(int(value))
            except ValueError:
                raise ValueError(f"Invalid {cls.__name__} code: {value}")

        if isinstance(value, str):
            text = value.strip()
            if text.lstrip("-").isdigit():
                return cls.from_value(int(text))

            normalized = text.replace("_", " ").replace("-", " ").lower()
            for member in cls:
                if member.display_name.lower() == normalized:
                    return member
                if member.name.replace("_", " ").lower() == normalized:
                    return member

        raise ValueError(f"Invalid {cls.__name__}: {value!r}")


class Category(_CodedEnum):
    """Merchant / transaction categories from the source dataset."""

    ENTERTAINMENT = (0, "Entertainment")
    FOOD_DINING = (1, "Food Dining")
    GAS_TRANSPORT = (2, "Gas Transport")
    GROCERY_NET = (3, "Grocery Net")
    GROCERY_POS = (4, "Grocery POS")
    HEALTH_FITNESS = (5, "Health Fitness")
    HOME = (6, "Home")
    KIDS_PETS = (7, "Kids Pets")
    MISC_NET = (8, "Misc Net")
    MISC_POS = (9, "Misc POS")
    PERSONAL_CARE = (10, "Personal Care")
    SHOPPING_NET = (11, "Shopping Net")
    SHOPPING_POS = (12, "Shopping POS")
    TRAVEL = (13, "Travel")


class Region(_CodedEnum):
    """Encoded Indian states and union territories."""

    ANDHRA_PRADESH = (0, "Andhra Pradesh")
    ARUNACHAL_PRADESH = (1, "Arunachal Pradesh")
    ASSAM = (2, "Assam")
    BIHAR = (3, "Bihar")
    CHHATTISGARH = (4, "Chhattisgarh")
    GOA = (5, "Goa")
    GUJARAT = (6, "Gujarat")
    HARYANA = (7, "Haryana")
    HIMACHAL_PRADESH = (8, "Himachal Pradesh")
    JHARKHAND = (9, "Jharkhand")
    KARNATAKA = (10, "Karnataka")
    KERALA = (11, "Kerala")
    MADHYA_PRADESH = (12, "Madhya Pradesh")
    MAHARASHTRA = (13, "Maharashtra")
    MANIPUR = (14, "Manipur")
    MEGHALAYA = (15, "Meghalaya")
    MIZORAM = (16, "Mizoram")
    NAGALAND = (17, "Nagaland")
    ODISHA = (18, "Odisha")
    PUNJAB = (19, "Punjab")
    RAJASTHAN = (20, "Rajasthan")
    SIKKIM = (21, "Sikkim")
    TAMIL_NADU = (22, "Tamil Nadu")
    TELANGANA = (23, "Telangana")
    TRIPURA = (24, "Tripura")
    UTTAR_PRADESH = (25, "Uttar Pradesh")
    UTTARAKHAND = (26, "Uttarakhand")
    WEST_BENGAL = (27, "West Bengal")
    ANDAMAN_AND_NICOBAR_ISLANDS = (28, "Andaman and Nicobar Islands")
    CHANDIGARH = (29, "Chandigarh")
    DADRA_NAGAR_HAVELI_DAMAN_DIU = (30, "Dadra and Nagar Haveli and Daman and Diu")
    LAKSHADWEEP = (31, "Lakshadweep")
    DELHI = (32, "Delhi")
    PUDUCHERRY = (33, "Puducherry")
    JAMMU_AND_KASHMIR = (34, "Jammu and Kashmir")
    LADAKH = (35, "Ladakh")


@dataclass(frozen=True)
class Transaction:
    """Scoring input for a single payment."""

    hour_of_day: int
    category: Category
    customer_age: int
    amount: float
    region: Region

    def __post_init__(self):
        """Validate and normalize transaction data after initialization."""
        object.__setattr__(self, "category", Category.from_value(self.category))
        object.__setattr__(self, "region", Region.from_value(self.region))

        if not 0 <= self.hour_of_day <= 23:
            raise ValueError(f"Invalid hour of day: {self.hour_of_day}")

        if self.customer_age <= 0:
            raise ValueError(f"Customer age must be positive: {self.customer_age}")

        if not math.isfinite(self.amount):
            raise ValueError(f"Transaction amount must be a finite number: {self.amount}")

        if self.amount < 0:
            raise ValueError("Transaction amount cannot be negative")

    def to_dict(self) -> Dict[str, Any]:
        """Convert transaction to dictionary for serialization."""
        return {
            "hour_of_day": self.hour_of_day,
            "category": self.category.value,
            "customer_age": self.customer_age,
            "amount": self.amount,
            "region": self.region.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Transaction":
        """Create transaction from dictionary.

        Accepts both our own keys and the column names of the labelled
        transaction dataset (trans_hour, age, trans_amount, state).
        """
        try:
            hour = data["hour_of_day"] if "hour_of_day" in data else data["trans_hour"]
            age = data["customer_age"] if "customer_age" in data else data["age"]
            amount = data["amount"] if "amount" in data else data["trans_amount"]
            region = data["region"] if "region" in data else data["state"]
            category = data["category"]
        except KeyError as e:
            raise ValueError(f"Missing transaction field: {e.args[0]}")

        return cls(
            hour_of_day=int(hour),
            category=category,
            customer_age=int(age),
            amount=float(amount),
            region=region,
        )
