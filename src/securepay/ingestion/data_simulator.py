"""
Data simulator for generating demo users, merchants and payments.
"""

import random
from datetime import datetime, timedelta
from typing import Any, Dict, List

from ..models.records import MerchantRecord, PaymentRecord, PaymentStatus, Role, UserRecord
from ..models.risk_assessment import RiskLevel
from ..models.transaction import Category, Region, Transaction
from ..processing.risk_scorer import RiskScorer
from ..storage.repository import SecurePayRepository

FIRST_NAMES = [
    "Rajesh", "Priya", "Amit", "Neha", "Suresh", "Kavya", "Vikram", "Shreya",
    "Ravi", "Pooja", "Arun", "Meera", "Sandeep", "Divya", "Manoj", "Rekha",
]

LAST_NAMES = [
    "Kumar", "Sharma", "Patel", "Singh", "Reddy", "Gupta", "Agarwal", "Jain",
    "Shah", "Rao", "Nair", "Iyer", "Chopra", "Bansal", "Mittal", "Sinha",
]

BANKS = ["SBI", "HDFC", "ICICI", "Axis", "Kotak", "IndusInd", "Yes Bank", "BOB", "Canara"]

EMAIL_DOMAINS = ["gmail.com", "email.com", "yahoo.com", "outlook.com"]

USER_STATES = [
    Region.MAHARASHTRA, Region.DELHI, Region.GUJARAT, Region.KARNATAKA,
    Region.TAMIL_NADU, Region.UTTAR_PRADESH, Region.WEST_BENGAL, Region.RAJASTHAN,
    Region.TELANGANA, Region.PUNJAB, Region.HARYANA, Region.KERALA,
    Region.ODISHA, Region.BIHAR, Region.JHARKHAND,
]

# Mock payments are bucketed by risk level rather than the fraud flag
STATUS_BY_RISK_LEVEL = {
    RiskLevel.LOW: PaymentStatus.SUCCESS,
    RiskLevel.MEDIUM: PaymentStatus.FLAGGED,
    RiskLevel.HIGH: PaymentStatus.BLOCKED,
}


class TransactionSimulator:
    """Generates random but reproducible demo data."""

    def __init__(self, config: Dict[str, Any] = None, risk_scorer: RiskScorer = None):
        """Initialize the transaction simulator."""
        self.config = config or {}
        self.random = random.Random(self.config.get("seed"))
        self.risk_scorer = risk_scorer or RiskScorer()

        self.max_region_code = self.config.get("max_region_code", 9)
        self.history_days = self.config.get("history_days", 30)

        # Simulation state
        self.current_time = datetime.now()
        self.transaction_counter = 0

    def _random_name(self) -> str:
        return f"{self.random.choice(FIRST_NAMES)} {self.random.choice(LAST_NAMES)}"

    def _random_email(self, name: str) -> str:
        clean_name = ".".join(name.lower().split())
        return f"{clean_name}@{self.random.choice(EMAIL_DOMAINS)}"

    def _random_mobile(self) -> str:
        number = str(self.random.randint(6000000000, 6899999999))
        return f"+91-{number[:5]}-{number[5:]}"

    def _random_date(self) -> str:
        return datetime(
            2023, self.random.randint(1, 12), self.random.randint(1, 28)
        ).date().isoformat()

    def generate_transaction(self) -> Transaction:
        """Generate a single scoring input."""
        self.transaction_counter += 1
        return Transaction(
            hour_of_day=self.random.randint(0, 23),
            category=self.random.choice(list(Category)),
            customer_age=self.random.randint(18, 67),
            amount=float(self.random.randint(50, 100049)),
            region=Region(self.random.randint(0, self.max_region_code)),
        )

    def generate_transactions(self, count: int) -> List[Transaction]:
        """Generate multiple scoring inputs."""
        return [self.generate_transaction() for _ in range(count)]

    def generate_users(self, count: int) -> List[UserRecord]:
        """Generate customer accounts."""
        users = []
        for i in range(1, count + 1):
            name = self._random_name()
            users.append(
                UserRecord(
                    id=f"usr_mock_{i:03d}",
                    name=name,
                    email=self._random_email(name),
                    mobile=self._random_mobile(),
                    role=Role.USER,
                    state=self.random.choice(USER_STATES).display_name,
                    age=self.random.randint(18, 67),
                    bank=f"{self.random.choice(BANKS)}-****{self.random.randint(1000, 9999)}",
                )
            )
        return users

    def generate_merchants(self, count: int) -> List[MerchantRecord]:
        """Generate onboarded merchants."""
        merchants = []
        for i in range(1, count + 1):
            owner_name = self._random_name()
            business_type = self.random.choice(list(Category))
            business_name = f"{owner_name.split()[0]} {business_type.display_name} Merchant"
            merchants.append(
                MerchantRecord(
                    id=f"mrc_mock_{i:03d}",
                    business_name=business_name,
                    owner_name=owner_name,
                    email=self._random_email(business_name),
                    mobile=self._random_mobile(),
                    business_type=business_type,
                    address=f"{self.random.randint(1, 999)} Market Road",
                    city="Mumbai",
                    state=self.random.choice(USER_STATES).display_name,
                    zip_code=str(self.random.randint(100000, 999999)),
                    upi_id=f"merchant{i}@upi",
                )
            )
        return merchants

    def generate_payment(
        self, merchant: MerchantRecord, customer: UserRecord = None
    ) -> PaymentRecord:
        """Generate and score a past payment to merchant."""
        transaction = self.generate_transaction()
        if customer and customer.age:
            age = customer.age
        else:
            age = transaction.customer_age

        transaction = Transaction(
            hour_of_day=transaction.hour_of_day,
            category=merchant.business_type,
            customer_age=age,
            amount=transaction.amount,
            region=transaction.region,
        )
        assessment = self.risk_scorer.assess(transaction)

        timestamp = self.current_time - timedelta(
            seconds=self.random.randint(0, self.history_days * 86400)
        )
        timestamp = timestamp.replace(
            hour=transaction.hour_of_day,
            minute=self.random.randint(0, 59),
            second=self.random.randint(0, 59),
            microsecond=0,
        )
        # Moving the hour forward can overshoot now; step back a day to keep the hour
        if timestamp > self.current_time:
            timestamp -= timedelta(days=1)

        return PaymentRecord(
            id=f"TXN{self.transaction_counter:06d}",
            timestamp=timestamp,
            amount=transaction.amount,
            category=transaction.category,
            upi_id=merchant.upi_id,
            status=STATUS_BY_RISK_LEVEL[assessment.risk_level],
            customer_age=transaction.customer_age,
            region=transaction.region,
            merchant_name=merchant.business_name,
            customer_id=customer.id if customer else None,
            assessment=assessment,
        )

    def populate_repository(
        self,
        repository: SecurePayRepository,
        users: int = 10,
        merchants: int = 5,
        payments_per_merchant: int = 10,
    ) -> Dict[str, int]:
        """Fill a repository with demo data."""
        repository.ensure_admin_user()

        user_records = self.generate_users(users)
        repository.save_users(repository.get_users() + user_records)

        merchant_records = self.generate_merchants(merchants)
        repository.save_merchants(repository.get_merchants() + merchant_records)

        payments = []
        for merchant in merchant_records:
            for _ in range(payments_per_merchant):
                customer = self.random.choice(user_records) if user_records else None
                payments.append(self.generate_payment(merchant, customer))

        payments.sort(key=lambda p: p.timestamp, reverse=True)
        repository.save_transactions(payments + repository.get_transactions())

        return {
            "users": len(user_records),
            "merchants": len(merchant_records),
            "transactions": len(payments),
        }
