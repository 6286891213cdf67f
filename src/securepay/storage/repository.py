"""
Typed collections of users, merchants and payments over a record store.
"""

import logging
from typing import Any, Dict, List, Optional

from ..models.records import MerchantRecord, PaymentRecord, Role, UserRecord
from .record_store import RecordStore

STORAGE_KEYS = {
    "users": "pss_users",
    "merchants": "pss_merchants",
    "transactions": "pss_transactions",
}


class SecurePayRepository:
    """Repository for the application's persistent collections."""

    def __init__(self, store: RecordStore):
        """Initialize the repository."""
        self.store = store
        self.logger = logging.getLogger(__name__)

    def _read_list(self, key: str) -> List[Dict[str, Any]]:
        value = self.store.get(key, [])
        if not isinstance(value, list):
            self.logger.warning(f"Ignoring non-list value stored under {key}")
            return []
        return value

    def _load_records(self, key: str, record_cls) -> List[Any]:
        records = []
        for data in self._read_list(key):
            try:
                records.append(record_cls.from_dict(data))
            except (KeyError, TypeError, ValueError) as e:
                self.logger.warning(f"Skipping invalid record in {key}: {e}")
        return records

    # Users

    def get_users(self) -> List[UserRecord]:
        return self._load_records(STORAGE_KEYS["users"], UserRecord)

    def save_users(self, users: List[UserRecord]):
        self.store.set(STORAGE_KEYS["users"], [u.to_dict() for u in users])

    def add_user(self, user: UserRecord):
        self.save_users(self.get_users() + [user])

    def find_user(self, user_id: str) -> Optional[UserRecord]:
        for user in self.get_users():
            if user.id == user_id:
                return user
        return None

    def update_user(self, user: UserRecord) -> bool:
        users = self.get_users()
        for index, existing in enumerate(users):
            if existing.id == user.id:
                users[index] = user
                self.save_users(users)
                return True
        return False

    def ensure_admin_user(self) -> UserRecord:
        """Seed the admin account if no admin exists yet."""
        users = self.get_users()
        for user in users:
            if user.role == Role.ADMIN:
                return user

        admin = UserRecord(
            id="admin",
            name="Admin",
            email="admin@system.local",
            mobile="0000000000",
            role=Role.ADMIN,
        )
        self.save_users([admin] + users)
        self.logger.info("Seeded admin user")
        return admin

    # Merchants

    def get_merchants(self) -> List[MerchantRecord]:
        return self._load_records(STORAGE_KEYS["merchants"], MerchantRecord)

    def save_merchants(self, merchants: List[MerchantRecord]):
        self.store.set(STORAGE_KEYS["merchants"], [m.to_dict() for m in merchants])

    def add_merchant(self, merchant: MerchantRecord):
        self.save_merchants(self.get_merchants() + [merchant])

    def find_merchant_by_upi(self, upi_id: str) -> Optional[MerchantRecord]:
        for merchant in self.get_merchants():
            if merchant.upi_id == upi_id:
                return merchant
        return None

    # Transactions

    def get_transactions(self) -> List[PaymentRecord]:
        """Stored payments, newest first."""
        return self._load_records(STORAGE_KEYS["transactions"], PaymentRecord)

    def save_transactions(self, transactions: List[PaymentRecord]):
        self.store.set(
            STORAGE_KEYS["transactions"], [t.to_dict() for t in transactions]
        )

    def add_transaction(self, transaction: PaymentRecord):
        self.save_transactions([transaction] + self.get_transactions())

    def find_transaction(self, transaction_id: str) -> Optional[PaymentRecord]:
        for transaction in self.get_transactions():
            if transaction.id == transaction_id:
                return transaction
        return None

    def get_merchant_transactions(self, upi_id: str) -> List[PaymentRecord]:
        return [t for t in self.get_transactions() if t.upi_id == upi_id]
