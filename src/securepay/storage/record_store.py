"""
Key-value record stores backing the repository and the OTP relay.
"""

import json
import logging
import threading
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, Tuple

import redis


class RecordStore(ABC):
    """Maps string keys to JSON-serializable values. Last write wins."""

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under key, or default."""

    @abstractmethod
    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        """Store value under key, optionally expiring after ttl seconds."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key if present."""

    def ping(self) -> bool:
        return True


class InMemoryRecordStore(RecordStore):
    """Process-local store, used for tests and single-process demos."""

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._data: Dict[str, Tuple[str, Optional[float]]] = {}
        self._lock = threading.Lock()

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            entry = self._data.get(key)
            if entry is None:
                return default

            raw, expires_at = entry
            if expires_at is not None and self._clock() >= expires_at:
                del self._data[key]
                return default

        return json.loads(raw)

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        # Stored serialized, readers always get a fresh copy
        raw = json.dumps(value)
        expires_at = self._clock() + ttl if ttl is not None else None
        with self._lock:
            self._data[key] = (raw, expires_at)

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def clear(self):
        with self._lock:
            self._data.clear()


class RedisRecordStore(RecordStore):
    """Stores JSON-encoded values in Redis."""

    def __init__(self, redis_client: redis.Redis, key_prefix: str = ""):
        """Initialize the Redis record store."""
        self.redis = redis_client
        self.key_prefix = key_prefix
        self.logger = logging.getLogger(__name__)

    def _key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    def get(self, key: str, default: Any = None) -> Any:
        raw = self.redis.get(self._key(key))
        if raw is None:
            return default

        try:
            return json.loads(raw)
        except (TypeError, ValueError) as e:
            self.logger.warning(f"Corrupt value under {key}: {e}")
            return default

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        raw = json.dumps(value)
        if ttl is not None:
            # PX keeps sub-second TTLs
            self.redis.set(self._key(key), raw, px=max(1, int(ttl * 1000)))
        else:
            self.redis.set(self._key(key), raw)

    def delete(self, key: str) -> None:
        self.redis.delete(self._key(key))

    def ping(self) -> bool:
        try:
            return bool(self.redis.ping())
        except redis.RedisError as e:
            self.logger.error(f"Redis ping failed: {e}")
            return False


def create_record_store(config: Dict[str, Any]) -> RecordStore:
    """Build the record store named by the storage configuration."""
    logger = logging.getLogger(__name__)
    backend = config.get("backend", "memory")

    if backend == "memory":
        logger.info("Using in-memory record store")
        return InMemoryRecordStore()

    if backend == "redis":
        redis_client = redis.Redis(
            host=config.get("redis_host", "localhost"),
            port=config.get("redis_port", 6379),
            db=config.get("redis_db", 0),
            decode_responses=True,
        )
        logger.info(
            f"Using Redis record store at "
            f"{config.get('redis_host', 'localhost')}:{config.get('redis_port', 6379)}"
        )
        return RedisRecordStore(redis_client, key_prefix=config.get("key_prefix", ""))

    raise ValueError(f"Unknown storage backend: {backend}")
