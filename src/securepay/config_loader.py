"""
Configuration loader for the SecurePay backend.

Values come from a YAML file (``config/securepay.yaml`` unless
``SECUREPAY_CONFIG`` or an explicit path says otherwise) and are then
overridden by the environment variables listed in ``ENV_OVERRIDES``.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

DEFAULT_CONFIG_PATH = "config/securepay.yaml"

ENV_OVERRIDES: Dict[str, Tuple[str, ...]] = {
    "STORAGE_BACKEND": ("storage", "backend"),
    "REDIS_HOST": ("storage", "redis_host"),
    "REDIS_PORT": ("storage", "redis_port"),
    "REDIS_DB": ("storage", "redis_db"),
    "SMTP_URL": ("smtp", "url"),
    "SMTP_HOST": ("smtp", "host"),
    "SMTP_PORT": ("smtp", "port"),
    "SMTP_USER": ("smtp", "user"),
    "SMTP_PASS": ("smtp", "password"),
    "SMTP_SECURE": ("smtp", "secure"),
    "SMTP_FROM": ("smtp", "from"),
    "OTP_TTL_MINUTES": ("otp", "ttl_minutes"),
    "OTP_RESEND_COOLDOWN_SEC": ("otp", "resend_cooldown_sec"),
    "RISK_THRESHOLD_FRAUD": ("risk_scorer", "fraud_threshold"),
    "RISK_THRESHOLD_HIGH": ("risk_scorer", "high_threshold"),
    "PORT": ("dashboard", "port"),
}

# Credentials and addresses stay strings even when they look numeric
STRING_OVERRIDES = frozenset(
    ["REDIS_HOST", "SMTP_URL", "SMTP_HOST", "SMTP_USER", "SMTP_PASS", "SMTP_FROM"]
)

REQUIRED_SECTIONS = ("storage", "risk_scorer", "otp", "dashboard")


def _coerce_env_value(raw: str) -> Any:
    """Turn an environment string into a bool, int or float where it looks like one."""
    lowered = raw.strip().lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    if lowered.isdigit():
        return int(lowered)
    if lowered.replace(".", "", 1).isdigit():
        return float(lowered)
    return raw


class ConfigLoader:
    """Load and manage configuration for the SecurePay backend."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize the configuration loader."""
        self.config_path = (
            config_path or os.getenv("SECUREPAY_CONFIG") or DEFAULT_CONFIG_PATH
        )
        self.config: Dict[str, Any] = {}
        self.load_config()

    def load_config(self) -> Dict[str, Any]:
        """Read the YAML file and apply environment overrides."""
        path = Path(self.config_path)
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        try:
            with path.open("r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise RuntimeError(f"Invalid configuration in {self.config_path}: {e}")

        self.config = loaded or {}

        for env_var, key_path in ENV_OVERRIDES.items():
            raw = os.environ.get(env_var)
            if raw is None:
                continue
            if env_var in STRING_OVERRIDES:
                self._set(key_path, raw)
            else:
                self._set(key_path, _coerce_env_value(raw))

        return self.config

    def _set(self, key_path: Tuple[str, ...], value: Any):
        section = self.config
        for key in key_path[:-1]:
            child = section.get(key)
            if not isinstance(child, dict):
                child = section[key] = {}
            section = child
        section[key_path[-1]] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a dotted key such as ``storage.redis_host``."""
        node: Any = self.config
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def section(self, name: str) -> Dict[str, Any]:
        """A top-level section, or an empty dict when it is absent."""
        return self.config.get(name) or {}

    def get_storage_config(self) -> Dict[str, Any]:
        return self.section("storage")

    def get_risk_scorer_config(self) -> Dict[str, Any]:
        return self.section("risk_scorer")

    def get_merchant_verifier_config(self) -> Dict[str, Any]:
        return self.section("merchant_verifier")

    def get_payments_config(self) -> Dict[str, Any]:
        return self.section("payments")

    def get_otp_config(self) -> Dict[str, Any]:
        return self.section("otp")

    def get_smtp_config(self) -> Dict[str, Any]:
        return self.section("smtp")

    def get_dashboard_config(self) -> Dict[str, Any]:
        return self.section("dashboard")

    def get_simulator_config(self) -> Dict[str, Any]:
        return self.section("simulator")

    def validate_config(self) -> bool:
        """Check required sections, the storage backend and threshold ordering."""
        missing = [name for name in REQUIRED_SECTIONS if name not in self.config]
        if missing:
            raise ValueError(
                f"Missing required configuration section: {', '.join(missing)}"
            )

        backend = self.get("storage.backend", "memory")
        if backend not in ("memory", "redis"):
            raise ValueError(f"Unknown storage backend: {backend}")
        if backend == "redis" and not self.get("storage.redis_host"):
            raise ValueError("Redis backend selected but storage.redis_host is empty")

        medium = self.get("risk_scorer.medium_threshold", 0.3)
        high = self.get("risk_scorer.high_threshold", 0.7)
        fraud = self.get("risk_scorer.fraud_threshold", 0.5)
        if not 0 <= medium <= high <= 1:
            raise ValueError("Risk thresholds must satisfy 0 <= medium <= high <= 1")
        if not 0 <= fraud <= 1:
            raise ValueError("Fraud threshold must be between 0 and 1")

        return True

    def to_dict(self) -> Dict[str, Any]:
        """Get the complete configuration as a dictionary."""
        return self.config.copy()


def load_config(config_path: Optional[str] = None) -> ConfigLoader:
    """Convenience function to load configuration."""
    return ConfigLoader(config_path)
