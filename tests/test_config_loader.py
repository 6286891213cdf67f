"""
Tests for YAML configuration loading.
"""

from pathlib import Path

import pytest
import yaml

from securepay.config_loader import ConfigLoader, load_config

DEFAULT_CONFIG = Path(__file__).resolve().parent.parent / "config" / "securepay.yaml"

OVERRIDE_VARS = [
    "SECUREPAY_CONFIG", "STORAGE_BACKEND", "REDIS_HOST", "REDIS_PORT", "REDIS_DB",
    "SMTP_URL", "SMTP_HOST", "SMTP_PORT", "SMTP_USER", "SMTP_PASS", "SMTP_SECURE",
    "SMTP_FROM", "OTP_TTL_MINUTES", "OTP_RESEND_COOLDOWN_SEC", "RISK_THRESHOLD_FRAUD",
    "RISK_THRESHOLD_HIGH", "PORT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in OVERRIDE_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "securepay.yaml"
    path.write_text(DEFAULT_CONFIG.read_text())
    return path


def test_default_config_is_valid():
    loader = load_config(str(DEFAULT_CONFIG))

    assert loader.validate_config() is True
    assert loader.get("storage.backend") == "memory"
    assert loader.get("risk_scorer.weights.category") == 0.30
    assert loader.get_otp_config()["ttl_minutes"] == 5
    assert loader.get_dashboard_config()["port"] == 4000


def test_get_missing_key_returns_default(config_file):
    loader = ConfigLoader(str(config_file))

    assert loader.get("storage.nothing.here", "x") == "x"


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        ConfigLoader(str(tmp_path / "absent.yaml"))


def test_invalid_yaml(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("storage: [unclosed")

    with pytest.raises(RuntimeError):
        ConfigLoader(str(path))


def test_env_overrides(config_file, monkeypatch):
    monkeypatch.setenv("STORAGE_BACKEND", "redis")
    monkeypatch.setenv("REDIS_PORT", "6380")
    monkeypatch.setenv("SMTP_SECURE", "true")
    monkeypatch.setenv("RISK_THRESHOLD_FRAUD", "0.6")
    monkeypatch.setenv("PORT", "8080")

    loader = ConfigLoader(str(config_file))

    assert loader.get("storage.backend") == "redis"
    assert loader.get("storage.redis_port") == 6380
    assert loader.get("smtp.secure") is True
    assert loader.get("risk_scorer.fraud_threshold") == 0.6
    assert loader.get("dashboard.port") == 8080


def test_config_path_from_env(config_file, monkeypatch):
    monkeypatch.setenv("SECUREPAY_CONFIG", str(config_file))

    assert ConfigLoader().config_path == str(config_file)


@pytest.mark.parametrize(
    "mutate, message",
    [
        (lambda c: c.pop("otp"), "otp"),
        (lambda c: c["storage"].update(backend="sqlite"), "storage backend"),
        (lambda c: c["risk_scorer"].update(medium_threshold=0.8), "thresholds"),
    ],
)
def test_validate_config_errors(config_file, mutate, message):
    config = yaml.safe_load(config_file.read_text())
    mutate(config)
    config_file.write_text(yaml.safe_dump(config))

    with pytest.raises(ValueError, match=message):
        ConfigLoader(str(config_file)).validate_config()


def test_numeric_looking_credentials_stay_strings(config_file, monkeypatch):
    monkeypatch.setenv("SMTP_USER", "12345")
    monkeypatch.setenv("SMTP_PASS", "000123")
    monkeypatch.setenv("SMTP_PORT", "2525")

    loader = ConfigLoader(str(config_file))

    assert loader.get("smtp.user") == "12345"
    assert loader.get("smtp.password") == "000123"
    assert loader.get("smtp.port") == 2525
