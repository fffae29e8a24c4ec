"""Tests for environment-driven configuration."""
import pytest

from eth_wallet_overview.config import Config


def test_from_env(monkeypatch):
    monkeypatch.setenv("ETHERSCAN_API_KEY", "abc")
    monkeypatch.setenv("ETHERSCAN_BASE_URL", "https://example.test/api")
    monkeypatch.setenv("REQUEST_TIMEOUT", "12.5")
    monkeypatch.setenv("TOKEN_KEY", "Contract")
    monkeypatch.setenv("LOG_LEVEL", "info")

    config = Config.from_env()

    assert config.etherscan_api_key == "abc"
    assert config.etherscan_base_url == "https://example.test/api"
    assert config.request_timeout == 12.5
    assert config.token_key == "contract"
    assert config.log_level == "INFO"


def test_from_env_defaults(monkeypatch):
    monkeypatch.setenv("ETHERSCAN_API_KEY", "abc")
    for name in ("ETHERSCAN_BASE_URL", "REQUEST_TIMEOUT", "TOKEN_KEY", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    config = Config.from_env()

    assert config.etherscan_base_url == "https://api.etherscan.io/v2/api"
    assert config.request_timeout == 30.0
    assert config.token_key == "name"


def test_missing_api_key(monkeypatch):
    monkeypatch.delenv("ETHERSCAN_API_KEY", raising=False)

    with pytest.raises(ValueError, match="ETHERSCAN_API_KEY"):
        Config.from_env()


def test_unknown_token_key():
    with pytest.raises(ValueError, match="token_key"):
        Config(etherscan_api_key="abc", token_key="symbol")
