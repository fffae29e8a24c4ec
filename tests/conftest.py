"""Shared test fixtures: config, token transfer factory, fake Etherscan client."""
from __future__ import annotations

from datetime import datetime, timezone

import pytest

from eth_wallet_overview.config import Config
from eth_wallet_overview.models import TokenTransferEvent

ADDR = "0x1111111111111111111111111111111111111111"
OTHER = "0x2222222222222222222222222222222222222222"
THIRD = "0x3333333333333333333333333333333333333333"
ZERO_ADDR = "0x" + "0" * 40
MIXED_ADDR = "0xAbCdEf0123456789aBcDeF0123456789AbCdEf01"

USDC = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"
DAI = "0x6b175474e89094c44da98b954eedeac495271d0f"

ONE_ETH = "1000000000000000000"


def make_event(
    from_address=ADDR,
    to_address=OTHER,
    value=ONE_ETH,
    token_name="Dai Stablecoin",
    token_symbol="DAI",
    token_decimal=18,
    contract_address=DAI,
    timestamp=1_600_000_000,
):
    return TokenTransferEvent(
        from_address=from_address,
        to_address=to_address,
        contract_address=contract_address,
        token_name=token_name,
        token_symbol=token_symbol,
        token_decimal=token_decimal,
        value=value,
        timestamp=datetime.fromtimestamp(timestamp, tz=timezone.utc),
    )


def raw_tokentx(from_address=ADDR, to_address=OTHER, value=ONE_ETH,
                token_name="Dai Stablecoin", token_symbol="DAI",
                token_decimal="18", contract_address=DAI,
                timestamp="1600000000", tx_hash="0xabc"):
    """Token transfer record as Etherscan's tokentx action returns it."""
    return {
        "blockNumber": "10800000",
        "timeStamp": timestamp,
        "hash": tx_hash,
        "from": from_address,
        "to": to_address,
        "contractAddress": contract_address,
        "value": value,
        "tokenName": token_name,
        "tokenSymbol": token_symbol,
        "tokenDecimal": token_decimal,
    }


def raw_txlist(timestamp="1600000000", tx_hash="0xdef",
               from_address=ADDR, to_address=OTHER, value="0"):
    """Native transaction record as Etherscan's txlist action returns it."""
    return {
        "blockNumber": "10800000",
        "timeStamp": timestamp,
        "hash": tx_hash,
        "from": from_address,
        "to": to_address,
        "value": value,
    }


class FakeEtherscanClient:
    """Stands in for EtherscanClient; records every call it receives."""

    def __init__(self, balance="0", transactions=None, transfers=None,
                 fail_on=None, error=None):
        self.balance = balance
        self.transactions = transactions or []
        self.transfers = transfers or []
        self.fail_on = fail_on
        self.error = error
        self.calls = []

    def _call(self, name, result):
        self.calls.append(name)
        if self.fail_on == name:
            raise self.error
        return result

    def get_eth_balance(self, address):
        return self._call("balance", self.balance)

    def get_eth_transactions(self, address, **kwargs):
        return self._call("txlist", list(self.transactions))

    def get_token_transfers(self, address, **kwargs):
        return self._call("tokentx", list(self.transfers))


@pytest.fixture
def config():
    return Config(etherscan_api_key="test-key", request_timeout=5.0)


@pytest.fixture
def event_factory():
    return make_event
