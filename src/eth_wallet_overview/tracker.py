"""
Fetch a wallet's Etherscan data and build its overview and token movements.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional, Tuple

from .aggregation import TOKEN_KEYS, aggregate_holdings, aggregate_movements
from .api_clients import EtherscanClient
from .config import Config
from .models import TokenMovement, TokenTransferEvent, WalletOverview, WalletReport
from .units import wei_to_ether
from .utils import (
    validate_address,
    parse_token_transfers,
    parse_eth_transactions,
    format_timestamp,
)

logger = logging.getLogger(__name__)


class WalletTracker:
    """Looks up one address at a time against Etherscan."""

    def __init__(self, config: Config, client: Optional[EtherscanClient] = None):
        self.config = config
        self.client = client or EtherscanClient(config)
        self.token_key = TOKEN_KEYS[config.token_key]

    def _fetch_all(self, address: str) -> Tuple[str, List[Dict[str, Any]], List[Dict[str, Any]]]:
        """Run the balance, txlist and tokentx queries concurrently.

        The first failure is re-raised and all results are discarded.
        """
        with ThreadPoolExecutor(max_workers=3) as pool:
            balance_fut = pool.submit(self.client.get_eth_balance, address)
            txlist_fut = pool.submit(self.client.get_eth_transactions, address)
            tokentx_fut = pool.submit(self.client.get_token_transfers, address)
            futures = (balance_fut, txlist_fut, tokentx_fut)
            try:
                return tuple(fut.result() for fut in futures)
            except Exception:
                for fut in futures:
                    fut.cancel()
                raise

    def _build_overview(self, address: str, raw_balance: str,
                        raw_transactions: List[Dict[str, Any]],
                        transfers: List[TokenTransferEvent]) -> WalletOverview:
        transactions = parse_eth_transactions(raw_transactions)
        first = transactions[0].timestamp if transactions else None
        last = transactions[-1].timestamp if transactions else None

        return WalletOverview(
            address=address,
            eth_balance=wei_to_ether(raw_balance),
            token_holdings=aggregate_holdings(transfers, address, self.token_key),
            total_transactions=len(transactions),
            first_transaction=format_timestamp(first),
            last_transaction=format_timestamp(last),
            total_token_transfers=len(transfers),
        )

    def get_wallet_report(self, address: str) -> WalletReport:
        """Overview plus token movements from a single round of queries."""
        address = validate_address(address)
        logger.info(f"Fetching wallet report for {address}")

        raw_balance, raw_transactions, raw_transfers = self._fetch_all(address)
        transfers = parse_token_transfers(raw_transfers)

        return WalletReport(
            overview=self._build_overview(
                address, raw_balance, raw_transactions, transfers),
            token_movements=aggregate_movements(
                transfers, address, self.token_key),
        )

    def get_wallet_overview(self, address: str) -> WalletOverview:
        """ETH balance, holdings and activity range for an address."""
        address = validate_address(address)
        logger.info(f"Fetching wallet overview for {address}")

        raw_balance, raw_transactions, raw_transfers = self._fetch_all(address)
        return self._build_overview(
            address, raw_balance, raw_transactions,
            parse_token_transfers(raw_transfers))

    def get_token_movements(self, address: str) -> List[TokenMovement]:
        """Per-token sent/received totals and counterparties for an address."""
        address = validate_address(address)
        logger.info(f"Fetching token movements for {address}")

        transfers = parse_token_transfers(
            self.client.get_token_transfers(address))
        return aggregate_movements(transfers, address, self.token_key)
