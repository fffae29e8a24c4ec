"""
Data models for Ethereum wallet overviews.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List, Tuple
from decimal import Decimal

from .units import to_human_units


@dataclass(frozen=True)
class TokenTransferEvent:
    """A single ERC-20 transfer as reported by Etherscan."""
    from_address: str
    to_address: str
    contract_address: str
    token_name: str
    token_symbol: str
    token_decimal: int
    value: str  # raw base-unit integer
    timestamp: datetime
    tx_hash: Optional[str] = None
    block_number: Optional[int] = None

    @property
    def amount(self) -> Decimal:
        """Transfer value in human units."""
        return to_human_units(self.value, self.token_decimal)


@dataclass(frozen=True)
class EthTransaction:
    """Native ETH transaction touching the wallet."""
    tx_hash: str
    block_number: int
    timestamp: datetime
    from_address: str
    to_address: str  # empty for contract creations
    value: str


@dataclass(frozen=True)
class TokenHolding:
    """Net positive balance of one token."""
    name: str
    symbol: str
    contract_address: str
    balance: Decimal


@dataclass(frozen=True)
class TokenMovement:
    """Directional totals and counterparties for one token."""
    token_name: str
    total_sent: Decimal
    total_received: Decimal
    unique_destinations: Tuple[str, ...] = ()
    unique_sources: Tuple[str, ...] = ()


@dataclass(frozen=True)
class WalletOverview:
    """Summary of a wallet's balance and activity."""
    address: str
    eth_balance: Decimal
    token_holdings: List[TokenHolding]
    total_transactions: int
    first_transaction: Optional[str] = None
    last_transaction: Optional[str] = None
    total_token_transfers: int = 0


@dataclass(frozen=True)
class WalletReport:
    """Overview and token movements computed from one fetch."""
    overview: WalletOverview
    token_movements: List[TokenMovement] = field(default_factory=list)

    @property
    def has_activity(self) -> bool:
        return (self.overview.total_transactions > 0
                or self.overview.total_token_transfers > 0)
