"""
Reduce a wallet's token transfers into holdings and per-token movements.

Direction is decided case-insensitively against the queried address.
Counterparty sets are deduplicated on the raw address string as Etherscan
returned it, so two spellings of one address that differ only in case are
both kept.
"""

import logging
from decimal import Decimal, localcontext
from typing import Callable, Dict, Iterable, List

from .models import TokenTransferEvent, TokenHolding, TokenMovement
from .units import AMOUNT_CONTEXT
from .utils import normalize_address

logger = logging.getLogger(__name__)

TokenKey = Callable[[TokenTransferEvent], str]


def token_name_key(event: TokenTransferEvent) -> str:
    """Group by display name. Distinct contracts sharing a name are merged."""
    return event.token_name


def token_contract_key(event: TokenTransferEvent) -> str:
    """Group by contract address."""
    return normalize_address(event.contract_address)


TOKEN_KEYS: Dict[str, TokenKey] = {
    "name": token_name_key,
    "contract": token_contract_key,
}


def aggregate_holdings(events: Iterable[TokenTransferEvent], address: str,
                       key: TokenKey = token_name_key) -> List[TokenHolding]:
    """Net balance per token for ``address``, keeping only positive balances.

    The first event seen for a key supplies the holding's name, symbol and
    contract address. Results keep first-seen order.
    """
    wallet = normalize_address(address)
    balances: Dict[str, Decimal] = {}
    identities: Dict[str, TokenTransferEvent] = {}

    with localcontext(AMOUNT_CONTEXT):
        for event in events:
            token = key(event)
            if token not in identities:
                identities[token] = event
                balances[token] = Decimal(0)

            if normalize_address(event.from_address) == wallet:
                balances[token] -= event.amount
            if normalize_address(event.to_address) == wallet:
                balances[token] += event.amount

    holdings = [
        TokenHolding(
            name=identities[token].token_name,
            symbol=identities[token].token_symbol,
            contract_address=identities[token].contract_address,
            balance=balance,
        )
        for token, balance in balances.items()
        if balance > 0
    ]

    logger.info(
        f"Computed {len(holdings)} holdings from {len(balances)} tokens for {address}")
    return holdings


class _MovementAccumulator:
    """Running totals for one token while aggregating movements."""

    def __init__(self, token_name: str):
        self.token_name = token_name
        self.total_sent = Decimal(0)
        self.total_received = Decimal(0)
        # dicts as insertion-ordered sets
        self.destinations: Dict[str, None] = {}
        self.sources: Dict[str, None] = {}

    def to_movement(self) -> TokenMovement:
        return TokenMovement(
            token_name=self.token_name,
            total_sent=self.total_sent,
            total_received=self.total_received,
            unique_destinations=tuple(self.destinations),
            unique_sources=tuple(self.sources),
        )


def aggregate_movements(events: Iterable[TokenTransferEvent], address: str,
                        key: TokenKey = token_name_key) -> List[TokenMovement]:
    """Sent and received totals and counterparties per token for ``address``.

    Sent and received are summed separately and never netted. Tokens with no
    event involving ``address`` are left out.
    """
    wallet = normalize_address(address)
    movements: Dict[str, _MovementAccumulator] = {}

    with localcontext(AMOUNT_CONTEXT):
        for event in events:
            is_outgoing = normalize_address(event.from_address) == wallet
            is_incoming = normalize_address(event.to_address) == wallet
            if not (is_outgoing or is_incoming):
                continue

            token = key(event)
            acc = movements.get(token)
            if acc is None:
                acc = movements[token] = _MovementAccumulator(event.token_name)

            if is_outgoing:
                acc.total_sent += event.amount
                acc.destinations.setdefault(event.to_address)
            if is_incoming:
                acc.total_received += event.amount
                acc.sources.setdefault(event.from_address)

    logger.info(f"Computed movements for {len(movements)} tokens for {address}")
    return [acc.to_movement() for acc in movements.values()]
