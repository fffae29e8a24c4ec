"""
Utility functions for address validation and Etherscan record parsing.
"""

from typing import List, Dict, Any, Optional
from datetime import datetime, timezone
from decimal import Decimal
import re
import logging

from .exceptions import InvalidAddress
from .models import TokenTransferEvent, EthTransaction

logger = logging.getLogger(__name__)

ADDRESS_PATTERN = re.compile(r"0x[0-9a-fA-F]{40}")


def is_valid_ethereum_address(address: str) -> bool:
    """Check if a string is 0x followed by 40 hex characters."""
    if not address:
        return False

    return bool(ADDRESS_PATTERN.fullmatch(address))


def validate_address(address: str) -> str:
    """Return the trimmed address, or raise InvalidAddress."""
    candidate = (address or "").strip()
    if not is_valid_ethereum_address(candidate):
        raise InvalidAddress(address)
    return candidate


def normalize_address(address: str) -> str:
    """Normalize an Ethereum address to lowercase."""
    if not address:
        return ""

    return address.lower()


def timestamp_to_datetime(timestamp: str) -> datetime:
    """Convert an Etherscan unix timestamp string to an aware UTC datetime."""
    return datetime.fromtimestamp(int(timestamp), tz=timezone.utc)


def parse_token_transfers(raw_transfers: List[Dict[str, Any]]) -> List[TokenTransferEvent]:
    """Parse raw Etherscan tokentx records into TokenTransferEvent objects."""
    events = []

    if not raw_transfers:
        return events

    required_fields = ['from', 'to', 'contractAddress', 'tokenName',
                       'tokenSymbol', 'tokenDecimal', 'value', 'timeStamp']

    for tx in raw_transfers:
        try:
            if not all(field in tx for field in required_fields):
                logger.warning(
                    f"Skipping token transfer with missing fields: {tx}")
                continue

            # Reject non-integer amounts up front
            int(tx['value'])

            events.append(TokenTransferEvent(
                from_address=tx['from'],
                to_address=tx['to'],
                contract_address=tx['contractAddress'],
                token_name=tx['tokenName'],
                token_symbol=tx['tokenSymbol'],
                token_decimal=int(tx['tokenDecimal']),
                value=tx['value'],
                timestamp=timestamp_to_datetime(tx['timeStamp']),
                tx_hash=tx.get('hash'),
                block_number=int(tx['blockNumber']) if tx.get(
                    'blockNumber') else None,
            ))
        except (ValueError, KeyError, TypeError, OverflowError, OSError) as e:
            logger.warning(
                f"Error parsing token transfer {tx.get('hash', 'unknown')}: {e}")
            continue

    logger.info(
        f"Parsed {len(events)} valid token transfers from {len(raw_transfers)} raw records")
    return events


def parse_eth_transactions(raw_transactions: List[Dict[str, Any]]) -> List[EthTransaction]:
    """Parse raw Etherscan txlist records into EthTransaction objects."""
    transactions = []

    if not raw_transactions:
        return transactions

    for tx in raw_transactions:
        try:
            if not all(field in tx for field in ('hash', 'timeStamp', 'from')):
                logger.warning(
                    f"Skipping transaction with missing fields: {tx}")
                continue

            transactions.append(EthTransaction(
                tx_hash=tx['hash'],
                block_number=int(tx.get('blockNumber') or 0),
                timestamp=timestamp_to_datetime(tx['timeStamp']),
                from_address=tx['from'],
                to_address=tx.get('to') or "",
                value=tx.get('value', '0'),
            ))
        except (ValueError, KeyError, TypeError, OverflowError, OSError) as e:
            logger.warning(
                f"Error parsing transaction {tx.get('hash', 'unknown')}: {e}")
            continue

    logger.info(
        f"Parsed {len(transactions)} valid transactions from {len(raw_transactions)} raw transactions")
    return transactions


def format_timestamp(timestamp: Optional[datetime]) -> Optional[str]:
    """ISO-8601 string for a timestamp, or None."""
    if timestamp is None:
        return None
    return timestamp.isoformat()


def format_amount(amount: Decimal, places: int = 4) -> str:
    """Format a token or ETH amount with thousands separators."""
    return f"{amount:,.{places}f}"


def shorten_address(address: str) -> str:
    """Abbreviate an address as 0x1234...abcd for table cells."""
    if not address or len(address) < 12:
        return address
    return f"{address[:6]}...{address[-4:]}"
