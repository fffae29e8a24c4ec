"""
Conversion between base units (wei, token base units) and human units.

Token amounts are uint256 values, so up to 78 significant digits. The default
decimal context keeps only 28, which silently rounds large transfers; every
conversion and sum here goes through AMOUNT_CONTEXT instead.
"""

from decimal import Context, Decimal
from typing import Union

from web3 import Web3

#: Enough precision for sums of many uint256 amounts
AMOUNT_CONTEXT = Context(prec=100)

ETHER_DECIMALS = 18


def to_human_units(raw_amount: Union[str, int], decimals: int) -> Decimal:
    """Convert an integer base-unit amount to human units.

    Raises ValueError if ``raw_amount`` is not an integer.
    """
    return Decimal(int(raw_amount)).scaleb(-int(decimals), context=AMOUNT_CONTEXT)


def to_base_units(amount: Decimal, decimals: int) -> int:
    """Inverse of to_human_units."""
    return int(amount.scaleb(int(decimals), context=AMOUNT_CONTEXT))


def wei_to_ether(wei: Union[str, int]) -> Decimal:
    """Convert Wei to Ether."""
    return Decimal(Web3.from_wei(int(wei), "ether"))
