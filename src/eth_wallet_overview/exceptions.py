"""
Error types raised while looking up a wallet.
"""

from typing import Optional


class WalletTrackerError(Exception):
    """Base error for a failed wallet lookup."""


class InvalidAddress(WalletTrackerError, ValueError):
    """Address is not 0x followed by 40 hex digits."""

    def __init__(self, address: str):
        super().__init__("Invalid Ethereum address format")
        self.address = address


class UpstreamFailure(WalletTrackerError):
    """Etherscan request failed or returned a non-success response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NetworkTimeout(UpstreamFailure):
    """Etherscan request did not complete within the configured timeout."""
    pass
