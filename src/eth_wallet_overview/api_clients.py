import logging
from typing import List, Dict, Any
import requests

from .config import Config
from .exceptions import UpstreamFailure, NetworkTimeout

# Set up logging
logger = logging.getLogger(__name__)

# Etherscan answers status "0" with this message for an address with no history
NO_RESULTS_MESSAGES = ("No transactions found", "No token transfers found")

LATEST_BLOCK = 99999999

# Etherscan V2 serves every chain from one endpoint; only mainnet is queried
MAINNET_CHAIN_ID = 1


class EtherscanClient:
    """Client for Etherscan API."""

    def __init__(self, config: Config):
        self.config = config
        self.base_url = config.etherscan_base_url
        self.api_key = config.etherscan_api_key
        self.timeout = config.request_timeout

    def _make_request(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Make a request to Etherscan API."""
        params = dict(params, chainid=MAINNET_CHAIN_ID, apikey=self.api_key)
        action = params.get("action")

        try:
            response = requests.get(
                self.base_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.Timeout as e:
            logger.warning(f"Etherscan {action} request timed out: {e}")
            raise NetworkTimeout(
                f"Etherscan request timed out after {self.timeout:g}s") from e
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logger.warning(f"Etherscan {action} request failed: {e}")
            raise UpstreamFailure(
                f"Etherscan API HTTP error: {status}", status_code=status) from e
        except requests.RequestException as e:
            logger.warning(f"Etherscan {action} request failed: {e}")
            raise UpstreamFailure(f"Etherscan API request failed: {e}") from e
        except ValueError as e:
            raise UpstreamFailure(
                f"Etherscan API returned invalid JSON: {e}") from e

        if data.get("status") != "1":
            message = data.get("message", "Unknown error")
            result = data.get("result")
            if message in NO_RESULTS_MESSAGES or result == []:
                logger.info(f"Etherscan {action}: {message}")
                return dict(data, result=[])
            detail = f" ({result})" if isinstance(result, str) and result else ""
            raise UpstreamFailure(f"Etherscan API error: {message}{detail}")

        return data

    def get_eth_balance(self, address: str) -> str:
        """Get the ETH balance of an address in wei at the latest block."""
        params = {
            "module": "account",
            "action": "balance",
            "address": address,
            "tag": "latest"
        }

        data = self._make_request(params)
        result = data.get("result")
        if not isinstance(result, str) or not result.isdigit():
            raise UpstreamFailure(
                f"Etherscan API returned unexpected balance: {result!r}")
        return result

    def get_eth_transactions(self, address: str, start_block: int = 0,
                             end_block: int = LATEST_BLOCK,
                             sort: str = "asc") -> List[Dict[str, Any]]:
        """Get ETH transactions for an address."""
        params = {
            "module": "account",
            "action": "txlist",
            "address": address,
            "startblock": start_block,
            "endblock": end_block,
            "sort": sort
        }

        data = self._make_request(params)
        return data.get("result") or []

    def get_token_transfers(self, address: str, start_block: int = 0,
                            end_block: int = LATEST_BLOCK,
                            sort: str = "asc") -> List[Dict[str, Any]]:
        """Get ERC-20 token transfer events for an address."""
        params = {
            "module": "account",
            "action": "tokentx",
            "address": address,
            "startblock": start_block,
            "endblock": end_block,
            "sort": sort
        }

        data = self._make_request(params)
        return data.get("result") or []
