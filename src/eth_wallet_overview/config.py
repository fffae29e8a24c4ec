import os
from dataclasses import dataclass
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

TOKEN_KEY_CHOICES = ("name", "contract")


@dataclass
class Config:
    """Application configuration."""

    # API Keys
    etherscan_api_key: str

    # API URLs
    etherscan_base_url: str = "https://api.etherscan.io/v2/api"

    # Request settings
    request_timeout: float = 30.0  # seconds per upstream request

    # Aggregation settings
    token_key: str = "name"  # name, contract

    # Logging
    log_level: str = "WARNING"

    def __post_init__(self):
        if self.token_key not in TOKEN_KEY_CHOICES:
            raise ValueError(
                f"token_key must be one of {', '.join(TOKEN_KEY_CHOICES)}, got '{self.token_key}'")

    @classmethod
    def from_env(cls) -> "Config":
        """Create config from environment variables."""
        etherscan_key = os.getenv("ETHERSCAN_API_KEY")
        if not etherscan_key:
            raise ValueError(
                "ETHERSCAN_API_KEY environment variable is required")

        return cls(
            etherscan_api_key=etherscan_key,
            etherscan_base_url=os.getenv(
                "ETHERSCAN_BASE_URL", "https://api.etherscan.io/v2/api"),
            request_timeout=float(os.getenv("REQUEST_TIMEOUT", "30")),
            token_key=os.getenv("TOKEN_KEY", "name").lower(),
            log_level=os.getenv("LOG_LEVEL", "WARNING").upper(),
        )
