"""
Trader Client - Configuration.

============================================================
PURPOSE
============================================================
All configuration for the trader client.

CONSTRAINTS:
- Config is immutable once the trader is constructed
- Missing credentials never raise at construction time
- Retries use a constant delay and have no ceiling

============================================================
"""

import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from dotenv import load_dotenv


BASE_CURRENCY = "BTC"
DEFAULT_QUOTE_CURRENCY = "USD"
DEFAULT_GATEWAY = "mock"


# ============================================================
# RETRY CONFIGURATION
# ============================================================

@dataclass(frozen=True)
class RetryConfig:
    """
    Retry configuration for read/query operations.
    
    Every retryable failure is re-scheduled after the same
    delay, forever, until the exchange answers.
    """
    
    delay_seconds: float = 10.0
    """Delay before a failed call is re-invoked."""


# ============================================================
# TRADER CONFIGURATION
# ============================================================

@dataclass(frozen=True)
class TraderConfig:
    """
    Credentials and market selection for a trader.
    
    Fields stay None when no configuration object was given,
    deferring failure to the first gateway call.
    """
    
    api_key: Optional[str] = None
    """Exchange API key."""
    
    api_secret: Optional[str] = None
    """Exchange API secret."""
    
    quote_currency: Optional[str] = None
    """Quote currency of the traded pair."""
    
    trading_pair: Optional[str] = None
    """Base + quote currency (e.g. BTCUSD)."""
    
    gateway: Optional[str] = None
    """Registered gateway identifier."""
    
    @classmethod
    def from_mapping(cls, config: Optional[Mapping[str, Any]]) -> "TraderConfig":
        """
        Build config from a caller supplied mapping.
        
        Accepts the ``key``, ``secret``, ``currency`` and
        ``gateway`` fields. Anything that is not a mapping
        yields an empty config.
        """
        if not isinstance(config, Mapping):
            return cls()
        
        quote_currency = config.get("currency") or DEFAULT_QUOTE_CURRENCY
        
        return cls(
            api_key=config.get("key"),
            api_secret=config.get("secret"),
            quote_currency=quote_currency,
            trading_pair=BASE_CURRENCY + quote_currency,
            gateway=config.get("gateway") or DEFAULT_GATEWAY,
        )


# ============================================================
# ENVIRONMENT LOADING
# ============================================================

def load_trader_settings(
    env_file: Optional[str] = None,
    prefix: str = "TRADER",
) -> Dict[str, Any]:
    """
    Load trader settings from environment variables.
    
    Args:
        env_file: Optional .env file to load first
        prefix: Variable prefix
    
    Returns:
        Mapping suitable for TraderConfig.from_mapping
    """
    load_dotenv(env_file)
    
    prefix = prefix.upper()
    settings = {
        "key": os.environ.get(f"{prefix}_API_KEY"),
        "secret": os.environ.get(f"{prefix}_API_SECRET"),
        "currency": os.environ.get(f"{prefix}_CURRENCY"),
        "gateway": os.environ.get(f"{prefix}_GATEWAY"),
    }
    return {k: v for k, v in settings.items() if v is not None}
