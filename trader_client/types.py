"""
Trader Client - Types.

============================================================
PURPOSE
============================================================
Exchange-agnostic shapes handed to callers, plus the
envelope returned by gateways.

All values are transient and derived fresh per call.

============================================================
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Union


# ============================================================
# ORDER TYPES
# ============================================================

class OrderSide(Enum):
    """Order side as understood by the gateway."""
    
    BID = "bid"
    ASK = "ask"


# ============================================================
# GATEWAY ENVELOPE
# ============================================================

RESULT_SUCCESS = "success"
RESULT_ERROR = "error"


@dataclass
class GatewayResponse:
    """Result envelope returned by every gateway call."""
    
    result: str = RESULT_SUCCESS
    """Exchange-level status (success/error)."""
    
    data: Any = None
    """Payload of the response."""
    
    @property
    def is_error(self) -> bool:
        return self.result == RESULT_ERROR
    
    @property
    def is_success(self) -> bool:
        return self.result == RESULT_SUCCESS


# ============================================================
# NORMALIZED OUTPUT
# ============================================================

@dataclass
class PortfolioAsset:
    """One balance entry of a portfolio."""
    
    name: str
    """Asset symbol (BTC, USD, ...)."""
    
    amount: float
    """Balance as reported by the exchange."""
    
    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Ticker:
    """Best bid/ask quotes, taken verbatim from the exchange."""
    
    bid: Any
    ask: Any
    
    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


Portfolio = List[PortfolioAsset]

# Trades are opaque exchange records
Trade = Dict[str, Any]

# Completion handlers may be plain functions or coroutine functions
Callback = Callable[..., Union[None, Awaitable[None]]]
