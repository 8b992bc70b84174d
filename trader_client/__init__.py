"""
Trader Client.

============================================================
PURPOSE
============================================================
Resilient trading client for a single BTC exchange.

COMPONENTS:
- Trader: Uniform order/market/account operations
- RetryScheduler: Fixed-delay, unbounded retry of read calls
- ExchangeGateway: Remote exchange boundary
- MockGateway: In-memory gateway for testing

============================================================
"""

# Configuration
from .config import (
    BASE_CURRENCY,
    DEFAULT_QUOTE_CURRENCY,
    RetryConfig,
    TraderConfig,
    load_trader_settings,
)

# Types
from .types import (
    GatewayResponse,
    OrderSide,
    PortfolioAsset,
    Ticker,
)

# Errors
from .errors import (
    ErrorCategory,
    RetryEligibility,
    TraderError,
    TransportError,
    ExchangeRejection,
    EmptyResultError,
    create_transport_error,
    create_timeout_error,
    create_rejection,
)

# Retry
from .retry import (
    PendingCall,
    RetryableOperation,
    RetryScheduler,
)

# Gateways
from .gateway import (
    ExchangeGateway,
    GatewayFactory,
    MockGateway,
    MockGatewayConfig,
)

# Trader
from .trader import Trader

# Utilities
from .logging_utils import mask_params, mask_value
from .time_utils import to_micro


__all__ = [
    # Config
    "BASE_CURRENCY",
    "DEFAULT_QUOTE_CURRENCY",
    "RetryConfig",
    "TraderConfig",
    "load_trader_settings",
    # Types
    "GatewayResponse",
    "OrderSide",
    "PortfolioAsset",
    "Ticker",
    # Errors
    "ErrorCategory",
    "RetryEligibility",
    "TraderError",
    "TransportError",
    "ExchangeRejection",
    "EmptyResultError",
    "create_transport_error",
    "create_timeout_error",
    "create_rejection",
    # Retry
    "PendingCall",
    "RetryableOperation",
    "RetryScheduler",
    # Gateways
    "ExchangeGateway",
    "GatewayFactory",
    "MockGateway",
    "MockGatewayConfig",
    # Trader
    "Trader",
    # Utilities
    "mask_params",
    "mask_value",
    "to_micro",
]
