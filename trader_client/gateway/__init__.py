"""
Trader Client - Gateway Package.

============================================================
PURPOSE
============================================================
Remote exchange gateway boundary.

AVAILABLE GATEWAYS:
- MockGateway: In-memory exchange for testing

UTILITIES:
- GatewayFactory: Registry for creating gateways

============================================================
"""

from .base import ExchangeGateway
from .mock import MockGateway, MockGatewayConfig
from .factory import GatewayFactory


__all__ = [
    "ExchangeGateway",
    "MockGateway",
    "MockGatewayConfig",
    "GatewayFactory",
]
