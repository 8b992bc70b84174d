"""
Trader Client - Mock Exchange Gateway.

============================================================
PURPOSE
============================================================
In-memory gateway for testing the trader core.

FEATURES:
- Configurable latency
- Configurable error injection (transport, rejection)
- Empty trade pages to simulate a lagging feed
- Full call tracking

============================================================
"""

import asyncio
import logging
import random
import time
import uuid
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..errors import create_transport_error
from ..types import GatewayResponse, OrderSide, RESULT_ERROR, RESULT_SUCCESS
from .base import ExchangeGateway


logger = logging.getLogger(__name__)


# ============================================================
# MOCK CONFIGURATION
# ============================================================

@dataclass
class MockGatewayConfig:
    """Configuration for mock gateway."""
    
    # Latency simulation
    min_latency_ms: float = 0.0
    """Minimum simulated latency."""
    
    max_latency_ms: float = 0.0
    """Maximum simulated latency."""
    
    # Initial state
    wallets: Dict[str, str] = field(default_factory=lambda: {
        "BTC": "10.0",
        "USD": "500.0",
        "EUR": "0",
    })
    """Wallet balances, as strings the way the exchange reports them."""
    
    trade_fee: float = 0.6
    """Trading fee in percent."""
    
    bid: str = "100"
    """Best buy quote."""
    
    ask: str = "101"
    """Best sell quote."""
    
    # Error injection
    network_error_probability: float = 0.0
    """Probability of a transport error on any call."""
    
    rejection_probability: float = 0.0
    """Probability of an error envelope on any call."""


# ============================================================
# MOCK GATEWAY
# ============================================================

class MockGateway(ExchangeGateway):
    """
    Mock exchange gateway.
    
    Simulates exchange behavior including:
    - Order placement and cancellation
    - Open order listing
    - Trade history with microsecond ``tid`` timestamps
    - Wallets, fee and ticker
    - Error injection per operation
    """
    
    def __init__(
        self,
        api_key: Optional[str] = None,
        api_secret: Optional[str] = None,
        trading_pair: Optional[str] = None,
        config: Optional[MockGatewayConfig] = None,
    ):
        super().__init__(api_key, api_secret, trading_pair)
        self._config = config or MockGatewayConfig()
        
        # State
        self._wallets: Dict[str, str] = dict(self._config.wallets)
        self._trade_fee = self._config.trade_fee
        self._bid = self._config.bid
        self._ask = self._config.ask
        self._orders: Dict[str, Dict[str, Any]] = {}
        self._trades: List[Dict[str, Any]] = []
        
        # Error injection
        self._forced_failures: Dict[str, int] = defaultdict(int)
        self._forced_rejections: Dict[str, int] = defaultdict(int)
        self._forced_empty_pages = 0
        
        # Call tracking
        self.calls: List[tuple] = []
    
    @property
    def exchange_id(self) -> str:
        return "mock"
    
    # --------------------------------------------------------
    # ERROR INJECTION
    # --------------------------------------------------------
    
    def fail_next(self, operation: str, count: int = 1) -> None:
        """Raise a transport error on the next ``count`` calls of ``operation``."""
        self._forced_failures[operation] += count
    
    def reject_next(self, operation: str, count: int = 1) -> None:
        """Answer the next ``count`` calls of ``operation`` with an error envelope."""
        self._forced_rejections[operation] += count
    
    def return_empty_trades(self, count: int = 1) -> None:
        """Answer the next ``count`` trade fetches with an empty page."""
        self._forced_empty_pages += count
    
    # --------------------------------------------------------
    # STATE HELPERS
    # --------------------------------------------------------
    
    def add_trade(
        self,
        price: str,
        amount: str,
        tid: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Append a public trade to the feed."""
        tid = tid if tid is not None else int(time.time() * 1_000_000)
        trade = {
            "tid": tid,
            "date": tid // 1_000_000,
            "price": price,
            "amount": amount,
        }
        self._trades.append(trade)
        self._trades.sort(key=lambda t: t["tid"])
        return trade
    
    def fill_order(self, order_id: str) -> None:
        """Remove an order from the book as if it was filled."""
        self._orders.pop(order_id, None)
    
    def set_ticker(self, bid: str, ask: str) -> None:
        self._bid = bid
        self._ask = ask
    
    def set_wallet(self, asset: str, balance: str) -> None:
        self._wallets[asset] = balance
    
    # --------------------------------------------------------
    # GATEWAY OPERATIONS
    # --------------------------------------------------------
    
    async def place_order(
        self,
        side: OrderSide,
        amount: float,
        price: float,
    ) -> GatewayResponse:
        await self._before_call("place_order", side, amount, price)
        
        if self._should_reject("place_order"):
            return GatewayResponse(result=RESULT_ERROR, data="Order rejected")
        
        order_id = str(uuid.uuid4())
        self._orders[order_id] = {
            "oid": order_id,
            "type": side.value,
            "amount": amount,
            "price": price,
            "currency": self._trading_pair,
        }
        logger.debug(f"Mock order placed: {order_id} {side.value} {amount}@{price}")
        return GatewayResponse(result=RESULT_SUCCESS, data=order_id)
    
    async def cancel_order(self, order_id: str) -> GatewayResponse:
        await self._before_call("cancel_order", order_id)
        
        if self._should_reject("cancel_order") or order_id not in self._orders:
            return GatewayResponse(result=RESULT_ERROR)
        
        del self._orders[order_id]
        return GatewayResponse(result=RESULT_SUCCESS)
    
    async def list_orders(self) -> GatewayResponse:
        await self._before_call("list_orders")
        
        if self._should_reject("list_orders"):
            return GatewayResponse(result=RESULT_ERROR)
        
        return GatewayResponse(data=[dict(o) for o in self._orders.values()])
    
    async def fetch_trades(self, since: Optional[int] = None) -> GatewayResponse:
        await self._before_call("fetch_trades", since)
        
        if self._should_reject("fetch_trades"):
            return GatewayResponse(result=RESULT_ERROR, data="Rate limited")
        
        if self._forced_empty_pages > 0:
            self._forced_empty_pages -= 1
            return GatewayResponse(data=[])
        
        trades = [
            dict(t) for t in self._trades
            if since is None or t["tid"] > since
        ]
        return GatewayResponse(data=trades)
    
    async def fetch_ticker(self) -> GatewayResponse:
        await self._before_call("fetch_ticker")
        
        if self._should_reject("fetch_ticker"):
            return GatewayResponse(result=RESULT_ERROR)
        
        return GatewayResponse(data={
            "buy": {"value": self._bid},
            "sell": {"value": self._ask},
        })
    
    async def fetch_account_info(self) -> GatewayResponse:
        await self._before_call("fetch_account_info")
        
        if self._should_reject("fetch_account_info"):
            return GatewayResponse(result=RESULT_ERROR)
        
        wallets = {
            asset: {"Balance": {"value": balance, "currency": asset}}
            for asset, balance in self._wallets.items()
        }
        return GatewayResponse(data={
            "Wallets": wallets,
            "Trade_Fee": self._trade_fee,
        })
    
    # --------------------------------------------------------
    # INTERNAL
    # --------------------------------------------------------
    
    async def _before_call(self, operation: str, *args: Any) -> None:
        """Track the call, simulate latency and inject transport errors."""
        self.calls.append((operation,) + args)
        
        if self._config.max_latency_ms > 0:
            latency = random.uniform(
                self._config.min_latency_ms,
                self._config.max_latency_ms,
            )
            await asyncio.sleep(latency / 1000)
        
        if self._forced_failures[operation] > 0:
            self._forced_failures[operation] -= 1
            raise create_transport_error(self.exchange_id, "connection reset", operation)
        
        if random.random() < self._config.network_error_probability:
            raise create_transport_error(self.exchange_id, "simulated outage", operation)
    
    def _should_reject(self, operation: str) -> bool:
        if self._forced_rejections[operation] > 0:
            self._forced_rejections[operation] -= 1
            return True
        return random.random() < self._config.rejection_probability
