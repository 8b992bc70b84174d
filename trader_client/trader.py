"""
Trader Client - Trader.

============================================================
PURPOSE
============================================================
Uniform trading contract over a single exchange gateway.

OPERATIONS:
- buy / sell: order placement, never retried
- cancel_order: fire-and-forget cancellation, never retried
- get_trades: trade history, retried on error or empty page
- get_portfolio / get_fee / get_ticker / check_order:
  retried on transport error or error answer

Every gateway failure is raised as a TraderError; its retry
eligibility decides whether a read is scheduled again.

Every operation completes through a caller supplied handler,
which may be a plain function or a coroutine function.

============================================================
"""

import asyncio
import inspect
import logging
from functools import partial
from numbers import Number
from typing import Any, Callable, Dict, List, Mapping, Optional

from .config import (
    DEFAULT_GATEWAY,
    RetryConfig,
    TraderConfig,
    load_trader_settings,
)
from .errors import (
    EmptyResultError,
    ExchangeRejection,
    RetryEligibility,
    TraderError,
    create_rejection,
    create_timeout_error,
)
from .gateway.base import ExchangeGateway
from .gateway.factory import GatewayFactory
from .logging_utils import mask_params
from .retry import PendingCall, RetryableOperation, RetryScheduler
from .time_utils import to_micro
from .types import (
    Callback,
    GatewayResponse,
    OrderSide,
    Portfolio,
    PortfolioAsset,
    Ticker,
    Trade,
)


logger = logging.getLogger(__name__)


GatewayFactoryFn = Callable[[Optional[str], Optional[str], Optional[str]], ExchangeGateway]


async def _deliver(callback: Callback, *args: Any) -> None:
    """Invoke a completion handler, awaiting it when it is a coroutine."""
    result = callback(*args)
    if inspect.isawaitable(result):
        await result


class Trader:
    """
    Resilient trading client for one exchange.
    
    Read/query operations are retried every few seconds until
    the exchange answers; order placement and cancellation
    are attempted once and their failures are logged.
    """
    
    name = "Mt. Gox"
    
    def __init__(
        self,
        config: Optional[Mapping[str, Any]] = None,
        gateway_factory: Optional[GatewayFactoryFn] = None,
        retry_config: Optional[RetryConfig] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        """
        Initialize trader.
        
        No network I/O happens here and a missing or malformed
        config never raises.
        
        Args:
            config: Mapping with optional key, secret, currency, gateway
            gateway_factory: Builds the gateway from (key, secret, pair)
            retry_config: Retry configuration
            loop: Event loop for retry timers
        """
        self.config = TraderConfig.from_mapping(config)
        
        if gateway_factory is None:
            gateway_factory = partial(
                GatewayFactory.create,
                self.config.gateway or DEFAULT_GATEWAY,
            )
        
        self.gateway = gateway_factory(
            self.config.api_key,
            self.config.api_secret,
            self.config.trading_pair,
        )
        
        self._retry = RetryScheduler(self.name, self._replay, retry_config, loop)
        
        logger.debug(f"Initialized {self.name} trader: {mask_params(self._describe())}")
    
    @classmethod
    def from_env(cls, env_file: Optional[str] = None, **kwargs: Any) -> "Trader":
        """Create a trader from TRADER_* environment variables."""
        return cls(load_trader_settings(env_file), **kwargs)
    
    @property
    def trading_pair(self) -> Optional[str]:
        return self.config.trading_pair
    
    @property
    def retry_scheduler(self) -> RetryScheduler:
        return self._retry
    
    def __repr__(self) -> str:
        return f"Trader({mask_params(self._describe())})"
    
    def _describe(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "key": self.config.api_key,
            "secret": self.config.api_secret,
            "pair": self.config.trading_pair,
        }
    
    # --------------------------------------------------------
    # ORDER OPERATIONS
    # --------------------------------------------------------
    
    async def buy(self, amount: float, price: float, callback: Callback) -> None:
        """Place a bid; ``callback(error, order_id)``."""
        await self._place_order(OrderSide.BID, amount, price, callback)
    
    async def sell(self, amount: float, price: float, callback: Callback) -> None:
        """Place an ask; ``callback(error, order_id)``."""
        await self._place_order(OrderSide.ASK, amount, price, callback)
    
    async def _place_order(
        self,
        side: OrderSide,
        amount: float,
        price: float,
        callback: Callback,
    ) -> None:
        action = "buy" if side == OrderSide.BID else "sell"
        
        # Order submission is not safe to replay, whatever the eligibility
        try:
            response = await self._request(action, self.gateway.place_order, side, amount, price)
        except ExchangeRejection as e:
            logger.error(f"unable to {action} ({e})")
            await _deliver(callback, e, e.details.get("data"))
            return
        except TraderError as e:
            logger.error(f"unable to {action} ({e})")
            await _deliver(callback, e, None)
            return
        
        await _deliver(callback, None, response.data)
    
    async def cancel_order(self, order: str) -> None:
        """Request cancellation of ``order``; failures are only logged."""
        try:
            response = await self._request("cancel_order", self.gateway.cancel_order, order)
        except TraderError as e:
            logger.error(f"unable to cancel order {order} ({e})")
            return
        
        if not response.is_success:
            logger.error(f"unable to cancel order {order} ({response.result})")
    
    async def check_order(self, order: str, callback: Callback) -> None:
        """
        Check whether ``order`` is closed; ``callback(None, is_closed)``.
        
        The gateway has no single-order lookup, so the full list
        of open orders is scanned. Absence means filled or
        cancelled.
        """
        response = await self._query(
            PendingCall(RetryableOperation.CHECK_ORDER, callback=callback, order=order),
            self.gateway.list_orders,
        )
        if response is None:
            return
        
        still_open = any(o.get("oid") == order for o in response.data or [])
        await _deliver(callback, None, not still_open)
    
    # --------------------------------------------------------
    # MARKET DATA
    # --------------------------------------------------------
    
    async def get_trades(
        self,
        since: Any,
        callback: Callback,
        descending: bool = False,
    ) -> None:
        """
        Fetch trades newer than ``since``; ``callback(trades)``.
        
        An empty page is treated like an error: the feed lags
        behind, so the call is retried until trades arrive.
        """
        if since and not isinstance(since, Number):
            since = to_micro(since)
        
        pending = PendingCall(
            RetryableOperation.GET_TRADES,
            callback=callback,
            since=since,
            descending=descending,
        )
        
        response = await self._query(pending, self.gateway.fetch_trades, since)
        if response is None:
            return
        
        if not response.data:
            self._retry_or_raise(pending, EmptyResultError(
                "empty trade page",
                operation="get_trades",
                exchange_id=self.gateway.exchange_id,
            ))
            return
        
        trades: List[Trade] = list(response.data)
        if descending:
            trades.reverse()
        
        await _deliver(callback, trades)
    
    async def get_ticker(self, callback: Callback) -> None:
        """Fetch best quotes; ``callback(None, Ticker)``."""
        response = await self._query(
            PendingCall(RetryableOperation.GET_TICKER, callback=callback),
            self.gateway.fetch_ticker,
        )
        if response is None:
            return
        
        ticker = Ticker(
            bid=response.data["buy"]["value"],
            ask=response.data["sell"]["value"],
        )
        await _deliver(callback, None, ticker)
    
    # --------------------------------------------------------
    # ACCOUNT
    # --------------------------------------------------------
    
    async def get_portfolio(self, callback: Callback) -> None:
        """
        Fetch balances; ``callback(None, portfolio)``.
        
        One PortfolioAsset per wallet, zero balances included:
        
            [PortfolioAsset(name='BTC', amount=10.12413123),
             PortfolioAsset(name='USD', amount=500.0241),
             PortfolioAsset(name='EUR', amount=0.0)]
        """
        response = await self._query(
            PendingCall(RetryableOperation.GET_PORTFOLIO, callback=callback),
            self.gateway.fetch_account_info,
        )
        if response is None:
            return
        
        assets: Portfolio = [
            PortfolioAsset(name=name, amount=float(wallet["Balance"]["value"]))
            for name, wallet in response.data["Wallets"].items()
        ]
        await _deliver(callback, None, assets)
    
    async def get_fee(self, callback: Callback) -> None:
        """Fetch the trading fee as a fraction; ``callback(None, fee)``."""
        response = await self._query(
            PendingCall(RetryableOperation.GET_FEE, callback=callback),
            self.gateway.fetch_account_info,
        )
        if response is None:
            return
        
        # exchange reports a percentage
        fee = float(response.data["Trade_Fee"]) / 100
        await _deliver(callback, None, fee)
    
    # --------------------------------------------------------
    # GATEWAY CALLS
    # --------------------------------------------------------
    
    async def _request(
        self,
        operation: str,
        call: Callable[..., Any],
        *args: Any,
        rejection: RetryEligibility = RetryEligibility.NO_RETRY,
    ) -> GatewayResponse:
        """
        Await one gateway call.
        
        Raises:
            TransportError: Gateway unreachable or timed out
            ExchangeRejection: Error envelope, with ``rejection`` eligibility
            EmptyResultError: Gateway returned no envelope at all
        """
        exchange_id = self.gateway.exchange_id
        
        try:
            response = await call(*args)
        except asyncio.TimeoutError:
            raise create_timeout_error(exchange_id, operation=operation)
        
        if response is None:
            raise EmptyResultError(
                f"{operation} returned no response",
                operation=operation,
                exchange_id=exchange_id,
            )
        
        if response.is_error:
            raise create_rejection(
                exchange_id,
                operation,
                response.data,
                retry_eligible=rejection,
            )
        
        return response
    
    async def _query(
        self,
        pending: PendingCall,
        call: Callable[..., Any],
        *args: Any,
    ) -> Optional[GatewayResponse]:
        """
        Run a read query, scheduling ``pending`` on retryable failure.
        
        Returns None once a retry has been scheduled.
        """
        try:
            return await self._request(
                pending.operation.value,
                call,
                *args,
                rejection=RetryEligibility.RETRY,
            )
        except TraderError as e:
            self._retry_or_raise(pending, e)
            return None
    
    # --------------------------------------------------------
    # RETRY
    # --------------------------------------------------------
    
    def _retry_or_raise(self, pending: PendingCall, error: TraderError) -> None:
        if not error.is_retryable():
            raise error
        self._retry.schedule(pending, error)
    
    async def _replay(self, pending: PendingCall) -> None:
        """Re-invoke the operation named by ``pending`` with its original arguments."""
        operation = getattr(self, pending.operation.value)
        await operation(**pending.as_kwargs())
