"""
Trader Client - Exchange Gateway Base.

============================================================
PURPOSE
============================================================
Abstract interface for the remote exchange gateway.

CONTRACT:
- Every call is a coroutine
- Transport failures raise TransportError
- Exchange-level failures come back as a GatewayResponse
  whose result is "error"

Signing, HTTP transport and JSON parsing live behind this
interface and are not part of the trader core.

============================================================
"""

from abc import ABC, abstractmethod
from typing import Optional

from ..types import GatewayResponse, OrderSide


class ExchangeGateway(ABC):
    """
    Abstract interface for exchange gateways.
    
    A gateway is bound to one set of credentials and one
    trading pair at construction time.
    """
    
    def __init__(
        self,
        api_key: Optional[str] = None,
        api_secret: Optional[str] = None,
        trading_pair: Optional[str] = None,
    ):
        self._api_key = api_key
        self._api_secret = api_secret
        self._trading_pair = trading_pair
    
    @property
    @abstractmethod
    def exchange_id(self) -> str:
        """Get exchange identifier."""
        pass
    
    @property
    def trading_pair(self) -> Optional[str]:
        return self._trading_pair
    
    # --------------------------------------------------------
    # ORDER OPERATIONS
    # --------------------------------------------------------
    
    @abstractmethod
    async def place_order(
        self,
        side: OrderSide,
        amount: float,
        price: float,
    ) -> GatewayResponse:
        """
        Submit an order.
        
        Returns:
            GatewayResponse whose data is the exchange order id
        
        Raises:
            TransportError: If the exchange is unreachable
        """
        pass
    
    @abstractmethod
    async def cancel_order(self, order_id: str) -> GatewayResponse:
        """Cancel an order by exchange id."""
        pass
    
    @abstractmethod
    async def list_orders(self) -> GatewayResponse:
        """
        List all open orders.
        
        Returns:
            GatewayResponse whose data is a list of order
            mappings, each carrying an ``oid``
        """
        pass
    
    # --------------------------------------------------------
    # MARKET DATA
    # --------------------------------------------------------
    
    @abstractmethod
    async def fetch_trades(self, since: Optional[int] = None) -> GatewayResponse:
        """
        Fetch public trades newer than ``since``.
        
        Args:
            since: Microsecond timestamp, or None for the latest page
        """
        pass
    
    @abstractmethod
    async def fetch_ticker(self) -> GatewayResponse:
        """Fetch current ticker (``buy``/``sell`` quotes)."""
        pass
    
    # --------------------------------------------------------
    # ACCOUNT
    # --------------------------------------------------------
    
    @abstractmethod
    async def fetch_account_info(self) -> GatewayResponse:
        """Fetch wallets (``Wallets``) and fee (``Trade_Fee``)."""
        pass
