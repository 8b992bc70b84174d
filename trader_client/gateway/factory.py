"""
Exchange Gateway Factory.

============================================================
PURPOSE
============================================================
Registry for building gateway instances bound to a set of
credentials and a trading pair.

============================================================
USAGE
============================================================
```python
gateway = GatewayFactory.create("mock", "key", "secret", "BTCUSD")

GatewayFactory.register("mtgox", MtGoxGateway)
gateway = GatewayFactory.create("mtgox", key, secret, pair)
```

============================================================
"""

import logging
from typing import Callable, Dict, List, Optional, Type

from .base import ExchangeGateway
from .mock import MockGateway


logger = logging.getLogger(__name__)


GatewayCreator = Callable[[Optional[str], Optional[str], Optional[str]], ExchangeGateway]


class GatewayFactory:
    """
    Factory for creating exchange gateways.
    
    Gateways are registered either as a class taking
    ``(api_key, api_secret, trading_pair)`` or as a creator
    function with the same signature.
    """
    
    _registry: Dict[str, Type[ExchangeGateway]] = {
        "mock": MockGateway,
    }
    
    _creators: Dict[str, GatewayCreator] = {}
    
    @classmethod
    def register(
        cls,
        gateway_id: str,
        gateway_class: Type[ExchangeGateway] = None,
        creator: GatewayCreator = None,
    ) -> None:
        """
        Register a gateway class or creator.
        
        Args:
            gateway_id: Gateway identifier
            gateway_class: Gateway class to register
            creator: Custom creator function
        """
        gateway_id = gateway_id.lower()
        
        if gateway_class:
            cls._registry[gateway_id] = gateway_class
        if creator:
            cls._creators[gateway_id] = creator
    
    @classmethod
    def unregister(cls, gateway_id: str) -> None:
        """Unregister a gateway."""
        gateway_id = gateway_id.lower()
        cls._registry.pop(gateway_id, None)
        cls._creators.pop(gateway_id, None)
    
    @classmethod
    def create(
        cls,
        gateway_id: str,
        api_key: Optional[str] = None,
        api_secret: Optional[str] = None,
        trading_pair: Optional[str] = None,
    ) -> ExchangeGateway:
        """
        Create a gateway.
        
        Raises:
            ValueError: If gateway not supported
        """
        gateway_id = gateway_id.lower()
        
        if gateway_id in cls._creators:
            gateway = cls._creators[gateway_id](api_key, api_secret, trading_pair)
        elif gateway_id in cls._registry:
            gateway = cls._registry[gateway_id](api_key, api_secret, trading_pair)
        else:
            raise ValueError(f"Unsupported gateway: {gateway_id}")
        
        logger.debug(f"Created {gateway_id} gateway for {trading_pair}")
        return gateway
    
    @classmethod
    def list_supported(cls) -> List[str]:
        """List supported gateways."""
        return sorted(set(cls._registry) | set(cls._creators))
