"""
Trader Client - Error Taxonomy.

============================================================
PURPOSE
============================================================
Error classification for gateway failures.

ERROR CATEGORIES:
1. TRANSPORT           - Gateway unreachable, timeouts
2. EXCHANGE_REJECTION  - Well-formed response flagged as error
3. EMPTY_RESULT        - Valid response without any elements

RETRYABLE vs NON-RETRYABLE:
- Transport errors are retried for read/query operations
- Empty results are retried for trade history only
- Order and cancel rejections are authoritative and never retried
- Error answers to read queries are retried

============================================================
"""

from enum import Enum
from typing import Optional, Dict, Any


# ============================================================
# ERROR TAXONOMY
# ============================================================

class ErrorCategory(Enum):
    """Standardized error categories."""
    
    TRANSPORT = "TRANSPORT"
    """Gateway call itself failed (network, timeout)."""
    
    EXCHANGE_REJECTION = "EXCHANGE_REJECTION"
    """Gateway answered but flagged the request as rejected."""
    
    EMPTY_RESULT = "EMPTY_RESULT"
    """Gateway answered with zero elements."""


class RetryEligibility(Enum):
    """Whether error is eligible for retry."""
    
    RETRY = "RETRY"           # Retry after the fixed delay
    NO_RETRY = "NO_RETRY"     # Surface to the caller


# ============================================================
# EXCEPTIONS
# ============================================================

class TraderError(Exception):
    """Base class for trader client errors."""
    
    category: ErrorCategory = ErrorCategory.TRANSPORT
    retry_eligible: RetryEligibility = RetryEligibility.RETRY
    
    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        exchange_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        retry_eligible: Optional[RetryEligibility] = None,
    ):
        super().__init__(message)
        if retry_eligible is not None:
            self.retry_eligible = retry_eligible
        self.message = message
        self.operation = operation
        self.exchange_id = exchange_id
        self.details = details or {}
    
    def is_retryable(self) -> bool:
        """Check if error is retryable."""
        return self.retry_eligible == RetryEligibility.RETRY
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "category": self.category.value,
            "message": self.message,
            "retry_eligible": self.retry_eligible.value,
            "operation": self.operation,
            "exchange_id": self.exchange_id,
            "details": self.details,
        }
    
    def __str__(self) -> str:
        return f"[{self.category.value}] {self.message}"


class TransportError(TraderError):
    """Gateway unreachable or timed out."""
    
    category = ErrorCategory.TRANSPORT
    retry_eligible = RetryEligibility.RETRY


class ExchangeRejection(TraderError):
    """Exchange explicitly marked the request as failed."""
    
    category = ErrorCategory.EXCHANGE_REJECTION
    retry_eligible = RetryEligibility.NO_RETRY


class EmptyResultError(TraderError):
    """Exchange returned an empty result where data was expected."""
    
    category = ErrorCategory.EMPTY_RESULT
    retry_eligible = RetryEligibility.RETRY


# ============================================================
# ERROR HELPERS
# ============================================================

def create_transport_error(
    exchange_id: str,
    message: str,
    operation: str = None,
) -> TransportError:
    """Create transport error."""
    return TransportError(
        f"Network error: {message}",
        operation=operation,
        exchange_id=exchange_id,
    )


def create_timeout_error(
    exchange_id: str,
    timeout_seconds: Optional[float] = None,
    operation: str = None,
) -> TransportError:
    """Create timeout error."""
    message = "Request timed out"
    if timeout_seconds is not None:
        message = f"{message} after {timeout_seconds}s"
    
    return TransportError(
        message,
        operation=operation,
        exchange_id=exchange_id,
    )


def create_rejection(
    exchange_id: str,
    operation: str,
    response_data: Any = None,
    retry_eligible: RetryEligibility = RetryEligibility.NO_RETRY,
) -> ExchangeRejection:
    """
    Create rejection error from an error envelope.
    
    Rejections of orders and cancels are final. Read queries
    pass RETRY: an error answer there is a transient hiccup.
    """
    return ExchangeRejection(
        f"{operation} rejected by exchange",
        operation=operation,
        exchange_id=exchange_id,
        details={"data": response_data},
        retry_eligible=retry_eligible,
    )
