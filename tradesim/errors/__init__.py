"""
Error classification for the trading engine.

Guard conditions that are part of normal trading (cold history, unmet trend
conditions, unaffordable orders) are reported as result kinds, not raised.
The exceptions below cover contract violations: debits beyond available
cash, invalid pricing inputs, missing market data and misuse of a settled
session.
"""

from .trading import (
    TradingError,
    InsufficientBalanceError,
    InvalidPricingInputError,
    InvalidPriceError,
    MissingPriceError,
)
from .system_failures import (
    SystemFailureError,
    SessionStateError,
    ConfigurationError,
)

__all__ = [
    # Trading errors
    "TradingError",
    "InsufficientBalanceError",
    "InvalidPricingInputError",
    "InvalidPriceError",
    "MissingPriceError",
    # System failures
    "SystemFailureError",
    "SessionStateError",
    "ConfigurationError",
]
