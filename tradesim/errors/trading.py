"""
Trading error classifications.

These exceptions are raised by the core components when a caller breaks one
of their preconditions. They are recoverable: the session can continue once
the offending operation is skipped.
"""

from typing import Optional, Dict, Any


class TradingError(Exception):
    """Base class for recoverable trading errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class InsufficientBalanceError(TradingError):
    """A debit was requested for more cash than the balance holds."""

    def __init__(self, message: str, requested: Optional[float] = None,
                 available: Optional[float] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.requested = requested
        self.available = available


class InvalidPricingInputError(TradingError):
    """Option pricing inputs outside the domain of the pricing model."""

    def __init__(self, message: str, inputs: Optional[Dict[str, float]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.inputs = inputs or {}


class MissingPriceError(TradingError):
    """No price available for an instrument that must be processed."""

    def __init__(self, message: str, instrument: Optional[str] = None,
                 tick: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.instrument = instrument
        self.tick = tick


class InvalidPriceError(TradingError):
    """Observed price is not a positive finite number."""

    def __init__(self, message: str, instrument: Optional[str] = None,
                 price: Optional[float] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.instrument = instrument
        self.price = price
