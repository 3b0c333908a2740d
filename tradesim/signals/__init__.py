"""
Trend signal module.

Per-instrument bounded price history and the simple moving average signal
that drives entries, exits and forecast-drop liquidations.
"""
from .sma import PriceHistory, SignalEngine, SignalStatus, TrendSignal

__all__ = ["PriceHistory", "SignalEngine", "SignalStatus", "TrendSignal"]
