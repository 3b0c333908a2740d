"""Default configuration parameters for the trading session."""

from dataclasses import dataclass, field
from typing import Optional


DEFAULT_INSTRUMENTS = ("AAPL", "GOOGL", "AMZN", "MSFT", "TSLA")


@dataclass(frozen=True)
class SessionParams:
    """Session timing and instrument universe."""
    ticks_per_session: int = 72                      # 6 hours of 5 minute ticks
    tick_minutes: int = 5                            # Minutes between ticks
    session_start: str = "09:30"                     # Wall-clock time of tick 0
    # Processing order is significant: earlier instruments get first claim on cash
    instruments: tuple[str, ...] = field(default=DEFAULT_INSTRUMENTS)


@dataclass(frozen=True)
class PortfolioParams:
    """Cash, sizing and execution parameters."""
    initial_balance: float = 100000.0
    companies: int = 5                               # Buy sizing divisor
    slippage: float = 0.01                           # Unfavorable execution offset
    exit_cost_mult: float = 1.01                     # Exit only above avg_price * mult


@dataclass(frozen=True)
class SignalParams:
    """Trend signal parameters."""
    sma_window: int = 10                             # Simple moving average length
    forecast_drop_mult: float = 0.97                 # Alert sell below SMA * mult
    evaluation_cadence: int = 2                      # Forecast/exercise every N ticks


@dataclass(frozen=True)
class OptionParams:
    """Option pricing and hedge parameters."""
    maturity: float = 0.1                            # Years, fixed for the session
    risk_free_rate: float = 0.01
    volatility: float = 0.2
    call_strike_mult: float = 1.05                   # OTM call strike vs spot
    put_strike_mult: float = 0.95                    # OTM put strike vs spot


@dataclass(frozen=True)
class PriceFeedParams:
    """Random walk price feed parameters."""
    seed: Optional[int] = None
    start_price_min: float = 100.0
    start_price_spread: int = 50                     # Start in [min, min + spread)
    max_move_pct: float = 0.10                       # Max per-tick move either way
    move_resolution: float = 0.001                   # Move step size
    price_decimals: int = 2


@dataclass(frozen=True)
class EngineConfig:
    """Complete engine configuration."""
    session: SessionParams
    portfolio: PortfolioParams
    signal: SignalParams
    options: OptionParams
    feed: PriceFeedParams


def get_default_config() -> EngineConfig:
    """Get the default configuration instance."""
    return EngineConfig(
        session=SessionParams(),
        portfolio=PortfolioParams(),
        signal=SignalParams(),
        options=OptionParams(),
        feed=PriceFeedParams(),
    )
