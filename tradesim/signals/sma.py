"""Simple moving average trend signal"""

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import structlog

from ..config.defaults import SignalParams
from ..models.positions import Position

logger = structlog.get_logger(__name__)


class SignalStatus(str, Enum):
    """Signal availability."""
    COLD = "cold"      # History not yet full
    WARM = "warm"


class PriceHistory:
    """Fixed-capacity FIFO of the most recent prices for one instrument"""

    def __init__(self, capacity: int):
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._prices: deque[float] = deque(maxlen=capacity)

    def append(self, price: float) -> None:
        """Append a price, evicting the oldest once at capacity."""
        self._prices.append(price)
        assert len(self._prices) <= self.capacity

    @property
    def is_full(self) -> bool:
        return len(self._prices) == self.capacity

    def sma(self) -> Optional[float]:
        """
        Arithmetic mean of the window

        Returns:
            SMA value or None if the history is not yet full
        """
        if not self.is_full:
            return None
        return sum(self._prices) / self.capacity

    def prices(self) -> list[float]:
        """Prices oldest first."""
        return list(self._prices)

    def __len__(self) -> int:
        return len(self._prices)


@dataclass(frozen=True)
class TrendSignal:
    """Trend evaluation for one instrument at one tick."""

    instrument: str
    price: float
    tick: int
    status: SignalStatus
    sma: Optional[float] = None
    evaluation_tick: bool = False        # Forecast/exercise cadence tick

    # Thresholds captured from configuration
    exit_cost_mult: float = 1.01
    forecast_drop_mult: float = 0.97

    @property
    def is_warm(self) -> bool:
        return self.status is SignalStatus.WARM

    def entry(self) -> bool:
        """Price below the moving average."""
        return self.is_warm and self.price < self.sma

    def exit(self, position: Position) -> bool:
        """Price above the average and clear of the cost basis."""
        return (
            self.is_warm
            and self.price > self.sma
            and position.shares > 0
            and self.price > position.avg_price * self.exit_cost_mult
        )

    def forecast_drop(self, position: Position) -> bool:
        """Price fell far enough below the average to liquidate."""
        return (
            self.is_warm
            and self.evaluation_tick
            and position.shares > 0
            and self.price < self.sma * self.forecast_drop_mult
        )


class SignalEngine:
    """Maintains price histories and produces trend signals per instrument"""

    def __init__(self, params: Optional[SignalParams] = None, exit_cost_mult: float = 1.01):
        self.params = params or SignalParams()
        self.exit_cost_mult = exit_cost_mult
        self.histories: dict[str, PriceHistory] = {}

    def get_history(self, instrument: str) -> PriceHistory:
        """Get or create the price history for an instrument."""
        if instrument not in self.histories:
            self.histories[instrument] = PriceHistory(self.params.sma_window)
        return self.histories[instrument]

    def is_evaluation_tick(self, tick: int) -> bool:
        """Forecast and exercise checks run every evaluation_cadence ticks."""
        return tick % self.params.evaluation_cadence == 0

    def observe(self, instrument: str, price: float, tick: int) -> TrendSignal:
        """
        Record a price and evaluate the trend

        Args:
            instrument: Instrument identifier
            price: Observed price
            tick: Session tick index

        Returns:
            TrendSignal, COLD until the history holds a full window
        """
        history = self.get_history(instrument)
        history.append(price)

        sma = history.sma()
        if sma is None:
            logger.debug(
                "Signal cold",
                instrument=instrument,
                tick=tick,
                observations=len(history),
                required=history.capacity
            )
            return TrendSignal(
                instrument=instrument,
                price=price,
                tick=tick,
                status=SignalStatus.COLD,
                evaluation_tick=self.is_evaluation_tick(tick),
                exit_cost_mult=self.exit_cost_mult,
                forecast_drop_mult=self.params.forecast_drop_mult,
            )

        return TrendSignal(
            instrument=instrument,
            price=price,
            tick=tick,
            status=SignalStatus.WARM,
            sma=sma,
            evaluation_tick=self.is_evaluation_tick(tick),
            exit_cost_mult=self.exit_cost_mult,
            forecast_drop_mult=self.params.forecast_drop_mult,
        )
