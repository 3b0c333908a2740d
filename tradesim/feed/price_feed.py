"""Price feeds producing one price per instrument per tick."""

import random
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Optional

import structlog

from ..config.defaults import PriceFeedParams
from ..errors import MissingPriceError

logger = structlog.get_logger(__name__)


class BasePriceFeed(ABC):
    """Base class for price sources."""

    @abstractmethod
    def next_price(self, instrument: str, tick: int) -> float:
        """
        Produce the price of an instrument at a tick.

        Args:
            instrument: Instrument identifier
            tick: Session tick index

        Returns:
            Observed price
        """
        pass


class RandomWalkPriceFeed(BasePriceFeed):
    """
    Bounded random walk rounded to cents.

    Each instrument starts at ``start_price_min`` plus a random whole offset
    below ``start_price_spread``. Every call moves the price by a uniform
    step in ``[-max_move_pct, +max_move_pct]`` at ``move_resolution``
    granularity, including the first call.
    """

    def __init__(self, params: Optional[PriceFeedParams] = None, seed: Optional[int] = None):
        self.params = params or PriceFeedParams()
        self.seed = seed if seed is not None else self.params.seed
        self._rng = random.Random(self.seed)
        self._prices: dict[str, float] = {}
        self._steps = int(round(self.params.max_move_pct / self.params.move_resolution))

        logger.info("Random walk price feed initialized", seed=self.seed)

    def _draw_move(self) -> float:
        return self._rng.randint(-self._steps, self._steps) * self.params.move_resolution

    def next_price(self, instrument: str, tick: int) -> float:
        move = self._draw_move()
        if instrument not in self._prices:
            self._prices[instrument] = (
                self.params.start_price_min + self._rng.randrange(self.params.start_price_spread)
            )

        price = round(self._prices[instrument] * (1.0 + move), self.params.price_decimals)
        self._prices[instrument] = price
        return price


class SequencePriceFeed(BasePriceFeed):
    """Replays a fixed price sequence per instrument, indexed by tick."""

    def __init__(self, sequences: Mapping[str, Sequence[float]]):
        self.sequences = {instrument: list(prices) for instrument, prices in sequences.items()}

    def next_price(self, instrument: str, tick: int) -> float:
        prices = self.sequences.get(instrument)
        if prices is None:
            raise MissingPriceError(f"No price sequence for {instrument}",
                                    instrument=instrument, tick=tick)
        if tick < 0 or tick >= len(prices):
            raise MissingPriceError(f"Price sequence for {instrument} has no tick {tick}",
                                    instrument=instrument, tick=tick)
        return prices[tick]

    def length(self) -> int:
        """Number of ticks every sequence can serve."""
        if not self.sequences:
            return 0
        return min(len(prices) for prices in self.sequences.values())
