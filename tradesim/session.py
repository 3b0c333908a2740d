"""
Session driver.

Runs one full session: pulls a price per instrument per tick from the feed,
hands each tick to the engine in its instrument order, settles once at the
end and publishes everything to the configured deliveries.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

import structlog

from .config.defaults import EngineConfig
from .config.loader import ConfigLoader
from .delivery.base import BaseActionDelivery
from .engine import TradingEngine
from .feed.price_feed import BasePriceFeed, RandomWalkPriceFeed
from .models.actions import SessionSummary, TradeAction
from .utils.time import session_duration_minutes

logger = structlog.get_logger(__name__)


@dataclass
class SessionReport:
    """Outcome of a completed session."""
    summary: SessionSummary
    actions: list[TradeAction] = field(default_factory=list)
    last_prices: dict[str, float] = field(default_factory=dict)
    ticks: int = 0

    def actions_of(self, *action_types) -> list[TradeAction]:
        """Actions of the given types, in execution order."""
        return [a for a in self.actions if a.action_type in action_types]


class SessionRunner:
    """Drives an engine through every tick of one session."""

    def __init__(
        self,
        engine: TradingEngine,
        feed: BasePriceFeed,
        deliveries: Optional[Sequence[BaseActionDelivery]] = None,
        ticks: Optional[int] = None
    ) -> None:
        self.engine = engine
        self.feed = feed
        self.deliveries = list(deliveries or [])
        self.ticks = ticks if ticks is not None else engine.config.session.ticks_per_session

    def run(self) -> SessionReport:
        """
        Run the session to completion.

        Returns:
            SessionReport with every action, the final prices and the summary
        """
        logger.info(
            "Session started",
            ticks=self.ticks,
            instruments=list(self.engine.instrument_order),
            scheduled_minutes=session_duration_minutes(self.engine.config.session)
        )
        for delivery in self.deliveries:
            delivery.start_session(self.engine.balance.initial)

        last_prices: dict[str, float] = {}
        actions: list[TradeAction] = []

        for tick in range(self.ticks):
            prices = {
                instrument: self.feed.next_price(instrument, tick)
                for instrument in self.engine.instrument_order
            }
            last_prices.update(prices)

            tick_actions = self.engine.process_tick(tick, prices)
            actions.extend(tick_actions)
            self._deliver(tick_actions)

        settlement_actions = self.engine.settle(last_prices)
        actions.extend(settlement_actions)
        self._deliver(settlement_actions)

        summary = self.engine.summary()
        for delivery in self.deliveries:
            delivery.deliver_summary(summary)

        logger.info(
            "Session completed",
            final_balance=summary.final_balance,
            profit_loss=summary.profit_loss,
            actions=len(actions)
        )
        return SessionReport(summary=summary, actions=actions, last_prices=last_prices, ticks=self.ticks)

    def _deliver(self, actions: list[TradeAction]) -> None:
        if not actions:
            return
        for delivery in self.deliveries:
            delivery.deliver_with_stats(actions)


def create_session(
    config: Optional[EngineConfig] = None,
    config_dir: Optional[Union[str, Path]] = None,
    overrides: Optional[dict[str, Any]] = None,
    seed: Optional[int] = None,
    deliveries: Optional[Sequence[BaseActionDelivery]] = None
) -> SessionRunner:
    """
    Build an engine and a random walk feed ready to run.

    Args:
        config: Complete configuration; loaded from config_dir when omitted
        config_dir: Directory holding session.yaml overrides
        overrides: Explicit configuration overrides
        seed: Price feed seed, takes precedence over the configured seed
        deliveries: Where to publish actions

    Returns:
        SessionRunner for the new session
    """
    if config is None:
        config = ConfigLoader.create(config_dir).load(overrides)

    engine = TradingEngine(config)
    feed = RandomWalkPriceFeed(config.feed, seed=seed)
    return SessionRunner(engine, feed, deliveries=deliveries)
