"""
Main trading engine coordinator.

Turns price observations into trade, hedge and exercise actions, and settles
the book once at the end of the session.

Per instrument and tick:
Price → Signal → Buy (+ Hedge) → Exit Sell → Alert Sell → Option Exercise
"""

import math
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any, Optional

import structlog

from .config.defaults import EngineConfig, get_default_config
from .errors import InvalidPriceError, MissingPriceError, SessionStateError
from .logging.config import get_trade_logger, log_trade_action
from .models.actions import ActionType, Holding, SessionSummary, TradeAction
from .models.positions import Portfolio, Position
from .options.lifecycle import OptionLifecycleManager
from .portfolio.balance import Balance
from .portfolio.manager import PortfolioManager
from .settlement import SettlementEngine
from .signals.sma import SignalEngine
from .utils.time import tick_to_session_time

logger = structlog.get_logger(__name__)
trade_logger = get_trade_logger(__name__)


class SessionPhase(str, Enum):
    """Engine session phases."""
    TRADING = "trading"
    SETTLED = "settled"


class InstrumentState(str, Enum):
    """Per-instrument trading state."""
    COLD = "cold"          # History not yet full
    FLAT = "flat"
    HOLDING = "holding"
    SETTLED = "settled"


class TradingEngine:
    """
    Coordinator for one trading session.

    The engine owns the cash balance and the portfolio and wires them into
    the signal, portfolio, option and settlement components. It is single
    use: once settled it rejects further prices.

    Instruments are processed in ``instrument_order`` every tick. The order
    matters because all buys draw on the same balance, so earlier
    instruments get first claim on the cash.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        instrument_order: Optional[Sequence[str]] = None
    ) -> None:
        """Initialize the trading engine."""
        self.config = config or get_default_config()
        self.instrument_order = tuple(instrument_order or self.config.session.instruments)

        if len(set(self.instrument_order)) != len(self.instrument_order):
            raise ValueError(f"instrument_order contains duplicates: {self.instrument_order}")

        # Shared resources
        self.balance = Balance(self.config.portfolio.initial_balance)
        self.portfolio = Portfolio()

        # Components
        self.signal_engine = SignalEngine(
            self.config.signal,
            exit_cost_mult=self.config.portfolio.exit_cost_mult,
        )
        self.portfolio_manager = PortfolioManager(self.balance, self.portfolio, self.config.portfolio)
        self.option_manager = OptionLifecycleManager(
            self.balance,
            self.portfolio,
            self.config.options,
            evaluation_cadence=self.config.signal.evaluation_cadence,
        )
        self.settlement_engine = SettlementEngine(self.balance, self.portfolio, self.portfolio_manager)

        self.phase = SessionPhase.TRADING
        self.actions: list[TradeAction] = []

        logger.info(
            "Trading engine initialized",
            initial_balance=self.balance.available,
            instruments=list(self.instrument_order)
        )

    def on_price(self, instrument: str, price: float, tick: int) -> list[TradeAction]:
        """
        Process one price observation for one instrument.

        Args:
            instrument: Instrument identifier, must be in instrument_order
            price: Observed price
            tick: Session tick index

        Returns:
            Actions taken, in execution order
        """
        self._ensure_trading("on_price")

        if instrument not in self.instrument_order:
            raise ValueError(f"Unknown instrument {instrument!r}")
        if tick < 0:
            raise ValueError(f"tick must be non-negative, got {tick}")
        if not isinstance(price, (int, float)) or not math.isfinite(price) or price <= 0:
            raise InvalidPriceError(
                f"Price for {instrument} must be a positive finite number, got {price}",
                instrument=instrument,
                price=price,
            )

        signal = self.signal_engine.observe(instrument, price, tick)
        if not signal.is_warm:
            return []

        session_time = tick_to_session_time(tick, self.config.session)
        actions = []

        buy = self.portfolio_manager.try_buy(instrument, price, signal)
        if buy.filled:
            actions.append(TradeAction(
                action_type=ActionType.BUY,
                instrument=instrument,
                tick=tick,
                quantity=buy.quantity,
                price=buy.price,
                amount=buy.amount,
                session_time=session_time,
            ))
            for contract in self.option_manager.issue_hedge(instrument, price):
                actions.append(TradeAction.for_option_purchase(
                    instrument, contract, tick=tick, session_time=session_time
                ))

        # Exit sell runs first; the alert sell sees the position it leaves
        sell = self.portfolio_manager.try_sell(instrument, price, signal)
        if sell.filled:
            actions.append(TradeAction(
                action_type=ActionType.SELL,
                instrument=instrument,
                tick=tick,
                quantity=sell.quantity,
                price=sell.price,
                amount=sell.amount,
                session_time=session_time,
            ))

        alert = self.portfolio_manager.try_alert_sell(instrument, price, signal)
        if alert.filled:
            actions.append(TradeAction(
                action_type=ActionType.ALERT_SELL,
                instrument=instrument,
                tick=tick,
                quantity=alert.quantity,
                price=alert.price,
                amount=alert.amount,
                session_time=session_time,
            ))

        for exercise in self.option_manager.check_exercise(instrument, price, tick):
            actions.append(TradeAction.for_option_payout(
                ActionType.ALERT_EXIT_OPTION,
                instrument,
                exercise.contract,
                exercise.price,
                exercise.payout,
                tick=tick,
                session_time=session_time,
            ))

        self._record(actions)
        return actions

    def process_tick(self, tick: int, prices: Mapping[str, float]) -> list[TradeAction]:
        """
        Process one tick for every instrument in instrument_order.

        Args:
            tick: Session tick index
            prices: Observed price per instrument

        Returns:
            Actions of all instruments, in processing order
        """
        self._ensure_trading("process_tick")

        missing = [instrument for instrument in self.instrument_order if instrument not in prices]
        if missing:
            raise MissingPriceError(
                f"Missing prices at tick {tick} for {', '.join(missing)}",
                instrument=missing[0],
                tick=tick,
            )

        actions = []
        for instrument in self.instrument_order:
            actions.extend(self.on_price(instrument, prices[instrument], tick))

        logger.debug("Processed tick", tick=tick, actions=len(actions), balance=self.balance.available)
        return actions

    def settle(self, last_prices: Mapping[str, float]) -> list[TradeAction]:
        """
        Liquidate positions and settle contracts at the final prices.

        Settling an already settled engine changes nothing and returns no
        actions.

        Args:
            last_prices: Final observed price per instrument

        Returns:
            EOD sell and option payout actions
        """
        result = self.settlement_engine.settle(last_prices)

        actions = []
        for sale in result.sales:
            actions.append(TradeAction(
                action_type=ActionType.EOD_SELL,
                instrument=sale.instrument,
                quantity=sale.quantity,
                price=sale.price,
                amount=sale.amount,
            ))
        for payout in result.payouts:
            actions.append(TradeAction.for_option_payout(
                ActionType.OPTION_PAYOUT,
                payout.instrument,
                payout.contract,
                payout.price,
                payout.payout,
            ))

        if self.phase is not SessionPhase.SETTLED:
            logger.info(
                "Session phase changed",
                from_phase=self.phase.value,
                to_phase=SessionPhase.SETTLED.value
            )
        self.phase = SessionPhase.SETTLED
        self._record(actions)
        return actions

    def instrument_state(self, instrument: str) -> InstrumentState:
        """Current trading state of an instrument."""
        if self.phase is SessionPhase.SETTLED:
            return InstrumentState.SETTLED

        history = self.signal_engine.histories.get(instrument)
        if history is None or not history.is_full:
            return InstrumentState.COLD
        if self.portfolio.get(instrument).is_flat:
            return InstrumentState.FLAT
        return InstrumentState.HOLDING

    def get_position(self, instrument: str) -> Position:
        """Position for an instrument, flat if never traded."""
        return self.portfolio.get(instrument)

    def summary(self) -> SessionSummary:
        """Final balance and residual holdings."""
        holdings = [
            Holding(instrument=pos.instrument, shares=pos.shares, avg_price=pos.avg_price)
            for pos in self.portfolio.open_positions()
        ]
        return SessionSummary(
            initial_balance=self.balance.initial,
            final_balance=self.balance.available,
            holdings=holdings,
        )

    def get_runtime_stats(self) -> dict[str, Any]:
        """Get runtime statistics."""
        return {
            'phase': self.phase.value,
            'balance': self.balance.available,
            'tracked_instruments': len(self.signal_engine.histories),
            'open_positions': len(self.portfolio.open_positions()),
            'options_held': sum(len(pos.options) for pos in self.portfolio),
            'actions': len(self.actions),
        }

    def _ensure_trading(self, operation: str) -> None:
        if self.phase is not SessionPhase.TRADING:
            raise SessionStateError(
                f"Cannot {operation} after the session has been settled",
                current_state=self.phase.value,
                attempted_operation=operation,
            )

    def _record(self, actions: list[TradeAction]) -> None:
        for action in actions:
            log_trade_action(trade_logger, action)
        self.actions.extend(actions)
