"""Equity trade execution against the shared balance"""

from typing import Optional

from ..config.defaults import PortfolioParams
from ..logging.config import get_trade_logger, log_declined_decision
from ..models.positions import Portfolio, Position
from ..models.results import TradeOutcome, TradeResult
from ..signals.sma import TrendSignal
from .balance import Balance

trade_logger = get_trade_logger(__name__)


class PortfolioManager:
    """
    Executes buys and sells at slippage-adjusted limit prices.

    Every trade is all-or-nothing: buys are sized from the cash balance, and
    sells always close the whole position.
    """

    def __init__(self, balance: Balance, portfolio: Portfolio,
                 params: Optional[PortfolioParams] = None):
        self.balance = balance
        self.portfolio = portfolio
        self.params = params or PortfolioParams()

    def limit_buy_price(self, price: float) -> float:
        """Buy execution price, slippage below the observed price."""
        return price * (1.0 - self.params.slippage)

    def limit_sell_price(self, price: float) -> float:
        """Sell execution price, slippage above the observed price."""
        return price * (1.0 + self.params.slippage)

    def buy_quantity(self, limit_buy: float) -> int:
        """
        Shares to buy at limit_buy.

        The cash is split by the configured total instrument count, not by
        the number of instruments still able to trade.
        """
        qty = int(self.balance.available / limit_buy / self.params.companies)
        # Guard against float rounding pushing the cost past the balance
        while qty > 0 and not self.balance.can_afford(qty * limit_buy):
            qty -= 1
        return qty

    def try_buy(self, instrument: str, price: float, signal: TrendSignal) -> TradeResult:
        """
        Buy when the price is below the moving average.

        Args:
            instrument: Instrument identifier
            price: Observed price
            signal: Trend signal for this observation

        Returns:
            Filled result, or the reason no buy happened
        """
        if not signal.is_warm:
            return self._declined(instrument, "buy", TradeOutcome.COLD_HISTORY)
        if not signal.entry():
            return self._declined(instrument, "buy", TradeOutcome.NO_SIGNAL)

        limit_buy = self.limit_buy_price(price)
        if not self.balance.can_afford(limit_buy):
            return self._declined(instrument, "buy", TradeOutcome.INSUFFICIENT_BALANCE,
                                  limit_price=limit_buy)

        qty = self.buy_quantity(limit_buy)
        if qty <= 0:
            return self._declined(instrument, "buy", TradeOutcome.INSUFFICIENT_BALANCE,
                                  limit_price=limit_buy)

        cost = qty * limit_buy
        self.balance.debit(cost)
        position = self.portfolio.get_or_create(instrument)
        position.add_shares(qty, limit_buy)

        trade_logger.info(
            "Bought shares",
            instrument=instrument,
            quantity=qty,
            limit_price=limit_buy,
            sma=signal.sma,
            avg_price=position.avg_price,
            balance=self.balance.available
        )
        return TradeResult.fill(instrument, qty, limit_buy, -cost)

    def try_sell(self, instrument: str, price: float, signal: TrendSignal) -> TradeResult:
        """Sell the whole position above the average and the cost basis."""
        if not signal.is_warm:
            return self._declined(instrument, "sell", TradeOutcome.COLD_HISTORY)

        position = self.portfolio.get_or_create(instrument)
        if position.is_flat:
            return self._declined(instrument, "sell", TradeOutcome.NO_POSITION)
        if not signal.exit(position):
            return self._declined(instrument, "sell", TradeOutcome.NO_SIGNAL)

        return self._close(position, self.limit_sell_price(price), "Sold position")

    def try_alert_sell(self, instrument: str, price: float, signal: TrendSignal) -> TradeResult:
        """Sell the whole position at the observed price on a forecast drop."""
        if not signal.is_warm:
            return self._declined(instrument, "alert_sell", TradeOutcome.COLD_HISTORY)

        position = self.portfolio.get_or_create(instrument)
        if position.is_flat:
            return self._declined(instrument, "alert_sell", TradeOutcome.NO_POSITION)
        if not signal.forecast_drop(position):
            return self._declined(instrument, "alert_sell", TradeOutcome.NO_SIGNAL)

        return self._close(position, price, "Alert sold position on drop forecast")

    def liquidate(self, instrument: str, price: float) -> TradeResult:
        """Sell the whole position at price without slippage."""
        if instrument not in self.portfolio or self.portfolio.get(instrument).is_flat:
            return TradeResult.declined(instrument, TradeOutcome.NO_POSITION)

        return self._close(self.portfolio.get(instrument), price, "Liquidated position")

    def _close(self, position: Position, price: float, message: str) -> TradeResult:
        proceeds = position.shares * price
        self.balance.credit(proceeds)
        qty = position.close()

        trade_logger.info(
            message,
            instrument=position.instrument,
            quantity=qty,
            price=price,
            proceeds=proceeds,
            balance=self.balance.available
        )
        return TradeResult.fill(position.instrument, qty, price, proceeds)

    def _declined(self, instrument: str, decision: str, outcome: TradeOutcome,
                  **context) -> TradeResult:
        # No-position and no-signal outcomes are the common case every tick
        if outcome in (TradeOutcome.INSUFFICIENT_BALANCE, TradeOutcome.COLD_HISTORY):
            log_declined_decision(trade_logger, instrument, decision, outcome.value,
                                  context=context or None)
        return TradeResult.declined(instrument, outcome)
