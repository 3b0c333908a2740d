"""
End-of-session settlement.

Liquidates every open position at the final observed price and pays out or
expires every remaining option contract. Settlement leaves every position
flat with no contracts, so running it again is a no-op.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field

from .errors import MissingPriceError
from .logging.config import get_settlement_logger
from .models.contracts import OptionContract
from .models.positions import Portfolio
from .models.results import ExerciseResult, TradeResult
from .portfolio.balance import Balance
from .portfolio.manager import PortfolioManager

settlement_logger = get_settlement_logger(__name__)


@dataclass
class SettlementResult:
    """Everything settlement did to the book."""
    sales: list[TradeResult] = field(default_factory=list)
    payouts: list[ExerciseResult] = field(default_factory=list)
    expired: list[tuple[str, OptionContract]] = field(default_factory=list)

    @property
    def total_credit(self) -> float:
        return sum(s.amount for s in self.sales) + sum(p.payout for p in self.payouts)


class SettlementEngine:
    """Forces the whole book flat at the end of a session."""

    def __init__(self, balance: Balance, portfolio: Portfolio,
                 portfolio_manager: PortfolioManager):
        self.balance = balance
        self.portfolio = portfolio
        self.portfolio_manager = portfolio_manager

    def settle(self, last_prices: Mapping[str, float]) -> SettlementResult:
        """
        Settle all positions and contracts.

        Args:
            last_prices: Final observed price per instrument

        Returns:
            Sales, payouts and worthless expiries performed

        Raises:
            MissingPriceError: An instrument with shares or contracts has no
                final price. Nothing is settled in that case.
        """
        for position in self.portfolio:
            if (not position.is_flat or position.options) and position.instrument not in last_prices:
                raise MissingPriceError(
                    f"No settlement price for {position.instrument}",
                    instrument=position.instrument,
                )

        result = SettlementResult()

        for position in self.portfolio:
            if position.is_flat and not position.options:
                continue

            price = last_prices[position.instrument]

            if not position.is_flat:
                result.sales.append(self.portfolio_manager.liquidate(position.instrument, price))

            for contract in position.options:
                if contract.is_in_the_money(price):
                    payout = contract.payout(price)
                    self.balance.credit(payout)
                    result.payouts.append(ExerciseResult(
                        instrument=position.instrument,
                        contract=contract,
                        price=price,
                        payout=payout,
                    ))
                else:
                    result.expired.append((position.instrument, contract))

            position.options = []

        settlement_logger.info(
            "Session settled",
            positions_liquidated=len(result.sales),
            options_paid=len(result.payouts),
            options_expired=len(result.expired),
            total_credit=result.total_credit,
            balance=self.balance.available
        )
        return result
