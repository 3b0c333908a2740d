"""Hedge contract issuance and early exercise"""

from typing import Optional

from ..config.defaults import OptionParams
from ..logging.config import get_trade_logger, log_declined_decision
from ..models.contracts import OptionContract, OptionKind
from ..models.positions import Portfolio
from ..models.results import ExerciseResult
from ..portfolio.balance import Balance
from ..pricing.black_scholes import option_price

trade_logger = get_trade_logger(__name__)


class OptionLifecycleManager:
    """
    Tracks option contracts held against each position.

    Contracts are never decremented or revalued after issue: they are either
    exercised when in the money on an evaluation tick, or settled at the end
    of the session.
    """

    def __init__(self, balance: Balance, portfolio: Portfolio,
                 params: Optional[OptionParams] = None, evaluation_cadence: int = 2):
        self.balance = balance
        self.portfolio = portfolio
        self.params = params or OptionParams()
        self.evaluation_cadence = evaluation_cadence

    def strike_for(self, kind: OptionKind, price: float) -> float:
        """Out-of-the-money strike for a new contract."""
        if kind is OptionKind.CALL:
            return price * self.params.call_strike_mult
        return price * self.params.put_strike_mult

    def quote(self, kind: OptionKind, price: float) -> OptionContract:
        """Price a new out-of-the-money contract at the session constants."""
        strike = self.strike_for(kind, price)
        premium = option_price(
            kind,
            price,
            strike,
            self.params.maturity,
            self.params.risk_free_rate,
            self.params.volatility,
        )
        return OptionContract(
            kind=kind,
            strike=strike,
            premium=premium,
            time_to_maturity=self.params.maturity,
        )

    def issue_hedge(self, instrument: str, price: float) -> list[OptionContract]:
        """
        Buy one call and one put after an equity buy.

        Each contract is bought only if its premium is affordable at that
        moment; an unaffordable contract is skipped without affecting the
        other.

        Args:
            instrument: Instrument that was just bought
            price: Observed price the strikes are set from

        Returns:
            Contracts issued, call first
        """
        position = self.portfolio.get_or_create(instrument)
        issued = []

        for kind in (OptionKind.CALL, OptionKind.PUT):
            contract = self.quote(kind, price)

            if not self.balance.can_afford(contract.premium):
                log_declined_decision(
                    trade_logger, instrument, f"{kind.value}_hedge", "insufficient_balance",
                    context={"premium": contract.premium, "balance": self.balance.available}
                )
                continue

            self.balance.debit(contract.premium)
            position.options.append(contract)
            issued.append(contract)

            trade_logger.info(
                "Bought option contract",
                instrument=instrument,
                kind=kind.value,
                strike=contract.strike,
                premium=contract.premium,
                balance=self.balance.available
            )

        return issued

    def check_exercise(self, instrument: str, price: float, tick: int) -> list[ExerciseResult]:
        """
        Exercise every in-the-money contract held for the instrument.

        Only runs on evaluation ticks. Exercised contracts pay their
        intrinsic value and are removed; the rest are kept unchanged.

        Returns:
            Exercised contracts with their payouts
        """
        if tick % self.evaluation_cadence != 0 or instrument not in self.portfolio:
            return []

        position = self.portfolio.get(instrument)
        exercised = []
        remaining = []

        for contract in position.options:
            if not contract.is_in_the_money(price):
                remaining.append(contract)
                continue

            payout = contract.payout(price)
            self.balance.credit(payout)
            exercised.append(ExerciseResult(
                instrument=instrument,
                contract=contract,
                price=price,
                payout=payout,
            ))

            trade_logger.info(
                "Exercised option contract",
                instrument=instrument,
                kind=contract.kind.value,
                strike=contract.strike,
                price=price,
                payout=payout,
                tick=tick,
                balance=self.balance.available
            )

        position.options = remaining
        return exercised
