"""Decision result models for trade and exercise operations"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .contracts import OptionContract


class TradeOutcome(str, Enum):
    """Outcome of a trade decision."""
    FILLED = "filled"
    NO_SIGNAL = "no_signal"                        # Trend condition not met
    COLD_HISTORY = "cold_history"                  # Signal not yet computable
    INSUFFICIENT_BALANCE = "insufficient_balance"  # Order not affordable
    NO_POSITION = "no_position"                    # Nothing to sell


@dataclass(frozen=True)
class TradeResult:
    """Result of a buy, sell or option purchase attempt."""

    outcome: TradeOutcome
    instrument: str
    quantity: int = 0
    price: Optional[float] = None        # Execution price when filled
    amount: float = 0.0                  # Signed cash change

    @property
    def filled(self) -> bool:
        return self.outcome is TradeOutcome.FILLED

    @classmethod
    def fill(cls, instrument: str, quantity: int, price: float, amount: float) -> "TradeResult":
        """Create filled result."""
        return cls(
            outcome=TradeOutcome.FILLED,
            instrument=instrument,
            quantity=quantity,
            price=price,
            amount=amount,
        )

    @classmethod
    def declined(cls, instrument: str, outcome: TradeOutcome) -> "TradeResult":
        """Create result for a decision that did not trade."""
        return cls(outcome=outcome, instrument=instrument)


@dataclass(frozen=True)
class ExerciseResult:
    """Option exercised or paid out against a price."""
    instrument: str
    contract: OptionContract
    price: float
    payout: float
