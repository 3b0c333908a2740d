"""
Option contract models.

Contracts are immutable once issued. The kind is an explicit tag rather than
a boolean flag, and the in-the-money and payout rules live with the contract
so the early-exercise check and settlement apply exactly the same rule.
"""

from dataclasses import dataclass
from enum import Enum


class OptionKind(str, Enum):
    """Option contract kinds."""
    CALL = "call"
    PUT = "put"


@dataclass(frozen=True)
class OptionContract:
    """European option held against an equity position."""
    kind: OptionKind
    strike: float                 # Exercise price
    premium: float                # Price paid at issue
    time_to_maturity: float       # Years at issue, not decremented

    def is_in_the_money(self, price: float) -> bool:
        """Check whether exercising at this price pays out."""
        if self.kind is OptionKind.CALL:
            return price > self.strike
        return price < self.strike

    def payout(self, price: float) -> float:
        """Intrinsic value at this price, zero when out of the money."""
        if not self.is_in_the_money(price):
            return 0.0
        if self.kind is OptionKind.CALL:
            return price - self.strike
        return self.strike - price
