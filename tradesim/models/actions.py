"""
Action records emitted by the engine.

Every balance-changing event produces one TradeAction. ``amount`` is the
signed cash change, so the sum of all action amounts over a session equals
the final balance minus the initial balance.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from .contracts import OptionContract, OptionKind


class ActionType(str, Enum):
    """Observable engine actions."""
    BUY = "BUY"
    BUY_CALL_OPTION = "BUY CALL OPTION"
    BUY_PUT_OPTION = "BUY PUT OPTION"
    SELL = "SELL"
    ALERT_SELL = "ALERT SELL"                  # Forecast drop liquidation
    ALERT_EXIT_OPTION = "ALERT EXIT OPTION"    # Early exercise
    EOD_SELL = "EOD SELL"
    OPTION_PAYOUT = "OPTION PAYOUT"            # Settlement exercise


@dataclass(frozen=True)
class TradeAction:
    """Single engine action."""

    action_type: ActionType
    instrument: str
    tick: Optional[int] = None            # None for settlement actions
    quantity: int = 0
    price: Optional[float] = None
    amount: float = 0.0
    option_kind: Optional[OptionKind] = None
    strike: Optional[float] = None
    premium: Optional[float] = None
    session_time: Optional[str] = None

    @classmethod
    def for_option_purchase(cls, instrument: str, contract: OptionContract,
                            tick: Optional[int] = None,
                            session_time: Optional[str] = None) -> "TradeAction":
        """Create action for a purchased hedge contract."""
        action_type = (ActionType.BUY_CALL_OPTION if contract.kind is OptionKind.CALL
                       else ActionType.BUY_PUT_OPTION)
        return cls(
            action_type=action_type,
            instrument=instrument,
            tick=tick,
            quantity=1,
            amount=-contract.premium,
            option_kind=contract.kind,
            strike=contract.strike,
            premium=contract.premium,
            session_time=session_time,
        )

    @classmethod
    def for_option_payout(cls, action_type: ActionType, instrument: str,
                          contract: OptionContract, price: float, payout: float,
                          tick: Optional[int] = None,
                          session_time: Optional[str] = None) -> "TradeAction":
        """Create action for an exercised contract."""
        return cls(
            action_type=action_type,
            instrument=instrument,
            tick=tick,
            quantity=1,
            price=price,
            amount=payout,
            option_kind=contract.kind,
            strike=contract.strike,
            premium=contract.premium,
            session_time=session_time,
        )

    def describe(self) -> str:
        """Human-readable action line."""
        t = self.action_type
        if t in (ActionType.BUY, ActionType.SELL, ActionType.EOD_SELL):
            return f"{t.value} {self.quantity} shares of {self.instrument} at ${self.price:.2f}"
        if t is ActionType.ALERT_SELL:
            return (f"ALERT SELL {self.quantity} shares of {self.instrument} "
                    f"at ${self.price:.2f} due to drop forecast")
        if t in (ActionType.BUY_CALL_OPTION, ActionType.BUY_PUT_OPTION):
            return (f"{t.value} on {self.instrument} strike: ${self.strike:.2f} "
                    f"premium: ${self.premium:.2f}")
        if t is ActionType.ALERT_EXIT_OPTION:
            return (f"ALERT EXIT {self.option_kind.value.upper()} OPTION on {self.instrument} "
                    f"payout: ${self.amount:.2f}")
        return f"OPTION PAYOUT for {self.instrument} strike ${self.strike:.2f}: ${self.amount:.2f}"

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable representation."""
        return {
            "action": self.action_type.value,
            "instrument": self.instrument,
            "tick": self.tick,
            "session_time": self.session_time,
            "quantity": self.quantity,
            "price": self.price,
            "amount": self.amount,
            "option_kind": self.option_kind.value if self.option_kind else None,
            "strike": self.strike,
            "premium": self.premium,
        }


@dataclass(frozen=True)
class Holding:
    """Residual equity holding reported in the session summary."""
    instrument: str
    shares: int
    avg_price: float


@dataclass(frozen=True)
class SessionSummary:
    """Final balance and residual holdings of a session."""

    initial_balance: float
    final_balance: float
    holdings: list[Holding] = field(default_factory=list)

    @property
    def profit_loss(self) -> float:
        return self.final_balance - self.initial_balance

    def describe(self) -> list[str]:
        """Summary lines."""
        label = "Profit" if self.profit_loss >= 0 else "Loss"
        lines = [
            f"Final Balance: ${self.final_balance:.2f}",
            f"{label}: ${abs(self.profit_loss):.2f}",
        ]
        for holding in self.holdings:
            lines.append(
                f"{holding.instrument}: {holding.shares} shares held at avg ${holding.avg_price:.2f}"
            )
        return lines

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable representation."""
        return {
            "initial_balance": self.initial_balance,
            "final_balance": self.final_balance,
            "profit_loss": self.profit_loss,
            "holdings": [
                {"instrument": h.instrument, "shares": h.shares, "avg_price": h.avg_price}
                for h in self.holdings
            ],
        }
