"""
Shared cash balance.

All cash movements in a session go through one Balance instance. Callers
check affordability before debiting; a debit beyond the available cash is a
contract violation and raises instead of driving the balance negative.
"""

import structlog

from ..errors import InsufficientBalanceError

logger = structlog.get_logger(__name__)


class Balance:
    """Cash balance with explicit debit and credit operations."""

    def __init__(self, initial: float):
        if initial < 0:
            raise ValueError(f"initial balance must be non-negative, got {initial}")
        self.initial = initial
        self._available = initial

    @property
    def available(self) -> float:
        return self._available

    def can_afford(self, amount: float) -> bool:
        """Check whether amount can be debited."""
        return amount <= self._available

    def debit(self, amount: float) -> float:
        """
        Withdraw cash.

        Args:
            amount: Non-negative amount to withdraw

        Returns:
            Balance after the debit

        Raises:
            InsufficientBalanceError: amount exceeds the available cash
        """
        if amount < 0:
            raise ValueError(f"debit amount must be non-negative, got {amount}")
        if not self.can_afford(amount):
            raise InsufficientBalanceError(
                f"Cannot debit {amount:.2f}, only {self._available:.2f} available",
                requested=amount,
                available=self._available,
            )

        self._available -= amount
        logger.debug("Balance debited", amount=amount, balance=self._available)
        return self._available

    def credit(self, amount: float) -> float:
        """Deposit a non-negative amount and return the new balance."""
        if amount < 0:
            raise ValueError(f"credit amount must be non-negative, got {amount}")

        self._available += amount
        logger.debug("Balance credited", amount=amount, balance=self._available)
        return self._available
