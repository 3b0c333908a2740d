"""Base classes for action delivery mechanisms."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

import structlog

from ..models.actions import SessionSummary, TradeAction


class DeliveryStatus(Enum):
    """Action delivery status."""
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class DeliveryResult:
    """Result of a delivery attempt."""
    status: DeliveryStatus
    message: Optional[str] = None
    error: Optional[Exception] = None


class BaseActionDelivery(ABC):
    """Base class for action delivery mechanisms."""

    def __init__(self, name: str, config: Any):
        self.name = name
        self.config = config
        self.logger = structlog.get_logger(f"action.delivery.{name}")
        self._delivery_count = 0
        self._error_count = 0

    def start_session(self, initial_balance: float) -> None:
        """Announce the start of a session. Optional for implementations."""
        pass

    @abstractmethod
    def deliver(self, actions: list[TradeAction]) -> list[DeliveryResult]:
        """
        Deliver actions to the configured destination.

        Args:
            actions: Engine actions in execution order

        Returns:
            One delivery result per action
        """
        pass

    @abstractmethod
    def deliver_summary(self, summary: SessionSummary) -> DeliveryResult:
        """Deliver the end-of-session summary."""
        pass

    def deliver_with_stats(self, actions: list[TradeAction]) -> list[DeliveryResult]:
        """Deliver actions and keep delivery counters."""
        results = self.deliver(actions)

        for result in results:
            if result.status == DeliveryStatus.SUCCESS:
                self._delivery_count += 1
            else:
                self._error_count += 1

        return results

    def get_stats(self) -> dict[str, Any]:
        """Get delivery statistics."""
        return {
            "name": self.name,
            "delivery_count": self._delivery_count,
            "error_count": self._error_count,
        }
