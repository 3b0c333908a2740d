"""Standard output action delivery mechanism."""

import json
import sys
from typing import Optional

from ..config.delivery import StdoutDeliveryConfig
from ..models.actions import SessionSummary, TradeAction
from .base import BaseActionDelivery, DeliveryResult, DeliveryStatus


class StdoutActionDelivery(BaseActionDelivery):
    """Prints one line per action."""

    def __init__(self, name: str = "stdout", config: Optional[StdoutDeliveryConfig] = None):
        super().__init__(name, config or StdoutDeliveryConfig())
        self.config: StdoutDeliveryConfig

    def start_session(self, initial_balance: float) -> None:
        if self.config.format == "json":
            self._print(json.dumps({"initial_balance": initial_balance}))
        else:
            self._print(f"Initial Balance: ${initial_balance:.2f}")

    def deliver(self, actions: list[TradeAction]) -> list[DeliveryResult]:
        """Deliver actions to stdout."""
        results = []

        for action in actions:
            try:
                self._print(self._format_action(action))
                results.append(DeliveryResult(
                    status=DeliveryStatus.SUCCESS,
                    message="Printed to stdout"
                ))

            except OSError as e:
                self.logger.error(
                    "Failed to print action to stdout",
                    delivery_name=self.name,
                    instrument=action.instrument,
                    error=str(e)
                )
                results.append(DeliveryResult(
                    status=DeliveryStatus.FAILED,
                    message=f"Stdout error: {str(e)}",
                    error=e
                ))

        return results

    def deliver_summary(self, summary: SessionSummary) -> DeliveryResult:
        """Print the session summary."""
        if self.config.format == "json":
            self._print(json.dumps(summary.to_dict()))
        else:
            for line in summary.describe():
                self._print(line)
        return DeliveryResult(status=DeliveryStatus.SUCCESS, message="Printed to stdout")

    def _format_action(self, action: TradeAction) -> str:
        """Format action for stdout output."""
        if self.config.format == "json":
            return json.dumps(action.to_dict())

        line = action.describe()
        if self.config.include_session_time and action.session_time:
            line = f"[{action.session_time}] {line}"
        return line

    def _print(self, line: str) -> None:
        print(line, file=sys.stdout, flush=True)
