"""JSONL action journal delivery mechanism."""

import json
from pathlib import Path
from typing import Any

from ..config.delivery import FileDeliveryConfig
from ..models.actions import SessionSummary, TradeAction
from .base import BaseActionDelivery, DeliveryResult, DeliveryStatus


class FileActionDelivery(BaseActionDelivery):
    """Appends actions and the session summary to a JSONL file."""

    def __init__(self, name: str, config: FileDeliveryConfig):
        super().__init__(name, config)
        self.config: FileDeliveryConfig = config
        self.output_path = Path(config.output_path)

        if config.create_dirs:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)

        # Start a fresh journal unless appending
        if not config.append_mode:
            self.output_path.write_text("")

    def start_session(self, initial_balance: float) -> None:
        self._write_records([{"record": "session_start", "initial_balance": initial_balance}])

    def deliver(self, actions: list[TradeAction]) -> list[DeliveryResult]:
        """Append actions to the journal."""
        if not actions:
            return []

        try:
            self._write_records([{"record": "action", **action.to_dict()} for action in actions])

        except OSError as e:
            self.logger.warning(
                "Action journal write failed",
                delivery_name=self.name,
                output_path=str(self.output_path),
                error=str(e)
            )
            return [DeliveryResult(
                status=DeliveryStatus.FAILED,
                message=f"File system error: {str(e)}",
                error=e
            ) for _ in actions]

        self.logger.debug(
            "Actions written to journal",
            delivery_name=self.name,
            count=len(actions),
            output_path=str(self.output_path)
        )
        return [DeliveryResult(
            status=DeliveryStatus.SUCCESS,
            message=f"Written to {self.output_path}"
        ) for _ in actions]

    def deliver_summary(self, summary: SessionSummary) -> DeliveryResult:
        """Append the summary record to the journal."""
        try:
            self._write_records([{"record": "summary", **summary.to_dict()}])
        except OSError as e:
            return DeliveryResult(status=DeliveryStatus.FAILED, message=str(e), error=e)
        return DeliveryResult(status=DeliveryStatus.SUCCESS, message=f"Written to {self.output_path}")

    def _write_records(self, records: list[dict[str, Any]]) -> None:
        with open(self.output_path, "a", encoding="utf-8") as f:
            for record in records:
                f.write(json.dumps(record) + "\n")
