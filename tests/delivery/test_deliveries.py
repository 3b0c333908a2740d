"""Tests for action delivery mechanisms"""

import json

from tradesim.config.delivery import FileDeliveryConfig, StdoutDeliveryConfig
from tradesim.delivery import DeliveryStatus, FileActionDelivery, StdoutActionDelivery
from tradesim.models.actions import ActionType, SessionSummary, TradeAction

BUY = TradeAction(ActionType.BUY, "ACME", tick=9, quantity=224, price=89.1,
                  amount=-19958.4, session_time="10:15")
EOD = TradeAction(ActionType.EOD_SELL, "ACME", quantity=224, price=95.0, amount=21280.0)
SUMMARY = SessionSummary(initial_balance=100000.0, final_balance=101321.6)


class TestStdoutActionDelivery:
    """Test stdout delivery"""

    def test_text_output(self, capsys):
        delivery = StdoutActionDelivery()
        delivery.start_session(100000.0)
        results = delivery.deliver([BUY, EOD])
        delivery.deliver_summary(SUMMARY)

        assert [r.status for r in results] == [DeliveryStatus.SUCCESS] * 2
        assert capsys.readouterr().out.splitlines() == [
            "Initial Balance: $100000.00",
            "BUY 224 shares of ACME at $89.10",
            "EOD SELL 224 shares of ACME at $95.00",
            "Final Balance: $101321.60",
            "Profit: $1321.60",
        ]

    def test_session_time_prefix(self, capsys):
        delivery = StdoutActionDelivery(config=StdoutDeliveryConfig(include_session_time=True))
        delivery.deliver([BUY, EOD])

        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "[10:15] BUY 224 shares of ACME at $89.10"
        assert lines[1] == "EOD SELL 224 shares of ACME at $95.00"

    def test_json_output(self, capsys):
        delivery = StdoutActionDelivery(config=StdoutDeliveryConfig(format="json"))
        delivery.deliver([BUY])
        delivery.deliver_summary(SUMMARY)

        lines = capsys.readouterr().out.splitlines()
        assert json.loads(lines[0])["action"] == "BUY"
        assert json.loads(lines[1])["final_balance"] == 101321.6

    def test_stats(self, capsys):
        delivery = StdoutActionDelivery()
        delivery.deliver_with_stats([BUY, EOD])
        assert delivery.get_stats() == {"name": "stdout", "delivery_count": 2, "error_count": 0}


class TestFileActionDelivery:
    """Test the JSONL action journal"""

    def read_records(self, path):
        return [json.loads(line) for line in path.read_text().splitlines()]

    def test_writes_jsonl_records(self, tmp_path):
        path = tmp_path / "journal" / "session.jsonl"
        delivery = FileActionDelivery("journal", FileDeliveryConfig(output_path=str(path)))

        delivery.start_session(100000.0)
        results = delivery.deliver([BUY, EOD])
        delivery.deliver_summary(SUMMARY)

        assert all(r.status == DeliveryStatus.SUCCESS for r in results)
        records = self.read_records(path)
        assert [r["record"] for r in records] == ["session_start", "action", "action", "summary"]
        assert records[1]["action"] == "BUY"
        assert records[2]["tick"] is None
        assert records[3]["profit_loss"] == SUMMARY.profit_loss

    def test_empty_delivery_writes_nothing(self, tmp_path):
        path = tmp_path / "session.jsonl"
        delivery = FileActionDelivery("journal", FileDeliveryConfig(output_path=str(path),
                                                                    append_mode=False))
        assert delivery.deliver([]) == []
        assert path.read_text() == ""

    def test_append_mode_keeps_previous_sessions(self, tmp_path):
        path = tmp_path / "session.jsonl"
        path.write_text('{"record": "old"}\n')

        FileActionDelivery("journal", FileDeliveryConfig(output_path=str(path))).deliver([BUY])
        assert len(self.read_records(path)) == 2

    def test_truncates_without_append_mode(self, tmp_path):
        path = tmp_path / "session.jsonl"
        path.write_text('{"record": "old"}\n')

        config = FileDeliveryConfig(output_path=str(path), append_mode=False)
        FileActionDelivery("journal", config).deliver([BUY])
        assert [r["record"] for r in self.read_records(path)] == ["action"]

    def test_write_failure_reported(self, tmp_path):
        path = tmp_path / "session.jsonl"
        delivery = FileActionDelivery("journal", FileDeliveryConfig(output_path=str(path)))
        path.mkdir()

        results = delivery.deliver_with_stats([BUY])

        assert results[0].status == DeliveryStatus.FAILED
        assert isinstance(results[0].error, OSError)
        assert delivery.get_stats()["error_count"] == 1
