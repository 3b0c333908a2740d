"""Tests for error classification and audit logging"""

from unittest.mock import Mock

import pytest

from tradesim.errors import (
    ConfigurationError,
    InsufficientBalanceError,
    InvalidPriceError,
    InvalidPricingInputError,
    MissingPriceError,
    SessionStateError,
    SystemFailureError,
    TradingError,
)
from tradesim.logging.config import log_declined_decision, log_trade_action
from tradesim.models.actions import ActionType, TradeAction


class TestErrorHierarchy:
    """Test recoverable and unrecoverable error classes"""

    @pytest.mark.parametrize("error_cls", [
        InsufficientBalanceError,
        InvalidPricingInputError,
        MissingPriceError,
        InvalidPriceError,
    ])
    def test_trading_errors_are_recoverable(self, error_cls):
        error = error_cls("boom", context={"tick": 3})
        assert isinstance(error, TradingError)
        assert error.recoverable is True
        assert error.context == {"tick": 3}
        assert str(error) == "boom"

    @pytest.mark.parametrize("error_cls", [SessionStateError, ConfigurationError])
    def test_system_failures_are_not_recoverable(self, error_cls):
        error = error_cls("broken")
        assert isinstance(error, SystemFailureError)
        assert not isinstance(error, TradingError)
        assert error.recoverable is False
        assert error.context == {}

    def test_error_details(self):
        error = InvalidPricingInputError("bad inputs", inputs={"spot": -1.0})
        assert error.inputs == {"spot": -1.0}

        state_error = SessionStateError("settled", current_state="settled",
                                        attempted_operation="on_price")
        assert state_error.current_state == "settled"
        assert state_error.attempted_operation == "on_price"


class TestAuditLogging:
    """Test structured trade logging helpers"""

    def test_log_trade_action_binds_fields(self):
        logger = Mock()
        bound = logger.bind.return_value
        action = TradeAction(ActionType.BUY, "ACME", tick=9, quantity=224, price=89.1,
                             amount=-19958.4)

        log_trade_action(logger, action)

        logger.bind.assert_called_once_with(
            instrument="ACME",
            action_type="BUY",
            quantity=224,
            price=89.1,
            amount=-19958.4,
            tick=9,
        )
        bound.info.assert_called_once_with("trade_action")

    def test_log_trade_action_with_context(self):
        logger = Mock()
        action = TradeAction(ActionType.EOD_SELL, "ACME", quantity=1, price=10.0, amount=10.0)

        log_trade_action(logger, action, context={"reason": "settlement"})

        logger.bind.return_value.bind.assert_called_once_with(context={"reason": "settlement"})
        logger.bind.return_value.bind.return_value.info.assert_called_once_with("trade_action")

    def test_log_declined_decision(self):
        logger = Mock()

        log_declined_decision(logger, "ACME", "buy", "insufficient_balance")

        logger.bind.assert_called_once_with(
            instrument="ACME", decision="buy", reason="insufficient_balance"
        )
        logger.bind.return_value.debug.assert_called_once_with("decision_declined")
