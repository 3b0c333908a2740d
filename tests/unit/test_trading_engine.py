"""Tests for the trading engine coordinator"""

import math

import pytest

from tradesim.engine import InstrumentState, SessionPhase, TradingEngine
from tradesim.errors import (
    InvalidPriceError,
    MissingPriceError,
    SessionStateError,
    TradingError,
)
from tradesim.models.actions import ActionType

from conftest import make_config


def feed_prices(engine: TradingEngine, prices, instrument: str = "ACME"):
    """Feed one instrument a price per tick and collect the actions."""
    actions = []
    for tick, price in enumerate(prices):
        actions.extend(engine.on_price(instrument, price, tick))
    return actions


class TestTradingEngineInit:
    """Test engine construction"""

    def test_default_configuration(self):
        engine = TradingEngine()
        assert engine.instrument_order == ("AAPL", "GOOGL", "AMZN", "MSFT", "TSLA")
        assert engine.balance.available == 100000.0
        assert engine.phase is SessionPhase.TRADING

    def test_explicit_instrument_order(self):
        engine = TradingEngine(make_config(("AAA", "BBB")), instrument_order=["BBB", "AAA"])
        assert engine.instrument_order == ("BBB", "AAA")

    def test_duplicate_instruments_rejected(self):
        with pytest.raises(ValueError):
            TradingEngine(make_config(), instrument_order=["ACME", "ACME"])

    def test_components_share_balance_and_portfolio(self, single_instrument_engine):
        engine = single_instrument_engine
        assert engine.portfolio_manager.balance is engine.balance
        assert engine.option_manager.balance is engine.balance
        assert engine.settlement_engine.portfolio is engine.portfolio


class TestOnPrice:
    """Test single price observations"""

    def test_no_actions_while_history_cold(self, single_instrument_engine):
        engine = single_instrument_engine
        actions = feed_prices(engine, [100.0, 50.0, 20.0, 10.0, 5.0, 4.0, 3.0, 2.0, 1.0])
        assert actions == []
        assert engine.balance.available == 100000.0
        assert engine.instrument_state("ACME") is InstrumentState.COLD

    def test_entry_buys_and_hedges(self, single_instrument_engine, entry_scenario_prices):
        engine = single_instrument_engine
        actions = feed_prices(engine, entry_scenario_prices[:10])

        assert [a.action_type for a in actions] == [
            ActionType.BUY,
            ActionType.BUY_CALL_OPTION,
            ActionType.BUY_PUT_OPTION,
        ]
        buy = actions[0]
        assert buy.tick == 9
        assert buy.quantity == math.floor(100000.0 / (90.0 * 0.99))
        assert buy.price == pytest.approx(89.1)
        assert buy.session_time == "10:15"
        assert actions[1].strike == pytest.approx(94.5)
        assert actions[2].strike == pytest.approx(85.5)
        assert engine.instrument_state("ACME") is InstrumentState.HOLDING
        assert len(engine.get_position("ACME").options) == 2

    def test_flat_prices_never_trade(self, single_instrument_engine):
        engine = single_instrument_engine
        assert feed_prices(engine, [100.0] * 30) == []
        assert engine.instrument_state("ACME") is InstrumentState.FLAT

    def test_unknown_instrument_rejected(self, single_instrument_engine):
        with pytest.raises(ValueError):
            single_instrument_engine.on_price("NOPE", 100.0, 0)

    @pytest.mark.parametrize("price", [0.0, -5.0, float("nan"), float("inf")])
    def test_invalid_price_rejected(self, single_instrument_engine, price):
        with pytest.raises(InvalidPriceError) as exc_info:
            single_instrument_engine.on_price("ACME", price, 0)

        assert isinstance(exc_info.value, TradingError)
        assert exc_info.value.instrument == "ACME"
        assert len(single_instrument_engine.signal_engine.get_history("ACME")) == 0

    def test_negative_tick_rejected_before_recording(self, single_instrument_engine):
        engine = single_instrument_engine
        with pytest.raises(ValueError):
            engine.on_price("ACME", 100.0, -1)

        assert len(engine.signal_engine.get_history("ACME")) == 0

    def test_actions_are_recorded(self, single_instrument_engine, entry_scenario_prices):
        engine = single_instrument_engine
        actions = feed_prices(engine, entry_scenario_prices)
        assert engine.actions == actions
        assert engine.get_runtime_stats()["actions"] == len(actions)


class TestProcessTick:
    """Test multi-instrument ticks"""

    def test_missing_price_rejected(self):
        engine = TradingEngine(make_config(("AAA", "BBB"), companies=2))
        with pytest.raises(MissingPriceError) as exc_info:
            engine.process_tick(0, {"AAA": 100.0})

        assert exc_info.value.instrument == "BBB"
        assert exc_info.value.tick == 0
        assert len(engine.signal_engine.get_history("AAA")) == 0

    @pytest.mark.parametrize("order,winner,loser", [
        (("AAA", "BBB"), "AAA", "BBB"),
        (("BBB", "AAA"), "BBB", "AAA"),
    ])
    def test_first_instrument_in_order_gets_the_cash(self, entry_scenario_prices,
                                                     order, winner, loser):
        engine = TradingEngine(make_config(("AAA", "BBB"), companies=1), instrument_order=order)

        for tick, price in enumerate(entry_scenario_prices[:10]):
            engine.process_tick(tick, {"AAA": price, "BBB": price})

        assert engine.get_position(winner).shares > 0
        assert engine.get_position(loser).is_flat
        assert engine.balance.available >= 0

    def test_actions_follow_instrument_order(self, entry_scenario_prices):
        engine = TradingEngine(make_config(("AAA", "BBB"), companies=2),
                               instrument_order=("BBB", "AAA"))
        actions = []
        for tick, price in enumerate(entry_scenario_prices[:10]):
            actions.extend(engine.process_tick(tick, {"AAA": price, "BBB": price}))

        buys = [a.instrument for a in actions if a.action_type is ActionType.BUY]
        assert buys == ["BBB", "AAA"]


class TestSettle:
    """Test engine settlement and the settled phase"""

    def test_settle_liquidates_and_reports(self, single_instrument_engine, entry_scenario_prices):
        engine = single_instrument_engine
        feed_prices(engine, entry_scenario_prices[:10])

        actions = engine.settle({"ACME": 100.0})

        types = [a.action_type for a in actions]
        assert types[0] is ActionType.EOD_SELL
        assert actions[0].tick is None
        assert actions[0].price == 100.0
        # Call strike 94.5 is in the money at 100, put at 85.5 expires
        assert types[1:] == [ActionType.OPTION_PAYOUT]
        assert actions[1].amount == pytest.approx(5.5)

        assert engine.phase is SessionPhase.SETTLED
        assert engine.instrument_state("ACME") is InstrumentState.SETTLED
        assert engine.get_position("ACME").is_flat
        assert engine.get_position("ACME").options == []
        assert engine.summary().holdings == []

    def test_prices_rejected_after_settlement(self, single_instrument_engine):
        engine = single_instrument_engine
        engine.settle({})

        with pytest.raises(SessionStateError) as exc_info:
            engine.on_price("ACME", 100.0, 0)
        assert exc_info.value.current_state == "settled"
        assert exc_info.value.attempted_operation == "on_price"

        with pytest.raises(SessionStateError):
            engine.process_tick(0, {"ACME": 100.0})

    def test_settling_twice_changes_nothing(self, single_instrument_engine, entry_scenario_prices):
        engine = single_instrument_engine
        feed_prices(engine, entry_scenario_prices[:10])
        engine.settle({"ACME": 100.0})
        balance = engine.balance.available

        assert engine.settle({"ACME": 150.0}) == []
        assert engine.balance.available == balance

    def test_summary_profit_loss(self, single_instrument_engine, entry_scenario_prices):
        engine = single_instrument_engine
        feed_prices(engine, entry_scenario_prices[:10])
        engine.settle({"ACME": 100.0})

        summary = engine.summary()
        assert summary.initial_balance == 100000.0
        assert summary.final_balance == engine.balance.available
        assert summary.profit_loss == pytest.approx(sum(a.amount for a in engine.actions))

    def test_runtime_stats(self, single_instrument_engine, entry_scenario_prices):
        engine = single_instrument_engine
        feed_prices(engine, entry_scenario_prices[:10])

        stats = engine.get_runtime_stats()
        assert stats["phase"] == "trading"
        assert stats["tracked_instruments"] == 1
        assert stats["open_positions"] == 1
        assert stats["options_held"] == 2
