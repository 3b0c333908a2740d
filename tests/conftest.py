"""Pytest configuration and shared fixtures."""

from dataclasses import replace

import pytest

from tradesim.config.defaults import EngineConfig, get_default_config
from tradesim.engine import TradingEngine
from tradesim.models.positions import Portfolio
from tradesim.portfolio.balance import Balance
from tradesim.signals.sma import SignalStatus, TrendSignal


def make_config(instruments=("ACME",), companies=1, initial_balance=100000.0) -> EngineConfig:
    """Default configuration narrowed to the given instruments."""
    defaults = get_default_config()
    return replace(
        defaults,
        session=replace(defaults.session, instruments=tuple(instruments)),
        portfolio=replace(defaults.portfolio, companies=companies, initial_balance=initial_balance),
    )


def warm_signal(price: float, sma: float, tick: int = 9, instrument: str = "ACME") -> TrendSignal:
    """Warm trend signal with an explicit moving average."""
    return TrendSignal(
        instrument=instrument,
        price=price,
        tick=tick,
        status=SignalStatus.WARM,
        sma=sma,
        evaluation_tick=tick % 2 == 0,
    )


@pytest.fixture
def default_config() -> EngineConfig:
    """Built-in default configuration."""
    return get_default_config()


@pytest.fixture
def single_instrument_config() -> EngineConfig:
    """One instrument that may spend the whole balance."""
    return make_config()


@pytest.fixture
def single_instrument_engine(single_instrument_config) -> TradingEngine:
    """Engine trading a single instrument, ACME."""
    return TradingEngine(single_instrument_config)


@pytest.fixture
def balance() -> Balance:
    return Balance(100000.0)


@pytest.fixture
def portfolio() -> Portfolio:
    return Portfolio()


@pytest.fixture
def entry_scenario_prices() -> list[float]:
    """Nine flat ticks, a dip that triggers entry, then a partial recovery."""
    return [100.0] * 9 + [90.0, 95.0]
