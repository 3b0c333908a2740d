#!/usr/bin/env python3
"""
Basic Usage Example - Intraday Trading Session Simulator

This script demonstrates driving the trading engine by hand. It shows how to:
- Initialize the engine for a subset of instruments
- Feed prices tick by tick and inspect the actions taken
- Monitor instrument states and runtime stats
- Settle the session and read the summary

Run: python examples/basic_usage.py
"""

import sys
from dataclasses import replace
from pathlib import Path

# Add the project root to the Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tradesim.config.defaults import get_default_config
from tradesim.engine import TradingEngine
from tradesim.feed.price_feed import SequencePriceFeed
from tradesim.logging.config import configure_logging


def build_engine() -> TradingEngine:
    """Engine trading two instruments with the default parameters."""
    defaults = get_default_config()
    config = replace(
        defaults,
        session=replace(defaults.session, instruments=("ACME", "BETA")),
        portfolio=replace(defaults.portfolio, companies=2),
    )
    return TradingEngine(config)


def build_feed() -> SequencePriceFeed:
    """ACME dips and recovers; BETA drifts upward."""
    return SequencePriceFeed({
        "ACME": [100.0] * 9 + [90.0, 92.0, 96.0, 101.0, 104.0, 99.0],
        "BETA": [50.0 + 0.25 * tick for tick in range(15)],
    })


def print_states(engine: TradingEngine) -> None:
    for instrument in engine.instrument_order:
        position = engine.get_position(instrument)
        print(f"   {instrument}: {engine.instrument_state(instrument).value} "
              f"({position.shares} shares, {len(position.options)} options)")


def main():
    """Main demo function."""
    configure_logging(level="WARNING")

    print("Intraday Trading Session Simulator - Basic Usage Demo")
    print("=" * 60)

    print("1. Initializing the trading engine...")
    engine = build_engine()
    feed = build_feed()
    print(f"   Initial balance: ${engine.balance.available:.2f}")
    print(f"   Instruments: {', '.join(engine.instrument_order)}")
    print()

    print("2. Feeding prices...")
    last_prices = {}
    for tick in range(feed.length()):
        prices = {instrument: feed.next_price(instrument, tick) for instrument in engine.instrument_order}
        last_prices.update(prices)

        for action in engine.process_tick(tick, prices):
            print(f"   [{action.session_time}] {action.describe()}")
    print()

    print("3. Instrument states before settlement:")
    print_states(engine)
    print()

    print("4. Settling the session...")
    for action in engine.settle(last_prices):
        print(f"   {action.describe()}")
    print()

    print("5. Summary:")
    for line in engine.summary().describe():
        print(f"   {line}")

    stats = engine.get_runtime_stats()
    print(f"   Actions taken: {stats['actions']}")
    print(f"   Phase: {stats['phase']}")


if __name__ == "__main__":
    main()
