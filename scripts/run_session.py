#!/usr/bin/env python3
"""
Run one simulated trading session.

Usage:
    python scripts/run_session.py --seed 42
    python scripts/run_session.py --seed 42 --json --journal out/session.jsonl
"""

import argparse
import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from tradesim.config.delivery import FileDeliveryConfig, StdoutDeliveryConfig
from tradesim.delivery.file_delivery import FileActionDelivery
from tradesim.delivery.stdout_delivery import StdoutActionDelivery
from tradesim.errors import ConfigurationError
from tradesim.logging.config import configure_logging
from tradesim.session import create_session


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a simulated intraday trading session")
    parser.add_argument("--seed", type=int, default=None, help="Price feed seed")
    parser.add_argument("--config-dir", default=None, help="Directory containing session.yaml")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    parser.add_argument("--log-json", action="store_true", help="Emit logs as JSON")
    parser.add_argument("--json", action="store_true", help="Print actions as JSON lines")
    parser.add_argument("--show-time", action="store_true", help="Prefix actions with session time")
    parser.add_argument("--journal", default=None, help="Append actions to this JSONL file")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(level=args.log_level, format_json=args.log_json)

    deliveries = [StdoutActionDelivery("stdout", StdoutDeliveryConfig(
        format="json" if args.json else "text",
        include_session_time=args.show_time,
    ))]
    if args.journal:
        deliveries.append(FileActionDelivery("journal", FileDeliveryConfig(output_path=args.journal)))

    try:
        runner = create_session(config_dir=args.config_dir, seed=args.seed, deliveries=deliveries)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    runner.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
