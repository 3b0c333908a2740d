#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from tradesim.config.loader import ConfigLoader
from tradesim.config.validation import ConfigValidator


def main():
    """Main validation function."""
    config_dir = sys.argv[1] if len(sys.argv) > 1 else None
    loader = ConfigLoader.create(config_dir)

    print(f"Validating configuration in {loader.config_dir}...")

    try:
        config = loader.merge_config()
    except Exception as e:
        print(f"Error loading configuration: {e}")
        sys.exit(1)

    errors = ConfigValidator.validate_config(config)
    if errors:
        print(f"Found {len(errors)} validation errors:")
        for error in errors:
            print(f"  - {error.field}: {error.message} (value: {error.value})")
        sys.exit(1)

    print("Configuration is valid")
    for section, params in config.items():
        print(f"  [{section}]")
        for name, value in params.items():
            print(f"    {name} = {value}")
    sys.exit(0)


if __name__ == "__main__":
    main()
