#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from quantsignal.config.loader import ConfigLoader
from quantsignal.config.validation import ConfigValidator, ValidationError
from quantsignal.errors import ConfigurationError


def validate_symbol_config(loader: ConfigLoader, symbol: str) -> List[ValidationError]:
    """Validate the merged configuration for a specific symbol."""
    config = loader.merge_config(symbol)
    return ConfigValidator.validate_config(config)


def main():
    """Main validation function."""
    print("Validating quantsignal configuration...")

    loader = ConfigLoader.create()

    symbols = ["BTC/USDT", "ETH-USD-SWAP", "DOGE-USD-SWAP", "UNKNOWN-SYMBOL"]
    all_valid = True

    for symbol in symbols:
        print(f"\n{symbol}:")
        errors = validate_symbol_config(loader, symbol)
        if errors:
            print(f"  {len(errors)} validation errors")
            for error in errors:
                print(f"  - {error.field}: {error.message} (value: {error.value})")
            all_valid = False
            continue

        try:
            loader.build_config(symbol)
        except ConfigurationError as e:
            print(f"  {e}")
            all_valid = False
        else:
            print("  ok")

    # Per-call overrides go through the same validation
    print("\nPer-call overrides:")
    bad_overrides = {"macd": {"fast": 30, "slow": 26}}
    errors = ConfigValidator.validate_config(loader.merge_config("BTC/USDT", bad_overrides))
    if errors:
        print(f"  rejected as expected: {errors[0].field}: {errors[0].message}")
    else:
        print("  invalid overrides were accepted")
        all_valid = False

    if all_valid:
        print("\nAll configuration validation passed")
        sys.exit(0)

    print("\nConfiguration validation failed")
    sys.exit(1)


if __name__ == "__main__":
    main()
