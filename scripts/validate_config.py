#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from rotation_map.config.loader import ConfigLoader
from rotation_map.config.validation import ConfigValidator
from rotation_map.errors import ConfigurationError


def main():
    """Main validation function."""
    print("🔍 Validating Rotation Map configuration...")

    config_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else project_root / "config"
    loader = ConfigLoader.create(config_dir)

    all_valid = True

    try:
        errors = ConfigValidator.validate_config(loader.merge_config())
    except ConfigurationError as e:
        print(f"❌ Could not read settings: {e}")
        return 1

    if errors:
        all_valid = False
        print(f"❌ Found {len(errors)} validation errors:")
        for error in errors:
            print(f"  • {error.field}: {error.message} (value: {error.value})")
    else:
        print("✅ Threshold settings valid")

    try:
        universe = loader.load_universe()
        print(f"✅ Coin universe valid ({len(universe)} coins)")
        for coin in universe:
            print(f"  • {coin.symbol:<6} {coin.name:<12} {coin.sector.value}")
    except ConfigurationError as e:
        all_valid = False
        print(f"❌ Coin universe invalid: {e}")

    if all_valid:
        print("\n🎉 All configuration validated successfully!")
        return 0

    print("\n💥 Configuration validation failed!")
    return 1


if __name__ == "__main__":
    sys.exit(main())
