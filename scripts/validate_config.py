#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from risk_calc_app.config.loader import INSTRUMENTS_FILE, ConfigLoader
from risk_calc_app.errors import ConfigurationError


def main(config_dir: Path | None = None) -> int:
    """Validate instruments.yaml and report the resulting tick table."""
    loader = ConfigLoader.create(config_dir)
    print(f"🔍 Validating {loader.config_dir / INSTRUMENTS_FILE}...")

    try:
        table = loader.build_tick_table()
        defaults = loader.load_form_defaults()
    except ConfigurationError as e:
        print(f"❌ {e}")
        for error in e.errors:
            print(f"  • {error.field}: {error.message} (value: {error.value})")
        return 1

    print(f"✅ Tick table has {len(table)} instruments")

    if defaults.asset not in table and defaults.asset != loader.defaults.calculator.custom_instrument:
        print(f"❌ Default instrument '{defaults.asset}' is not in the tick table")
        return 1

    print(f"✅ Default instrument {defaults.asset} is available")
    print("\n🎉 Configuration validation passed!")
    return 0


if __name__ == "__main__":
    sys.exit(main(Path(sys.argv[1]) if len(sys.argv) > 1 else None))
