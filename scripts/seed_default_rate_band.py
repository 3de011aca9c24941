"""
Write the platform default rate band into the rate_card table.

Usage:
    python scripts/seed_default_rate_band.py
"""

import sys
import os

# Add parent directory to path to import modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from data.default_rate_card import DEFAULT_RATE_BAND_RATES
from database.db import SessionLocal, init_models
from modules.rate_calculator.rate_calculator_config import DEFAULT_RATE_BAND
from modules.rate_card.rate_card_seed import seed_rate_band


def main():
    init_models()
    result = seed_rate_band(SessionLocal, DEFAULT_RATE_BAND_RATES, DEFAULT_RATE_BAND)
    print(
        f"Rate band '{result['rate_band']}': inserted {result['inserted']} rows, "
        f"retired {result['retired']}"
    )


if __name__ == "__main__":
    main()
