"""
Rate calculator configuration, read from the environment.
"""

import json
import os
from decimal import Decimal
from typing import Dict

from dotenv import load_dotenv

load_dotenv()


def _load_divisor_overrides(raw: str) -> Dict[str, Decimal]:
    if not raw:
        return {}
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(
            f"COURIER_VOLUMETRIC_DIVISORS must be a JSON object, got: {raw}"
        ) from e
    if not isinstance(parsed, dict):
        raise ValueError("COURIER_VOLUMETRIC_DIVISORS must be a JSON object")
    return {
        str(courier).strip().lower(): Decimal(str(divisor))
        for courier, divisor in parsed.items()
    }


# Weight
VOLUMETRIC_DIVISOR = Decimal(os.getenv("VOLUMETRIC_DIVISOR", "5000"))
WEIGHT_UNIT_SIZE_KG = Decimal(os.getenv("WEIGHT_UNIT_SIZE_KG", "0.5"))

# courier name (lowercase) -> divisor, e.g. {"bluedart air": 4000}
COURIER_VOLUMETRIC_DIVISORS = _load_divisor_overrides(
    os.getenv("COURIER_VOLUMETRIC_DIVISORS", "")
)

# Pricing
DEFAULT_GST_RATE = Decimal(os.getenv("DEFAULT_GST_RATE", "0.18"))
DEFAULT_RATE_BAND = os.getenv("DEFAULT_RATE_BAND", "Standard")

# Fan-out
RATE_FANOUT_TIMEOUT_SECONDS = float(os.getenv("RATE_FANOUT_TIMEOUT_SECONDS", "5"))
RATE_FANOUT_WORKERS = int(os.getenv("RATE_FANOUT_WORKERS", "8"))

# Zone memo cache
ZONE_CACHE_SIZE = int(os.getenv("ZONE_CACHE_SIZE", "10000"))
ZONE_CACHE_TTL_SECONDS = int(os.getenv("ZONE_CACHE_TTL_SECONDS", "3600"))

# API
RATE_CALCULATOR_RATE_LIMIT = os.getenv("RATE_CALCULATOR_RATE_LIMIT", "60/minute")

# Display labels, keyed by service type
DELIVERY_ESTIMATES = {
    "Surface": "3-5 days",
    "Air": "1-2 days",
}
