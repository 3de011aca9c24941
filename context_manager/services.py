"""
Process wide service wiring, exposed as FastAPI dependencies.

The serviceability service is shared so its zone cache survives across
requests. Stores open their own sessions from SessionLocal.
"""

from functools import lru_cache

from database.db import SessionLocal
from modules.rate_calculator.rate_calculator_config import (
    ZONE_CACHE_SIZE,
    ZONE_CACHE_TTL_SECONDS,
)
from modules.rate_card.rate_card_store import DatabaseRateCardStore, RateCardStore
from modules.serviceability.pincode_directory import DatabasePincodeDirectory
from modules.serviceability.serviceability_service import ServiceabilityService


@lru_cache(maxsize=1)
def get_serviceability_service() -> ServiceabilityService:
    return ServiceabilityService(
        DatabasePincodeDirectory(SessionLocal),
        cache_size=ZONE_CACHE_SIZE,
        cache_ttl=ZONE_CACHE_TTL_SECONDS,
    )


@lru_cache(maxsize=1)
def get_rate_card_store() -> RateCardStore:
    return DatabaseRateCardStore(SessionLocal)
