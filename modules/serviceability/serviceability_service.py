import re
from threading import Lock
from typing import Tuple

from cachetools import TTLCache

from logger import logger
from context_manager.context import context_user_data

# schema
from modules.serviceability.serviceability_schema import (
    PincodeDetailsResponseModel,
    PincodeLocation,
    Zone,
    ZoneResponseModel,
)
from modules.serviceability.pincode_directory import PincodeDirectory
from utils.exceptions import InvalidPincode


PINCODE_REGEX = re.compile(r"^\d{6}$")


def validate_pincode(pincode, field: str = "pincode") -> str:
    """Return the pincode as a string, or raise InvalidPincode."""
    if pincode is None or isinstance(pincode, bool):
        raise InvalidPincode(f"{field} is required", field=field)

    value = str(pincode).strip()
    if not PINCODE_REGEX.match(value):
        raise InvalidPincode(
            f"{field} must be a 6 digit pincode, got '{pincode}'", field=field
        )
    return value


def zone_between(origin: PincodeLocation, destination: PincodeLocation) -> Zone:
    """
    Zone precedence:
    A: same city
    B: same state
    C: both ends metro
    E: destination in North-East or J&K
    D: everything else
    Locality is checked first so a special zone state shipping within itself is B.
    """
    if origin.city == destination.city:
        return Zone.WITHIN_CITY

    if origin.state == destination.state:
        return Zone.WITHIN_STATE

    if origin.is_metro and destination.is_metro:
        return Zone.METRO_TO_METRO

    if destination.is_special_zone:
        return Zone.NORTH_EAST_JK

    return Zone.REST_OF_INDIA


class ServiceabilityService:
    """
    Zone classification over a pincode directory.

    Usage:
        service = ServiceabilityService(InMemoryPincodeDirectory(records))
        zone = service.classify_zone("110001", "400001")
    """

    def __init__(
        self,
        directory: PincodeDirectory,
        cache_size: int = 10000,
        cache_ttl: int = 3600,
    ):
        self.directory = directory
        # zone is a pure function of the pair, memoised per (origin, destination)
        self._zone_cache: TTLCache = TTLCache(maxsize=cache_size, ttl=cache_ttl)
        self._cache_lock = Lock()

    def classify_zone(self, origin_pincode, destination_pincode) -> Zone:
        origin = validate_pincode(origin_pincode, "origin_pincode")
        destination = validate_pincode(destination_pincode, "destination_pincode")

        key: Tuple[str, str] = (origin, destination)
        with self._cache_lock:
            cached = self._zone_cache.get(key)
        if cached is not None:
            return cached

        zone = zone_between(
            self.directory.resolve(origin), self.directory.resolve(destination)
        )

        with self._cache_lock:
            self._zone_cache[key] = zone

        logger.debug(
            extra=context_user_data.get(),
            msg=f"Zone for {origin} -> {destination}: {zone.value} ({zone.code})",
        )
        return zone

    def get_zone_details(
        self, origin_pincode, destination_pincode
    ) -> ZoneResponseModel:
        zone = self.classify_zone(origin_pincode, destination_pincode)
        return ZoneResponseModel(
            origin_pincode=str(origin_pincode),
            destination_pincode=str(destination_pincode),
            zone=zone,
            zone_code=zone.code,
        )

    def get_pincode_details(self, pincode) -> PincodeDetailsResponseModel:
        pincode = validate_pincode(pincode)
        location = self.directory.get(pincode)

        if location is None:
            # unknown to the master, only the prefix derived flags are reliable
            fallback = self.directory.resolve(pincode)
            return PincodeDetailsResponseModel(
                pincode=pincode,
                is_metro=fallback.is_metro,
                is_special_zone=fallback.is_special_zone,
            )

        return PincodeDetailsResponseModel(
            pincode=pincode,
            city=location.city,
            state=location.state,
            is_metro=location.is_metro,
            is_special_zone=location.is_special_zone,
        )

    def clear_cache(self):
        with self._cache_lock:
            self._zone_cache.clear()
