"""
Pincode reference data

A PincodeDirectory answers "which city and state is this pincode in". Metro and
special zone membership is derived from the static lists in data.locations so
that every directory classifies the same way.

Pincodes missing from the master fall back to postal prefixes:
- first three digits: sorting district, treated as the city
- first two digits: postal circle, treated as the state
"""

from typing import Dict, Iterable, Optional

from sqlalchemy.orm import sessionmaker

from data.locations import (
    metro_cities,
    metro_pincode_prefixes,
    special_zone,
    special_zone_pincode_prefixes,
)
from logger import logger
from modules.serviceability.serviceability_schema import PincodeLocation

_METRO_CITIES = {city.lower() for city in metro_cities}
_SPECIAL_STATES = {state.lower() for state in special_zone}


def build_location(pincode: str, city: str, state: str) -> PincodeLocation:
    city = (city or "").strip().lower()
    state = (state or "").strip().lower()
    return PincodeLocation(
        pincode=str(pincode),
        city=city,
        state=state,
        is_metro=city in _METRO_CITIES,
        is_special_zone=state in _SPECIAL_STATES,
    )


def location_from_prefix(pincode: str) -> PincodeLocation:
    pincode = str(pincode)
    district = pincode[:3]
    circle = pincode[:2]
    return PincodeLocation(
        pincode=pincode,
        city=metro_pincode_prefixes.get(district, f"district-{district}"),
        state=f"circle-{circle}",
        is_metro=district in metro_pincode_prefixes,
        is_special_zone=pincode.startswith(special_zone_pincode_prefixes),
        from_master=False,
    )


class PincodeDirectory:
    """Read-only pincode lookup. Subclasses implement _fetch."""

    def _fetch(self, pincode: str) -> Optional[PincodeLocation]:
        raise NotImplementedError

    def get(self, pincode: str) -> Optional[PincodeLocation]:
        return self._fetch(str(pincode))

    def resolve(self, pincode: str) -> PincodeLocation:
        location = self.get(pincode)
        if location is None:
            logger.debug(msg=f"Pincode {pincode} not in master, using postal prefix")
            return location_from_prefix(pincode)
        return location


class InMemoryPincodeDirectory(PincodeDirectory):
    """
    Directory backed by a plain mapping.

    Usage:
        directory = InMemoryPincodeDirectory({"110001": ("New Delhi", "Delhi")})
    """

    def __init__(self, records: Dict[str, tuple] = None):
        self._locations: Dict[str, PincodeLocation] = {}
        for pincode, (city, state) in (records or {}).items():
            self._locations[str(pincode)] = build_location(pincode, city, state)

    @classmethod
    def from_rows(cls, rows: Iterable[dict]) -> "InMemoryPincodeDirectory":
        return cls(
            {str(row["pincode"]): (row["city"], row["state"]) for row in rows}
        )

    def _fetch(self, pincode: str) -> Optional[PincodeLocation]:
        return self._locations.get(pincode)


class DatabasePincodeDirectory(PincodeDirectory):
    """Directory backed by the pincode_mapping table."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def _fetch(self, pincode: str) -> Optional[PincodeLocation]:
        from models import Pincode_Mapping

        with self.session_factory() as db:
            # Select only needed columns; the covering index serves this query
            record = (
                db.query(
                    Pincode_Mapping.pincode,
                    Pincode_Mapping.city,
                    Pincode_Mapping.state,
                )
                .filter(
                    Pincode_Mapping.pincode == int(pincode),
                    Pincode_Mapping.is_deleted == False,
                )
                .first()
            )

        if not record:
            return None

        return build_location(pincode, record.city, record.state)
