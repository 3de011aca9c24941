from enum import Enum
from typing import Optional

from pydantic import BaseModel


class Zone(str, Enum):
    WITHIN_CITY = "Within City"
    WITHIN_STATE = "Within State"
    METRO_TO_METRO = "Metro to Metro"
    REST_OF_INDIA = "Rest of India"
    NORTH_EAST_JK = "North East & J&K"

    # legacy letter used by zone wise rate tables (zone_a .. zone_e)
    @property
    def code(self) -> str:
        return ZONE_CODES[self]

    @classmethod
    def parse(cls, value) -> "Zone":
        """Accept a Zone, its value, its name or its letter code."""
        if isinstance(value, cls):
            return value

        text = str(value).strip()
        for zone in cls:
            if text.lower() in (
                zone.value.lower(),
                zone.name.lower(),
                zone.code.lower(),
                f"zone_{zone.code.lower()}",
            ):
                return zone

        # dashboard spelling for the special zone
        if text.lower() == "special zone":
            return cls.NORTH_EAST_JK

        raise ValueError(f"Unknown zone: {value}")


ZONE_CODES = {
    Zone.WITHIN_CITY: "A",
    Zone.WITHIN_STATE: "B",
    Zone.METRO_TO_METRO: "C",
    Zone.REST_OF_INDIA: "D",
    Zone.NORTH_EAST_JK: "E",
}


class PincodeLocation(BaseModel):
    pincode: str
    city: str
    state: str
    is_metro: bool = False
    is_special_zone: bool = False
    # False when derived from the postal prefix instead of the pincode master
    from_master: bool = True


class PincodeDetailsResponseModel(BaseModel):
    pincode: str
    city: Optional[str] = None
    state: Optional[str] = None
    country: str = "India"
    is_metro: bool
    is_special_zone: bool


class ZoneResponseModel(BaseModel):
    origin_pincode: str
    destination_pincode: str
    zone: Zone
    zone_code: str
