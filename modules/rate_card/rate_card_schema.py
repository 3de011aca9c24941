from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, field_validator

# schema
from modules.serviceability.serviceability_schema import Zone
from modules.rate_calculator.rate_calculator_config import DEFAULT_GST_RATE


class RateCardEntry(BaseModel):
    """
    One active rate row for (courier, mode, zone).

    cod_charge_percent and gst_rate are fractions (0.02 means 2%).
    """

    rate_card_id: Optional[str] = None
    client_id: Optional[int] = None
    rate_band: Optional[str] = None

    courier: str
    product_name: str = ""
    mode: str
    zone: Zone

    base_charge: Decimal
    additional_charge: Decimal = Decimal("0")
    rto_charge: Decimal = Decimal("0")
    cod_charge_fixed: Decimal = Decimal("0")
    cod_charge_percent: Decimal = Decimal("0")
    gst_rate: Decimal = DEFAULT_GST_RATE

    volumetric_divisor: Optional[Decimal] = None
    is_active: bool = True

    model_config = {"frozen": True}

    @field_validator("zone", mode="before")
    @classmethod
    def _parse_zone(cls, value):
        return Zone.parse(value)

    @property
    def key(self):
        """Uniqueness key of an active entry."""
        return (self.courier.lower(), self.mode.lower(), self.zone)


class RateBandInfo(BaseModel):
    name: str
    is_default: bool
    is_custom: bool
    description: Optional[str] = None


class ZoneRateModel(BaseModel):
    zone: Zone
    zone_code: str
    base: Decimal
    additional: Decimal
    rto: Decimal


class CODRateModel(BaseModel):
    absolute: Decimal
    percentage: Decimal


class CourierRateCardModel(BaseModel):
    courier_name: str
    product_name: str
    mode: str
    zones: List[ZoneRateModel] = []
    cod_charges: CODRateModel


class RateCardResponseModel(BaseModel):
    rate_band: RateBandInfo
    couriers: List[CourierRateCardModel] = []
