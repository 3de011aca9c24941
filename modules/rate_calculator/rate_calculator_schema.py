from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, field_validator

# schema
from modules.serviceability.serviceability_schema import Zone
from modules.rate_card.rate_card_schema import RateBandInfo
from modules.rate_calculator.rate_calculator_config import DELIVERY_ESTIMATES


def round_money(value: Decimal) -> Decimal:
    return Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def round_weight(value: Decimal) -> Decimal:
    return Decimal(value).quantize(Decimal("0.001"), rounding=ROUND_HALF_UP)


class PaymentType(str, Enum):
    COD = "cod"
    PREPAID = "prepaid"


class ShipmentSpecModel(BaseModel):
    """
    Input to the engine. Range and format rules are enforced by
    ShipmentValidationService so they surface as typed errors.
    """

    origin_pincode: str
    destination_pincode: str
    length_cm: Decimal
    width_cm: Decimal
    height_cm: Decimal
    actual_weight_kg: Decimal
    payment_type: PaymentType
    declared_value: Decimal = Decimal("0")
    include_rto: bool = False
    requested_courier: Optional[str] = None

    @field_validator("origin_pincode", "destination_pincode", mode="before")
    @classmethod
    def _pincode_as_text(cls, value):
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("payment_type", mode="before")
    @classmethod
    def _normalize_payment_type(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @property
    def is_cod(self) -> bool:
        return self.payment_type == PaymentType.COD


class Quote(BaseModel):
    """
    Priced option for one rate card entry. Monetary fields are unrounded;
    round only through to_display().
    """

    courier: str
    product_name: str
    mode: str
    zone: Zone
    rate_card_id: Optional[str] = None
    rate_band: Optional[str] = None

    final_weight_kg: Decimal
    volumetric_weight_kg: Decimal
    weight_units: int

    base_charge_total: Decimal
    cod_charge: Decimal
    rto_charge: Decimal
    gst: Decimal
    total: Decimal

    @property
    def is_express(self) -> bool:
        return "air" in (self.mode or "").lower()

    @property
    def service_type(self) -> str:
        return "Air" if self.is_express else "Surface"

    @property
    def service_label(self) -> str:
        return "Express" if self.is_express else "Standard"

    def to_display(self) -> dict:
        return {
            "name": f"{self.courier} {self.product_name}".strip(),
            "courier": self.courier,
            "productName": self.product_name,
            "mode": self.mode,
            "serviceType": self.service_type,
            "serviceLabel": self.service_label,
            "deliveryEstimate": DELIVERY_ESTIMATES.get(self.service_type),
            "zone": self.zone.value,
            "baseCharge": float(round_money(self.base_charge_total)),
            "codCharge": float(round_money(self.cod_charge)),
            "rtoCharges": float(round_money(self.rto_charge)),
            "gst": float(round_money(self.gst)),
            "total": float(round_money(self.total)),
            "finalWeight": float(round_weight(self.final_weight_kg)),
            "weightMultiplier": self.weight_units,
            "rateCardId": self.rate_card_id,
        }


class RankedResult(BaseModel):
    zone: Zone
    billed_weight_kg: Decimal
    volumetric_weight_kg: Decimal
    weight_units: int

    # ascending by total, ties by courier name
    quotes: List[Quote]

    # display groups over the same quotes
    standard: List[Quote] = []
    express: List[Quote] = []

    rate_band: Optional[RateBandInfo] = None

    @property
    def cheapest_option(self) -> Optional[Quote]:
        return self.quotes[0] if self.quotes else None

    @property
    def total_options(self) -> int:
        return len(self.quotes)

    def to_display(self) -> dict:
        cheapest = self.cheapest_option
        return {
            "zone": self.zone.value,
            "zoneCode": self.zone.code,
            "billedWeight": float(round_money(self.billed_weight_kg)),
            "volumetricWeight": float(round_money(self.volumetric_weight_kg)),
            "weightUnits": self.weight_units,
            "rates": [quote.to_display() for quote in self.quotes],
            "standardCount": len(self.standard),
            "expressCount": len(self.express),
            "cheapestOption": cheapest.to_display() if cheapest else None,
            "totalOptions": self.total_options,
            "rateBand": self.rate_band.model_dump() if self.rate_band else None,
        }


class RateCalculatorParamsModel(BaseModel):
    """Request body of POST /ratecalculator"""

    pickup_pincode: str
    delivery_pincode: str
    actualWeight: float
    length: float
    breadth: float
    height: float
    paymentType: str
    shipment_value: Optional[float] = 0.0
    includeRTO: Optional[bool] = None
    courier: Optional[str] = None

    def to_shipment_spec(self) -> ShipmentSpecModel:
        payment_type = self.paymentType.strip().lower()
        include_rto = self.includeRTO
        if include_rto is None:
            # dashboard default: RTO is considered for prepaid shipments
            include_rto = payment_type == PaymentType.PREPAID.value

        return ShipmentSpecModel(
            origin_pincode=self.pickup_pincode,
            destination_pincode=self.delivery_pincode,
            length_cm=Decimal(str(self.length)),
            width_cm=Decimal(str(self.breadth)),
            height_cm=Decimal(str(self.height)),
            actual_weight_kg=Decimal(str(self.actualWeight)),
            payment_type=payment_type,
            declared_value=Decimal(str(self.shipment_value or 0)),
            include_rto=include_rto,
            requested_courier=self.courier,
        )
