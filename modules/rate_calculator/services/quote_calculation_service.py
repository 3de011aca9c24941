"""
Quote Calculation Service

Formula per rate card entry:
    base_charge_total = base_charge + additional_charge × (weight_units − 1)
    cod_charge        = max(cod_charge_fixed, cod_charge_percent × declared_value)   COD only
    rto_charge        = rto_charge                                                   prepaid with RTO only
    gst               = gst_rate × (base_charge_total + cod_charge + rto_charge)
    total             = base_charge_total + cod_charge + rto_charge + gst

All arithmetic is Decimal and unrounded; rounding happens at display time.
"""

from decimal import Decimal
from typing import Iterable, List

from logger import logger
from modules.rate_calculator.rate_calculator_schema import (
    PaymentType,
    Quote,
    ShipmentSpecModel,
)
from modules.rate_calculator.services.weight_resolution_service import (
    WeightResolution,
    WeightResolutionService,
)
from modules.rate_card.rate_card_schema import RateCardEntry

ZERO = Decimal("0")


class QuoteCalculationService:

    def __init__(self, weight_service: WeightResolutionService = None):
        self.weight_service = weight_service or WeightResolutionService()

    # ============================================
    # CHARGE COMPONENTS
    # ============================================

    @staticmethod
    def calculate_base_charge(entry: RateCardEntry, weight_units: int) -> Decimal:
        extra_units = max(0, weight_units - 1)
        return entry.base_charge + entry.additional_charge * extra_units

    @staticmethod
    def calculate_cod_charge(entry: RateCardEntry, spec: ShipmentSpecModel) -> Decimal:
        if spec.payment_type != PaymentType.COD:
            return ZERO
        # cod charge is the maximum of the two values
        return max(
            entry.cod_charge_fixed,
            entry.cod_charge_percent * spec.declared_value,
        )

    @staticmethod
    def calculate_rto_charge(entry: RateCardEntry, spec: ShipmentSpecModel) -> Decimal:
        # COD returns are billed through a separate path
        if spec.include_rto and spec.payment_type == PaymentType.PREPAID:
            return entry.rto_charge
        return ZERO

    @staticmethod
    def calculate_gst(entry: RateCardEntry, taxable: Decimal) -> Decimal:
        return entry.gst_rate * taxable

    # ============================================
    # PRICING
    # ============================================

    @staticmethod
    def is_priceable(entry: RateCardEntry) -> bool:
        return entry.is_active and entry.base_charge is not None and entry.base_charge > 0

    def weight_for(
        self,
        entry: RateCardEntry,
        spec: ShipmentSpecModel,
        weight_res: WeightResolution,
    ) -> WeightResolution:
        """Re-resolve only when this courier bills with a different divisor."""
        divisor = self.weight_service.divisor_for(entry.courier, entry.volumetric_divisor)
        if divisor == weight_res.volumetric_divisor:
            return weight_res
        return self.weight_service.resolve(
            spec.length_cm,
            spec.width_cm,
            spec.height_cm,
            spec.actual_weight_kg,
            divisor=divisor,
        )

    def price(
        self,
        entry: RateCardEntry,
        weight_res: WeightResolution,
        spec: ShipmentSpecModel,
    ) -> Quote:
        weight = self.weight_for(entry, spec, weight_res)

        base_charge_total = self.calculate_base_charge(entry, weight.weight_units)
        cod_charge = self.calculate_cod_charge(entry, spec)
        rto_charge = self.calculate_rto_charge(entry, spec)
        taxable = base_charge_total + cod_charge + rto_charge
        gst = self.calculate_gst(entry, taxable)

        return Quote(
            courier=entry.courier,
            product_name=entry.product_name,
            mode=entry.mode,
            zone=entry.zone,
            rate_card_id=entry.rate_card_id,
            rate_band=entry.rate_band,
            final_weight_kg=weight.billed_weight_kg,
            volumetric_weight_kg=weight.volumetric_weight_kg,
            weight_units=weight.weight_units,
            base_charge_total=base_charge_total,
            cod_charge=cod_charge,
            rto_charge=rto_charge,
            gst=gst,
            total=taxable + gst,
        )

    def price_entries(
        self,
        entries: Iterable[RateCardEntry],
        weight_res: WeightResolution,
        spec: ShipmentSpecModel,
    ) -> List[Quote]:
        quotes = []
        for entry in entries:
            if not self.is_priceable(entry):
                logger.warning(
                    msg=f"Skipping unusable rate card entry {entry.rate_card_id} "
                    f"({entry.courier} {entry.mode} {entry.zone.value})"
                )
                continue
            quotes.append(self.price(entry, weight_res, spec))
        return quotes
