"""
Weight Resolution Service

Weight Types:
1. volumetric weight: (L × W × H) / divisor
2. billed weight: max(actual weight, volumetric weight)
3. weight units: billed weight in fixed steps, rounded up, at least 1

Values are kept as exact Decimals. Nothing is rounded here.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_CEILING
from typing import Any, Dict, Optional

from modules.rate_calculator.rate_calculator_config import (
    COURIER_VOLUMETRIC_DIVISORS,
    VOLUMETRIC_DIVISOR,
    WEIGHT_UNIT_SIZE_KG,
)


@dataclass(frozen=True)
class WeightResolution:
    """Result of weight resolution"""

    volumetric_weight_kg: Decimal
    billed_weight_kg: Decimal
    weight_units: int
    unit_size_kg: Decimal
    volumetric_divisor: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "volumetric_weight_kg": self.volumetric_weight_kg,
            "billed_weight_kg": self.billed_weight_kg,
            "weight_units": self.weight_units,
            "unit_size_kg": self.unit_size_kg,
            "volumetric_divisor": self.volumetric_divisor,
        }


class WeightResolutionService:
    """
    Usage:
        resolver = WeightResolutionService()
        weight = resolver.resolve(30, 20, 10, 1.0)
    """

    def __init__(
        self,
        volumetric_divisor: Decimal = VOLUMETRIC_DIVISOR,
        unit_size_kg: Decimal = WEIGHT_UNIT_SIZE_KG,
        courier_divisors: Dict[str, Decimal] = None,
    ):
        self.volumetric_divisor = self._to_decimal(volumetric_divisor)
        self.unit_size_kg = self._to_decimal(unit_size_kg)
        self.courier_divisors = {
            name.lower(): self._to_decimal(divisor)
            for name, divisor in (
                COURIER_VOLUMETRIC_DIVISORS if courier_divisors is None else courier_divisors
            ).items()
        }

        if self.volumetric_divisor <= 0 or self.unit_size_kg <= 0:
            raise ValueError("volumetric divisor and weight unit size must be positive")

    def divisor_for(self, courier: str = None, override: Decimal = None) -> Decimal:
        """Entry override, then configured courier divisor, then the default."""
        if override:
            return self._to_decimal(override)
        if courier and courier.lower() in self.courier_divisors:
            return self.courier_divisors[courier.lower()]
        return self.volumetric_divisor

    def calculate_volumetric_weight(
        self, length_cm, width_cm, height_cm, divisor: Decimal = None
    ) -> Decimal:
        volume = (
            self._to_decimal(length_cm)
            * self._to_decimal(width_cm)
            * self._to_decimal(height_cm)
        )
        return volume / (divisor or self.volumetric_divisor)

    def calculate_weight_units(self, billed_weight_kg: Decimal) -> int:
        units = (billed_weight_kg / self.unit_size_kg).to_integral_value(
            rounding=ROUND_CEILING
        )
        return max(1, int(units))

    def resolve(
        self,
        length_cm,
        width_cm,
        height_cm,
        actual_weight_kg,
        divisor: Optional[Decimal] = None,
    ) -> WeightResolution:
        divisor = self._to_decimal(divisor) if divisor else self.volumetric_divisor
        volumetric = self.calculate_volumetric_weight(
            length_cm, width_cm, height_cm, divisor
        )
        billed = max(self._to_decimal(actual_weight_kg), volumetric)

        return WeightResolution(
            volumetric_weight_kg=volumetric,
            billed_weight_kg=billed,
            weight_units=self.calculate_weight_units(billed),
            unit_size_kg=self.unit_size_kg,
            volumetric_divisor=divisor,
        )

    @staticmethod
    def _to_decimal(value: Any) -> Decimal:
        if isinstance(value, Decimal):
            return value
        return Decimal(str(value))
