"""
Shipment Validation Service

Rejects malformed shipments before zone and weight resolution.

Validation Categories:
1. Format validation (pincodes)
2. Range validation (dimensions, weight, declared value)

The first failing category decides the raised error: InvalidPincode for
format problems, InvalidDimensions for range problems.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List

from logger import logger
from modules.rate_calculator.rate_calculator_schema import ShipmentSpecModel
from modules.serviceability.serviceability_service import PINCODE_REGEX
from utils.exceptions import InvalidDimensions, InvalidPincode


@dataclass
class ValidationError:
    """Represents a single validation error"""

    field: str
    message: str
    code: str
    value: Any = None


@dataclass
class ValidationResult:
    """Result of validation operation"""

    is_valid: bool = True
    errors: List[ValidationError] = field(default_factory=list)

    def add_error(self, field: str, message: str, code: str, value: Any = None):
        self.errors.append(ValidationError(field, message, code, value))
        self.is_valid = False

    def errors_with_code(self, code: str) -> List[ValidationError]:
        return [error for error in self.errors if error.code == code]

    def to_dict(self) -> Dict:
        return {
            "is_valid": self.is_valid,
            "errors": [
                {"field": e.field, "message": e.message, "code": e.code}
                for e in self.errors
            ],
        }


class ShipmentValidationService:
    """
    Usage:
        ShipmentValidationService().ensure_valid(spec)
    """

    POSITIVE_FIELDS = ("length_cm", "width_cm", "height_cm", "actual_weight_kg")

    def validate(self, spec: ShipmentSpecModel) -> ValidationResult:
        result = ValidationResult()

        for field_name in ("origin_pincode", "destination_pincode"):
            value = getattr(spec, field_name)
            if not PINCODE_REGEX.match(str(value or "").strip()):
                result.add_error(
                    field_name,
                    f"{field_name} must be a 6 digit pincode",
                    InvalidPincode.code,
                    value,
                )

        for field_name in self.POSITIVE_FIELDS:
            value = getattr(spec, field_name)
            if value is None or not value.is_finite() or value <= 0:
                result.add_error(
                    field_name,
                    f"{field_name} must be greater than 0",
                    InvalidDimensions.code,
                    value,
                )

        declared_value = spec.declared_value
        if not declared_value.is_finite() or declared_value < Decimal("0"):
            result.add_error(
                "declared_value",
                "declared_value cannot be negative",
                InvalidDimensions.code,
                declared_value,
            )

        return result

    def ensure_valid(self, spec: ShipmentSpecModel) -> ShipmentSpecModel:
        result = self.validate(spec)
        if result.is_valid:
            return spec

        logger.info(msg=f"Rejected shipment: {result.to_dict()}")

        pincode_errors = result.errors_with_code(InvalidPincode.code)
        if pincode_errors:
            first = pincode_errors[0]
            raise InvalidPincode(
                first.message, field=first.field, details=result.to_dict()
            )

        first = result.errors[0]
        raise InvalidDimensions(
            first.message, field=first.field, details=result.to_dict()
        )
