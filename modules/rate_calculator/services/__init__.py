"""
Rate Calculator Services

Contains the pricing stages of the rate engine:
- ShipmentValidationService: input format and range checks
- WeightResolutionService: volumetric, billed weight and weight units
- QuoteCalculationService: per rate card entry pricing
- RankingService: ordering and Standard/Express grouping
"""

from .shipment_validation_service import (
    ShipmentValidationService,
    ValidationResult,
    ValidationError,
)
from .weight_resolution_service import WeightResolutionService, WeightResolution
from .quote_calculation_service import QuoteCalculationService
from .ranking_service import RankingService

__all__ = [
    "ShipmentValidationService",
    "ValidationResult",
    "ValidationError",
    "WeightResolutionService",
    "WeightResolution",
    "QuoteCalculationService",
    "RankingService",
]
