from typing import Iterable, List, Optional, Tuple

from modules.rate_calculator.rate_calculator_schema import Quote, RankedResult
from modules.rate_calculator.services.weight_resolution_service import WeightResolution
from modules.rate_card.rate_card_schema import RateBandInfo
from modules.serviceability.serviceability_schema import Zone


class RankingService:
    """Orders quotes for presentation. Never drops a quote."""

    @staticmethod
    def sort_key(quote: Quote):
        return (quote.total, quote.courier)

    def sort_quotes(self, quotes: Iterable[Quote]) -> List[Quote]:
        return sorted(quotes, key=self.sort_key)

    @staticmethod
    def partition(quotes: Iterable[Quote]) -> Tuple[List[Quote], List[Quote]]:
        """Split into (standard, express), preserving order."""
        standard, express = [], []
        for quote in quotes:
            (express if quote.is_express else standard).append(quote)
        return standard, express

    def rank(
        self,
        quotes: Iterable[Quote],
        zone: Zone,
        weight_res: WeightResolution,
        rate_band: Optional[RateBandInfo] = None,
    ) -> RankedResult:
        ordered = self.sort_quotes(quotes)
        standard, express = self.partition(ordered)

        return RankedResult(
            zone=zone,
            billed_weight_kg=weight_res.billed_weight_kg,
            volumetric_weight_kg=weight_res.volumetric_weight_kg,
            weight_units=weight_res.weight_units,
            quotes=ordered,
            standard=standard,
            express=express,
            rate_band=rate_band,
        )
