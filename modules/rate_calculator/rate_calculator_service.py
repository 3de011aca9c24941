from concurrent.futures import ThreadPoolExecutor, wait
from typing import List, Optional

from context_manager.context import context_user_data
from logger import logger

# schema
from modules.rate_calculator.rate_calculator_schema import (
    Quote,
    RankedResult,
    ShipmentSpecModel,
)
from modules.rate_calculator.rate_calculator_config import (
    RATE_FANOUT_TIMEOUT_SECONDS,
    RATE_FANOUT_WORKERS,
)

# services
from modules.rate_calculator.services import (
    QuoteCalculationService,
    RankingService,
    ShipmentValidationService,
    WeightResolution,
    WeightResolutionService,
)
from modules.rate_card.rate_card_store import RateCardStore, ensure_unique_entries
from modules.serviceability.serviceability_schema import Zone
from modules.serviceability.serviceability_service import ServiceabilityService
from utils.exceptions import ConfigurationError, NoRatesAvailable


class RateCalculatorService:
    """
    Rate calculation for one shipment and one seller.

    Flow:
    1. Validate the shipment
    2. Classify the zone and resolve the billed weight
    3. Fan out one task per courier (lookup + pricing), join with a bounded wait
    4. Drop couriers that failed or timed out, rank the rest

    Usage:
        service = RateCalculatorService(store, serviceability)
        result = service.calculate_rates(spec, seller_id=42)
    """

    def __init__(
        self,
        store: RateCardStore,
        serviceability: ServiceabilityService,
        weight_service: WeightResolutionService = None,
        timeout_seconds: float = RATE_FANOUT_TIMEOUT_SECONDS,
        max_workers: int = RATE_FANOUT_WORKERS,
    ):
        self.store = store
        self.serviceability = serviceability
        self.weight_service = weight_service or WeightResolutionService()
        self.validator = ShipmentValidationService()
        self.quote_service = QuoteCalculationService(self.weight_service)
        self.ranking_service = RankingService()
        self.timeout_seconds = timeout_seconds
        self.max_workers = max_workers

    def calculate_rates(self, spec: ShipmentSpecModel, seller_id: int) -> RankedResult:
        spec = self.validator.ensure_valid(spec)

        zone = self.serviceability.classify_zone(
            spec.origin_pincode, spec.destination_pincode
        )
        weight = self.weight_service.resolve(
            spec.length_cm, spec.width_cm, spec.height_cm, spec.actual_weight_kg
        )

        logger.info(
            extra=context_user_data.get(),
            msg=f"Rate calculation seller={seller_id} zone={zone.value} "
            f"billed_weight={weight.billed_weight_kg} units={weight.weight_units}",
        )

        couriers = self._couriers_for(seller_id, spec.requested_courier)
        quotes = self._fan_out(couriers, seller_id, zone, weight, spec)

        if not quotes:
            raise NoRatesAvailable(
                f"No couriers serve this route ({zone.value})",
                details={
                    "zone": zone.value,
                    "requested_courier": spec.requested_courier,
                },
            )

        return self.ranking_service.rank(
            quotes, zone, weight, rate_band=self.store.rate_band_info(seller_id)
        )

    def _couriers_for(self, seller_id: int, requested_courier: Optional[str]) -> List[str]:
        couriers = self.store.couriers(seller_id)
        if requested_courier:
            wanted = requested_courier.strip().lower()
            couriers = [name for name in couriers if name.lower() == wanted]
        return couriers

    def _quote_courier(
        self,
        courier: str,
        seller_id: int,
        zone: Zone,
        weight: WeightResolution,
        spec: ShipmentSpecModel,
    ) -> List[Quote]:
        entries = ensure_unique_entries(
            self.store.lookup(seller_id, zone=zone, courier=courier)
        )
        return self.quote_service.price_entries(entries, weight, spec)

    def _fan_out(
        self,
        couriers: List[str],
        seller_id: int,
        zone: Zone,
        weight: WeightResolution,
        spec: ShipmentSpecModel,
    ) -> List[Quote]:
        if not couriers:
            return []

        executor = ThreadPoolExecutor(
            max_workers=max(1, min(self.max_workers, len(couriers))),
            thread_name_prefix="rate-fanout",
        )
        try:
            futures = {
                executor.submit(
                    self._quote_courier, courier, seller_id, zone, weight, spec
                ): courier
                for courier in couriers
            }
            done, not_done = wait(futures, timeout=self.timeout_seconds)

            for future in not_done:
                future.cancel()
                logger.warning(
                    extra=context_user_data.get(),
                    msg=f"Rate lookup for courier {futures[future]} timed out "
                    f"after {self.timeout_seconds}s, dropping it",
                )

            quotes: List[Quote] = []
            # iterate in submission order so the merge is deterministic
            for future, courier in futures.items():
                if future not in done:
                    continue
                try:
                    quotes.extend(future.result())
                except ConfigurationError as e:
                    logger.error(
                        extra=context_user_data.get(),
                        msg=f"Rate card configuration error for seller {seller_id}: {e.message}",
                    )
                    raise
                except Exception as e:
                    logger.warning(
                        extra=context_user_data.get(),
                        msg=f"Rate lookup for courier {courier} failed, dropping it: {str(e)}",
                    )
            return quotes

        finally:
            # do not block on stragglers that already exceeded the timeout
            executor.shutdown(wait=False, cancel_futures=True)
