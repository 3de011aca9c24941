from typing import Dict, Tuple

from context_manager.context import context_user_data
from logger import logger

# schema
from modules.rate_card.rate_card_schema import (
    CODRateModel,
    CourierRateCardModel,
    RateCardResponseModel,
    ZoneRateModel,
)
from modules.rate_card.rate_card_store import RateCardStore, ensure_unique_entries
from modules.serviceability.serviceability_schema import Zone


class RateCardService:
    """Seller facing view of the active rate card."""

    def __init__(self, store: RateCardStore):
        self.store = store

    def get_rate_card(self, seller_id: int) -> RateCardResponseModel:
        entries = ensure_unique_entries(self.store.lookup(seller_id))
        zone_order = {zone: index for index, zone in enumerate(Zone)}

        couriers: Dict[Tuple[str, str, str], CourierRateCardModel] = {}
        for entry in entries:
            key = (entry.courier, entry.product_name, entry.mode)
            courier_entry = couriers.get(key)
            if courier_entry is None:
                courier_entry = CourierRateCardModel(
                    courier_name=entry.courier,
                    product_name=entry.product_name,
                    mode=entry.mode.capitalize(),
                    zones=[],
                    cod_charges=CODRateModel(
                        absolute=entry.cod_charge_fixed,
                        percentage=entry.cod_charge_percent * 100,
                    ),
                )
                couriers[key] = courier_entry

            courier_entry.zones.append(
                ZoneRateModel(
                    zone=entry.zone,
                    zone_code=entry.zone.code,
                    base=entry.base_charge,
                    additional=entry.additional_charge,
                    rto=entry.rto_charge,
                )
            )

        for courier_entry in couriers.values():
            courier_entry.zones.sort(key=lambda z: zone_order[z.zone])

        logger.info(
            extra=context_user_data.get(),
            msg=f"Rate card for seller {seller_id}: {len(couriers)} courier products",
        )

        return RateCardResponseModel(
            rate_band=self.store.rate_band_info(seller_id),
            couriers=sorted(
                couriers.values(),
                key=lambda c: (c.courier_name.lower(), c.mode.lower(), c.product_name),
            ),
        )
