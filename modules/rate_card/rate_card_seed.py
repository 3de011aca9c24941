"""
Build rate card entries and rows from a rate table shaped like
data.default_rate_card.DEFAULT_RATE_BAND_RATES.
"""

from decimal import Decimal
from typing import Callable, Dict, List

from sqlalchemy.orm import Session

from logger import logger
from modules.rate_card.rate_card_schema import RateCardEntry
from modules.serviceability.serviceability_schema import Zone

HUNDRED = Decimal("100")


def band_entries_from_table(rates: Dict, rate_band: str) -> List[RateCardEntry]:
    """Rate card entries of a band, one per (courier, zone)."""
    entries = []
    for slug, config in rates.items():
        for zone_key, base_rate in config["base_rates"].items():
            entries.append(
                RateCardEntry(
                    rate_card_id=f"{rate_band}:{slug}:{zone_key}",
                    rate_band=rate_band,
                    courier=config["name"],
                    product_name=config.get("product_name", ""),
                    mode=config["mode"],
                    zone=zone_key,
                    base_charge=base_rate,
                    additional_charge=config["additional_rates"][zone_key],
                    rto_charge=config["rto_rates"][zone_key],
                    cod_charge_fixed=config["cod_charges"]["absolute_rate"],
                    cod_charge_percent=config["cod_charges"]["percentage_rate"]
                    / HUNDRED,
                    gst_rate=config["tax_rate"] / HUNDRED,
                    volumetric_divisor=config.get("volumetric_divisor"),
                )
            )
    return entries


def seed_rate_band(
    session_factory: Callable[[], Session], rates: Dict, rate_band: str
) -> Dict:
    """
    Write couriers and band rows for `rate_band`.

    Existing band rows are soft deleted first, so re-running the seed replaces
    the band instead of creating duplicate active entries.
    """
    from models import Courier, Rate_Card

    db = session_factory()
    try:
        retired = (
            db.query(Rate_Card)
            .filter(
                Rate_Card.client_id.is_(None),
                Rate_Card.rate_band == rate_band,
                Rate_Card.is_deleted == False,
            )
            .update({"is_deleted": True, "isActive": False}, synchronize_session=False)
        )

        inserted = 0
        for slug, config in rates.items():
            courier = db.query(Courier).filter(Courier.slug == slug).first()
            if courier is None:
                courier = Courier(
                    name=config["name"],
                    slug=slug,
                    product_name=config.get("product_name"),
                    mode=config["mode"],
                    volumetric_divisor=config.get("volumetric_divisor"),
                )
                db.add(courier)
                db.flush()

            for zone_key, base_rate in config["base_rates"].items():
                db.add(
                    Rate_Card(
                        courier_id=courier.id,
                        rate_band=rate_band,
                        zone=Zone.parse(zone_key).value,
                        base_rate=base_rate,
                        additional_rate=config["additional_rates"][zone_key],
                        rto_rate=config["rto_rates"][zone_key],
                        cod_percentage_rate=config["cod_charges"]["percentage_rate"],
                        cod_absolute_rate=config["cod_charges"]["absolute_rate"],
                        gst_percentage=config["tax_rate"],
                    )
                )
                inserted += 1

        db.commit()
        logger.info(
            msg=f"Seeded rate band '{rate_band}': {inserted} rows, {retired} retired"
        )
        return {"rate_band": rate_band, "inserted": inserted, "retired": retired}

    except Exception:
        db.rollback()
        raise

    finally:
        db.close()
