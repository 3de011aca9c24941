"""
Rate Card Store

Read-only access to the active rate cards of a seller. Resolution order:
1. the seller's custom entries, when the seller has any active custom entry
2. the rate band assigned to the seller
3. the platform default rate band

The store never mutates entries. Uniqueness of (courier, mode, zone) is owned by
the admin workflow that writes rate cards; the engine verifies it on read with
ensure_unique_entries.
"""

from collections import Counter
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy.orm import joinedload, sessionmaker

from logger import logger
from modules.rate_calculator.rate_calculator_config import DEFAULT_RATE_BAND
from modules.rate_card.rate_card_schema import RateBandInfo, RateCardEntry
from modules.serviceability.serviceability_schema import Zone
from utils.exceptions import ConfigurationError


def ensure_unique_entries(entries: Iterable[RateCardEntry]) -> List[RateCardEntry]:
    """Raise ConfigurationError when two active entries share (courier, mode, zone)."""
    entries = list(entries)
    counts = Counter(entry.key for entry in entries)
    duplicates = [key for key, count in counts.items() if count > 1]

    if duplicates:
        courier, mode, zone = duplicates[0]
        raise ConfigurationError(
            f"Duplicate active rate card entries for courier '{courier}', "
            f"mode '{mode}', zone '{zone.value}'",
            details={
                "duplicates": [
                    {"courier": c, "mode": m, "zone": z.value} for c, m, z in duplicates
                ]
            },
        )
    return entries


def _matches(
    entry: RateCardEntry,
    zone: Optional[Zone],
    courier: Optional[str],
    mode: Optional[str],
) -> bool:
    if not entry.is_active:
        return False
    if zone is not None and entry.zone != zone:
        return False
    if courier is not None and entry.courier.lower() != courier.strip().lower():
        return False
    if mode is not None and entry.mode.lower() != mode.strip().lower():
        return False
    return True


class RateCardStore:
    """Base interface. Subclasses implement _custom_entries and _band_entries."""

    default_rate_band: str = DEFAULT_RATE_BAND

    def _custom_entries(self, seller_id: int) -> List[RateCardEntry]:
        raise NotImplementedError

    def _band_entries(self, rate_band: str) -> List[RateCardEntry]:
        raise NotImplementedError

    def _assigned_band(self, seller_id: int) -> Optional[str]:
        return None

    def _default_band_info(self) -> RateBandInfo:
        return RateBandInfo(
            name=self.default_rate_band,
            is_default=True,
            is_custom=False,
            description="Platform default rate band",
        )

    def _resolve(self, seller_id: int) -> Tuple[List[RateCardEntry], RateBandInfo]:
        """Active entries of a seller and the band they were taken from."""
        custom = self._custom_entries(seller_id)
        if custom:
            return custom, RateBandInfo(
                name=f"Custom ({seller_id})",
                is_default=False,
                is_custom=True,
                description="Seller specific rates negotiated with admin",
            )

        assigned = self._assigned_band(seller_id)
        if assigned and assigned != self.default_rate_band:
            band = self._band_entries(assigned)
            if band:
                return band, RateBandInfo(
                    name=assigned, is_default=False, is_custom=False
                )
            logger.warning(
                msg=f"Rate band '{assigned}' of seller {seller_id} has no active "
                f"entries, falling back to '{self.default_rate_band}'"
            )

        return self._band_entries(self.default_rate_band), self._default_band_info()

    def rate_band_info(self, seller_id: int) -> RateBandInfo:
        return self._resolve(seller_id)[1]

    def _active_entries(self, seller_id: int) -> List[RateCardEntry]:
        return self._resolve(seller_id)[0]

    def lookup(
        self,
        seller_id: int,
        zone: Optional[Zone] = None,
        courier: Optional[str] = None,
        mode: Optional[str] = None,
    ) -> List[RateCardEntry]:
        return [
            entry
            for entry in self._active_entries(seller_id)
            if _matches(entry, zone, courier, mode)
        ]

    def couriers(self, seller_id: int) -> List[str]:
        """Names of couriers with at least one active entry, in stable order."""
        names: Dict[str, str] = {}
        for entry in self._active_entries(seller_id):
            names.setdefault(entry.courier.lower(), entry.courier)
        return sorted(names.values(), key=str.lower)


class InMemoryRateCardStore(RateCardStore):
    """
    Store over fixture entries.

    Entries with client_id set are custom entries of that seller; entries
    without client_id belong to their rate_band (or the default band).
    """

    def __init__(
        self,
        entries: Iterable[RateCardEntry] = (),
        seller_bands: Dict[int, str] = None,
        default_rate_band: str = None,
    ):
        self.entries = list(entries)
        self.seller_bands = dict(seller_bands or {})
        if default_rate_band:
            self.default_rate_band = default_rate_band

    def _custom_entries(self, seller_id: int) -> List[RateCardEntry]:
        return [
            entry
            for entry in self.entries
            if entry.client_id == seller_id and entry.is_active
        ]

    def _band_entries(self, rate_band: str) -> List[RateCardEntry]:
        return [
            entry
            for entry in self.entries
            if entry.client_id is None
            and (entry.rate_band or self.default_rate_band) == rate_band
            and entry.is_active
        ]

    def _assigned_band(self, seller_id: int) -> Optional[str]:
        return self.seller_bands.get(seller_id)


class DatabaseRateCardStore(RateCardStore):
    """
    Store over the rate_card table.

    A session is opened per call from the factory so concurrent lookups never
    share a SQLAlchemy session.
    """

    def __init__(self, session_factory: sessionmaker, default_rate_band: str = None):
        self.session_factory = session_factory
        if default_rate_band:
            self.default_rate_band = default_rate_band

    @staticmethod
    def _to_entry(row) -> RateCardEntry:
        courier = row.courier
        return RateCardEntry(
            rate_card_id=str(row.uuid),
            client_id=row.client_id,
            rate_band=row.rate_band,
            courier=courier.name,
            product_name=courier.product_name or "",
            mode=courier.mode,
            zone=row.zone,
            base_charge=row.base_rate,
            additional_charge=row.additional_rate,
            rto_charge=row.rto_rate,
            cod_charge_fixed=row.cod_absolute_rate,
            # stored as a percentage, e.g. 2.00
            cod_charge_percent=Decimal(str(row.cod_percentage_rate)) / Decimal("100"),
            gst_rate=Decimal(str(row.gst_percentage)) / Decimal("100"),
            volumetric_divisor=courier.volumetric_divisor,
            is_active=row.isActive,
        )

    def _query(self, **filters) -> List[RateCardEntry]:
        from models import Courier, Rate_Card

        with self.session_factory() as db:
            query = (
                db.query(Rate_Card)
                .join(Rate_Card.courier)
                .filter(
                    Rate_Card.isActive == True,
                    Rate_Card.is_deleted == False,
                    Courier.is_active == True,
                )
                .options(joinedload(Rate_Card.courier))
            )
            if "client_id" in filters:
                query = query.filter(Rate_Card.client_id == filters["client_id"])
            if "rate_band" in filters:
                query = query.filter(
                    Rate_Card.client_id.is_(None),
                    Rate_Card.rate_band == filters["rate_band"],
                )
            rows = query.order_by(Rate_Card.id).all()
            return [self._to_entry(row) for row in rows]

    def _custom_entries(self, seller_id: int) -> List[RateCardEntry]:
        return self._query(client_id=seller_id)

    def _band_entries(self, rate_band: str) -> List[RateCardEntry]:
        return self._query(rate_band=rate_band)

    def _assigned_band(self, seller_id: int) -> Optional[str]:
        from models import Client

        with self.session_factory() as db:
            client = (
                db.query(Client.rate_band)
                .filter(Client.id == seller_id, Client.is_deleted == False)
                .first()
            )
        return client.rate_band if client else None
