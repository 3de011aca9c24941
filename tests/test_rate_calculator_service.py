import time
from decimal import Decimal

import pytest

from modules.rate_calculator.rate_calculator_service import RateCalculatorService
from modules.rate_calculator.services import WeightResolutionService
from modules.rate_card.rate_card_store import InMemoryRateCardStore
from modules.serviceability.serviceability_schema import Zone
from tests.factories import make_entry, make_spec
from utils.exceptions import (
    ConfigurationError,
    InvalidDimensions,
    InvalidPincode,
    NoRatesAvailable,
)


def build_service(store, serviceability, **kwargs):
    weight_service = WeightResolutionService(
        volumetric_divisor=Decimal("5000"),
        unit_size_kg=Decimal("0.5"),
        courier_divisors={},
    )
    return RateCalculatorService(
        store, serviceability, weight_service=weight_service, **kwargs
    )


def test_end_to_end_prepaid_with_rto(store, locality_serviceability):
    result = build_service(store, locality_serviceability).calculate_rates(
        make_spec(), seller_id=1
    )

    assert result.zone == Zone.REST_OF_INDIA
    assert result.billed_weight_kg == Decimal("1.2")
    assert result.weight_units == 3

    quote = result.quotes[0]
    assert quote.base_charge_total == Decimal("80")
    assert quote.cod_charge == Decimal("0")
    assert quote.rto_charge == Decimal("25")
    assert quote.gst == Decimal("18.9")
    assert quote.total == Decimal("123.9")
    assert result.to_display()["cheapestOption"]["total"] == 123.9


def test_metro_pair_uses_metro_rates(serviceability):
    store = InMemoryRateCardStore(
        [
            make_entry("Acme", zone="Rest of India"),
            make_entry("Acme", zone="Metro to Metro", base_charge=Decimal("30")),
        ]
    )
    result = build_service(store, serviceability).calculate_rates(
        make_spec(), seller_id=1
    )

    assert result.zone == Zone.METRO_TO_METRO
    assert [q.zone for q in result.quotes] == [Zone.METRO_TO_METRO]


def test_quotes_are_ranked_and_grouped(serviceability):
    store = InMemoryRateCardStore(
        [
            make_entry("Zeta", "Surface", "Metro to Metro", base_charge=Decimal("30")),
            make_entry("Acme", "Air", "Metro to Metro", base_charge=Decimal("60")),
            make_entry("Acme", "Surface", "Metro to Metro", base_charge=Decimal("30")),
        ]
    )
    result = build_service(store, serviceability).calculate_rates(
        make_spec(), seller_id=1
    )

    assert [(q.courier, q.mode) for q in result.quotes] == [
        ("Acme", "Surface"),
        ("Zeta", "Surface"),
        ("Acme", "Air"),
    ]
    assert len(result.standard) == 2
    assert len(result.express) == 1


def test_requested_courier_filter(serviceability):
    store = InMemoryRateCardStore(
        [
            make_entry("Acme", zone="Metro to Metro"),
            make_entry("Zeta", zone="Metro to Metro"),
        ]
    )
    result = build_service(store, serviceability).calculate_rates(
        make_spec(requested_courier="zeta"), seller_id=1
    )
    assert [q.courier for q in result.quotes] == ["Zeta"]


def test_no_entries_for_zone_is_no_rates_available(store, serviceability):
    # the store only has Rest of India rates, the pair is Metro to Metro
    with pytest.raises(NoRatesAvailable) as exc:
        build_service(store, serviceability).calculate_rates(make_spec(), seller_id=1)
    assert exc.value.details["zone"] == "Metro to Metro"


def test_unknown_requested_courier_is_no_rates_available(store, locality_serviceability):
    with pytest.raises(NoRatesAvailable):
        build_service(store, locality_serviceability).calculate_rates(
            make_spec(requested_courier="Nobody"), seller_id=1
        )


def test_invalid_input_is_rejected_before_lookup(store, serviceability):
    service = build_service(store, serviceability)

    with pytest.raises(InvalidPincode):
        service.calculate_rates(make_spec(origin_pincode="1100"), seller_id=1)

    with pytest.raises(InvalidDimensions):
        service.calculate_rates(make_spec(length_cm=Decimal("0")), seller_id=1)

    with pytest.raises(InvalidDimensions):
        service.calculate_rates(make_spec(declared_value=Decimal("-1")), seller_id=1)


def test_pincode_errors_win_over_dimension_errors(store, serviceability):
    with pytest.raises(InvalidPincode):
        build_service(store, serviceability).calculate_rates(
            make_spec(destination_pincode="abc", actual_weight_kg=Decimal("-1")),
            seller_id=1,
        )


class FlakyStore(InMemoryRateCardStore):
    """Raises or stalls on lookups for selected couriers."""

    def __init__(self, entries, failing=(), slow=(), delay=1.0):
        super().__init__(entries)
        self.failing = {name.lower() for name in failing}
        self.slow = {name.lower() for name in slow}
        self.delay = delay

    def lookup(self, seller_id, zone=None, courier=None, mode=None):
        if courier and courier.lower() in self.failing:
            raise RuntimeError("courier rate service unavailable")
        if courier and courier.lower() in self.slow:
            time.sleep(self.delay)
        return super().lookup(seller_id, zone=zone, courier=courier, mode=mode)


def test_failing_courier_is_dropped(locality_serviceability):
    store = FlakyStore(
        [make_entry("Acme"), make_entry("Broken"), make_entry("Zeta")],
        failing=["Broken"],
    )
    result = build_service(store, locality_serviceability).calculate_rates(
        make_spec(), seller_id=1
    )
    assert [q.courier for q in result.quotes] == ["Acme", "Zeta"]


def test_slow_courier_is_dropped(locality_serviceability):
    store = FlakyStore(
        [make_entry("Acme"), make_entry("Slow")], slow=["Slow"], delay=1.0
    )
    service = build_service(store, locality_serviceability, timeout_seconds=0.2)

    result = service.calculate_rates(make_spec(), seller_id=1)

    assert [q.courier for q in result.quotes] == ["Acme"]


def test_all_couriers_failing_is_no_rates_available(locality_serviceability):
    store = FlakyStore([make_entry("Broken")], failing=["Broken"])
    with pytest.raises(NoRatesAvailable):
        build_service(store, locality_serviceability).calculate_rates(
            make_spec(), seller_id=1
        )


def test_duplicate_entries_propagate_configuration_error(locality_serviceability):
    store = InMemoryRateCardStore(
        [make_entry("Acme"), make_entry("Acme", base_charge=Decimal("45"))]
    )
    with pytest.raises(ConfigurationError):
        build_service(store, locality_serviceability).calculate_rates(
            make_spec(), seller_id=1
        )


def test_result_carries_rate_band(locality_serviceability):
    store = InMemoryRateCardStore([make_entry("Acme", client_id=9)])
    result = build_service(store, locality_serviceability).calculate_rates(
        make_spec(), seller_id=9
    )
    assert result.rate_band.is_custom
    assert result.to_display()["rateBand"]["is_custom"] is True


def test_empty_assigned_band_reports_the_default_band(locality_serviceability):
    store = InMemoryRateCardStore([make_entry("Acme")], seller_bands={2: "Empty"})
    result = build_service(store, locality_serviceability).calculate_rates(
        make_spec(), seller_id=2
    )

    assert [q.courier for q in result.quotes] == ["Acme"]
    assert result.rate_band.is_default
    assert result.to_display()["rateBand"]["name"] == store.default_rate_band
