import pytest

from modules.serviceability.pincode_directory import (
    InMemoryPincodeDirectory,
    location_from_prefix,
)
from modules.serviceability.serviceability_schema import Zone
from modules.serviceability.serviceability_service import ServiceabilityService
from utils.exceptions import InvalidPincode


@pytest.mark.parametrize(
    "origin,destination,expected",
    [
        ("110001", "110002", Zone.WITHIN_CITY),
        ("110001", "110085", Zone.WITHIN_STATE),
        ("400001", "411001", Zone.WITHIN_STATE),
        ("110001", "400001", Zone.METRO_TO_METRO),
        ("302001", "781001", Zone.NORTH_EAST_JK),
        ("110001", "190001", Zone.NORTH_EAST_JK),
        ("110001", "302001", Zone.REST_OF_INDIA),
        ("781001", "302001", Zone.REST_OF_INDIA),
    ],
)
def test_zone_precedence(serviceability, origin, destination, expected):
    assert serviceability.classify_zone(origin, destination) == expected


def test_special_zone_within_state_is_within_state(serviceability):
    assert serviceability.classify_zone("781001", "785001") == Zone.WITHIN_STATE


def test_classification_is_deterministic(directory):
    first = ServiceabilityService(directory)
    second = ServiceabilityService(directory)
    results = {first.classify_zone("110001", "302001") for _ in range(5)}
    results.add(second.classify_zone("110001", "302001"))
    assert results == {Zone.REST_OF_INDIA}


def test_zone_is_memoised(directory):
    service = ServiceabilityService(directory)
    assert service.classify_zone("110001", "400001") == Zone.METRO_TO_METRO

    # a changed directory is not seen until the cache is cleared
    directory._locations.clear()
    assert service.classify_zone("110001", "400001") == Zone.METRO_TO_METRO

    service.clear_cache()
    # both prefixes are still metro districts
    assert service.classify_zone("110001", "400001") == Zone.METRO_TO_METRO


@pytest.mark.parametrize("pincode", ["11001", "1100011", "11000A", "", None, " 110 01"])
def test_invalid_pincode(serviceability, pincode):
    with pytest.raises(InvalidPincode):
        serviceability.classify_zone(pincode, "400001")


def test_invalid_destination_names_field(serviceability):
    with pytest.raises(InvalidPincode) as exc:
        serviceability.classify_zone("110001", "abc")
    assert exc.value.field == "destination_pincode"


def test_integer_pincodes_are_accepted(serviceability):
    assert serviceability.classify_zone(110001, 110002) == Zone.WITHIN_CITY


def test_prefix_fallback():
    service = ServiceabilityService(InMemoryPincodeDirectory())

    assert service.classify_zone("110001", "110020") == Zone.WITHIN_CITY
    assert service.classify_zone("302001", "303001") == Zone.WITHIN_STATE
    assert service.classify_zone("110001", "560001") == Zone.METRO_TO_METRO
    assert service.classify_zone("302001", "781001") == Zone.NORTH_EAST_JK
    assert service.classify_zone("302001", "452001") == Zone.REST_OF_INDIA


def test_location_from_prefix_flags():
    location = location_from_prefix("737101")
    assert location.is_special_zone
    assert not location.is_metro
    assert not location.from_master

    metro = location_from_prefix("400070")
    assert metro.is_metro
    assert metro.city == "mumbai"


def test_pincode_details(serviceability):
    details = serviceability.get_pincode_details("781001")
    assert details.city == "guwahati"
    assert details.state == "assam"
    assert details.is_special_zone
    assert not details.is_metro


def test_pincode_details_unknown_pincode(serviceability):
    details = serviceability.get_pincode_details("560001")
    assert details.city is None
    assert details.is_metro


def test_zone_details_carry_code(serviceability):
    details = serviceability.get_zone_details("110001", "302001")
    assert details.zone == Zone.REST_OF_INDIA
    assert details.zone_code == "D"


@pytest.mark.parametrize(
    "value,expected",
    [
        ("Within City", Zone.WITHIN_CITY),
        ("zone_b", Zone.WITHIN_STATE),
        ("C", Zone.METRO_TO_METRO),
        ("REST_OF_INDIA", Zone.REST_OF_INDIA),
        ("special zone", Zone.NORTH_EAST_JK),
    ],
)
def test_zone_parse(value, expected):
    assert Zone.parse(value) == expected


def test_zone_parse_unknown():
    with pytest.raises(ValueError):
        Zone.parse("zone_z")
