from decimal import Decimal

from modules.rate_calculator.rate_calculator_schema import Quote
from modules.rate_calculator.services import RankingService, WeightResolutionService
from modules.serviceability.serviceability_schema import Zone


def make_quote(courier, total, mode="Surface"):
    total = Decimal(total)
    return Quote(
        courier=courier,
        product_name="",
        mode=mode,
        zone=Zone.REST_OF_INDIA,
        final_weight_kg=Decimal("1.2"),
        volumetric_weight_kg=Decimal("1.2"),
        weight_units=3,
        base_charge_total=total,
        cod_charge=Decimal("0"),
        rto_charge=Decimal("0"),
        gst=Decimal("0"),
        total=total,
    )


def rank(quotes):
    weight = WeightResolutionService(courier_divisors={}).resolve(30, 20, 10, 1)
    return RankingService().rank(quotes, Zone.REST_OF_INDIA, weight)


def test_ties_are_broken_by_courier_name():
    acme = make_quote("Acme", "153.40")
    zeta = make_quote("Zeta", "153.40")

    assert [q.courier for q in rank([zeta, acme]).quotes] == ["Acme", "Zeta"]
    assert [q.courier for q in rank([acme, zeta]).quotes] == ["Acme", "Zeta"]


def test_sorted_by_total_ascending():
    result = rank(
        [
            make_quote("Zeta", "90"),
            make_quote("Acme", "120.5"),
            make_quote("Beta", "80.25"),
        ]
    )
    totals = [q.total for q in result.quotes]
    assert totals == sorted(totals)
    assert result.cheapest_option.courier == "Beta"


def test_partition_keeps_every_quote():
    quotes = [
        make_quote("Acme", "100", mode="Surface"),
        make_quote("Acme", "150", mode="Air"),
        make_quote("Zeta", "140", mode="AIR express"),
        make_quote("Zeta", "90", mode="Surface"),
    ]
    result = rank(quotes)

    assert result.total_options == 4
    assert [q.total for q in result.standard] == [Decimal("90"), Decimal("100")]
    assert [q.total for q in result.express] == [Decimal("140"), Decimal("150")]
    assert len(result.standard) + len(result.express) == len(result.quotes)


def test_display_shape():
    display = rank([make_quote("Acme", "123.9")]).to_display()

    assert display["zone"] == "Rest of India"
    assert display["zoneCode"] == "D"
    assert display["billedWeight"] == 1.2
    assert display["weightUnits"] == 3
    assert display["totalOptions"] == 1
    assert display["cheapestOption"]["total"] == 123.9
    assert display["rates"][0]["deliveryEstimate"] == "3-5 days"


def test_ties_use_plain_lexicographic_courier_order():
    quotes = [make_quote("acme", "100"), make_quote("Beta", "100")]
    assert [q.courier for q in rank(quotes).quotes] == ["Beta", "acme"]
