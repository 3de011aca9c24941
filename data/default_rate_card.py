"""
Default Rate Band

Sell rates of the platform default band ("Standard"), applied to every seller
without custom rates or an assigned band.

Structure:
courier slug: {
    name, product_name, mode, zone rates (base / additional / rto),
    cod charges, tax rate
}

Zone keys use the legacy letter codes:
zone_a Within City, zone_b Within State, zone_c Metro to Metro,
zone_d Rest of India, zone_e North East & J&K.
"""

from decimal import Decimal

DEFAULT_RATE_BAND_RATES = {
    "bluedart": {
        "name": "Bluedart",
        "product_name": "Bluedart Surface 0.5kg",
        "mode": "Surface",
        "base_rates": {
            "zone_a": Decimal("32.00"),
            "zone_b": Decimal("38.00"),
            "zone_c": Decimal("45.00"),
            "zone_d": Decimal("52.00"),
            "zone_e": Decimal("63.00"),
        },
        "additional_rates": {
            "zone_a": Decimal("30.00"),
            "zone_b": Decimal("36.00"),
            "zone_c": Decimal("42.00"),
            "zone_d": Decimal("48.00"),
            "zone_e": Decimal("60.00"),
        },
        "rto_rates": {
            "zone_a": Decimal("32.00"),
            "zone_b": Decimal("38.00"),
            "zone_c": Decimal("45.00"),
            "zone_d": Decimal("52.00"),
            "zone_e": Decimal("63.00"),
        },
        "cod_charges": {
            "percentage_rate": Decimal("1.5"),
            "absolute_rate": Decimal("35.00"),
        },
        "tax_rate": Decimal("18.0"),
    },
    "bluedart-air": {
        "name": "Bluedart",
        "product_name": "Bluedart Air 0.5kg",
        "mode": "Air",
        "base_rates": {
            "zone_a": Decimal("40.00"),
            "zone_b": Decimal("48.00"),
            "zone_c": Decimal("58.00"),
            "zone_d": Decimal("68.00"),
            "zone_e": Decimal("82.00"),
        },
        "additional_rates": {
            "zone_a": Decimal("38.00"),
            "zone_b": Decimal("46.00"),
            "zone_c": Decimal("55.00"),
            "zone_d": Decimal("64.00"),
            "zone_e": Decimal("78.00"),
        },
        "rto_rates": {
            "zone_a": Decimal("40.00"),
            "zone_b": Decimal("48.00"),
            "zone_c": Decimal("58.00"),
            "zone_d": Decimal("68.00"),
            "zone_e": Decimal("82.00"),
        },
        "cod_charges": {
            "percentage_rate": Decimal("1.5"),
            "absolute_rate": Decimal("35.00"),
        },
        "tax_rate": Decimal("18.0"),
    },
    "delhivery": {
        "name": "Delhivery",
        "product_name": "Delhivery Surface 0.5kg",
        "mode": "Surface",
        "base_rates": {
            "zone_a": Decimal("29.00"),
            "zone_b": Decimal("34.00"),
            "zone_c": Decimal("41.00"),
            "zone_d": Decimal("47.00"),
            "zone_e": Decimal("58.00"),
        },
        "additional_rates": {
            "zone_a": Decimal("27.00"),
            "zone_b": Decimal("32.00"),
            "zone_c": Decimal("38.00"),
            "zone_d": Decimal("44.00"),
            "zone_e": Decimal("55.00"),
        },
        "rto_rates": {
            "zone_a": Decimal("29.00"),
            "zone_b": Decimal("34.00"),
            "zone_c": Decimal("41.00"),
            "zone_d": Decimal("47.00"),
            "zone_e": Decimal("58.00"),
        },
        "cod_charges": {
            "percentage_rate": Decimal("2.0"),
            "absolute_rate": Decimal("30.00"),
        },
        "tax_rate": Decimal("18.0"),
    },
    "xpressbees": {
        "name": "Xpressbees",
        "product_name": "Xpressbees Surface 0.5kg",
        "mode": "Surface",
        "base_rates": {
            "zone_a": Decimal("27.00"),
            "zone_b": Decimal("33.00"),
            "zone_c": Decimal("39.00"),
            "zone_d": Decimal("45.00"),
            "zone_e": Decimal("56.00"),
        },
        "additional_rates": {
            "zone_a": Decimal("26.00"),
            "zone_b": Decimal("31.00"),
            "zone_c": Decimal("37.00"),
            "zone_d": Decimal("43.00"),
            "zone_e": Decimal("54.00"),
        },
        "rto_rates": {
            "zone_a": Decimal("27.00"),
            "zone_b": Decimal("33.00"),
            "zone_c": Decimal("39.00"),
            "zone_d": Decimal("45.00"),
            "zone_e": Decimal("56.00"),
        },
        "cod_charges": {
            "percentage_rate": Decimal("1.75"),
            "absolute_rate": Decimal("32.00"),
        },
        "tax_rate": Decimal("18.0"),
    },
}
