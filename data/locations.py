"""
Static location reference data used for zone classification.

City and state names are stored lowercase; every comparison lowercases first.
"""

# Metro cities. Metro to Metro applies when both ends of a shipment are in this list.
metro_cities = [
    "delhi",
    "new delhi",
    "mumbai",
    "navi mumbai",
    "kolkata",
    "chennai",
    "bengaluru",
    "bangalore",
    "hyderabad",
    "pune",
    "ahmedabad",
]

# Special zone states (North-East and Jammu & Kashmir).
special_zone = [
    "assam",
    "arunachal pradesh",
    "manipur",
    "meghalaya",
    "mizoram",
    "nagaland",
    "tripura",
    "sikkim",
    "jammu and kashmir",
    "jammu & kashmir",
    "ladakh",
]

# Fallbacks for pincodes missing from the pincode master.
# First three digits identify the sorting district, first two the postal circle.
metro_pincode_prefixes = {
    "110": "delhi",
    "400": "mumbai",
    "700": "kolkata",
    "600": "chennai",
    "560": "bengaluru",
    "500": "hyderabad",
}

special_zone_pincode_prefixes = ("18", "19", "78", "79", "737")
