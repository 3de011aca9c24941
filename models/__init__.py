from .client import Client
from .pincode_mapping import Pincode_Mapping
from .courier import Courier
from .rate_card import Rate_Card
