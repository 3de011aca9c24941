"""
Rate Calculator Module

Turns a shipment into ranked courier quotes for a seller.
"""
