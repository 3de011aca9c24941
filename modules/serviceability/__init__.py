"""
Serviceability Module

Pincode reference data and zone classification.
"""
