"""
Rate Card Module

Read access to seller, band and default rate cards.
"""
