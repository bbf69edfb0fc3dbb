"""
Booking Service package.
"""
