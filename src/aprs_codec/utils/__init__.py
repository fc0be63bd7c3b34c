"""
Utility functions and helpers.
"""

from .conversions import (
    coordinates_to_str,
    directivity_to_degrees,
    feet_to_meters,
    knots_to_kmh,
    knots_to_mph,
    meters_to_feet,
    miles_to_km,
    phg_height_to_feet,
    phg_power_to_watts,
)

__all__ = [
    "knots_to_kmh",
    "knots_to_mph",
    "miles_to_km",
    "feet_to_meters",
    "meters_to_feet",
    "phg_power_to_watts",
    "phg_height_to_feet",
    "directivity_to_degrees",
    "coordinates_to_str",
]
