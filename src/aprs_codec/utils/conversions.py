"""
Unit conversion utilities for APRS report values.
"""

import numpy as np
from typing import Optional, Union

# Type alias for numeric types
Numeric = Union[float, int, np.ndarray]

KNOT_IN_KMH = 1.852
KNOT_IN_MPH = 1.150779
MILE_IN_KM = 1.609344
FOOT_IN_METERS = 0.3048

# PHG/DFS directivity: 0 is omni, 1-8 are 45 degree steps with 8 = north
DIRECTIVITY_STEP_DEGREES = 45


def knots_to_kmh(knots: Numeric) -> Numeric:
    """
    Convert knots to kilometres per hour.

    Args:
        knots: Speed in knots

    Returns:
        Speed in km/h
    """
    return knots * KNOT_IN_KMH


def knots_to_mph(knots: Numeric) -> Numeric:
    """
    Convert knots to statute miles per hour.

    Args:
        knots: Speed in knots

    Returns:
        Speed in mph
    """
    return knots * KNOT_IN_MPH


def miles_to_km(miles: Numeric) -> Numeric:
    """
    Convert statute miles to kilometres.

    Args:
        miles: Distance in miles

    Returns:
        Distance in km
    """
    return miles * MILE_IN_KM


def feet_to_meters(feet: Numeric) -> Numeric:
    """
    Convert feet to metres.

    Args:
        feet: Length in feet

    Returns:
        Length in metres
    """
    return feet * FOOT_IN_METERS


def meters_to_feet(meters: Numeric) -> Numeric:
    """Convert metres to feet."""
    return meters / FOOT_IN_METERS


def phg_power_to_watts(code: Numeric) -> Numeric:
    """
    Convert a PHG power code (0-9) to transmitter power.

    Args:
        code: PHG power digit

    Returns:
        Power in watts (code squared)
    """
    return np.square(code) if isinstance(code, np.ndarray) else code * code


def phg_height_to_feet(code: Numeric) -> Numeric:
    """
    Convert a PHG/DFS height code (0-9) to antenna height above average terrain.

    Args:
        code: Height digit

    Returns:
        Height in feet (10 * 2**code)
    """
    return 10 * np.power(2, code) if isinstance(code, np.ndarray) else 10 * 2**code


def directivity_to_degrees(code: int) -> Optional[int]:
    """
    Convert a PHG/DFS directivity code to a bearing.

    Args:
        code: Directivity digit

    Returns:
        Bearing in degrees, or None for omni-directional (0) and undefined (9)
    """
    if code <= 0 or code > 8:
        return None
    return code * DIRECTIVITY_STEP_DEGREES


def coordinates_to_str(latitude: float, longitude: float) -> str:
    """
    Format a coordinate pair for display.

    Args:
        latitude: Latitude in decimal degrees
        longitude: Longitude in decimal degrees

    Returns:
        Formatted string (e.g., "48.36017 N, 12.40817 E")
    """
    ns = "S" if latitude < 0 else "N"
    ew = "W" if longitude < 0 else "E"
    return f"{abs(latitude):.5f} {ns}, {abs(longitude):.5f} {ew}"
