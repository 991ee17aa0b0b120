"""Imperial to metric conversions for station telemetry.

Every converter maps ``None`` to ``None`` so that a missing sensor value
stays distinguishable from a reported zero. Required fields are defaulted
by the normalizer, not here.
"""
from typing import Optional

INHG_TO_HPA = 33.8639
MPH_TO_MS = 0.44704
INCH_TO_MM = 25.4


def fahrenheit_to_celsius(fahrenheit: Optional[float]) -> Optional[float]:
    if fahrenheit is None:
        return None
    return (fahrenheit - 32) * (5 / 9)


def inhg_to_hpa(inhg: Optional[float]) -> Optional[float]:
    if inhg is None:
        return None
    return inhg * INHG_TO_HPA


def mph_to_ms(mph: Optional[float]) -> Optional[float]:
    if mph is None:
        return None
    return mph * MPH_TO_MS


def inches_to_mm(inches: Optional[float]) -> Optional[float]:
    if inches is None:
        return None
    return inches * INCH_TO_MM
