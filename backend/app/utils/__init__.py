"""Shared helpers."""

from .units import (
    celsius_to_fahrenheit,
    fahrenheit_to_celsius,
    format_timestamp,
    round_temperature,
)

__all__ = [
    "celsius_to_fahrenheit",
    "fahrenheit_to_celsius",
    "format_timestamp",
    "round_temperature",
]
