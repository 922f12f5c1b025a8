"""Temperature conversion and display formatting helpers."""

from datetime import datetime


def celsius_to_fahrenheit(celsius: float) -> float:
    return (celsius * 9) / 5 + 32


def fahrenheit_to_celsius(fahrenheit: float) -> float:
    return (fahrenheit - 32) * 5 / 9


def round_temperature(value: float) -> float:
    """Round to exactly one decimal digit, folding -0.0 into 0.0."""
    return round(value, 1) + 0.0


def format_timestamp(moment: datetime) -> str:
    """Format a moment as ``Updated at HH:MM`` (24-hour, zero-padded)."""
    return f"Updated at {moment:%H:%M}"
