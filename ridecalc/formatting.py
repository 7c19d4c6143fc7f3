"""Display formatting for money, distances, dates and percentages."""

from typing import Any

from ridecalc.config import DEFAULT_SETTINGS


def _group(value: float, decimals: int, thousands: str, decimal: str) -> str:
    text = f"{abs(value):,.{decimals}f}"
    # Swap through a placeholder so "." and "," can trade places
    text = text.replace(",", "\0").replace(".", decimal).replace("\0", thousands)
    sign = "-" if round(value, decimals) < 0 else ""
    return f"{sign}{text}"


def format_money(value: float | None, settings: dict[str, Any] | None = None) -> str:
    """Format an amount with the configured currency symbol and separators.

    Args:
        value: Amount, None is shown as zero.
        settings: Settings dict; defaults give "R$ 1.234,56".

    Returns:
        Formatted amount.
    """
    settings = settings or DEFAULT_SETTINGS
    text = _group(value or 0.0, 2, settings["thousands_separator"], settings["decimal_separator"])
    return f"{settings['currency_symbol']} {text}"


def format_km(value: float | None, settings: dict[str, Any] | None = None) -> str:
    """Format a distance as whole kilometres (e.g., "12.345 km")."""
    settings = settings or DEFAULT_SETTINGS
    return f"{_group(value or 0.0, 0, settings['thousands_separator'], settings['decimal_separator'])} km"


def format_date(value: str) -> str:
    """Convert YYYY-MM-DD to DD/MM/YYYY."""
    year, month, day = value.split("-")
    return f"{day}/{month}/{year}"


def format_percent(value: float) -> str:
    return f"{value:.1f}%"
