"""Token unit and time duration helpers."""

from types import SimpleNamespace

ETHER = 10**18


def get_big_number(n: int, decimals: int = 18) -> int:
    """Scale a whole number of tokens to base units (n * 10**decimals)."""
    return n * 10**decimals


def _seconds(n: int) -> int:
    return n


def _minutes(n: int) -> int:
    return n * 60


def _hours(n: int) -> int:
    return n * 3600


def _days(n: int) -> int:
    return n * 86400


def _weeks(n: int) -> int:
    return n * 604800


def _years(n: int) -> int:
    return n * 31536000


# Durations in seconds: duration.hours(3) == 10800
duration = SimpleNamespace(
    seconds=_seconds,
    minutes=_minutes,
    hours=_hours,
    days=_days,
    weeks=_weeks,
    years=_years,
)
