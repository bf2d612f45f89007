"""Date helpers for booking tests."""
from datetime import date, timedelta


def get_future_weekday(days_ahead=7):
    """Generate a future Monday-Friday date string in YYYY-MM-DD format."""
    day = date.today() + timedelta(days=days_ahead)
    while day.weekday() > 4:
        day += timedelta(days=1)
    return day.strftime("%Y-%m-%d")


def get_future_weekend(days_ahead=7):
    """Generate a future Saturday date string."""
    day = date.today() + timedelta(days=days_ahead)
    while day.weekday() != 5:
        day += timedelta(days=1)
    return day.strftime("%Y-%m-%d")


def get_past_weekday():
    """A Monday-Friday date in the past."""
    day = date.today() - timedelta(days=7)
    while day.weekday() > 4:
        day -= timedelta(days=1)
    return day.strftime("%Y-%m-%d")
