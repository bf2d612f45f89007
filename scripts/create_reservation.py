#!/usr/bin/env python3
"""Send a sample reservation to the running booking API."""
import sys
import os
from datetime import date, timedelta

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import requests

from booking import config


def next_weekday(start: date) -> date:
    day = start + timedelta(days=1)
    while day.weekday() > 4:
        day += timedelta(days=1)
    return day


def main():
    """Post a test reservation and print the raw answer."""
    payload = {
        "name": "Juan Pérez",
        "email": "juan@ejemplo.cl",
        "phone": "+56912345678",
        "service": config.SERVICES[0],
        "date": next_weekday(date.today()).isoformat(),
        "time": "10:00",
    }

    try:
        response = requests.post(f"{config.API_BASE_URL}/appointments", json=payload, timeout=10)
    except requests.exceptions.RequestException as e:
        print(f"Error: {e}")
        sys.exit(1)

    print("Status:", response.status_code)
    print(response.text)


if __name__ == "__main__":
    main()
