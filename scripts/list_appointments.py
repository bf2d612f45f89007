#!/usr/bin/env python3
"""Fetch the appointment list from the running booking API."""
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import requests

from booking import config


def main():
    try:
        response = requests.get(
            f"{config.API_BASE_URL}/appointments",
            headers={"Accept": "application/json"},
            timeout=10,
        )
    except requests.exceptions.RequestException as e:
        print(f"Request error: {e}")
        sys.exit(1)

    print("Status:", response.status_code)
    print("Body:", response.text)


if __name__ == "__main__":
    main()
