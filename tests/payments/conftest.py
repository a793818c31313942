from datetime import date

import pytest


@pytest.fixture()
def today():
    """Fixed clock for expiry checks: 15 June 2025."""
    return lambda: date(2025, 6, 15)
