"""
tests/conftest.py - Shared fixtures

Author: Reading Lifetime Project
License: MIT
"""

import pytest

from reading_lifetime.life_expectancy import LifeExpectancyTable


def make_entry(at_birth, bands):
    return {
        "atBirth": at_birth,
        "remainingYearsByAgeBand": dict(zip(["0-19", "20-39", "40-59", "60-79"], bands)),
    }


SAMPLE_TABLE = {
    "global": {
        "all": make_entry(72.0, [60.0, 45.0, 30.0, 15.0]),
    },
    "US": {
        "all": make_entry(77.0, [65.0, 50.0, 32.0, 18.0]),
        "female": make_entry(80.0, [70.0, 52.0, 34.0, 19.5]),
    },
}


@pytest.fixture
def raw_table():
    return {country: dict(record) for country, record in SAMPLE_TABLE.items()}


@pytest.fixture
def table():
    return LifeExpectancyTable(SAMPLE_TABLE)
