"""
reading_lifetime/life_expectancy.py - Life Expectancy Lookup

Resolves expected remaining years of life from a static, read-only table
keyed by country, gender and age band.

Lookup Order:
- Country-specific, gender-specific entry (e.g. US / female)
- Country-specific "all" entry
- Global "all" entry
- Hardcoded default: max(80 - age, 0)

Age Bands:
- 0-19, 20-39, 40-59, 60-79 (the last band is open-ended upward)

Author: Reading Lifetime Project
License: MIT
"""

import numpy as np
from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterator, Optional, Tuple, Union
import logging

logger = logging.getLogger(__name__)


GLOBAL_KEY = "global"
DEFAULT_EXPECTED_AGE = 80


class Gender(Enum):
    """Gender selectors available in the table."""
    MALE = "male"
    FEMALE = "female"
    ALL = "all"


class AgeBand(Enum):
    """Fixed age bands used to index remaining-years data."""
    CHILD = "0-19"
    YOUNG_ADULT = "20-39"
    MIDDLE_AGE = "40-59"
    SENIOR = "60-79"


# (band, lower bound inclusive, upper bound exclusive), tested in order
AGE_BAND_RANGES: Tuple[Tuple[AgeBand, float, float], ...] = (
    (AgeBand.CHILD, 0, 20),
    (AgeBand.YOUNG_ADULT, 20, 40),
    (AgeBand.MIDDLE_AGE, 40, 60),
    (AgeBand.SENIOR, 60, np.inf),
)


def get_age_band(current_age: float) -> str:
    """
    Resolve the age-band label for an age.

    Every age of 60 or more lands in "60-79". Ages matching no band
    (negative or NaN) also resolve to the last band.
    """
    for band, lower, upper in AGE_BAND_RANGES:
        if lower <= current_age < upper:
            return band.value
    return AGE_BAND_RANGES[-1][0].value


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, (int, float, np.integer, np.floating))


def _freeze(value: Any) -> Any:
    """Recursively wrap nested mappings in read-only views."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    return value


class LifeExpectancyTable(Mapping):
    """
    Immutable life-expectancy table.

    Shape:
        {country_or_global: {male|female|all: {
            "atBirth": float,
            "remainingYearsByAgeBand": {"0-19": float, ..., "60-79": float},
        }}}

    The table is a read-only Mapping; lookups never raise and return None
    where the data has no numeric value.
    """

    def __init__(self, data: Optional[Mapping] = None):
        self._data = _freeze(dict(data or {}))

    @classmethod
    def from_dict(cls, data: Union[Mapping, "LifeExpectancyTable"]) -> "LifeExpectancyTable":
        if isinstance(data, cls):
            return data
        return cls(data)

    def __getitem__(self, key: str) -> Mapping:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"LifeExpectancyTable(countries={sorted(self._data)})"

    @property
    def countries(self) -> Tuple[str, ...]:
        """Country codes in the table, excluding the global entry."""
        return tuple(sorted(k for k in self._data if k != GLOBAL_KEY))

    @property
    def has_global_fallback(self) -> bool:
        return self.get_entry(GLOBAL_KEY, Gender.ALL.value) is not None

    def get_entry(self, country: str, gender: str) -> Optional[Mapping]:
        """Return the sub-entry for a country/gender pair, if present."""
        record = self._data.get(country)
        if not isinstance(record, Mapping):
            return None
        entry = record.get(gender)
        return entry if isinstance(entry, Mapping) else None

    def get_band_value(self, entry: Optional[Mapping], band: str) -> Optional[float]:
        """Numeric remaining-years value of an entry for a band, or None."""
        if entry is None:
            return None
        bands = entry.get("remainingYearsByAgeBand")
        if not isinstance(bands, Mapping):
            return None
        value = bands.get(band)
        return float(value) if _is_number(value) else None

    def get_at_birth(self, country: str = GLOBAL_KEY,
                     gender: str = Gender.ALL.value) -> Optional[float]:
        """Expected lifespan at birth (informational)."""
        entry = self.get_entry(country, gender)
        if entry is None:
            return None
        value = entry.get("atBirth")
        return float(value) if _is_number(value) else None

    def to_dict(self) -> Dict[str, Any]:
        """Plain, mutable deep copy of the table."""
        def thaw(value):
            if isinstance(value, Mapping):
                return {key: thaw(item) for key, item in value.items()}
            return value
        return thaw(self._data)


def normalize_country_code(country_code: Optional[str]) -> Optional[str]:
    """Trim and uppercase a country code; empty or absent means no country."""
    if country_code is None:
        return None
    normalized = str(country_code).strip().upper()
    return normalized or None


def normalize_gender(gender: Optional[Union[str, Gender]]) -> Optional[str]:
    """Pass a gender selector through; None means no gender context."""
    if gender is None:
        return None
    if isinstance(gender, Gender):
        return gender.value
    return gender


def get_fallback_years(current_age: float, table: Mapping) -> float:
    """
    Remaining years from the global/all entry for the age band.

    Falls back to max(80 - age, 0) when the table has no usable global entry.
    """
    table = LifeExpectancyTable.from_dict(table)
    band = get_age_band(current_age)
    value = table.get_band_value(table.get_entry(GLOBAL_KEY, Gender.ALL.value), band)
    if value is not None:
        return value

    logger.debug(f"No global entry for band {band}; using default expected age {DEFAULT_EXPECTED_AGE}")
    return max(DEFAULT_EXPECTED_AGE - current_age, 0)


def get_remaining_years(current_age: float, table: Mapping,
                        country_code: Optional[str] = None,
                        gender: Optional[Union[str, Gender]] = None) -> float:
    """
    Expected remaining years of life for a person.

    Args:
        current_age: Age in years (not validated)
        table: LifeExpectancyTable or a nested mapping of the same shape
        country_code: Optional country code, case-insensitive
        gender: Optional 'male', 'female' or 'all'

    Returns:
        Remaining years from the most specific table entry available
    """
    table = LifeExpectancyTable.from_dict(table)
    country = normalize_country_code(country_code)
    selector = normalize_gender(gender)
    band = get_age_band(current_age)
    fallback_years = get_fallback_years(current_age, table)

    if country is not None and country in table:
        entry = None
        if selector is not None:
            entry = table.get_entry(country, selector)
        if entry is None:
            entry = table.get_entry(country, Gender.ALL.value)

        value = table.get_band_value(entry, band)
        if value is not None:
            return value
        logger.debug(f"No {band} value for {country}/{selector}; using global average")

    return fallback_years


if __name__ == "__main__":
    table = LifeExpectancyTable({
        GLOBAL_KEY: {"all": {"atBirth": 73.0, "remainingYearsByAgeBand": {
            "0-19": 63.0, "20-39": 46.0, "40-59": 29.0, "60-79": 16.0}}},
    })
    for age in [10, 30, 50, 70, 120]:
        print(f"  Age {age}: band={get_age_band(age)}, remaining={get_remaining_years(age, table):.1f}")
