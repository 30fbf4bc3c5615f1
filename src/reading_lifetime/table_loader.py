"""
reading_lifetime/table_loader.py - Life Expectancy Dataset Loader

Loads the life-expectancy dataset from JSON and validates its shape before
handing it to the estimator as an immutable LifeExpectancyTable.

Validation:
- Every entry carries atBirth and all four age bands as non-negative numbers
- Gender keys are limited to male / female / all
- Country codes are uppercased; the reserved "global" key is kept as-is

Audit:
- SHA-256 fingerprint of the source is logged for reproducibility

Author: Reading Lifetime Project
License: MIT
"""

import hashlib
import json
from pathlib import Path
from typing import Any, Dict, Optional, Union
import logging

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .life_expectancy import GLOBAL_KEY, Gender, LifeExpectancyTable

logger = logging.getLogger(__name__)

DEFAULT_TABLE_PATH = Path(__file__).parent / "data" / "life_expectancy.json"


class LifeExpectancyDataError(ValueError):
    """Raised when a life-expectancy dataset is unreadable or malformed."""


# =============================================================================
# PYDANTIC SCHEMA
# =============================================================================

class AgeBandSchedule(BaseModel):
    """Remaining years by age band."""
    model_config = ConfigDict(populate_by_name=True, extra='forbid')

    band_0_19: float = Field(..., alias="0-19", ge=0)
    band_20_39: float = Field(..., alias="20-39", ge=0)
    band_40_59: float = Field(..., alias="40-59", ge=0)
    band_60_79: float = Field(..., alias="60-79", ge=0)


class LifeExpectancyRecord(BaseModel):
    """A single country/gender entry."""
    model_config = ConfigDict(populate_by_name=True)

    at_birth: float = Field(..., alias="atBirth", ge=0)
    remaining_years_by_age_band: AgeBandSchedule = Field(..., alias="remainingYearsByAgeBand")


# =============================================================================
# LOADING
# =============================================================================

def compute_source_hash(content: bytes) -> str:
    """SHA-256 fingerprint of the raw dataset."""
    return hashlib.sha256(content).hexdigest()


def parse_life_expectancy_table(raw: Dict[str, Any],
                                source: str = "<dict>") -> LifeExpectancyTable:
    """
    Validate a raw dataset and build the immutable table.

    Args:
        raw: {country_or_global: {gender: {atBirth, remainingYearsByAgeBand}}}
        source: Name used in error messages

    Returns:
        LifeExpectancyTable with normalized keys

    Raises:
        LifeExpectancyDataError: If the dataset does not match the schema
    """
    if not isinstance(raw, dict):
        raise LifeExpectancyDataError(f"{source}: dataset must be a JSON object")

    valid_genders = {g.value for g in Gender}
    normalized: Dict[str, Dict[str, Any]] = {}

    for country_key, record in raw.items():
        country = str(country_key).strip()
        country = GLOBAL_KEY if country.lower() == GLOBAL_KEY else country.upper()
        if not country:
            raise LifeExpectancyDataError(f"{source}: empty country code")
        if not isinstance(record, dict):
            raise LifeExpectancyDataError(f"{source}: entry for {country} must be an object")
        if country in normalized:
            raise LifeExpectancyDataError(f"{source}: duplicate country code {country}")

        entries = {}
        for gender, entry in record.items():
            if gender not in valid_genders:
                raise LifeExpectancyDataError(
                    f"{source}: unknown gender '{gender}' for {country} "
                    f"(expected one of {sorted(valid_genders)})"
                )
            try:
                parsed = LifeExpectancyRecord.model_validate(entry)
            except ValidationError as e:
                raise LifeExpectancyDataError(f"{source}: invalid entry {country}/{gender}: {e}") from e
            entries[gender] = parsed.model_dump(by_alias=True)

        normalized[country] = entries

    table = LifeExpectancyTable(normalized)
    if not table.has_global_fallback:
        logger.warning(f"{source}: no '{GLOBAL_KEY}/all' entry; estimates without "
                       f"country data will use the default expected age")

    logger.info(f"Life expectancy table loaded from {source}: {len(table.countries)} countries")
    return table


def load_life_expectancy_table(source: Optional[Union[str, Path]] = None) -> LifeExpectancyTable:
    """
    Load and validate a life-expectancy dataset from a JSON file.

    Args:
        source: Path to the dataset; None loads the bundled dataset

    Raises:
        LifeExpectancyDataError: If the file is missing, not JSON, or malformed
    """
    path = Path(source) if source is not None else DEFAULT_TABLE_PATH

    try:
        content = path.read_bytes()
    except OSError as e:
        raise LifeExpectancyDataError(f"Cannot read life expectancy data {path}: {e}") from e

    logger.info(f"Life expectancy data {path.name}: sha256={compute_source_hash(content)}")

    try:
        raw = json.loads(content.decode('utf-8'))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise LifeExpectancyDataError(f"{path}: not valid JSON: {e}") from e

    return parse_life_expectancy_table(raw, source=str(path))
