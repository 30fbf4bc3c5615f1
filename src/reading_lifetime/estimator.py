"""
reading_lifetime/estimator.py - Lifetime Reading Capacity Estimator

Projects how many books a person can expect to read before the end of life:

    yearsLeft  = max(R, 0)               R = remaining years from the table
    daysLeft   = round(yearsLeft × 365)
    hours      = daysLeft × dailyMinutes × energyFactor / 60
    pages      = hours × pagesPerHour
    books      = floor(pages / avgPagesPerBook)

Energy Model:
- 1.0 below age 50
- 0.8 from 50 through 65
- 0.6 above 65

The calculation is pure: no state is kept between calls and no input is
rejected. Out-of-range values propagate arithmetically.

Author: Reading Lifetime Project
License: MIT
"""

import numpy as np
import pandas as pd
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union
import logging

from .config import EstimatorConfig
from .life_expectancy import (
    Gender,
    LifeExpectancyTable,
    get_remaining_years,
    normalize_country_code,
    normalize_gender,
)

logger = logging.getLogger(__name__)

DAYS_IN_YEAR = 365
MINUTES_PER_HOUR = 60
DAYS_IN_WEEK = 7


class GoalType(Enum):
    """Goal kinds; only reading is defined so far."""
    READING = "reading"


class Cadence(Enum):
    """Whether the stated minutes are per day or per week."""
    DAILY = "daily"
    WEEKLY = "weekly"


@dataclass(frozen=True)
class ReadingGoalInput:
    """Reading habits and demographic context for one person."""
    current_age: float
    minutes: float
    cadence: Union[Cadence, str]
    pages_per_hour: float
    avg_pages_per_book: float
    goal_type: Optional[GoalType] = None
    country_code: Optional[str] = None
    gender: Optional[Union[Gender, str]] = None


@dataclass(frozen=True)
class LifetimeReadingResult:
    """Projection for a single person."""
    goal_type: GoalType
    current_age: float
    expected_age: float
    years_left: float
    days_left: int
    daily_minutes: float
    energy_factor: float
    total_readable_hours: float
    total_pages: float
    total_books: int
    pages_per_hour: float
    avg_pages_per_book: float
    remaining_years_model: float
    life_expectancy_label: str


def get_energy_factor(current_age: float) -> float:
    """Share of reading time still available at a given age."""
    if current_age < 50:
        return 1.0
    if current_age <= 65:
        return 0.8
    return 0.6


def get_daily_minutes(minutes: float, cadence: Union[Cadence, str]) -> float:
    """Minutes per day; anything other than daily is treated as weekly."""
    value = cadence.value if isinstance(cadence, Cadence) else cadence
    if value == Cadence.DAILY.value:
        return minutes
    return minutes / DAYS_IN_WEEK


def _round_half_up(value: float) -> int:
    if not np.isfinite(value):
        return 0
    return int(np.floor(value + 0.5))


def _count_books(total_pages: float, avg_pages_per_book: float) -> int:
    if not avg_pages_per_book > 0:
        return 0
    books = np.floor(total_pages / avg_pages_per_book)
    if not np.isfinite(books):
        return 0
    return max(int(books), 0)


def build_life_expectancy_label(country_code: Optional[str] = None,
                                gender: Optional[Union[Gender, str]] = None) -> str:
    """Describe which part of the table the estimate came from."""
    country = normalize_country_code(country_code)
    selector = normalize_gender(gender)
    if country is None:
        return "global average"
    if selector and selector.strip() and selector != Gender.ALL.value:
        return f"{country} · {selector}"
    return f"{country} average expectancy"


def calculate_reading_lifetime(goal: ReadingGoalInput, table: Mapping,
                               expected_age: Optional[float] = None) -> LifetimeReadingResult:
    """
    Calculate the remaining reading capacity for a person.

    Args:
        goal: Reading habits and demographics
        table: LifeExpectancyTable (or nested mapping of the same shape)
        expected_age: Fixed expected age replacing the table lookup

    Returns:
        LifetimeReadingResult; never raises for out-of-range inputs
    """
    age = goal.current_age

    if expected_age is not None:
        remaining_years = expected_age - age
        label = f"custom expectancy ({expected_age:g})"
    else:
        remaining_years = get_remaining_years(age, table, goal.country_code, goal.gender)
        label = build_life_expectancy_label(goal.country_code, goal.gender)

    years_left = max(remaining_years, 0)
    daily_minutes = get_daily_minutes(goal.minutes, goal.cadence)
    days_left = _round_half_up(years_left * DAYS_IN_YEAR)
    energy_factor = get_energy_factor(age)
    total_readable_hours = (days_left * daily_minutes * energy_factor) / MINUTES_PER_HOUR
    total_pages = total_readable_hours * goal.pages_per_hour
    total_books = _count_books(total_pages, goal.avg_pages_per_book)

    return LifetimeReadingResult(
        goal_type=goal.goal_type if goal.goal_type is not None else GoalType.READING,
        current_age=age,
        expected_age=age + remaining_years,
        years_left=years_left,
        days_left=days_left,
        daily_minutes=daily_minutes,
        energy_factor=energy_factor,
        total_readable_hours=total_readable_hours,
        total_pages=total_pages,
        total_books=total_books,
        pages_per_hour=goal.pages_per_hour,
        avg_pages_per_book=goal.avg_pages_per_book,
        remaining_years_model=remaining_years,
        life_expectancy_label=label,
    )


estimate = calculate_reading_lifetime


class ReadingLifetimeEstimator:
    """
    Estimator bound to one life-expectancy table and configuration.

    The table is read-only, so one estimator can serve any number of callers.
    """

    def __init__(self, table: Mapping, config: Optional[EstimatorConfig] = None):
        self.table = LifeExpectancyTable.from_dict(table)
        self.config = config or EstimatorConfig()
        logger.info(f"ReadingLifetimeEstimator initialized: {len(self.table.countries)} countries, "
                    f"expected_age={self.config.expected_age}")

    def estimate(self, goal: ReadingGoalInput) -> LifetimeReadingResult:
        return calculate_reading_lifetime(goal, self.table, self.config.expected_age)

    def run_batch(self, people: pd.DataFrame,
                  progress_callback: Optional[Callable] = None) -> pd.DataFrame:
        """
        Estimate every row of a DataFrame.

        Expected columns: Age, Minutes, Cadence, PagesPerHour, AvgPagesPerBook;
        optional: ID, Country, Gender, GoalType.
        """
        from .reporting import results_to_dataframe

        results: List[LifetimeReadingResult] = []
        ids: List[str] = []
        total = len(people)

        logger.info(f"Starting batch estimate: {total} people")

        for processed, (idx, row) in enumerate(people.iterrows(), start=1):
            person_id = self._cell(row, 'ID')
            ids.append(str(person_id) if person_id is not None else f'P{idx}')
            results.append(self.estimate(self._row_to_input(row)))
            if progress_callback:
                progress_callback(processed, total)

        results_df = results_to_dataframe(results, ids=ids)
        if total:
            logger.info(f"Batch complete: {int(results_df['TotalBooks'].sum()):,} books across {total} people")
        return results_df

    def _row_to_input(self, row: pd.Series) -> ReadingGoalInput:
        goal_type = self._cell(row, 'GoalType')
        return ReadingGoalInput(
            current_age=float(self._cell(row, 'Age', 0)),
            minutes=float(self._cell(row, 'Minutes', 0)),
            cadence=str(self._cell(row, 'Cadence', Cadence.DAILY.value)).strip().lower(),
            pages_per_hour=float(self._cell(row, 'PagesPerHour', 0)),
            avg_pages_per_book=float(self._cell(row, 'AvgPagesPerBook', 0)),
            goal_type=GoalType(str(goal_type).strip().lower()) if goal_type is not None else None,
            country_code=self._cell(row, 'Country'),
            gender=self._text(self._cell(row, 'Gender')),
        )

    @staticmethod
    def _cell(row: pd.Series, column: str, default: Any = None) -> Any:
        val = row.get(column)
        if val is None or (not isinstance(val, str) and pd.isna(val)):
            return default
        if isinstance(val, str) and not val.strip():
            return default
        return val

    @staticmethod
    def _text(val: Any) -> Optional[str]:
        return str(val).strip().lower() if val is not None else None


def create_estimator(config: Optional[Union[EstimatorConfig, Dict]] = None,
                     table: Optional[Mapping] = None) -> ReadingLifetimeEstimator:
    """
    Factory for an estimator.

    Args:
        config: EstimatorConfig or dict; defaults apply when None
        table: Pre-loaded table; when None the configured or bundled dataset
               is loaded from disk
    """
    if not isinstance(config, EstimatorConfig):
        config = EstimatorConfig.from_dict(config)

    if table is None:
        from .table_loader import load_life_expectancy_table
        table = load_life_expectancy_table(config.table_path)

    return ReadingLifetimeEstimator(table, config)
