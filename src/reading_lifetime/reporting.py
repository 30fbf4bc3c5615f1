"""
reading_lifetime/reporting.py - Result Export and Summaries

Produces:
1. camelCase dictionaries matching the public result interface
2. pandas DataFrames (one row per person) for CSV/Excel export
3. Plain-text summaries for the command line

Author: Reading Lifetime Project
License: MIT
"""

import pandas as pd
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union
import logging

from .estimator import LifetimeReadingResult

logger = logging.getLogger(__name__)


# snake_case field -> camelCase interface name
CAMEL_CASE_FIELDS = {
    'goal_type': 'goalType',
    'current_age': 'currentAge',
    'expected_age': 'expectedAge',
    'years_left': 'yearsLeft',
    'days_left': 'daysLeft',
    'daily_minutes': 'dailyMinutes',
    'energy_factor': 'energyFactor',
    'total_readable_hours': 'totalReadableHours',
    'total_pages': 'totalPages',
    'total_books': 'totalBooks',
    'pages_per_hour': 'pagesPerHour',
    'avg_pages_per_book': 'avgPagesPerBook',
    'remaining_years_model': 'remainingYearsModel',
    'life_expectancy_label': 'lifeExpectancyLabel',
}

# Column names for tabular export
DATAFRAME_COLUMNS = {
    'goal_type': 'GoalType',
    'current_age': 'Age',
    'expected_age': 'ExpectedAge',
    'years_left': 'YearsLeft',
    'days_left': 'DaysLeft',
    'daily_minutes': 'DailyMinutes',
    'energy_factor': 'EnergyFactor',
    'total_readable_hours': 'TotalReadableHours',
    'total_pages': 'TotalPages',
    'total_books': 'TotalBooks',
    'pages_per_hour': 'PagesPerHour',
    'avg_pages_per_book': 'AvgPagesPerBook',
    'remaining_years_model': 'RemainingYearsModel',
    'life_expectancy_label': 'LifeExpectancyLabel',
}


def result_to_dict(result: LifetimeReadingResult, camel_case: bool = True) -> Dict[str, Any]:
    """Export a result as a plain dict (enum values flattened to strings)."""
    data = asdict(result)
    data['goal_type'] = result.goal_type.value
    if not camel_case:
        return data
    return {CAMEL_CASE_FIELDS[key]: value for key, value in data.items()}


def results_to_dataframe(results: Iterable[LifetimeReadingResult],
                         ids: Optional[List[str]] = None) -> pd.DataFrame:
    """One row per result, with an optional leading ID column."""
    rows = [
        {DATAFRAME_COLUMNS[key]: value for key, value in result_to_dict(r, camel_case=False).items()}
        for r in results
    ]
    df = pd.DataFrame(rows, columns=list(DATAFRAME_COLUMNS.values()))
    if ids is not None:
        df.insert(0, 'ID', ids)
    return df


def write_results(df: pd.DataFrame, filepath: Union[str, Path]) -> Path:
    """Write batch results to CSV or Excel, chosen by file extension."""
    path = Path(filepath)
    if path.suffix.lower() in ('.xlsx', '.xls'):
        df.to_excel(path, index=False, sheet_name='Reading Lifetime', engine='openpyxl')
    else:
        df.to_csv(path, index=False)
    logger.info(f"Wrote {len(df)} results to {path}")
    return path


def format_summary(result: LifetimeReadingResult) -> str:
    """Human-readable summary of a single projection."""
    lines = [
        "=" * 60,
        "LIFETIME READING ESTIMATE",
        "=" * 60,
        f"Life expectancy source:  {result.life_expectancy_label}",
        f"Current age:             {result.current_age:g}",
        f"Expected age:            {result.expected_age:.1f}",
        f"Years left:              {result.years_left:.1f}",
        f"Days left:               {result.days_left:,}",
        "",
        f"Daily reading:           {result.daily_minutes:.1f} min",
        f"Energy factor:           {result.energy_factor:.0%}",
        f"Readable hours:          {result.total_readable_hours:,.0f}",
        f"Pages:                   {result.total_pages:,.0f}",
        f"Books:                   {result.total_books:,} ({result.avg_pages_per_book:g} pages each)",
        "=" * 60,
    ]
    return "\n".join(lines)
