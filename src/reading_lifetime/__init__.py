"""
Reading Lifetime Estimator

Projects how many books a person can expect to read in their remaining
lifetime from age, reading habits and life-expectancy data by country,
gender and age band.

Version: 1.0.0

Author: Reading Lifetime Project
License: MIT
"""

__version__ = "1.0.0"
__author__ = "Reading Lifetime Project"

from .estimator import (
    ReadingLifetimeEstimator,
    ReadingGoalInput,
    LifetimeReadingResult,
    GoalType,
    Cadence,
    calculate_reading_lifetime,
    estimate,
    get_energy_factor,
    get_daily_minutes,
    build_life_expectancy_label,
    create_estimator,
)

from .life_expectancy import (
    LifeExpectancyTable,
    AgeBand,
    Gender,
    get_age_band,
    get_remaining_years,
)

from .table_loader import (
    LifeExpectancyDataError,
    load_life_expectancy_table,
    parse_life_expectancy_table,
)

from .config import (
    EstimatorConfig,
    ConfigurationError,
)

from .reporting import (
    result_to_dict,
    results_to_dataframe,
    format_summary,
)

__all__ = [
    # Estimator
    "ReadingLifetimeEstimator",
    "ReadingGoalInput",
    "LifetimeReadingResult",
    "GoalType",
    "Cadence",
    "calculate_reading_lifetime",
    "estimate",
    "get_energy_factor",
    "get_daily_minutes",
    "build_life_expectancy_label",
    "create_estimator",

    # Life expectancy
    "LifeExpectancyTable",
    "AgeBand",
    "Gender",
    "get_age_band",
    "get_remaining_years",

    # Loading
    "LifeExpectancyDataError",
    "load_life_expectancy_table",
    "parse_life_expectancy_table",

    # Configuration
    "EstimatorConfig",
    "ConfigurationError",

    # Reporting
    "result_to_dict",
    "results_to_dataframe",
    "format_summary",
]
