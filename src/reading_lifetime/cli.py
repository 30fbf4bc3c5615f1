"""
reading_lifetime/cli.py - Command-Line Runner

Usage:
    reading-lifetime --age 30 --minutes 30 --cadence daily \\
        --pages-per-hour 40 --avg-pages-per-book 300 --country us --gender female

    reading-lifetime --input people.csv --output results.xlsx

Author: Reading Lifetime Project
License: MIT
"""

import argparse
import json
import sys
import logging
from pathlib import Path
from typing import List, Optional

import pandas as pd

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='reading-lifetime',
        description='Estimate how many books you can read in your lifetime',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Single estimate
  reading-lifetime --age 30 --minutes 30 --cadence daily \\
      --pages-per-hour 40 --avg-pages-per-book 300

  # Weekly reading, country and gender specific
  reading-lifetime --age 45 --minutes 140 --cadence weekly \\
      --pages-per-hour 35 --avg-pages-per-book 320 --country DE --gender male

  # Batch mode
  reading-lifetime --input people.csv --output results.xlsx
"""
    )

    parser.add_argument('--age', type=float, help='Current age in years')
    parser.add_argument('--minutes', type=float, help='Reading minutes per cadence period')
    parser.add_argument('--cadence', choices=['daily', 'weekly'], default='daily',
                        help='Whether minutes are per day or per week')
    parser.add_argument('--pages-per-hour', type=float, help='Reading speed')
    parser.add_argument('--avg-pages-per-book', type=float, help='Average book length')
    parser.add_argument('--country', type=str, help='Country code (e.g., US)')
    parser.add_argument('--gender', choices=['male', 'female', 'all'], help='Gender selector')
    parser.add_argument('--expected-age', type=float, help='Fixed expected age instead of the table')

    parser.add_argument('--input', type=str, help='Batch input file (CSV or Excel)')
    parser.add_argument('--output', type=str, help='Batch output file (CSV or Excel)')

    parser.add_argument('--table', type=str, help='Life expectancy dataset (JSON)')
    parser.add_argument('--config', type=str, help='Estimator configuration (JSON)')
    parser.add_argument('--json', action='store_true', help='Print the result as JSON')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    return parser


def read_people(filepath: str) -> pd.DataFrame:
    """Load a batch input file."""
    if filepath.lower().endswith('.csv'):
        return pd.read_csv(filepath)
    return pd.read_excel(filepath, engine='openpyxl')


def run_single(args: argparse.Namespace, estimator) -> int:
    from .estimator import GoalType, ReadingGoalInput
    from .reporting import format_summary, result_to_dict

    required = ['age', 'minutes', 'pages_per_hour', 'avg_pages_per_book']
    missing = [name for name in required if getattr(args, name) is None]
    if missing:
        print(f"ERROR: Missing required arguments: {', '.join('--' + m.replace('_', '-') for m in missing)}")
        print("Use --input for batch mode or --help for usage.")
        return 1

    goal = ReadingGoalInput(
        current_age=args.age,
        minutes=args.minutes,
        cadence=args.cadence,
        pages_per_hour=args.pages_per_hour,
        avg_pages_per_book=args.avg_pages_per_book,
        goal_type=GoalType.READING,
        country_code=args.country,
        gender=args.gender,
    )
    result = estimator.estimate(goal)

    if args.json:
        print(json.dumps(result_to_dict(result), indent=2, ensure_ascii=False))
    else:
        print(format_summary(result))
    return 0


def run_batch(args: argparse.Namespace, estimator) -> int:
    from .reporting import write_results

    try:
        people = read_people(args.input)
    except (OSError, ValueError) as e:
        print(f"ERROR: Cannot read input {args.input}: {e}")
        return 1

    missing = [c for c in ['Age', 'Minutes', 'PagesPerHour', 'AvgPagesPerBook'] if c not in people.columns]
    if missing:
        print(f"ERROR: Input missing required columns: {missing}")
        return 1

    try:
        results = estimator.run_batch(people)
    except ValueError as e:
        print(f"ERROR: Invalid input row: {e}")
        return 1

    if args.output:
        write_results(results, args.output)
        print(f"Wrote {len(results)} estimates to {Path(args.output)}")
    elif args.json:
        print(results.to_json(orient='records', indent=2, force_ascii=False))
    else:
        print(results.to_string(index=False))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    from .config import ConfigurationError, EstimatorConfig
    from .estimator import create_estimator
    from .table_loader import LifeExpectancyDataError

    try:
        config = EstimatorConfig.from_file(args.config) if args.config else EstimatorConfig()
        config = config.with_overrides(table_path=args.table, expected_age=args.expected_age)
        estimator = create_estimator(config)
    except (ConfigurationError, LifeExpectancyDataError) as e:
        print(f"ERROR: {e}")
        return 1

    if args.input:
        return run_batch(args, estimator)
    return run_single(args, estimator)


if __name__ == '__main__':
    sys.exit(main())
