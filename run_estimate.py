#!/usr/bin/env python3
"""
run_estimate.py - Lifetime Reading Estimate Runner

Usage:
    python run_estimate.py --age 30 --minutes 30 --cadence daily \\
        --pages-per-hour 40 --avg-pages-per-book 300

    python run_estimate.py --input people.csv --output results.xlsx

Author: Reading Lifetime Project
"""

import sys

from reading_lifetime.cli import main


if __name__ == '__main__':
    sys.exit(main())
