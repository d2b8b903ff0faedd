#!/usr/bin/env python3
"""
Sample Data Generator

Writes a synthetic credit-risk CSV for running the walkthrough locally.

Usage:
    python scripts/generate_sample_data.py --rows 5000 --output data/credit_risk.csv
"""

import sys
import argparse
from pathlib import Path

project_root = str(Path(__file__).resolve().parent.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from credit_risk.core.logger import setup_logging
from credit_risk.data.sample import RANDOM_SEED, write_sample_csv


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Generate synthetic credit-risk data',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument('--rows', type=int, default=5000, help='Number of accounts')
    parser.add_argument('--bad-rate', type=float, default=0.20, help='Approximate default rate')
    parser.add_argument('--missing-rate', type=float, default=0.0, help='Share of predictor cells left empty')
    parser.add_argument('--seed', type=int, default=RANDOM_SEED, help='Random seed')
    parser.add_argument('--output', default='data/credit_risk.csv', help='Output CSV path')
    args = parser.parse_args(argv)

    setup_logging()

    df = write_sample_csv(
        args.output,
        n_rows=args.rows,
        seed=args.seed,
        bad_rate=args.bad_rate,
        missing_rate=args.missing_rate,
    )

    print(f"\n{'='*60}")
    print(f"Accounts:  {len(df):,}")
    print(f"Bad rate:  {df['is_bad'].mean():.2%}")
    print(f"Columns:   {', '.join(df.columns)}")
    print(f"Output:    {args.output}")
    print(f"{'='*60}")


if __name__ == '__main__':
    main()
