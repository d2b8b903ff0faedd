#!/usr/bin/env python3
"""
Score new accounts with a saved model.

Usage:
    python scripts/score_model.py \
        --model outputs/walkthrough/<run_id>/models/best_model.joblib \
        --input data/new_accounts.csv \
        --output outputs/scores.csv
"""

import sys
import argparse
from pathlib import Path

project_root = str(Path(__file__).resolve().parent.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from credit_risk.core.logger import setup_logging
from credit_risk.io.model_store import read_model_metadata
from credit_risk.io.scoring import score_file


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description='Score accounts with a serialized credit risk model',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument('--model', required=True, help='Path to the .joblib model file')
    parser.add_argument('--input', required=True, help='CSV or Parquet file with accounts to score')
    parser.add_argument('--output', required=True, help='Destination CSV for the scores')
    parser.add_argument(
        '--threshold', type=float, default=None,
        help='Cut-off for the predicted label (defaults to the threshold stored with the model)',
    )
    parser.add_argument(
        '--id-columns', nargs='*', default=['account_id'],
        help='Identifier columns copied to the output',
    )
    parser.add_argument('--log-level', default='INFO')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(log_level=args.log_level)

    threshold = args.threshold
    if threshold is None:
        threshold = read_model_metadata(args.model).get('threshold', 0.5)

    out_path = score_file(
        model_path=args.model,
        input_path=args.input,
        output_path=args.output,
        threshold=threshold,
        id_columns=args.id_columns,
    )
    print(f"Scores written to: {out_path}")
    return out_path


if __name__ == '__main__':
    main()
