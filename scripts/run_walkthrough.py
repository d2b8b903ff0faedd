#!/usr/bin/env python3
"""
Credit Risk Walkthrough CLI

Usage:
    # Run with YAML config (recommended):
    python scripts/run_walkthrough.py --config config/walkthrough.yaml

    # Override specific settings via CLI:
    python scripts/run_walkthrough.py \
        --config config/walkthrough.yaml \
        --csv data/credit_risk.csv \
        --n-jobs 4 --primary-metric ks_statistic
"""

import sys
import argparse
from pathlib import Path

# Add project root to path
project_root = str(Path(__file__).resolve().parent.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from credit_risk.config.loader import load_config
from credit_risk.core.logger import setup_logging
from credit_risk.evaluation.evaluator import ModelEvaluator
from credit_risk.experiment.walkthrough import CreditRiskWalkthrough
from credit_risk.io.output_manager import OutputManager


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description='Credit Risk Model Comparison Walkthrough',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        '--config', default=None,
        help='Path to YAML config file (e.g., config/walkthrough.yaml)',
    )

    # Data overrides
    parser.add_argument(
        '--csv', default=None,
        help='Path to the input CSV file (overrides config)',
    )
    parser.add_argument(
        '--target', default=None,
        help='Name of the binary target column',
    )
    parser.add_argument(
        '--output-dir', default=None,
        help='Base directory for run outputs',
    )

    # Split / run overrides
    parser.add_argument(
        '--test-size', type=float, default=None,
        help='Fraction of rows held out for testing',
    )
    parser.add_argument(
        '--seed', type=int, default=None,
        help='Random seed for the split and the models',
    )
    parser.add_argument(
        '--n-jobs', type=int, default=None,
        help='Parallel workers for training/scoring (-1 = all cores)',
    )
    parser.add_argument(
        '--primary-metric', default=None,
        choices=['auc', 'gini', 'ks_statistic', 'accuracy', 'precision', 'recall', 'f1_score'],
        help='Metric used to rank models and pick the best one',
    )

    return parser.parse_args(argv)


def _build_cli_overrides(args) -> dict:
    """Build a flat dot-notation override dict from CLI args."""
    overrides = {}

    if args.csv is not None:
        overrides["data.csv_path"] = args.csv
    if args.target is not None:
        overrides["data.target_column"] = args.target
    if args.output_dir is not None:
        overrides["output.base_dir"] = args.output_dir
    if args.test_size is not None:
        overrides["splitting.test_size"] = args.test_size
    if args.seed is not None:
        overrides["splitting.random_state"] = args.seed
        overrides["reproducibility.global_seed"] = args.seed
    if args.n_jobs is not None:
        overrides["parallel.n_jobs"] = args.n_jobs
    if args.primary_metric is not None:
        overrides["evaluation.primary_metric"] = args.primary_metric

    return overrides


def main(argv=None):
    args = parse_args(argv)

    # Load config: YAML + CLI overrides
    config = load_config(yaml_path=args.config, cli_overrides=_build_cli_overrides(args))

    output_manager = OutputManager(config)
    setup_logging(
        log_level=config.reproducibility.log_level,
        log_file=str(output_manager.get_log_path()),
    )

    try:
        result = CreditRiskWalkthrough(config, output_manager).run()
    except Exception:
        output_manager.mark_failed()
        if config.reproducibility.save_metadata:
            output_manager.save_run_metadata()
        raise

    print(f"\n{'='*60}")
    print("Model comparison (test set)")
    print(f"{'='*60}")
    print(ModelEvaluator.format_comparison(result.comparison))
    print(f"\nBest model: {result.best_model_name} "
          f"({config.evaluation.primary_metric}={result.best_metrics[config.evaluation.primary_metric]:.4f})")
    print(f"Model file: {result.model_path}")
    for name, path in result.report_paths.items():
        print(f"Report ({name}): {path}")
    print(f"Run directory: {result.run_dir}")
    print(f"Log file: {output_manager.get_log_path()}")
    print(f"{'='*60}")

    return result


if __name__ == '__main__':
    main()
