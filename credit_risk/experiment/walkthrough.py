"""
Credit Risk Walkthrough

Runs the comparison end to end:
1. Convert the CSV input to Parquet
2. Load the data and resolve the predictor columns
3. Seeded train/test split
4. Build the training calls (grids + ensemble)
5. Train all models in parallel
6. Score all models on the test set in parallel
7. Compare metrics and print the table
8. Select the best model by the primary metric
9. Serialize the best model
10. Write comparison, Excel report, ROC chart and run metadata
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional
import logging

import pandas as pd

from credit_risk.config.schema import WalkthroughConfig
from credit_risk.core.logger import log_step
from credit_risk.data.importer import import_csv, load_dataset, resolve_feature_columns
from credit_risk.data.splitter import DataSplit, split_train_test
from credit_risk.evaluation.evaluator import ModelEvaluator
from credit_risk.experiment.parallel import score_models, train_models
from credit_risk.experiment.specs import build_experiment_specs
from credit_risk.io.model_store import save_model
from credit_risk.io.output_manager import OutputManager
from credit_risk.models.base_model import BaseModel
from credit_risk.reporting.report_exporter import ReportExporter


logger = logging.getLogger(__name__)


@dataclass
class WalkthroughResult:
    """Everything a walkthrough run produced."""
    run_dir: Path
    split_summary: Dict[str, Any]
    comparison: pd.DataFrame
    best_model_name: str
    best_metrics: Dict[str, Any]
    model_path: Path
    models: Dict[str, BaseModel] = field(default_factory=dict)
    results: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    report_paths: Dict[str, str] = field(default_factory=dict)

    @property
    def best_model(self) -> BaseModel:
        return self.models[self.best_model_name]


class CreditRiskWalkthrough:
    """
    Linear train-score-compare run over a credit dataset.

    Args:
        config: Validated walkthrough configuration
        output_manager: Run directory manager (created from config if omitted)
    """

    def __init__(
        self,
        config: WalkthroughConfig,
        output_manager: Optional[OutputManager] = None,
    ):
        self.config = config
        self.output_manager = output_manager or OutputManager(config)
        self.evaluator = ModelEvaluator(config.evaluation.model_dump())

    def run(self) -> WalkthroughResult:
        """Execute every step and return the collected results."""
        cfg = self.config
        om = self.output_manager
        logger.info(f"Walkthrough run {om.run_id} -> {om.run_dir}")

        if cfg.reproducibility.save_config:
            om.save_config_snapshot()

        with log_step(logger, "Import and split data"):
            split = self._load_and_split()

        with log_step(logger, "Train models"):
            specs = build_experiment_specs(cfg.experiment)
            models = train_models(
                specs, split.X_train, split.y_train,
                random_state=cfg.reproducibility.global_seed,
                n_jobs=cfg.parallel.n_jobs,
                backend=cfg.parallel.backend,
            )

        with log_step(logger, "Score models"):
            scored = score_models(
                models, split.X_test, split.y_test,
                evaluation_config=cfg.evaluation.model_dump(),
                n_jobs=cfg.parallel.n_jobs,
                backend=cfg.parallel.backend,
            )

        # Parallel results come back as lists in request order
        models_by_name = {m.name: m for m in models}
        results = {r['model_name']: r for r in scored}

        comparison = self.evaluator.compare_models(results)
        logger.info("COMPARE | Test set comparison:\n%s", self.evaluator.format_comparison(comparison))

        best_name, best_result = self.evaluator.get_best_model(results)
        best_metrics = best_result['metrics']
        logger.info(
            f"COMPARE | Best model: {best_name} "
            f"({cfg.evaluation.primary_metric}={best_metrics[cfg.evaluation.primary_metric]:.4f})"
        )

        with log_step(logger, "Save models and reports"):
            model_path = save_model(
                models_by_name[best_name],
                str(om.get_model_path()),
                metadata={
                    'metrics': best_metrics,
                    'primary_metric': cfg.evaluation.primary_metric,
                    'threshold': cfg.evaluation.threshold,
                    'run_id': om.run_id,
                },
            )

            if cfg.output.save_all_models:
                for name, model in models_by_name.items():
                    if name != best_name:
                        save_model(model, str(om.get_model_path(f"{name}.joblib")),
                                   metadata={'metrics': results[name]['metrics']})

            report_paths = self._write_reports(comparison, results, best_name)

        om.mark_complete()
        if cfg.reproducibility.save_metadata:
            om.save_run_metadata(extra={
                'split': split.summary(),
                'n_models': len(models),
                'best_model': best_name,
                'model_path': str(model_path),
            })

        return WalkthroughResult(
            run_dir=om.run_dir,
            split_summary=split.summary(),
            comparison=comparison,
            best_model_name=best_name,
            best_metrics=best_metrics,
            model_path=model_path,
            models=models_by_name,
            results=results,
            report_paths=report_paths,
        )

    def _load_and_split(self) -> DataSplit:
        data_cfg = self.config.data
        split_cfg = self.config.splitting

        parquet_path = import_csv(
            data_cfg.csv_path,
            data_cfg.resolved_parquet_path,
            overwrite=data_cfg.overwrite_parquet,
            sep=data_cfg.csv_separator,
        )
        df = load_dataset(str(parquet_path))

        features = resolve_feature_columns(
            df,
            data_cfg.target_column,
            data_cfg.feature_columns,
            data_cfg.id_columns,
        )
        split = split_train_test(
            df,
            data_cfg.target_column,
            features,
            test_size=split_cfg.test_size,
            random_state=split_cfg.random_state,
            stratify=split_cfg.stratify,
            drop_missing=data_cfg.drop_missing,
        )

        summary = split.summary()
        logger.info(
            f"DATA | Train: {summary['train_rows']:,} rows (bad rate {summary['train_bad_rate']:.2%}), "
            f"Test: {summary['test_rows']:,} rows (bad rate {summary['test_bad_rate']:.2%})"
        )
        return split

    def _write_reports(
        self,
        comparison: pd.DataFrame,
        results: Dict[str, Dict[str, Any]],
        best_name: str,
    ) -> Dict[str, str]:
        out_cfg = self.config.output
        om = self.output_manager
        paths: Dict[str, str] = {}

        if out_cfg.save_comparison:
            paths['comparison'] = str(om.save_artifact(
                'model_comparison', self.evaluator.round_for_report(comparison), fmt='csv'
            ))

        if not (out_cfg.generate_excel or out_cfg.generate_roc_chart):
            return paths

        exporter = ReportExporter(output_dir=str(om.subdir('reports')))
        if out_cfg.generate_excel:
            paths['excel'] = exporter.export_excel(comparison, results, best_name)
        if out_cfg.generate_roc_chart:
            paths['roc_chart'] = exporter.plot_roc_curves(results)
            paths['confusion_chart'] = exporter.plot_confusion_matrix(results[best_name])

        return paths


def run_walkthrough(config: WalkthroughConfig) -> WalkthroughResult:
    """Convenience wrapper: run with a fresh output directory."""
    return CreditRiskWalkthrough(config).run()
