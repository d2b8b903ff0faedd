"""
Model Evaluator

Scores models on the test set and compares their metrics.
"""

from typing import Any, Dict, List, Optional, Tuple
import pandas as pd
from datetime import datetime

from credit_risk.core.base import WalkthroughComponent
from credit_risk.core.exceptions import EvaluationError
from credit_risk.models.base_model import BaseModel
from credit_risk.evaluation.metrics import CreditRiskMetrics


REPORT_DECIMALS = 4

COMPARISON_COLUMNS = [
    'auc', 'gini', 'ks_statistic', 'accuracy', 'precision', 'recall', 'f1_score'
]


class ModelEvaluator(WalkthroughComponent):
    """
    Evaluates models and compares performance.

    Features:
    - Evaluate single models
    - Compare multiple models
    - Generate comparison tables
    - Track evaluation history

    Configuration keys:
        threshold: Classification cut-off on the default probability
        primary_metric: Metric used for sorting and best-model selection
        n_deciles: Number of lift table bins
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        name: Optional[str] = None
    ):
        super().__init__(config, name or "ModelEvaluator")

        self.threshold = self.get_config('threshold', 0.5)
        self.primary_metric = self.get_config('primary_metric', 'auc')
        self.n_deciles = self.get_config('n_deciles', 10)
        self.evaluation_history: List[Dict[str, Any]] = []

    def validate(self) -> bool:
        return self.primary_metric in COMPARISON_COLUMNS and 0 < self.threshold < 1

    def run(
        self,
        model: BaseModel,
        X: pd.DataFrame,
        y: pd.Series
    ) -> Dict[str, Any]:
        """Run evaluation."""
        return self.evaluate(model, X, y)

    def evaluate(
        self,
        model: BaseModel,
        X: pd.DataFrame,
        y: pd.Series,
        dataset_name: str = 'test'
    ) -> Dict[str, Any]:
        """
        Evaluate a single model.

        Args:
            model: Fitted model
            X: Features
            y: True labels
            dataset_name: Name for this dataset (train, test)

        Returns:
            Dictionary with metrics, ROC points and lift table
        """
        y_true = pd.Series(y).astype(int).values
        y_score = model.predict_proba(X)

        metrics = CreditRiskMetrics.calculate_all_metrics(
            y_true, y_score, threshold=self.threshold
        )

        result = {
            'model_name': model.name,
            'model_type': model.model_type,
            'params': model.get_params(),
            'dataset': dataset_name,
            'timestamp': datetime.now().isoformat(),
            'sample_size': len(y_true),
            'positive_ratio': float(y_true.mean()),
            'fit_seconds': model.timings.get('fit'),
            'metrics': metrics,
            'roc': CreditRiskMetrics.roc_points(y_true, y_score),
            'lift_table': CreditRiskMetrics.lift_table(y_true, y_score, self.n_deciles),
        }

        self.evaluation_history.append(result)

        self.logger.info(
            f"{model.name} on {dataset_name}: "
            f"AUC={metrics['auc']:.4f}, Accuracy={metrics['accuracy']:.4f}, "
            f"Precision={metrics['precision']:.4f}, Recall={metrics['recall']:.4f}"
        )

        return result

    def evaluate_multiple(
        self,
        models: Dict[str, BaseModel],
        X: pd.DataFrame,
        y: pd.Series,
        dataset_name: str = 'test'
    ) -> Dict[str, Dict[str, Any]]:
        """
        Evaluate multiple models sequentially.

        Args:
            models: Dictionary of model name to model
            X: Features
            y: True labels
            dataset_name: Dataset name

        Returns:
            Dictionary of model name to evaluation results
        """
        return {
            name: self.evaluate(model, X, y, dataset_name)
            for name, model in models.items()
        }

    def compare_models(
        self,
        results: Dict[str, Dict[str, Any]]
    ) -> pd.DataFrame:
        """
        Compare model evaluation results.

        Args:
            results: Dictionary of model name to evaluation results

        Returns:
            Comparison DataFrame sorted by the primary metric, best first.
            Ties keep the order of ``results``.
        """
        if not results:
            raise EvaluationError("No evaluation results to compare")

        comparison = []
        for model_name, result in results.items():
            metrics = result['metrics']
            cm = metrics['confusion_matrix']
            row = {
                'model': model_name,
                'algorithm': result.get('model_type'),
                'dataset': result['dataset'],
            }
            row.update({col: metrics[col] for col in COMPARISON_COLUMNS})
            row.update({'tp': cm['tp'], 'fp': cm['fp'], 'tn': cm['tn'], 'fn': cm['fn']})
            row['fit_seconds'] = result.get('fit_seconds')
            comparison.append(row)

        df = pd.DataFrame(comparison)

        if self.primary_metric in df.columns:
            df = df.sort_values(
                self.primary_metric, ascending=False, kind='mergesort'
            ).reset_index(drop=True)

        df.insert(0, 'rank', range(1, len(df) + 1))
        return df

    def get_best_model(
        self,
        results: Dict[str, Dict[str, Any]],
        metric: Optional[str] = None
    ) -> Tuple[str, Dict[str, Any]]:
        """
        Get the best performing model.

        Args:
            results: Evaluation results
            metric: Metric to use for comparison (defaults to primary_metric)

        Returns:
            Tuple of (best model name, its results). The first model wins a tie.
        """
        metric = metric or self.primary_metric

        if metric not in COMPARISON_COLUMNS:
            raise EvaluationError(
                f"Unknown comparison metric: {metric}. Available: {COMPARISON_COLUMNS}",
                metric_name=metric,
            )
        if not results:
            raise EvaluationError("No evaluation results to compare", metric_name=metric)

        best_name = None
        best_score = None
        for name, result in results.items():
            score = result['metrics'][metric]
            if best_score is None or score > best_score:
                best_score = score
                best_name = name

        self.logger.info(f"Best model: {best_name} with {metric}={best_score:.4f}")

        return best_name, results[best_name]

    @staticmethod
    def format_comparison(comparison: pd.DataFrame) -> str:
        """Render the comparison table as fixed-width text for the console."""
        columns = [c for c in ['rank', 'model'] + COMPARISON_COLUMNS if c in comparison.columns]
        return comparison[columns].to_string(index=False, float_format=lambda v: f"{v:.4f}")

    @staticmethod
    def round_for_report(comparison: pd.DataFrame, decimals: int = REPORT_DECIMALS) -> pd.DataFrame:
        """Copy of the comparison with metric columns rounded for CSV and Excel output."""
        return comparison.round({c: decimals for c in COMPARISON_COLUMNS if c in comparison.columns})
