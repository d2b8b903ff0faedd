"""
Credit Risk Metrics

Classification and credit-specific metrics computed from true labels and
predicted default probabilities.
"""

from typing import Any, Dict, Tuple
import numpy as np
import pandas as pd

from sklearn.metrics import roc_auc_score, roc_curve, confusion_matrix, log_loss

from credit_risk.core.exceptions import EvaluationError


class CreditRiskMetrics:
    """
    Credit risk metrics.

    Includes:
    - Confusion matrix with accuracy, precision, recall and F1
    - AUC, Gini coefficient and KS statistic
    - ROC curve points
    - Decile lift table
    """

    @staticmethod
    def _check_both_classes(y_true: np.ndarray, metric_name: str) -> None:
        if len(np.unique(y_true)) < 2:
            raise EvaluationError(
                f"{metric_name} is undefined when only one class is present",
                metric_name=metric_name,
            )

    @staticmethod
    def confusion_counts(y_true: np.ndarray, y_pred: np.ndarray) -> Dict[str, int]:
        """
        Confusion matrix cells for the positive (default) class.

        Args:
            y_true: True labels
            y_pred: Predicted labels

        Returns:
            Dict with tn, fp, fn, tp
        """
        cm = confusion_matrix(y_true, y_pred, labels=[0, 1])
        tn, fp, fn, tp = cm.ravel()
        return {'tn': int(tn), 'fp': int(fp), 'fn': int(fn), 'tp': int(tp)}

    @staticmethod
    def classification_metrics(counts: Dict[str, int]) -> Dict[str, float]:
        """
        Accuracy, precision, recall and F1 derived from confusion counts.

        Precision and recall are 0 when their denominator is 0.
        """
        tn, fp, fn, tp = counts['tn'], counts['fp'], counts['fn'], counts['tp']
        total = tn + fp + fn + tp

        accuracy = (tp + tn) / total if total > 0 else 0.0
        precision = tp / (tp + fp) if (tp + fp) > 0 else 0.0
        recall = tp / (tp + fn) if (tp + fn) > 0 else 0.0
        f1 = 2 * precision * recall / (precision + recall) if (precision + recall) > 0 else 0.0

        return {
            'accuracy': float(accuracy),
            'precision': float(precision),
            'recall': float(recall),
            'f1_score': float(f1),
        }

    @staticmethod
    def auc(y_true: np.ndarray, y_score: np.ndarray) -> float:
        """Area under the ROC curve."""
        CreditRiskMetrics._check_both_classes(y_true, 'auc')
        return float(roc_auc_score(y_true, y_score))

    @staticmethod
    def gini_coefficient(y_true: np.ndarray, y_score: np.ndarray) -> float:
        """
        Calculate Gini coefficient.

        Gini = 2 * AUC - 1

        Args:
            y_true: True labels
            y_score: Predicted probabilities

        Returns:
            Gini coefficient (-1 to 1, higher is better)
        """
        return 2 * CreditRiskMetrics.auc(y_true, y_score) - 1

    @staticmethod
    def ks_statistic(y_true: np.ndarray, y_score: np.ndarray) -> Tuple[float, float]:
        """
        Calculate Kolmogorov-Smirnov statistic.

        Maximum separation between the cumulative score distributions of
        bads and goods, evaluated only at distinct score values so tied
        scores are never split.

        Args:
            y_true: True labels
            y_score: Predicted probabilities

        Returns:
            Tuple of (KS statistic, threshold at max separation)
        """
        CreditRiskMetrics._check_both_classes(y_true, 'ks_statistic')

        fpr, tpr, thresholds = roc_curve(y_true, y_score, drop_intermediate=False)
        # First point is the "nothing predicted bad" threshold above every score
        separation = np.abs(tpr[1:] - fpr[1:])
        best = int(np.argmax(separation))
        return float(separation[best]), float(thresholds[1:][best])

    @staticmethod
    def roc_points(y_true: np.ndarray, y_score: np.ndarray) -> pd.DataFrame:
        """
        ROC curve as a DataFrame with fpr, tpr and threshold columns.
        """
        CreditRiskMetrics._check_both_classes(y_true, 'roc')
        fpr, tpr, thresholds = roc_curve(y_true, y_score)
        return pd.DataFrame({'fpr': fpr, 'tpr': tpr, 'threshold': thresholds})

    @staticmethod
    def lift_table(
        y_true: np.ndarray,
        y_score: np.ndarray,
        n_deciles: int = 10
    ) -> pd.DataFrame:
        """
        Create decile lift table.

        Args:
            y_true: True labels
            y_score: Predicted probabilities
            n_deciles: Number of deciles (default 10)

        Returns:
            DataFrame with lift analysis by decile, highest risk first
        """
        df = pd.DataFrame({
            'score': np.asarray(y_score, dtype=float),
            'target': np.asarray(y_true, dtype=int)
        })

        # Rank first so ties do not collapse bins; decile 1 = highest risk
        ranks = df['score'].rank(method='first', ascending=False)
        df['decile'] = pd.qcut(ranks, q=min(n_deciles, len(df)), labels=False) + 1

        lift_table = df.groupby('decile').agg(
            score_min=('score', 'min'),
            score_max=('score', 'max'),
            score_mean=('score', 'mean'),
            count=('target', 'count'),
            bads=('target', 'sum'),
            bad_rate=('target', 'mean'),
        )

        overall_bad_rate = df['target'].mean()
        total_bads = df['target'].sum()

        lift_table['lift'] = (
            lift_table['bad_rate'] / overall_bad_rate if overall_bad_rate > 0 else 0.0
        )
        lift_table['cum_count'] = lift_table['count'].cumsum()
        lift_table['cum_bads'] = lift_table['bads'].cumsum()
        lift_table['cum_bad_rate'] = lift_table['cum_bads'] / lift_table['cum_count']
        lift_table['cum_lift'] = (
            lift_table['cum_bad_rate'] / overall_bad_rate if overall_bad_rate > 0 else 0.0
        )
        lift_table['capture_rate'] = (
            lift_table['cum_bads'] / total_bads if total_bads > 0 else 0.0
        )

        return lift_table.round(4).reset_index()

    @staticmethod
    def calculate_all_metrics(
        y_true: np.ndarray,
        y_score: np.ndarray,
        threshold: float = 0.5
    ) -> Dict[str, Any]:
        """
        Calculate all comparison metrics.

        Args:
            y_true: True labels
            y_score: Predicted probabilities
            threshold: Probability at or above which an account is predicted bad

        Returns:
            Dictionary of all metrics
        """
        y_true = np.asarray(y_true, dtype=int)
        y_score = np.asarray(y_score, dtype=float)
        y_pred = (y_score >= threshold).astype(int)

        auc = CreditRiskMetrics.auc(y_true, y_score)
        ks_stat, ks_threshold = CreditRiskMetrics.ks_statistic(y_true, y_score)

        counts = CreditRiskMetrics.confusion_counts(y_true, y_pred)
        derived = CreditRiskMetrics.classification_metrics(counts)

        try:
            logloss = float(log_loss(y_true, np.clip(y_score, 1e-15, 1 - 1e-15)))
        except ValueError:
            logloss = None

        # Unrounded so model ranking never ties on display precision
        return {
            'auc': auc,
            'gini': 2 * auc - 1,
            'ks_statistic': ks_stat,
            'ks_threshold': ks_threshold,
            'accuracy': derived['accuracy'],
            'precision': derived['precision'],
            'recall': derived['recall'],
            'f1_score': derived['f1_score'],
            'log_loss': logloss,
            'threshold': threshold,
            'confusion_matrix': counts,
        }
