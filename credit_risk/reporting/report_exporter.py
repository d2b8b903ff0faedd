"""
Report Exporter

Writes the model comparison as an Excel workbook and PNG charts.
"""

from typing import Any, Dict, Optional
from pathlib import Path

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
import numpy as np
import pandas as pd
import seaborn as sns

from credit_risk.core.base import WalkthroughComponent
from credit_risk.evaluation.evaluator import ModelEvaluator


CHART_COLORS = {
    'primary': '#2E86AB',
    'secondary': '#A23B72',
    'reference': '#6C757D',
    'gradient': ['#2E86AB', '#A23B72', '#F18F01', '#C73E1D', '#3B1F2B', '#28A745', '#17A2B8'],
}


class ReportExporter(WalkthroughComponent):
    """
    Exports the comparison results.

    Output Formats:
    - Excel (.xlsx): comparison table, confusion matrices, best model lift
    - PNG: ROC curves of all models, confusion matrix heatmap of the best model
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        output_dir: Optional[str] = None,
        name: Optional[str] = None
    ):
        super().__init__(config, name or "ReportExporter")

        self.output_dir = Path(output_dir or self.get_config('output_dir', 'outputs/reports'))
        self.output_dir.mkdir(parents=True, exist_ok=True)

        self.dpi = self.get_config('dpi', 150)
        self.figsize = (8, 6)

    def run(
        self,
        comparison: pd.DataFrame,
        results: Dict[str, Dict[str, Any]],
        best_model_name: str,
    ) -> Dict[str, str]:
        """Generate the workbook and both charts."""
        return {
            'excel': self.export_excel(comparison, results, best_model_name),
            'roc_chart': self.plot_roc_curves(results),
            'confusion_chart': self.plot_confusion_matrix(results[best_model_name]),
        }

    # ═══════════════════════════════════════════════════════════════
    # EXCEL
    # ═══════════════════════════════════════════════════════════════

    def export_excel(
        self,
        comparison: pd.DataFrame,
        results: Dict[str, Dict[str, Any]],
        best_model_name: str,
        filename: str = "model_comparison.xlsx"
    ) -> str:
        """
        Write the comparison workbook.

        Sheets:
        - Comparison: one row per model, ranked by the primary metric
        - Confusion Matrices: tn/fp/fn/tp per model
        - Parameters: hyperparameters per model
        - Best Model Lift: decile lift table of the selected model

        Returns:
            Path to the workbook
        """
        filepath = self.output_dir / filename

        confusion_rows = []
        param_rows = []
        for name, result in results.items():
            cm = result['metrics']['confusion_matrix']
            confusion_rows.append({
                'model': name,
                'true_negative': cm['tn'],
                'false_positive': cm['fp'],
                'false_negative': cm['fn'],
                'true_positive': cm['tp'],
                'threshold': result['metrics']['threshold'],
            })
            param_rows.append({
                'model': name,
                'algorithm': result.get('model_type'),
                'params': str(result.get('params', {})),
            })

        with pd.ExcelWriter(filepath, engine='openpyxl') as writer:
            ModelEvaluator.round_for_report(comparison).to_excel(
                writer, sheet_name='Comparison', index=False
            )
            pd.DataFrame(confusion_rows).to_excel(writer, sheet_name='Confusion Matrices', index=False)
            pd.DataFrame(param_rows).to_excel(writer, sheet_name='Parameters', index=False)

            lift = results[best_model_name].get('lift_table')
            if lift is not None:
                lift.to_excel(writer, sheet_name='Best Model Lift', index=False)

        self.logger.info(f"Generated: {filepath}")
        return str(filepath)

    # ═══════════════════════════════════════════════════════════════
    # CHARTS
    # ═══════════════════════════════════════════════════════════════

    def _save_chart(self, fig: Figure, filename: str) -> str:
        """Save a chart as PNG and release the figure."""
        path = self.output_dir / filename
        fig.savefig(path, format='png', bbox_inches='tight', dpi=self.dpi)
        plt.close(fig)
        self.logger.info(f"Generated chart: {path.name}")
        return str(path)

    def plot_roc_curves(
        self,
        results: Dict[str, Dict[str, Any]],
        filename: str = "roc_curves.png"
    ) -> str:
        """ROC curve of every model on one chart, with AUC in the legend."""
        fig, ax = plt.subplots(figsize=self.figsize)
        colors = CHART_COLORS['gradient']

        for i, (name, result) in enumerate(results.items()):
            roc = result['roc']
            ax.plot(
                roc['fpr'], roc['tpr'],
                color=colors[i % len(colors)],
                linewidth=1.5,
                label=f"{name} (AUC={result['metrics']['auc']:.3f})",
            )

        ax.plot([0, 1], [0, 1], linestyle='--', color=CHART_COLORS['reference'], linewidth=1)
        ax.set_xlim(0, 1)
        ax.set_ylim(0, 1.02)
        ax.set_xlabel('False Positive Rate')
        ax.set_ylabel('True Positive Rate')
        ax.set_title('ROC Curves (test set)', fontweight='bold')
        ax.legend(loc='lower right', fontsize=8)

        return self._save_chart(fig, filename)

    def plot_confusion_matrix(
        self,
        result: Dict[str, Any],
        filename: str = "best_model_confusion_matrix.png"
    ) -> str:
        """Heatmap of a single model's confusion matrix."""
        cm = result['metrics']['confusion_matrix']
        matrix = np.array([[cm['tn'], cm['fp']], [cm['fn'], cm['tp']]])

        fig, ax = plt.subplots(figsize=(5, 4))
        sns.heatmap(
            matrix, annot=True, fmt='d', cmap='Blues', cbar=False, ax=ax,
            xticklabels=['Good (0)', 'Bad (1)'],
            yticklabels=['Good (0)', 'Bad (1)'],
        )
        ax.set_xlabel('Predicted')
        ax.set_ylabel('Actual')
        ax.set_title(f"{result['model_name']} @ {result['metrics']['threshold']}", fontweight='bold')

        return self._save_chart(fig, filename)
