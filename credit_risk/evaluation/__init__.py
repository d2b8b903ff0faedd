"""
Evaluation Module

Provides model evaluation metrics and comparison for credit risk models.
"""

from credit_risk.evaluation.metrics import CreditRiskMetrics
from credit_risk.evaluation.evaluator import ModelEvaluator, COMPARISON_COLUMNS

__all__ = [
    "CreditRiskMetrics",
    "ModelEvaluator",
    "COMPARISON_COLUMNS",
]
