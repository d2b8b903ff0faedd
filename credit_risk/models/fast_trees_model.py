"""
Fast Trees Model

XGBoost boosted-tree classifier wrapper (the walkthrough's "fast-trees" learner).
"""

from typing import Any, Dict, Optional
import pandas as pd

import xgboost as xgb

from credit_risk.models.base_model import BaseModel


class FastTreesModel(BaseModel):
    """
    Gradient boosted trees for credit risk.

    Features:
    - XGBoost histogram tree method
    - Optional early stopping on a validation set
    - ``scale_pos_weight: auto`` balances classes from the training target
    - Gain-based feature importance
    """

    model_type = 'fast_trees'
    label = 'Fast trees'

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        name: Optional[str] = None
    ):
        super().__init__(config, name or "FastTreesModel")

    def default_params(self) -> Dict[str, Any]:
        return {
            'objective': 'binary:logistic',
            'eval_metric': 'auc',
            'tree_method': 'hist',
            'importance_type': 'gain',
            'max_depth': 6,
            'learning_rate': 0.1,
            'n_estimators': 100,
            'subsample': 0.8,
            'colsample_bytree': 0.8,
            'random_state': self._random_state(),
            'n_jobs': 1,
        }

    def build_estimator(self, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        XGBClassifier without the options that need the fit-time data.

        Early stopping requires an eval set and ``auto`` class balancing
        requires the target, neither of which is available to an estimator
        trained inside another meta-estimator.
        """
        params = dict(params if params is not None else self.params)
        params.pop('early_stopping_rounds', None)
        if params.get('scale_pos_weight') == 'auto':
            self.logger.warning("scale_pos_weight='auto' ignored outside a direct fit")
            params.pop('scale_pos_weight')
        return xgb.XGBClassifier(**params)

    def _fit(self, X, y, X_val, y_val) -> None:
        params = dict(self.params)

        if params.get('scale_pos_weight') == 'auto':
            neg_count = int((y == 0).sum())
            pos_count = int((y == 1).sum())
            params['scale_pos_weight'] = neg_count / max(pos_count, 1)
            self.logger.info(f"Auto scale_pos_weight: {params['scale_pos_weight']:.2f}")

        # Early stopping only when both a validation set and a round count are given
        early_stopping = (
            X_val is not None and y_val is not None
            and params.get('early_stopping_rounds')
        )
        if not early_stopping:
            params.pop('early_stopping_rounds', None)

        self.model = xgb.XGBClassifier(**params)
        if early_stopping:
            X_val = pd.DataFrame(X_val)[self.feature_names]
            self.model.fit(X, y, eval_set=[(X_val, pd.Series(y_val))], verbose=False)
            self.logger.info(f"Best iteration: {self.model.best_iteration}")
        else:
            self.model.fit(X, y)

        self.feature_importances_ = {
            name: float(value)
            for name, value in zip(self.feature_names, self.model.feature_importances_)
        }
