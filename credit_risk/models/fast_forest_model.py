"""
Fast Forest Model

Random forest classifier wrapper (the walkthrough's "fast-forest" learner).
"""

from typing import Any, Dict, Optional

from sklearn.ensemble import RandomForestClassifier

from credit_risk.models.base_model import BaseModel


class FastForestModel(BaseModel):
    """
    Random forest classifier for credit risk.

    Single-threaded by default: the walkthrough already fans out whole
    training calls across worker processes.
    """

    model_type = 'fast_forest'
    label = 'Fast forest'

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        name: Optional[str] = None
    ):
        super().__init__(config, name or "FastForestModel")

    def default_params(self) -> Dict[str, Any]:
        return {
            'n_estimators': 100,
            'max_depth': None,
            'min_samples_leaf': 1,
            'max_features': 'sqrt',
            'class_weight': 'balanced_subsample',
            'random_state': self._random_state(),
            'n_jobs': 1,
        }

    def build_estimator(self, params: Optional[Dict[str, Any]] = None) -> Any:
        return RandomForestClassifier(**(params if params is not None else self.params))

    def _fit(self, X, y, X_val, y_val) -> None:
        self.model = self.build_estimator()
        self.model.fit(X, y)

        self.feature_importances_ = dict(zip(
            self.feature_names,
            self.model.feature_importances_.tolist()
        ))
        self.logger.debug(f"{self.params['n_estimators']} trees grown")
