"""
Logistic Regression Model

Logistic Regression classifier wrapper with feature scaling.
"""

from typing import Any, Dict, Optional
import numpy as np
import pandas as pd

from sklearn.linear_model import LogisticRegression
from sklearn.pipeline import make_pipeline
from sklearn.preprocessing import StandardScaler

from credit_risk.models.base_model import BaseModel


# Penalties each solver accepts
SOLVER_PENALTIES = {
    'lbfgs': ['l2', None],
    'liblinear': ['l1', 'l2'],
    'saga': ['l1', 'l2', 'elasticnet', None],
    'newton-cg': ['l2', None],
    'newton-cholesky': ['l2', None],
    'sag': ['l2', None]
}


class LogisticRegressionModel(BaseModel):
    """
    Logistic Regression classifier for credit risk.

    Features:
    - Sklearn LogisticRegression with regularization
    - Automatic feature scaling
    - Class weight balancing
    - Coefficient-based feature importance
    """

    model_type = 'logistic_regression'
    label = 'Logistic Regression'

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        name: Optional[str] = None
    ):
        super().__init__(config, name or "LogisticRegressionModel")
        self.scaler = StandardScaler()
        self._coefficients: Dict[str, float] = {}

    def default_params(self) -> Dict[str, Any]:
        return {
            'max_iter': 1000,
            'solver': 'lbfgs',
            'class_weight': 'balanced',
            'C': 1.0,
            'random_state': self._random_state(),
        }

    def build_estimator(self, params: Optional[Dict[str, Any]] = None) -> Any:
        """Scaler + LogisticRegression pipeline, as used inside the ensemble."""
        params = self._validate_params(dict(params if params is not None else self.params))
        return make_pipeline(StandardScaler(), LogisticRegression(**params))

    def _fit(self, X, y, X_val, y_val) -> None:
        # Validation data is not used; the scaler is fitted on train only
        self.scaler = StandardScaler()
        self.model = LogisticRegression(**self._validate_params(dict(self.params)))
        self.model.fit(self.scaler.fit_transform(X), y)

        coefficients = self.model.coef_[0]
        self._coefficients = dict(zip(self.feature_names, coefficients.tolist()))
        self.feature_importances_ = {
            name: abs(value) for name, value in self._coefficients.items()
        }

    def predict(self, X: pd.DataFrame) -> np.ndarray:
        self._check_fitted()
        X, _ = self._validate_input(X)
        return self.model.predict(self.scaler.transform(X))

    def predict_proba(self, X: pd.DataFrame) -> np.ndarray:
        self._check_fitted()
        X, _ = self._validate_input(X)
        return self.model.predict_proba(self.scaler.transform(X))[:, 1]

    def _validate_params(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """
        Fix solver/penalty combinations the solver rejects.

        Args:
            params: Parameter dictionary

        Returns:
            Fixed parameters
        """
        solver = params.get('solver', 'lbfgs')

        if 'penalty' in params and solver in SOLVER_PENALTIES:
            valid_penalties = SOLVER_PENALTIES[solver]
            if params['penalty'] not in valid_penalties:
                new_penalty = valid_penalties[0]
                self.logger.warning(
                    f"Penalty '{params['penalty']}' not compatible with solver '{solver}'. "
                    f"Using '{new_penalty}'"
                )
                params['penalty'] = new_penalty

        if params.get('penalty') != 'elasticnet' and 'l1_ratio' in params:
            del params['l1_ratio']

        return params

    def get_coefficients(self) -> Dict[str, float]:
        """
        Get model coefficients (signed, on the scaled features).

        Returns:
            Dictionary of feature name to coefficient
        """
        return dict(self._coefficients)

    def _artifact_extras(self) -> Dict[str, Any]:
        return {'scaler': self.scaler, 'coefficients': self._coefficients}

    def _restore_extras(self, extras: Dict[str, Any]) -> None:
        self.scaler = extras['scaler']
        self._coefficients = extras.get('coefficients', {})
