"""
Base Model

Abstract base class for all credit risk classifiers.
"""

from abc import abstractmethod
from typing import Any, Dict, List, Optional, Tuple
import numpy as np
import pandas as pd

import joblib

from credit_risk.core.base import WalkthroughComponent
from credit_risk.core.exceptions import ArtifactError, ModelTrainingError


class BaseModel(WalkthroughComponent):
    """
    Abstract base class for ML models.

    All models (logistic regression, fast-forest, fast-trees, ensemble)
    inherit from this class. Provides consistent interface for training,
    prediction and persistence.

    Configuration keys:
        params: Hyperparameters merged over the model's defaults
        random_state: Seed used when ``params`` does not set one
    """

    model_type: str = 'base'
    label: str = 'Model'

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        name: Optional[str] = None
    ):
        """
        Initialize the model.

        Args:
            config: Model configuration dictionary
            name: Optional model name
        """
        super().__init__(config, name)
        self.model = None
        self.is_fitted = False
        self.feature_names: List[str] = []
        self.feature_importances_: Optional[Dict[str, float]] = None

        self.params = self.default_params()
        self.params.update(self.get_config('params', {}) or {})

    @abstractmethod
    def default_params(self) -> Dict[str, Any]:
        """Library defaults used by this walkthrough."""
        pass

    @abstractmethod
    def build_estimator(self, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Create the unfitted library estimator.

        Args:
            params: Parameters to use instead of ``self.params``

        Returns:
            A scikit-learn compatible classifier
        """
        pass

    @abstractmethod
    def _fit(
        self,
        X: pd.DataFrame,
        y: pd.Series,
        X_val: Optional[pd.DataFrame],
        y_val: Optional[pd.Series]
    ) -> None:
        """Train ``self.model`` on validated input and set ``feature_importances_``."""

    def fit(
        self,
        X: pd.DataFrame,
        y: pd.Series,
        X_val: Optional[pd.DataFrame] = None,
        y_val: Optional[pd.Series] = None
    ) -> 'BaseModel':
        """
        Fit the model to training data.

        Any failure is re-raised as ModelTrainingError and leaves the model
        unfitted.

        Args:
            X: Training features
            y: Training target
            X_val: Optional validation features (used by fast-trees early stopping)
            y_val: Optional validation target

        Returns:
            Self
        """
        self.is_fitted = False
        try:
            with self.timed('fit'):
                X, y = self._validate_input(X, y)
                self._fit(X, y, X_val, y_val)
        except Exception as e:
            raise ModelTrainingError(
                f"{self.label} training failed: {e}",
                model_name=self.name,
                cause=e
            ) from e

        self.is_fitted = True
        self.logger.info(
            f"TRAIN | {self.name}: fitted on {len(X):,} rows in {self.timings['fit']:.2f}s"
        )
        return self

    def predict(self, X: pd.DataFrame) -> np.ndarray:
        """
        Generate class predictions.

        Args:
            X: Features to predict

        Returns:
            Predicted classes
        """
        self._check_fitted()
        X, _ = self._validate_input(X)
        return np.asarray(self.model.predict(X))

    def predict_proba(self, X: pd.DataFrame) -> np.ndarray:
        """
        Generate probability predictions for the positive class.

        Args:
            X: Features to predict

        Returns:
            Predicted probabilities for the positive class (1D array)
        """
        self._check_fitted()
        X, _ = self._validate_input(X)
        return self.model.predict_proba(X)[:, 1]

    def run(
        self,
        X: pd.DataFrame,
        y: pd.Series,
        **kwargs
    ) -> 'BaseModel':
        """Run is implemented as fit."""
        return self.fit(X, y, **kwargs)

    def get_params(self) -> Dict[str, Any]:
        """Get model parameters."""
        return dict(self.params)

    def set_params(self, **params) -> 'BaseModel':
        """Update parameters used by the next fit."""
        self.params.update(params)
        return self

    def _random_state(self) -> int:
        return self.get_config('random_state', 42)

    def get_feature_importance(
        self,
        top_n: Optional[int] = None
    ) -> Dict[str, float]:
        """Importances ordered by magnitude, optionally only the ``top_n`` largest."""
        ranked = sorted(
            (self.feature_importances_ or {}).items(),
            key=lambda item: abs(item[1]),
            reverse=True,
        )
        return dict(ranked[:top_n] if top_n else ranked)

    def _artifact_extras(self) -> Dict[str, Any]:
        """Extra fitted state a subclass needs to restore after load."""
        return {}

    def _restore_extras(self, extras: Dict[str, Any]) -> None:
        pass

    def save(self, path: str) -> None:
        """
        Serialize the fitted model with joblib.

        The artifact is a plain dict, so ``ModelFactory.load`` can pick the
        right class from its ``model_type`` before restoring it.
        """
        if not self.is_fitted:
            raise ModelTrainingError("Cannot save an unfitted model", model_name=self.name)

        artifact = {
            'model_type': self.model_type,
            'name': self.name,
            'config': self.config,
            'params': self.params,
            'model': self.model,
            'feature_names': self.feature_names,
            'feature_importances': self.feature_importances_,
            'extras': self._artifact_extras(),
        }
        try:
            joblib.dump(artifact, path)
        except OSError as e:
            raise ArtifactError(
                f"Could not write model: {e}", artifact_path=str(path), cause=e
            ) from e
        self.logger.info(f"SAVE | {self.name} written to {path}")

    def load(self, path: str) -> 'BaseModel':
        """Restore a model written by ``save``; the artifact must hold this model type."""
        return self.restore(read_artifact(path), path)

    def restore(self, artifact: Dict[str, Any], path: str = '<memory>') -> 'BaseModel':
        """Restore fitted state from an artifact dict already read from disk."""
        if artifact.get('model_type') != self.model_type:
            raise ArtifactError(
                f"Artifact holds a '{artifact.get('model_type')}' model, "
                f"expected '{self.model_type}'",
                artifact_path=str(path),
            )

        self.model = artifact['model']
        self.params = artifact['params']
        self.feature_names = artifact['feature_names']
        self.feature_importances_ = artifact['feature_importances']
        self._restore_extras(artifact.get('extras', {}))
        self.is_fitted = True
        return self

    def _check_fitted(self) -> None:
        if not self.is_fitted:
            raise ModelTrainingError("Model not fitted", model_name=self.name)

    def _validate_input(
        self,
        X: pd.DataFrame,
        y: Optional[pd.Series] = None
    ) -> Tuple[pd.DataFrame, Optional[pd.Series]]:
        """
        Coerce to DataFrame/Series and pin the column order.

        Before fitting the incoming columns become ``feature_names``; after
        fitting, inputs are reordered to them and missing ones are an error.
        """
        X = X if isinstance(X, pd.DataFrame) else pd.DataFrame(X)

        if self.is_fitted:
            missing = sorted(set(self.feature_names) - set(X.columns))
            if missing:
                raise ValueError(f"Missing features: {missing}")
            X = X[self.feature_names]
        else:
            self.feature_names = list(X.columns)

        if y is not None:
            y = y if isinstance(y, pd.Series) else pd.Series(y)
            if len(X) != len(y):
                raise ValueError(f"X and y length mismatch: {len(X)} vs {len(y)}")

        return X, y

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, fitted={self.is_fitted})"


def read_artifact(path: str) -> Dict[str, Any]:
    """Read a joblib model artifact, raising ArtifactError for anything unusable."""
    try:
        artifact = joblib.load(path)
    except (OSError, EOFError) as e:
        raise ArtifactError(
            f"Could not read model: {e}", artifact_path=str(path), cause=e
        ) from e

    if not isinstance(artifact, dict) or 'model_type' not in artifact:
        raise ArtifactError("Not a model artifact", artifact_path=str(path))
    return artifact
