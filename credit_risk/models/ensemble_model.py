"""
Ensemble Model

Voting ensemble over the walkthrough's individual learners.
"""

from typing import Any, Dict, List, Optional, Type
import numpy as np
import pandas as pd

from sklearn.ensemble import VotingClassifier

from credit_risk.models.base_model import BaseModel
from credit_risk.models.logistic_model import LogisticRegressionModel
from credit_risk.models.fast_forest_model import FastForestModel
from credit_risk.models.fast_trees_model import FastTreesModel


MEMBER_CLASSES: Dict[str, Type[BaseModel]] = {
    'logistic_regression': LogisticRegressionModel,
    'fast_forest': FastForestModel,
    'fast_trees': FastTreesModel,
}


class EnsembleModel(BaseModel):
    """
    Combines several learners with a scikit-learn VotingClassifier.

    Configuration keys:
        members: List of {'algorithm': ..., 'params': {...}}
        voting: 'soft' averages probabilities, 'hard' counts votes
        weights: Optional per-member weights

    With hard voting ``predict_proba`` returns the weighted share of members
    voting for the positive class.
    """

    model_type = 'ensemble'
    label = 'Ensemble'

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        name: Optional[str] = None
    ):
        super().__init__(config, name or "EnsembleModel")
        self.voting = self.get_config('voting', 'soft')
        self.weights: Optional[List[float]] = self.get_config('weights')
        self.members = self._build_members(self.get_config('members', []))

    def default_params(self) -> Dict[str, Any]:
        return {}

    def _build_members(self, members_config: List[Dict[str, Any]]) -> List[BaseModel]:
        members = []
        for i, member in enumerate(members_config):
            algorithm = member['algorithm']
            if algorithm not in MEMBER_CLASSES:
                raise ValueError(
                    f"Unknown ensemble member: {algorithm}. "
                    f"Available: {list(MEMBER_CLASSES)}"
                )
            member_config = {
                'params': member.get('params', {}),
                'random_state': self._random_state(),
            }
            members.append(MEMBER_CLASSES[algorithm](member_config, name=f"{algorithm}_{i}"))
        return members

    def get_params(self) -> Dict[str, Any]:
        return {
            'voting': self.voting,
            'weights': self.weights,
            'members': [
                {'algorithm': m.model_type, 'params': m.get_params()} for m in self.members
            ],
        }

    def build_estimator(self, params: Optional[Dict[str, Any]] = None) -> Any:
        if len(self.members) < 2:
            raise ValueError("An ensemble needs at least two members")
        return VotingClassifier(
            estimators=[(m.name, m.build_estimator()) for m in self.members],
            voting=self.voting,
            weights=self.weights,
        )

    def _fit(self, X, y, X_val, y_val) -> None:
        # Members are trained jointly on the same rows by VotingClassifier
        self.model = self.build_estimator()
        self.model.fit(X, y)
        self.feature_importances_ = self._combined_importances()
        self.logger.info(f"{len(self.members)} members combined with {self.voting} voting")

    def predict_proba(self, X: pd.DataFrame) -> np.ndarray:
        self._check_fitted()
        X, _ = self._validate_input(X)

        if self.voting == 'soft':
            return self.model.predict_proba(X)[:, 1]

        # transform() gives each member's predicted label for hard voting
        votes = np.asarray(self.model.transform(X)) == 1
        weights = np.asarray(self.weights if self.weights else [1.0] * votes.shape[1], dtype=float)
        return votes.astype(float) @ weights / weights.sum()

    def predict(self, X: pd.DataFrame) -> np.ndarray:
        """Classes from ``predict_proba`` at 0.5, so an even vote counts as bad."""
        return (self.predict_proba(X) >= 0.5).astype(int)

    def _combined_importances(self) -> Dict[str, float]:
        """Average of each member's importances normalised to sum to one."""
        combined = np.zeros(len(self.feature_names))
        n_used = 0

        for estimator in self.model.estimators_:
            final = estimator[-1] if hasattr(estimator, 'steps') else estimator
            if hasattr(final, 'feature_importances_'):
                scores = np.asarray(final.feature_importances_, dtype=float)
            elif hasattr(final, 'coef_'):
                scores = np.abs(np.asarray(final.coef_[0], dtype=float))
            else:
                continue

            total = scores.sum()
            if total > 0:
                combined += scores / total
                n_used += 1

        if n_used:
            combined /= n_used

        return dict(zip(self.feature_names, combined.tolist()))
