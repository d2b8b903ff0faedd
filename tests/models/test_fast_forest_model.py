"""
Tests for the fast-forest (random forest) model.
"""

import numpy as np
import pytest
from sklearn.ensemble import RandomForestClassifier

from credit_risk.core.exceptions import ModelTrainingError
from credit_risk.models.fast_forest_model import FastForestModel


class TestFastForestModel:

    def test_defaults(self, model_config):
        model = FastForestModel(model_config)

        assert model.model_type == 'fast_forest'
        assert model.params['n_estimators'] == 100
        assert model.params['n_jobs'] == 1
        assert model.params['random_state'] == 42

    def test_build_estimator(self, small_trees_config):
        estimator = FastForestModel(small_trees_config).build_estimator()

        assert isinstance(estimator, RandomForestClassifier)
        assert estimator.n_estimators == 20
        assert estimator.max_depth == 3

    def test_fit_and_predict(self, small_trees_config, train_test_data):
        X_train, X_test, y_train, _ = train_test_data
        model = FastForestModel(small_trees_config).fit(X_train, y_train)

        proba = model.predict_proba(X_test)
        assert model.is_fitted
        assert proba.shape == (len(X_test),)
        assert np.all((proba >= 0) & (proba <= 1))

    def test_importances_sum_to_one(self, small_trees_config, train_test_data):
        X_train, _, y_train, _ = train_test_data
        model = FastForestModel(small_trees_config).fit(X_train, y_train)

        importances = model.get_feature_importance()
        assert set(importances) == set(X_train.columns)
        assert sum(importances.values()) == pytest.approx(1.0)

    def test_top_n_importances(self, small_trees_config, train_test_data):
        X_train, _, y_train, _ = train_test_data
        model = FastForestModel(small_trees_config).fit(X_train, y_train)

        top = model.get_feature_importance(top_n=3)
        assert len(top) == 3
        values = list(top.values())
        assert values == sorted(values, reverse=True)

    def test_same_seed_same_scores(self, small_trees_config, train_test_data):
        X_train, X_test, y_train, _ = train_test_data
        a = FastForestModel(small_trees_config).fit(X_train, y_train)
        b = FastForestModel(small_trees_config).fit(X_train, y_train)

        np.testing.assert_array_equal(a.predict_proba(X_test), b.predict_proba(X_test))

    def test_invalid_param_wrapped(self, train_test_data):
        X_train, _, y_train, _ = train_test_data
        model = FastForestModel({'params': {'n_estimators': 0}})

        with pytest.raises(ModelTrainingError, match="Fast forest training failed"):
            model.fit(X_train, y_train)
