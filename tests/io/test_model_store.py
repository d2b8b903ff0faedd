"""
Tests for saving and loading models with their metadata sidecar.
"""

import numpy as np
import pytest

from credit_risk.core.exceptions import ArtifactError
from credit_risk.io.model_store import load_model, metadata_path, read_model_metadata, save_model
from credit_risk.models.fast_trees_model import FastTreesModel
from credit_risk.models.logistic_model import LogisticRegressionModel


class TestSaveModel:

    def test_writes_artifact_and_sidecar(self, fitted_logistic, tmp_path):
        path = save_model(fitted_logistic, str(tmp_path / 'models' / 'best.joblib'),
                          metadata={'metrics': {'auc': 0.81}})

        assert path.exists()
        assert metadata_path(str(path)).name == 'best.joblib.json'

        meta = read_model_metadata(str(path))
        assert meta['model_name'] == 'logistic'
        assert meta['model_type'] == 'logistic_regression'
        assert meta['feature_names'] == fitted_logistic.feature_names
        assert meta['params']['C'] == 1.0
        assert meta['metrics'] == {'auc': 0.81}
        assert 'saved_at' in meta

    def test_unfitted_model_rejected(self, model_config, tmp_path):
        from credit_risk.core.exceptions import ModelTrainingError

        with pytest.raises(ModelTrainingError):
            save_model(LogisticRegressionModel(model_config), str(tmp_path / 'm.joblib'))


class TestLoadModel:

    def test_round_trip(self, fitted_logistic, train_test_data, tmp_path):
        _, X_test, _, _ = train_test_data
        path = save_model(fitted_logistic, str(tmp_path / 'm.joblib'))

        loaded = load_model(str(path))

        assert isinstance(loaded, LogisticRegressionModel)
        np.testing.assert_allclose(loaded.predict_proba(X_test), fitted_logistic.predict_proba(X_test))

    def test_fast_trees_round_trip(self, small_trees_config, train_test_data, tmp_path):
        X_train, X_test, y_train, _ = train_test_data
        model = FastTreesModel(small_trees_config, name='trees').fit(X_train, y_train)
        path = save_model(model, str(tmp_path / 'trees.joblib'))

        loaded = load_model(str(path))
        assert loaded.name == 'trees'
        np.testing.assert_allclose(loaded.predict_proba(X_test), model.predict_proba(X_test))

    def test_missing_model(self, tmp_path):
        with pytest.raises(ArtifactError, match="not found"):
            load_model(str(tmp_path / 'none.joblib'))

    def test_missing_metadata(self, tmp_path):
        with pytest.raises(ArtifactError, match="metadata not found"):
            read_model_metadata(str(tmp_path / 'none.joblib'))
