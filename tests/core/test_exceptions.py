"""
Tests for the exception hierarchy.
"""

import pytest

from credit_risk.core.exceptions import (
    WalkthroughError,
    ConfigurationError,
    DataValidationError,
    DataReaderError,
    ModelTrainingError,
    EvaluationError,
    ArtifactError,
)


class TestWalkthroughError:

    def test_message_only(self):
        err = WalkthroughError("boom")
        assert str(err) == "boom"
        assert err.details == {}
        assert err.cause is None

    def test_details_and_cause_in_str(self):
        cause = ValueError("bad value")
        err = WalkthroughError("boom", details={'k': 1}, cause=cause)

        text = str(err)
        assert "boom" in text
        assert "Details: {'k': 1}" in text
        assert "Caused by: bad value" in text

    def test_to_dict(self):
        err = ConfigurationError("missing", details={'path': 'x.yaml'})
        d = err.to_dict()

        assert d == {
            'type': 'ConfigurationError',
            'message': 'missing',
            'details': {'path': 'x.yaml'},
            'cause': None,
        }

    @pytest.mark.parametrize("exc_class", [
        ConfigurationError, DataValidationError, DataReaderError,
        ModelTrainingError, EvaluationError, ArtifactError,
    ])
    def test_subclasses_share_base(self, exc_class):
        with pytest.raises(WalkthroughError):
            raise exc_class("failure")


class TestSpecificErrors:

    def test_data_validation_error_counts_errors(self):
        err = DataValidationError(
            "invalid", validation_errors=[{'column': 'a'}, {'column': 'b'}]
        )
        assert err.validation_errors == [{'column': 'a'}, {'column': 'b'}]
        assert "2 validation error(s)" in str(err)

    def test_data_reader_error_source(self):
        err = DataReaderError("not found", source="data/x.csv")
        assert err.source == "data/x.csv"
        assert "Source: data/x.csv" in str(err)

    def test_model_training_error_name(self):
        err = ModelTrainingError("failed", model_name="fast_trees_01")
        assert "Model: fast_trees_01" in str(err)

    def test_artifact_error_path(self):
        err = ArtifactError("unreadable", artifact_path="m.joblib")
        assert err.artifact_path == "m.joblib"

    def test_chained_cause(self):
        try:
            try:
                raise OSError("disk")
            except OSError as e:
                raise ArtifactError("write failed", cause=e) from e
        except ArtifactError as err:
            assert isinstance(err.__cause__, OSError)
            assert err.cause is err.__cause__
