"""
Tests for the seeded train/test split.
"""

import numpy as np
import pandas as pd
import pytest

from credit_risk.core.exceptions import DataValidationError
from credit_risk.data.sample import RISK_WEIGHTS
from credit_risk.data.splitter import DataSplit, split_train_test


FEATURES = list(RISK_WEIGHTS)


class TestSplitTrainTest:

    def test_sizes(self, sample_credit_data):
        split = split_train_test(sample_credit_data, 'is_bad', FEATURES, test_size=0.3)

        assert len(split.train) + len(split.test) == len(sample_credit_data)
        assert len(split.test) == pytest.approx(0.3 * len(sample_credit_data), abs=1)

    def test_same_seed_same_split(self, sample_credit_data):
        a = split_train_test(sample_credit_data, 'is_bad', FEATURES, random_state=1)
        b = split_train_test(sample_credit_data, 'is_bad', FEATURES, random_state=1)
        pd.testing.assert_frame_equal(a.train, b.train)
        pd.testing.assert_frame_equal(a.test, b.test)

    def test_different_seed_different_split(self, sample_credit_data):
        a = split_train_test(sample_credit_data, 'is_bad', FEATURES, random_state=1)
        b = split_train_test(sample_credit_data, 'is_bad', FEATURES, random_state=2)
        assert not a.train.equals(b.train)

    def test_stratified_bad_rates(self, sample_credit_data):
        split = split_train_test(sample_credit_data, 'is_bad', FEATURES, stratify=True)
        summary = split.summary()
        assert summary['train_bad_rate'] == pytest.approx(summary['test_bad_rate'], abs=0.02)

    def test_only_features_and_target_kept(self, sample_credit_data):
        split = split_train_test(sample_credit_data, 'is_bad', ['age', 'income'])
        assert list(split.train.columns) == ['age', 'income', 'is_bad']
        assert list(split.X_test.columns) == ['age', 'income']
        assert split.y_train.name == 'is_bad'

    def test_missing_rows_dropped(self, sample_credit_data):
        df = sample_credit_data.copy()
        df.loc[:9, 'income'] = np.nan

        split = split_train_test(df, 'is_bad', FEATURES, drop_missing=True)
        assert len(split.train) + len(split.test) == len(df) - 10

    def test_missing_rows_kept_when_disabled(self, sample_credit_data):
        df = sample_credit_data.copy()
        df.loc[:9, 'income'] = np.nan

        split = split_train_test(df, 'is_bad', FEATURES, drop_missing=False)
        assert len(split.train) + len(split.test) == len(df)

    def test_unstratified_fallback_for_rare_class(self):
        df = pd.DataFrame({'x': np.arange(20, dtype=float), 'y': [0] * 19 + [1]})
        split = split_train_test(df, 'y', ['x'], test_size=0.25, stratify=True)
        assert len(split.test) == 5

    def test_too_few_rows(self):
        df = pd.DataFrame({'x': [1.0, np.nan], 'y': [0, 1]})
        with pytest.raises(DataValidationError):
            split_train_test(df, 'y', ['x'])

    def test_summary(self, sample_credit_data):
        split = split_train_test(sample_credit_data, 'is_bad', FEATURES)
        summary = split.summary()

        assert set(summary) == {
            'train_rows', 'test_rows', 'train_bad_rate', 'test_bad_rate', 'n_features',
        }
        assert summary['n_features'] == len(FEATURES)


class TestDataSplit:

    def test_empty_summary(self):
        empty = pd.DataFrame({'x': [], 'is_bad': []})
        split = DataSplit(train=empty, test=empty, feature_columns=['x'])
        assert split.summary()['train_bad_rate'] == 0.0
