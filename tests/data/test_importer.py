"""
Tests for CSV import and feature resolution.
"""

import os

import pandas as pd
import pytest

from credit_risk.core.exceptions import DataReaderError, DataValidationError
from credit_risk.data.importer import import_csv, load_dataset, resolve_feature_columns
from credit_risk.data.sample import RISK_WEIGHTS, generate_credit_data


class TestImportCsv:

    def test_converts_to_parquet(self, credit_csv, sample_credit_data):
        parquet = import_csv(str(credit_csv))

        assert parquet == credit_csv.with_suffix('.parquet')
        assert parquet.exists()
        df = pd.read_parquet(parquet)
        assert len(df) == len(sample_credit_data)
        assert list(df.columns) == list(sample_credit_data.columns)

    def test_explicit_parquet_path(self, credit_csv, tmp_path):
        target = tmp_path / 'cache' / 'credit.parquet'
        parquet = import_csv(str(credit_csv), str(target))

        assert parquet == target
        assert target.exists()

    def test_existing_parquet_reused(self, credit_csv):
        parquet = import_csv(str(credit_csv))
        pd.DataFrame({'x': [1]}).to_parquet(parquet, index=False)
        csv_mtime = credit_csv.stat().st_mtime
        os.utime(parquet, (csv_mtime + 10, csv_mtime + 10))

        again = import_csv(str(credit_csv))
        assert list(pd.read_parquet(again).columns) == ['x']

    def test_newer_csv_reconverts(self, credit_csv):
        parquet = import_csv(str(credit_csv))
        pd.DataFrame({'x': [1]}).to_parquet(parquet, index=False)
        parquet_mtime = parquet.stat().st_mtime
        os.utime(credit_csv, (parquet_mtime + 10, parquet_mtime + 10))

        import_csv(str(credit_csv))
        assert 'is_bad' in pd.read_parquet(parquet).columns

    def test_overwrite_reconverts(self, credit_csv):
        parquet = import_csv(str(credit_csv))
        pd.DataFrame({'x': [1]}).to_parquet(parquet, index=False)

        import_csv(str(credit_csv), overwrite=True)
        assert 'is_bad' in pd.read_parquet(parquet).columns

    def test_missing_csv(self, tmp_path):
        with pytest.raises(DataReaderError, match="not found"):
            import_csv(str(tmp_path / 'missing.csv'))

    def test_empty_csv(self, tmp_path):
        empty = tmp_path / 'empty.csv'
        empty.write_text('', encoding='utf-8')

        with pytest.raises(DataReaderError, match="Could not parse CSV") as exc_info:
            import_csv(str(empty))
        assert exc_info.value.cause is not None

    def test_read_csv_kwargs_passed(self, tmp_path):
        csv = tmp_path / 'semi.csv'
        csv.write_text('a;is_bad\n1;0\n2;1\n', encoding='utf-8')

        df = load_dataset(str(import_csv(str(csv), sep=';')))
        assert list(df.columns) == ['a', 'is_bad']


class TestLoadDataset:

    def test_load_csv(self, credit_csv):
        assert 'account_id' in load_dataset(str(credit_csv)).columns

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / 'data.xlsx'
        path.write_bytes(b'')
        with pytest.raises(DataReaderError, match="Unsupported"):
            load_dataset(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(DataReaderError):
            load_dataset(str(tmp_path / 'none.parquet'))


class TestResolveFeatureColumns:

    def test_all_columns_except_target_and_ids(self, sample_credit_data):
        features = resolve_feature_columns(
            sample_credit_data, 'is_bad', id_columns=['account_id']
        )
        assert features == list(RISK_WEIGHTS)

    def test_explicit_list_keeps_order(self, sample_credit_data):
        features = resolve_feature_columns(
            sample_credit_data, 'is_bad', feature_columns=['utilization', 'age']
        )
        assert features == ['utilization', 'age']

    def test_missing_target(self, sample_credit_data):
        with pytest.raises(DataValidationError, match="Target column"):
            resolve_feature_columns(sample_credit_data, 'default_flag')

    def test_missing_feature(self, sample_credit_data):
        with pytest.raises(DataValidationError) as exc_info:
            resolve_feature_columns(sample_credit_data, 'is_bad', feature_columns=['age', 'salary'])
        assert {'column': 'salary', 'error': 'missing'} in exc_info.value.validation_errors

    def test_target_as_feature_rejected(self, sample_credit_data):
        with pytest.raises(DataValidationError):
            resolve_feature_columns(sample_credit_data, 'is_bad', feature_columns=['age', 'is_bad'])

    def test_non_numeric_feature(self, sample_credit_data):
        # account_id is a string column when not excluded
        with pytest.raises(DataValidationError, match="account_id"):
            resolve_feature_columns(sample_credit_data, 'is_bad')

    def test_non_binary_target(self):
        df = pd.DataFrame({'x': [1.0, 2.0, 3.0], 'y': [0, 1, 2]})
        with pytest.raises(DataValidationError, match="binary"):
            resolve_feature_columns(df, 'y')

    def test_boolean_target_accepted(self):
        df = pd.DataFrame({'x': [1.0, 2.0, 3.0], 'y': [True, False, True]})
        assert resolve_feature_columns(df, 'y') == ['x']

    def test_no_features(self):
        df = pd.DataFrame({'id': ['a', 'b'], 'y': [0, 1]})
        with pytest.raises(DataValidationError):
            resolve_feature_columns(df, 'y', id_columns=['id'])


class TestSampleData:

    def test_shape_and_columns(self):
        df = generate_credit_data(n_rows=200, seed=1)
        assert len(df) == 200
        assert df.columns[0] == 'account_id'
        assert df.columns[-1] == 'is_bad'
        assert set(df['is_bad'].unique()) <= {0, 1}

    def test_seed_reproducible(self):
        pd.testing.assert_frame_equal(
            generate_credit_data(n_rows=100, seed=3),
            generate_credit_data(n_rows=100, seed=3),
        )

    def test_bad_rate_near_target(self):
        df = generate_credit_data(n_rows=5000, bad_rate=0.2, seed=11)
        assert 0.1 < df['is_bad'].mean() < 0.3

    def test_delinquencies_raise_default_rate(self):
        df = generate_credit_data(n_rows=5000, seed=5)
        high = df.loc[df['num_delinquencies'] >= 2, 'is_bad'].mean()
        low = df.loc[df['num_delinquencies'] == 0, 'is_bad'].mean()
        assert high > low

    def test_missing_rate(self):
        df = generate_credit_data(n_rows=1000, seed=2, missing_rate=0.1)
        share = df[list(RISK_WEIGHTS)].isna().to_numpy().mean()
        assert 0.05 < share < 0.15
        assert df['is_bad'].notna().all()
