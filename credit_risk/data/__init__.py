"""
Data Module

CSV import into Parquet, feature resolution, train/test splitting and
synthetic sample data.
"""

from credit_risk.data.importer import import_csv, load_dataset, resolve_feature_columns
from credit_risk.data.splitter import DataSplit, split_train_test
from credit_risk.data.sample import generate_credit_data, write_sample_csv

__all__ = [
    "import_csv",
    "load_dataset",
    "resolve_feature_columns",
    "DataSplit",
    "split_train_test",
    "generate_credit_data",
    "write_sample_csv",
]
