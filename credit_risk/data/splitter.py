"""
Data Splitter

Splits the loaded dataset into train and test sets driven by a random seed.
"""

from typing import List, Optional, Tuple
from dataclasses import dataclass, field
import logging

import pandas as pd
from sklearn.model_selection import train_test_split

from credit_risk.core.exceptions import DataValidationError


logger = logging.getLogger(__name__)


@dataclass
class DataSplit:
    """Container for the train/test split."""
    train: pd.DataFrame
    test: pd.DataFrame
    feature_columns: List[str] = field(default_factory=list)
    target_column: str = 'is_bad'

    @property
    def X_train(self) -> pd.DataFrame:
        return self.train[self.feature_columns]

    @property
    def y_train(self) -> pd.Series:
        return self.train[self.target_column]

    @property
    def X_test(self) -> pd.DataFrame:
        return self.test[self.feature_columns]

    @property
    def y_test(self) -> pd.Series:
        return self.test[self.target_column]

    def summary(self) -> dict:
        """Row counts and bad rates of both sides."""
        return {
            'train_rows': len(self.train),
            'test_rows': len(self.test),
            'train_bad_rate': float(self.y_train.mean()) if len(self.train) else 0.0,
            'test_bad_rate': float(self.y_test.mean()) if len(self.test) else 0.0,
            'n_features': len(self.feature_columns),
        }


def split_train_test(
    df: pd.DataFrame,
    target_column: str,
    feature_columns: List[str],
    test_size: float = 0.30,
    random_state: int = 42,
    stratify: bool = True,
    drop_missing: bool = True,
) -> DataSplit:
    """
    Split data into train and test sets.

    The same ``random_state`` always yields the same split.

    Args:
        df: Dataset with target and feature columns.
        target_column: Name of the binary target column.
        feature_columns: Predictor columns kept in the split.
        test_size: Fraction of rows assigned to the test set.
        random_state: Random seed for the split.
        stratify: Keep the bad rate equal on both sides.
        drop_missing: Drop rows with missing target or feature values.

    Returns:
        DataSplit with train and test DataFrames.
    """
    columns = list(feature_columns) + [target_column]
    data = df[columns]

    if drop_missing:
        before = len(data)
        data = data.dropna()
        dropped = before - len(data)
        if dropped:
            logger.warning(f"SPLIT | Dropped {dropped:,} rows with missing values")
    else:
        data = data[data[target_column].notna()]

    data = data.copy()
    data[target_column] = data[target_column].astype(int)

    if len(data) < 2:
        raise DataValidationError(
            f"Not enough rows to split: {len(data)}",
            details={'rows': len(data)},
        )

    train_df, test_df = _split(data, target_column, test_size, random_state, stratify)

    split = DataSplit(
        train=train_df,
        test=test_df,
        feature_columns=list(feature_columns),
        target_column=target_column,
    )

    stats = split.summary()
    logger.info(
        f"SPLIT | Train: {stats['train_rows']:,} rows "
        f"(bad rate: {stats['train_bad_rate']:.2%})"
    )
    logger.info(
        f"SPLIT | Test: {stats['test_rows']:,} rows "
        f"(bad rate: {stats['test_bad_rate']:.2%})"
    )
    return split


def _split(
    df: pd.DataFrame,
    target_column: str,
    test_size: float,
    random_state: int,
    stratify: bool,
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """Train/test split, stratified on the target when both classes are present."""
    stratify_on: Optional[pd.Series] = None
    if stratify:
        if df[target_column].value_counts().min() >= 2 and df[target_column].nunique() == 2:
            stratify_on = df[target_column]
        else:
            logger.warning("SPLIT | Too few rows per class to stratify, using random split")

    train_df, test_df = train_test_split(
        df,
        test_size=test_size,
        stratify=stratify_on,
        random_state=random_state,
    )
    return train_df.reset_index(drop=True), test_df.reset_index(drop=True)
