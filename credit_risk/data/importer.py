"""
Data Importer

Converts the input CSV into a Parquet file and loads the columns used for
training: the binary target and the numeric predictors.
"""

from pathlib import Path
from typing import List, Optional
import logging

import pandas as pd

from credit_risk.core.exceptions import DataReaderError, DataValidationError


logger = logging.getLogger(__name__)


def import_csv(
    csv_path: str,
    parquet_path: Optional[str] = None,
    overwrite: bool = False,
    **read_csv_kwargs,
) -> Path:
    """
    Convert a CSV file into Parquet.

    An existing Parquet file is reused unless ``overwrite`` is set or the
    CSV has been modified since it was written, so a second run skips the
    conversion.

    Args:
        csv_path: Path to the source CSV file.
        parquet_path: Destination path. Defaults to the CSV path with a
                      .parquet suffix.
        overwrite: Re-create the Parquet file even if it exists.
        **read_csv_kwargs: Passed through to ``pandas.read_csv``.

    Returns:
        Path to the Parquet file.

    Raises:
        DataReaderError: If the CSV is missing or cannot be parsed/converted.
    """
    source = Path(csv_path)
    target = Path(parquet_path) if parquet_path else source.with_suffix('.parquet')

    if target.exists() and not overwrite:
        if source.exists() and source.stat().st_mtime > target.stat().st_mtime:
            logger.info(f"IMPORT | {source} is newer than {target}, re-converting")
        else:
            logger.info(f"IMPORT | Reusing existing Parquet file {target}")
            return target

    if not source.exists():
        raise DataReaderError(f"Input CSV not found: {csv_path}", source=str(csv_path))

    logger.info(f"IMPORT | Converting {source} to {target}")
    try:
        df = pd.read_csv(source, **read_csv_kwargs)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise DataReaderError(
            f"Could not parse CSV: {e}", source=str(csv_path), cause=e
        ) from e

    target.parent.mkdir(parents=True, exist_ok=True)
    try:
        df.to_parquet(target, index=False)
    except (ValueError, TypeError, OSError) as e:
        raise DataReaderError(
            f"Could not write Parquet: {e}", source=str(target), cause=e
        ) from e

    logger.info(f"IMPORT | Wrote {len(df):,} rows, {len(df.columns)} columns")
    return target


def load_dataset(path: str, **read_kwargs) -> pd.DataFrame:
    """
    Load a dataset from Parquet or CSV, chosen by file extension.

    Args:
        path: Path to a .parquet or .csv file.
        **read_kwargs: Passed through to the pandas reader.

    Returns:
        Loaded DataFrame.
    """
    p = Path(path)
    if not p.exists():
        raise DataReaderError(f"Data file not found: {path}", source=str(path))

    suffix = p.suffix.lower()
    if suffix == '.parquet':
        df = pd.read_parquet(p, **read_kwargs)
    elif suffix in ('.csv', '.txt'):
        df = pd.read_csv(p, **read_kwargs)
    else:
        raise DataReaderError(
            f"Unsupported file format '{suffix}'", source=str(path)
        )

    logger.info(f"DATA | Loaded {len(df):,} rows, {len(df.columns)} columns from {p.name}")
    return df


def resolve_feature_columns(
    df: pd.DataFrame,
    target_column: str,
    feature_columns: Optional[List[str]] = None,
    id_columns: Optional[List[str]] = None,
) -> List[str]:
    """
    Determine the predictor columns and validate them against the data.

    Args:
        df: Loaded dataset.
        target_column: Name of the binary target column.
        feature_columns: Explicit predictor list. If None, every column except
                         the target and id columns is used.
        id_columns: Identifier columns excluded from the predictors.

    Returns:
        Ordered list of predictor column names.

    Raises:
        DataValidationError: On missing columns, non-numeric predictors or a
                             target that is not binary.
    """
    id_columns = id_columns or []
    errors = []

    if target_column not in df.columns:
        raise DataValidationError(
            f"Target column '{target_column}' not found in data",
            validation_errors=[{'column': target_column, 'error': 'missing'}],
        )

    if feature_columns is None:
        excluded = set(id_columns) | {target_column}
        features = [c for c in df.columns if c not in excluded]
    else:
        features = list(feature_columns)
        for col in features:
            if col not in df.columns:
                errors.append({'column': col, 'error': 'missing'})
        if target_column in features:
            errors.append({'column': target_column, 'error': 'target listed as feature'})

    for col in features:
        if col in df.columns and not pd.api.types.is_numeric_dtype(df[col]):
            errors.append({'column': col, 'error': f'non-numeric dtype {df[col].dtype}'})

    if not features:
        errors.append({'column': None, 'error': 'no feature columns'})

    if errors:
        raise DataValidationError(
            f"Invalid feature columns: {[e['column'] for e in errors]}",
            validation_errors=errors,
        )

    _check_binary_target(df[target_column], target_column)

    logger.info(f"DATA | {len(features)} feature columns, target '{target_column}'")
    return features


def _check_binary_target(target: pd.Series, target_column: str) -> None:
    """Raise if the target has values other than 0/1 (booleans allowed)."""
    values = set(pd.unique(target.dropna()))
    # True/False and 0.0/1.0 hash equal to 0/1
    if not values.issubset({0, 1}):
        raise DataValidationError(
            f"Target column '{target_column}' must be binary (0/1), found {sorted(map(str, values))[:10]}",
            validation_errors=[{'column': target_column, 'error': 'not binary'}],
        )
