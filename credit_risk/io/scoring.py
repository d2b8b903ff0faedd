"""
Scoring

Applies a persisted model to new accounts.
"""

from pathlib import Path
from typing import List, Optional
import logging

import pandas as pd

from credit_risk.core.exceptions import DataValidationError
from credit_risk.data.importer import load_dataset
from credit_risk.io.model_store import load_model
from credit_risk.models.base_model import BaseModel


logger = logging.getLogger(__name__)


def score_dataset(
    model: BaseModel,
    df: pd.DataFrame,
    threshold: float = 0.5,
    id_columns: Optional[List[str]] = None,
) -> pd.DataFrame:
    """
    Score accounts with a fitted model.

    Args:
        model: Fitted model
        df: Accounts with at least the model's feature columns
        threshold: Probability at or above which an account is predicted bad
        id_columns: Columns copied to the output when present

    Returns:
        DataFrame with id columns, ``score`` and ``prediction``
    """
    missing = [c for c in model.feature_names if c not in df.columns]
    if missing:
        raise DataValidationError(
            f"Scoring data lacks model features: {missing}",
            validation_errors=[{'column': c, 'error': 'missing'} for c in missing],
        )

    scores = model.predict_proba(df[model.feature_names])

    keep = [c for c in (id_columns or []) if c in df.columns]
    out = df[keep].copy().reset_index(drop=True)
    out['score'] = scores
    out['prediction'] = (out['score'] >= threshold).astype(int)

    logger.info(
        f"SCORE | {len(out):,} accounts scored, "
        f"{int(out['prediction'].sum()):,} predicted bad at threshold {threshold}"
    )
    return out


def score_file(
    model_path: str,
    input_path: str,
    output_path: str,
    threshold: float = 0.5,
    id_columns: Optional[List[str]] = None,
) -> Path:
    """
    Load a saved model, score a CSV/Parquet file and write the scores as CSV.

    Returns:
        Path to the written scores
    """
    model = load_model(model_path)
    df = load_dataset(input_path)
    scored = score_dataset(model, df, threshold=threshold, id_columns=id_columns)

    out_path = Path(output_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    scored.to_csv(out_path, index=False)

    logger.info(f"SCORE | Scores written to {out_path}")
    return out_path
