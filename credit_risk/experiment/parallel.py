"""
Parallel Execution

Fans out independent training and scoring calls with joblib and returns the
results in the order they were requested.
"""

from typing import Any, Callable, Dict, Iterable, List
import logging

import pandas as pd
from joblib import Parallel, delayed, effective_n_jobs

from credit_risk.evaluation.evaluator import ModelEvaluator
from credit_risk.experiment.specs import ModelSpec
from credit_risk.models.base_model import BaseModel
from credit_risk.models.model_factory import ModelFactory


logger = logging.getLogger(__name__)


def parallel_map(
    func: Callable[..., Any],
    items: Iterable[Any],
    n_jobs: int = -1,
    backend: str = 'loky',
    **kwargs,
) -> List[Any]:
    """
    Call ``func(item, **kwargs)`` for every item across workers.

    Blocks until all calls complete. Results keep the order of ``items``;
    the first worker exception is re-raised here.

    Args:
        func: Picklable, module-level function
        items: Arguments for the individual calls
        n_jobs: Worker count (-1 = all cores)
        backend: joblib backend name

    Returns:
        List of results in request order
    """
    items = list(items)
    if not items:
        return []

    workers = min(effective_n_jobs(n_jobs), len(items))
    logger.debug(f"PARALLEL | {len(items)} calls on {workers} {backend} workers")

    return Parallel(n_jobs=workers, backend=backend)(
        delayed(func)(item, **kwargs) for item in items
    )


def _train_one(
    spec: ModelSpec,
    X: pd.DataFrame,
    y: pd.Series,
    random_state: int,
) -> BaseModel:
    """Train a single spec (module-level, picklable for joblib)."""
    model = ModelFactory.create(spec.algorithm, spec.to_model_config(random_state), name=spec.name)
    return model.fit(X, y)


def _score_one(
    model: BaseModel,
    X: pd.DataFrame,
    y: pd.Series,
    evaluation_config: Dict[str, Any],
    dataset_name: str,
) -> Dict[str, Any]:
    """Evaluate a single fitted model (module-level, picklable for joblib)."""
    return ModelEvaluator(evaluation_config).evaluate(model, X, y, dataset_name)


def train_models(
    specs: List[ModelSpec],
    X: pd.DataFrame,
    y: pd.Series,
    random_state: int = 42,
    n_jobs: int = -1,
    backend: str = 'loky',
) -> List[BaseModel]:
    """
    Train every spec in parallel.

    Returns:
        Fitted models in the order of ``specs``
    """
    logger.info(f"TRAIN | Training {len(specs)} models")
    models = parallel_map(
        _train_one, specs, n_jobs=n_jobs, backend=backend,
        X=X, y=y, random_state=random_state,
    )
    logger.info(f"TRAIN | {len(models)} models fitted")
    return models


def score_models(
    models: List[BaseModel],
    X: pd.DataFrame,
    y: pd.Series,
    evaluation_config: Dict[str, Any],
    dataset_name: str = 'test',
    n_jobs: int = -1,
    backend: str = 'loky',
) -> List[Dict[str, Any]]:
    """
    Score every model in parallel.

    Returns:
        Evaluation results in the order of ``models``
    """
    logger.info(f"SCORE | Scoring {len(models)} models on {dataset_name}")
    return parallel_map(
        _score_one, models, n_jobs=n_jobs, backend=backend,
        X=X, y=y, evaluation_config=evaluation_config, dataset_name=dataset_name,
    )
