"""
Model Specs

Turns the experiment configuration into the ordered list of training calls.
"""

from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field
import logging

from sklearn.model_selection import ParameterGrid

from credit_risk.config.schema import EnsembleConfig, ExperimentConfig
from credit_risk.core.exceptions import ConfigurationError


logger = logging.getLogger(__name__)


@dataclass
class ModelSpec:
    """One training call: a named algorithm with its parameters."""
    name: str
    algorithm: str
    params: Dict[str, Any] = field(default_factory=dict)
    varied: Dict[str, Any] = field(default_factory=dict)
    options: Dict[str, Any] = field(default_factory=dict)

    def to_model_config(self, random_state: int) -> Dict[str, Any]:
        """Config dict understood by ``ModelFactory.create``."""
        config = {'params': dict(self.params), 'random_state': random_state}
        config.update(self.options)
        return config

    def describe(self) -> str:
        """Short label of the grid values, e.g. 'C=0.1'."""
        if not self.varied:
            return self.algorithm
        return ", ".join(f"{k}={v}" for k, v in self.varied.items())


def build_model_specs(
    algorithm: str,
    base_params: Optional[Dict[str, Any]] = None,
    grid: Optional[Dict[str, List[Any]]] = None,
    name_prefix: Optional[str] = None,
) -> List[ModelSpec]:
    """
    Expand a hyperparameter grid into one spec per combination.

    Grid values override ``base_params``. The order follows
    ``sklearn.model_selection.ParameterGrid`` and is deterministic.

    Args:
        algorithm: Registered model type
        base_params: Parameters shared by every combination
        grid: Parameter name to list of values
        name_prefix: Prefix of the spec names (defaults to the algorithm)

    Returns:
        List of ModelSpec; a single spec when the grid is empty
    """
    base_params = base_params or {}
    prefix = name_prefix or algorithm

    combinations = list(ParameterGrid(grid)) if grid else [{}]

    specs = []
    for i, combo in enumerate(combinations, start=1):
        params = dict(base_params)
        params.update(combo)
        name = prefix if len(combinations) == 1 else f"{prefix}_{i:02d}"
        specs.append(ModelSpec(name=name, algorithm=algorithm, params=params, varied=dict(combo)))

    return specs


def build_ensemble_spec(ensemble: EnsembleConfig) -> ModelSpec:
    """Spec for the voting ensemble."""
    return ModelSpec(
        name=ensemble.name,
        algorithm='ensemble',
        options={
            'members': [m.model_dump() for m in ensemble.members],
            'voting': ensemble.voting,
            'weights': list(ensemble.weights) if ensemble.weights else None,
        },
    )


def build_experiment_specs(experiment: ExperimentConfig) -> List[ModelSpec]:
    """
    All training calls of the walkthrough, in configuration order.

    Args:
        experiment: Experiment configuration

    Returns:
        Specs of every enabled run followed by the ensemble (if enabled)

    Raises:
        ConfigurationError: If two specs share a name or nothing is enabled
    """
    specs: List[ModelSpec] = []
    for run in experiment.runs:
        if not run.enabled:
            logger.info(f"SPECS | Skipping disabled run {run.name or run.algorithm}")
            continue
        specs.extend(build_model_specs(run.algorithm, run.params, run.grid, run.name))

    if experiment.ensemble.enabled:
        specs.append(build_ensemble_spec(experiment.ensemble))

    if not specs:
        raise ConfigurationError("No model runs enabled")

    names = [s.name for s in specs]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise ConfigurationError(
            f"Duplicate model names: {duplicates}. Give repeated algorithms a 'name'.",
            details={'duplicates': duplicates},
        )

    logger.info(f"SPECS | {len(specs)} training calls: {names}")
    return specs
