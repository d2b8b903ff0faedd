"""
Experiment Module

Builds the training calls, fans them out in parallel and runs the full
walkthrough.
"""

from credit_risk.experiment.specs import (
    ModelSpec,
    build_model_specs,
    build_ensemble_spec,
    build_experiment_specs,
)
from credit_risk.experiment.parallel import parallel_map, train_models, score_models
from credit_risk.experiment.walkthrough import (
    CreditRiskWalkthrough,
    WalkthroughResult,
    run_walkthrough,
)

__all__ = [
    "ModelSpec",
    "build_model_specs",
    "build_ensemble_spec",
    "build_experiment_specs",
    "parallel_map",
    "train_models",
    "score_models",
    "CreditRiskWalkthrough",
    "WalkthroughResult",
    "run_walkthrough",
]
