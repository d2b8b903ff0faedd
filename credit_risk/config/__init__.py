"""
Config Module

Pydantic-based configuration for the credit risk walkthrough.
"""

from credit_risk.config.schema import (
    WalkthroughConfig,
    DataConfig,
    SplittingConfig,
    ModelRunConfig,
    EnsembleMemberConfig,
    EnsembleConfig,
    ExperimentConfig,
    ParallelConfig,
    EvaluationConfig,
    OutputConfig,
    ReproducibilityConfig,
)
from credit_risk.config.loader import load_config, save_config

__all__ = [
    "WalkthroughConfig",
    "DataConfig",
    "SplittingConfig",
    "ModelRunConfig",
    "EnsembleMemberConfig",
    "EnsembleConfig",
    "ExperimentConfig",
    "ParallelConfig",
    "EvaluationConfig",
    "OutputConfig",
    "ReproducibilityConfig",
    "load_config",
    "save_config",
]
