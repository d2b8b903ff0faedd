"""
Credit Risk Walkthrough - Core Package

This package provides the shared infrastructure:
- Base class for components
- Logging utilities
- Custom exceptions
"""

from credit_risk.core.base import WalkthroughComponent
from credit_risk.core.logger import log_step, setup_logging
from credit_risk.core.exceptions import (
    WalkthroughError,
    ConfigurationError,
    DataValidationError,
    DataReaderError,
    ModelTrainingError,
    EvaluationError,
    ArtifactError,
)

__all__ = [
    # Base classes
    "WalkthroughComponent",
    # Logging
    "log_step",
    "setup_logging",
    # Exceptions
    "WalkthroughError",
    "ConfigurationError",
    "DataValidationError",
    "DataReaderError",
    "ModelTrainingError",
    "EvaluationError",
    "ArtifactError",
]
