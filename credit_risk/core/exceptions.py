"""
Custom Exceptions for the Walkthrough

Provides a hierarchy of exceptions for the failure points of a run:
configuration, data import, training, evaluation and model artifacts.
"""

from typing import Any, Dict, List, Optional


class WalkthroughError(Exception):
    """
    Base exception for all walkthrough errors.

    All custom exceptions inherit from this class.
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        """
        Initialize the exception.

        Args:
            message: Error message
            details: Additional error details
            cause: Original exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        result = self.message
        if self.details:
            result += f" | Details: {self.details}"
        if self.cause:
            result += f" | Caused by: {self.cause}"
        return result

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "cause": str(self.cause) if self.cause else None
        }


class ConfigurationError(WalkthroughError):
    """
    Raised when there's a configuration error.

    Examples:
    - Config file not found
    - Invalid YAML
    - Values rejected by the schema
    """
    pass


class DataValidationError(WalkthroughError):
    """
    Raised when the loaded dataset cannot be used for training.

    Examples:
    - Missing target or predictor columns
    - Non-numeric predictors
    - Target that is not binary
    """

    def __init__(
        self,
        message: str,
        validation_errors: Optional[List[Dict[str, Any]]] = None,
        **kwargs
    ):
        """
        Initialize the data validation error.

        Args:
            message: Error message
            validation_errors: List of validation error details
            **kwargs: Additional arguments for parent class
        """
        super().__init__(message, **kwargs)
        self.validation_errors = validation_errors or []

    def __str__(self) -> str:
        result = super().__str__()
        if self.validation_errors:
            error_count = len(self.validation_errors)
            result += f" | {error_count} validation error(s)"
        return result


class DataReaderError(WalkthroughError):
    """
    Raised when reading or converting the input data fails.

    Examples:
    - CSV file not found
    - Malformed CSV
    - Parquet conversion failure
    """

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.source = source

    def __str__(self) -> str:
        result = super().__str__()
        if self.source:
            result += f" | Source: {self.source}"
        return result


class ModelTrainingError(WalkthroughError):
    """
    Raised when model training or prediction fails.

    Examples:
    - Training data issues
    - Invalid hyperparameters
    - Predicting with an unfitted model
    """

    def __init__(
        self,
        message: str,
        model_name: Optional[str] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.model_name = model_name

    def __str__(self) -> str:
        result = super().__str__()
        if self.model_name:
            result += f" | Model: {self.model_name}"
        return result


class EvaluationError(WalkthroughError):
    """
    Raised when model evaluation fails.

    Examples:
    - Only one class present in the scored data
    - Unknown comparison metric
    - Empty result list
    """

    def __init__(
        self,
        message: str,
        metric_name: Optional[str] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.metric_name = metric_name


class ArtifactError(WalkthroughError):
    """
    Raised when model artifact operations fail.

    Examples:
    - Model file not found
    - Artifact written by an unknown model type
    - Storage permission error
    """

    def __init__(
        self,
        message: str,
        artifact_path: Optional[str] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.artifact_path = artifact_path
