"""
Model Factory

Factory pattern for creating model instances.
"""

from typing import Any, Dict, Optional, Type

from credit_risk.models.base_model import BaseModel, read_artifact
from credit_risk.models.logistic_model import LogisticRegressionModel
from credit_risk.models.fast_forest_model import FastForestModel
from credit_risk.models.fast_trees_model import FastTreesModel
from credit_risk.models.ensemble_model import EnsembleModel
from credit_risk.core.exceptions import ArtifactError


class ModelFactory:
    """
    Factory for creating model instances.

    Supports dynamic model registration and creation.
    """

    _models: Dict[str, Type[BaseModel]] = {
        'logistic_regression': LogisticRegressionModel,
        'fast_forest': FastForestModel,
        'fast_trees': FastTreesModel,
        'ensemble': EnsembleModel,
    }

    @classmethod
    def register(cls, name: str, model_class: Type[BaseModel]) -> None:
        """
        Register a new model type.

        Args:
            name: Model name for lookup
            model_class: Model class
        """
        if not issubclass(model_class, BaseModel):
            raise TypeError(f"{model_class} must be a subclass of BaseModel")
        cls._models[name.lower()] = model_class

    @classmethod
    def create(
        cls,
        model_type: str,
        config: Optional[Dict[str, Any]] = None,
        name: Optional[str] = None
    ) -> BaseModel:
        """
        Create a model instance.

        Args:
            model_type: Type of model ('logistic_regression', 'fast_forest',
                        'fast_trees', 'ensemble')
            config: Model configuration
            name: Optional instance name

        Returns:
            Model instance
        """
        model_type = model_type.lower()

        if model_type not in cls._models:
            raise ValueError(
                f"Unknown model type: {model_type}. "
                f"Available: {list(cls._models.keys())}"
            )

        model_class = cls._models[model_type]
        return model_class(config, name)

    @classmethod
    def load(cls, path: str) -> BaseModel:
        """
        Load a saved model, picking the class from the artifact.

        Args:
            path: Path written by ``BaseModel.save``

        Returns:
            Fitted model instance
        """
        artifact = read_artifact(path)

        model_class = cls.get_model_class(artifact['model_type'])
        if model_class is None:
            raise ArtifactError(
                f"Unknown model type in artifact: {artifact['model_type']}",
                artifact_path=str(path),
            )

        model = model_class(artifact.get('config', {}), artifact.get('name'))
        model.restore(artifact, path)
        model.logger.info(f"LOAD | {model.name} read from {path}")
        return model

    @classmethod
    def list_models(cls) -> list:
        """List all available model types."""
        return list(cls._models.keys())

    @classmethod
    def get_model_class(cls, model_type: str) -> Optional[Type[BaseModel]]:
        """Get model class by type."""
        return cls._models.get(model_type.lower())
