"""
Models Module

Credit risk classifiers and the factory that creates them.
"""

from credit_risk.models.base_model import BaseModel
from credit_risk.models.model_factory import ModelFactory
from credit_risk.models.logistic_model import LogisticRegressionModel
from credit_risk.models.fast_forest_model import FastForestModel
from credit_risk.models.fast_trees_model import FastTreesModel
from credit_risk.models.ensemble_model import EnsembleModel

__all__ = [
    "BaseModel",
    "ModelFactory",
    "LogisticRegressionModel",
    "FastForestModel",
    "FastTreesModel",
    "EnsembleModel",
]
