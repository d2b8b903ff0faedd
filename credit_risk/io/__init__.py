"""
IO Module

Run directory management, model persistence and scoring.
"""

from credit_risk.io.output_manager import OutputManager
from credit_risk.io.model_store import save_model, load_model, read_model_metadata
from credit_risk.io.scoring import score_dataset, score_file

__all__ = [
    "OutputManager",
    "save_model",
    "load_model",
    "read_model_metadata",
    "score_dataset",
    "score_file",
]
