"""
Model Store

Serializes a fitted model with a JSON metadata sidecar and loads it back
for later scoring.
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional
import json
import logging

from credit_risk.core.exceptions import ArtifactError
from credit_risk.models.base_model import BaseModel
from credit_risk.models.model_factory import ModelFactory


logger = logging.getLogger(__name__)


def metadata_path(model_path: str) -> Path:
    """Sidecar location: the model path with '.json' appended."""
    p = Path(model_path)
    return p.with_name(p.name + ".json")


def save_model(
    model: BaseModel,
    path: str,
    metadata: Optional[Dict[str, Any]] = None,
) -> Path:
    """
    Write the model artifact and its metadata sidecar.

    Args:
        model: Fitted model
        path: Artifact path (joblib)
        metadata: Extra keys for the sidecar, e.g. test metrics

    Returns:
        Path to the model artifact
    """
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    model.save(str(out_path))

    sidecar = {
        'model_name': model.name,
        'model_type': model.model_type,
        'params': model.get_params(),
        'feature_names': model.feature_names,
        'saved_at': datetime.now().isoformat(),
    }
    if metadata:
        sidecar.update(metadata)

    with open(metadata_path(out_path), 'w', encoding='utf-8') as f:
        json.dump(sidecar, f, indent=2, default=str)

    logger.info(f"SAVE | {model.name} written to {out_path}")
    return out_path


def load_model(path: str) -> BaseModel:
    """
    Load a model written by ``save_model``.

    Raises:
        ArtifactError: If the file is missing or not a model artifact
    """
    if not Path(path).exists():
        raise ArtifactError(f"Model file not found: {path}", artifact_path=str(path))

    model = ModelFactory.load(str(path))
    logger.info(f"LOAD | {model.name} ({model.model_type}) loaded from {path}")
    return model


def read_model_metadata(path: str) -> Dict[str, Any]:
    """Read the metadata sidecar of a saved model."""
    sidecar = metadata_path(path)
    if not sidecar.exists():
        raise ArtifactError(f"Model metadata not found: {sidecar}", artifact_path=str(sidecar))
    with open(sidecar, 'r', encoding='utf-8') as f:
        return json.load(f)
