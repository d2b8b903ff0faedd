"""
Output Manager

One directory per walkthrough run:

    {base_dir}/{run_id}/
        config/     frozen config snapshot
        models/     best model (and optionally every model) + metadata sidecars
        reports/    comparison CSV, Excel workbook, charts
        logs/       walkthrough.log
        run_metadata.json

``run_id`` is ``YYYYMMDD_HHMMSS_<6 hex chars of the config hash>`` so two runs
with different settings started in the same second never collide.
"""

from datetime import datetime
from importlib import metadata as importlib_metadata
from pathlib import Path
from typing import Any, Dict, Optional
import hashlib
import json
import logging
import platform
import sys

import pandas as pd

from credit_risk.config.loader import save_config
from credit_risk.config.schema import WalkthroughConfig


logger = logging.getLogger(__name__)

RUN_SUBDIRS = ["config", "models", "reports", "logs"]

# Distributions whose versions are recorded with every run
TRACKED_PACKAGES = [
    "pandas", "numpy", "scikit-learn", "xgboost", "joblib", "pydantic", "pyarrow",
]

HASH_CHUNK_BYTES = 1 << 20


def _installed_version(distribution: str) -> str:
    try:
        return importlib_metadata.version(distribution)
    except importlib_metadata.PackageNotFoundError:
        return "not installed"


def _file_fingerprint(path: str) -> str:
    """MD5 of the raw input file bytes, or 'unknown' when it cannot be read."""
    digest = hashlib.md5()
    try:
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(HASH_CHUNK_BYTES), b""):
                digest.update(chunk)
    except OSError as e:
        logger.debug("Input fingerprint skipped for %s: %s", path, e)
        return "unknown"
    return digest.hexdigest()


def _write_json(path: Path, payload: Any) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, default=str)


class OutputManager:
    """
    Owns the run directory, its artifacts and the run status.

    Args:
        config: The walkthrough configuration
        run_start: Run start time (defaults to now)
    """

    def __init__(self, config: WalkthroughConfig, run_start: Optional[datetime] = None):
        self._config = config
        self._run_start = run_start or datetime.now()
        self._run_end: Optional[datetime] = None
        self._status = "running"

        config_hash = hashlib.md5(config.model_dump_json().encode("utf-8")).hexdigest()
        self._run_id = f"{self._run_start:%Y%m%d_%H%M%S}_{config_hash[:6]}"
        self._run_dir = Path(config.output.base_dir) / self._run_id

        for name in RUN_SUBDIRS:
            self.subdir(name)
        logger.info("Output directory: %s", self._run_dir)

    @property
    def run_id(self) -> str:
        return self._run_id

    @property
    def run_dir(self) -> Path:
        return self._run_dir

    @property
    def status(self) -> str:
        return self._status

    def subdir(self, name: str) -> Path:
        """Directory inside the run dir, created on demand."""
        path = self._run_dir / name
        path.mkdir(parents=True, exist_ok=True)
        return path

    def save_config_snapshot(self) -> Path:
        """Write the frozen config to ``config/walkthrough_config.yaml``."""
        path = self.subdir("config") / "walkthrough_config.yaml"
        save_config(self._config, str(path))
        return path

    def save_artifact(self, name: str, obj: Any, fmt: str = "csv", subdir: str = "reports") -> Path:
        """
        Save a report artifact.

        DataFrames go out as ``csv`` or ``parquet``; ``json`` dumps any
        JSON-compatible object; anything else is written as text with
        ``fmt`` as the file extension.

        Returns:
            Path of the written file
        """
        path = self.subdir(subdir) / f"{name}.{fmt}"
        is_frame = isinstance(obj, pd.DataFrame)

        if fmt == "csv" and is_frame:
            obj.to_csv(path, index=False)
        elif fmt == "parquet" and is_frame:
            obj.to_parquet(path, index=False)
        elif fmt == "json":
            _write_json(path, obj)
        else:
            path.write_text(str(obj), encoding="utf-8")

        logger.debug("Artifact saved: %s", path)
        return path

    def save_run_metadata(self, extra: Optional[Dict[str, Any]] = None) -> Path:
        """
        Write ``run_metadata.json``: environment, timing, status and the
        fingerprint of the input CSV, plus any ``extra`` keys.
        """
        run_end = self._run_end or datetime.now()

        payload: Dict[str, Any] = {
            "run_id": self._run_id,
            "status": self._status,
            "run_start": self._run_start.isoformat(),
            "run_end": run_end.isoformat(),
            "duration_seconds": round((run_end - self._run_start).total_seconds(), 2),
            "input_file": self._config.data.csv_path,
            "input_file_hash": _file_fingerprint(self._config.data.csv_path),
            "python_version": sys.version,
            "package_versions": {p: _installed_version(p) for p in TRACKED_PACKAGES},
            "os_info": {
                "system": platform.system(),
                "release": platform.release(),
                "machine": platform.machine(),
            },
        }
        payload.update(extra or {})

        path = self._run_dir / "run_metadata.json"
        _write_json(path, payload)
        logger.info("Run metadata saved to %s", path)
        return path

    def get_model_path(self, filename: Optional[str] = None) -> Path:
        """Path for a serialized model inside ``models/``."""
        return self.subdir("models") / (filename or self._config.output.model_filename)

    def get_log_path(self) -> Path:
        return self._run_dir / "logs" / "walkthrough.log"

    def mark_complete(self, status: str = "success") -> None:
        self._status = status
        self._run_end = datetime.now()

    def mark_failed(self) -> None:
        self.mark_complete(status="failed")
