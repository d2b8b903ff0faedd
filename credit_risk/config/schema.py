"""
Pydantic Configuration Schema

Defines all configuration models for the credit risk walkthrough.
All fields have defaults so an empty YAML file yields a runnable config.
"""

from pathlib import Path
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field, model_validator


Algorithm = Literal["logistic_regression", "fast_forest", "fast_trees"]

ComparisonMetric = Literal[
    "auc", "gini", "ks_statistic", "accuracy", "precision", "recall", "f1_score"
]


class DataConfig(BaseModel):
    """Input data configuration."""

    model_config = {"frozen": True}

    csv_path: str = "data/credit_risk.csv"
    parquet_path: Optional[str] = None
    overwrite_parquet: bool = False
    csv_separator: str = ","
    target_column: str = "is_bad"
    feature_columns: Optional[List[str]] = None
    id_columns: List[str] = Field(default_factory=lambda: ["account_id"])
    drop_missing: bool = True

    @property
    def resolved_parquet_path(self) -> str:
        """Parquet path, defaulting to the CSV path with a .parquet suffix."""
        if self.parquet_path:
            return self.parquet_path
        return str(Path(self.csv_path).with_suffix(".parquet"))


class SplittingConfig(BaseModel):
    """Train/test splitting configuration."""

    model_config = {"frozen": True}

    test_size: float = Field(default=0.30, gt=0.0, lt=1.0)
    random_state: int = 42
    stratify: bool = True


class ModelRunConfig(BaseModel):
    """One algorithm with its base parameters and a hyperparameter grid.

    Every combination in ``grid`` becomes a separate training call; an empty
    grid trains the algorithm once with ``params``.
    """

    model_config = {"frozen": True}

    algorithm: Algorithm
    enabled: bool = True
    name: Optional[str] = None
    params: Dict[str, Any] = Field(default_factory=dict)
    grid: Dict[str, List[Any]] = Field(default_factory=dict)

    @model_validator(mode="after")
    def grid_values_not_empty(self) -> "ModelRunConfig":
        empty = [k for k, v in self.grid.items() if len(v) == 0]
        if empty:
            raise ValueError(f"Grid entries must list at least one value: {empty}")
        return self


class EnsembleMemberConfig(BaseModel):
    """A single learner inside the ensemble."""

    model_config = {"frozen": True}

    algorithm: Algorithm
    params: Dict[str, Any] = Field(default_factory=dict)


class EnsembleConfig(BaseModel):
    """Voting ensemble over several learners."""

    model_config = {"frozen": True}

    enabled: bool = True
    name: str = "ensemble"
    voting: Literal["soft", "hard"] = "soft"
    members: List[EnsembleMemberConfig] = Field(
        default_factory=lambda: [
            EnsembleMemberConfig(algorithm="logistic_regression"),
            EnsembleMemberConfig(algorithm="fast_forest"),
            EnsembleMemberConfig(algorithm="fast_trees"),
        ]
    )
    weights: Optional[List[float]] = None

    @model_validator(mode="after")
    def members_and_weights_valid(self) -> "EnsembleConfig":
        if self.enabled and len(self.members) < 2:
            raise ValueError("An ensemble needs at least two members")
        if self.weights is not None and len(self.weights) != len(self.members):
            raise ValueError(
                f"weights ({len(self.weights)}) must match members ({len(self.members)})"
            )
        return self


class ExperimentConfig(BaseModel):
    """All training runs of the walkthrough."""

    model_config = {"frozen": True}

    runs: List[ModelRunConfig] = Field(
        default_factory=lambda: [
            ModelRunConfig(
                algorithm="logistic_regression",
                grid={"C": [0.1, 1.0, 10.0]},
            ),
            ModelRunConfig(
                algorithm="fast_forest",
                grid={"n_estimators": [100, 300], "min_samples_leaf": [1, 10]},
            ),
            ModelRunConfig(
                algorithm="fast_trees",
                grid={"n_estimators": [100, 300], "learning_rate": [0.05, 0.2]},
            ),
        ]
    )
    ensemble: EnsembleConfig = Field(default_factory=EnsembleConfig)


class ParallelConfig(BaseModel):
    """Fan-out of training and scoring calls."""

    model_config = {"frozen": True}

    n_jobs: int = -1
    backend: Literal["loky", "threading", "multiprocessing", "sequential"] = "loky"

    @model_validator(mode="after")
    def n_jobs_not_zero(self) -> "ParallelConfig":
        if self.n_jobs == 0:
            raise ValueError("n_jobs must be a positive count or negative (all cores)")
        return self


class EvaluationConfig(BaseModel):
    """Scoring and comparison configuration."""

    model_config = {"frozen": True}

    threshold: float = Field(default=0.5, gt=0.0, lt=1.0)
    primary_metric: ComparisonMetric = "auc"
    n_deciles: int = Field(default=10, ge=2)


class OutputConfig(BaseModel):
    """Output configuration."""

    model_config = {"frozen": True, "protected_namespaces": ()}

    base_dir: str = "outputs/walkthrough"
    model_filename: str = "best_model.joblib"
    save_all_models: bool = False
    save_comparison: bool = True
    generate_excel: bool = True
    generate_roc_chart: bool = True


class ReproducibilityConfig(BaseModel):
    """Reproducibility and logging configuration."""

    model_config = {"frozen": True}

    global_seed: int = 42
    save_config: bool = True
    save_metadata: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


class WalkthroughConfig(BaseModel):
    """Top-level walkthrough configuration combining all sections."""

    model_config = {"frozen": True}

    data: DataConfig = Field(default_factory=DataConfig)
    splitting: SplittingConfig = Field(default_factory=SplittingConfig)
    experiment: ExperimentConfig = Field(default_factory=ExperimentConfig)
    parallel: ParallelConfig = Field(default_factory=ParallelConfig)
    evaluation: EvaluationConfig = Field(default_factory=EvaluationConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    reproducibility: ReproducibilityConfig = Field(default_factory=ReproducibilityConfig)
