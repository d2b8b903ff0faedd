"""
Tests for the configuration schema and loader.
"""

import json
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from credit_risk.config.loader import load_config, save_config
from credit_risk.config.schema import (
    DataConfig,
    EnsembleConfig,
    ModelRunConfig,
    ParallelConfig,
    SplittingConfig,
    WalkthroughConfig,
)
from credit_risk.core.exceptions import ConfigurationError


REPO_CONFIG = Path(__file__).resolve().parents[2] / "config" / "walkthrough.yaml"


class TestSchemaDefaults:

    def test_empty_config_is_valid(self):
        config = WalkthroughConfig()

        assert config.data.target_column == "is_bad"
        assert config.splitting.test_size == 0.30
        assert config.evaluation.primary_metric == "auc"
        assert config.parallel.backend == "loky"
        assert [r.algorithm for r in config.experiment.runs] == [
            "logistic_regression", "fast_forest", "fast_trees",
        ]
        assert config.experiment.ensemble.enabled is True

    def test_config_is_frozen(self):
        config = WalkthroughConfig()
        with pytest.raises(ValidationError):
            config.splitting.test_size = 0.5

    def test_resolved_parquet_path_default(self):
        data = DataConfig(csv_path="data/credit.csv")
        assert Path(data.resolved_parquet_path) == Path("data/credit.parquet")

    def test_resolved_parquet_path_explicit(self):
        data = DataConfig(csv_path="a.csv", parquet_path="cache/a.parquet")
        assert data.resolved_parquet_path == "cache/a.parquet"


class TestSchemaValidation:

    @pytest.mark.parametrize("test_size", [0.0, 1.0, -0.1, 1.5])
    def test_test_size_out_of_range(self, test_size):
        with pytest.raises(ValidationError):
            SplittingConfig(test_size=test_size)

    def test_unknown_algorithm(self):
        with pytest.raises(ValidationError):
            ModelRunConfig(algorithm="neural_net")

    def test_empty_grid_values_rejected(self):
        with pytest.raises(ValidationError, match="at least one value"):
            ModelRunConfig(algorithm="fast_forest", grid={"n_estimators": []})

    def test_ensemble_weights_must_match_members(self):
        with pytest.raises(ValidationError, match="weights"):
            EnsembleConfig(weights=[1.0, 2.0])

    def test_ensemble_needs_two_members(self):
        with pytest.raises(ValidationError, match="two members"):
            EnsembleConfig(members=[{"algorithm": "fast_trees"}])

    def test_disabled_ensemble_may_have_one_member(self):
        ens = EnsembleConfig(enabled=False, members=[{"algorithm": "fast_trees"}])
        assert len(ens.members) == 1

    def test_n_jobs_zero_rejected(self):
        with pytest.raises(ValidationError):
            ParallelConfig(n_jobs=0)

    def test_unknown_primary_metric(self):
        with pytest.raises(ValidationError):
            WalkthroughConfig(evaluation={"primary_metric": "r2"})


class TestLoadConfig:

    def test_no_yaml_gives_defaults(self):
        assert load_config() == WalkthroughConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(str(tmp_path / "missing.yaml"))

    def test_invalid_yaml(self, tmp_path):
        bad = tmp_path / "bad.yaml"
        bad.write_text("data: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_config(str(bad))

    def test_empty_yaml(self, tmp_path):
        empty = tmp_path / "empty.yaml"
        empty.write_text("", encoding="utf-8")
        assert load_config(str(empty)).data.target_column == "is_bad"

    def test_cli_overrides_dot_notation(self, tmp_path):
        cfg_file = tmp_path / "cfg.yaml"
        cfg_file.write_text(yaml.dump({"splitting": {"test_size": 0.2}}), encoding="utf-8")

        config = load_config(
            str(cfg_file),
            cli_overrides={
                "splitting.random_state": 7,
                "parallel.n_jobs": 2,
                "data.target_column": None,
            },
        )

        assert config.splitting.test_size == 0.2
        assert config.splitting.random_state == 7
        assert config.parallel.n_jobs == 2
        assert config.data.target_column == "is_bad"

    def test_nested_overrides_merge(self):
        config = load_config(overrides={"evaluation": {"threshold": 0.3}})
        assert config.evaluation.threshold == 0.3
        assert config.evaluation.primary_metric == "auc"

    def test_relative_csv_resolved_against_yaml_dir(self, tmp_path):
        (tmp_path / "data").mkdir()
        csv = tmp_path / "data" / "input.csv"
        csv.write_text("a,is_bad\n1,0\n", encoding="utf-8")
        cfg_file = tmp_path / "cfg.yaml"
        cfg_file.write_text(yaml.dump({"data": {"csv_path": "data/input.csv"}}), encoding="utf-8")

        config = load_config(str(cfg_file))
        assert Path(config.data.csv_path) == csv.resolve()

    def test_unresolvable_relative_path_kept(self, tmp_path):
        cfg_file = tmp_path / "cfg.yaml"
        cfg_file.write_text(yaml.dump({"data": {"csv_path": "nowhere/x.csv"}}), encoding="utf-8")

        config = load_config(str(cfg_file))
        assert config.data.csv_path == "nowhere/x.csv"

    def test_repository_config_loads(self):
        config = load_config(str(REPO_CONFIG))
        assert config.experiment.ensemble.voting == "soft"
        assert len(config.experiment.ensemble.members) == 3


class TestSaveConfig:

    def test_yaml_round_trip(self, tmp_path, walkthrough_config):
        path = tmp_path / "snap" / "config.yaml"
        save_config(walkthrough_config, str(path))

        assert load_config(str(path)) == walkthrough_config

    def test_json_output(self, tmp_path):
        path = tmp_path / "config.json"
        save_config(WalkthroughConfig(), str(path))

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["evaluation"]["primary_metric"] == "auc"
