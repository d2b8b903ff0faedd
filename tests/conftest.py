"""
Pytest Configuration and Shared Fixtures

Provides common fixtures for all test modules including:
- Model and walkthrough configurations
- Synthetic credit data with a known default relationship
- Pre-split train/test data
- A CSV input file and output directories under tmp_path
"""

import sys
from pathlib import Path
from typing import Any, Dict

import numpy as np
import pandas as pd
import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from credit_risk.config.schema import WalkthroughConfig
from credit_risk.data.sample import generate_credit_data


FEATURES = [
    'age', 'income', 'loan_amount', 'loan_term_months', 'credit_history_months',
    'num_open_accounts', 'num_delinquencies', 'debt_to_income', 'utilization',
    'home_owner', 'employment_years',
]


# ===================================================================
# CONFIGURATION FIXTURES
# ===================================================================

@pytest.fixture
def model_config() -> Dict[str, Any]:
    """Model config with a fixed seed."""
    return {'params': {}, 'random_state': 42}


@pytest.fixture
def small_trees_config() -> Dict[str, Any]:
    """Tree model config kept small so tests stay fast."""
    return {'params': {'n_estimators': 20, 'max_depth': 3}, 'random_state': 42}


@pytest.fixture
def walkthrough_config_dict(credit_csv, tmp_path) -> Dict[str, Any]:
    """Walkthrough config with a small grid, run sequentially."""
    return {
        'data': {
            'csv_path': str(credit_csv),
            'target_column': 'is_bad',
            'id_columns': ['account_id'],
        },
        'splitting': {'test_size': 0.3, 'random_state': 42, 'stratify': True},
        'experiment': {
            'runs': [
                {'algorithm': 'logistic_regression', 'grid': {'C': [0.1, 1.0]}},
                {
                    'algorithm': 'fast_forest',
                    'params': {'n_estimators': 20, 'max_depth': 4},
                },
                {
                    'algorithm': 'fast_trees',
                    'params': {'n_estimators': 20, 'max_depth': 3},
                    'grid': {'learning_rate': [0.1, 0.3]},
                },
            ],
            'ensemble': {
                'enabled': True,
                'voting': 'soft',
                'members': [
                    {'algorithm': 'logistic_regression'},
                    {'algorithm': 'fast_forest', 'params': {'n_estimators': 20, 'max_depth': 4}},
                    {'algorithm': 'fast_trees', 'params': {'n_estimators': 20, 'max_depth': 3}},
                ],
            },
        },
        'parallel': {'n_jobs': 1, 'backend': 'sequential'},
        'evaluation': {'threshold': 0.5, 'primary_metric': 'auc', 'n_deciles': 10},
        'output': {'base_dir': str(tmp_path / 'outputs')},
        'reproducibility': {'global_seed': 42},
    }


@pytest.fixture
def walkthrough_config(walkthrough_config_dict) -> WalkthroughConfig:
    return WalkthroughConfig(**walkthrough_config_dict)


# ===================================================================
# DATA FIXTURES
# ===================================================================

@pytest.fixture
def sample_credit_data() -> pd.DataFrame:
    """Synthetic credit accounts (600 rows, ~20% bad)."""
    return generate_credit_data(n_rows=600, bad_rate=0.2, seed=7)


@pytest.fixture
def binary_classification_data(sample_credit_data):
    """Features and target from the synthetic credit data."""
    X = sample_credit_data[FEATURES].astype(float)
    y = sample_credit_data['is_bad']
    return X, y


@pytest.fixture
def train_test_data(binary_classification_data):
    """(X_train, X_test, y_train, y_test) with a fixed 70/30 split."""
    from sklearn.model_selection import train_test_split

    X, y = binary_classification_data
    X_train, X_test, y_train, y_test = train_test_split(
        X, y, test_size=0.3, stratify=y, random_state=42
    )
    return (
        X_train.reset_index(drop=True),
        X_test.reset_index(drop=True),
        y_train.reset_index(drop=True),
        y_test.reset_index(drop=True),
    )


@pytest.fixture
def prediction_data():
    """Known labels and scores for metric tests."""
    y_true = np.array([0, 0, 0, 0, 0, 0, 1, 1, 1, 1])
    y_score = np.array([0.1, 0.2, 0.3, 0.35, 0.4, 0.6, 0.55, 0.7, 0.8, 0.9])
    return y_true, y_score


@pytest.fixture
def credit_csv(tmp_path, sample_credit_data) -> Path:
    """The synthetic data written as CSV."""
    path = tmp_path / 'data' / 'credit_risk.csv'
    path.parent.mkdir(parents=True, exist_ok=True)
    sample_credit_data.to_csv(path, index=False)
    return path


@pytest.fixture
def fitted_logistic(model_config, train_test_data):
    from credit_risk.models.logistic_model import LogisticRegressionModel

    X_train, _, y_train, _ = train_test_data
    return LogisticRegressionModel(model_config, name='logistic').fit(X_train, y_train)
