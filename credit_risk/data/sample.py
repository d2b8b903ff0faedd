"""
Sample Data Generator

Synthetic credit accounts with a known relationship between the predictors
and default, for demos and tests.
"""

from pathlib import Path
from typing import Dict
import logging

import numpy as np
import pandas as pd


logger = logging.getLogger(__name__)

RANDOM_SEED = 42

# Effect of each standardized predictor on the log-odds of default
RISK_WEIGHTS: Dict[str, float] = {
    'age': -0.35,
    'income': -0.45,
    'loan_amount': 0.30,
    'loan_term_months': 0.20,
    'credit_history_months': -0.40,
    'num_open_accounts': 0.10,
    'num_delinquencies': 0.75,
    'debt_to_income': 0.60,
    'utilization': 0.55,
    'home_owner': -0.25,
    'employment_years': -0.20,
}


def _standardize(values: np.ndarray) -> np.ndarray:
    std = values.std()
    return (values - values.mean()) / std if std > 0 else values * 0.0


def generate_credit_data(
    n_rows: int = 5000,
    bad_rate: float = 0.20,
    seed: int = RANDOM_SEED,
    missing_rate: float = 0.0,
    id_prefix: str = 'ACC',
) -> pd.DataFrame:
    """
    Generate synthetic credit accounts.

    Default probability is a logistic function of the weighted,
    standardized predictors (``RISK_WEIGHTS``); the intercept is chosen so
    the expected bad rate is close to ``bad_rate``.

    Args:
        n_rows: Number of accounts
        bad_rate: Target share of defaults
        seed: Random seed
        missing_rate: Share of predictor cells set to NaN
        id_prefix: Prefix of ``account_id``

    Returns:
        DataFrame with ``account_id``, the predictors and ``is_bad``
    """
    rng = np.random.default_rng(seed)

    age = rng.integers(21, 70, n_rows)
    income = np.round(rng.lognormal(mean=10.6, sigma=0.5, size=n_rows), -2)
    loan_amount = np.round(rng.gamma(shape=2.0, scale=7500.0, size=n_rows), 2)
    loan_term_months = rng.choice([12, 24, 36, 48, 60], size=n_rows)
    credit_history_months = np.clip((age - 18) * 12 - rng.integers(0, 120, n_rows), 0, None)
    num_open_accounts = rng.poisson(4, n_rows)
    num_delinquencies = rng.poisson(0.4, n_rows)
    debt_to_income = np.round(np.clip(rng.beta(2, 5, n_rows) + loan_amount / income / 10, 0, 1.5), 4)
    utilization = np.round(rng.beta(2, 3, n_rows), 4)
    home_owner = rng.binomial(1, 0.45, n_rows)
    employment_years = np.clip(rng.normal(8, 6, n_rows), 0, age - 18).round(1)

    df = pd.DataFrame({
        'account_id': [f"{id_prefix}_{i:08d}" for i in range(1, n_rows + 1)],
        'age': age,
        'income': income,
        'loan_amount': loan_amount,
        'loan_term_months': loan_term_months,
        'credit_history_months': credit_history_months,
        'num_open_accounts': num_open_accounts,
        'num_delinquencies': num_delinquencies,
        'debt_to_income': debt_to_income,
        'utilization': utilization,
        'home_owner': home_owner,
        'employment_years': employment_years,
    })

    log_odds = np.zeros(n_rows)
    for col, weight in RISK_WEIGHTS.items():
        log_odds += weight * _standardize(df[col].to_numpy(dtype=float))
    log_odds += rng.normal(0, 0.5, n_rows)
    log_odds += np.log(bad_rate / (1 - bad_rate))

    prob = 1.0 / (1.0 + np.exp(-log_odds))
    df['is_bad'] = rng.binomial(1, prob)

    if missing_rate > 0:
        predictors = list(RISK_WEIGHTS)
        mask = rng.random((n_rows, len(predictors))) < missing_rate
        df[predictors] = df[predictors].astype(float).mask(mask)

    logger.info(
        f"SAMPLE | Generated {n_rows:,} accounts, bad rate {df['is_bad'].mean():.2%}"
    )
    return df


def write_sample_csv(path: str, n_rows: int = 5000, seed: int = RANDOM_SEED,
                     bad_rate: float = 0.20, missing_rate: float = 0.0) -> pd.DataFrame:
    """Generate accounts and write them to a CSV file."""
    df = generate_credit_data(n_rows=n_rows, bad_rate=bad_rate, seed=seed, missing_rate=missing_rate)
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(out, index=False)
    logger.info(f"SAMPLE | Wrote {out}")
    return df
