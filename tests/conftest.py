"""Shared fixtures for the test suite."""

import matplotlib
matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest


def make_dataset(n_countries: int = 4, n_periods: int = 10, seed: int = 42) -> pd.DataFrame:
    """Synthetic indicator table with a noisy linear GDP relationship."""
    rng = np.random.default_rng(seed)
    countries = [f"Country_{i}" for i in range(n_countries)]
    dates = pd.date_range("2020-01-01", periods=n_periods, freq="MS").strftime("%Y-%m-%d")

    rows = []
    for country in countries:
        for date in dates:
            unemployment = rng.uniform(3, 15)
            poverty = rng.uniform(5, 30)
            gdp = 4.0 - 0.6 * unemployment - 0.1 * poverty + rng.normal(0, 0.5)
            rows.append({
                "country": country,
                "date": date,
                "gdp_growth": gdp,
                "unemployment_rate": unemployment,
                "poverty_rate": poverty,
            })
    return pd.DataFrame(rows)


@pytest.fixture
def raw_df():
    """Raw-looking dataset with text dates."""
    return make_dataset()


@pytest.fixture
def csv_path(tmp_path, raw_df):
    """Dataset written to a CSV file."""
    path = tmp_path / "covid_economic_impact.csv"
    raw_df.to_csv(path, index=False)
    return path
