"""
Test Suite for EDA Module
==========================

Smoke tests for the visualizations on the Agg backend.
"""

import pytest
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from covid_econ.preprocessing import clean_data
from covid_econ.eda import (
    plot_gdp_growth_by_country,
    plot_correlation_matrix,
    plot_distributions,
    generate_eda_report,
    print_correlation_insights,
)


@pytest.fixture
def cleaned_df(raw_df):
    return clean_data(raw_df)['data']


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close('all')


def test_line_per_country(cleaned_df):
    """Test the trend chart draws one line per country."""
    fig = plot_gdp_growth_by_country(cleaned_df)
    ax = fig.axes[0]

    assert len(ax.get_lines()) >= cleaned_df['country'].nunique()
    labels = [t.get_text() for t in ax.get_legend().get_texts()]
    assert set(cleaned_df['country'].unique()) <= set(labels)


def test_correlation_matrix(cleaned_df):
    """Test the heatmap covers the three indicators."""
    _, corr = plot_correlation_matrix(cleaned_df)

    assert list(corr.columns) == ['gdp_growth', 'unemployment_rate', 'poverty_rate']
    np.testing.assert_array_almost_equal(np.diag(corr.values), np.ones(3))
    # gdp growth is generated to fall with unemployment
    assert corr.loc['gdp_growth', 'unemployment_rate'] < 0


def test_distributions_small_sample(cleaned_df):
    """Test distributions render when too few rows for a normality test."""
    fig = plot_distributions(cleaned_df.iloc[:5])

    assert len(fig.axes) >= 3


def test_generate_eda_report(tmp_path, cleaned_df):
    """Test all figures are saved and statistics computed."""
    report = generate_eda_report(cleaned_df, output_dir=str(tmp_path / "figures"))

    assert len(report['figures']) == 4
    for name in report['figures']:
        assert (tmp_path / "figures" / name).exists()
    assert set(report['statistics']) == {'gdp_growth', 'unemployment_rate', 'poverty_rate'}
    assert pd.DataFrame(report['correlation_matrix']).shape == (3, 3)


def test_generate_eda_report_without_saving(tmp_path, cleaned_df):
    """Test the report renders without an output directory."""
    report = generate_eda_report(cleaned_df, output_dir=None)

    assert len(report['figures']) == 4
    assert list(tmp_path.iterdir()) == []


def test_print_correlation_insights(capsys, cleaned_df):
    """Test strong correlations are listed."""
    corr = cleaned_df[['gdp_growth', 'unemployment_rate', 'poverty_rate']].corr()

    print_correlation_insights(corr, threshold=0.5)
    out = capsys.readouterr().out

    assert "gdp_growth ↔ unemployment_rate" in out
