"""
Test Suite for Data Loader Module
==================================

Tests for configuration loading, CSV ingestion and validation.
"""

import pytest
import numpy as np
import pandas as pd

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from covid_econ import REQUIRED_COLUMNS
from covid_econ.data_loader import load_config, load_data, validate_data, get_data_summary


HEADER = "country,date,gdp_growth,unemployment_rate,poverty_rate\n"


class TestLoadConfig:
    """Tests for load_config."""

    def test_load_config(self, tmp_path):
        """Test YAML config is parsed into a dict."""
        path = tmp_path / "config.yaml"
        path.write_text("split:\n  train_split: 0.8\n  random_state: 42\n")

        config = load_config(str(path))

        assert config['split']['train_split'] == 0.8
        assert config['split']['random_state'] == 42

    def test_empty_config(self, tmp_path):
        """Test an empty file yields an empty dict."""
        path = tmp_path / "config.yaml"
        path.write_text("")

        assert load_config(str(path)) == {}

    def test_missing_config(self, tmp_path):
        """Test missing config raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_project_config(self):
        """Test the shipped config has the expected defaults."""
        config = load_config(str(Path(__file__).parent.parent / "config" / "config.yaml"))

        assert config['split']['train_split'] == 0.8
        assert config['split']['random_state'] == 42
        assert config['model']['features'] == ['unemployment_rate', 'poverty_rate']


class TestLoadData:
    """Tests for load_data."""

    def test_load_valid_csv(self, csv_path, raw_df):
        """Test a valid CSV loads with float indicator columns."""
        df = load_data(str(csv_path))

        assert list(df.columns) == REQUIRED_COLUMNS
        assert len(df) == len(raw_df)
        for col in ['gdp_growth', 'unemployment_rate', 'poverty_rate']:
            assert df[col].dtype == np.float64

    def test_empty_cells_become_nan(self, tmp_path):
        """Test empty cells load as missing values rather than failing."""
        path = tmp_path / "data.csv"
        path.write_text(
            HEADER
            + "A,2020-01-01,-3.5,,20.0\n"
            + "B,2020-01-01,1.2,6.0,\n"
        )

        df = load_data(str(path))

        assert df['unemployment_rate'].isnull().sum() == 1
        assert df['poverty_rate'].isnull().sum() == 1

    def test_missing_file(self, tmp_path):
        """Test missing data file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="Data file not found"):
            load_data(str(tmp_path / "missing.csv"))

    def test_missing_columns(self, tmp_path):
        """Test a CSV without required columns is rejected."""
        path = tmp_path / "data.csv"
        path.write_text("country,date,gdp_growth\nA,2020-01-01,1.0\n")

        with pytest.raises(ValueError, match="Missing required columns"):
            load_data(str(path))

    def test_non_numeric_indicator(self, tmp_path):
        """Test text in an indicator column is a parse error."""
        path = tmp_path / "data.csv"
        path.write_text(HEADER + "A,2020-01-01,high,5.0,20.0\n")

        with pytest.raises(ValueError, match="non-numeric"):
            load_data(str(path))

    def test_malformed_csv(self, tmp_path):
        """Test rows with too many fields abort loading."""
        path = tmp_path / "data.csv"
        path.write_text(
            HEADER
            + "A,2020-01-01,1.0,5.0,20.0\n"
            + "B,2020-01-01,1.0,5.0,20.0,9,9,9\n"
        )

        with pytest.raises(ValueError):
            load_data(str(path))


class TestValidateData:
    """Tests for validate_data."""

    def test_clean_data_is_valid(self, raw_df):
        """Test complete data passes validation."""
        is_valid, report = validate_data(raw_df, strict=False)

        assert is_valid
        assert report['issues'] == []

    def test_missing_values_reported(self, raw_df):
        """Test missing values are reported per column."""
        raw_df.loc[0, 'poverty_rate'] = np.nan
        raw_df.loc[1, 'poverty_rate'] = np.nan

        is_valid, report = validate_data(raw_df, strict=False)

        assert not is_valid
        assert report['missing_by_column'] == {'poverty_rate': 2}

    def test_strict_raises(self, raw_df):
        """Test strict mode raises on issues."""
        raw_df = pd.concat([raw_df, raw_df.iloc[[0]]], ignore_index=True)

        with pytest.raises(ValueError, match="Duplicate rows"):
            validate_data(raw_df, strict=True)


def test_get_data_summary(raw_df):
    """Test summary statistics cover the indicator columns."""
    summary = get_data_summary(raw_df)

    assert summary['shape'] == raw_df.shape
    assert summary['n_countries'] == 4
    assert set(summary['statistics']) == {'gdp_growth', 'unemployment_rate', 'poverty_rate'}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
