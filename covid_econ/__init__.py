"""
COVID-19 Economic Impact Analysis
==================================

Exploratory analysis and linear modelling of country-level COVID-19
economic indicators.

Modules:
    - data_loader: CSV ingestion, configuration and validation
    - preprocessing: Date parsing and missing-value handling (Phase 1)
    - eda: Trend and correlation visualizations (Phase 2)
    - model: Train/test split and OLS regression (Phase 3)
    - evaluation: MSE, R² and diagnostic plots (Phase 4)
"""

__version__ = "1.0.0"
__author__ = "Economic Analytics Team"

REQUIRED_COLUMNS = [
    "country",
    "date",
    "gdp_growth",
    "unemployment_rate",
    "poverty_rate",
]
NUMERIC_COLUMNS = ["gdp_growth", "unemployment_rate", "poverty_rate"]
TARGET_COLUMN = "gdp_growth"
FEATURE_COLUMNS = ["unemployment_rate", "poverty_rate"]
