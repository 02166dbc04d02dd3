"""
Model Training Module - Phase 3
================================

Ordinary least squares regression of GDP growth on labour-market and
poverty indicators.

Features:
    - Seeded, reproducible train/test split
    - OLS fit with scikit-learn LinearRegression
    - statsmodels inference table (std errors, p-values)
    - Training progress logging
"""

import logging
from typing import Dict, Any, List, Optional, Tuple
from datetime import datetime

import numpy as np
import pandas as pd
import statsmodels.api as sm
from sklearn.linear_model import LinearRegression
from sklearn.model_selection import train_test_split

from . import FEATURE_COLUMNS, TARGET_COLUMN

logger = logging.getLogger(__name__)


def split_dataset(
    df: pd.DataFrame,
    train_split: float = 0.8,
    random_state: int = 42
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Randomly partition rows into train and test sets.

    The train set holds floor(train_split * n) rows. Index labels are kept
    so held-out rows can be traced back to the cleaned dataset.

    Args:
        df: Cleaned DataFrame
        train_split: Fraction of rows used for training
        random_state: Seed for the shuffle

    Returns:
        Tuple of (train_df, test_df)

    Raises:
        ValueError: If train_split is not in (0, 1) or either side would be empty
    """
    if not 0 < train_split < 1:
        raise ValueError(f"train_split must be between 0 and 1, got {train_split}")

    train_df, test_df = train_test_split(
        df,
        train_size=train_split,
        random_state=random_state,
        shuffle=True
    )

    logger.info(
        f"Train/Test split: {len(train_df)} train rows, {len(test_df)} test rows "
        f"(seed={random_state})"
    )

    return train_df, test_df


class GDPGrowthModel:
    """
    Linear model predicting GDP growth from economic indicators.

    Wraps LinearRegression for prediction and keeps a statsmodels OLS
    result alongside it for coefficient inference.
    """

    def __init__(
        self,
        features: Optional[List[str]] = None,
        target: str = TARGET_COLUMN,
        fit_intercept: bool = True
    ):
        """
        Initialize the model.

        Args:
            features: Predictor columns (default: unemployment and poverty rates)
            target: Column to predict
            fit_intercept: Whether to estimate an intercept term
        """
        self.features = list(features or FEATURE_COLUMNS)
        self.target = target
        self.fit_intercept = fit_intercept

        self.model: Optional[LinearRegression] = None
        self.ols_result_ = None
        self.training_info: Dict[str, Any] = {}
        self._is_fitted = False

    def _check_columns(self, df: pd.DataFrame, columns: List[str]) -> None:
        missing = [col for col in columns if col not in df.columns]
        if missing:
            raise ValueError(f"Missing columns for model: {missing}")

    def fit(self, train_df: pd.DataFrame) -> 'GDPGrowthModel':
        """
        Fit OLS on the training rows.

        Args:
            train_df: Training DataFrame with feature and target columns

        Returns:
            Self for method chaining
        """
        self._check_columns(train_df, self.features + [self.target])
        start_time = datetime.now()

        logger.info("=" * 60)
        logger.info("STARTING MODEL TRAINING (Phase 3)")
        logger.info("=" * 60)
        logger.info(f"Target: {self.target}")
        logger.info(f"Features: {self.features}")
        logger.info(f"Training rows: {len(train_df)}")

        X = train_df[self.features].astype(float)
        y = train_df[self.target].astype(float)

        self.model = LinearRegression(fit_intercept=self.fit_intercept)
        self.model.fit(X.values, y.values)

        exog = sm.add_constant(X, has_constant='add') if self.fit_intercept else X
        self.ols_result_ = sm.OLS(y, exog).fit()

        end_time = datetime.now()
        self.training_info = {
            'training_duration_seconds': (end_time - start_time).total_seconds(),
            'n_samples': int(len(train_df)),
            'n_features': len(self.features),
            'trained_at': end_time.isoformat(),
            'train_r2': float(self.model.score(X.values, y.values)) if len(train_df) > 1 else float('nan')
        }

        self._is_fitted = True

        logger.info(f"Coefficients: {self.coefficients}")
        logger.info("=" * 60)
        logger.info("MODEL TRAINING COMPLETE")
        logger.info("=" * 60)

        return self

    def predict(self, df: pd.DataFrame) -> np.ndarray:
        """
        Predict the target for each row of df.

        Args:
            df: DataFrame containing the feature columns

        Returns:
            Predictions array of shape (n_rows,)
        """
        if not self._is_fitted:
            raise ValueError("Model must be trained before prediction. Call fit() first.")

        self._check_columns(df, self.features)
        return self.model.predict(df[self.features].astype(float).values)

    @property
    def coefficients(self) -> Dict[str, float]:
        """Intercept and one slope per feature."""
        if not self._is_fitted:
            raise ValueError("Model must be trained first.")

        coefs = {'intercept': float(self.model.intercept_)}
        for name, value in zip(self.features, self.model.coef_):
            coefs[name] = float(value)
        return coefs

    def summary(self) -> str:
        """Return the statsmodels OLS summary as text."""
        if not self._is_fitted:
            raise ValueError("Model must be trained first.")
        return self.ols_result_.summary().as_text()


def train_model(
    train_df: pd.DataFrame,
    config: Dict[str, Any]
) -> GDPGrowthModel:
    """
    Train a model using configuration parameters.

    Args:
        train_df: Training rows
        config: Configuration dictionary

    Returns:
        Fitted GDPGrowthModel
    """
    model_config = config.get('model', {}) or {}

    model = GDPGrowthModel(
        features=model_config.get('features', FEATURE_COLUMNS),
        target=model_config.get('target', TARGET_COLUMN),
        fit_intercept=model_config.get('fit_intercept', True)
    )

    return model.fit(train_df)


def print_model_summary(model: GDPGrowthModel, detailed: bool = False) -> None:
    """
    Print a summary of the trained model.

    Args:
        model: Trained model instance
        detailed: Also print the full statsmodels table
    """
    print("\n" + "=" * 50)
    print("MODEL SUMMARY")
    print("=" * 50)
    print("Model Type: Ordinary Least Squares (LinearRegression)")
    print(f"Target: {model.target}")
    print(f"Features: {', '.join(model.features)}")
    print("\nCoefficients:")
    for name, value in model.coefficients.items():
        print(f"  - {name}: {value:.6f}")

    if model.training_info:
        print("\nTraining Info:")
        print(f"  - Samples: {model.training_info.get('n_samples', 'N/A')}")
        print(f"  - Train R²: {model.training_info.get('train_r2', float('nan')):.4f}")

    if detailed:
        print()
        print(model.summary())

    print("=" * 50 + "\n")
