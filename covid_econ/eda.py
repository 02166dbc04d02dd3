"""
Exploratory Data Analysis (EDA) Module - Phase 2
=================================================

Visualizes indicator trends and relationships in the cleaned dataset.

Functions:
    - plot_gdp_growth_by_country: GDP growth over time, one line per country
    - plot_correlation_matrix: Correlation heatmap of the indicators
    - plot_distributions: Histograms with KDE per indicator
    - plot_feature_relationships: GDP growth against each predictor
    - generate_eda_report: Full EDA report with all visualizations
"""

import logging
from pathlib import Path
from typing import Dict, Any, List, Optional, Tuple

import pandas as pd
import numpy as np
import matplotlib.pyplot as plt
import seaborn as sns
from scipy import stats

from . import NUMERIC_COLUMNS, FEATURE_COLUMNS, TARGET_COLUMN

logger = logging.getLogger(__name__)

# Set style for all plots
plt.style.use('seaborn-v0_8-whitegrid')
sns.set_palette("husl")


def _save(fig: plt.Figure, save_path: Optional[str], label: str) -> None:
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')
        logger.info(f"{label} saved to {save_path}")


def plot_gdp_growth_by_country(
    df: pd.DataFrame,
    date_column: str = 'date',
    value_column: str = TARGET_COLUMN,
    group_column: str = 'country',
    figsize: Tuple[int, int] = (14, 7),
    save_path: Optional[str] = None
) -> plt.Figure:
    """
    Line chart of an indicator over time with one line per country.

    Args:
        df: Cleaned DataFrame
        date_column: Column for the x axis
        value_column: Column for the y axis
        group_column: Column defining one line per group
        figsize: Figure size (width, height)
        save_path: Path to save the figure (optional)

    Returns:
        Matplotlib Figure object
    """
    fig, ax = plt.subplots(figsize=figsize)

    plot_df = df.sort_values([group_column, date_column])
    sns.lineplot(
        data=plot_df,
        x=date_column,
        y=value_column,
        hue=group_column,
        marker='o',
        linewidth=1.5,
        ax=ax
    )

    ax.axhline(0, color='gray', linestyle=':', linewidth=1)
    ax.set_xlabel('Date')
    ax.set_ylabel(f'{value_column} (%)')
    ax.set_title(f'{value_column} by {group_column} over time', fontsize=14, fontweight='bold')

    n_groups = plot_df[group_column].nunique()
    if ax.get_legend() is not None:
        sns.move_legend(ax, 'upper left', bbox_to_anchor=(1.01, 1), title=group_column,
                        fontsize=8, ncol=1 if n_groups <= 20 else 2)

    fig.autofmt_xdate()
    fig.tight_layout()
    _save(fig, save_path, "GDP growth trend plot")

    return fig


def plot_correlation_matrix(
    df: pd.DataFrame,
    columns: Optional[List[str]] = None,
    method: str = 'pearson',
    figsize: Tuple[int, int] = (8, 6),
    save_path: Optional[str] = None
) -> Tuple[plt.Figure, pd.DataFrame]:
    """
    Create a correlation heatmap for the numeric indicators.

    Args:
        df: DataFrame with the indicator columns
        columns: Columns to correlate (default: the three indicators)
        method: Correlation method ('pearson', 'spearman', 'kendall')
        figsize: Figure size (width, height)
        save_path: Path to save the figure (optional)

    Returns:
        Tuple of (Figure, correlation matrix DataFrame)
    """
    columns = columns or NUMERIC_COLUMNS
    corr_matrix = df[columns].corr(method=method)

    fig, ax = plt.subplots(figsize=figsize)

    sns.heatmap(
        corr_matrix,
        annot=True,
        fmt='.3f',
        cmap='RdYlBu_r',
        center=0,
        square=True,
        linewidths=0.5,
        cbar_kws={"shrink": 0.8, "label": "Correlation"},
        ax=ax,
        vmin=-1,
        vmax=1
    )

    ax.set_title(f'Correlation Matrix ({method.capitalize()})',
                 fontsize=14, fontweight='bold')
    fig.tight_layout()
    _save(fig, save_path, "Correlation matrix")

    return fig, corr_matrix


def plot_distributions(
    df: pd.DataFrame,
    columns: Optional[List[str]] = None,
    figsize: Tuple[int, int] = (15, 4),
    save_path: Optional[str] = None
) -> plt.Figure:
    """
    Create distribution plots (histogram + KDE) for each indicator.

    Args:
        df: DataFrame with the indicator columns
        columns: Columns to plot (default: the three indicators)
        figsize: Figure size
        save_path: Path to save the figure

    Returns:
        Matplotlib Figure object
    """
    columns = columns or NUMERIC_COLUMNS
    fig, axes = plt.subplots(1, len(columns), figsize=figsize, squeeze=False)
    axes = axes.flatten()

    for ax, col in zip(axes, columns):
        values = df[col].dropna()
        sns.histplot(values, kde=len(values) > 1, ax=ax, bins=min(30, max(len(values), 1)), alpha=0.7)

        mean_val = values.mean()
        median_val = values.median()
        ax.axvline(mean_val, color='red', linestyle='--', label=f'Mean: {mean_val:.2f}')
        ax.axvline(median_val, color='green', linestyle='--', label=f'Median: {median_val:.2f}')

        # normaltest needs at least 8 observations
        if len(values) >= 8:
            _, p_value = stats.normaltest(values)
            normality = "Normal" if p_value > 0.05 else "Non-Normal"
            ax.set_title(f'{col} ({normality}, p={p_value:.3f})', fontsize=10, fontweight='bold')
        else:
            ax.set_title(col, fontsize=10, fontweight='bold')
        ax.legend(fontsize=8)

    fig.suptitle('Indicator Distributions', fontsize=14, fontweight='bold')
    fig.tight_layout()
    _save(fig, save_path, "Distribution plots")

    return fig


def plot_feature_relationships(
    df: pd.DataFrame,
    features: Optional[List[str]] = None,
    target: str = TARGET_COLUMN,
    figsize: Tuple[int, int] = (12, 5),
    save_path: Optional[str] = None
) -> plt.Figure:
    """
    Scatter the target against each predictor with a least-squares line.

    Args:
        df: Cleaned DataFrame
        features: Predictor columns (default: unemployment and poverty rates)
        target: Target column
        figsize: Figure size
        save_path: Path to save the figure

    Returns:
        Matplotlib Figure object
    """
    features = features or FEATURE_COLUMNS
    fig, axes = plt.subplots(1, len(features), figsize=figsize, squeeze=False)
    axes = axes.flatten()

    for ax, feature in zip(axes, features):
        x = df[feature].values
        y = df[target].values
        ax.scatter(x, y, alpha=0.6, s=25)

        if len(x) > 1 and np.ptp(x) > 0:
            fit = stats.linregress(x, y)
            xs = np.linspace(x.min(), x.max(), 50)
            ax.plot(xs, fit.intercept + fit.slope * xs, 'r--',
                    label=f'slope={fit.slope:.3f}, r={fit.rvalue:.3f}')
            ax.legend(fontsize=8)

        ax.set_xlabel(f'{feature} (%)')
        ax.set_ylabel(f'{target} (%)')
        ax.set_title(f'{target} vs {feature}', fontsize=10, fontweight='bold')

    fig.suptitle('Predictor Relationships', fontsize=14, fontweight='bold')
    fig.tight_layout()
    _save(fig, save_path, "Feature relationship plots")

    return fig


def generate_eda_report(
    df: pd.DataFrame,
    output_dir: Optional[str] = "reports/figures/",
    show_plots: bool = False
) -> Dict[str, Any]:
    """
    Generate a complete EDA report with all visualizations.

    Args:
        df: Cleaned DataFrame
        output_dir: Directory to save figures (None renders without saving)
        show_plots: Whether to display plots interactively

    Returns:
        Dictionary containing EDA results and file names
    """
    if output_dir is not None:
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

    def target(name: str) -> Optional[str]:
        return str(output_dir / name) if output_dir is not None else None

    report = {
        "data_shape": df.shape,
        "figures": [],
        "correlation_matrix": None,
        "statistics": {}
    }

    logger.info("=" * 60)
    logger.info("STARTING EXPLORATORY DATA ANALYSIS (Phase 2)")
    logger.info("=" * 60)

    logger.info("Plotting GDP growth by country...")
    plot_gdp_growth_by_country(df, save_path=target("01_gdp_growth_by_country.png"))
    report["figures"].append("01_gdp_growth_by_country.png")

    logger.info("Computing correlation matrix...")
    _, corr_matrix = plot_correlation_matrix(df, save_path=target("02_correlation_matrix.png"))
    report["figures"].append("02_correlation_matrix.png")
    report["correlation_matrix"] = corr_matrix.to_dict()

    logger.info("Plotting distributions...")
    plot_distributions(df, save_path=target("03_distributions.png"))
    report["figures"].append("03_distributions.png")

    logger.info("Plotting predictor relationships...")
    plot_feature_relationships(df, save_path=target("04_feature_relationships.png"))
    report["figures"].append("04_feature_relationships.png")

    for col in NUMERIC_COLUMNS:
        report["statistics"][col] = {
            "mean": float(df[col].mean()),
            "std": float(df[col].std()),
            "min": float(df[col].min()),
            "max": float(df[col].max())
        }

    if show_plots:
        plt.show()
    else:
        plt.close('all')

    logger.info("=" * 60)
    logger.info("EDA COMPLETE - %d figures rendered", len(report["figures"]))
    logger.info("=" * 60)

    return report


def print_correlation_insights(corr_matrix: pd.DataFrame, threshold: float = 0.5) -> None:
    """
    Print insights about strongly correlated indicators.

    Args:
        corr_matrix: Correlation matrix DataFrame
        threshold: Correlation threshold for "strong" correlation
    """
    print("\n" + "=" * 50)
    print("CORRELATION INSIGHTS")
    print("=" * 50)

    strong_corr = []
    for i in range(len(corr_matrix.columns)):
        for j in range(i + 1, len(corr_matrix.columns)):
            corr_val = corr_matrix.iloc[i, j]
            if abs(corr_val) >= threshold:
                strong_corr.append({
                    "col1": corr_matrix.columns[i],
                    "col2": corr_matrix.columns[j],
                    "correlation": corr_val
                })

    if strong_corr:
        print(f"\nStrong correlations (|r| >= {threshold}):")
        for item in sorted(strong_corr, key=lambda x: abs(x["correlation"]), reverse=True):
            direction = "positive" if item["correlation"] > 0 else "negative"
            print(f"  • {item['col1']} ↔ {item['col2']}: {item['correlation']:.3f} ({direction})")
    else:
        print(f"\nNo strong correlations found (|r| >= {threshold})")

    print("=" * 50 + "\n")
