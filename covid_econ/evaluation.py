"""
Model Evaluation Module - Phase 4
==================================

Scores test-set predictions and draws diagnostic plots.

Features:
    - MSE and R² (plus RMSE, MAE)
    - Actual vs Predicted plot
    - Residual analysis
    - Evaluation report generation
"""

import logging
from pathlib import Path
from typing import Dict, Any, Optional, Tuple

import numpy as np
import matplotlib.pyplot as plt
import seaborn as sns
from sklearn.metrics import mean_squared_error, mean_absolute_error, r2_score

logger = logging.getLogger(__name__)


def calculate_metrics(y_true: np.ndarray, y_pred: np.ndarray) -> Dict[str, Any]:
    """
    Calculate regression metrics on held-out rows.

    R² is 1 - SS_res / SS_tot with SS_tot taken around the mean of y_true.
    It is nan when SS_tot is zero (a constant or single-row test set).

    Args:
        y_true: Actual target values
        y_pred: Predicted target values

    Returns:
        Dictionary with mse, rmse, mae, r2, mean_error, max_error and n_samples
    """
    y_true = np.asarray(y_true, dtype=float).ravel()
    y_pred = np.asarray(y_pred, dtype=float).ravel()

    if y_true.shape != y_pred.shape:
        raise ValueError(
            f"Shape mismatch: y_true {y_true.shape} vs y_pred {y_pred.shape}"
        )
    if len(y_true) == 0:
        raise ValueError("Cannot evaluate an empty test set")

    mse = mean_squared_error(y_true, y_pred)
    residuals = y_true - y_pred
    ss_tot = np.sum((y_true - y_true.mean()) ** 2)

    return {
        'mse': float(mse),
        'rmse': float(np.sqrt(mse)),
        'mae': float(mean_absolute_error(y_true, y_pred)),
        'r2': float(r2_score(y_true, y_pred)) if ss_tot > 0 else float('nan'),
        'mean_error': float(np.mean(residuals)),
        'max_error': float(np.max(np.abs(residuals))),
        'n_samples': int(len(y_true))
    }


def plot_actual_vs_predicted(
    y_true: np.ndarray,
    y_pred: np.ndarray,
    figsize: Tuple[int, int] = (7, 6),
    save_path: Optional[str] = None
) -> plt.Figure:
    """
    Scatter of actual vs predicted GDP growth.

    Args:
        y_true: Ground truth values
        y_pred: Predicted values
        figsize: Figure size
        save_path: Path to save the figure

    Returns:
        Matplotlib Figure object
    """
    y_true = np.asarray(y_true, dtype=float).ravel()
    y_pred = np.asarray(y_pred, dtype=float).ravel()

    fig, ax = plt.subplots(figsize=figsize)
    ax.scatter(y_true, y_pred, alpha=0.7, s=30)

    min_val = min(y_true.min(), y_pred.min())
    max_val = max(y_true.max(), y_pred.max())
    ax.plot([min_val, max_val], [min_val, max_val], 'r--', linewidth=2, label='Perfect')

    mse = mean_squared_error(y_true, y_pred)
    ax.set_xlabel('Actual GDP growth (%)')
    ax.set_ylabel('Predicted GDP growth (%)')
    ax.set_title(f'Actual vs Predicted (MSE={mse:.4f})', fontsize=12, fontweight='bold')
    ax.legend(loc='upper left', fontsize=8)
    fig.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')
        logger.info(f"Actual vs Predicted plot saved to {save_path}")

    return fig


def plot_residuals(
    y_true: np.ndarray,
    y_pred: np.ndarray,
    figsize: Tuple[int, int] = (12, 5),
    save_path: Optional[str] = None
) -> plt.Figure:
    """
    Residual histogram and residuals-vs-fitted plot.

    Args:
        y_true: Ground truth values
        y_pred: Predicted values
        figsize: Figure size
        save_path: Path to save the figure

    Returns:
        Matplotlib Figure object
    """
    y_true = np.asarray(y_true, dtype=float).ravel()
    y_pred = np.asarray(y_pred, dtype=float).ravel()
    residuals = y_true - y_pred

    fig, axes = plt.subplots(1, 2, figsize=figsize)

    sns.histplot(residuals, kde=len(residuals) > 1, ax=axes[0], alpha=0.7)
    axes[0].axvline(0, color='red', linestyle='--', linewidth=2, label='Zero')
    axes[0].axvline(residuals.mean(), color='green', linestyle='--',
                    linewidth=2, label=f'Mean: {residuals.mean():.4f}')
    axes[0].set_xlabel('Residual (Actual - Predicted)')
    axes[0].set_title('Residual Distribution', fontsize=10, fontweight='bold')
    axes[0].legend(fontsize=8)

    axes[1].scatter(y_pred, residuals, alpha=0.7, s=30)
    axes[1].axhline(0, color='red', linestyle='--')
    axes[1].set_xlabel('Fitted value')
    axes[1].set_ylabel('Residual')
    axes[1].set_title('Residuals vs Fitted', fontsize=10, fontweight='bold')

    fig.suptitle('Residual Analysis', fontsize=14, fontweight='bold')
    fig.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')
        logger.info(f"Residuals plot saved to {save_path}")

    return fig


def evaluate_model(
    y_true: np.ndarray,
    y_pred: np.ndarray,
    output_dir: Optional[str] = "reports/figures/",
    show_plots: bool = False
) -> Dict[str, Any]:
    """
    Run complete model evaluation and render diagnostic plots.

    Args:
        y_true: Ground truth values
        y_pred: Predicted values
        output_dir: Directory for figures (None renders without saving)
        show_plots: Whether to display plots interactively

    Returns:
        Dictionary containing metrics and figure names
    """
    logger.info("=" * 60)
    logger.info("STARTING MODEL EVALUATION (Phase 4)")
    logger.info("=" * 60)

    metrics = calculate_metrics(y_true, y_pred)

    figures_dir = None
    if output_dir is not None:
        figures_dir = Path(output_dir)
        figures_dir.mkdir(parents=True, exist_ok=True)

    figures = ["eval_actual_vs_predicted.png", "eval_residuals.png"]
    plot_actual_vs_predicted(
        y_true, y_pred,
        save_path=str(figures_dir / figures[0]) if figures_dir else None
    )
    plot_residuals(
        y_true, y_pred,
        save_path=str(figures_dir / figures[1]) if figures_dir else None
    )

    if show_plots:
        plt.show()
    else:
        plt.close('all')

    logger.info("=" * 60)
    logger.info("EVALUATION COMPLETE")
    logger.info(f"  MSE: {metrics['mse']:.6f}")
    logger.info(f"  R²: {metrics['r2']:.6f}")
    logger.info("=" * 60)

    return {'metrics': metrics, 'figures': figures}


def print_evaluation_report(metrics: Dict[str, Any]) -> None:
    """
    Print the test-set scores to console.

    Args:
        metrics: Metrics dictionary from calculate_metrics
    """
    print("\n" + "=" * 50)
    print("MODEL EVALUATION REPORT")
    print("=" * 50)
    print(f"Mean Squared Error: {metrics['mse']}")
    print(f"R² Score: {metrics['r2']}")
    print("-" * 50)
    print(f"  • RMSE: {metrics['rmse']:.6f}")
    print(f"  • MAE: {metrics['mae']:.6f}")
    print(f"  • Mean error: {metrics['mean_error']:.6f}")
    print(f"  • Max abs error: {metrics['max_error']:.6f}")
    print(f"  • Test rows: {metrics['n_samples']}")
    print("=" * 50 + "\n")
