#!/usr/bin/env python3
"""
COVID-19 Economic Impact Analysis - Main Pipeline
==================================================

Loads country-level COVID-19 economic indicators, cleans them, plots trends
and correlations, and fits a linear regression predicting GDP growth from
unemployment and poverty rates.

Phases:
    0. Load - CSV ingestion and validation
    1. Clean - Date parsing and missing-value removal
    2. EDA - Trend and correlation plots
    3. Train - Seeded 80/20 split and OLS fit
    4. Evaluate - Test-set MSE and R²

Usage:
    # Run complete pipeline
    python main.py --data covid_economic_impact.csv

    # Run specific phase
    python main.py --data covid_economic_impact.csv --phase eda

    # Run with custom config
    python main.py --data covid_economic_impact.csv --config config/config.yaml
"""

import argparse
import logging
import sys
from pathlib import Path
from datetime import datetime
from typing import Dict, Any, Optional

import pandas as pd

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from covid_econ.data_loader import load_config, load_data, validate_data, print_data_summary
from covid_econ.preprocessing import clean_data, print_cleaning_summary
from covid_econ.eda import generate_eda_report, print_correlation_insights
from covid_econ.model import split_dataset, train_model, print_model_summary, GDPGrowthModel
from covid_econ.evaluation import evaluate_model, print_evaluation_report

PHASES = ['load', 'clean', 'eda', 'train', 'all']


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Configure logging for the pipeline.

    Logs go to stdout; a file handler is added only when log_file is given.
    A {timestamp} placeholder in log_file is replaced with the run start time.
    """
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_file = log_file.format(timestamp=datetime.now().strftime("%Y%m%d_%H%M%S"))
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True
    )


def _figures_path(config: Dict[str, Any]) -> Optional[str]:
    return (config.get('output', {}) or {}).get('figures_path', 'reports/figures/')


def run_load(data_path: str, config: Dict[str, Any]) -> pd.DataFrame:
    """
    Execute Phase 0: load and validate the CSV.

    Args:
        data_path: Path to input CSV file
        config: Configuration dictionary

    Returns:
        Raw DataFrame
    """
    print("\n📊 Loading data...")
    df = load_data(data_path)
    print_data_summary(df)

    is_valid, _ = validate_data(df, strict=False)
    if not is_valid:
        print("⚠️  Data validation warnings detected. Proceeding anyway...")

    return df


def run_cleaning(df: pd.DataFrame, config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Execute Phase 1: Data Cleaning.

    Args:
        df: Raw data
        config: Configuration dictionary

    Returns:
        Cleaning result dictionary
    """
    print("\n" + "=" * 70)
    print("PHASE 1: DATA CLEANING")
    print("=" * 70)

    data_config = config.get('data', {}) or {}
    result = clean_data(
        df,
        date_column=data_config.get('date_column', 'date'),
        date_format=data_config.get('date_format')
    )
    print_cleaning_summary(result)

    return result


def run_eda(df: pd.DataFrame, config: Dict[str, Any], show_plots: bool = False) -> Dict[str, Any]:
    """
    Execute Phase 2: Exploratory Data Analysis.

    Args:
        df: Cleaned data
        config: Configuration dictionary
        show_plots: Display figures interactively

    Returns:
        EDA report dictionary
    """
    print("\n" + "=" * 70)
    print("PHASE 2: EXPLORATORY DATA ANALYSIS")
    print("=" * 70)

    output_dir = _figures_path(config)
    report = generate_eda_report(df, output_dir=output_dir, show_plots=show_plots)

    corr_df = pd.DataFrame(report["correlation_matrix"])
    print_correlation_insights(corr_df)

    where = f"saved to {output_dir}" if output_dir else "rendered"
    print(f"\n✓ EDA complete. {len(report['figures'])} figures {where}")

    return report


def run_training(df: pd.DataFrame, config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Execute Phase 3: split the cleaned data and fit the regression.

    Args:
        df: Cleaned data
        config: Configuration dictionary

    Returns:
        Dictionary with train_df, test_df and the fitted model
    """
    print("\n" + "=" * 70)
    print("PHASE 3: MODEL TRAINING")
    print("=" * 70)

    split_config = config.get('split', {}) or {}
    train_df, test_df = split_dataset(
        df,
        train_split=split_config.get('train_split', 0.8),
        random_state=split_config.get('random_state', 42)
    )

    model = train_model(train_df, config)
    print_model_summary(model, detailed=(config.get('model', {}) or {}).get('print_summary', False))

    return {'train_df': train_df, 'test_df': test_df, 'model': model}


def run_evaluation(
    model: GDPGrowthModel,
    test_df: pd.DataFrame,
    config: Dict[str, Any],
    show_plots: bool = False
) -> Dict[str, Any]:
    """
    Execute Phase 4: Model Evaluation.

    Args:
        model: Fitted model
        test_df: Held-out rows
        config: Configuration dictionary
        show_plots: Display figures interactively

    Returns:
        Evaluation result dictionary
    """
    print("\n" + "=" * 70)
    print("PHASE 4: MODEL EVALUATION")
    print("=" * 70)

    y_pred = model.predict(test_df)
    result = evaluate_model(
        test_df[model.target].values,
        y_pred,
        output_dir=_figures_path(config),
        show_plots=show_plots
    )
    print_evaluation_report(result['metrics'])

    return result


def run_pipeline(
    data_path: str,
    config: Dict[str, Any],
    phase: str = 'all',
    show_plots: bool = False
) -> Dict[str, Any]:
    """
    Execute the pipeline up to the requested phase.

    Args:
        data_path: Path to input CSV file
        config: Configuration dictionary
        phase: Last phase to run ('load', 'clean', 'eda', 'train', 'all')
        show_plots: Display figures interactively

    Returns:
        Dictionary containing all phase results
    """
    if phase not in PHASES:
        raise ValueError(f"Unknown phase: {phase}. Choose from: {', '.join(PHASES)}")

    show_plots = show_plots or (config.get('output', {}) or {}).get('show_plots', False)

    print("\n" + "=" * 70)
    print("COVID-19 ECONOMIC IMPACT PIPELINE")
    print(f"Started at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print("=" * 70)

    results: Dict[str, Any] = {'config': config}

    raw_df = run_load(data_path, config)
    results['data_shape'] = raw_df.shape
    if phase == 'load':
        return results

    results['cleaning'] = run_cleaning(raw_df, config)
    df = results['cleaning']['data']
    if phase == 'clean':
        return results

    results['eda'] = run_eda(df, config, show_plots=show_plots)
    if phase == 'eda':
        return results

    results['training'] = run_training(df, config)
    results['evaluation'] = run_evaluation(
        results['training']['model'],
        results['training']['test_df'],
        config,
        show_plots=show_plots
    )

    metrics = results['evaluation']['metrics']
    print("\n" + "=" * 70)
    print("PIPELINE COMPLETE")
    print("=" * 70)
    print(f"  • Input data: {raw_df.shape[0]} rows, {df.shape[0]} after cleaning")
    print(f"  • Model MSE: {metrics['mse']:.4f}")
    print(f"  • Model R²: {metrics['r2']:.4f}")
    print(f"Completed at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print("=" * 70 + "\n")

    return results


def main(argv=None) -> int:
    """Main entry point with argument parsing."""
    parser = argparse.ArgumentParser(
        description="COVID-19 economic impact analysis and GDP growth regression",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --data covid_economic_impact.csv
  python main.py --data covid_economic_impact.csv --phase eda
  python main.py --data covid_economic_impact.csv --config config/custom.yaml
        """
    )

    parser.add_argument(
        '--data', '-d',
        type=str,
        default=None,
        help='Path to the input CSV file (default: data.raw_path from config)'
    )

    parser.add_argument(
        '--config', '-c',
        type=str,
        default='config/config.yaml',
        help='Path to configuration file (default: config/config.yaml)'
    )

    parser.add_argument(
        '--phase', '-p',
        type=str,
        choices=PHASES,
        default='all',
        help='Run the pipeline up to this phase (default: all)'
    )

    parser.add_argument(
        '--show-plots',
        action='store_true',
        help='Display figures interactively'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable debug logging'
    )

    args = parser.parse_args(argv)

    if not Path(args.config).exists():
        print(f"Error: Config file not found: {args.config}")
        return 1

    try:
        config = load_config(args.config)
        log_config = config.get('logging', {}) or {}
        setup_logging(
            'DEBUG' if args.verbose else log_config.get('level', 'INFO'),
            log_config.get('file')
        )

        data_path = args.data or (config.get('data', {}) or {}).get('raw_path', 'covid_economic_impact.csv')
        if not Path(data_path).exists():
            print(f"Error: Data file not found: {data_path}")
            print("\nExpected format: CSV with header country,date,gdp_growth,unemployment_rate,poverty_rate")
            return 1

        run_pipeline(data_path, config, phase=args.phase, show_plots=args.show_plots)
        return 0

    except Exception as e:
        logging.error(f"Pipeline failed: {e}", exc_info=True)
        print(f"\n❌ Pipeline failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
