"""
Data Cleaning Module - Phase 1
===============================

Turns the raw indicator table into an analysis-ready dataset.

Functions:
    - parse_dates: Convert the date column from text to datetime
    - missing_value_report: Per-column missing value counts
    - drop_missing: Remove incomplete rows
    - clean_data: Full cleaning pipeline
"""

import logging
from typing import Dict, Any, List, Optional

import pandas as pd

logger = logging.getLogger(__name__)


def parse_dates(
    df: pd.DataFrame,
    column: str = 'date',
    date_format: Optional[str] = None
) -> pd.DataFrame:
    """
    Convert a text date column to datetime64.

    Empty values become NaT and are removed later by drop_missing.

    Args:
        df: DataFrame containing the date column
        column: Name of the date column
        date_format: Explicit strftime format (default: inferred)

    Returns:
        Copy of the DataFrame with the column parsed

    Raises:
        ValueError: If any non-empty value cannot be parsed
    """
    if column not in df.columns:
        raise ValueError(f"Date column '{column}' not found. Columns: {list(df.columns)}")

    df = df.copy()
    try:
        df[column] = pd.to_datetime(df[column], format=date_format, errors='raise')
    except (ValueError, TypeError) as e:
        raise ValueError(f"Unparseable dates in column '{column}': {e}") from e

    logger.info(f"Parsed '{column}' as dates ({df[column].min()} to {df[column].max()})")
    return df


def missing_value_report(
    df: pd.DataFrame,
    columns: Optional[List[str]] = None
) -> pd.Series:
    """
    Count missing values per column.

    Args:
        df: DataFrame to inspect
        columns: Columns to count (default: every column)

    Returns:
        Series of missing counts indexed by column name
    """
    columns = columns or list(df.columns)
    return df[columns].isnull().sum()


def drop_missing(
    df: pd.DataFrame,
    columns: Optional[List[str]] = None
) -> pd.DataFrame:
    """
    Drop every row with at least one missing field.

    All columns are checked, including extra ones beyond the dataset
    schema. Index labels of the surviving rows are preserved.

    Args:
        df: DataFrame to clean
        columns: Columns checked for missing values (default: every column)

    Returns:
        DataFrame with no missing values in the checked columns
    """
    columns = columns or list(df.columns)
    return df.dropna(subset=columns)


def clean_data(
    df: pd.DataFrame,
    date_column: str = 'date',
    date_format: Optional[str] = None
) -> Dict[str, Any]:
    """
    Complete cleaning pipeline: parse dates, report and drop missing rows.

    Args:
        df: Raw DataFrame from load_data
        date_column: Name of the date column
        date_format: Explicit date format (optional)

    Returns:
        Dictionary containing:
            - data: Cleaned DataFrame
            - missing_counts: Per-column missing counts before dropping
            - rows_before, rows_after, rows_dropped: Row bookkeeping
    """
    logger.info("=" * 60)
    logger.info("STARTING DATA CLEANING (Phase 1)")
    logger.info("=" * 60)

    parsed = parse_dates(df, column=date_column, date_format=date_format)

    missing_counts = missing_value_report(parsed)
    for col, count in missing_counts.items():
        if count > 0:
            logger.warning(f"Column '{col}' has {count} missing values")

    cleaned = drop_missing(parsed)

    result = {
        'data': cleaned,
        'missing_counts': missing_counts.to_dict(),
        'rows_before': len(parsed),
        'rows_after': len(cleaned),
        'rows_dropped': len(parsed) - len(cleaned)
    }

    logger.info("=" * 60)
    logger.info("CLEANING COMPLETE")
    logger.info(f"  Rows before: {result['rows_before']}")
    logger.info(f"  Rows dropped: {result['rows_dropped']}")
    logger.info(f"  Rows after: {result['rows_after']}")
    logger.info("=" * 60)

    return result


def print_cleaning_summary(result: Dict[str, Any]) -> None:
    """
    Print a summary of the cleaning results.

    Args:
        result: Dictionary from clean_data
    """
    print("\n" + "=" * 50)
    print("CLEANING SUMMARY")
    print("=" * 50)
    print("Missing values per column:")
    for col, count in result['missing_counts'].items():
        print(f"  {col:<20} {count}")
    print(f"\nRows before cleaning: {result['rows_before']}")
    print(f"Rows dropped: {result['rows_dropped']}")
    print(f"Rows after cleaning: {result['rows_after']}")
    print("=" * 50 + "\n")
