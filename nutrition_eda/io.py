"""
I/O module: Load and save data in various formats (CSV, Parquet).
"""

import pandas as pd
from pathlib import Path
import warnings

def load_csv(filepath, **kwargs):
    """
    Load CSV file with error handling.

    Args:
        filepath: Path to CSV file
        **kwargs: Additional arguments for pd.read_csv()

    Returns:
        pd.DataFrame
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"CSV file not found: {filepath}")

    return pd.read_csv(filepath, **kwargs)

def load_ingredients(filepath):
    """
    Load the raw ingredient table.

    Category and Description are read as strings so that numeric-looking
    descriptions are not coerced; nutrient columns are parsed by cleaning.
    """
    return load_csv(filepath, dtype={"Category": str, "Description": str})

def load_category_groups(filepath):
    """
    Load the category-membership table (one column per broad category).

    Columns have uneven lengths; pandas pads the short ones with NaN, which
    the category index ignores.

    Args:
        filepath: Path to CSV file

    Returns:
        pd.DataFrame of strings
    """
    df = load_csv(filepath, dtype=str, keep_default_na=False, na_values=[""])
    df.columns = [str(col).strip() for col in df.columns]

    empty = [col for col in df.columns if df[col].dropna().str.strip().eq("").all()]
    if empty:
        warnings.warn(f"⚠️  Empty membership columns in {Path(filepath).name}: {empty}")

    return df

def save_parquet(df, filepath, **kwargs):
    """
    Save DataFrame to Parquet.

    Args:
        df: DataFrame to save
        filepath: Output path
        **kwargs: Additional arguments for df.to_parquet()

    Returns:
        Path to saved file
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    df.to_parquet(filepath, index=False, **kwargs)

    return filepath

def save_csv(df, filepath, **kwargs):
    """
    Save DataFrame to CSV.

    Args:
        df: DataFrame to save
        filepath: Output path
        **kwargs: Additional arguments for df.to_csv()

    Returns:
        Path to saved file
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    df.to_csv(filepath, index=False, **kwargs)

    return filepath

def file_size_mb(filepath):
    """Get file size in MB."""
    return Path(filepath).stat().st_size / (1024 ** 2)
