"""
Vitamins module: Total vitamin content in micrograms.
"""

import pandas as pd
from . import config


def total_vitamin(df, factors=None) -> pd.Series:
    """
    Sum the vitamin columns after converting each to micrograms.

    Args:
        df: DataFrame holding every column named in factors
        factors: Column -> micrograms-per-unit (default config.VITAMIN_UNIT_FACTORS)

    Returns:
        pd.Series named config.TOTAL_VITAMIN_COL
    """
    factors = factors or config.VITAMIN_UNIT_FACTORS

    missing = [col for col in factors if col not in df.columns]
    if missing:
        raise ValueError(f"Vitamin columns not found: {missing}")

    total = sum(df[col] * factor for col, factor in factors.items())
    return total.rename(config.TOTAL_VITAMIN_COL)


def total_vitamin_value(factors=None, **values):
    """Scalar version of total_vitamin(), keyed by column name."""
    factors = factors or config.VITAMIN_UNIT_FACTORS
    return sum(values[col] * factor for col, factor in factors.items())


def add_total_vitamin(df):
    """
    Add config.TOTAL_VITAMIN_COL to the ingredient table.

    Returns:
        DataFrame with the total column and log info
    """
    log = []
    df_out = df.copy()
    df_out[config.TOTAL_VITAMIN_COL] = total_vitamin(df_out)

    null_totals = df_out[config.TOTAL_VITAMIN_COL].isna().sum()
    if null_totals > 0:
        log.append(f"⚠️  {null_totals} rows have a missing vitamin value (TotalVitamin is NaN)")
    log.append(f"✓ {config.TOTAL_VITAMIN_COL} computed in mcg "
               f"(median {df_out[config.TOTAL_VITAMIN_COL].median():.2f})")

    return df_out, log
