"""
Cleaning module: Column normalization, pseudo-row removal and type fixing for the ingredient table.
"""

import pandas as pd
import re
from . import config
from .errors import MalformedInputError, NutritionDataError


def normalize_column_name(name: str) -> str:
    """
    Turn a raw dotted header into a compact column name.

    Keeps the last dotted segment, drops a trailing ' - <qualifier>' and
    removes every non-alphanumeric character:

        'Data.Vitamins.Vitamin A - RAE' -> 'VitaminA'
        'Data.Major Minerals.Calcium'   -> 'Calcium'
        'Nutrient Data Bank Number'     -> 'NutrientDataBankNumber'
    """
    last = str(name).strip().split(".")[-1]
    last = last.split(" - ")[0]
    return re.sub(r"[^0-9A-Za-z]", "", last)


def normalize_columns(df):
    """Rename columns with normalize_column_name(); duplicate results are an error."""
    new_names = [normalize_column_name(col) for col in df.columns]

    seen = {}
    for raw, new in zip(df.columns, new_names):
        if new in seen:
            raise NutritionDataError(
                f"Columns '{seen[new]}' and '{raw}' both normalize to '{new}'"
            )
        seen[new] = raw

    return df.rename(columns=dict(zip(df.columns, new_names)))


def parse_numeric_column(s: pd.Series) -> pd.Series:
    """
    Convert a nutrient column to float, failing fast on the first bad cell.

    Missing cells stay NaN. Non-numeric text and negative values raise
    MalformedInputError with the row index and column name.
    """
    parsed = pd.to_numeric(s, errors="coerce")

    bad = parsed.isna() & s.notna()
    if bad.any():
        row = bad.idxmax()
        raise MalformedInputError(row, s.name, s.loc[row])

    negative = parsed < 0
    if negative.any():
        row = negative.idxmax()
        raise MalformedInputError(row, s.name, s.loc[row], reason="negative value")

    return parsed.astype("float64")


def parse_identifier_column(s: pd.Series) -> pd.Series:
    """Render an identifier column as strings; integral numbers lose their trailing '.0'."""
    def render(val):
        if pd.isna(val):
            return ""
        if isinstance(val, float) and val.is_integer():
            return str(int(val))
        return str(val).strip()

    return s.map(render).astype(str)


def drop_pseudo_rows(df, category_col=config.CATEGORY_COL):
    """
    Remove non-food rows such as the 'Vitamin D' pseudo-category.

    Returns:
        Filtered DataFrame and log lines
    """
    log = []
    mask = df[category_col].isin(config.PSEUDO_CATEGORIES)
    removed = int(mask.sum())

    if removed:
        value_cols = [col for col in df.columns if col not in config.TEXT_COLUMNS + config.ID_COLUMNS]
        numeric = df.loc[mask, value_cols].apply(pd.to_numeric, errors="coerce")
        if (numeric.fillna(0) != 0).any().any():
            log.append(f"⚠️  Pseudo-category rows carried non-zero nutrient values (dropped anyway)")
        log.append(f"✓ Removed {removed} pseudo-category rows {config.PSEUDO_CATEGORIES}")
    else:
        log.append(f"✓ No pseudo-category rows found")

    return df.loc[~mask].copy(), log


def clean_ingredients(df_ingredients):
    """
    Clean ingredient data: normalize columns, drop the pseudo row, fix data types.

    Args:
        df_ingredients: Raw ingredient DataFrame

    Returns:
        Cleaned DataFrame and log info
    """
    log = []
    df_clean = df_ingredients.copy()

    # 1. Normalize column names
    df_clean = normalize_columns(df_clean)
    log.append(f"✓ Column names normalized ({len(df_clean.columns)} columns)")

    missing = [col for col in config.TEXT_COLUMNS if col not in df_clean.columns]
    if missing:
        raise NutritionDataError(f"Required columns not found in ingredient table: {missing}")

    # 2. Category must be a non-empty string
    category = df_clean[config.CATEGORY_COL].fillna("").astype(str).str.strip()
    empty = category == ""
    if empty.any():
        row = empty.idxmax()
        raise MalformedInputError(row, config.CATEGORY_COL, df_clean.loc[row, config.CATEGORY_COL],
                                  reason="empty category")
    df_clean[config.CATEGORY_COL] = category
    df_clean[config.DESCRIPTION_COL] = df_clean[config.DESCRIPTION_COL].fillna("").astype(str).str.strip()

    # 3. Drop the 'Vitamin D' pseudo-category before any type fixing
    df_clean, drop_log = drop_pseudo_rows(df_clean)
    log.extend(drop_log)

    # 4. Identifiers stay strings
    for col in config.ID_COLUMNS:
        if col in df_clean.columns:
            df_clean[col] = parse_identifier_column(df_clean[col])

    # 5. Nutrient columns to float (fail fast on malformed cells)
    non_nutrient = config.TEXT_COLUMNS + config.ID_COLUMNS
    numeric_cols = [col for col in df_clean.columns if col not in non_nutrient]
    for col in numeric_cols:
        df_clean[col] = parse_numeric_column(df_clean[col])

    null_counts = df_clean[numeric_cols].isna().sum()
    null_counts = null_counts[null_counts > 0]
    if len(null_counts) > 0:
        log.append(f"⚠️  Missing nutrient values: {null_counts.to_dict()}")
    log.append(f"✓ {len(numeric_cols)} nutrient columns converted to float")

    df_clean = df_clean.reset_index(drop=True)

    # 6. Final shape
    log.append(f"✓ Ingredient cleaning complete: {df_ingredients.shape} → {df_clean.shape}")

    return df_clean, log
