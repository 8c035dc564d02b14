"""
Categories module: Map fine ingredient categories onto broad categories.

The membership table has one column per broad category, each listing the
fine categories it contains. It is turned into a reverse index
(fine -> broad) once, then every row is looked up in it.
"""

from dataclasses import dataclass

import pandas as pd
from . import config
from .errors import CategoryMapError, MissingMappingError


@dataclass(frozen=True)
class UnmappedCategory:
    """A fine category with no broad category, and how many rows carry it."""
    category: str
    rows: int


def build_category_index(df_groups):
    """
    Build the fine -> broad reverse index from the membership table.

    Args:
        df_groups: DataFrame with one column per broad category

    Returns:
        dict mapping each fine category to its broad label

    Raises:
        CategoryMapError: a fine category is listed under two broad categories
    """
    index = {}
    for broad in df_groups.columns:
        label = str(broad).strip()
        for value in df_groups[broad].dropna():
            fine = str(value).strip()
            if not fine:
                continue
            owner = index.get(fine)
            if owner is not None and owner != label:
                raise CategoryMapError(
                    f"Fine category '{fine}' is listed under both '{owner}' and '{label}'"
                )
            index[fine] = label

    if not index:
        raise CategoryMapError("Category membership table is empty")

    return index


def broad_labels(df_groups):
    """Broad category labels in table order."""
    return [str(col).strip() for col in df_groups.columns]


def categorize(fine, index):
    """
    Return the broad category of a single fine category.

    Raises:
        MissingMappingError: fine category is absent from the index
    """
    try:
        return index[fine]
    except KeyError:
        raise MissingMappingError([fine]) from None


def find_unmapped(categories: pd.Series, index):
    """List fine categories absent from the index, with row counts, sorted by name."""
    missing = categories[~categories.isin(list(index))]
    counts = missing.value_counts()
    return [UnmappedCategory(category=str(cat), rows=int(n))
            for cat, n in sorted(counts.items())]


def assign_broad_categories(df, index, policy=None):
    """
    Add the broad category column to the ingredient table.

    Policies for fine categories missing from the index:
        'fail'    -- raise MissingMappingError
        'flag'    -- label the rows config.UNCLASSIFIED_LABEL
        'exclude' -- drop the rows

    Args:
        df: Cleaned ingredient DataFrame
        index: Reverse index from build_category_index()
        policy: One of config.UNMAPPED_POLICIES (default config.UNMAPPED_POLICY)

    Returns:
        DataFrame with config.BROAD_CATEGORY_COL, list of UnmappedCategory, log info
    """
    policy = policy or config.UNMAPPED_POLICY
    if policy not in config.UNMAPPED_POLICIES:
        raise ValueError(f"Unknown unmapped-category policy: {policy!r} "
                         f"(expected one of {config.UNMAPPED_POLICIES})")

    log = []
    df_out = df.copy()
    categories = df_out[config.CATEGORY_COL]

    unmapped = find_unmapped(categories, index)
    if unmapped and policy == "fail":
        raise MissingMappingError([u.category for u in unmapped])

    df_out[config.BROAD_CATEGORY_COL] = categories.map(index)

    if unmapped:
        n_rows = sum(u.rows for u in unmapped)
        if policy == "flag":
            df_out[config.BROAD_CATEGORY_COL] = df_out[config.BROAD_CATEGORY_COL].fillna(config.UNCLASSIFIED_LABEL)
            log.append(f"⚠️  {len(unmapped)} fine categories unmapped ({n_rows} rows labelled "
                       f"'{config.UNCLASSIFIED_LABEL}')")
        else:
            df_out = df_out[df_out[config.BROAD_CATEGORY_COL].notna()].reset_index(drop=True)
            log.append(f"⚠️  {len(unmapped)} fine categories unmapped ({n_rows} rows excluded)")
    else:
        log.append(f"✓ All {categories.nunique()} fine categories mapped")

    counts = df_out[config.BROAD_CATEGORY_COL].value_counts().sort_index()
    log.append(f"✓ Broad categories: {counts.to_dict()}")

    return df_out, unmapped, log


def unmapped_frame(unmapped):
    """Tabular form of the unmapped list (for CSV output and the report)."""
    return pd.DataFrame(
        [(u.category, u.rows) for u in unmapped],
        columns=[config.CATEGORY_COL, "rows"],
    )
