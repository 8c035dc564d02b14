"""
Quality Control (QC) module: Assertions and data quality checks on the derived table.
"""

import numpy as np
from . import config
from .buckets import B12_GROUP_ORDER, bucket_value
from .vitamins import total_vitamin

def check_no_pseudo_rows(df, category_col=config.CATEGORY_COL):
    """Assert pseudo-category rows were removed."""
    found = df[category_col].isin(config.PSEUDO_CATEGORIES).sum()
    assert found == 0, f"Found {found} pseudo-category rows {config.PSEUDO_CATEGORIES}!"
    return f"✓ No pseudo-category rows (n={len(df)})"

def check_broad_categories(df, labels, allow_unclassified=True):
    """Assert every row carries a known broad category."""
    allowed = set(labels)
    if allow_unclassified:
        allowed.add(config.UNCLASSIFIED_LABEL)

    col = df[config.BROAD_CATEGORY_COL]
    assert col.notna().all(), f"Null {config.BROAD_CATEGORY_COL} values found!"
    unknown = sorted(set(col.unique()) - allowed)
    assert not unknown, f"Unknown broad categories: {unknown}"

    n_unclassified = (col == config.UNCLASSIFIED_LABEL).sum()
    if n_unclassified > 0:
        return f"⚠️  {n_unclassified} rows labelled '{config.UNCLASSIFIED_LABEL}'"

    return f"✓ All rows in {len(labels)} broad categories"

def check_b12_groups(df):
    """Assert the B12 group is ordered, complete and consistent with the thresholds."""
    col = df[config.B12_GROUP_COL]
    assert col.notna().all(), f"Null {config.B12_GROUP_COL} values found!"
    assert list(col.cat.categories) == B12_GROUP_ORDER, "B12 group order changed!"

    expected = df[config.B12_COL].map(bucket_value)
    mismatches = (expected != col.astype(str)).sum()
    assert mismatches == 0, f"{mismatches} rows disagree with the B12 thresholds"
    return f"✓ {config.B12_GROUP_COL} consistent with thresholds"

def check_non_negative(df):
    """Assert nutrient fields are non-negative."""
    numeric = df.select_dtypes(include=[np.number])
    negative = (numeric < 0).sum()
    negative = negative[negative > 0]
    assert negative.empty, f"Negative values found: {negative.to_dict()}"
    return f"✓ {numeric.shape[1]} numeric columns non-negative"

def check_total_vitamin(df, tolerance=1e-9):
    """Assert the stored total matches a fresh recomputation."""
    recomputed = total_vitamin(df)
    diff = (df[config.TOTAL_VITAMIN_COL] - recomputed).abs().max()
    assert not diff > tolerance, f"{config.TOTAL_VITAMIN_COL} drift: max |diff| = {diff}"
    return f"✓ {config.TOTAL_VITAMIN_COL} matches unit-converted sum"

def print_qc_report(checks):
    """
    Print formatted QC report.

    Args:
        checks: List of (name, check_func, kwargs) tuples

    Returns:
        Number of failed checks
    """
    print("\n" + "=" * 80)
    print("QUALITY CONTROL REPORT")
    print("=" * 80)

    failures = 0
    for name, check_func, kwargs in checks:
        try:
            result = check_func(**kwargs)
            print(f"\n{name}")
            print(f"  {result}")
        except AssertionError as e:
            failures += 1
            print(f"\n❌ {name}")
            print(f"  ERROR: {e}")

    print("\n" + "=" * 80)
    return failures
