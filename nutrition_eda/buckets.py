"""
Buckets module: Ordinal grouping of Vitamin B12 into four labelled ranges.
"""

import math

import pandas as pd
from . import config
from .errors import InvalidBucketValueError

# Matched in order; the first predicate that holds wins.
# The third range is closed on both ends (3.0 belongs to 'Between 2 and 3').
B12_BUCKETS = [
    (lambda v: v < 1, "Less than 1"),
    (lambda v: 1 <= v < 2, "Between 1 and 2"),
    (lambda v: 2 <= v <= 3, "Between 2 and 3"),
    (lambda v: v > 3, "Greater than 3"),
]

# Display order (not alphabetical)
B12_GROUP_ORDER = [label for _, label in B12_BUCKETS]

B12_GROUP_DTYPE = pd.CategoricalDtype(categories=B12_GROUP_ORDER, ordered=True)


def bucket_value(value, buckets=B12_BUCKETS):
    """
    Return the label of the first bucket whose predicate holds for value.

    Raises:
        InvalidBucketValueError: value is negative, NaN or infinite
    """
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidBucketValueError(value) from None

    if not math.isfinite(number) or number < 0:
        raise InvalidBucketValueError(value)

    for predicate, label in buckets:
        if predicate(number):
            return label

    # Unreachable while the buckets partition [0, inf)
    raise InvalidBucketValueError(value)


def bucket_series(s: pd.Series) -> pd.Series:
    """
    Bucket a whole column into an ordered categorical.

    Raises:
        InvalidBucketValueError: naming the row index of the first bad value
    """
    labels = []
    for row, value in s.items():
        try:
            labels.append(bucket_value(value))
        except InvalidBucketValueError:
            raise InvalidBucketValueError(value, row=row) from None

    return pd.Series(labels, index=s.index, dtype=B12_GROUP_DTYPE, name=config.B12_GROUP_COL)


def add_b12_group(df):
    """
    Add config.B12_GROUP_COL derived from config.B12_COL.

    Returns:
        DataFrame with the group column and log info
    """
    log = []
    df_out = df.copy()
    df_out[config.B12_GROUP_COL] = bucket_series(df_out[config.B12_COL])

    counts = df_out[config.B12_GROUP_COL].value_counts(sort=False)
    log.append(f"✓ {config.B12_GROUP_COL} assigned: {counts.to_dict()}")

    return df_out, log
