"""Unit tests for Vitamin B12 bucketing."""

from __future__ import annotations

import math

import pandas as pd
import pytest

from nutrition_eda import config
from nutrition_eda.buckets import B12_GROUP_ORDER, add_b12_group, bucket_series, bucket_value
from nutrition_eda.errors import InvalidBucketValueError


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0.0, "Less than 1"),
        (0.999, "Less than 1"),
        (1.0, "Between 1 and 2"),
        (1.5, "Between 1 and 2"),
        (1.9999, "Between 1 and 2"),
        (2.0, "Between 2 and 3"),
        (3.0, "Between 2 and 3"),
        (3.0001, "Greater than 3"),
        (59.3, "Greater than 3"),
        (3, "Between 2 and 3"),
    ],
)
def test_bucket_boundaries(value: float, expected: str) -> None:
    assert bucket_value(value) == expected


@pytest.mark.parametrize("value", [-0.1, math.nan, math.inf, -math.inf, None, "abc"])
def test_invalid_values_are_rejected(value: object) -> None:
    with pytest.raises(InvalidBucketValueError):
        bucket_value(value)


def test_display_order_is_not_alphabetical() -> None:
    assert B12_GROUP_ORDER == ["Less than 1", "Between 1 and 2", "Between 2 and 3", "Greater than 3"]
    assert B12_GROUP_ORDER != sorted(B12_GROUP_ORDER)


def test_bucket_series_is_ordered_categorical() -> None:
    s = pd.Series([3.5, 0.2, 3.0, 1.0], index=[10, 11, 12, 13], name="VitaminB12")

    out = bucket_series(s)

    assert out.cat.ordered
    assert list(out.cat.categories) == B12_GROUP_ORDER
    assert list(out.index) == [10, 11, 12, 13]
    assert list(out) == ["Greater than 3", "Less than 1", "Between 2 and 3", "Between 1 and 2"]
    assert out.max() == "Greater than 3"


def test_bucket_series_names_bad_row() -> None:
    s = pd.Series([1.0, float("nan")], index=["a", "b"])

    with pytest.raises(InvalidBucketValueError) as excinfo:
        bucket_series(s)

    assert excinfo.value.row == "b"
    assert "row 'b'" in str(excinfo.value)


def test_add_b12_group_keeps_input_untouched() -> None:
    df = pd.DataFrame({config.B12_COL: [0.5, 2.5]})

    out, log = add_b12_group(df)

    assert config.B12_GROUP_COL not in df.columns
    assert list(out[config.B12_GROUP_COL]) == ["Less than 1", "Between 2 and 3"]
    assert log
