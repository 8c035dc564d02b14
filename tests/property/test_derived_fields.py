"""Property-based tests for bucketing and the total vitamin sum."""

from __future__ import annotations

import pandas as pd
import pytest

pytest.importorskip("hypothesis")
from hypothesis import given  # type: ignore  # noqa: E402
from hypothesis import strategies as st

from nutrition_eda import config
from nutrition_eda.buckets import B12_GROUP_ORDER, bucket_value
from nutrition_eda.vitamins import total_vitamin, total_vitamin_value

_NON_NEGATIVE = st.floats(min_value=0, max_value=1e6, allow_nan=False, allow_infinity=False)
_FIELDS = ("VitaminA", "VitaminB12", "VitaminB6", "VitaminC", "VitaminE", "VitaminK")


@given(_NON_NEGATIVE)
def test_bucket_is_one_of_four_labels(value: float) -> None:
    assert bucket_value(value) in B12_GROUP_ORDER


@given(_NON_NEGATIVE, _NON_NEGATIVE)
def test_bucket_is_monotonic(a: float, b: float) -> None:
    low, high = sorted((a, b))
    assert B12_GROUP_ORDER.index(bucket_value(low)) <= B12_GROUP_ORDER.index(bucket_value(high))


@given(st.lists(_NON_NEGATIVE, min_size=6, max_size=6), st.permutations(range(6)))
def test_total_is_order_independent(values: list[float], order: list[int]) -> None:
    a, b12, b6, c, e, k = values
    expected = a + b12 + 1000 * b6 + 1000 * c + e + k

    # Columns and factors both in permuted order, so the terms are summed in that order
    fields = [_FIELDS[i] for i in order]
    df = pd.DataFrame({field: [values[_FIELDS.index(field)]] for field in fields})
    factors = {field: config.VITAMIN_UNIT_FACTORS[field] for field in fields}

    shuffled = total_vitamin(df, factors=factors).iloc[0]
    forward = total_vitamin_value(**dict(zip(_FIELDS, values)))

    assert list(df.columns) == fields
    assert shuffled == pytest.approx(expected)
    assert forward == pytest.approx(expected)
    assert shuffled == pytest.approx(forward)
