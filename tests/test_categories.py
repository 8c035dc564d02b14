"""Unit tests for the fine -> broad category mapping."""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from nutrition_eda import config
from nutrition_eda.categories import (
    UnmappedCategory,
    assign_broad_categories,
    broad_labels,
    build_category_index,
    categorize,
    unmapped_frame,
)
from nutrition_eda.errors import CategoryMapError, MissingMappingError


def _cleaned(categories: list[str]) -> pd.DataFrame:
    return pd.DataFrame({"Category": categories, "VitaminB12": [0.0] * len(categories)})


def test_index_covers_every_member_exactly_once(category_groups: pd.DataFrame) -> None:
    index = build_category_index(category_groups)

    for broad in category_groups.columns:
        for fine in category_groups[broad].dropna():
            assert categorize(fine, index) == broad
    assert len(index) == category_groups.notna().sum().sum()


def test_padding_cells_are_ignored(category_groups: pd.DataFrame) -> None:
    groups = category_groups.copy()
    groups.loc[2, "Dairy/Fatty"] = "   "

    index = build_category_index(groups)

    assert "" not in index
    assert np.nan not in index


def test_entries_are_stripped() -> None:
    groups = pd.DataFrame({" Dairy/Fatty ": [" Cheddar Cheese "]})

    index = build_category_index(groups)

    assert index == {"Cheddar Cheese": "Dairy/Fatty"}


def test_repeat_within_same_column_is_tolerated() -> None:
    groups = pd.DataFrame({"Dairy/Fatty": ["Milk", "Milk"], "Meat/Protein": ["Beef", np.nan]})

    assert build_category_index(groups) == {"Milk": "Dairy/Fatty", "Beef": "Meat/Protein"}


def test_overlap_between_columns_is_rejected() -> None:
    groups = pd.DataFrame({"Dairy/Fatty": ["Egg"], "Meat/Protein": ["Egg"]})

    with pytest.raises(CategoryMapError, match="'Egg'.*'Dairy/Fatty'.*'Meat/Protein'"):
        build_category_index(groups)


def test_empty_table_is_rejected() -> None:
    with pytest.raises(CategoryMapError):
        build_category_index(pd.DataFrame({"Dairy/Fatty": [np.nan]}))


def test_broad_labels_keep_table_order(category_groups: pd.DataFrame) -> None:
    assert broad_labels(category_groups) == list(category_groups.columns)


def test_categorize_missing_raises(category_groups: pd.DataFrame) -> None:
    index = build_category_index(category_groups)

    with pytest.raises(MissingMappingError) as excinfo:
        categorize("Tofu", index)

    assert excinfo.value.categories == ["Tofu"]


def test_assign_all_mapped(category_groups: pd.DataFrame) -> None:
    index = build_category_index(category_groups)
    df = _cleaned(["Cheddar Cheese", "Beef", "Orange"])

    out, unmapped, log = assign_broad_categories(df, index, policy="fail")

    assert list(out[config.BROAD_CATEGORY_COL]) == ["Dairy/Fatty", "Meat/Protein", "Fruits/Vegetables"]
    assert unmapped == []
    assert config.BROAD_CATEGORY_COL not in df.columns
    assert any("All 3 fine categories mapped" in line for line in log)


def test_fail_policy_raises_with_all_unmapped(category_groups: pd.DataFrame) -> None:
    index = build_category_index(category_groups)
    df = _cleaned(["Beef", "Tofu", "Kale", "Tofu"])

    with pytest.raises(MissingMappingError) as excinfo:
        assign_broad_categories(df, index, policy="fail")

    assert excinfo.value.categories == ["Kale", "Tofu"]


def test_flag_policy_labels_and_reports(category_groups: pd.DataFrame) -> None:
    index = build_category_index(category_groups)
    df = _cleaned(["Beef", "Tofu", "Kale", "Tofu"])

    out, unmapped, _ = assign_broad_categories(df, index, policy="flag")

    assert len(out) == 4
    assert list(out[config.BROAD_CATEGORY_COL]) == [
        "Meat/Protein",
        config.UNCLASSIFIED_LABEL,
        config.UNCLASSIFIED_LABEL,
        config.UNCLASSIFIED_LABEL,
    ]
    assert unmapped == [UnmappedCategory("Kale", 1), UnmappedCategory("Tofu", 2)]


def test_exclude_policy_drops_rows(category_groups: pd.DataFrame) -> None:
    index = build_category_index(category_groups)
    df = _cleaned(["Beef", "Tofu", "Bread"])

    out, unmapped, _ = assign_broad_categories(df, index, policy="exclude")

    assert list(out["Category"]) == ["Beef", "Bread"]
    assert list(out.index) == [0, 1]
    assert unmapped == [UnmappedCategory("Tofu", 1)]


def test_unknown_policy_is_rejected(category_groups: pd.DataFrame) -> None:
    index = build_category_index(category_groups)

    with pytest.raises(ValueError, match="Unknown unmapped-category policy"):
        assign_broad_categories(_cleaned(["Beef"]), index, policy="ignore")


def test_unmapped_frame_columns() -> None:
    frame = unmapped_frame([UnmappedCategory("Tofu", 2)])

    assert list(frame.columns) == ["Category", "rows"]
    assert frame.to_dict("records") == [{"Category": "Tofu", "rows": 2}]
    assert unmapped_frame([]).empty
