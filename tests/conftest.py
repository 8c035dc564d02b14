"""Shared fixtures: small raw ingredient and membership tables."""

from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest

from tests.factories import make_raw


@pytest.fixture
def raw_ingredients() -> pd.DataFrame:
    return make_raw(
        [
            ["Cheddar Cheese", "Cheese, cheddar", 1009, 1.28, 24.9, 33.31, 263, 1.5, 0.066, 0.0, 0.78, 2.4],
            ["Butter", "Butter, salted", 1001, 0.06, 0.85, 81.11, 684, 0.17, 0.003, 0.0, 2.32, 7.0],
            ["Beef", "Beef, ground", 23557, 0.0, 18.59, 15.0, 4, 2.14, 0.357, 0.0, 0.4, 1.5],
            ["Liver", "Beef, liver", 13325, 3.89, 20.36, 3.63, 4968, 59.3, 1.083, 1.3, 0.38, 3.1],
            ["Bread", "Bread, whole-wheat", 18075, 43.34, 12.45, 3.5, 0, 0.0, 0.215, 0.0, 0.3, 7.8],
            ["Orange", "Oranges, raw", 9200, 11.75, 0.94, 0.12, 11, 0.0, 0.06, 53.2, 0.18, 0.0],
            ["Candy", "Candies, milk chocolate", 19120, 59.4, 7.65, 29.66, 59, 3.0, 0.036, 0.0, 0.51, 5.7],
            ["Test Food", "Vitamin mix", 1, 0.0, 0.0, 0.0, 5, 2.0, 0.01, 0.02, 0.0, 1.0],
            ["Vitamin D", "Vitamin D", 99999, 0, 0, 0, 0, 0, 0, 0, 0, 0],
        ]
    )


@pytest.fixture
def category_groups() -> pd.DataFrame:
    # Uneven columns pad with NaN, as pandas reads them from CSV
    return pd.DataFrame(
        {
            "Dairy/Fatty": ["Cheddar Cheese", "Butter", np.nan],
            "Meat/Protein": ["Beef", "Liver", "Test Food"],
            "Grains/Starches": ["Bread", np.nan, np.nan],
            "Fruits/Vegetables": ["Orange", np.nan, np.nan],
            "Sweets/Beverages": ["Candy", np.nan, np.nan],
        }
    )
