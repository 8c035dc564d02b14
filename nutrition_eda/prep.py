"""
Prep module: Centralized transform shared by the scripts.

Cleaning -> broad categories -> total vitamin -> B12 group, run once over the
two input tables. The inputs are never mutated.
"""

from dataclasses import dataclass, field
from pathlib import Path

import pandas as pd
from . import config
from .buckets import add_b12_group
from .categories import assign_broad_categories, broad_labels, build_category_index, unmapped_frame
from .cleaning import clean_ingredients
from .io import load_category_groups, load_ingredients, save_csv, save_parquet
from .vitamins import add_total_vitamin


@dataclass
class TransformResult:
    """Derived table plus everything the report needs to describe how it was built."""
    table: pd.DataFrame
    unmapped: list
    broad_labels: list
    policy: str = config.UNMAPPED_POLICY
    log: list = field(default_factory=list)

    @property
    def category_order(self):
        """Broad labels in display order, with the unclassified label last if present."""
        present = set(self.table[config.BROAD_CATEGORY_COL].unique())
        order = [label for label in self.broad_labels if label in present]
        if config.UNCLASSIFIED_LABEL in present:
            order.append(config.UNCLASSIFIED_LABEL)
        return order


def run_pipeline(df_ingredients, df_groups, policy=None, verbose=None):
    """
    Clean, categorize and derive the ingredient table.

    Args:
        df_ingredients: Raw ingredient DataFrame
        df_groups: Category membership DataFrame (one column per broad category)
        policy: Unmapped-category policy (default config.UNMAPPED_POLICY)
        verbose: Print the log as steps complete (default config.VERBOSE)

    Returns:
        TransformResult
    """
    verbose = config.VERBOSE if verbose is None else verbose
    policy = policy or config.UNMAPPED_POLICY
    log = []

    def step(name, lines):
        log.append(f"[{name}]")
        log.extend(f"  {line}" for line in lines)
        if verbose:
            print(f"\n[{name}]")
            for line in lines:
                print(f"  {line}")

    df_clean, clean_log = clean_ingredients(df_ingredients)
    step("CLEAN", clean_log)

    index = build_category_index(df_groups)
    labels = broad_labels(df_groups)
    if len(labels) != config.EXPECTED_BROAD_CATEGORIES:
        step("CATEGORIES", [f"⚠️  Membership table has {len(labels)} broad categories "
                            f"(expected {config.EXPECTED_BROAD_CATEGORIES})"])

    df_cat, unmapped, cat_log = assign_broad_categories(df_clean, index, policy=policy)
    step("CATEGORIES", [f"✓ Reverse index built: {len(index)} fine categories → {len(labels)} broad"] + cat_log)

    df_total, total_log = add_total_vitamin(df_cat)
    step("TOTAL VITAMIN", total_log)

    df_final, group_log = add_b12_group(df_total)
    step("B12 GROUP", group_log)

    return TransformResult(table=df_final, unmapped=unmapped, broad_labels=labels,
                           policy=policy, log=log)


def run_pipeline_from_files(ingredients_path=None, groups_path=None, policy=None, verbose=None):
    """Load both input tables (defaults from config.INPUT_FILES) and run the pipeline."""
    ingredients_path = Path(ingredients_path or config.INPUT_FILES["ingredients"])
    groups_path = Path(groups_path or config.INPUT_FILES["category_groups"])

    df_ingredients = load_ingredients(ingredients_path)
    df_groups = load_category_groups(groups_path)

    return run_pipeline(df_ingredients, df_groups, policy=policy, verbose=verbose)


def save_outputs(result, csv_path=None, parquet_path=None, unmapped_path=None):
    """
    Write the derived table (CSV + Parquet) and the unmapped-category table.

    Returns:
        dict of output name -> Path
    """
    paths = {
        "ingredients_clean_csv": save_csv(
            result.table, csv_path or config.OUTPUT_FILES["ingredients_clean_csv"]),
        "ingredients_clean": save_parquet(
            result.table, parquet_path or config.OUTPUT_FILES["ingredients_clean"]),
        "unmapped_categories": save_csv(
            unmapped_frame(result.unmapped), unmapped_path or config.OUTPUT_FILES["unmapped_categories"]),
    }
    return paths
