"""
Report module: Summary statistics, Pearson correlations, figures and the Markdown report.

The derived table from prep.run_pipeline() is the only input.
"""

import os
from pathlib import Path

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns
import statsmodels.api as sm
from scipy import stats
from . import config
from .buckets import B12_GROUP_ORDER
from .categories import unmapped_frame

# ============================================================================
# STATISTICS
# ============================================================================

def available_columns(df, columns):
    """Keep only the columns present in df (order preserved)."""
    return [col for col in columns if col in df.columns]


def available_pairs(df, pairs):
    """Keep only the (x, y) pairs whose columns are both present in df."""
    return [(x, y) for x, y in pairs if x in df.columns and y in df.columns]


def summary_statistics(df, columns):
    """
    Min / median / max (plus count and mean) per numeric column.

    Returns:
        pd.DataFrame with one row per column
    """
    rows = []
    for col in columns:
        s = df[col].dropna()
        rows.append({
            "variable": col,
            "count": int(s.count()),
            "min": s.min(),
            "median": s.median(),
            "max": s.max(),
            "mean": s.mean(),
        })
    return pd.DataFrame(rows, columns=["variable", "count", "min", "median", "max", "mean"])


def correlation_strength(r):
    """Wording for |r| used in the report prose."""
    if r is None or np.isnan(r):
        return "undefined"
    for bound, label in config.CORRELATION_STRENGTH:
        if abs(r) >= bound:
            return label
    return "negligible"


def describe_correlation(x, y, r, p_value, n):
    """One sentence interpreting a Pearson coefficient."""
    strength = correlation_strength(r)
    if strength == "undefined":
        return f"{x} and {y}: correlation undefined (n = {n} or constant values)."

    direction = "positive" if r > 0 else "negative"
    p_text = "p < 0.001" if p_value < 0.001 else f"p = {p_value:.3f}"
    sentence = f"{x} and {y} show a {strength} {direction} correlation (r = {r:.2f}, {p_text}, n = {n})."
    if strength in ("strong", "moderate"):
        sentence += f" Foods higher in {x} tend to be {'higher' if r > 0 else 'lower'} in {y}."
    return sentence


def pearson_correlations(df, pairs):
    """
    Pearson r and p-value for each (x, y) pair, rows with NaN in either dropped.

    Returns:
        pd.DataFrame with columns x, y, n, r, p_value, strength, interpretation
    """
    rows = []
    for x, y in pairs:
        sub = df[[x, y]].dropna()
        n = len(sub)
        if n < 3 or sub[x].nunique() < 2 or sub[y].nunique() < 2:
            r, p_value = np.nan, np.nan
        else:
            r, p_value = stats.pearsonr(sub[x], sub[y])
            r, p_value = float(r), float(p_value)
        rows.append({
            "x": x,
            "y": y,
            "n": n,
            "r": r,
            "p_value": p_value,
            "strength": correlation_strength(r),
            "interpretation": describe_correlation(x, y, r, p_value, n),
        })
    return pd.DataFrame(rows, columns=["x", "y", "n", "r", "p_value", "strength", "interpretation"])


def category_summary(df, order, columns):
    """Row count and per-column medians for each broad category, in display order."""
    grouped = df.groupby(config.BROAD_CATEGORY_COL)
    summary = grouped[columns].median().add_prefix("median_")
    summary.insert(0, "n", grouped.size())
    summary = summary.reindex([label for label in order if label in summary.index])
    return summary.reset_index()

# ============================================================================
# FIGURES
# ============================================================================

def _save(fig, path):
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(path, dpi=config.FIGURE_DPI, bbox_inches="tight")
    plt.close(fig)
    return path


def plot_histogram(df, column, path, bins=40):
    """Histogram of one nutrient."""
    fig, ax = plt.subplots(figsize=(8, 5))
    ax.hist(df[column].dropna(), bins=bins, edgecolor="black", alpha=0.7)
    ax.set_xlabel(column, fontsize=11)
    ax.set_ylabel("Frequency", fontsize=11)
    ax.set_title(f"Distribution of {column}", fontsize=12, fontweight="bold")
    ax.grid(alpha=0.3)
    return _save(fig, path)


def linear_fit(x, y):
    """OLS fit y ~ 1 + x; returns (intercept, slope)."""
    model = sm.OLS(np.asarray(y, dtype=float), sm.add_constant(np.asarray(x, dtype=float))).fit()
    intercept, slope = model.params
    return float(intercept), float(slope)


def plot_scatter_with_fit(df, x, y, path):
    """Scatter of y against x with an OLS line overlay."""
    sub = df[[x, y]].dropna()
    fig, ax = plt.subplots(figsize=(8, 6))
    ax.scatter(sub[x], sub[y], alpha=0.4, s=15)

    if len(sub) >= 2 and sub[x].nunique() >= 2:
        intercept, slope = linear_fit(sub[x], sub[y])
        xs = np.linspace(sub[x].min(), sub[x].max(), 100)
        ax.plot(xs, intercept + slope * xs, color="r", linestyle="--", linewidth=2,
                label=f"y = {intercept:.2f} + {slope:.3f}x")
        ax.legend()

    ax.set_xlabel(x, fontsize=11)
    ax.set_ylabel(y, fontsize=11)
    ax.set_title(f"{y} vs {x}", fontsize=12, fontweight="bold")
    ax.grid(alpha=0.3)
    return _save(fig, path)


def plot_box_by_category(df, column, path, order):
    """Box plot of one nutrient grouped by broad category."""
    fig, ax = plt.subplots(figsize=(10, 6))
    sns.boxplot(data=df, x=config.BROAD_CATEGORY_COL, y=column, order=order, ax=ax)
    ax.set_xlabel("Broad category", fontsize=11)
    ax.set_ylabel(column, fontsize=11)
    ax.set_title(f"{column} by broad category", fontsize=12, fontweight="bold")
    ax.grid(alpha=0.3, axis="y")
    return _save(fig, path)


def plot_b12_group_bars(df, path, order):
    """Grouped bar chart: B12 group counts within each broad category."""
    fig, ax = plt.subplots(figsize=(11, 6))
    sns.countplot(data=df, x=config.BROAD_CATEGORY_COL, hue=config.B12_GROUP_COL,
                  order=order, hue_order=B12_GROUP_ORDER, ax=ax)
    ax.set_xlabel("Broad category", fontsize=11)
    ax.set_ylabel("Number of foods", fontsize=11)
    ax.set_title("Vitamin B12 group by broad category", fontsize=12, fontweight="bold")
    ax.legend(title="Vitamin B12 (mcg)")
    return _save(fig, path)


def plot_correlation_heatmap(df, columns, path):
    """Pearson correlation matrix of the given columns."""
    corr = df[columns].corr(method="pearson")
    fig, ax = plt.subplots(figsize=(10, 8))
    sns.heatmap(corr, annot=True, fmt=".2f", cmap="coolwarm", vmin=-1, vmax=1, ax=ax)
    ax.set_title("Correlation Matrix", fontsize=12, fontweight="bold")
    return _save(fig, path)


def render_figures(result, figures_dir=None):
    """
    Render the standard set of report figures.

    Returns:
        list of (caption, Path)
    """
    figures_dir = Path(figures_dir or config.FIGURES_DIR)
    df = result.table
    order = result.category_order
    figures = []

    for col in available_columns(df, [config.TOTAL_VITAMIN_COL, config.B12_COL, "Protein"]):
        figures.append((f"Distribution of {col}",
                        plot_histogram(df, col, figures_dir / f"hist_{col.lower()}.png")))

    for x, y in available_pairs(df, config.CORRELATION_PAIRS):
        figures.append((f"{y} vs {x} with linear fit",
                        plot_scatter_with_fit(df, x, y, figures_dir / f"scatter_{x.lower()}_{y.lower()}.png")))

    for col in available_columns(df, [config.TOTAL_VITAMIN_COL, "Protein"]):
        figures.append((f"{col} by broad category",
                        plot_box_by_category(df, col, figures_dir / f"box_{col.lower()}_by_category.png", order)))

    figures.append(("Vitamin B12 group by broad category",
                    plot_b12_group_bars(df, figures_dir / "bar_b12_group_by_category.png", order)))

    heat_cols = available_columns(df, config.SUMMARY_COLUMNS)
    if len(heat_cols) >= 2:
        figures.append(("Correlation matrix",
                        plot_correlation_heatmap(df, heat_cols, figures_dir / "correlation_matrix.png")))

    return figures

# ============================================================================
# MARKDOWN REPORT
# ============================================================================

def _table_block(df, float_format="{:.3f}".format):
    return "```\n" + df.to_string(index=False, float_format=float_format) + "\n```"


def write_report(result, summary, correlations, cat_summary, figures, path=None):
    """
    Write the Markdown report: narrative, summary tables, correlation prose,
    unmapped-category warnings and figure links.

    Returns:
        Path to the report
    """
    path = Path(path or config.OUTPUT_FILES["report"])
    path.parent.mkdir(parents=True, exist_ok=True)
    df = result.table

    lines = [
        "# Nutrient Content of Foods: Exploratory Analysis",
        "",
        "## Data",
        "",
        f"The cleaned table holds {len(df):,} foods across "
        f"{df[config.CATEGORY_COL].nunique():,} fine categories, grouped into "
        f"{len(result.broad_labels)} broad categories ({', '.join(result.broad_labels)}).",
        f"{config.TOTAL_VITAMIN_COL} sums vitamins A, B12, B6, C, E and K in micrograms "
        f"(B6 and C are converted from milligrams).",
        f"{config.B12_GROUP_COL} buckets Vitamin B12 into: {', '.join(B12_GROUP_ORDER)}.",
        "",
    ]

    if result.unmapped:
        lines += [
            "### Unmapped categories",
            "",
            f"{len(result.unmapped)} fine categories have no broad category "
            f"(policy: {result.policy}).",
            "",
            _table_block(unmapped_frame(result.unmapped)),
            "",
        ]

    lines += [
        "## Summary statistics",
        "",
        _table_block(summary),
        "",
        "## Broad categories",
        "",
        _table_block(cat_summary),
        "",
        "## Correlations between nutrients",
        "",
    ]
    lines += [f"- {sentence}" for sentence in correlations["interpretation"]]
    lines.append("")

    lines += ["## Figures", ""]
    for caption, fig_path in figures:
        rel = Path(os.path.relpath(fig_path, path.parent))
        lines += [f"![{caption}]({rel.as_posix()})", ""]

    path.write_text("\n".join(lines), encoding="utf-8")
    return path
