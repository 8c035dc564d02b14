#!/usr/bin/env python
"""
02_eda_report.py
- Rebuild the derived ingredient table from the two input tables
- Summary statistics, Pearson correlations, per-category medians
- Figures (histograms, scatter + linear fit, box plots, grouped bars, heatmap)
- Markdown report into reports/nutrition_report.md

Output:
- outputs/tables/summary_statistics.csv
- outputs/tables/correlations.csv
- outputs/tables/category_summary.csv
- outputs/figures/*.png
"""

import sys
from pathlib import Path

import matplotlib
matplotlib.use("Agg")  # headless: figures are only saved to disk

# ensure repo root on path for `nutrition_eda` imports when running as script
REPO_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(REPO_ROOT))

from nutrition_eda import config, report
from nutrition_eda.io import save_csv
from nutrition_eda.prep import run_pipeline_from_files


def main():
    config.ensure_output_dirs()

    print("=" * 80)
    print("NUTRITION EDA REPORT")
    print("=" * 80)

    # ============================================================================
    # 1. LOAD AND PREPARE DATA
    # ============================================================================
    result = run_pipeline_from_files(verbose=False)
    df = result.table
    print(f"\n[DATA] {len(df):,} foods, {len(result.category_order)} broad categories")

    # ============================================================================
    # 2. STATISTICS
    # ============================================================================
    print("\n" + "=" * 80)
    print("SUMMARY STATISTICS")
    print("=" * 80)

    columns = report.available_columns(df, config.SUMMARY_COLUMNS)
    summary = report.summary_statistics(df, columns)
    print("\n" + summary.to_string(index=False))
    save_csv(summary, config.OUTPUT_FILES["summary_statistics"])

    cat_summary = report.category_summary(df, result.category_order, columns)
    print("\n" + cat_summary.to_string(index=False))
    save_csv(cat_summary, config.OUTPUT_FILES["category_summary"])

    print("\n" + "=" * 80)
    print("CORRELATIONS")
    print("=" * 80)

    correlations = report.pearson_correlations(df, report.available_pairs(df, config.CORRELATION_PAIRS))
    for sentence in correlations["interpretation"]:
        print(f"  {sentence}")
    save_csv(correlations, config.OUTPUT_FILES["correlations"])

    # ============================================================================
    # 3. FIGURES AND REPORT
    # ============================================================================
    print("\n" + "=" * 80)
    print("CREATING FIGURES")
    print("=" * 80)

    figures = report.render_figures(result)
    for _, path in figures:
        print(f"✓ Saved: {path}")

    report_path = report.write_report(result, summary, correlations, cat_summary, figures)
    print(f"\n✓ Report written: {report_path}")

    print("\n" + "=" * 80)
    print("✓ ANALYSIS COMPLETE")
    print("=" * 80)


if __name__ == "__main__":
    main()
