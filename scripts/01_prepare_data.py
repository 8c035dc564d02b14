#!/usr/bin/env python
"""
01_prepare_data.py
- Load the ingredient table and the category-membership table
- Clean, map fine categories to broad categories, derive TotalVitamin and VitaminB12.Group
- Run QC checks
- Save the derived table into data/processed/ and unmapped categories into outputs/tables/
"""

import sys
from pathlib import Path

# ensure repo root on path for `nutrition_eda` imports when running as script
REPO_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(REPO_ROOT))

from nutrition_eda import config, qc
from nutrition_eda.io import file_size_mb
from nutrition_eda.prep import run_pipeline_from_files, save_outputs


def main():
    config.print_config()
    config.ensure_output_dirs()

    # ============================================================================
    # 1. TRANSFORM
    # ============================================================================
    print("=" * 80)
    print("PREPARING INGREDIENT DATA")
    print("=" * 80)

    result = run_pipeline_from_files()
    df = result.table

    if result.unmapped:
        print(f"\n⚠️  Unmapped fine categories ({len(result.unmapped)}):")
        for u in result.unmapped:
            print(f"   - {u.category} ({u.rows} rows)")

    # ============================================================================
    # 2. QUALITY CONTROL
    # ============================================================================
    checks = [
        ("Pseudo-category rows removed", qc.check_no_pseudo_rows, {"df": df}),
        ("Broad categories assigned", qc.check_broad_categories,
         {"df": df, "labels": result.broad_labels}),
        ("Vitamin B12 groups", qc.check_b12_groups, {"df": df}),
        ("Non-negative nutrients", qc.check_non_negative, {"df": df}),
        ("Total vitamin", qc.check_total_vitamin, {"df": df}),
    ]
    failures = qc.print_qc_report(checks)

    # ============================================================================
    # 3. SAVE
    # ============================================================================
    paths = save_outputs(result)
    print()
    for name, path in paths.items():
        print(f"✓ Saved {name}: {path} ({file_size_mb(path):.2f} MB)")

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
