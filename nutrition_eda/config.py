"""
Configuration module: paths, column names, thresholds, and global settings.
"""

from pathlib import Path

# ============================================================================
# PROJECT PATHS (zero hardcoding - all relative to PROJECT_ROOT)
# ============================================================================

# Detect PROJECT_ROOT: either cwd or parent if in notebooks/scripts
def get_project_root():
    """Auto-detect project root by checking for data/ and nutrition_eda/ folders."""
    cwd = Path.cwd()

    # If already in project root
    if (cwd / "data").exists() and (cwd / "nutrition_eda").exists():
        return cwd

    # If in notebooks/ or scripts/
    if cwd.name in ["notebooks", "scripts"] and (cwd.parent / "data").exists():
        return cwd.parent

    # Last resort: the directory holding this package
    return Path(__file__).resolve().parent.parent

PROJECT_ROOT = get_project_root()

# Core data paths
DATA_DIR = PROJECT_ROOT / "data"
ORIGINAL_DIR = DATA_DIR / "original"
PROCESSED_DIR = DATA_DIR / "processed"
OUTPUTS_DIR = PROJECT_ROOT / "outputs"
TABLES_DIR = OUTPUTS_DIR / "tables"
FIGURES_DIR = OUTPUTS_DIR / "figures"
REPORTS_DIR = PROJECT_ROOT / "reports"


def ensure_output_dirs():
    """Create output directories if missing."""
    for directory in (PROCESSED_DIR, TABLES_DIR, FIGURES_DIR, REPORTS_DIR):
        directory.mkdir(parents=True, exist_ok=True)


# Input files (raw data)
INPUT_FILES = {
    "ingredients": ORIGINAL_DIR / "ingredients.csv",
    "category_groups": ORIGINAL_DIR / "category_groups.csv",
}

# Output files (processed)
OUTPUT_FILES = {
    "ingredients_clean_csv": PROCESSED_DIR / "ingredients_clean.csv",
    "ingredients_clean": PROCESSED_DIR / "ingredients_clean.parquet",
    "unmapped_categories": TABLES_DIR / "unmapped_categories.csv",
    "summary_statistics": TABLES_DIR / "summary_statistics.csv",
    "correlations": TABLES_DIR / "correlations.csv",
    "category_summary": TABLES_DIR / "category_summary.csv",
    "report": REPORTS_DIR / "nutrition_report.md",
}

# ============================================================================
# COLUMN NAMES
# ============================================================================

CATEGORY_COL = "Category"
DESCRIPTION_COL = "Description"
BROAD_CATEGORY_COL = "Category.Broad"
TOTAL_VITAMIN_COL = "TotalVitamin"
B12_COL = "VitaminB12"
B12_GROUP_COL = "VitaminB12.Group"

# Record identifiers, kept as strings (not nutrients)
ID_COLUMNS = ["NutrientDataBankNumber"]

# Non-numeric columns (everything else in the ingredient table must be numeric)
TEXT_COLUMNS = [CATEGORY_COL, DESCRIPTION_COL]

# ============================================================================
# DATA QUALITY CONSTANTS
# ============================================================================

# Non-food rows in the raw table (all nutrient fields are zero)
PSEUDO_CATEGORIES = ["Vitamin D"]

# Micrograms per stored unit. VitaminB6 and VitaminC are stored in milligrams.
VITAMIN_UNIT_FACTORS = {
    "VitaminA": 1,
    "VitaminB12": 1,
    "VitaminB6": 1000,
    "VitaminC": 1000,
    "VitaminE": 1,
    "VitaminK": 1,
}

# Category remapping
EXPECTED_BROAD_CATEGORIES = 5
UNCLASSIFIED_LABEL = "Unclassified"
UNMAPPED_POLICY = "flag"               # Strategy for unmapped categories: 'fail', 'flag', 'exclude'
UNMAPPED_POLICIES = ("fail", "flag", "exclude")

# ============================================================================
# REPORT SETTINGS
# ============================================================================

SUMMARY_COLUMNS = ["Protein", "TotalLipid", "Carbohydrate", "SugarTotal",
                   "Fiber", "VitaminB12", TOTAL_VITAMIN_COL]

# Nutrient pairs discussed in the report (x, y)
CORRELATION_PAIRS = [
    ("Protein", "VitaminB12"),
    ("TotalLipid", "Cholesterol"),
    ("Carbohydrate", "SugarTotal"),
    ("Carbohydrate", "Fiber"),
    ("VitaminC", "VitaminA"),
    ("Protein", TOTAL_VITAMIN_COL),
]

# |r| lower bounds for the strength wording in the report
CORRELATION_STRENGTH = [
    (0.5, "strong"),
    (0.3, "moderate"),
    (0.1, "weak"),
    (0.0, "negligible"),
]

FIGURE_DPI = 150

# ============================================================================
# LOGGING & VERBOSITY
# ============================================================================

VERBOSE = True

def print_config():
    """Print all configuration settings."""
    print("\n" + "=" * 80)
    print("PIPELINE CONFIGURATION")
    print("=" * 80)
    print(f"\n📁 PROJECT ROOT: {PROJECT_ROOT}")
    print(f"📂 DATA DIR: {DATA_DIR}")
    print(f"📂 PROCESSED DIR: {PROCESSED_DIR}")
    print(f"📂 OUTPUTS DIR: {OUTPUTS_DIR}")
    print(f"\n🧪 Unit factors (to mcg): {VITAMIN_UNIT_FACTORS}")
    print(f"🏷️  Unmapped category policy: {UNMAPPED_POLICY}")
    print(f"\n✓ Configuration loaded successfully")
    print("=" * 80 + "\n")
