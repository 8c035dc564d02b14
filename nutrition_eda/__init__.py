"""
Nutrition EDA Pipeline
Package for ingredient data cleaning, category remapping, and descriptive reporting.
"""

__version__ = "1.0.0"

# Lazy imports to avoid long startup times (matplotlib is only needed by report)
# Import as needed in code

__all__ = ["config", "errors", "io", "cleaning", "categories", "buckets",
           "vitamins", "prep", "qc", "report"]
