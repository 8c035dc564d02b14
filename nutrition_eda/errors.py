"""
Errors module: exception types raised by the cleaning and transform steps.
"""


class NutritionDataError(ValueError):
    """Base class for data problems in the ingredient pipeline."""


class MalformedInputError(NutritionDataError):
    """A cell that cannot be used as-is (non-numeric, negative, or empty category)."""

    def __init__(self, row, column, value, reason="non-numeric value"):
        self.row = row
        self.column = column
        self.value = value
        self.reason = reason
        super().__init__(f"Malformed input at row {row!r}, column '{column}': {reason} ({value!r})")


class MissingMappingError(NutritionDataError):
    """One or more fine categories are absent from the membership table."""

    def __init__(self, categories):
        self.categories = sorted(categories)
        shown = ", ".join(repr(c) for c in self.categories[:10])
        more = f" (+{len(self.categories) - 10} more)" if len(self.categories) > 10 else ""
        super().__init__(f"No broad category for {len(self.categories)} fine categories: {shown}{more}")


class CategoryMapError(NutritionDataError):
    """The membership table (or column layout) breaks the one-to-one mapping."""


class InvalidBucketValueError(NutritionDataError):
    """Bucketing input is negative, NaN or infinite."""

    def __init__(self, value, row=None):
        self.value = value
        self.row = row
        where = f" at row {row!r}" if row is not None else ""
        super().__init__(f"Cannot bucket value {value!r}{where}: expected a finite non-negative number")
