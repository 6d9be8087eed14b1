"""Transaction categories and their display colors."""

DEFAULT_CATEGORY_COLOR = "#6B7280"

CATEGORY_COLORS: dict[str, str] = {
    "Revenue": "#22C55E",
    "Payroll": "#3B82F6",
    "Operations": "#6B7280",
    "IT Expenses": "#8B5CF6",
    "Facilities": "#F59E42",
    "Marketing": "#EC4899",
    "Travel": "#14B8A6",
    "Insurance": "#6366F1",
    "Tax": "#EF4444",
    "Other": "#6B7280",
}

DEFAULT_DEPARTMENT = "All"


def resolve_category_color(category: str) -> str:
    """Return the display color for a category, gray if unknown.

    Lookup is exact; "travel" and "Travel" are different categories.
    """
    return CATEGORY_COLORS.get(category, DEFAULT_CATEGORY_COLOR)


def resolve_department(department: str | None) -> str:
    """Return the department, or "All" when absent or blank."""
    if department is None or not str(department).strip():
        return DEFAULT_DEPARTMENT
    return str(department).strip()
