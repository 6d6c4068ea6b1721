"""
Weekly budget loading and validation.

Budget file format (YAML):

    categories:
      Work: 80
      Sleep: 56
      Personal: 32

Category order is kept and drives both matching precedence and report order.
"""

import math
from collections.abc import Mapping
from pathlib import Path

import yaml

from core.config import HOURS_PER_WEEK, RESERVED_CATEGORIES


class BudgetError(ValueError):
    """Budget file is missing, malformed, or does not add up to a full week."""


def validate_budget(categories: Mapping) -> dict[str, float]:
    """
    Check a category -> hours mapping and return it as an ordered dict.

    Raises:
        BudgetError: on non-string names, reserved names, non-numeric or
            negative hours, or a total other than 168.
    """
    budget: dict[str, float] = {}
    errors = []

    for name, hours in categories.items():
        if not isinstance(name, str) or not name:
            errors.append(f"Invalid category name: {name!r}")
            continue
        if name in RESERVED_CATEGORIES:
            errors.append(f"Category name '{name}' is reserved")
            continue
        if isinstance(hours, bool) or not isinstance(hours, (int, float)):
            errors.append(f"Category '{name}' has non-numeric hours: {hours!r}")
            continue
        if hours < 0:
            errors.append(f"Category '{name}' has negative hours: {hours}")
            continue
        budget[name] = hours

    if errors:
        raise BudgetError("\n".join(errors))

    total = sum(budget.values())
    if not math.isclose(total, HOURS_PER_WEEK, abs_tol=1e-9):
        raise BudgetError(
            f"Budget does not add up to {HOURS_PER_WEEK} hours (7 days × 24 hours)\n"
            f"Current total: {total} hours\n"
            f"Difference: {round(total - HOURS_PER_WEEK, 1)} hours"
        )

    return budget


def load_budget(path: str | Path) -> dict[str, float]:
    """Load and validate the 'categories' mapping from a YAML budget file."""
    path = Path(path)
    if not path.exists():
        raise BudgetError(f"Budget file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            document = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise BudgetError(f"Could not parse budget file {path}: {e}") from e

    if not isinstance(document, dict) or not isinstance(document.get("categories"), dict):
        raise BudgetError(f"Budget file {path} must contain a 'categories' mapping")

    return validate_budget(document["categories"])
