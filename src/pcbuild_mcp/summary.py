"""Catalog-backed build summaries, comparisons and searches.

These functions sit between the MCP tools and the pure engine: they resolve
component ids against the catalog, validate what the engine leaves to its
callers, and return JSON-ready dicts. Bad input gives {"error": ..., "hint": ...}
instead of an exception.
"""

import logging
from typing import Any

from .catalog import Catalog
from .comparison import analyze
from .compatibility import check_compatibility, has_blocking_issues
from .config import DEFAULT_SEARCH_LIMIT, MAX_COMPARE_ITEMS, MAX_SEARCH_LIMIT, MIN_COMPARE_ITEMS
from .filtering import SORT_ORDERS, FilterCriteria, filter_components, sort_components
from .metrics import estimate_wattage, format_price, total_price
from .models import BUILD_SLOTS, CATEGORIES, BuildState

logger = logging.getLogger(__name__)


def build_from_ids(
    catalog: Catalog,
    parts: dict[str, str | None],
) -> tuple[BuildState | None, dict[str, Any] | None]:
    """Resolve a slot -> component id mapping into a build snapshot.

    Empty/None ids leave the slot empty.

    Returns:
        (build, None) on success, (None, error_dict) otherwise
    """
    resolved = {}
    for slot, component_id in parts.items():
        if slot not in BUILD_SLOTS:
            return None, {
                "error": f"Unknown build slot: '{slot}'",
                "hint": f"Valid slots: {', '.join(BUILD_SLOTS)}",
            }
        if not component_id:
            continue
        component = catalog.get(component_id)
        if component is None:
            return None, {
                "error": f"Component not found: '{component_id}'",
                "hint": "Use search_parts() to find component ids",
            }
        if component.category != slot:
            return None, {
                "error": f"Component '{component_id}' is a {component.category}, not a {slot}",
            }
        resolved[slot] = component
    return BuildState(resolved), None


def summarize_build(catalog: Catalog, parts: dict[str, str | None]) -> dict[str, Any]:
    """Compatibility issues, total price and wattage estimate for a build."""
    build, error = build_from_ids(catalog, parts)
    if error:
        return error

    issues = check_compatibility(build)
    price = total_price(build)
    if issues:
        logger.debug(f"Build has {len(issues)} compatibility issue(s)")

    return {
        "parts": {slot: component.to_dict() for slot, component in build.occupied()},
        "empty_slots": [slot for slot in BUILD_SLOTS if build.get(slot) is None],
        "issues": [issue.to_dict() for issue in issues],
        "has_errors": has_blocking_issues(issues),
        "total_price": price,
        "total_price_display": format_price(price),
        "estimated_wattage": estimate_wattage(build),
    }


def compare_parts(catalog: Catalog, component_ids: list[str]) -> dict[str, Any]:
    """Compare 2-4 catalog components of the same category."""
    if len(component_ids) < MIN_COMPARE_ITEMS:
        return {"error": f"Need at least {MIN_COMPARE_ITEMS} components to compare"}
    if len(component_ids) > MAX_COMPARE_ITEMS:
        return {"error": f"Can compare at most {MAX_COMPARE_ITEMS} components"}
    if len(set(component_ids)) != len(component_ids):
        return {"error": "Duplicate component ids in comparison"}

    components = []
    for component_id in component_ids:
        component = catalog.get(component_id)
        if component is None:
            return {
                "error": f"Component not found: '{component_id}'",
                "hint": "Use search_parts() to find component ids",
            }
        components.append(component)

    categories = {component.category for component in components}
    if len(categories) > 1:
        return {
            "error": "All compared components must be in the same category",
            "categories": sorted(categories),
        }

    result = analyze(components).to_dict()
    result["category"] = components[0].category
    result["components"] = [component.to_dict() for component in components]
    return result


def search_parts(
    catalog: Catalog,
    category: str | None = None,
    criteria: FilterCriteria | None = None,
    sort_by: str | None = None,
    limit: int = DEFAULT_SEARCH_LIMIT,
) -> dict[str, Any]:
    """Filter and optionally sort catalog components."""
    if category and category not in CATEGORIES:
        return {
            "error": f"Unknown category: '{category}'",
            "hint": f"Valid categories: {', '.join(CATEGORIES)}",
        }
    if sort_by and sort_by not in SORT_ORDERS:
        return {
            "error": f"Invalid sort_by: '{sort_by}'",
            "hint": f"Valid values: {', '.join(SORT_ORDERS)}",
        }

    candidates = catalog.by_category(category) if category else list(catalog)
    matched = sort_components(filter_components(candidates, criteria), sort_by or None)
    effective_limit = max(1, min(limit, MAX_SEARCH_LIMIT))
    results = matched[:effective_limit]

    return {
        "results": [component.to_dict() for component in results],
        "total": len(matched),
        "returned": len(results),
    }
