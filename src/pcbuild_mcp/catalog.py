"""Read-only component catalog loaded from JSON.

The catalog file is either {"components": [...]} or a bare list of records:

    {"id": "cpu-1", "name": "AMD Ryzen 9 7950X", "type": "cpu",
     "price": 34200, "specs": {"Socket": "AM5", ...}, "stock": "In stock"}

Prices are in minor currency units. Invalid records are logged and skipped so
one bad entry doesn't take the whole catalog down.
"""

import json
import logging
import threading
from pathlib import Path
from typing import Any, Iterator

from .config import CATALOG_PATH
from .models import CATEGORIES, Component

logger = logging.getLogger(__name__)

__all__ = [
    "Catalog",
    "load_catalog",
    "get_catalog",
    "reset_catalog",
]

DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "catalog.json"


class Catalog:
    """Immutable, id-indexed collection of components.

    Lookups never mutate; iteration and per-category lists keep file order.
    """

    def __init__(self, components: list[Component]):
        self._components: tuple[Component, ...] = tuple(components)
        self._by_id: dict[str, Component] = {}
        self._by_category: dict[str, list[Component]] = {}
        for component in self._components:
            if component.id in self._by_id:
                raise ValueError(f"Duplicate component id: {component.id}")
            self._by_id[component.id] = component
            self._by_category.setdefault(component.category, []).append(component)

    def get(self, component_id: str) -> Component | None:
        return self._by_id.get(component_id)

    def by_category(self, category: str) -> list[Component]:
        """Components in a category, in catalog order. Unknown category -> []."""
        return list(self._by_category.get(category, []))

    def categories(self) -> list[str]:
        """Categories that have at least one component, in canonical order."""
        return [category for category in CATEGORIES if category in self._by_category]

    def manufacturers(self, category: str | None = None) -> list[str]:
        """Distinct 'Manufacturer' spec values, sorted."""
        components = self.by_category(category) if category else self._components
        found = {
            str(component.specs["Manufacturer"])
            for component in components
            if component.specs.get("Manufacturer")
        }
        return sorted(found)

    def __len__(self) -> int:
        return len(self._components)

    def __iter__(self) -> Iterator[Component]:
        return iter(self._components)


def parse_catalog(data: Any) -> Catalog:
    """Build a Catalog from decoded JSON, skipping invalid records.

    Raises:
        ValueError: top-level structure isn't a list or {"components": list}
    """
    records = data.get("components") if isinstance(data, dict) else data
    if not isinstance(records, list):
        raise ValueError("Catalog must be a list or an object with a 'components' list")

    components: list[Component] = []
    seen: set[str] = set()
    for idx, record in enumerate(records):
        if not isinstance(record, dict):
            logger.warning(f"Skipping catalog record #{idx}: not an object")
            continue
        try:
            component = Component.from_dict(record)
        except ValueError as e:
            logger.warning(f"Skipping catalog record #{idx} ({record.get('id')!r}): {e}")
            continue
        if component.id in seen:
            logger.warning(f"Skipping catalog record #{idx}: duplicate id {component.id!r}")
            continue
        seen.add(component.id)
        components.append(component)

    return Catalog(components)


def load_catalog(path: Path | str | None = None) -> Catalog:
    """Load a catalog file. Defaults to CATALOG_PATH, then the bundled catalog.

    Raises:
        OSError: file can't be read
        ValueError: file isn't valid catalog JSON
    """
    catalog_path = Path(path or CATALOG_PATH or DEFAULT_CATALOG_PATH)
    try:
        data = json.loads(catalog_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid catalog JSON in {catalog_path}: {e}") from e
    catalog = parse_catalog(data)
    logger.info(f"Loaded {len(catalog)} components from {catalog_path}")
    return catalog


_catalog: Catalog | None = None
_catalog_lock = threading.Lock()


def get_catalog() -> Catalog:
    """Get or load the global catalog instance (thread-safe)."""
    global _catalog
    if _catalog is None:
        with _catalog_lock:
            # Double-check locking pattern
            if _catalog is None:
                _catalog = load_catalog()
    return _catalog


def reset_catalog() -> None:
    """Drop the global catalog so the next get_catalog() reloads it."""
    global _catalog
    with _catalog_lock:
        _catalog = None
