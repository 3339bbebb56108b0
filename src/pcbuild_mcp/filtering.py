"""Catalog filtering and sorting for component browsing."""

from dataclasses import dataclass, field
from typing import Iterable, Literal, get_args

from .models import Component

SortOrder = Literal["price_asc", "price_desc", "name"]
SORT_ORDERS: tuple[str, ...] = get_args(SortOrder)

# Socket/RAM-type filters only make sense for categories that carry the spec
SOCKET_CATEGORIES = frozenset({"cpu", "motherboard"})
RAM_TYPE_CATEGORIES = frozenset({"ram", "motherboard"})


@dataclass
class FilterCriteria:
    """Optional constraints for filtering components. None/empty means no constraint.

    Examples:
        FilterCriteria(max_price=20000, manufacturers=["AMD"])
        FilterCriteria(socket="AM5", search_query="ryzen")
    """

    min_price: float | None = None
    max_price: float | None = None
    manufacturers: list[str] = field(default_factory=list)
    socket: str | None = None
    ram_type: str | None = None
    search_query: str | None = None
    in_stock_only: bool = False

    def is_empty(self) -> bool:
        return (
            self.min_price is None
            and self.max_price is None
            and not self.manufacturers
            and not self.socket
            and not self.ram_type
            and not self.search_query
            and not self.in_stock_only
        )

    def matches(self, component: Component) -> bool:
        """Check one component against every active criterion (logical AND)."""
        # Price range (inclusive)
        if self.min_price is not None and component.price < self.min_price:
            return False
        if self.max_price is not None and component.price > self.max_price:
            return False

        # Manufacturer (exact match against any listed)
        if self.manufacturers:
            manufacturer = component.specs.get("Manufacturer")
            if not manufacturer or manufacturer not in self.manufacturers:
                return False

        if self.socket and component.category in SOCKET_CATEGORIES:
            if component.specs.get("Socket") != self.socket:
                return False

        if self.ram_type and component.category in RAM_TYPE_CATEGORIES:
            if component.specs.get("RAM Type") != self.ram_type:
                return False

        # Name search (case-insensitive substring)
        if self.search_query:
            if self.search_query.lower() not in component.name.lower():
                return False

        if self.in_stock_only and component.stock != "In stock":
            return False

        return True


def filter_components(
    components: Iterable[Component],
    criteria: FilterCriteria | None = None,
) -> list[Component]:
    """Keep components matching all criteria, preserving input order."""
    if criteria is None:
        return list(components)
    return [component for component in components if criteria.matches(component)]


def sort_components(components: Iterable[Component], sort_by: SortOrder | None) -> list[Component]:
    """Stable sort by price (either direction) or name. None keeps input order.

    Raises:
        ValueError: unknown sort order
    """
    components = list(components)
    if sort_by is None:
        return components
    if sort_by == "price_asc":
        return sorted(components, key=lambda c: c.price)
    if sort_by == "price_desc":
        # reverse=True keeps equal prices in input order
        return sorted(components, key=lambda c: c.price, reverse=True)
    if sort_by == "name":
        return sorted(components, key=lambda c: c.name.lower())
    raise ValueError(
        f"Invalid sort order '{sort_by}'. Must be one of: {', '.join(SORT_ORDERS)}"
    )
