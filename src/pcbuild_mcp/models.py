"""Domain models: components, build snapshots and compatibility issues."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator, Literal, Mapping, get_args

SpecValue = str | int | float | bool

Category = Literal[
    # Build parts
    "cpu", "gpu", "motherboard", "ram", "cooler", "storage", "psu", "case",
    # Peripherals (catalog only, never occupy a build slot)
    "fan", "monitor", "keyboard", "mouse", "headphones", "microphone", "speakers", "webcam",
]
BuildSlot = Literal["cpu", "gpu", "motherboard", "ram", "cooler", "storage", "psu", "case"]
StockStatus = Literal["In stock", "Low stock", "Out of stock"]
Severity = Literal["error", "warning"]

# Ordered tuples double as display order
CATEGORIES: tuple[str, ...] = get_args(Category)
BUILD_SLOTS: tuple[str, ...] = get_args(BuildSlot)
STOCK_STATUSES: tuple[str, ...] = get_args(StockStatus)

_CATEGORY_SET = frozenset(CATEGORIES)
_SLOT_SET = frozenset(BUILD_SLOTS)
_STOCK_SET = frozenset(STOCK_STATUSES)

CATEGORY_LABELS: dict[str, str] = {
    "cpu": "CPU",
    "gpu": "Graphics Card",
    "motherboard": "Motherboard",
    "ram": "Memory",
    "cooler": "CPU Cooler",
    "storage": "Storage",
    "psu": "Power Supply",
    "case": "Case",
    "fan": "Case Fan",
    "monitor": "Monitor",
    "keyboard": "Keyboard",
    "mouse": "Mouse",
    "headphones": "Headphones",
    "microphone": "Microphone",
    "speakers": "Speakers",
    "webcam": "Webcam",
}


@dataclass
class Component:
    """A catalog component. Treated as read-only by every engine function."""

    id: str
    name: str
    category: Category
    price: float
    specs: dict[str, SpecValue] = field(default_factory=dict)
    stock: StockStatus = "In stock"
    store: str | None = None

    def __post_init__(self) -> None:
        """Validate category, price and stock status."""
        if self.category not in _CATEGORY_SET:
            raise ValueError(
                f"Invalid category '{self.category}'. "
                f"Must be one of: {', '.join(CATEGORIES)}"
            )
        if isinstance(self.price, bool) or not isinstance(self.price, (int, float)):
            raise ValueError(f"Price must be a number, got {type(self.price).__name__}")
        if self.price < 0:
            raise ValueError(f"Price must be non-negative, got {self.price}")
        if self.stock not in _STOCK_SET:
            raise ValueError(
                f"Invalid stock status '{self.stock}'. "
                f"Must be one of: {', '.join(STOCK_STATUSES)}"
            )

    @property
    def short_name(self) -> str:
        """First word of the name, used in comparison notes ('AMD', 'Intel')."""
        parts = self.name.split()
        return parts[0] if parts else self.id

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Component":
        """Build a component from a catalog record.

        Accepts either "category" or "type" for the category field, since
        the storefront data names it "type".

        Raises:
            ValueError: missing id/name or any invalid field
        """
        component_id = data.get("id")
        name = data.get("name")
        if not component_id or not name:
            raise ValueError("Component record needs non-empty 'id' and 'name'")
        specs = data.get("specs") or {}
        if not isinstance(specs, Mapping):
            raise ValueError(f"Specs for {component_id} must be an object")
        return cls(
            id=str(component_id),
            name=str(name),
            category=data.get("category") or data.get("type"),
            price=data.get("price", 0),
            specs=dict(specs),
            stock=data.get("stock", "In stock"),
            store=data.get("store"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "price": self.price,
            "specs": dict(self.specs),
            "stock": self.stock,
            "store": self.store,
        }


@dataclass(frozen=True)
class CompatibilityIssue:
    """An advisory finding about two parts in a build."""

    severity: Severity
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"severity": self.severity, "message": self.message}


@dataclass(frozen=True)
class BuildState:
    """Immutable snapshot of a build: slot name -> component.

    Slots not present in `parts` are empty. Use `with_part`/`without_part`
    to derive a new snapshot; the original is never modified.
    """

    parts: Mapping[str, Component] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate slot names and slot/category agreement, then freeze the mapping."""
        for slot, component in self.parts.items():
            if slot not in _SLOT_SET:
                raise ValueError(
                    f"Invalid build slot '{slot}'. Must be one of: {', '.join(BUILD_SLOTS)}"
                )
            if component.category != slot:
                raise ValueError(
                    f"Component {component.id} is a '{component.category}' "
                    f"and can't occupy the '{slot}' slot"
                )
        object.__setattr__(self, "parts", MappingProxyType(dict(self.parts)))

    @classmethod
    def empty(cls) -> "BuildState":
        return cls()

    @classmethod
    def from_components(cls, components: list[Component]) -> "BuildState":
        """Place each component in the slot matching its category. Later parts win."""
        build = cls()
        for component in components:
            build = build.with_part(component)
        return build

    def get(self, slot: str) -> Component | None:
        return self.parts.get(slot)

    @property
    def cpu(self) -> Component | None:
        return self.parts.get("cpu")

    @property
    def gpu(self) -> Component | None:
        return self.parts.get("gpu")

    @property
    def motherboard(self) -> Component | None:
        return self.parts.get("motherboard")

    @property
    def ram(self) -> Component | None:
        return self.parts.get("ram")

    @property
    def cooler(self) -> Component | None:
        return self.parts.get("cooler")

    def with_part(self, component: Component) -> "BuildState":
        """Return a new snapshot with `component` in its category's slot."""
        if component.category not in _SLOT_SET:
            raise ValueError(f"'{component.category}' parts don't occupy a build slot")
        parts = dict(self.parts)
        parts[component.category] = component
        return BuildState(parts)

    def without_part(self, slot: str) -> "BuildState":
        """Return a new snapshot with `slot` emptied."""
        if slot not in _SLOT_SET:
            raise ValueError(f"Invalid build slot '{slot}'")
        parts = {name: part for name, part in self.parts.items() if name != slot}
        return BuildState(parts)

    def occupied(self) -> Iterator[tuple[str, Component]]:
        """Yield (slot, component) for filled slots in canonical slot order."""
        for slot in BUILD_SLOTS:
            component = self.parts.get(slot)
            if component is not None:
                yield slot, component

    def is_empty(self) -> bool:
        return not self.parts

    def to_dict(self) -> dict[str, dict[str, Any] | None]:
        """All eight slots, empty ones as None."""
        return {
            slot: (self.parts[slot].to_dict() if slot in self.parts else None)
            for slot in BUILD_SLOTS
        }
