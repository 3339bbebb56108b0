"""Side-by-side comparison and best-pick scoring for components of one category.

For every spec shown in the comparison, the component(s) holding the best
value under the category's comparison rule are marked. Each mark is worth
2 points; the component with the most points is the overall best pick.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable

from .comparison_rules import ComparisonRule, rules_for
from .config import MAX_COMPARE_ITEMS, MIN_COMPARE_ITEMS
from .models import Component, SpecValue
from .parsers import parse_spec_number

# Shown in place of a spec the component doesn't list
MISSING_VALUE = "-"

POINTS_PER_SPEC_WIN = 2
MAX_RECOMMENDED_SPECS = 3


@dataclass(frozen=True)
class SpecValueEntry:
    """One component's value for one spec."""

    component_id: str
    raw_value: SpecValue
    is_best: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "component_id": self.component_id,
            "value": self.raw_value,
            "is_best": self.is_best,
        }


@dataclass(frozen=True)
class SpecComparison:
    """All components' values for one spec, with winner notes."""

    spec_key: str
    values: list[SpecValueEntry]
    notes: list[str] = field(default_factory=list)

    @property
    def best_ids(self) -> list[str]:
        return [entry.component_id for entry in self.values if entry.is_best]

    def to_dict(self) -> dict[str, Any]:
        return {
            "spec": self.spec_key,
            "values": [entry.to_dict() for entry in self.values],
            "notes": list(self.notes),
        }


@dataclass(frozen=True)
class ComparisonAnalysis:
    """Result of comparing 2-4 components of the same category."""

    best_component: Component | None = None
    specs: list[SpecComparison] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    scores: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "best_component": self.best_component.to_dict() if self.best_component else None,
            "specs": [spec.to_dict() for spec in self.specs],
            "recommendations": list(self.recommendations),
            "scores": dict(self.scores),
        }


def _collect_spec_keys(components: list[Component]) -> list[str]:
    """Union of spec keys across components, in first-seen order."""
    seen: dict[str, None] = {}
    for component in components:
        for key in component.specs:
            seen.setdefault(key, None)
    return list(seen)


def _find_best_indices(raw_values: list[SpecValue], rule: ComparisonRule | None) -> list[int]:
    """Indices of components holding the best value, or [] if no winner.

    No rule, or any component missing the spec, means no winner. Unparsable
    values count as zero and zero never wins.
    """
    if rule is None or any(value == MISSING_VALUE for value in raw_values):
        return []

    parsed = [parse_spec_number(value) or 0.0 for value in raw_values]

    if rule.better == "higher":
        best = max(parsed)
        if best <= 0:
            return []
    else:
        positive = [value for value in parsed if value > 0]
        if not positive:
            return []
        best = min(positive)

    return [i for i, value in enumerate(parsed) if value == best]


def _format_value(raw_value: SpecValue, unit: str | None) -> str:
    """Append the unit unless the raw text already contains it ('16' -> '16 Cores')."""
    text = str(raw_value)
    if unit and unit not in text:
        return f"{text} {unit}"
    return text


def _spec_note(
    spec_key: str,
    rule: ComparisonRule,
    winners: list[int],
    components: list[Component],
    raw_values: list[SpecValue],
) -> str | None:
    if not winners:
        return None
    if len(winners) > 1:
        return f"Multiple products share the best {spec_key}"
    winner = winners[0]
    direction = "highest" if rule.better == "higher" else "lowest"
    value = _format_value(raw_values[winner], rule.unit)
    return f"{components[winner].short_name} has the {direction} {spec_key}: {value}"


def _pick_best(scores: list[int]) -> int:
    """Index of the top score. Ties go to the earliest component in input order."""
    best_index = 0
    for i, score in enumerate(scores):
        if score > scores[best_index]:
            best_index = i
    return best_index


def analyze(components: Iterable[Component]) -> ComparisonAnalysis:
    """Compare components of one category and pick the best overall.

    Args:
        components: 2-4 components of the same category. Enforcing the limit
            is the caller's job; fewer than 2, or mixed categories, give an
            empty analysis with no best component.

    Returns:
        ComparisonAnalysis with per-spec values and best marks, per-component
        scores (+2 per spec won, ties included), the best component and
        recommendation strings. Deterministic; never raises.
    """
    components = list(components)
    if len(components) < MIN_COMPARE_ITEMS:
        return ComparisonAnalysis()
    category = components[0].category
    if any(component.category != category for component in components):
        return ComparisonAnalysis()

    rules = rules_for(category)
    scores = [0] * len(components)
    wins: list[list[str]] = [[] for _ in components]
    spec_comparisons: list[SpecComparison] = []

    for spec_key in _collect_spec_keys(components):
        raw_values: list[SpecValue] = [
            component.specs.get(spec_key, MISSING_VALUE) for component in components
        ]
        rule = rules.get(spec_key)
        winners = _find_best_indices(raw_values, rule)

        for i in winners:
            scores[i] += POINTS_PER_SPEC_WIN
            wins[i].append(spec_key)

        notes: list[str] = []
        if rule is not None:
            note = _spec_note(spec_key, rule, winners, components, raw_values)
            if note:
                notes.append(note)

        spec_comparisons.append(SpecComparison(
            spec_key=spec_key,
            values=[
                SpecValueEntry(
                    component_id=component.id,
                    raw_value=raw_values[i],
                    is_best=i in winners,
                )
                for i, component in enumerate(components)
            ],
            notes=notes,
        ))

    best_index = _pick_best(scores)
    best = components[best_index]

    recommendations: list[str] = []
    if scores[best_index] > 0:
        led = ", ".join(wins[best_index][:MAX_RECOMMENDED_SPECS])
        recommendations.append(f"{best.short_name} leads in {led}")
        others = [c for i, c in enumerate(components) if i != best_index]
        if all(best.price < other.price for other in others):
            recommendations.append(
                f"{best.short_name} offers the best price-to-performance: "
                f"lowest price with the most spec wins"
            )

    return ComparisonAnalysis(
        best_component=best,
        specs=spec_comparisons,
        recommendations=recommendations,
        scores={component.id: scores[i] for i, component in enumerate(components)},
    )


@dataclass(frozen=True)
class CompareList:
    """Immutable selection of up to 4 components queued for comparison.

    Adding returns a new list; duplicates (by id) and additions past the
    limit are ignored rather than rejected.
    """

    items: tuple[Component, ...] = ()

    def add(self, component: Component) -> "CompareList":
        if len(self.items) >= MAX_COMPARE_ITEMS or self.contains(component.id):
            return self
        return CompareList(self.items + (component,))

    def remove(self, component_id: str) -> "CompareList":
        return CompareList(tuple(c for c in self.items if c.id != component_id))

    def clear(self) -> "CompareList":
        return CompareList()

    def contains(self, component_id: str) -> bool:
        return any(c.id == component_id for c in self.items)

    def is_full(self) -> bool:
        return len(self.items) >= MAX_COMPARE_ITEMS

    def can_compare(self) -> bool:
        """At least 2 items, all of the same category."""
        if len(self.items) < MIN_COMPARE_ITEMS:
            return False
        first = self.items[0].category
        return all(c.category == first for c in self.items)

    def analyze(self) -> ComparisonAnalysis:
        return analyze(self.items)

    def __len__(self) -> int:
        return len(self.items)
