"""Per-category comparison rules for side-by-side product comparison.

Each rule says whether a higher or lower value of a spec is better, with an
optional display unit. Categories without a table still show raw values in a
comparison but never mark a winner.
"""

from dataclasses import dataclass
from typing import Literal

Preference = Literal["higher", "lower"]


@dataclass(frozen=True)
class ComparisonRule:
    """Direction and display unit for one spec of one category."""

    category: str
    spec_key: str
    better: Preference
    unit: str | None = None
    description: str = ""

    def to_dict(self) -> dict[str, str | None]:
        return {
            "spec": self.spec_key,
            "better": self.better,
            "unit": self.unit,
            "description": self.description,
        }


# Format: category -> spec key -> (better, unit, description)
_RULE_TABLE: dict[str, dict[str, tuple[Preference, str | None, str]]] = {
    # ============== CPU ==============
    "cpu": {
        "Core Count": ("higher", "Cores", "More cores for better multitasking"),
        "Thread Count": ("higher", "Threads", "More threads improve parallel processing"),
        "Base Clock": ("higher", "GHz", "Higher base clock speeds"),
        "Max Boost Clock": ("higher", "GHz", "Higher boost for peak performance"),
        "TDP": ("lower", "W", "Lower power consumption"),
        "L3 Cache": ("higher", "MB", "Larger cache improves data access"),
    },
    # ============== GPU ==============
    "gpu": {
        "Memory Size": ("higher", "GB", "More VRAM for higher resolutions/textures"),
        "Boost Clock": ("higher", "MHz", "Higher clock speeds for better performance"),
        "Memory Interface": ("higher", "bit", "Wider memory bus for faster data transfer"),
        "TDP": ("lower", "W", "Lower power consumption and heat"),
        "CUDA Cores": ("higher", None, "More cores for parallel processing"),
    },
    # ============== MEMORY ==============
    "ram": {
        "Speed": ("higher", "MHz", "Faster memory speeds"),
        "Total Capacity": ("higher", "GB", "More RAM for multitasking"),
        "CAS Latency": ("lower", None, "Lower latency for faster response"),
    },
    # ============== STORAGE ==============
    "storage": {
        "Capacity": ("higher", "GB", "More storage space"),
        "Sequential Read": ("higher", "MB/s", "Faster read speeds"),
        "Sequential Write": ("higher", "MB/s", "Faster write speeds"),
    },
    # ============== POWER SUPPLY ==============
    "psu": {
        "Wattage": ("higher", "W", "Higher wattage for more components"),
        "Efficiency Rating": ("higher", None, "Better efficiency saves power"),
        "Warranty": ("higher", "years", "Longer warranty period"),
    },
}

COMPARISON_RULES: dict[str, dict[str, ComparisonRule]] = {
    category: {
        spec_key: ComparisonRule(category, spec_key, better, unit, description)
        for spec_key, (better, unit, description) in specs.items()
    }
    for category, specs in _RULE_TABLE.items()
}


def rules_for(category: str) -> dict[str, ComparisonRule]:
    """Get the comparison rules for a category, keyed by spec name.

    Returns a new dict each call; unknown categories give an empty dict.
    """
    return dict(COMPARISON_RULES.get(category, {}))
