"""Aggregate build metrics: total price and estimated power draw."""

import math

from .config import (
    BASE_OVERHEAD_W,
    CPU_TDP_FALLBACK_W,
    CURRENCY_SYMBOL,
    GPU_TDP_FALLBACK_W,
    WATTAGE_HEADROOM,
)
from .models import BuildState, Component
from .parsers import parse_spec_number_or


def total_price(build: BuildState) -> float:
    """Sum of part prices over occupied slots. Empty build -> 0. No rounding."""
    return sum((component.price for _, component in build.occupied()), 0)


def _tdp_watts(component: Component | None, fallback: float) -> float:
    # Empty slot draws nothing; a present part with a bad TDP gets the fallback
    if component is None:
        return 0
    return parse_spec_number_or(component.specs.get("TDP"), fallback)


def estimate_wattage(build: BuildState) -> int:
    """Estimate PSU wattage needed for a build.

    (CPU TDP + GPU TDP + fixed overhead) * 1.2 headroom, rounded up.
    Unparsable TDPs silently fall back to 65 W (CPU) / 200 W (GPU).

    '170 W' CPU + '450 W' GPU -> ceil(720 * 1.2) = 864
    Empty build -> ceil(100 * 1.2) = 120
    """
    subtotal = (
        _tdp_watts(build.cpu, CPU_TDP_FALLBACK_W)
        + _tdp_watts(build.gpu, GPU_TDP_FALLBACK_W)
        + BASE_OVERHEAD_W
    )
    # Strip float noise so an exact product never ceils to the next watt
    return math.ceil(round(subtotal * WATTAGE_HEADROOM, 6))


def format_price(amount: float, currency_symbol: str = CURRENCY_SYMBOL) -> str:
    """Format a minor-unit amount for display: 34200 -> '$342.00'."""
    return f"{currency_symbol}{amount / 100:,.2f}"
