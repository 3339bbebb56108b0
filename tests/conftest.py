"""Shared fixtures for engine tests."""

import itertools

import pytest

from pcbuild_mcp.models import Component


@pytest.fixture
def make_part():
    """Factory for components with sensible defaults."""
    counter = itertools.count(1)

    def _make(
        category: str,
        specs: dict | None = None,
        *,
        id: str | None = None,
        name: str | None = None,
        price: float = 10000,
        stock: str = "In stock",
    ) -> Component:
        n = next(counter)
        return Component(
            id=id or f"{category}-{n}",
            name=name or f"Part{n} {category.upper()}",
            category=category,
            price=price,
            specs=specs or {},
            stock=stock,
        )

    return _make
