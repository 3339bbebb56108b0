"""Tests for the MCP tools, parameter handling and health endpoint."""

import json

import pytest

from pcbuild_mcp import server
from pcbuild_mcp.catalog import DEFAULT_CATALOG_PATH, load_catalog, parse_catalog
from pcbuild_mcp.config import MAX_QUERY_LENGTH
from pcbuild_mcp.server import _parse_list_param


def _fn(tool):
    """Coroutine function behind a registered tool."""
    return getattr(tool, "fn", tool)


@pytest.fixture
def loaded(monkeypatch):
    """Serve the bundled catalog."""
    catalog = load_catalog(DEFAULT_CATALOG_PATH)
    monkeypatch.setattr(server, "_catalog", catalog)
    return catalog


@pytest.fixture
def empty(monkeypatch):
    """Serve a catalog whose only record was invalid."""
    catalog = parse_catalog([{"id": "x"}])
    monkeypatch.setattr(server, "_catalog", catalog)
    return catalog


class TestParseListParam:
    """Tests for _parse_list_param function."""

    def test_none(self):
        assert _parse_list_param(None) is None

    def test_list_passthrough(self):
        assert _parse_list_param(["cpu-1", "cpu-2"]) == ["cpu-1", "cpu-2"]

    def test_json_string(self):
        assert _parse_list_param('["cpu-1", "cpu-2"]') == ["cpu-1", "cpu-2"]

    def test_json_scalar_string(self):
        assert _parse_list_param('"cpu-1"') == ["cpu-1"]
        assert _parse_list_param('""') is None

    def test_plain_string_is_single_item(self):
        assert _parse_list_param("AMD") == ["AMD"]

    def test_blank_string(self):
        assert _parse_list_param("   ") is None


@pytest.mark.asyncio
class TestCatalogNotLoaded:
    """Tools answer with an error dict before the catalog is loaded."""

    @pytest.fixture(autouse=True)
    def unloaded(self, monkeypatch):
        monkeypatch.setattr(server, "_catalog", None)

    @pytest.mark.parametrize("tool,kwargs", [
        (server.list_categories, {}),
        (server.search_parts, {"category": "cpu"}),
        (server.get_part, {"part_id": "cpu-1"}),
        (server.check_build, {"cpu": "cpu-1"}),
        (server.compare_parts, {"part_ids": ["cpu-1", "cpu-2"]}),
    ])
    async def test_error_dict(self, tool, kwargs):
        result = await _fn(tool)(**kwargs)
        assert result["error"].startswith("Catalog not loaded")
        assert "hint" in result

    async def test_health_reports_zero(self):
        response = await server.health(None)
        assert json.loads(response.body)["components"] == 0


@pytest.mark.asyncio
class TestEmptyCatalog:
    """An empty catalog is loaded, not missing."""

    async def test_search_returns_nothing(self, empty):
        result = await _fn(server.search_parts)(category="cpu")
        assert result == {"results": [], "total": 0, "returned": 0}

    async def test_list_categories(self, empty):
        assert await _fn(server.list_categories)() == {"categories": []}

    async def test_get_part_not_found(self, empty):
        result = await _fn(server.get_part)(part_id="x")
        assert result["error"] == "Component not found: 'x'"

    async def test_check_empty_build(self, empty):
        result = await _fn(server.check_build)()
        assert result["estimated_wattage"] == 120
        assert result["issues"] == []


@pytest.mark.asyncio
class TestSearchPartsTool:
    """Tests for the search_parts tool."""

    async def test_manufacturers_as_json_string(self, loaded):
        result = await _fn(server.search_parts)(category="cpu", manufacturers='["AMD"]')
        assert [r["id"] for r in result["results"]] == ["cpu-1", "cpu-3"]

    async def test_manufacturers_as_plain_string(self, loaded):
        result = await _fn(server.search_parts)(category="cpu", manufacturers="Intel")
        assert [r["id"] for r in result["results"]] == ["cpu-2", "cpu-4"]

    async def test_criteria_passed_through(self, loaded):
        result = await _fn(server.search_parts)(
            category="cpu",
            socket="AM5",
            in_stock_only=True,
            max_price=40000,
        )
        assert [r["id"] for r in result["results"]] == ["cpu-1"]

    async def test_query_and_sort(self, loaded):
        result = await _fn(server.search_parts)(query="ryzen", sort_by="price_asc")
        assert [r["id"] for r in result["results"]] == ["cpu-3", "cpu-1"]

    async def test_query_too_long(self, loaded):
        result = await _fn(server.search_parts)(query="x" * (MAX_QUERY_LENGTH + 1))
        assert "Query too long" in result["error"]

    async def test_unknown_category(self, loaded):
        result = await _fn(server.search_parts)(category="toaster")
        assert "Unknown category" in result["error"]


@pytest.mark.asyncio
class TestGetPartTool:
    """Tests for the get_part tool."""

    async def test_found(self, loaded):
        result = await _fn(server.get_part)(part_id="gpu-1")
        assert result["name"] == "NVIDIA GeForce RTX 4090 24GB"
        assert result["category_label"] == "Graphics Card"

    async def test_not_found(self, loaded):
        result = await _fn(server.get_part)(part_id="gpu-99")
        assert result == {
            "error": "Component not found: 'gpu-99'",
            "hint": "Use search_parts() to find component ids",
        }


@pytest.mark.asyncio
class TestBuildAndCompareTools:
    """Tests for check_build, compare_parts and list_categories."""

    async def test_check_build(self, loaded):
        result = await _fn(server.check_build)(cpu="cpu-1", motherboard="mb-1")
        assert result["has_errors"] is True
        assert result["parts"]["cpu"]["id"] == "cpu-1"

    async def test_compare_json_string(self, loaded):
        result = await _fn(server.compare_parts)(part_ids='["cpu-1", "cpu-2"]')
        assert result["best_component"]["id"] == "cpu-2"

    async def test_compare_single_quoted_id(self, loaded):
        result = await _fn(server.compare_parts)(part_ids='"cpu-1"')
        assert "Need at least 2" in result["error"]

    async def test_compare_empty(self, loaded):
        result = await _fn(server.compare_parts)(part_ids=[])
        assert result["error"] == "part_ids must be a list of component ids"

    async def test_list_categories(self, loaded):
        result = await _fn(server.list_categories)()
        cpu = next(c for c in result["categories"] if c["category"] == "cpu")
        assert cpu["count"] == 4
        assert cpu["manufacturers"] == ["AMD", "Intel"]
        assert any(rule["spec"] == "Core Count" for rule in cpu["comparison_rules"])


@pytest.mark.asyncio
async def test_health(loaded):
    response = await server.health(None)
    payload = json.loads(response.body)
    assert payload["status"] == "healthy"
    assert payload["service"] == "pcbuild-mcp"
    assert payload["components"] == 22
