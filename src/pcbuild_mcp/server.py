"""PC Build MCP Server - Check build compatibility and compare PC components."""

import json
import logging
from contextlib import asynccontextmanager
from typing import Literal

from fastmcp import FastMCP
from mcp.types import ToolAnnotations
from starlette.middleware import Middleware
from starlette.responses import JSONResponse
from starlette.routing import Route

from . import __version__
from .catalog import Catalog, get_catalog
from .comparison_rules import rules_for
from .config import DEFAULT_SEARCH_LIMIT, HTTP_PORT, MAX_QUERY_LENGTH, RATE_LIMIT_REQUESTS
from .filtering import FilterCriteria
from .models import CATEGORY_LABELS
from .ratelimit import RateLimitMiddleware
from . import summary

logger = logging.getLogger(__name__)

# Global state
_catalog: Catalog | None = None


@asynccontextmanager
async def lifespan(app):
    """Load the component catalog on startup."""
    global _catalog
    _catalog = get_catalog()
    logger.info(f"Catalog ready: {len(_catalog)} components in {len(_catalog.categories())} categories")
    yield
    _catalog = None


# Create MCP server
mcp = FastMCP(
    name="pcbuild",
    instructions="PC build helper. Use search_parts to find component ids, check_build to validate a build (socket/RAM/cooler/graphics compatibility, total price, PSU wattage estimate), and compare_parts to compare 2-4 components of the same category side by side.",
    lifespan=lifespan,
)


def _parse_list_param(value: list[str] | str | None) -> list[str] | None:
    """Parse a list parameter that may come as a JSON string from some MCP clients.

    Some clients serialize list parameters as '["a", "b"]' instead of arrays.
    A plain string that isn't JSON is treated as a single item.
    """
    if value is None:
        return None
    if isinstance(value, list):
        return value
    if isinstance(value, str):
        try:
            parsed = json.loads(value)
            if isinstance(parsed, list):
                return [str(item) for item in parsed]
            if isinstance(parsed, str):
                return [parsed] if parsed.strip() else None
        except json.JSONDecodeError:
            logger.debug(f"List parameter is not JSON, using as single value: {value[:100]!r}")
        return [value] if value.strip() else None
    return None


_CATALOG_NOT_LOADED = {
    "error": "Catalog not loaded. Server may still be starting up.",
    "hint": "Try again in a moment",
}


_READ_ONLY = dict(
    readOnlyHint=True,
    destructiveHint=False,
    idempotentHint=True,
    openWorldHint=False,
)


# Tools

@mcp.tool(annotations=ToolAnnotations(title="List Categories", **_READ_ONLY))
async def list_categories() -> dict:
    """List component categories with counts, manufacturers and comparison rules.

    Returns:
        categories: [{category, label, count, manufacturers, comparison_rules}]
    """
    if _catalog is None:
        return dict(_CATALOG_NOT_LOADED)
    catalog = _catalog
    return {
        "categories": [
            {
                "category": category,
                "label": CATEGORY_LABELS.get(category, category),
                "count": len(catalog.by_category(category)),
                "manufacturers": catalog.manufacturers(category),
                "comparison_rules": [rule.to_dict() for rule in rules_for(category).values()],
            }
            for category in catalog.categories()
        ]
    }


@mcp.tool(annotations=ToolAnnotations(title="Search Parts", **_READ_ONLY))
async def search_parts(
    category: str | None = None,
    query: str | None = None,
    min_price: float | None = None,
    max_price: float | None = None,
    manufacturers: list[str] | str | None = None,
    socket: str | None = None,
    ram_type: str | None = None,
    in_stock_only: bool = False,
    sort_by: Literal["price_asc", "price_desc", "name"] | None = None,
    limit: int = DEFAULT_SEARCH_LIMIT,
) -> dict:
    """Search the component catalog.

    Args:
        category: "cpu", "gpu", "motherboard", "ram", "cooler", "storage", "psu", "case", or a peripheral
        query: Case-insensitive name search (e.g., "ryzen", "4090")
        min_price: Minimum price in cents (inclusive)
        max_price: Maximum price in cents (inclusive)
        manufacturers: Manufacturer names (OR filter, exact match)
        socket: CPU socket (e.g., "AM5"); applies to CPUs and motherboards only
        ram_type: Memory type (e.g., "DDR5"); applies to RAM and motherboards only
        in_stock_only: Exclude "Low stock" and "Out of stock" parts
        sort_by: "price_asc", "price_desc" or "name" (default: catalog order)
        limit: Max results (default 20, max 100)

    Returns:
        results, total (matches before limit), returned
    """
    if query and len(query) > MAX_QUERY_LENGTH:
        return {"error": f"Query too long (max {MAX_QUERY_LENGTH} characters)"}

    criteria = FilterCriteria(
        min_price=min_price,
        max_price=max_price,
        manufacturers=_parse_list_param(manufacturers) or [],
        socket=socket,
        ram_type=ram_type,
        search_query=query,
        in_stock_only=in_stock_only,
    )
    if _catalog is None:
        return dict(_CATALOG_NOT_LOADED)
    return summary.search_parts(
        _catalog,
        category=category,
        criteria=criteria,
        sort_by=sort_by,
        limit=limit,
    )


@mcp.tool(annotations=ToolAnnotations(title="Get Part", **_READ_ONLY))
async def get_part(part_id: str) -> dict:
    """Get full details for one component.

    Args:
        part_id: Component id from search_parts (e.g., "cpu-1")
    """
    if _catalog is None:
        return dict(_CATALOG_NOT_LOADED)
    component = _catalog.get(part_id)
    if component is None:
        return {"error": f"Component not found: '{part_id}'", "hint": "Use search_parts() to find component ids"}
    result = component.to_dict()
    result["category_label"] = CATEGORY_LABELS.get(component.category, component.category)
    return result


@mcp.tool(annotations=ToolAnnotations(title="Check Build", **_READ_ONLY))
async def check_build(
    cpu: str | None = None,
    gpu: str | None = None,
    motherboard: str | None = None,
    ram: str | None = None,
    cooler: str | None = None,
    storage: str | None = None,
    psu: str | None = None,
    case: str | None = None,
) -> dict:
    """Check a build for compatibility problems and compute price and wattage.

    Pass component ids per slot; leave slots empty to skip them.

    Checks: CPU/motherboard socket, RAM/motherboard memory type, cooler socket
    support, and display output when no GPU is chosen.

    Returns:
        parts, empty_slots, issues [{severity, message}], has_errors,
        total_price (cents), total_price_display, estimated_wattage (W, +20% headroom)
    """
    parts = {
        "cpu": cpu,
        "gpu": gpu,
        "motherboard": motherboard,
        "ram": ram,
        "cooler": cooler,
        "storage": storage,
        "psu": psu,
        "case": case,
    }
    if _catalog is None:
        return dict(_CATALOG_NOT_LOADED)
    try:
        return summary.summarize_build(_catalog, parts)
    except Exception as e:
        logger.error(f"Build check failed: {type(e).__name__}: {e}")
        return {"error": "Build check failed. Check server logs for details."}


@mcp.tool(annotations=ToolAnnotations(title="Compare Parts", **_READ_ONLY))
async def compare_parts(part_ids: list[str] | str) -> dict:
    """Compare 2-4 components of the same category side by side.

    Each spec with a comparison rule marks the best component(s); every win
    is worth 2 points and the highest total is the best pick. Ties for the
    top score go to the first component listed.

    Args:
        part_ids: Component ids, e.g. ["cpu-1", "cpu-2"]

    Returns:
        best_component, specs [{spec, values, notes}], recommendations, scores
    """
    parsed_ids = _parse_list_param(part_ids)
    if not parsed_ids:
        return {"error": "part_ids must be a list of component ids"}
    if _catalog is None:
        return dict(_CATALOG_NOT_LOADED)
    try:
        return summary.compare_parts(_catalog, parsed_ids)
    except Exception as e:
        logger.error(f"Comparison failed: {type(e).__name__}: {e}")
        return {"error": "Comparison failed. Check server logs for details."}


# Health check endpoint
async def health(request):
    return JSONResponse({
        "status": "healthy",
        "service": "pcbuild-mcp",
        "version": __version__,
        "components": len(_catalog) if _catalog is not None else 0,
    })


# Create ASGI app
def create_app():
    """Create the ASGI application."""
    middleware = [
        Middleware(RateLimitMiddleware, requests_per_minute=RATE_LIMIT_REQUESTS),
    ]

    app = mcp.http_app(
        path="/mcp",
        middleware=middleware,
        transport="streamable-http",
        stateless_http=True,
    )
    app.routes.append(Route("/health", health))
    return app


app = create_app()


class _HealthFilterLog(logging.Filter):
    """Suppress noisy /health access logs from container healthchecks."""

    def filter(self, record: logging.LogRecord) -> bool:
        return "/health" not in record.getMessage()


def main():
    """Run the server."""
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    logging.getLogger("uvicorn.access").addFilter(_HealthFilterLog())

    uvicorn.run(
        "pcbuild_mcp.server:app",
        host="0.0.0.0",
        port=HTTP_PORT,
        lifespan="on",
    )


if __name__ == "__main__":
    main()
