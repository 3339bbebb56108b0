"""Configuration for PC Build MCP server."""

import os

# Server settings
HTTP_PORT = int(os.getenv("HTTP_PORT", "8080"))
RATE_LIMIT_REQUESTS = int(os.getenv("RATE_LIMIT_REQUESTS", "100"))

# Catalog file (JSON). Empty means the catalog bundled with the package.
CATALOG_PATH = os.getenv("CATALOG_PATH", "")

# Search settings
DEFAULT_SEARCH_LIMIT = 20
MAX_SEARCH_LIMIT = 100
MAX_QUERY_LENGTH = 500

# Comparison settings
MIN_COMPARE_ITEMS = 2
MAX_COMPARE_ITEMS = 4  # Side-by-side view fits at most 4 columns

# Wattage estimation
CPU_TDP_FALLBACK_W = 65  # Used when a CPU's TDP can't be parsed
GPU_TDP_FALLBACK_W = 200  # Used when a GPU's TDP can't be parsed
BASE_OVERHEAD_W = 100  # Motherboard, RAM, storage, fans
WATTAGE_HEADROOM = 1.20  # 20% safety margin on top of the estimate

# Prices in the catalog are stored in minor currency units (cents)
CURRENCY_SYMBOL = os.getenv("CURRENCY_SYMBOL", "$")
