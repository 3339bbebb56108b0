"""PC build compatibility checking and component comparison, served over MCP."""

__version__ = "0.1.0"
