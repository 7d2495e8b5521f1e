"""FastMCP server initialization for Tracker MCP."""

import structlog
from mcp.server.fastmcp import FastMCP

from tracker_mcp.config import settings
from tracker_mcp.core.registry import TaskRegistry
from tracker_mcp.log import configure_logging

# Initialize the MCP server
mcp = FastMCP(settings.server_name)

_registry: TaskRegistry | None = None


def create_registry() -> TaskRegistry:
    """Build a registry from settings: file-backed when a data file is configured."""
    if settings.data_file is not None:
        from tracker_mcp.storage import FileBackedTaskRegistry

        return FileBackedTaskRegistry(settings.data_file, history_limit=settings.history_limit)
    return TaskRegistry(history_limit=settings.history_limit)


def get_registry() -> TaskRegistry:
    """Return the process-wide registry, creating it on first use."""
    global _registry
    if _registry is None:
        _registry = create_registry()
    return _registry


def set_registry(registry: TaskRegistry | None) -> None:
    """Install the registry the tools operate on (None resets to lazy creation)."""
    global _registry
    _registry = registry


def run() -> None:
    """Run the MCP server."""
    configure_logging(settings.log_level)
    log = structlog.get_logger()
    # Registers the tools with the server.
    import tracker_mcp.tools  # noqa: F401

    registry = get_registry()
    log.info("Starting Tracker MCP server", name=settings.server_name, registry=type(registry).__name__)
    mcp.run()


if __name__ == "__main__":
    run()
