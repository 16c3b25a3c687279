"""FastMCP server initialization for Taskpad MCP."""

from mcp.server.fastmcp import FastMCP

from taskpad_mcp.config import Settings
from taskpad_mcp.utils.log import configure_logging

# Initialize the MCP server
mcp = FastMCP("taskpad_mcp")


def run() -> None:
    """Run the MCP server."""
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    # Importing the tools registers them (and the HTTP chat route) with the server
    import taskpad_mcp.tools  # noqa: F401

    mcp.run(transport=settings.transport)
