"""Run the server with ``python -m taskpad_mcp``."""

from taskpad_mcp.server import run

run()
