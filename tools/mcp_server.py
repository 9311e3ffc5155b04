# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes the eight n8n tools over MCP.  Every tool is registered straight
#   from core/catalog.py: the name, description and JSON input schema the
#   caller discovers are the catalog entry, byte for byte.  Invocations go to
#   core/dispatcher.py untouched.  No n8n logic lives here.
#
# HOW IT WORKS (the flow):
#   1. An MCP client (e.g. the ADK agent in agent/) calls a tool by name
#   2. FastMCP routes the call to the CatalogTool for that name; a name the
#      catalog does not know is answered by UnknownToolMiddleware instead
#   3. The raw arguments go to ToolDispatcher.call_text(), with no schema
#      coercion in between
#   4. The dispatcher runs the handler in core/operations.py, which talks to
#      n8n through core/client.py
#   5. The caller receives one text item: pretty JSON, a success message,
#      or "Error: ..."
#
# TOOL NAMING CONVENTIONS:
#   - list_* / get_*  → read-only
#   - create_* / update_* / delete_* / activate_* / execute_*  → mutate n8n
#
# RUNNING THIS SERVER:
#     a) python -m tools.mcp_server            (stdio transport)
#     b) n8n-workflow-mcp                      (console script, same thing)
#     c) python -m tools.mcp_server --list-tools   (print the catalog, exit)
# =============================================================================

import argparse
import json
import logging
import sys
from typing import Any, Awaitable, Callable, Optional

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.server.middleware import Middleware, MiddlewareContext
from fastmcp.tools import Tool, ToolResult
from pydantic.json_schema import SkipJsonSchema

from core.catalog import TOOL_CATALOG, get_tool
from core.client import N8nClient
from core.config import N8nConfig, load_config
from core.dispatcher import ToolDispatcher
from core.errors import ConfigurationError
from core.models import ToolSpec

SERVER_NAME = "n8n-workflow-server"

logger = logging.getLogger("n8n_mcp")

ToolCall = Callable[[str, dict[str, Any]], Awaitable[str]]

# =============================================================================
# Logging Setup
# =============================================================================
# We log to STDERR because the MCP server talks to its client over STDOUT.
# A log line on stdout would corrupt the JSON-RPC stream.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + parameters)
#     - GREEN for responses
#     - YELLOW for intermediate status messages
# =============================================================================
_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses
_YELLOW = "\033[33m"   # Status/progress messages
_RESET = "\033[0m"     # Reset to default terminal color

_RESPONSE_PREVIEW_CHARS = 500


def configure_logging(debug: bool = False) -> None:
    """Send all log output to stderr; DEBUG level when N8N_DEBUG is on."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
        force=True,
    )
    # httpx logs every request at INFO; our client already does that in debug.
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _log_request(tool_name: str, arguments: dict[str, Any]) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in arguments.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, text: str) -> str:
    """Log the first part of the tool response in GREEN, then return it."""
    preview = text if len(text) <= _RESPONSE_PREVIEW_CHARS else text[:_RESPONSE_PREVIEW_CHARS] + "…"
    logger.info(f"{_GREEN}  ← {tool_name} response: {preview}{_RESET}")
    return text


# =============================================================================
# Catalog-backed tools
# =============================================================================
# FastMCP normally derives a tool's schema from a Python signature and
# validates arguments against it.  These tools carry the catalog schema as
# is and hand the raw arguments to the dispatcher, so "nodes": "Start" still
# reaches the "Nodes must be an array" check and a missing "limit" still
# advertises its default of 20.
# =============================================================================
class CatalogTool(Tool):
    """One catalog entry, served over MCP."""

    call: SkipJsonSchema[ToolCall]

    @classmethod
    def from_spec(cls, spec: ToolSpec, call: ToolCall) -> "CatalogTool":
        descriptor = spec.to_dict()
        return cls(
            name=descriptor["name"],
            description=descriptor["description"],
            parameters=descriptor["inputSchema"],
            call=call,
        )

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        return ToolResult(content=await self.call(self.name, arguments))


class UnknownToolMiddleware(Middleware):
    """Answer calls to names outside the catalog with the dispatcher's error text."""

    def __init__(self, call: ToolCall):
        self.call = call

    async def on_call_tool(self, context: MiddlewareContext, call_next):
        name = context.message.name
        if get_tool(name) is None:
            return ToolResult(content=await self.call(name, context.message.arguments or {}))
        return await call_next(context)


# =============================================================================
# Server factory
# =============================================================================
# The config is passed in explicitly.  Nothing below reads the environment.
# =============================================================================
def create_server(config: N8nConfig, dispatcher: Optional[ToolDispatcher] = None) -> FastMCP:
    """Build a FastMCP server that serves the catalog through a ToolDispatcher."""
    dispatcher = dispatcher or ToolDispatcher(N8nClient(config))
    mcp = FastMCP(SERVER_NAME)

    async def _call(tool_name: str, arguments: dict[str, Any]) -> str:
        _log_request(tool_name, arguments)
        text = await dispatcher.call_text(tool_name, arguments)
        if text.startswith("Error: "):
            _log_status(text)
        return _log_response(tool_name, text)

    for spec in TOOL_CATALOG:
        mcp.add_tool(CatalogTool.from_spec(spec, _call))
    mcp.add_middleware(UnknownToolMiddleware(_call))
    return mcp

# =============================================================================
# Server entry point
# =============================================================================
def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="n8n-workflow-mcp", description="n8n workflow MCP server (stdio)")
    parser.add_argument("--list-tools", action="store_true", help="print the tool catalog as JSON and exit")
    options = parser.parse_args(argv)

    load_dotenv()

    try:
        config = load_config()
    except ConfigurationError as e:
        # Fatal: report and exit before the stdio transport is opened.
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    configure_logging(config.debug)
    dispatcher = ToolDispatcher(N8nClient(config))

    if options.list_tools:
        print(json.dumps(dispatcher.list_tools(), indent=2))
        return

    mcp = create_server(config, dispatcher)
    logger.info(f"{SERVER_NAME} running on stdio → {config.api_url}")
    try:
        mcp.run()
    except KeyboardInterrupt:
        logger.info("Shutting down")


if __name__ == "__main__":
    main()
