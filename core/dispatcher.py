# =============================================================================
# core/dispatcher.py  —  Tool Name → Handler, Failures → Text
# =============================================================================
#
# THE DISPATCH BOUNDARY:
#   Every tool call goes through ToolDispatcher.call_text().  Whatever goes
#   wrong inside a handler (validation, HTTP error, timeout, a bug) is caught
#   HERE and returned as ordinary text:
#
#       "Error: HTTP 404 Not Found: Workflow not found"
#
#   The MCP transport never sees a fault for a handler failure, so the
#   calling agent can read the error and decide what to do next.
# =============================================================================

import logging
from typing import Any, Optional

from core.catalog import TOOL_CATALOG, get_tool
from core.client import N8nClient
from core.errors import format_error
from core.operations import HANDLERS, Handler

logger = logging.getLogger(__name__)


class ToolDispatcher:
    """Routes tool invocations to their handlers."""

    def __init__(self, client: N8nClient, handlers: Optional[dict[str, Handler]] = None):
        self.client = client
        self.handlers = dict(HANDLERS if handlers is None else handlers)

        missing = [tool.name for tool in TOOL_CATALOG if tool.name not in self.handlers]
        if missing:
            raise ValueError(f"No handler registered for tool(s): {', '.join(missing)}")

    def list_tools(self) -> list[dict[str, Any]]:
        """Descriptors for tool discovery, in catalog order."""
        return [tool.to_dict() for tool in TOOL_CATALOG]

    async def call_text(self, name: str, arguments: Optional[dict[str, Any]] = None) -> str:
        """Run a tool and return its text, or "Error: ..." on any failure."""
        handler = self.handlers.get(name) if get_tool(name) else None
        if handler is None:
            logger.warning("Unknown tool requested: %s", name)
            return f"Error: Unknown tool: {name}"

        try:
            return await handler(self.client, dict(arguments or {}))
        except Exception as e:
            logger.warning("Tool %s failed: %s", name, format_error(e), exc_info=self.client.config.debug)
            return f"Error: {format_error(e)}"

    async def call_tool(self, name: str, arguments: Optional[dict[str, Any]] = None) -> list[dict[str, str]]:
        """Run a tool and wrap the result as MCP content (one text item)."""
        text = await self.call_text(name, arguments)
        return [{"type": "text", "text": text}]
