# =============================================================================
# agent/workflow_agent.py  —  Google ADK Agent Configuration
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Creates an example MCP CLIENT for the server in tools/: a Google ADK
#   agent that reasons with an LLM (through LiteLlm) and manages n8n
#   workflows by calling our eight tools.
#
# HOW IT WORKS (simplified):
#
#   ┌──────────────────────────────────────────────────────────────┐
#   │                     Google ADK Agent                         │
#   │   System prompt ──▶ LLM via LiteLlm ──▶ MCPToolset (stdio)   │
#   └──────────────────────────────────────────────────────────────┘
#                                                   │
#                                                   ▼
#                                     ┌───────────────────────────┐
#                                     │  FastMCP server           │
#                                     │  (python -m               │
#                                     │   tools.mcp_server)       │
#                                     └───────────────────────────┘
#                                                   │  HTTPS + X-N8N-API-KEY
#                                                   ▼
#                                     ┌───────────────────────────┐
#                                     │  n8n REST API  /api/v1    │
#                                     └───────────────────────────┘
#
# MCP CONNECTION:
#   ADK starts the server as a subprocess and talks to it over
#   stdin/stdout.  The subprocess inherits our environment, so N8N_URL and
#   N8N_API_KEY set here (or in .env) reach the server.
#
# MODEL:
#   N8N_AGENT_MODEL picks the LiteLlm model string, default
#   "openrouter/openai/gpt-4o" (LiteLlm reads OPENROUTER_API_KEY itself).
# =============================================================================
import os
import sys
from typing import Optional

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool import MCPToolset
from mcp import StdioServerParameters

from agent.prompt import get_workflow_assistant_prompt

DEFAULT_MODEL = "openrouter/openai/gpt-4o"
SERVER_MODULE = "tools.mcp_server"


def project_root() -> str:
    return os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def server_parameters() -> StdioServerParameters:
    """How ADK launches the MCP server: same interpreter, run as a module."""
    return StdioServerParameters(
        command=sys.executable,
        args=["-m", SERVER_MODULE],
        cwd=project_root(),
        env=dict(os.environ),
    )


def create_agent(model: Optional[str] = None) -> Agent:
    """Create and configure the n8n workflow assistant.

    Args:
        model: LiteLlm model string.  Falls back to N8N_AGENT_MODEL, then to
               DEFAULT_MODEL.

    Returns:
        A configured Google ADK Agent connected to the n8n tool server.
    """
    mcp_tools = MCPToolset(connection_params=server_parameters())

    model_name = model or os.environ.get("N8N_AGENT_MODEL") or DEFAULT_MODEL

    return Agent(
        name="n8n_workflow_assistant",
        model=LiteLlm(model=model_name),
        instruction=get_workflow_assistant_prompt(),
        tools=[mcp_tools],
    )
