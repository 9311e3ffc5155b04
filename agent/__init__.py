# =============================================================================
# agent/__init__.py
# =============================================================================
# This package contains an example client for the n8n tool server: a
# Google ADK agent that manages workflows in plain language.
#
# ARCHITECTURAL ROLE:
#   The server in tools/ works with ANY MCP client (Claude Desktop, an IDE,
#   another agent).  This package is one such client, used by main.py:
#     1. Receives the user's request ("turn off the nightly sync")
#     2. Calls tools to find and inspect the right workflow
#     3. Makes the change and reports what happened
#
# WHAT THE AGENT IS NOT:
#   - It does NOT talk to n8n directly (only through MCP tools)
#   - It does NOT build or validate workflow payloads (core/ does)
# =============================================================================
