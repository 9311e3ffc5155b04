# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP server.
#
# ARCHITECTURAL ROLE:
#   tools/ is the "translation layer" between MCP and core/.  Each tool:
#     1. Declares typed parameters (FastMCP derives the input schema)
#     2. Takes its description from core/catalog.py
#     3. Forwards the supplied arguments to core/dispatcher.py
#     4. Returns the dispatcher's text unchanged
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT build n8n payloads (core/workflows.py does)
#   - They do NOT call n8n (core/client.py does)
#   - They do NOT turn exceptions into text (core/dispatcher.py does)
# =============================================================================
