# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains ALL the logic of the n8n workflow tool server.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP, Google ADK, or any orchestration
#   framework.  The only third-party import is httpx (in core/client.py),
#   which talks to the n8n REST API.
#
# MODULE MAP:
#   config.py      →  N8nConfig + load_config() (environment → settings)
#   errors.py      →  exception hierarchy + format_error() normalizer
#   models.py      →  dataclasses and default bundles (the "nouns")
#   client.py      →  N8nClient, the authenticated HTTP adapter
#   workflows.py   →  node/connection normalization, create/update payloads
#   operations.py  →  one coroutine per tool (the "verbs")
#   catalog.py     →  static tool descriptors with JSON input schemas
#   dispatcher.py  →  tool name → handler, errors → "Error: ..." text
# =============================================================================
