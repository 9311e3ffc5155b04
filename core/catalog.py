# =============================================================================
# core/catalog.py  —  The Tool Catalog
# =============================================================================
#
# The fixed list of tools this server exposes, in discovery order.  Each
# entry carries the description the calling LLM reads to decide WHEN to use
# the tool, and a JSON-schema input spec that tells it WHAT to pass.
#
# The FastMCP wrappers in tools/mcp_server.py take their descriptions from
# here, and the dispatcher refuses to start if a catalog entry has no handler.
# =============================================================================

from typing import Optional

from core.models import DEFAULT_EXECUTIONS_LIMIT, ToolSpec

_WORKFLOW_ID = {"type": "string", "description": "Workflow ID"}

TOOL_CATALOG: tuple[ToolSpec, ...] = (
    ToolSpec(
        name="list_workflows",
        description="List all workflows in n8n, optionally filtered by active status.",
        input_schema={
            "active": {"type": "boolean", "description": "Filter by active status"},
        },
    ),
    ToolSpec(
        name="get_workflow",
        description="Get a specific workflow by ID, including its nodes and connections.",
        input_schema={"id": _WORKFLOW_ID},
        required=("id",),
    ),
    ToolSpec(
        name="create_workflow",
        description=(
            "Create a new workflow in n8n. Every node needs a 'name' and a 'type'; "
            "ids, typeVersion, positions and parameters are filled in when missing."
        ),
        input_schema={
            "name": {"type": "string", "description": "Workflow name"},
            "nodes": {"type": "array", "description": "Array of workflow nodes", "items": {"type": "object"}},
            "connections": {"type": "object", "description": "Node connections keyed by source node name"},
            "active": {"type": "boolean", "description": "Whether workflow should be active", "default": False},
            "settings": {"type": "object", "description": "Workflow settings"},
        },
        required=("name", "nodes"),
    ),
    ToolSpec(
        name="update_workflow",
        description=(
            "Update an existing workflow. Fields you omit keep their current values; "
            "nodes and connections, when given, replace the existing ones."
        ),
        input_schema={
            "id": _WORKFLOW_ID,
            "name": {"type": "string", "description": "Workflow name"},
            "nodes": {"type": "array", "description": "Array of workflow nodes", "items": {"type": "object"}},
            "connections": {"type": "object", "description": "Node connections keyed by source node name"},
            "active": {"type": "boolean", "description": "Whether workflow should be active"},
            "settings": {"type": "object", "description": "Workflow settings"},
            "staticData": {"type": "object", "description": "Workflow static data"},
            "meta": {"type": "object", "description": "Workflow metadata"},
            "pinData": {"type": "object", "description": "Pinned node output data"},
            "tags": {"type": "array", "description": "Workflow tags"},
        },
        required=("id",),
    ),
    ToolSpec(
        name="delete_workflow",
        description="Delete a workflow permanently.",
        input_schema={"id": _WORKFLOW_ID},
        required=("id",),
    ),
    ToolSpec(
        name="activate_workflow",
        description="Activate or deactivate a workflow.",
        input_schema={
            "id": _WORKFLOW_ID,
            "active": {"type": "boolean", "description": "Active status"},
        },
        required=("id", "active"),
    ),
    ToolSpec(
        name="execute_workflow",
        description=(
            "Execute a workflow manually. The result confirms the run was accepted; "
            "use get_executions to follow its outcome."
        ),
        input_schema={
            "id": _WORKFLOW_ID,
            "data": {"type": "object", "description": "Input data for workflow execution"},
        },
        required=("id",),
    ),
    ToolSpec(
        name="get_executions",
        description="Get workflow execution history, newest first.",
        input_schema={
            "workflowId": {"type": "string", "description": "Only executions of this workflow"},
            "limit": {
                "type": "number",
                "description": "Number of executions to return",
                "default": DEFAULT_EXECUTIONS_LIMIT,
            },
        },
    ),
)

_BY_NAME: dict[str, ToolSpec] = {tool.name: tool for tool in TOOL_CATALOG}


def tool_names() -> list[str]:
    return [tool.name for tool in TOOL_CATALOG]


def get_tool(name: str) -> Optional[ToolSpec]:
    return _BY_NAME.get(name)
