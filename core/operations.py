# =============================================================================
# core/operations.py  —  One Handler per Tool
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Implements the eight tools.  Every handler has the same shape:
#
#       async def handler(client: N8nClient, args: dict) -> str
#
#   It normalizes the arguments, calls n8n through the client, and returns
#   the text the MCP caller will see.  Handlers RAISE on failure; turning the
#   exception into "Error: ..." text is the dispatcher's job.
#
# FALLBACK PATHS (the only retries in the system):
#
#   activate_workflow   PATCH /workflows/{id}  ── 405 ──▶  GET + PUT /workflows/{id}
#   execute_workflow    POST /workflows/{id}/execute ── 404/405 ──▶  POST /workflows/run
#
#   The primary call returns an ApiResult; the handler inspects its status
#   and either unwraps it or moves to the fallback.  Any other failure status
#   propagates unchanged.
# =============================================================================

import json
import logging
from typing import Any, Awaitable, Callable

from core.client import N8nClient
from core.errors import N8nResponseError, WorkflowValidationError
from core.models import DEFAULT_EXECUTIONS_LIMIT
from core.workflows import build_create_payload, merge_update_payload

logger = logging.getLogger(__name__)

Handler = Callable[[N8nClient, dict[str, Any]], Awaitable[str]]

ACTIVATE_FALLBACK_STATUSES = frozenset({405})
EXECUTE_FALLBACK_STATUSES = frozenset({404, 405})


def to_pretty_json(payload: Any) -> str:
    """Pretty-print a response body the way every tool returns it."""
    return json.dumps(payload, indent=2, ensure_ascii=False, default=str)


def _require_id(args: dict[str, Any], key: str = "id") -> str:
    workflow_id = args.get(key)
    if workflow_id is None or str(workflow_id).strip() == "":
        raise WorkflowValidationError("Workflow id is required")
    return str(workflow_id)


# =============================================================================
# Read operations
# =============================================================================
async def list_workflows(client: N8nClient, args: dict[str, Any]) -> str:
    params: dict[str, Any] = {}
    # Omitting "active" means "no filter", which is NOT the same as active=false.
    if args.get("active") is not None:
        params["active"] = args["active"]
    data = await client.get("/workflows", params=params)
    return to_pretty_json(data)


async def get_workflow(client: N8nClient, args: dict[str, Any]) -> str:
    workflow_id = _require_id(args)
    data = await client.get(f"/workflows/{workflow_id}")
    return to_pretty_json(data)


async def get_executions(client: N8nClient, args: dict[str, Any]) -> str:
    params: dict[str, Any] = {"limit": args.get("limit") or DEFAULT_EXECUTIONS_LIMIT}
    if args.get("workflowId"):
        params["workflowId"] = args["workflowId"]
    data = await client.get("/executions", params=params)
    return to_pretty_json(data)


# =============================================================================
# Write operations
# =============================================================================
async def create_workflow(client: N8nClient, args: dict[str, Any]) -> str:
    payload = build_create_payload(args)
    logger.info("Creating workflow %r with %d node(s)", payload["name"], len(payload["nodes"]))
    data = await client.post("/workflows", payload)
    return f"Workflow created successfully!\n{to_pretty_json(data)}"


async def update_workflow(client: N8nClient, args: dict[str, Any]) -> str:
    """Read-before-write: fetch the current workflow, merge, then PUT it back.

    Not transactional: a concurrent change on the n8n side between the GET
    and the PUT is overwritten.
    """
    workflow_id = _require_id(args)
    existing = await client.get(f"/workflows/{workflow_id}")
    payload = merge_update_payload(existing, args)
    data = await client.put(f"/workflows/{workflow_id}", payload)
    return f"Workflow updated successfully!\n{to_pretty_json(data)}"


async def delete_workflow(client: N8nClient, args: dict[str, Any]) -> str:
    workflow_id = _require_id(args)
    await client.delete(f"/workflows/{workflow_id}")
    return f"Workflow {workflow_id} deleted successfully!"


async def activate_workflow(client: N8nClient, args: dict[str, Any]) -> str:
    workflow_id = _require_id(args)
    active = args.get("active")
    if not isinstance(active, bool):
        raise WorkflowValidationError("Active status must be a boolean")

    path = f"/workflows/{workflow_id}"
    result = await client.attempt("PATCH", path, json_body={"active": active})

    if result.status in ACTIVATE_FALLBACK_STATUSES:
        logger.info("PATCH %s returned %s, falling back to read-modify-write", path, result.status)
        workflow = await client.get(path)
        if not isinstance(workflow, dict):
            raise N8nResponseError(f"Workflow {workflow_id} could not be read back for activation")
        workflow["active"] = active
        data = await client.put(path, workflow)
    else:
        data = result.unwrap()

    state = "activated" if active else "deactivated"
    return f"Workflow {state} successfully!\n{to_pretty_json(data)}"


async def execute_workflow(client: N8nClient, args: dict[str, Any]) -> str:
    """Start a run.  The response confirms acceptance, not completion."""
    workflow_id = _require_id(args)
    data = args.get("data")
    workflow_data = data if data is not None else {}

    primary_path = f"/workflows/{workflow_id}/execute"
    result = await client.attempt("POST", primary_path, json_body={"workflowData": workflow_data})

    if result.status in EXECUTE_FALLBACK_STATUSES:
        logger.info("POST %s returned %s, falling back to /workflows/run", primary_path, result.status)
        response = await client.post(
            "/workflows/run",
            {"workflowId": workflow_id, "workflowData": workflow_data},
        )
    else:
        response = result.unwrap()

    return f"Workflow execution started!\n{to_pretty_json(response)}"


# =============================================================================
# Handler table (tool name → coroutine)
# =============================================================================
HANDLERS: dict[str, Handler] = {
    "list_workflows": list_workflows,
    "get_workflow": get_workflow,
    "create_workflow": create_workflow,
    "update_workflow": update_workflow,
    "delete_workflow": delete_workflow,
    "activate_workflow": activate_workflow,
    "execute_workflow": execute_workflow,
    "get_executions": get_executions,
}
