# =============================================================================
# core/workflows.py  —  Workflow Validation, Normalization & Merging
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns loosely-shaped tool arguments into payloads n8n accepts:
#
#     validate_workflow_input()  →  name + nodes present, nodes is a list,
#                                   every node has "name" and "type"
#     normalize_nodes()          →  fill in id, typeVersion, position,
#                                   parameters, disabled, notesInFlow
#     normalize_connections()    →  keep only entries whose value is an object
#     build_create_payload()     →  the full body for POST /workflows
#     merge_update_payload()     →  existing remote workflow + caller fields
#
#   Pure functions: no I/O, no logging.  core/operations.py does the calls.
#
# VALIDATION ORDER (creation):
#   1. "Workflow name and nodes are required"
#   2. "Nodes must be an array"
#   3. "Node at index <i> is missing required '<field>' field"
#
#   Updates run steps 2-3 on the nodes they replace, so a malformed node
#   never reaches n8n through either path.
# =============================================================================

import copy
import numbers
import secrets
from typing import Any, Optional

from core.errors import WorkflowValidationError
from core.models import (
    DEFAULT_NODE_TYPE_VERSION,
    DEFAULT_WORKFLOW_SETTINGS,
    default_node_position,
)

REQUIRED_NODE_FIELDS = ("name", "type")

# Workflow fields whose value resolves caller → existing remote → default.
RESOLVED_FIELDS = ("settings", "staticData", "meta", "pinData", "tags")

# Workflow fields a caller may overlay onto an existing workflow.
UPDATABLE_FIELDS = ("name", "nodes", "connections", "active") + RESOLVED_FIELDS


def generate_hex_id() -> str:
    """Random 128-bit identifier as 32 lowercase hex characters."""
    return secrets.token_hex(16)


def workflow_defaults() -> dict[str, Any]:
    """Fresh default values for the resolved fields (new instanceId each call)."""
    return {
        "settings": copy.deepcopy(DEFAULT_WORKFLOW_SETTINGS),
        "staticData": {},
        "meta": {"instanceId": generate_hex_id()},
        "pinData": {},
        "tags": [],
    }


# =============================================================================
# Validation
# =============================================================================
def validate_nodes(nodes: Any) -> None:
    """Check that nodes is a list of objects that each carry a name and type."""
    if not isinstance(nodes, list):
        raise WorkflowValidationError("Nodes must be an array")
    for index, node in enumerate(nodes):
        if not isinstance(node, dict):
            raise WorkflowValidationError(f"Node at index {index} must be an object")
        for field_name in REQUIRED_NODE_FIELDS:
            if not node.get(field_name):
                raise WorkflowValidationError(
                    f"Node at index {index} is missing required '{field_name}' field"
                )


def validate_workflow_input(name: Any, nodes: Any) -> None:
    """Validate the arguments of create_workflow, in the documented order."""
    if not name or nodes is None or (isinstance(nodes, list) and not nodes):
        raise WorkflowValidationError("Workflow name and nodes are required")
    validate_nodes(nodes)


# =============================================================================
# Normalization
# =============================================================================
def _is_position(value: Any) -> bool:
    return (
        isinstance(value, (list, tuple))
        and len(value) == 2
        and all(isinstance(v, numbers.Real) and not isinstance(v, bool) for v in value)
    )


def normalize_node(node: dict[str, Any], index: int) -> dict[str, Any]:
    """Return a copy of node with every n8n-required attribute filled in.

    Unknown keys (credentials, notes, webhookId, ...) are passed through.
    """
    normalized = dict(node)

    if not normalized.get("id"):
        normalized["id"] = generate_hex_id()

    type_version = normalized.get("typeVersion")
    if not isinstance(type_version, numbers.Real) or isinstance(type_version, bool) or type_version < 1:
        normalized["typeVersion"] = DEFAULT_NODE_TYPE_VERSION

    position = normalized.get("position")
    if _is_position(position):
        normalized["position"] = [int(round(v)) for v in position]
    else:
        normalized["position"] = default_node_position(index)

    if not isinstance(normalized.get("parameters"), dict):
        normalized["parameters"] = {}

    normalized.setdefault("disabled", False)
    normalized.setdefault("notesInFlow", False)
    return normalized


def normalize_nodes(nodes: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return [normalize_node(node, index) for index, node in enumerate(nodes)]


def normalize_connections(connections: Any) -> dict[str, Any]:
    """Keep only the connection entries whose value is an object."""
    if not isinstance(connections, dict):
        return {}
    return {source: target for source, target in connections.items() if isinstance(target, dict)}


# =============================================================================
# Payload builders
# =============================================================================
def build_create_payload(args: dict[str, Any]) -> dict[str, Any]:
    """Validate create_workflow arguments and build the POST /workflows body."""
    name = args.get("name")
    nodes = args.get("nodes")
    validate_workflow_input(name, nodes)

    payload: dict[str, Any] = {
        "name": name,
        "nodes": normalize_nodes(nodes),
        "connections": normalize_connections(args.get("connections")),
        "active": bool(args.get("active", False)),
    }

    defaults = workflow_defaults()
    for field_name in RESOLVED_FIELDS:
        value = args.get(field_name)
        payload[field_name] = value if value is not None else defaults[field_name]
    return payload


def merge_update_payload(existing: Optional[dict[str, Any]], args: dict[str, Any]) -> dict[str, Any]:
    """Overlay caller fields onto the existing remote workflow.

    Precedence for settings/staticData/meta/pinData/tags is
    caller value → existing remote value → hardcoded default.
    Arguments that are None count as "not supplied".
    """
    updates = {key: args[key] for key in UPDATABLE_FIELDS if args.get(key) is not None}

    if "nodes" in updates:
        validate_nodes(updates["nodes"])
        updates["nodes"] = normalize_nodes(updates["nodes"])
    if "connections" in updates:
        updates["connections"] = normalize_connections(updates["connections"])

    base = dict(existing) if isinstance(existing, dict) else {}
    merged = {**base, **updates}

    defaults = workflow_defaults()
    for field_name in RESOLVED_FIELDS:
        if updates.get(field_name) is not None:
            merged[field_name] = updates[field_name]
        elif base.get(field_name) is not None:
            merged[field_name] = base[field_name]
        else:
            merged[field_name] = defaults[field_name]
    return merged
