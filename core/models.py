# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# Workflows, nodes, and executions are NOT modelled as classes here: n8n owns
# their schema and this server passes them through as plain dicts.  What
# lives here is the small set of shapes the server itself defines:
#
#   - the default bundles merged into every workflow we submit
#   - ApiResult, the outcome of a call that may need a fallback
#   - ToolSpec, one entry of the tool catalog
#
# Everything is request scoped.  Nothing is cached between tool calls.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any

from core.errors import N8nApiError


# -----------------------------------------------------------------------------
# Workflow defaults
# -----------------------------------------------------------------------------
# Applied when neither the caller nor the existing remote workflow supplies a
# value.  Always copy before use: callers mutate the payloads they build.
# -----------------------------------------------------------------------------
DEFAULT_WORKFLOW_SETTINGS: dict[str, Any] = {
    "executionOrder": "v1",
    "saveDataSuccessExecution": "all",
    "saveExecutionProgress": True,
    "saveManualExecutions": True,
    "callerPolicy": "workflowsFromSameOwner",
}

# Node layout on the n8n canvas: nodes without a position are laid out left
# to right, 250px apart, on one row.
NODE_POSITION_ORIGIN_X = 250
NODE_POSITION_STEP_X = 250
NODE_POSITION_Y = 300

DEFAULT_NODE_TYPE_VERSION = 1
DEFAULT_EXECUTIONS_LIMIT = 20


def default_node_position(index: int) -> list[int]:
    """Canvas position for the index-th node (0-based) when none is given."""
    return [NODE_POSITION_ORIGIN_X + index * NODE_POSITION_STEP_X, NODE_POSITION_Y]


# -----------------------------------------------------------------------------
# ApiResult: outcome of a primary call that may fall back
# -----------------------------------------------------------------------------
# activate_workflow and execute_workflow retry ONCE against a different
# endpoint when the primary call fails with specific statuses.  Instead of
# catching exceptions to decide, the primary call returns an ApiResult and
# the handler branches on result.status.
# -----------------------------------------------------------------------------
@dataclass
class ApiResult:
    """Either a decoded success payload or a structured HTTP failure."""

    status: int
    data: Any = None
    status_text: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def unwrap(self) -> Any:
        """Return the payload, or raise N8nApiError for a failure."""
        if not self.ok:
            raise N8nApiError(self.status, self.status_text, self.data)
        return self.data


# -----------------------------------------------------------------------------
# ToolSpec: one entry of the tool catalog
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolSpec:
    """A tool as advertised to MCP clients."""

    name: str
    description: str
    input_schema: dict[str, Any] = field(default_factory=dict)
    required: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": "object", "properties": dict(self.input_schema)}
        if self.required:
            schema["required"] = list(self.required)
        return {"name": self.name, "description": self.description, "inputSchema": schema}
