# =============================================================================
# core/errors.py  —  Error Taxonomy & Normalizer
# =============================================================================
#
# FIVE KINDS OF FAILURE:
#   - ConfigurationError       →  missing credential at startup (fatal)
#   - WorkflowValidationError  →  bad tool input, raised before any network call
#   - N8nApiError              →  the n8n API answered with a non-2xx status
#   - N8nConnectionError       →  the request never got an answer (DNS,
#                                 refused connection, timeout)
#   - N8nResponseError         →  a 2xx answer whose body is not what the
#                                 operation needs
#
# format_error() turns any of them (or any other exception) into ONE
# human-readable line.  The dispatcher prefixes it with "Error: " and hands
# it back to the calling agent as ordinary text.
# =============================================================================

import json
from typing import Any, Optional


class N8nMcpError(Exception):
    """Base class for every error raised by the core package."""


class ConfigurationError(N8nMcpError):
    """Required configuration (e.g. the API key) is missing or invalid."""


class WorkflowValidationError(N8nMcpError):
    """Tool arguments failed validation before any request was sent."""


class N8nConnectionError(N8nMcpError):
    """The n8n API could not be reached, or the request timed out."""


class N8nResponseError(N8nMcpError):
    """The n8n API answered 2xx, but with a body that cannot be used."""


class N8nApiError(N8nMcpError):
    """The n8n API returned an error status.

    Attributes:
        status: HTTP status code (e.g. 404).
        status_text: Reason phrase (e.g. "Not Found").
        body: Decoded response body: a dict/list for JSON, a str for plain
              text, None when the response was empty.
    """

    def __init__(self, status: int, status_text: str = "", body: Any = None):
        self.status = status
        self.status_text = status_text
        self.body = body
        super().__init__(_describe_http_error(status, status_text, body))


def _describe_http_error(status: int, status_text: str, body: Any) -> str:
    message = f"HTTP {status} {status_text}".rstrip()
    detail = _body_detail(body)
    if detail:
        message = f"{message}: {detail}"
    return message


def _body_detail(body: Any) -> Optional[str]:
    if body is None or body == "":
        return None
    if isinstance(body, str):
        return body
    if isinstance(body, dict):
        for key in ("message", "error"):
            value = body.get(key)
            if value:
                return value if isinstance(value, str) else json.dumps(value)
    return json.dumps(body)


def format_error(exc: BaseException) -> str:
    """Convert any failure into a single human-readable string."""
    if isinstance(exc, N8nApiError):
        return _describe_http_error(exc.status, exc.status_text, exc.body)
    message = str(exc)
    return message or type(exc).__name__
