# =============================================================================
# core/models.py  -  Data Models (the "nouns" of the tool adapter)
# =============================================================================
#
# These dataclasses define the shape of everything that crosses the boundary
# between the remote tool session (mcp.run) and the agent:
#
#   ToolDescriptor  ->  what the remote catalog tells us about a tool
#   ContentItem     ->  one unit of tool output (text, image, resource)
#   CallResult      ->  the ONE result shape every tool call returns
#
# WHY A FIXED RESULT SHAPE?
#   The remote catalog is heterogeneous: GitHub tools, Slack tools, anything
#   the user installed.  Each answers in its own way.  The agent, however,
#   should only ever see one contract: a list of content items plus an
#   isError flag.  Failures become DATA the LLM can read, not exceptions.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional


def read_field(obj: Any, name: str, default: Any = None) -> Any:
    """Read a field from an attribute-style object (mcp types) or a mapping."""
    if isinstance(obj, Mapping):
        return obj.get(name, default)
    return getattr(obj, name, default)


# -----------------------------------------------------------------------------
# ToolDescriptor - one entry of the remote catalog
# -----------------------------------------------------------------------------
# Snapshot taken once when the adapter is built.  There is no refresh: if the
# user installs a new servlet on mcp.run, the agent is rebuilt.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolDescriptor:
    """A remote tool as advertised by the session's catalog."""

    name: str                              # Unique id, e.g. "gh-list-issues"
    description: Optional[str] = None      # Free text the LLM reads
    input_schema: dict[str, Any] = field(default_factory=dict)  # JSON Schema

    @classmethod
    def from_remote(cls, tool: Any) -> "ToolDescriptor":
        """Build a descriptor from an ``mcp.types.Tool`` or a plain dict.

        Raises:
            ValueError: if the tool has no usable name.  A nameless tool
                cannot be registered, so the whole catalog is rejected.
        """
        name = read_field(tool, "name")
        if not isinstance(name, str) or not name:
            raise ValueError(f"Remote tool has no name: {tool!r}")

        # fastmcp tools warn when the camelCase alias is read.
        schema = read_field(tool, "input_schema")
        if schema is None:
            schema = read_field(tool, "inputSchema")

        return cls(
            name=name,
            description=read_field(tool, "description"),
            input_schema=dict(schema) if isinstance(schema, Mapping) else {},
        )


# -----------------------------------------------------------------------------
# ContentItem - a single piece of tool output
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ContentItem:
    """One normalized unit of tool output."""

    type: str                              # "text", "image" or "resource"
    text: str = ""                         # Always a string, possibly empty
    data: Optional[str] = None             # Base64 payload (images)
    mime_type: Optional[str] = None        # e.g. "image/png"

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "text": self.text,
            "data": self.data,
            "mimeType": self.mime_type,
        }


# -----------------------------------------------------------------------------
# CallResult - the uniform contract of every operation
# -----------------------------------------------------------------------------
# Every code path of an operation (success, empty response, exception) ends
# in one of these.  The agent checks is_error; it never sees a traceback.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class CallResult:
    """Result of a tool invocation, successful or not."""

    content: list[ContentItem] = field(default_factory=list)
    is_error: Optional[bool] = None        # None/False = success

    def to_dict(self) -> dict[str, Any]:
        """Render the wire shape the agent receives (camelCase keys)."""
        return {
            "content": [item.to_dict() for item in self.content],
            "isError": self.is_error,
        }
