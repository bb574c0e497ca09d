# =============================================================================
# tools/mcpx.py  -  Remote Tool Catalog -> Local Operations
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Turns the tools of an mcp.run session into locally invocable operations.
#   It is the only piece of this project with a real contract:
#
#   ┌──────────────┐  list_tools   ┌──────────────────┐  translate   ┌───────────┐
#   │ mcp.run      │──────────────▶│ ToolDescriptor[] │─────────────▶│ Operation │
#   │ session      │◀──────────────│                  │              │  (1 per   │
#   └──────────────┘   call_tool   └──────────────────┘              │   tool)   │
#          ▲                                                         └─────┬─────┘
#          └───────────────────────── invoke(arguments) ◀──────────────────┘
#
#   1. CATALOG FETCH      one list request; if it fails, nothing is built
#   2. SCHEMA TRANSLATION each inputSchema becomes a pydantic model
#   3. OPERATION WRAPPING each tool becomes an Operation whose invoke()
#                         ALWAYS returns a CallResult
#   4. REGISTRY           {tool name: Operation}, the one thing callers use
#
# ERROR CONTAINMENT:
#   The agent drives an autonomous loop over many tools.  A tool that times
#   out or returns garbage must not crash that loop.  So invoke() catches
#   every exception and hands back a CallResult with is_error=True and a
#   readable message.  The LLM reads the message and decides what to do next.
#
#   Catalog fetch is the exception to the rule: if we can't even list the
#   tools, there is nothing to contain, and the error goes to the caller.
#
# CONCURRENCY:
#   Operations share nothing but the (read-only) session handle.  The agent
#   may run several at once; there is no lock, no retry and no timeout here.
# =============================================================================

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Protocol, Sequence

from pydantic import BaseModel

from core.models import CallResult, ToolDescriptor
from core.results import error_result, no_response_result, normalize_response
from core.schema import json_schema_to_model, schema_model_name
from tools.logs import log_request, log_result

logger = logging.getLogger(__name__)


class ToolSession(Protocol):
    """What the adapter needs from a remote session (see tools/session.py)."""

    async def list_tools(self) -> Sequence[Any]: ...

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> Any: ...


# -----------------------------------------------------------------------------
# Operation - one remote tool, made local
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Operation:
    """A named, remotely backed callable with a declared input shape.

    Attributes:
        id: The remote tool name; also the registry key.
        description: What the LLM reads to decide when to call it.
        input_schema: The remote JSON Schema, as advertised.
        input_model: pydantic model translated from ``input_schema``.
        session: The remote session every call goes through.
        output_contract: Shape of every result (always CallResult).
    """

    id: str
    description: str
    input_schema: dict[str, Any]
    input_model: type[BaseModel]
    session: ToolSession = field(repr=False, compare=False)
    output_contract: type[CallResult] = CallResult

    def validate(self, arguments: Mapping[str, Any]) -> dict[str, Any]:
        """Check arguments against the tool's schema.

        Returns only what the caller actually passed, under the remote
        property names, so the remote side applies its own defaults.

        Raises:
            pydantic.ValidationError: if the arguments don't fit the schema.
        """
        model = self.input_model.model_validate(dict(arguments))
        return model.model_dump(by_alias=True, exclude_unset=True)

    async def invoke(self, arguments: Mapping[str, Any]) -> CallResult:
        """Forward ``arguments`` to the remote tool.  Never raises."""
        try:
            log_request(self.id, arguments)
            response = await self.session.call_tool(self.id, dict(arguments))
            if response is None:
                return log_result(self.id, no_response_result())
            return log_result(self.id, normalize_response(response))
        except Exception as exc:
            logger.exception("Error executing tool %s", self.id)
            return log_result(self.id, error_result(self.id, exc))

    async def execute(self, arguments: Mapping[str, Any]) -> CallResult:
        """Validate, then invoke.  A validation failure is a result too."""
        try:
            validated = self.validate(arguments)
        except Exception as exc:
            return log_result(self.id, error_result(self.id, exc))
        return await self.invoke(validated)


# -----------------------------------------------------------------------------
# Step 1: catalog fetch
# -----------------------------------------------------------------------------
async def fetch_catalog(session: ToolSession) -> list[ToolDescriptor]:
    """List the session's tools.

    Raises:
        Exception: whatever the session raised.  No partial catalog is ever
            returned; the caller decides whether to retry or give up.
    """
    try:
        tools = await session.list_tools()
        return [ToolDescriptor.from_remote(tool) for tool in tools]
    except Exception:
        logger.exception("Error getting MCPX tools")
        raise


# -----------------------------------------------------------------------------
# Steps 2 + 3: schema translation and wrapping
# -----------------------------------------------------------------------------
def build_operation(session: ToolSession, descriptor: ToolDescriptor) -> Operation:
    return Operation(
        id=descriptor.name,
        description=descriptor.description or "",
        input_schema=descriptor.input_schema,
        input_model=json_schema_to_model(descriptor.input_schema, schema_model_name(descriptor.name)),
        session=session,
    )


# -----------------------------------------------------------------------------
# Step 4: registry
# -----------------------------------------------------------------------------
def build_registry(operations: Iterable[Operation]) -> dict[str, Operation]:
    """Key operations by id.  On a duplicate name the later tool wins."""
    registry: dict[str, Operation] = {}
    for operation in operations:
        if operation.id in registry:
            logger.warning("Duplicate tool name %r in catalog; keeping the last one", operation.id)
        registry[operation.id] = operation
    return registry


async def get_mcpx_tools(session: ToolSession) -> dict[str, Operation]:
    """Build the operation registry for an already-connected session."""
    descriptors = await fetch_catalog(session)
    registry = build_registry(build_operation(session, d) for d in descriptors)
    logger.info("Loaded %d tool(s) from mcp.run: %s", len(registry), ", ".join(sorted(registry)))
    return registry
