# =============================================================================
# tools/adk_tool.py  -  Operations as Google ADK Tools
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Google ADK can turn plain Python functions into tools, but only if their
#   signature is known when the file is written.  Our tools are discovered at
#   runtime, so each Operation is wrapped in a small BaseTool subclass that:
#
#     1. DECLARES the tool to the LLM (name, description, JSON Schema)
#     2. RUNS it by calling Operation.execute() and returning the CallResult
#        as a plain dict
#
#   Because execute() never raises, a failing tool shows up in the agent's
#   context as {"isError": true, "content": [...]} instead of an exception.
# =============================================================================

from typing import Any, Mapping, Optional

from google.adk.tools.base_tool import BaseTool
from google.adk.tools.tool_context import ToolContext
from google.genai import types

from tools.mcpx import Operation


def _parameters_schema(schema: dict[str, Any]) -> dict[str, Any]:
    """Function-calling APIs want an object schema, even for no-arg tools."""
    if schema.get("type") == "object":
        return schema
    return {**schema, "type": "object", "properties": schema.get("properties", {})}


class MCPXTool(BaseTool):
    """One mcp.run tool, exposed to an ADK agent."""

    def __init__(self, operation: Operation):
        super().__init__(name=operation.id, description=operation.description)
        self.operation = operation

    def _get_declaration(self) -> Optional[types.FunctionDeclaration]:
        return types.FunctionDeclaration(
            name=self.name,
            description=self.description,
            parameters_json_schema=_parameters_schema(self.operation.input_schema),
        )

    async def run_async(self, *, args: dict[str, Any], tool_context: ToolContext) -> Any:
        result = await self.operation.execute(args or {})
        return result.to_dict()


def to_adk_tools(registry: Mapping[str, Operation]) -> list[MCPXTool]:
    return [MCPXTool(operation) for operation in registry.values()]
