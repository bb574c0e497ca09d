# =============================================================================
# tools/session.py  -  The mcp.run Session (a fastmcp client)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Connects to the hosted mcp.run session that exposes the user's installed
#   tools (GitHub, Slack, ...).  The session speaks plain MCP, so the client
#   side is just a fastmcp Client over Streamable HTTP, authenticated with
#   the session cookie from MCP_SESSION_ID.
#
# WHY A WRAPPER AROUND fastmcp.Client?
#   tools/mcpx.py only needs two calls: list_tools() and call_tool().  Keeping
#   that surface tiny means the adapter can be tested with a fake session,
#   and a different transport is a change to this file only.
#
#   call_tool() goes through Client.call_tool_mcp(), which returns the raw
#   MCP result.  Client.call_tool() would raise on isError=True, and a remote
#   tool error is something we want to pass to the agent as data.
# =============================================================================

from typing import Any, Optional

from fastmcp import Client
from fastmcp.client.transports import StreamableHttpTransport
from mcp import types

from core.config import Settings


class MCPXSession:
    """An open connection to an mcp.run session.

    Use it as an async context manager::

        async with open_session(settings) as session:
            tools = await get_mcpx_tools(session)
    """

    def __init__(self, client: Client):
        self._client = client

    async def __aenter__(self) -> "MCPXSession":
        await self._client.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self._client.__aexit__(exc_type, exc, tb)

    async def list_tools(self) -> list[types.Tool]:
        return await self._client.list_tools()

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> Optional[types.CallToolResult]:
        return await self._client.call_tool_mcp(name=name, arguments=arguments)


def open_session(settings: Settings) -> MCPXSession:
    """Build (but don't connect) a session for the configured mcp.run endpoint."""
    transport = StreamableHttpTransport(
        settings.mcp_run_url,
        headers={"Cookie": settings.session_cookie},
    )
    return MCPXSession(Client(transport))
