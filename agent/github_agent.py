# =============================================================================
# agent/github_agent.py  -  Google ADK Agent wired to mcp.run Tools
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Builds the GitHub assistant: an ADK Agent whose tools are whatever the
#   user's mcp.run session exposes.
#
#   ┌──────────────────────────────────────────────────────────────┐
#   │                     Google ADK Agent                         │
#   │   instructions (prompt.py)   LLM (LiteLlm)   tools (mcp.run) │
#   └──────────────────────────────────────────────────┬───────────┘
#                                                      │ MCPXTool.run_async
#                                                      ▼
#                                     ┌─────────────────────────────┐
#                                     │ tools/mcpx.py  Operation    │
#                                     │   validate → call → result  │
#                                     └──────────────┬──────────────┘
#                                                    ▼
#                                          mcp.run session (remote)
#
# WHY NOT ADK's OWN MCPToolset?
#   MCPToolset passes results through as the server sends them.  Our
#   Operation layer validates arguments locally and turns every failure
#   (network, remote error, empty or malformed reply) into a CallResult the
#   LLM can read, which keeps a long agent loop alive when one tool
#   misbehaves.
# =============================================================================

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm

from agent.prompt import get_github_assistant_prompt
from core.config import Settings
from tools.adk_tool import to_adk_tools
from tools.mcpx import ToolSession, get_mcpx_tools

AGENT_NAME = "github_assistant"


async def create_github_agent(session: ToolSession, settings: Settings) -> Agent:
    """Fetch the session's tool catalog and build the agent around it.

    The catalog is fetched exactly once.  If that fails, the error propagates:
    an agent without tools is not worth starting.
    """
    tools = await get_mcpx_tools(session)

    return Agent(
        name=AGENT_NAME,
        model=LiteLlm(model=settings.model),
        description="GitHub assistant backed by mcp.run tools.",
        instruction=get_github_assistant_prompt(),
        tools=to_adk_tools(tools),
    )
