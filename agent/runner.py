# =============================================================================
# agent/runner.py  -  Running the Agent (Runner + Session helpers)
# =============================================================================
#
# ADK CONCEPTS USED:
#   - Runner: manages the agent's execution lifecycle
#   - SessionService: tracks conversation state across turns
#     (InMemorySessionService keeps everything in RAM; fine for a demo)
#   - Content/Part: ADK's message format
#   - Event stream: real-time updates as the agent thinks and calls tools
#
# Both main.py (interactive chat) and the contributor engagement workflow
# talk to the agent through ask(), so the event handling lives in one place.
# =============================================================================

from typing import Callable, Optional

from google.adk.agents import BaseAgent
from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

APP_NAME = "mcpx_github"
USER_ID = "demo_user"


async def create_runner(agent: BaseAgent) -> tuple[Runner, str]:
    """Create a Runner with a fresh in-memory session.

    Returns:
        The runner and the id of the session to talk in.
    """
    session_service = InMemorySessionService()
    runner = Runner(agent=agent, app_name=APP_NAME, session_service=session_service)
    session = await session_service.create_session(app_name=APP_NAME, user_id=USER_ID)
    return runner, session.id


async def ask(
    runner: Runner,
    session_id: str,
    text: str,
    on_tool_call: Optional[Callable[[str], None]] = None,
) -> str:
    """Send one user message and return the agent's final text.

    Args:
        on_tool_call: Called with the tool name each time the agent
            requests a tool (main.py prints these).
    """
    message = types.Content(role="user", parts=[types.Part(text=text)])
    final_text = ""

    async for event in runner.run_async(user_id=USER_ID, session_id=session_id, new_message=message):
        if not (event.content and event.content.parts):
            continue
        for part in event.content.parts:
            if part.function_call and on_tool_call:
                on_tool_call(part.function_call.name)
        if event.is_final_response():
            texts = [part.text for part in event.content.parts if part.text]
            if texts:
                final_text = "".join(texts)

    return final_text
