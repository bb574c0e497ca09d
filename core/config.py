# =============================================================================
# core/config.py  -  Runtime Settings from the Environment
# =============================================================================
#
# All knobs live in environment variables (usually a .env file that main.py
# loads with python-dotenv before anything else runs):
#
#   MCP_SESSION_ID    (required)  mcp.run session credential
#   MCP_RUN_URL                   remote tool session endpoint
#   MCP_RUN_TASK_URL              task endpoint used by the engagement workflow
#   AGENT_MODEL                   LiteLLM model string for the agent
#   LOG_LEVEL                     logging level name
#
# OPENAI_API_KEY (or whichever provider key the model needs) is read by
# LiteLLM itself, so it does not appear here.
# =============================================================================

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_MCP_RUN_URL = "https://www.mcp.run/api/mcp"
DEFAULT_MODEL = "openai/gpt-4o-mini"


class ConfigError(RuntimeError):
    """Raised when a required setting is missing or unusable."""


@dataclass(frozen=True)
class Settings:
    mcp_session_id: str
    mcp_run_url: str = DEFAULT_MCP_RUN_URL
    task_url: Optional[str] = None
    model: str = DEFAULT_MODEL
    log_level: str = "INFO"

    @property
    def session_cookie(self) -> str:
        """Cookie header value that authenticates against mcp.run."""
        return f"sessionId={self.mcp_session_id}"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Read Settings from ``environ`` (defaults to ``os.environ``).

    Raises:
        ConfigError: if MCP_SESSION_ID is missing or blank.
    """
    env = os.environ if environ is None else environ

    session_id = env.get("MCP_SESSION_ID", "").strip()
    if not session_id:
        raise ConfigError(
            "MCP_SESSION_ID is not set. Log in to mcp.run, copy your session id "
            "and put it in your .env file."
        )

    return Settings(
        mcp_session_id=session_id,
        mcp_run_url=env.get("MCP_RUN_URL", "").strip() or DEFAULT_MCP_RUN_URL,
        task_url=env.get("MCP_RUN_TASK_URL", "").strip().rstrip("/") or None,
        model=env.get("AGENT_MODEL", "").strip() or DEFAULT_MODEL,
        log_level=env.get("LOG_LEVEL", "").strip().upper() or "INFO",
    )
