# =============================================================================
# tools/logs.py  -  Colour-coded Tool Call Logging
# =============================================================================
#
# Every tool call the agent makes is logged so you can follow the agent loop
# in the terminal:
#     - CYAN   for outgoing calls (tool name + arguments)
#     - YELLOW for intermediate status messages
#     - GREEN  for successful results, RED for failed ones
#
# Logs go to STDERR so they never mix with the agent's answer on STDOUT.
# =============================================================================

import json
import logging
import sys
from typing import Any

from core.models import CallResult

_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RED = "\033[31m"
_RESET = "\033[0m"

logger = logging.getLogger("mcpx")


def configure_logging(level: str = "INFO") -> None:
    """Root logging setup, called once from main.py."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
    # LiteLLM is very chatty at INFO.
    logging.getLogger("LiteLLM").setLevel(logging.WARNING)


def log_request(tool_name: str, arguments: Any) -> None:
    logger.info(f"{_CYAN}{tool_name} called with: {json.dumps(arguments, default=str)}{_RESET}")


def log_status(message: str) -> None:
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def log_result(tool_name: str, result: CallResult) -> CallResult:
    """Log the outcome of a call, then return the result unchanged."""
    if result.is_error:
        first = result.content[0].text if result.content else ""
        logger.warning(f"{_RED}  ← {tool_name} failed: {first}{_RESET}")
    else:
        logger.info(f"{_GREEN}  ← {tool_name} succeeded ({len(result.content)} content item(s)){_RESET}")
    return result
