# =============================================================================
# workflows/contributor_engagement.py  -  Analyze Contributors, Alert on Slack
# =============================================================================
#
# WHAT THIS WORKFLOW DOES:
#
#   trigger {owner, repo, slack_channel}
#        │
#        ▼
#   STEP 1  analyze_contributors      the GitHub agent reads PRs/issues via
#        │                            mcp.run tools and answers with JSON
#        ▼                            (validated into ContributorAnalysis)
#   STEP 2  trigger_engagement_task   starts the mcp.run "send GitHub alert"
#        │                            task, which posts the engagement
#        ▼                            suggestions to Slack
#   task run id
#
# WHY A TASK INSTEAD OF A SLACK TOOL CALL?
#   The Slack message is formatted and sent by a task configured on mcp.run.
#   The workflow only starts a run of it (PUT {task_url}/{run_id}); the task
#   owns the Slack credentials and the message template.
#
# FAILURES:
#   Unlike tool calls, workflow steps DO raise.  A half-finished workflow has
#   no sensible "result" to hand back, so the caller (main.py) reports the
#   error and exits.
# =============================================================================

import logging
import uuid
from dataclasses import dataclass
from typing import Optional

import httpx
from google.adk.agents import BaseAgent
from pydantic import BaseModel

from agent.prompt import build_analysis_request
from agent.runner import ask, create_runner
from core.config import ConfigError, Settings
from core.contributors import (
    AnalysisParseError,
    ContributorAnalysis,
    build_task_parameters,
    parse_analysis,
)
from tools.logs import log_status

logger = logging.getLogger(__name__)


class WorkflowError(RuntimeError):
    """A workflow step could not produce its output."""


class EngagementTaskError(WorkflowError):
    """mcp.run refused to start the engagement task."""


class EngagementTrigger(BaseModel):
    """Input of the workflow."""

    owner: str
    repo: str
    slack_channel: str


@dataclass(frozen=True)
class EngagementRun:
    """Output of the workflow."""

    analysis: ContributorAnalysis
    task_run_id: str


def require_task_url(settings: Settings) -> str:
    """The configured task URL, or ConfigError if MCP_RUN_TASK_URL is unset."""
    if not settings.task_url:
        raise ConfigError("MCP_RUN_TASK_URL is not set; cannot trigger the engagement task.")
    return settings.task_url


# -----------------------------------------------------------------------------
# STEP 1: analyze contributors
# -----------------------------------------------------------------------------
async def analyze_contributors(agent: BaseAgent, owner: str, repo: str) -> ContributorAnalysis:
    """Ask the GitHub agent for a structured contributor analysis.

    Raises:
        WorkflowError: if the agent's answer is empty or not a valid analysis.
    """
    runner, session_id = await create_runner(agent)
    answer = await ask(runner, session_id, build_analysis_request(owner, repo))
    if not answer:
        raise WorkflowError(f"Agent returned no analysis for {owner}/{repo}")

    try:
        analysis = parse_analysis(answer)
    except AnalysisParseError as exc:
        raise WorkflowError(str(exc)) from exc

    logger.info(
        "Analysis for %s: %d new, %d returning, %d inactive contributor(s)",
        analysis.repoName,
        len(analysis.newContributors),
        len(analysis.returningContributors),
        len(analysis.inactiveContributors),
    )
    return analysis


# -----------------------------------------------------------------------------
# STEP 2: trigger the Slack engagement task
# -----------------------------------------------------------------------------
async def trigger_engagement_task(
    analysis: ContributorAnalysis,
    slack_channel: str,
    settings: Settings,
    client: Optional[httpx.AsyncClient] = None,
) -> str:
    """Start one run of the mcp.run engagement task.

    Args:
        client: HTTP client to use; a short-lived one is created if omitted.

    Returns:
        The id of the task run that was started.

    Raises:
        ConfigError: if MCP_RUN_TASK_URL is not configured.
        EngagementTaskError: if mcp.run answers with a non-2xx status.
    """
    task_url = require_task_url(settings)

    run_id = str(uuid.uuid4())
    url = f"{task_url}/{run_id}"
    body = {"parameters": build_task_parameters(analysis, slack_channel)}
    headers = {"Cookie": settings.session_cookie}

    owns_client = client is None
    client = client or httpx.AsyncClient(timeout=30)
    try:
        response = await client.put(url, json=body, headers=headers)
    finally:
        if owns_client:
            await client.aclose()

    if not response.is_success:
        raise EngagementTaskError(f"Failed to trigger engagement task: {response.text}")

    logger.info("Engagement task run %s started for %s", run_id, analysis.repoName)
    return run_id


async def run_contributor_engagement(
    trigger: EngagementTrigger,
    agent: BaseAgent,
    settings: Settings,
    client: Optional[httpx.AsyncClient] = None,
) -> EngagementRun:
    """Run both steps in order.

    The task URL is checked before step 1, so a missing MCP_RUN_TASK_URL
    does not cost a full agent analysis.
    """
    require_task_url(settings)
    log_status(f"Analyzing contributors of {trigger.owner}/{trigger.repo}")
    analysis = await analyze_contributors(agent, trigger.owner, trigger.repo)
    log_status(f"Starting the engagement task for {trigger.slack_channel}")
    task_run_id = await trigger_engagement_task(analysis, trigger.slack_channel, settings, client)
    return EngagementRun(analysis=analysis, task_run_id=task_run_id)
