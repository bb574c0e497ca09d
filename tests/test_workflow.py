# tests/test_workflow.py
"""
Tests for the contributor engagement workflow
(workflows/contributor_engagement.py).

The agent is replaced by a canned answer (monkeypatched ask/create_runner)
and mcp.run's task endpoint by an httpx.MockTransport.
"""
import asyncio
import json
import uuid

import httpx
import pytest

import workflows.contributor_engagement as engagement
from core.config import ConfigError, Settings
from core.contributors import ContributorAnalysis
from workflows.contributor_engagement import (
    EngagementTaskError,
    EngagementTrigger,
    WorkflowError,
    analyze_contributors,
    run_contributor_engagement,
    trigger_engagement_task,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

TASK_URL = "https://www.mcp.run/api/runs/someone/profile/send-github-alert"
SETTINGS = Settings(mcp_session_id="sess-1", task_url=TASK_URL)
ANALYSIS_JSON = json.dumps({
    "repoName": "octocat/hello-world",
    "newContributors": [{"login": "mona", "firstPrDate": "2026-10-01", "prCount": 1}],
})


def _client(status=200, body="ok", seen=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status, text=body)
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def canned_agent(monkeypatch):
    """Make the agent answer with whatever the test puts in answers[0]."""
    answers = [ANALYSIS_JSON]
    prompts = []

    async def fake_create_runner(agent):
        return object(), "session-1"

    async def fake_ask(runner, session_id, text, on_tool_call=None):
        prompts.append(text)
        return answers[0]

    monkeypatch.setattr(engagement, "create_runner", fake_create_runner)
    monkeypatch.setattr(engagement, "ask", fake_ask)
    return answers, prompts


# ---------------------------------------------------------------------------
# Step 1
# ---------------------------------------------------------------------------


def test_analyze_contributors_parses_agent_answer(canned_agent):
    _, prompts = canned_agent
    analysis = asyncio.run(analyze_contributors(object(), "octocat", "hello-world"))

    assert analysis.newContributors[0].login == "mona"
    assert "octocat/hello-world" in prompts[0]


@pytest.mark.parametrize("answer", ["", "Sorry, I can't do that."])
def test_analyze_contributors_rejects_unusable_answer(canned_agent, answer):
    answers, _ = canned_agent
    answers[0] = answer
    with pytest.raises(WorkflowError):
        asyncio.run(analyze_contributors(object(), "octocat", "hello-world"))


# ---------------------------------------------------------------------------
# Step 2
# ---------------------------------------------------------------------------


def test_trigger_puts_parameters_with_session_cookie():
    seen = []
    analysis = ContributorAnalysis.model_validate_json(ANALYSIS_JSON)

    async def scenario():
        async with _client(seen=seen) as client:
            return await trigger_engagement_task(analysis, "#oss", SETTINGS, client)

    run_id = asyncio.run(scenario())

    request = seen[0]
    assert request.method == "PUT"
    assert str(request.url) == f"{TASK_URL}/{run_id}"
    assert uuid.UUID(run_id).version == 4
    assert request.headers["Cookie"] == "sessionId=sess-1"

    parameters = json.loads(request.content)["parameters"]
    assert parameters["repoName"] == "octocat/hello-world"
    assert parameters["slackChannel"] == "#oss"
    assert json.loads(parameters["newContributors"])[0]["login"] == "mona"


def test_trigger_failure_raises_with_response_text():
    analysis = ContributorAnalysis(repoName="a/b")

    async def scenario():
        async with _client(status=403, body="forbidden") as client:
            return await trigger_engagement_task(analysis, "#oss", SETTINGS, client)

    with pytest.raises(EngagementTaskError, match="forbidden"):
        asyncio.run(scenario())


def test_trigger_requires_task_url():
    settings = Settings(mcp_session_id="sess-1")
    with pytest.raises(ConfigError):
        asyncio.run(trigger_engagement_task(ContributorAnalysis(repoName="a/b"), "#oss", settings))


# ---------------------------------------------------------------------------
# Whole workflow
# ---------------------------------------------------------------------------


def test_workflow_chains_both_steps(canned_agent):
    seen = []
    trigger = EngagementTrigger(owner="octocat", repo="hello-world", slack_channel="#oss")

    async def scenario():
        async with _client(seen=seen) as client:
            return await run_contributor_engagement(trigger, object(), SETTINGS, client)

    run = asyncio.run(scenario())

    assert run.analysis.repoName == "octocat/hello-world"
    assert str(seen[0].url).endswith(run.task_run_id)


def test_workflow_checks_task_url_before_asking_the_agent(canned_agent):
    _, prompts = canned_agent
    trigger = EngagementTrigger(owner="octocat", repo="hello-world", slack_channel="#oss")

    with pytest.raises(ConfigError, match="MCP_RUN_TASK_URL"):
        asyncio.run(run_contributor_engagement(trigger, object(), Settings(mcp_session_id="sess-1")))

    assert prompts == []


def test_engage_command_fails_before_opening_the_session(monkeypatch):
    import main

    opened = []
    monkeypatch.setattr(main, "open_session", lambda settings: opened.append(settings))
    trigger = EngagementTrigger(owner="octocat", repo="hello-world", slack_channel="#oss")

    with pytest.raises(ConfigError):
        asyncio.run(main.engage(Settings(mcp_session_id="sess-1"), trigger))

    assert opened == []
