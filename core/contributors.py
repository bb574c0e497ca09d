# =============================================================================
# core/contributors.py  -  Contributor Engagement Data
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Defines the structured result of the "analyze contributors" workflow step
#   and the two pure transformations around it:
#
#     parse_analysis()          LLM text  ->  ContributorAnalysis
#     build_task_parameters()   ContributorAnalysis  ->  task run parameters
#
# WHY PYDANTIC HERE (AND DATACLASSES IN core/models.py)?
#   This data comes out of an LLM.  It has to be VALIDATED, not just carried
#   around, and pydantic turns "almost the right JSON" into either a clean
#   object or a precise error message.
# =============================================================================

import json
import re
from typing import Any

from pydantic import BaseModel, Field, ValidationError


class NewContributor(BaseModel):
    """Someone whose first PR landed in the last 30 days."""

    login: str
    firstPrDate: str
    prCount: int
    prTypes: list[str] = Field(default_factory=list)      # "bug fix", "docs", ...
    expertise: list[str] = Field(default_factory=list)


class ReturningContributor(BaseModel):
    """A regular who is still actively contributing."""

    login: str
    lastActive: str
    totalPrs: int
    recentPrs: int
    topAreas: list[str] = Field(default_factory=list)


class InactiveContributor(BaseModel):
    """Previously active, nothing in the last 90 days."""

    login: str
    lastActive: str
    historicalImpact: str
    expertise: list[str] = Field(default_factory=list)


class ContributorAnalysis(BaseModel):
    """Output of the analyze step, input of the notification step."""

    repoName: str
    newContributors: list[NewContributor] = Field(default_factory=list)
    returningContributors: list[ReturningContributor] = Field(default_factory=list)
    inactiveContributors: list[InactiveContributor] = Field(default_factory=list)


class AnalysisParseError(ValueError):
    """The agent's answer could not be read as a ContributorAnalysis."""


# Models like to wrap JSON in ```json fences even when told not to.
_FENCE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL)


def extract_json(text: str) -> str:
    """Pull the JSON object out of an LLM answer."""
    fenced = _FENCE.search(text)
    if fenced:
        return fenced.group(1).strip()

    start, end = text.find("{"), text.rfind("}")
    if start != -1 and end > start:
        return text[start:end + 1]
    return text.strip()


def parse_analysis(text: str) -> ContributorAnalysis:
    """Validate the agent's final answer.

    Raises:
        AnalysisParseError: if the answer holds no valid analysis.
    """
    try:
        return ContributorAnalysis.model_validate_json(extract_json(text))
    except ValidationError as exc:
        raise AnalysisParseError(f"Agent returned an unusable analysis: {exc}") from exc


def build_task_parameters(analysis: ContributorAnalysis, slack_channel: str) -> dict[str, Any]:
    """Parameters for the mcp.run "send GitHub alert" task.

    Task parameters are flat strings, so the contributor lists travel as
    JSON-encoded strings.
    """
    dumped = analysis.model_dump()
    return {
        "repoName": analysis.repoName,
        "newContributors": json.dumps(dumped["newContributors"]),
        "returningContributors": json.dumps(dumped["returningContributors"]),
        "inactiveContributors": json.dumps(dumped["inactiveContributors"]),
        "slackChannel": slack_channel,
    }
