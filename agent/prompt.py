# =============================================================================
# agent/prompt.py  -  System Prompts for the GitHub Assistant
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Holds the text that shapes the agent's behavior:
#     - get_github_assistant_prompt()  the agent's system instructions
#     - build_analysis_request()       the user message of the contributor
#                                      engagement workflow
#
# CONTEXT BUDGET RULES:
#   mcp.run tools return raw GitHub API data.  A single "list pull requests"
#   call can be tens of thousands of tokens.  The rules section below keeps
#   the agent from drowning in its own tool output: small pages, no
#   pagination unless asked, few tools per answer.
# =============================================================================

import json
from datetime import date

from core.contributors import ContributorAnalysis


def get_github_assistant_prompt() -> str:
    """Build the system prompt with today's date injected.

    Contributor analysis talks about "the last 30 days"; without the real
    date the model falls back to dates from its training data.
    """
    today = date.today().isoformat()

    return f"""You are a helpful GitHub assistant that can help users with repository
management tasks.

TODAY'S DATE: {today}

You can:
  • List and create issues
  • Get repository details and contributors
  • Create and update files
  • Handle pull requests

Always provide clear explanations of the actions you take.

═══════════════════════════════════════════════════════════════════════
RULES
═══════════════════════════════════════════════════════════════════════
  • Be mindful of your context window limits.
  • Tools can easily overload you with information.
  • Use only what you need.
  • Limit page sizes to 10.
  • Don't paginate unless the user asks for it.
  • Don't use more than 3 tools in a single response, unless the user
    asks for it.
  • If a tool result has "isError": true, read its text, then either try
    again with different arguments or tell the user what went wrong.
"""


def build_analysis_request(owner: str, repo: str) -> str:
    """User message for the "analyze contributors" workflow step."""
    schema = json.dumps(ContributorAnalysis.model_json_schema(), indent=2)

    return f"""Analyze contributor engagement patterns for {owner}/{repo}.

Focus on:
  1. New contributors from the last 30 days - their first PR date, number of
     PRs, and types of contributions
  2. Regular contributors who are actively contributing - their recent
     activity and areas of expertise
  3. Previously active contributors who haven't contributed in the last 90
     days

For each contributor, analyze their PRs and issues to infer their technical
interests and expertise.  Categorize contributions into types (bug fixes,
features, documentation, etc.).

Answer with ONE JSON object and nothing else, matching this JSON Schema:

{schema}
"""
