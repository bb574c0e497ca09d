# =============================================================================
# main.py  -  Entry Point for the mcp.run GitHub Assistant
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py                          # interactive chat
#   uv run python main.py ask "List the open issues in octocat/hello-world"
#   uv run python main.py engage octocat/hello-world --slack-channel "#oss"
#
# WHAT HAPPENS:
#   1. Loads .env and reads the settings (MCP_SESSION_ID is required)
#   2. Opens the mcp.run session and lists its tools
#   3. Wraps every tool as an Operation and hands them to a Google ADK agent
#   4. Either chats with you, answers one question, or runs the contributor
#      engagement workflow
#
# LLM USED:
#   Whatever AGENT_MODEL names (default openai/gpt-4o-mini), via LiteLlm.
#   LiteLLM reads the provider key (e.g. OPENAI_API_KEY) from the environment.
# =============================================================================

import argparse
import asyncio
import sys
from typing import Optional

from dotenv import load_dotenv

# Load environment variables BEFORE anything reads them (LiteLLM reads its
# API key when the model is first used).
load_dotenv()

from agent.github_agent import create_github_agent
from agent.runner import ask, create_runner
from core.config import ConfigError, Settings, load_settings
from tools.logs import configure_logging
from tools.session import open_session
from workflows.contributor_engagement import (
    EngagementTrigger,
    WorkflowError,
    require_task_url,
    run_contributor_engagement,
)


def _print_tool_call(tool_name: str) -> None:
    print(f"  🔧 Calling tool: {tool_name}")


async def chat(settings: Settings) -> None:
    """Interactive loop: type a question, watch the agent call tools."""
    print("=" * 70)
    print("  GITHUB ASSISTANT")
    print("  Powered by Google ADK + mcp.run")
    print("=" * 70)
    print("\n🔧 Connecting to mcp.run...")

    async with open_session(settings) as session:
        agent = await create_github_agent(session, settings)
        runner, session_id = await create_runner(agent)
        print("✅ Agent initialized and ready!\n")
        print("💬 Ask about your repositories (type 'quit' to exit)")
        print("-" * 70)

        while True:
            try:
                user_input = input("\n🧑 You: ").strip()
            except (EOFError, KeyboardInterrupt):
                print("\n\n👋 Goodbye!")
                break

            if user_input.lower() in ("quit", "exit", "q"):
                print("\n👋 Goodbye!")
                break
            if not user_input:
                continue

            print("\n🤖 Agent is thinking...\n")
            answer = await ask(runner, session_id, user_input, on_tool_call=_print_tool_call)
            print("-" * 70)
            if answer:
                print(f"\n🤖 Agent:\n\n{answer}")
            else:
                print("\n⚠️  No response generated. The agent may have encountered an error.")


async def ask_once(settings: Settings, question: str) -> None:
    async with open_session(settings) as session:
        agent = await create_github_agent(session, settings)
        runner, session_id = await create_runner(agent)
        print(await ask(runner, session_id, question, on_tool_call=_print_tool_call))


async def engage(settings: Settings, trigger: EngagementTrigger) -> None:
    require_task_url(settings)
    async with open_session(settings) as session:
        agent = await create_github_agent(session, settings)
        run = await run_contributor_engagement(trigger, agent, settings)

    analysis = run.analysis
    print(f"✅ Engagement task started (run id {run.task_run_id})")
    print(f"   {analysis.repoName}: {len(analysis.newContributors)} new, "
          f"{len(analysis.returningContributors)} returning, "
          f"{len(analysis.inactiveContributors)} inactive contributor(s)")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="GitHub assistant backed by mcp.run tools.")
    commands = parser.add_subparsers(dest="command")

    ask_parser = commands.add_parser("ask", help="Answer one question and exit.")
    ask_parser.add_argument("question")

    engage_parser = commands.add_parser("engage", help="Run the contributor engagement workflow.")
    engage_parser.add_argument("repository", help="owner/repo")
    engage_parser.add_argument("--slack-channel", required=True)

    args = parser.parse_args(argv)
    if args.command == "engage" and args.repository.count("/") != 1:
        parser.error("repository must look like owner/repo")
    return args


def main(argv: Optional[list[str]] = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)

    try:
        settings = load_settings()
    except ConfigError as exc:
        print(f"❌ {exc}", file=sys.stderr)
        return 1
    configure_logging(settings.log_level)

    try:
        if args.command == "ask":
            asyncio.run(ask_once(settings, args.question))
        elif args.command == "engage":
            owner, repo = args.repository.split("/")
            trigger = EngagementTrigger(owner=owner, repo=repo, slack_channel=args.slack_channel)
            asyncio.run(engage(settings, trigger))
        else:
            asyncio.run(chat(settings))
    except (ConfigError, WorkflowError) as exc:
        print(f"❌ {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
