# tests/test_mcpx.py
"""
Tests for the tool adapter (tools/mcpx.py) against a fake mcp.run session.

Tests verify:
  - one Operation per distinct tool name (last one wins on duplicates)
  - arguments are forwarded exactly as given
  - every failure mode comes back as a CallResult, never as an exception
  - a catalog that can't be listed fails the whole construction
"""
import asyncio

import pytest

from core.models import CallResult, ContentItem
from core.results import NO_RESPONSE_TEXT
from tools.mcpx import Operation, build_registry, get_mcpx_tools

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

LIST_ISSUES = {
    "name": "gh_list_issues",
    "description": "List issues in a repository",
    "inputSchema": {
        "type": "object",
        "properties": {"owner": {"type": "string"}, "repo": {"type": "string"}},
        "required": ["owner", "repo"],
    },
}


class FakeSession:
    """Records calls; answers with ``responder(name, arguments)``."""

    def __init__(self, tools, responder=None):
        self.tools = tools
        self.responder = responder or (lambda name, arguments: {"content": [], "isError": False})
        self.calls = []
        self.list_calls = 0

    async def list_tools(self):
        self.list_calls += 1
        if isinstance(self.tools, Exception):
            raise self.tools
        return self.tools

    async def call_tool(self, name, arguments):
        self.calls.append((name, arguments))
        return self.responder(name, arguments)


def _raise(error):
    def responder(name, arguments):
        raise error
    return responder


def _registry(session):
    return asyncio.run(get_mcpx_tools(session))


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


def test_single_tool_catalog_gives_single_operation():
    session = FakeSession([LIST_ISSUES])
    registry = _registry(session)

    assert list(registry) == ["gh_list_issues"]
    operation = registry["gh_list_issues"]
    assert operation.description == "List issues in a repository"
    assert operation.output_contract is CallResult
    assert session.list_calls == 1


def test_duplicate_names_last_one_wins():
    first = {**LIST_ISSUES, "description": "first"}
    second = {**LIST_ISSUES, "description": "second"}
    registry = _registry(FakeSession([first, {"name": "gh_get_repo"}, second]))

    assert sorted(registry) == ["gh_get_repo", "gh_list_issues"]
    assert registry["gh_list_issues"].description == "second"


def test_missing_description_becomes_empty_string():
    registry = _registry(FakeSession([{"name": "ping", "inputSchema": {"type": "object"}}]))
    assert registry["ping"].description == ""


def test_bad_schema_does_not_block_other_tools():
    broken = {"name": "weird", "inputSchema": {"type": "object", "properties": {"x": {"type": 12}},
                                               "required": "x"}}
    registry = _registry(FakeSession([broken, LIST_ISSUES]))
    assert sorted(registry) == ["gh_list_issues", "weird"]


def test_build_registry_of_nothing_is_empty():
    assert build_registry([]) == {}


# ---------------------------------------------------------------------------
# Catalog failures propagate
# ---------------------------------------------------------------------------


def test_list_failure_propagates():
    with pytest.raises(ConnectionError, match="session expired"):
        _registry(FakeSession(ConnectionError("session expired")))


def test_nameless_tool_fails_the_whole_catalog():
    with pytest.raises(ValueError):
        _registry(FakeSession([LIST_ISSUES, {"description": "no name"}]))


# ---------------------------------------------------------------------------
# invoke(): success paths
# ---------------------------------------------------------------------------


def test_invoke_forwards_exact_arguments():
    session = FakeSession([LIST_ISSUES])
    operation = _registry(session)["gh_list_issues"]

    asyncio.run(operation.invoke({"owner": "a", "repo": "b"}))

    assert session.calls == [("gh_list_issues", {"owner": "a", "repo": "b"})]


def test_invoke_copies_content_in_order():
    response = {
        "content": [
            {"type": "text", "text": "#1 Fix login"},
            {"type": "text", "text": "#2 Add docs"},
            {"type": "image", "text": "", "data": "aGk=", "mimeType": "image/png"},
        ],
        "isError": False,
    }
    operation = _registry(FakeSession([LIST_ISSUES], lambda n, a: response))["gh_list_issues"]

    result = asyncio.run(operation.invoke({"owner": "a", "repo": "b"}))

    assert result.to_dict() == response | {
        "content": [
            {"type": "text", "text": "#1 Fix login", "data": None, "mimeType": None},
            {"type": "text", "text": "#2 Add docs", "data": None, "mimeType": None},
            {"type": "image", "text": "", "data": "aGk=", "mimeType": "image/png"},
        ]
    }


def test_invoke_is_repeatable():
    response = {"content": [{"type": "text", "text": "same"}], "isError": False}
    operation = _registry(FakeSession([LIST_ISSUES], lambda n, a: response))["gh_list_issues"]

    first = asyncio.run(operation.invoke({"owner": "a", "repo": "b"}))
    second = asyncio.run(operation.invoke({"owner": "a", "repo": "b"}))

    assert first == second


def test_remote_error_flag_is_passed_through():
    response = {"content": [{"type": "text", "text": "Not Found"}], "isError": True}
    operation = _registry(FakeSession([LIST_ISSUES], lambda n, a: response))["gh_list_issues"]

    result = asyncio.run(operation.invoke({"owner": "a", "repo": "b"}))

    assert result.is_error is True
    assert result.content == [ContentItem(type="text", text="Not Found")]


# ---------------------------------------------------------------------------
# invoke(): failure paths are contained
# ---------------------------------------------------------------------------


def test_exception_becomes_error_result():
    operation = _registry(FakeSession([LIST_ISSUES], _raise(TimeoutError("Timeout"))))["gh_list_issues"]

    result = asyncio.run(operation.invoke({"owner": "a", "repo": "b"}))

    assert result.to_dict() == {
        "content": [{
            "type": "text",
            "text": "An error occurred while executing gh_list_issues: Timeout.",
            "data": None,
            "mimeType": None,
        }],
        "isError": True,
    }


def test_no_response_becomes_fixed_result():
    operation = _registry(FakeSession([LIST_ISSUES], lambda n, a: None))["gh_list_issues"]

    result = asyncio.run(operation.invoke({"owner": "a", "repo": "b"}))

    assert result.is_error is True
    assert [item.text for item in result.content] == [NO_RESPONSE_TEXT]


def test_malformed_response_becomes_error_result():
    response = {"content": [{"text": "item without a type"}]}
    operation = _registry(FakeSession([LIST_ISSUES], lambda n, a: response))["gh_list_issues"]

    result = asyncio.run(operation.invoke({"owner": "a", "repo": "b"}))

    assert result.is_error is True
    assert "gh_list_issues" in result.content[0].text


def test_concurrent_invocations_are_isolated():
    def responder(name, arguments):
        if arguments["repo"] == "broken":
            raise ConnectionError("reset by peer")
        return {"content": [{"type": "text", "text": arguments["repo"]}], "isError": False}

    operation = _registry(FakeSession([LIST_ISSUES], responder))["gh_list_issues"]
    repos = ["one", "broken", "two", "three"]

    async def run_all():
        return await asyncio.gather(*(operation.invoke({"owner": "a", "repo": r}) for r in repos))

    results = asyncio.run(run_all())

    assert [r.is_error for r in results] == [False, True, False, False]
    assert results[0].content[0].text == "one"
    assert "reset by peer" in results[1].content[0].text


# ---------------------------------------------------------------------------
# execute(): validation first
# ---------------------------------------------------------------------------


def test_execute_rejects_invalid_arguments_without_calling_remote():
    session = FakeSession([LIST_ISSUES])
    operation = _registry(session)["gh_list_issues"]

    result = asyncio.run(operation.execute({"owner": "a"}))

    assert result.is_error is True
    assert result.content[0].text.startswith("An error occurred while executing gh_list_issues:")
    assert session.calls == []


def test_execute_forwards_validated_arguments():
    session = FakeSession([LIST_ISSUES])
    operation = _registry(session)["gh_list_issues"]

    result = asyncio.run(operation.execute({"owner": "a", "repo": "b"}))

    assert result.is_error is False
    assert session.calls == [("gh_list_issues", {"owner": "a", "repo": "b"})]


def test_validate_does_not_invent_defaults():
    tool = {
        "name": "gh_list_prs",
        "inputSchema": {
            "type": "object",
            "properties": {"repo": {"type": "string"}, "per_page": {"type": "integer", "default": 30}},
        },
    }
    operation: Operation = _registry(FakeSession([tool]))["gh_list_prs"]
    assert operation.validate({"repo": "b"}) == {"repo": "b"}
