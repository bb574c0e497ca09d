# =============================================================================
# core/results.py  -  Normalizing Remote Responses into CallResults
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns whatever the remote session hands back into a CallResult.  There
#   are exactly three outcomes, and each has one function here:
#
#     normalize_response()  ->  the remote tool answered
#     no_response_result()  ->  the remote call returned nothing at all
#     error_result()        ->  something blew up along the way
#
# WHY PURE FUNCTIONS?
#   The operation wrapper in tools/mcpx.py does the I/O and the try/except.
#   Everything here can be tested without a network, a session or an agent.
# =============================================================================

from typing import Any

from core.models import CallResult, ContentItem, read_field

NO_RESPONSE_TEXT = "No response received from tool"


def no_response_result() -> CallResult:
    """The fixed result for a call that resolved to nothing."""
    return CallResult(
        content=[ContentItem(type="text", text=NO_RESPONSE_TEXT)],
        is_error=True,
    )


def describe_error(error: BaseException) -> str:
    """Human-readable message for an exception.

    Some exceptions (``TimeoutError()``, ``CancelledError()``) stringify to an
    empty string; the class name is more useful to the agent than nothing.
    """
    return str(error) or type(error).__name__


def error_result(tool_name: str, error: BaseException) -> CallResult:
    """Wrap a failure into a CallResult the agent can read."""
    message = f"An error occurred while executing {tool_name}: {describe_error(error)}."
    return CallResult(
        content=[ContentItem(type="text", text=message)],
        is_error=True,
    )


def normalize_item(item: Any) -> ContentItem:
    """Copy one remote content item into a ContentItem.

    Embedded resources keep their text on ``item.resource``; it is lifted up
    so the agent sees it in the same place as plain text.
    """
    item_type = read_field(item, "type")
    if not isinstance(item_type, str):
        raise ValueError(f"Content item has no type: {item!r}")

    text = read_field(item, "text")
    if text is None:
        resource = read_field(item, "resource")
        if resource is not None:
            text = read_field(resource, "text")

    return ContentItem(
        type=item_type,
        text="" if text is None else str(text),
        data=read_field(item, "data"),
        mime_type=read_field(item, "mimeType"),
    )


def normalize_response(response: Any) -> CallResult:
    """Map a remote call response onto the CallResult contract.

    Order and length of ``content`` are preserved; ``isError`` is passed
    through untouched (it may be None).
    """
    content = read_field(response, "content")
    items = [normalize_item(item) for item in content] if content else []
    return CallResult(content=items, is_error=read_field(response, "isError"))
