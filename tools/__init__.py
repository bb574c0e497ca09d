# =============================================================================
# tools/__init__.py
# =============================================================================
# This package connects the agent to the tools hosted on mcp.run.
#
# ARCHITECTURAL ROLE:
#   tools/ is the "translation layer" between a remote, weakly typed tool
#   catalog and the agent framework:
#     session.py   opens the mcp.run session (fastmcp client)
#     mcpx.py      lists the catalog and wraps each tool in an Operation
#     adk_tool.py  exposes Operations to Google ADK
#     logs.py      colour-coded call logging
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT decide which tool to call (that's the agent's job)
#   - They do NOT raise on a failed call; failures come back as CallResults
# =============================================================================
