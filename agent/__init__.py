# =============================================================================
# agent/__init__.py
# =============================================================================
# This package contains the Google ADK agent configuration.
#
# ARCHITECTURAL ROLE:
#   The agent/ layer is the "brain" that orchestrates everything.  It:
#     1. Receives the user's question ("List the open issues in ...")
#     2. Decides which mcp.run tools to call
#     3. Reads their CallResults (including failed ones)
#     4. Answers the user
#
# WHAT THE AGENT IS NOT:
#   - It is NOT the tool adapter (that's tools/mcpx.py)
#   - It does NOT know how tools are transported (that's tools/session.py)
# =============================================================================
