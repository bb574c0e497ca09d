# =============================================================================
# workflows/__init__.py
# =============================================================================
# Multi-step workflows built on top of the GitHub agent.  Each step is a plain
# async function; a workflow chains them and passes one step's output to the
# next.
# =============================================================================
