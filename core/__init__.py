# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains the framework-free half of the project: the data
# models, schema translation, result normalization, contributor-analysis
# models and settings.
#
# CRITICAL ARCHITECTURAL RULE:
#   Nothing in this package imports Google ADK or fastmcp.  You can test every
#   module here without a network, an mcp.run session or an LLM.
# =============================================================================
