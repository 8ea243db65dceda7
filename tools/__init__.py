# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP tool wrappers.
#
# ARCHITECTURAL ROLE:
#   tools/ is the translation layer between the agent protocol and core/.
#   Each tool:
#     1. Turns typed arguments into a SearchCriteria (or a request body)
#     2. Calls core/ for the HTTP round trip(s)
#     3. Reshapes the response into a compact dict
#     4. Converts core failures into {"error": ...} replies
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT encode query strings by hand (core.criteria does)
#   - They do NOT loop over pages (core.pagination does)
#   - They do NOT read configuration (main.py binds a ready client)
#
# TOOL CONTRACT QUALITY:
#   The docstring of each tool is what the agent reads to decide when and
#   how to call it, so every argument is named and described.
# =============================================================================
