# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains everything that knows how to talk to the store's
# admin REST API:
#
#   models.py      SearchCriteria and friends, PagedResult
#   criteria.py    SearchCriteria  →  searchCriteria[...] query string
#   pagination.py  walk every page of a filtered collection
#   api_client.py  one authenticated HTTP request/response
#   config.py      connection settings, read once at startup
#   errors.py      the exceptions all of the above raise
#   dates.py       "last month" → date-range filter groups
#   formatters.py  trim raw records for agent consumption
#   analytics.py   revenue / sales aggregation over fetched orders
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP or any agent framework.  The
#   tools/ layer depends on core/, never the other way round.
# =============================================================================
