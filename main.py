# =============================================================================
# main.py  —  Entry Point for the Magento Admin MCP Server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py          (or the magento-mcp-server script)
#
# WHAT HAPPENS:
#   1. .env is loaded into the process environment
#   2. MagentoConfig is read from the environment, once
#   3. One MagentoClient is created from that config and bound to the tools
#   4. The FastMCP server speaks MCP over stdio until the client disconnects
#   5. The HTTP client is closed on the way out
#
# An MCP host (Claude Desktop, an ADK agent, ...) starts this file as a
# subprocess and talks to it over stdin/stdout.  Logs go to stderr.
# =============================================================================

import asyncio
import logging

from dotenv import load_dotenv

from core.api_client import MagentoClient
from core.config import MagentoConfig
from tools.mcp_server import bind_client, mcp


async def serve(config: MagentoConfig) -> None:
    """Run the MCP server over stdio with a client built from ``config``."""
    async with MagentoClient(config) as client:
        bind_client(client)
        logging.info("Serving Magento admin tools for %s", config.base_url or "<unset base URL>")
        await mcp.run_async(transport="stdio")


def main() -> None:
    # Must happen BEFORE MagentoConfig.from_env() reads the environment.
    load_dotenv()

    config = MagentoConfig.from_env()
    logging.getLogger().setLevel(config.log_level)

    try:
        asyncio.run(serve(config))
    except KeyboardInterrupt:
        logging.info("Shutting down")


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    main()
