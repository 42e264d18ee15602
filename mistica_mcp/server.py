"""
Main file MCP Server Mística.
"""
import json
import logging

from .mcp_instance import mcp
from .config import config
from .metrics import get_metrics
from . import __version__
from . import tools  # noqa: F401  регистрация инструментов

logging.basicConfig(
    level=getattr(logging, config.server.log_level),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def health_check() -> str:
    """Health check endpoint"""
    return json.dumps({
        "status": "healthy",
        "service": "mistica-mcp-server",
        "version": __version__
    })


async def metrics_endpoint() -> str:
    """Returns metrics Prometheus."""
    return get_metrics().decode('utf-8')


mcp.resource("health://check")(health_check)
mcp.resource("metrics://prometheus")(metrics_endpoint)


def main():
    """Start MCP server."""
    logger.info(f"Starting Mística MCP Server v{__version__}")
    logger.info(f"Transport: {config.server.transport}")
    if config.server.transport == "stdio":
        mcp.run()
        return

    logger.info(f"Host: {config.server.host}, Port: {config.server.port}")
    mcp.run(
        transport=config.server.transport,
        host=config.server.host,
        port=config.server.port
    )


if __name__ == "__main__":
    main()
