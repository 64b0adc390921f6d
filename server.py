import logging

from fastmcp import FastMCP

from ado_yaml import resources, tools
from ado_yaml.config import AdoYamlConfig
from ado_yaml.telemetry import get_telemetry_manager, initialize_telemetry, shutdown_telemetry

config = AdoYamlConfig.from_env()

# Configure basic logging
logging.basicConfig(
    level=getattr(logging, config.log_level),
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

mcp: FastMCP = FastMCP(name="ado-yaml", version="0.1.0")

if config.telemetry.enabled and not get_telemetry_manager():
    initialize_telemetry(config.telemetry)

tools.register_extract_tools(mcp, config)
resources.register_mcp_resources(mcp)


def main():
    """Main entry point for the ado-yaml server."""
    logger.info("Starting ado-yaml MCP server")
    try:
        mcp.run()
    finally:
        shutdown_telemetry()


if __name__ == "__main__":  # pragma: no cover
    main()
