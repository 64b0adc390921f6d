"""
Global pytest configuration.

Loads .env before any tests run so ADO_YAML_* settings apply the same way
under pytest, an IDE runner, or the MCP server.
"""

from pathlib import Path

from dotenv import load_dotenv


def pytest_configure():
    """Load environment variables from the project's .env file, if present."""
    env_file = Path(__file__).parent / ".env"

    if env_file.exists():
        load_dotenv(env_file, override=True)
        print(f"✓ Loaded environment variables from {env_file}")
