"""
Test that extraction tools are properly registered and have correct signatures.
"""

import pytest
from fastmcp.client import Client

from server import mcp

pytestmark = pytest.mark.asyncio


@pytest.fixture
async def mcp_client():
    async with Client(mcp) as client:
        yield client


@pytest.mark.parametrize(
    "tool_name",
    [
        "extract_pipeline_parameters",
        "extract_pipeline_stages",
        "extract_pipeline_tasks",
        "analyze_pipeline_yaml",
        "compute_run_options",
    ],
)
async def test_yaml_text_tools_registered(mcp_client: Client, tool_name: str):
    """Test that text-based tools take yaml_text as a required string."""
    tools = await mcp_client.list_tools()

    tool_names = [tool.name for tool in tools]
    assert tool_name in tool_names, f"{tool_name} tool should be registered"

    tool = next(t for t in tools if t.name == tool_name)
    required_fields = tool.inputSchema.get("required", [])
    properties = tool.inputSchema.get("properties", {})

    assert "yaml_text" in required_fields, f"{tool_name} should require yaml_text"
    assert properties["yaml_text"]["type"] == "string", (
        f"{tool_name} yaml_text should be string type"
    )


async def test_analyze_pipeline_file_registered(mcp_client: Client):
    tools = await mcp_client.list_tools()
    tool = next((t for t in tools if t.name == "analyze_pipeline_file"), None)

    assert tool is not None, "analyze_pipeline_file tool should be registered"
    assert tool.inputSchema.get("required", []) == ["path"]


async def test_compute_run_options_optional_arguments(mcp_client: Client):
    tools = await mcp_client.list_tools()
    tool = next(t for t in tools if t.name == "compute_run_options")

    required_fields = tool.inputSchema.get("required", [])
    for optional in ("branch", "parameter_values", "stages_to_run"):
        assert optional in tool.inputSchema["properties"], f"{optional} should be a parameter"
        assert optional not in required_fields, f"{optional} should be optional"


async def test_supported_syntax_resource_registered(mcp_client: Client):
    resources = await mcp_client.list_resources()

    uris = [str(resource.uri) for resource in resources]
    assert "ado-yaml://user-guide/supported-syntax" in uris
