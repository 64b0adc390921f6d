"""
End-to-end tests for the extraction tools through the in-memory MCP client.
"""

import pytest
from fastmcp.client import Client
from fastmcp.exceptions import ToolError

from server import mcp

pytestmark = pytest.mark.asyncio


@pytest.fixture
async def mcp_client():
    """Provides a connected MCP client for tests."""
    async with Client(mcp) as client:
        yield client


async def test_extract_pipeline_parameters(mcp_client: Client, multi_stage_pipeline):
    result = await mcp_client.call_tool(
        "extract_pipeline_parameters", {"yaml_text": multi_stage_pipeline}
    )

    parameters = result.data
    assert isinstance(parameters, list), f"Expected a list but got {type(parameters)}"
    assert parameters[0] == {
        "name": "environment",
        "type": "string",
        "displayName": "Target environment",
        "default": "staging",
        "values": ["staging", "production"],
    }
    assert parameters[1]["default"] is True
    assert parameters[2]["default"] == 3


async def test_extract_pipeline_stages(mcp_client: Client, multi_stage_pipeline):
    result = await mcp_client.call_tool(
        "extract_pipeline_stages", {"yaml_text": multi_stage_pipeline}
    )

    assert result.data == [
        {"name": "Build"},
        {"name": "Test", "dependsOn": ["Build"]},
        {"name": "Deploy", "dependsOn": ["Build", "Test"]},
    ]


async def test_extract_pipeline_tasks(mcp_client: Client, multi_stage_pipeline):
    result = await mcp_client.call_tool(
        "extract_pipeline_tasks", {"yaml_text": multi_stage_pipeline}
    )

    tasks = result.data
    assert len(tasks) == 1
    assert tasks[0]["name"] == "DotNetCoreCLI"
    assert tasks[0]["version"] == "2"
    assert tasks[0]["inputs"]["command"] == "build"


async def test_unstructured_text_returns_empty_results(mcp_client: Client):
    result = await mcp_client.call_tool(
        "analyze_pipeline_yaml", {"yaml_text": "just some text\nno structure here"}
    )

    assert result.data == {"parameters": [], "stages": [], "tasks": []}


async def test_analyze_pipeline_file(mcp_client: Client, pipeline_file):
    result = await mcp_client.call_tool("analyze_pipeline_file", {"path": str(pipeline_file)})

    outline = result.data
    assert outline["path"] == str(pipeline_file)
    assert [p["name"] for p in outline["parameters"]] == ["environment", "runTests", "retries"]
    assert [s["name"] for s in outline["stages"]] == ["Build", "Test", "Deploy"]
    assert len(outline["tasks"]) == 1


async def test_analyze_pipeline_file_missing(mcp_client: Client, tmp_path):
    with pytest.raises(ToolError, match="does not exist"):
        await mcp_client.call_tool("analyze_pipeline_file", {"path": str(tmp_path / "nope.yml")})


async def test_compute_run_options(mcp_client: Client, multi_stage_pipeline):
    result = await mcp_client.call_tool(
        "compute_run_options",
        {
            "yaml_text": multi_stage_pipeline,
            "branch": "refs/heads/main",
            "parameter_values": {"environment": "production", "runTests": False},
            "stages_to_run": ["Build", "Deploy"],
        },
    )

    assert result.data == {
        "branch": "refs/heads/main",
        "templateParameters": {"environment": "production", "runTests": "false", "retries": "3"},
        "stagesToSkip": ["Test"],
    }


async def test_compute_run_options_without_selection(mcp_client: Client):
    result = await mcp_client.call_tool(
        "compute_run_options", {"yaml_text": "stages:\n- stage: Build\n", "branch": "main"}
    )

    assert result.data == {"branch": "main"}
