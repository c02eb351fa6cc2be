# tests/test_server.py
import pytest

from fastmcp import Client

from archscribe.classifier import ChangeScorer
from archscribe.mcp_server.server import MCPServerApp


RECORD_ANALYSIS = {
    "affectedFiles": ["src/core/bus.ts", "src/core/events.ts", "src/app.ts"],
    "affectedConcepts": ["EventBus", "Subscriber"],
    "scope": "project",
    "patternChanges": ["Observer"],
    "dependentsCount": 2,
    "breakingChanges": False,
    "configurationChanges": False,
}

SKIP_ANALYSIS = {
    "affectedFiles": ["src/utils/fmt.ts"],
    "affectedConcepts": [],
    "scope": "file",
    "patternChanges": [],
    "dependentsCount": 0,
    "breakingChanges": False,
    "configurationChanges": False,
}


def _data(result):
    return getattr(result, "data", None) or getattr(result, "structured", None) \
           or getattr(result, "structured_content", None)


@pytest.fixture
def mcp_server():
    """Create and return a FastMCP server instance for testing."""
    app = MCPServerApp(mcp_server_name="test-archscribe")
    return app.mcp  # FastMCP Instance


@pytest.mark.asyncio
async def test_tools_registered(mcp_server):
    async with Client(mcp_server) as client:
        tools = await client.list_tools()
        names = [t.name for t in tools]
        for tool_name in ("assess_change", "quick_check", "check_files", "explain_change"):
            assert tool_name in names


# ----------- assess_change ----------- #
@pytest.mark.asyncio
async def test_assess_change_record_includes_context(mcp_server):
    async with Client(mcp_server) as client:
        result = await client.call_tool("assess_change", {"analysis": RECORD_ANALYSIS})
        data = _data(result)

        assert data is not None, "No data returned from tool call"
        assert data.get("ok") is True
        results = data["results"]
        assert results["recommendation"] == "record"
        assert results["is_architectural"] is True
        assert "Project-wide scope detected" in results["reasons"]
        assert results["decision_context"]["decision_context"] == "Adopted Observer pattern(s)"
        assert results["decision_context"]["suggested_alternatives"] == {}


@pytest.mark.asyncio
async def test_assess_change_skip_has_no_context(mcp_server):
    async with Client(mcp_server) as client:
        result = await client.call_tool("assess_change", {"analysis": SKIP_ANALYSIS})
        data = _data(result)

        assert data.get("ok") is True
        assert data["results"]["recommendation"] == "skip"
        assert data["results"]["confidence"] == 0.0
        assert "decision_context" not in data["results"]


@pytest.mark.asyncio
async def test_assess_change_rejects_malformed_input(mcp_server):
    async with Client(mcp_server) as client:
        result = await client.call_tool(
            "assess_change",
            {"analysis": {**SKIP_ANALYSIS, "dependentsCount": -1}},
        )
        data = _data(result)

        assert data.get("ok") is False
        assert "dependentsCount" in data.get("error", "")


@pytest.mark.asyncio
async def test_assess_change_rejects_string_typed_facts(mcp_server):
    async with Client(mcp_server) as client:
        result = await client.call_tool(
            "assess_change",
            {"analysis": {**SKIP_ANALYSIS, "dependentsCount": "7", "breakingChanges": "yes"}},
        )
        data = _data(result)

        assert data.get("ok") is False
        assert "dependentsCount" in data.get("error", "")


@pytest.mark.asyncio
async def test_quick_check_rejects_int_boolean(mcp_server):
    async with Client(mcp_server) as client:
        result = await client.call_tool("quick_check", {"analysis": {"breakingChanges": 1}})
        data = _data(result)

        assert data.get("ok") is False


@pytest.mark.asyncio
async def test_assess_change_uses_injected_scorer():
    app = MCPServerApp(
        mcp_server_name="strict",
        scorer=ChangeScorer(record_threshold=0.9, project_decision_threshold=0.5),
    )
    async with Client(app.mcp) as client:
        result = await client.call_tool("assess_change", {"analysis": RECORD_ANALYSIS})
        data = _data(result)

        # files 0.30 + project 0.30 + patterns 0.25 = 0.85
        assert data["results"]["recommendation"] == "use_project_decision"


# ----------- quick_check ----------- #
@pytest.mark.asyncio
async def test_quick_check_partial_scope(mcp_server):
    async with Client(mcp_server) as client:
        result = await client.call_tool("quick_check", {"analysis": {"scope": "project"}})
        data = _data(result)

        assert data.get("ok") is True
        assert data["results"]["likely_architectural"] is True


@pytest.mark.asyncio
async def test_quick_check_empty(mcp_server):
    async with Client(mcp_server) as client:
        result = await client.call_tool("quick_check", {"analysis": {}})
        data = _data(result)

        assert data["results"]["likely_architectural"] is False


# ----------- check_files ----------- #
@pytest.mark.asyncio
async def test_check_files(mcp_server):
    async with Client(mcp_server) as client:
        result = await client.call_tool(
            "check_files",
            {"file_paths": ["services/api/package.json", "src/utils/fmt.ts"]},
        )
        data = _data(result)

        assert data.get("ok") is True
        first, second = data["results"]
        assert first["significant"] is True
        assert first["categories"] == ["configuration"]
        assert second["significant"] is False
        assert second["categories"] == []


@pytest.mark.asyncio
async def test_check_files_requires_paths(mcp_server):
    async with Client(mcp_server) as client:
        result = await client.call_tool("check_files", {"file_paths": []})
        data = _data(result)

        assert data.get("ok") is False


# ----------- explain_change ----------- #
@pytest.mark.asyncio
async def test_explain_change(mcp_server):
    async with Client(mcp_server) as client:
        result = await client.call_tool(
            "explain_change",
            {"analysis": {**SKIP_ANALYSIS, "breakingChanges": True, "dependentsCount": 6}},
        )
        data = _data(result)

        assert data.get("ok") is True
        assert data["results"]["decision_context"] == "Breaking change introduced"
        assert data["results"]["suggested_rationale"] == "Change affects 6 dependent files"
