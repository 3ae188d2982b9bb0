"""
Test MCP tools by calling decorated functions directly.
This simulates what an MCP client does, without the protocol overhead.

Note: FastMCP's @mcp.tool decorator wraps functions into FunctionTool objects.
We access the underlying function via the .fn attribute.
"""
import pytest
from fastmcp.exceptions import ToolError
from cppgrep.mcp.server import (
    grep_declarations as grep_declarations_tool,
    list_categories as list_categories_tool,
    list_frontends as list_frontends_tool,
)
from cppgrep.mcp.state import get_state

# Access underlying functions from FastMCP FunctionTool wrappers
grep_declarations = grep_declarations_tool.fn
list_categories = list_categories_tool.fn
list_frontends = list_frontends_tool.fn


class TestListCategories:
    """Test the list_categories tool - no state required."""

    def test_four_buckets(self):
        result = list_categories()

        assert list(result["categories"]) == ["class", "struct", "function", "variable"]

    def test_class_bucket_contains_templates(self):
        result = list_categories()

        assert result["categories"]["class"] == [
            "class_decl",
            "class_template",
            "class_template_partial_specialization",
        ]

    def test_every_kind_listed_once(self):
        result = list_categories()
        kinds = [kind for bucket in result["categories"].values() for kind in bucket]

        assert len(kinds) == 10
        assert len(set(kinds)) == 10


class TestListFrontends:
    """Test the list_frontends tool - no state required."""

    def test_returns_frontends_and_extensions(self):
        result = list_frontends()

        assert result["frontends"] == ["treesitter", "clang"]
        assert result["default"] == "treesitter"
        assert ".cpp" in result["extensions"]
        assert ".hpp" in result["extensions"]

    def test_default_follows_environment(self, monkeypatch):
        from cppgrep.config import reset_config

        monkeypatch.setenv("CPPGREP_FRONTEND", "clang")
        reset_config()

        assert list_frontends()["default"] == "clang"


class TestGrepDeclarations:
    """Test the grep_declarations tool."""

    def test_query(self, scenario_cpp):
        result = grep_declarations(files=[str(scenario_cpp)], query="person")

        assert result["missing"] == []
        assert result["total_entries"] == 2
        entries = result["results"][0]["entries"]
        assert [(e["kind"], e["identifier"]) for e in entries] == [
            ("struct_decl", "person_info"),
            ("class_decl", "person"),
        ]
        assert (entries[0]["line"], entries[0]["column"]) == (1, 8)

    def test_categories(self, scenario_cpp):
        result = grep_declarations(files=[str(scenario_cpp)], categories=["struct"])

        assert [e["identifier"] for e in result["results"][0]["entries"]] == ["person_info", "collection"]

    def test_ignore_case(self, scenario_cpp):
        result = grep_declarations(files=[str(scenario_cpp)], query="PEOPLE", ignore_case=True)

        assert [e["identifier"] for e in result["results"][0]["entries"]] == ["people"]

    def test_no_match(self, scenario_cpp):
        result = grep_declarations(files=[str(scenario_cpp)], query="nobody")

        assert result == {"results": [], "missing": [], "total_entries": 0}

    def test_missing_files_reported(self, scenario_cpp, tmp_path):
        ghost = str(tmp_path / "ghost.cpp")

        result = grep_declarations(files=[ghost, str(scenario_cpp)], query="people")

        assert result["missing"] == [ghost]
        assert [r["source_path"] for r in result["results"]] == [str(scenario_cpp)]

    def test_results_in_file_order(self, scenario_cpp, kinds_cpp):
        result = grep_declarations(files=[str(kinds_cpp), str(scenario_cpp)], categories=["struct"])

        assert [r["source_path"] for r in result["results"]] == [str(kinds_cpp), str(scenario_cpp)]

    def test_invalid_category(self, scenario_cpp):
        with pytest.raises(ToolError, match="Invalid CategoryGroup"):
            grep_declarations(files=[str(scenario_cpp)], categories=["enum"])

    def test_invalid_frontend(self, scenario_cpp):
        with pytest.raises(ToolError, match="Unknown front end"):
            grep_declarations(files=[str(scenario_cpp)], frontend="gcc")

    def test_failed_call_does_not_count(self, scenario_cpp):
        with pytest.raises(ToolError):
            grep_declarations(files=[str(scenario_cpp)], categories=["enum"])

        assert get_state().runs == 0
