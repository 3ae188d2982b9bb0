#!/usr/bin/env python3
"""
Demo script to try the cppgrep MCP tools without an MCP client.
Calls every tool and shows what it returns.

Usage:
  python self_test/demo_mcp.py [file.cpp ...]

If no files are given, a temporary sample source is written and grepped.
"""
import sys
import json
import tempfile
import shutil
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

# Import MCP tools - access underlying functions from FastMCP wrappers
from cppgrep.mcp.server import (
    grep_declarations as grep_declarations_tool,
    list_categories as list_categories_tool,
    list_frontends as list_frontends_tool,
)
from cppgrep.mcp.state import get_state

# Get underlying functions
grep_declarations = grep_declarations_tool.fn
list_categories = list_categories_tool.fn
list_frontends = list_frontends_tool.fn

console = Console()

SAMPLE_SOURCE = '''namespace shop {

struct price_tag {
    double amount;
    const char* currency;
};

class basket {
public:
    explicit basket(int capacity);

    operator bool() const { return _count > 0; }

private:
    int _count;
};

template <typename T>
class shelf {
    T* items;
};

template <typename T>
class shelf<T*> {
    T** items;
};

double total_price(const basket& items, double discount);

template <typename T>
T cheapest(T first, T second)
{
    return first < second ? first : second;
}

}
'''


def write_sample(base_path: Path) -> Path:
    """Write the sample C++ file for the demo."""
    source = base_path / "shop.cpp"
    source.write_text(SAMPLE_SOURCE)
    return source


def print_tool_call(name: str, params: dict = None):
    """Print a tool call header."""
    console.print(f"\n[bold cyan]>>> Calling:[/bold cyan] [yellow]{name}[/yellow]")
    if params:
        console.print(Panel(
            Syntax(json.dumps(params, indent=2), "json", theme="monokai"),
            title="Parameters",
            border_style="dim"
        ))


def print_matches(result: dict):
    """Show grep_declarations output as one table per file."""
    for file_result in result["results"]:
        table = Table(title=file_result["source_path"])
        table.add_column("Position", style="blue")
        table.add_column("Kind", style="magenta")
        table.add_column("Identifier", style="green")
        for entry in file_result["entries"]:
            table.add_row(f"{entry['line']}:{entry['column']}", entry["kind"], entry["identifier"])
        console.print(table)
    for path in result["missing"]:
        console.print(f"[red]missing:[/red] {path}")
    if not result["results"]:
        console.print("[dim]No matches[/dim]")


def run_demo(files):
    """Run the full demo sequence."""

    console.print(Panel.fit(
        "[bold]cppgrep MCP Demo[/bold]\n"
        "Calling every MCP tool with real output",
        border_style="blue"
    ))

    # 1. list_frontends
    console.rule("[bold magenta]1. list_frontends[/bold magenta]")
    print_tool_call("list_frontends")
    result = list_frontends()
    console.print(f"Front ends: {', '.join(result['frontends'])} (default: {result['default']})")
    console.print(f"Extensions: {' '.join(result['extensions'])}")

    # 2. list_categories
    console.rule("[bold magenta]2. list_categories[/bold magenta]")
    print_tool_call("list_categories")
    table = Table(title="Category buckets")
    table.add_column("Bucket", style="cyan")
    table.add_column("Declaration kinds", style="green")
    for bucket, kinds in list_categories()["categories"].items():
        table.add_row(bucket, ", ".join(kinds))
    console.print(table)

    # 3. grep_declarations
    console.rule("[bold magenta]3. grep_declarations[/bold magenta]")
    calls = [
        {"files": files},
        {"files": files, "categories": ["class"]},
        {"files": files, "categories": ["function"]},
        {"files": files, "query": "PRICE", "ignore_case": True},
        {"files": files + ["does_not_exist.cpp"], "categories": ["variable"], "query": "item"},
    ]
    for params in calls:
        print_tool_call("grep_declarations", params)
        print_matches(grep_declarations(**params))

    console.print(Panel.fit(
        "[bold green]Demo Complete![/bold green]\n\n"
        f"grep_declarations ran {get_state().runs} times.",
        border_style="green"
    ))


def main():
    """Main entry point."""
    temp_dir = None

    try:
        if len(sys.argv) > 1:
            files = [str(Path(arg).resolve()) for arg in sys.argv[1:]]
        else:
            temp_dir = tempfile.mkdtemp(prefix="cppgrep_demo_")
            files = [str(write_sample(Path(temp_dir)))]
            console.print(f"[dim]Wrote sample source to: {files[0]}[/dim]")

        run_demo(files)

    except KeyboardInterrupt:
        console.print("\n[yellow]Demo interrupted[/yellow]")
    finally:
        if temp_dir:
            shutil.rmtree(temp_dir)


if __name__ == "__main__":
    main()
