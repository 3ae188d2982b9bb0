"""
Command line interface for cppgrep.

Usage:
    cppgrep [--class] [--struct] [--function] [--variable]
            [-q QUERY] [-i] [--frontend {treesitter,clang}] [--json] FILE...

Each file with at least one match prints its absolute path followed by one
`line:column identifier` line per match. Missing files are reported and
skipped.
"""

import argparse
import json
import logging
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import List, Optional, Sequence

from rich.console import Console
from rich.text import Text

from cppgrep.config import get_config
from cppgrep.core.exceptions import ConfigurationError, FrontEndError, UsageError
from cppgrep.core.models import CategoryGroup, FilterSpec, GrepRequest, GrepResult, QuerySpec
from cppgrep.grep.driver import grep_all
from cppgrep.parsers import FRONTEND_NAMES, get_frontend

logger = logging.getLogger(__name__)


class ResultType(IntEnum):
    """Process exit codes."""
    SUCCESS = 0
    PARSE_ARGS_FAILURE = 1
    FRONTEND_FAILURE = 3


@dataclass
class CliOptions:
    """Parsed command line."""
    files: List[str]
    groups: List[CategoryGroup] = field(default_factory=list)
    template_requested: bool = False
    query: str = ""
    ignore_case: bool = False
    frontend: Optional[str] = None
    json_output: bool = False
    verbose: bool = False

    def to_request(self) -> GrepRequest:
        return GrepRequest(
            files=tuple(self.files),
            filter_spec=FilterSpec.of(self.groups, explicit=self.template_requested),
            query_spec=QuerySpec(substring=self.query, ignore_case=self.ignore_case),
        )


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting the process."""

    def error(self, message: str):
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="cppgrep",
        description="Greps intelligently through C++ code",
        add_help=False,
    )
    parser.add_argument("-h", "--help", action="store_true", help="Print usage")
    parser.add_argument("--class", dest="grep_classes", action="store_true",
                        help="Grep for class declarations only")
    parser.add_argument("--struct", dest="grep_structs", action="store_true",
                        help="Grep for struct declarations only")
    parser.add_argument("--template", dest="grep_templates", action="store_true",
                        help="Accepted for compatibility; selects nothing, class templates are selected by --class")
    parser.add_argument("--function", dest="grep_functions", action="store_true",
                        help="Grep for function declarations only")
    parser.add_argument("--variable", dest="grep_variables", action="store_true",
                        help="Grep for variable/member/param declarations only")
    parser.add_argument("-q", "--query", default="", help="Optional grep query string")
    parser.add_argument("-i", "--ignore-case", action="store_true",
                        help="Ignore case when using grep queries")
    parser.add_argument("--frontend", choices=FRONTEND_NAMES, default=None,
                        help="C++ front end (default: from CPPGREP_FRONTEND or treesitter)")
    parser.add_argument("--json", dest="json_output", action="store_true",
                        help="Print results as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("files", nargs="*", metavar="FILE", help="C++ source files")
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> Optional[CliOptions]:
    """
    Parse command line arguments.

    Returns:
        CliOptions, or None when help was requested

    Raises:
        UsageError: For unknown flags or when no file is given
    """
    args = build_parser().parse_intermixed_args(argv)

    if args.help:
        return None
    if not args.files:
        raise UsageError("Missing at least one source input file")

    selected = [
        (args.grep_classes, CategoryGroup.CLASS),
        (args.grep_structs, CategoryGroup.STRUCT),
        (args.grep_functions, CategoryGroup.FUNCTION),
        (args.grep_variables, CategoryGroup.VARIABLE),
    ]
    return CliOptions(
        files=list(args.files),
        groups=[group for enabled, group in selected if enabled],
        template_requested=args.grep_templates,
        query=args.query,
        ignore_case=args.ignore_case,
        frontend=args.frontend,
        json_output=args.json_output,
        verbose=args.verbose,
    )


def print_grep_result(result: GrepResult, console: Console) -> None:
    console.print(Text(Path(result.source_path).absolute().as_posix(), style="green"), soft_wrap=True)
    for entry in result.entries:
        console.print(Text.assemble((f"{entry.line}:{entry.column}", "blue"), " ", entry.identifier), soft_wrap=True)
    console.print()


def print_missing_file(path: str, console: Console) -> None:
    console.print(Text.assemble(("error: ", "red"), f"Could not open source file {Path(path).absolute().as_posix()}"), soft_wrap=True)


def main(argv: Optional[Sequence[str]] = None, console: Optional[Console] = None) -> int:
    """
    Run cppgrep.

    Args:
        argv: Arguments without the program name (sys.argv[1:] if None)
        console: Where to print (stdout if None)

    Returns:
        A ResultType exit code
    """
    console = console or Console(highlight=False)

    try:
        options = parse_args(argv)
    except UsageError as e:
        console.print(str(e), markup=False, highlight=False)
        return ResultType.PARSE_ARGS_FAILURE

    if options is None:
        console.print(build_parser().format_help(), markup=False, highlight=False)
        return ResultType.SUCCESS

    logging.basicConfig(
        level=logging.DEBUG if options.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if options.template_requested and not options.groups:
        logger.warning("--template alone selects no declarations; class templates are selected by --class")
    elif options.template_requested:
        logger.warning("--template has no effect; class templates are selected by --class")

    try:
        frontend = get_frontend(options.frontend or get_config().frontend)
    except (ConfigurationError, FrontEndError) as e:
        console.print(Text.assemble(("error: ", "red"), str(e)))
        return ResultType.FRONTEND_FAILURE

    request = options.to_request()
    if options.json_output:
        results: List[GrepResult] = []
        missing: List[str] = []
        grep_all(request, results.append, frontend=frontend, on_missing=missing.append)
        console.print_json(json.dumps({
            "results": [r.to_dict() for r in results],
            "missing": missing,
        }))
    else:
        grep_all(
            request,
            lambda result: print_grep_result(result, console),
            frontend=frontend,
            on_missing=lambda path: print_missing_file(path, console),
        )
    return ResultType.SUCCESS
