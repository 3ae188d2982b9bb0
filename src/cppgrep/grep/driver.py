"""
Multi-file grep driver.

Runs the tree walker once per requested file, in request order, and hands
every non-empty result to a caller-supplied sink. Each file's parse session
is opened and disposed before the next file starts.

Missing files follow a skip-and-warn policy: the file is reported (through
the ``on_missing`` callback when one is given, a logged warning otherwise)
and the run goes on with the remaining files.

Usage:
    >>> from cppgrep.grep.driver import grep_files
    >>> request = GrepRequest(files=("people.cpp",), query_spec=QuerySpec("person"))
    >>> for result in grep_files(request):
    ...     print(result.source_path, len(result.entries))
"""

import logging
import time
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from cppgrep.config import get_config
from cppgrep.core.interfaces import IFrontEnd
from cppgrep.core.models import FilterSpec, GrepRequest, GrepResult, QuerySpec
from cppgrep.grep.walker import collect
from cppgrep.parsers.language_configs import is_cpp_file

logger = logging.getLogger(__name__)


def _default_frontend() -> IFrontEnd:
    # Imported here so that the driver does not pull in every front end
    from cppgrep.parsers import get_frontend

    return get_frontend(get_config().frontend)


def grep_file(
    path: str,
    filter_spec: FilterSpec,
    query_spec: QuerySpec,
    frontend: Optional[IFrontEnd] = None,
    args: Optional[Sequence[str]] = None,
) -> Optional[GrepResult]:
    """
    Grep a single file.

    Args:
        path: Source file to parse
        filter_spec: Enabled buckets
        query_spec: Identifier query
        frontend: Front end to parse with (configured default if None)
        args: Front-end arguments (configured clang args if None)

    Returns:
        GrepResult with the matches in traversal order, or None when the file
        has no matches or the front end produced no tree
    """
    if frontend is None:
        frontend = _default_frontend()
    if args is None:
        args = get_config().clang_args

    start_time = time.time()
    with frontend.open_unit(str(path), args) as root:
        if root is None:
            return None
        entries = collect(frontend, root, filter_spec, query_spec)

    logger.debug(
        f"Grepped {path} with {frontend.name} in {time.time() - start_time:.3f}s - "
        f"{len(entries)} matches"
    )
    if not entries:
        return None
    return GrepResult(source_path=str(path), entries=tuple(entries))


def grep_all(
    request: GrepRequest,
    sink: Callable[[GrepResult], None],
    frontend: Optional[IFrontEnd] = None,
    on_missing: Optional[Callable[[str], None]] = None,
) -> None:
    """
    Grep every file of ``request`` and push non-empty results to ``sink``.

    Files are processed strictly in request order. A file that does not exist
    is reported and skipped; it never aborts the run.

    Args:
        request: Files, buckets and query for the run
        sink: Called once per file that has at least one match
        frontend: Front end shared by all files (configured default if None)
        on_missing: Called with the path of every missing file
    """
    if frontend is None:
        frontend = _default_frontend()

    for source in request.files:
        if not Path(source).exists():
            if on_missing is not None:
                logger.debug(f"Could not open source file {Path(source).absolute()}")
                on_missing(source)
            else:
                logger.warning(f"Could not open source file {Path(source).absolute()}")
            continue
        if not is_cpp_file(source):
            logger.debug(f"{source} has no C++ extension; parsing it as C++ anyway")

        result = grep_file(source, request.filter_spec, request.query_spec, frontend)
        if result is not None:
            sink(result)


def grep_files(
    request: GrepRequest,
    frontend: Optional[IFrontEnd] = None,
    on_missing: Optional[Callable[[str], None]] = None,
) -> List[GrepResult]:
    """Run ``grep_all`` and return the results as a list in file order."""
    results: List[GrepResult] = []
    grep_all(request, results.append, frontend=frontend, on_missing=on_missing)
    return results
