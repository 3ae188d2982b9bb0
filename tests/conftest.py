import shutil

import pytest
from pathlib import Path

from cppgrep.config import reset_config
from cppgrep.core.exceptions import FrontEndError
from cppgrep.core.interfaces import ICursor, IFrontEnd
from cppgrep.core.models import CursorKind, SourceLocation
from cppgrep.mcp.state import reset_state

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "cpp"


@pytest.fixture(autouse=True)
def clean_state(monkeypatch):
    """Reset MCP state and configuration before and after each test."""
    for name in ("CPPGREP_FRONTEND", "CPPGREP_CLANG_ARGS", "CPPGREP_LIBCLANG_PATH"):
        monkeypatch.delenv(name, raising=False)
    reset_state()
    reset_config()
    yield
    reset_state()
    reset_config()


# =============================================================================
# C++ sources
# =============================================================================

@pytest.fixture
def cpp_fixtures_dir():
    """Return path to the static C++ fixtures."""
    return FIXTURES_DIR


@pytest.fixture
def scenario_cpp(tmp_path):
    """person_info / person / collection / people, one record per block."""
    target = tmp_path / "scenario.cpp"
    shutil.copy(FIXTURES_DIR / "scenario.cpp", target)
    return target


@pytest.fixture
def people_cpp(tmp_path):
    """A namespace with records, methods, templates and free functions."""
    target = tmp_path / "people.cpp"
    shutil.copy(FIXTURES_DIR / "people.cpp", target)
    return target


@pytest.fixture
def kinds_cpp(tmp_path):
    """One declaration of each of the ten reported kinds."""
    target = tmp_path / "kinds.cpp"
    shutil.copy(FIXTURES_DIR / "kinds.cpp", target)
    return target


@pytest.fixture
def write_cpp(tmp_path):
    """Write a C++ snippet to a file and return its path."""
    def _write(source: str, name: str = "snippet.cpp") -> Path:
        target = tmp_path / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(source)
        return target
    return _write


# =============================================================================
# Front ends
# =============================================================================

def _load_frontend(name: str) -> IFrontEnd:
    from cppgrep.parsers import get_frontend

    if name == "clang":
        pytest.importorskip("clang.cindex")
    try:
        return get_frontend(name)
    except FrontEndError as e:
        pytest.skip(str(e))


@pytest.fixture(params=["treesitter", pytest.param("clang", marks=pytest.mark.clang)])
def frontend(request):
    """Every front end that can be loaded in this environment."""
    return _load_frontend(request.param)


@pytest.fixture
def treesitter_frontend():
    return _load_frontend("treesitter")


@pytest.fixture
def clang_frontend():
    return _load_frontend("clang")


# =============================================================================
# In-memory front end
# =============================================================================

class FakeCursor(ICursor):
    """Hand-built tree node."""

    def __init__(self, kind, spelling="", line=1, column=1, children=(),
                 file="main.cpp", system=False, main=True):
        self._kind = kind
        self._spelling = spelling
        self._location = SourceLocation(file=file, line=line, column=column)
        self.children = list(children)
        self.system = system
        self.main = main

    @property
    def kind(self):
        return self._kind

    @property
    def spelling(self):
        return self._spelling

    @property
    def location(self):
        return self._location

    def is_in_system_header(self):
        return self.system

    def is_in_main_file(self):
        return self.main


class FakeFrontEnd(IFrontEnd):
    """Front end serving prebuilt trees keyed by path and logging its lifecycle."""

    name = "fake"

    def __init__(self, trees=None):
        self.trees = dict(trees or {})
        self.events = []

    def create_session(self):
        self.events.append(("create_session",))
        return object()

    def parse(self, session, filepath, args=()):
        self.events.append(("parse", filepath))
        return self.trees.get(str(filepath))

    def root_cursor(self, tree):
        return tree

    def children_of(self, cursor):
        return cursor.children

    def dispose_tree(self, tree):
        self.events.append(("dispose_tree",))

    def dispose_session(self, session):
        self.events.append(("dispose_session",))


def tu(*children):
    """Translation unit root."""
    return FakeCursor(CursorKind.TRANSLATION_UNIT, children=children)


@pytest.fixture
def fake_frontend():
    """Factory for an in-memory front end."""
    return FakeFrontEnd


@pytest.fixture
def fake_cursor():
    """Factory for hand-built cursors."""
    return FakeCursor


@pytest.fixture
def fake_tu():
    """Factory for translation-unit roots."""
    return tu
