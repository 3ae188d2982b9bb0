"""Unit tests for configuration, front-end selection and exceptions."""
import pytest
from cppgrep.config import GrepConfig, get_config, reset_config, set_config
from cppgrep.core.exceptions import ConfigurationError, CppGrepException, FrontEndError, UsageError
from cppgrep.parsers import FRONTEND_NAMES, get_frontend


class TestGrepConfig:

    def test_defaults(self):
        config = GrepConfig()

        assert config.frontend == "treesitter"
        assert config.clang_args == ["-std=c++17"]
        assert config.libclang_path is None

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("CPPGREP_FRONTEND", "clang")
        monkeypatch.setenv("CPPGREP_CLANG_ARGS", "  -std=c++20   -I include ")
        monkeypatch.setenv("CPPGREP_LIBCLANG_PATH", "/opt/llvm/lib/libclang.so")

        config = GrepConfig()

        assert config.frontend == "clang"
        assert config.clang_args == ["-std=c++20", "-I", "include"]
        assert config.libclang_path == "/opt/llvm/lib/libclang.so"

    def test_empty_libclang_path_is_none(self, monkeypatch):
        monkeypatch.setenv("CPPGREP_LIBCLANG_PATH", "")
        assert GrepConfig().libclang_path is None

    def test_global_instance(self):
        assert get_config() is get_config()

    def test_set_and_reset(self, monkeypatch):
        custom = GrepConfig(frontend="clang", clang_args=[], libclang_path=None)
        set_config(custom)
        assert get_config() is custom

        monkeypatch.setenv("CPPGREP_FRONTEND", "treesitter")
        reset_config()
        assert get_config() is not custom
        assert get_config().frontend == "treesitter"


class TestGetFrontend:

    def test_names(self):
        assert FRONTEND_NAMES == ("treesitter", "clang")

    def test_treesitter(self):
        pytest.importorskip("tree_sitter_cpp")
        assert get_frontend("treesitter").name == "treesitter"

    def test_name_is_case_insensitive(self):
        pytest.importorskip("tree_sitter_cpp")
        assert get_frontend("TreeSitter").name == "treesitter"

    def test_configured_default(self, monkeypatch):
        pytest.importorskip("tree_sitter_cpp")
        set_config(GrepConfig(frontend="treesitter"))
        assert get_frontend().name == "treesitter"

    def test_unknown(self):
        with pytest.raises(ConfigurationError, match="Unknown front end: gcc"):
            get_frontend("gcc")


class TestExceptions:

    def test_hierarchy(self):
        for exc in (ConfigurationError, FrontEndError, UsageError):
            assert issubclass(exc, CppGrepException)

    def test_frontend_error_message(self):
        error = FrontEndError("clang", "libclang.so not found")

        assert error.frontend == "clang"
        assert error.details == "libclang.so not found"
        assert str(error) == "Failed to initialize front end 'clang': libclang.so not found"
