import pytest


def test_lazy_import_grep_files():
    import cppgrep
    assert hasattr(cppgrep, 'grep_files')


def test_lazy_import_grep_all():
    import cppgrep
    assert callable(cppgrep.grep_all)


def test_lazy_import_treesitter_frontend():
    import cppgrep
    assert hasattr(cppgrep, 'TreeSitterFrontEnd')


def test_lazy_import_declaration_entry():
    import cppgrep
    assert hasattr(cppgrep, 'DeclarationEntry')


def test_lazy_import_declaration_kind():
    import cppgrep
    assert hasattr(cppgrep, 'DeclarationKind')


def test_lazy_import_grep_request():
    import cppgrep
    assert hasattr(cppgrep, 'GrepRequest')


def test_lazy_import_ifrontend():
    import cppgrep
    assert hasattr(cppgrep, 'IFrontEnd')


def test_lazy_import_get_frontend():
    import cppgrep
    assert hasattr(cppgrep, 'get_frontend')


def test_lazy_import_invalid_name():
    import cppgrep
    with pytest.raises(AttributeError):
        _ = cppgrep.NonExistentClass


def test_all_exported_names_are_accessible():
    import cppgrep
    for name in cppgrep.__all__:
        assert hasattr(cppgrep, name)
