import logging
import importlib

import cffi
import pytest

from symlang import libcxxabi, librustdemangle, language, results, utils
from symlang.exceptions import LibraryNotFound
from symlang.demangle import demangle_symbol
from symlang.rust_legacy import demangle_legacy


MISSING_LIBRARY = '/nonexistent/symlang/libmissing.so'


@pytest.fixture(scope='function')
def reload_bindings(monkeypatch):
    """Reloads the native bindings so they pick up the current environment
    and puts them back the way they were afterwards.
    """
    def reload():
        importlib.reload(libcxxabi)
        importlib.reload(librustdemangle)
    yield reload
    monkeypatch.undo()
    reload()


@pytest.fixture(scope='function')
def reload_utils(monkeypatch):
    yield lambda: importlib.reload(utils)
    monkeypatch.undo()
    importlib.reload(utils)


def test_missing_cxxabi_library(monkeypatch, caplog, reload_bindings):
    monkeypatch.setenv('SYMLANG_CXXABI_LIBRARY', MISSING_LIBRARY)
    with caplog.at_level(logging.WARNING, logger='symlang.libcxxabi'):
        reload_bindings()

    assert libcxxabi.available is False
    assert libcxxabi.demangle('_ZN3foo3barEv') == results.UNSUPPORTED
    assert language.CPLUSPLUS.demangle_name('_ZN3foo3barEv') == \
        results.UNSUPPORTED
    assert demangle_legacy('_ZN3foo3bar17h0123456789abcdefE') == \
        results.UNSUPPORTED
    assert demangle_symbol('_ZN3foo3barEv') == '_ZN3foo3barEv'
    assert any('C++ demangling disabled' in r.getMessage()
               for r in caplog.records)


def test_missing_rust_demangler(monkeypatch, caplog, reload_bindings):
    monkeypatch.setenv('SYMLANG_RUST_DEMANGLE_LIBRARY', MISSING_LIBRARY)
    with caplog.at_level(logging.WARNING, logger='symlang.librustdemangle'):
        reload_bindings()

    assert librustdemangle.available is False
    assert librustdemangle.demangle is None
    assert language._select_rust_strategy() is demangle_legacy
    messages = [r.getMessage() for r in caplog.records]
    assert any(MISSING_LIBRARY in m for m in messages)


def test_rust_demangler_bad_path():
    with pytest.raises(LibraryNotFound) as excinfo:
        librustdemangle._load_library(MISSING_LIBRARY)
    assert MISSING_LIBRARY in str(excinfo.value)


def test_no_c_runtime(monkeypatch, reload_bindings):
    dlopen = cffi.FFI.dlopen

    def posixless_dlopen(self, name, *args, **kwargs):
        if name is None:
            raise OSError('dlopen(NULL) is not supported')
        return dlopen(self, name, *args, **kwargs)

    monkeypatch.delenv('SYMLANG_CXXABI_LIBRARY', raising=False)
    monkeypatch.setattr(cffi.FFI, 'dlopen', posixless_dlopen)
    reload_bindings()

    assert libcxxabi.available is False
    assert libcxxabi.demangle('_ZN3foo3barEv') == results.UNSUPPORTED


def test_timers(monkeypatch, caplog, reload_utils):
    monkeypatch.setenv('SYMLANG_ENABLE_TIMERS', '1')
    reload_utils()

    with utils.timedsection('outer'):
        with utils.timedsection('inner'):
            pass
    assert len(utils._timers['outer']) == 1
    assert utils._indentations['inner'] == utils._indentations['outer'] + 1

    assert demangle_symbol('$s4main3FooV3barSiyF', 'swift') == \
        '$s4main3FooV3barSiyF'
    assert len(utils._timers['demangle-swift']) == 1

    with caplog.at_level(logging.INFO, logger='symlang.utils'):
        utils.print_timers()
    messages = [r.getMessage() for r in caplog.records]
    assert any('demangle-swift' in m for m in messages)


def test_timers_disabled(monkeypatch, reload_utils):
    monkeypatch.delenv('SYMLANG_ENABLE_TIMERS', raising=False)
    reload_utils()
    with utils.timedsection('ignored'):
        pass
    assert not utils._timeit
