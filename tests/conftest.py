import pytest

from symlang import libcxxabi, results


class FakeLibc(object):

    def __init__(self):
        self.freed = []

    def free(self, ptr):
        self.freed.append(ptr)


class FakeCxaDemangle(object):
    """Stands in for `__cxa_demangle`.  Buffers handed out are kept alive
    here so the code under test can read them before "freeing" them.
    """

    def __init__(self, status, value):
        self.status = status
        self.value = value
        self.buffers = []
        self.pointers = []

    def __call__(self, symbol, output_buffer, length, status):
        status[0] = self.status
        if self.value is None:
            return libcxxabi.ffi.NULL
        buf = libcxxabi.ffi.new('char[]', self.value)
        ptr = libcxxabi.ffi.cast('char *', buf)
        self.buffers.append(buf)
        self.pointers.append(ptr)
        return ptr


@pytest.fixture(scope='function')
def native_cxa(monkeypatch):
    """Returns a factory that installs a fake native demangler with the
    given status and output.  The fake C runtime is available as
    ``factory.libc``.
    """
    libc = FakeLibc()
    monkeypatch.setattr(libcxxabi, '_libc', libc)

    def factory(status, value=None):
        fake = FakeCxaDemangle(status, value)
        monkeypatch.setattr(libcxxabi, '_cxa_demangle', fake)
        return fake

    factory.libc = libc
    return factory


@pytest.fixture(scope='function')
def fake_cxa_demangle(monkeypatch):
    """Replaces the platform C++ demangler with a lookup table.  Symbols
    missing from the table fail to demangle.
    """
    table = {}

    def demangle(symbol):
        rv = table.get(symbol)
        if rv is None:
            return results.FAILURE
        return results.success(rv)

    monkeypatch.setattr(libcxxabi, 'demangle', demangle)
    return table


@pytest.fixture(scope='function')
def no_cxa_demangle(monkeypatch):
    monkeypatch.setattr(libcxxabi, 'demangle', libcxxabi._unsupported)


@pytest.fixture(scope='function')
def legacy_rust():
    """A rust descriptor that always takes the legacy decoding path even
    if a rust demangler happens to be configured.
    """
    from symlang.language import RUST
    from symlang.rust_legacy import demangle_legacy
    return RUST._replace(strategy=demangle_legacy)
