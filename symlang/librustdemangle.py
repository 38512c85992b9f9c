"""Optional binding to a dedicated Rust demangler.  The shared library is
configured with `SYMLANG_RUST_DEMANGLE_LIBRARY` and must export
`rust_demangle` and `free_rust_demangled_name`.  When it's not configured
(or fails to load) `available` is false and Rust symbols go through the
legacy decoder in `symlang.rust_legacy` instead.
"""
import os
import logging

from cffi import FFI

from symlang import results
from symlang.exceptions import LibraryNotFound
from symlang.utils import to_native_name


LOGGER = logging.getLogger(__name__)

ffi = FFI()
ffi.cdef('''
char *rust_demangle(const char *mangled);
void free_rust_demangled_name(char *demangled);
''')


def _load_library(path):
    if not path:
        raise LibraryNotFound('No rust demangler configured')
    try:
        lib = ffi.dlopen(path)
        # Resolve both symbols up front so a broken library is rejected
        # here and not on the first demangle call.
        lib.rust_demangle
        lib.free_rust_demangled_name
    except (OSError, AttributeError) as e:
        raise LibraryNotFound('Cannot load rust demangler from %s: %s'
                              % (path, e))
    return lib


def _demangle(symbol):
    sym = to_native_name(symbol)
    if sym is None:
        return results.FAILURE

    ptr = _lib.rust_demangle(sym)
    if ptr == ffi.NULL:
        return results.FAILURE
    try:
        rv = ffi.string(ptr).decode('utf-8', 'replace')
    finally:
        _lib.free_rust_demangled_name(ptr)
    if not rv:
        return results.FAILURE
    return results.success(rv)


_configured_path = os.environ.get('SYMLANG_RUST_DEMANGLE_LIBRARY')
try:
    _lib = _load_library(_configured_path)
except LibraryNotFound as e:
    if _configured_path:
        LOGGER.warning('%s', e)
    _lib = None
    demangle = None
    available = False
else:
    LOGGER.debug('Using rust demangler from %s', _configured_path)
    demangle = _demangle
    available = True
