"""Binding to the platform's Itanium C++ ABI demangler (`__cxa_demangle`
from libstdc++ or libc++abi).  The library is looked up once when this
module is imported.  If it cannot be found `demangle` is bound to a stub
that reports every symbol as unsupported.

The returned buffers are released with the C runtime's `free` which is
looked up through `dlopen(NULL)`.  That only exists on POSIX systems; on
other platforms C++ demangling is reported as unsupported.
"""
import os
import logging
from ctypes.util import find_library

from cffi import FFI

from symlang import results
from symlang.exceptions import LibraryNotFound
from symlang.utils import to_native_name


LOGGER = logging.getLogger(__name__)

ffi = FFI()
ffi.cdef('''
char *__cxa_demangle(const char *mangled_name, char *output_buffer,
                     size_t *length, int *status);
void free(void *ptr);
''')

_WELL_KNOWN_NAMES = (
    'libstdc++.so.6',
    'libc++abi.so.1',
    'libc++abi.dylib',
    'libc++.1.dylib',
)


def _iter_candidates():
    configured = os.environ.get('SYMLANG_CXXABI_LIBRARY')
    if configured:
        yield configured
        return
    for name in 'stdc++', 'c++abi', 'c++':
        path = find_library(name)
        if path:
            yield path
    for name in _WELL_KNOWN_NAMES:
        yield name


def _load_library():
    for name in _iter_candidates():
        try:
            lib = ffi.dlopen(name)
            func = getattr(lib, '__cxa_demangle')
        except (OSError, AttributeError):
            LOGGER.debug('No usable __cxa_demangle in %s', name)
            continue
        LOGGER.debug('Using __cxa_demangle from %s', name)
        return lib, func
    raise LibraryNotFound('Could not locate a library exporting '
                          '__cxa_demangle')


def _demangle(symbol):
    sym = to_native_name(symbol)
    if sym is None:
        return results.FAILURE

    status = ffi.new('int *')
    ptr = _cxa_demangle(sym, ffi.NULL, ffi.NULL, status)
    try:
        if status[0] != 0 or ptr == ffi.NULL:
            return results.FAILURE
        return results.success(ffi.string(ptr).decode('utf-8', 'replace'))
    finally:
        if ptr != ffi.NULL:
            _libc.free(ptr)


def _unsupported(symbol):
    return results.UNSUPPORTED


_lib = _libc = _cxa_demangle = None
try:
    _lib, _cxa_demangle = _load_library()
    _libc = ffi.dlopen(None)
except (LibraryNotFound, OSError) as e:
    if os.environ.get('SYMLANG_CXXABI_LIBRARY'):
        LOGGER.warning('C++ demangling disabled: %s', e)
    else:
        LOGGER.debug('C++ demangling disabled: %s', e)
    _lib = _libc = _cxa_demangle = None
    demangle = _unsupported
    available = False
else:
    demangle = _demangle
    available = True
