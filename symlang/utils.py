import os
import time
import logging
import threading
from contextlib import contextmanager


LOGGER = logging.getLogger(__name__)


def to_bytes(x):
    if isinstance(x, str):
        x = x.encode('utf-8')
    return x


def to_native_name(x):
    """Converts a symbol into bytes that can be handed to a C demangler.
    Returns `None` if the value cannot be passed safely.
    """
    if not isinstance(x, (str, bytes)):
        return None
    try:
        x = to_bytes(x)
    except UnicodeError:
        return None
    # C strings stop at the first NUL which would silently demangle
    # a different symbol.
    if b'\x00' in x:
        return None
    return x


_timeit = os.environ.get('SYMLANG_ENABLE_TIMERS') == '1'
if _timeit:
    _timers = {}
    _indentations = {}
    _local = threading.local()
    _last_print = time.time()


@contextmanager
def timedsection(key):
    if not _timeit:
        yield
        return

    try:
        _local.indent = _local.indent + 1
    except AttributeError:
        _local.indent = 0
    storage = _timers.setdefault(key, [])
    _indentations[key] = _local.indent
    now = time.time()
    try:
        yield
    finally:
        _local.indent -= 1
        dt = time.time() - now
        storage.append(dt)
        del storage[1000:]

        if _last_print < time.time() - 1:
            print_timers()


def print_timers():
    if not _timeit:
        return

    global _last_print
    for key, storage in sorted(_timers.items()):
        if not storage:
            dt = 0
        else:
            dt = sum(storage) / len(storage) * 1000
        LOGGER.info('%s%s: %.3fms',
                    ' ' * (_indentations.get(key, 0) * 2), key, dt)
    _last_print = time.time()
