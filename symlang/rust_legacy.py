"""Decoder for legacy mangled Rust symbols.

Legacy Rust symbols are valid Itanium C++ names, so the platform demangler
gets us most of the way: ``_ZN4core3ptr13drop_in_place17h0123456789abcdefE``
comes back as ``core::ptr::drop_in_place::h0123456789abcdef``.  What it
cannot undo is the second layer of encoding Rust puts inside identifiers:
characters like ``<`` or ``&`` are spelled ``$LT$`` and ``$RF$``.  This
module strips the hash and rewrites those escapes.

Only the escapes in `ESCAPES` are understood.  Anything else fails the
whole decode.
"""
import re
import logging
from types import MappingProxyType

from symlang import libcxxabi, results
from symlang.exceptions import DemangleError, StructureMismatch, \
    UnknownEscape


LOGGER = logging.getLogger(__name__)


ESCAPES = MappingProxyType({
    'C': ',',

    'SP': '@',
    'BP': '*',
    'RF': '&',
    'LT': '<',
    'GT': '>',
    'LP': '(',
    'RP': ')',

    'u20': ' ',
    'u22': '\\',
    'u27': '\'',
    'u2b': '+',
    'u3b': ';',
    'u5b': '[',
    'u5d': ']',
    'u7b': '{',
    'u7d': '}',
    'u7e': '~',
})

_legacy_re = re.compile(r'''
    \A
    (?P<path>[a-zA-Z0-9_.:$]+)
    ::h
    (?P<hash>[a-f0-9]{16})
    \Z
''', re.VERBOSE)


def unescape(s):
    """Rewrites the ``$..$`` escapes in `s`.  Raises `UnknownEscape` if a
    token is not in the table or is never closed.
    """
    rv = []
    pos = 0
    end = len(s)
    while pos < end:
        c = s[pos]
        if c != '$':
            rv.append(c)
            pos += 1
            continue
        close = s.find('$', pos + 1)
        if close < 0:
            raise UnknownEscape('Unterminated escape at offset %d' % pos)
        token = s[pos + 1:close]
        try:
            rv.append(ESCAPES[token])
        except KeyError:
            raise UnknownEscape('Unknown escape %r' % token)
        pos = close + 1
    return ''.join(rv)


def decode_legacy(intermediate):
    """Decodes the output of the C++ demangler for a legacy Rust symbol.
    The trailing ``::h<hash>`` is dropped.
    """
    match = _legacy_re.match(intermediate)
    if match is None:
        raise StructureMismatch('Not a legacy rust path: %r'
                                % (intermediate,))
    return unescape(match.group('path'))


def demangle_legacy(symbol):
    """Demangles a legacy Rust symbol and returns a `DemangleResult`.  This
    never raises.
    """
    rv = libcxxabi.demangle(symbol)
    if rv.outcome is not results.DemangleOutcome.SUCCESS:
        return rv
    try:
        return results.success(decode_legacy(rv.name))
    except DemangleError as e:
        LOGGER.debug('Failed to decode rust symbol %r: %s', symbol, e)
        return results.FAILURE
