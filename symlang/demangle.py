import re

from symlang.language import Language, get_language
from symlang.utils import timedsection


_rust_legacy_re = re.compile(r'\A_ZN.*17h[a-f0-9]{16}E\Z', re.DOTALL)
_swift_prefixes = ('_T', '__T', '$s', '_$s', '$S', '_$S')


def _strip_macho_underscore(symbol):
    """Mach-O symbol tables prefix every C symbol with an underscore so
    itanium names show up as ``__Z...``.  The demanglers want ``_Z...``.
    """
    if isinstance(symbol, bytes):
        prefix = b'__Z'
    elif isinstance(symbol, str):
        prefix = '__Z'
    else:
        return symbol
    if symbol.startswith(prefix):
        return symbol[1:]
    return symbol


def guess_language(symbol):
    """Makes an educated guess about which language produced a mangled
    symbol.  Returns `None` if it does not look mangled at all.
    """
    if isinstance(symbol, bytes):
        symbol = symbol.decode('utf-8', 'replace')
    if not isinstance(symbol, str):
        return None
    symbol = _strip_macho_underscore(symbol)
    if _rust_legacy_re.match(symbol) is not None:
        return Language.RUST
    if symbol.startswith('_Z'):
        return Language.CPLUSPLUS
    if symbol.startswith(_swift_prefixes):
        return Language.SWIFT
    return None


def _demangle(symbol, language):
    with timedsection('demangle-%s' % language.name):
        rv = language.demangle_name(symbol)
    if rv.ok:
        return rv.name


def demangle_symbol(symbol, language=None):
    """Demangles a symbol for display.  If no language is given it's
    guessed from the symbol.  C++ and Rust symbols may carry the extra
    leading underscore of Mach-O symbol tables.  Whenever the symbol cannot
    be demangled the original symbol is returned unchanged.
    """
    if symbol is None:
        return None
    if language is None:
        language = guess_language(symbol)
        if language is None:
            return symbol
    language = get_language(language)
    if language.language in (Language.CPLUSPLUS, Language.RUST):
        rv = _demangle(_strip_macho_underscore(symbol), language)
    else:
        rv = _demangle(symbol, language)
    if rv is None:
        return symbol
    return rv


def demangle_cpp_symbol(symbol):
    return _demangle(symbol, get_language(Language.CPLUSPLUS))


def demangle_rust_symbol(symbol):
    return _demangle(symbol, get_language(Language.RUST))


def demangle_swift_symbol(symbol):
    return _demangle(symbol, get_language(Language.SWIFT))


def make_qualified_name(language, *names):
    """Joins a chain of scope names (outermost first) with the separator
    of the given language.
    """
    return get_language(language).qualify(*names)
