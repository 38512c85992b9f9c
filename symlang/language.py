"""Language specific operations on symbol names.

Every supported language has exactly one `LanguageDescriptor` which knows
how to build a qualified name out of a scope and a name, and how to
demangle a symbol that was emitted by that language's compiler.  The
descriptors are created when this module is imported and never change, so
they can be shared freely between threads.
"""
import logging
from collections import namedtuple
from enum import Enum
from functools import reduce
from types import MappingProxyType

from symlang import libcxxabi, librustdemangle, results
from symlang.exceptions import UnknownLanguage
from symlang.rust_legacy import demangle_legacy


LOGGER = logging.getLogger(__name__)


class Language(Enum):
    CPLUSPLUS = 'cpp'
    JAVA = 'java'
    SWIFT = 'swift'
    RUST = 'rust'
    ASSEMBLER = 'asm'


def make_qualified_name_with_separator(parent_name, separator, name):
    if not parent_name:
        return name
    return parent_name + separator + name


def _not_applicable(symbol):
    return results.UNSUPPORTED


def _demangle_cpp(symbol):
    return libcxxabi.demangle(symbol)


def _demangle_swift(symbol):
    # There is no embeddable swift demangler.  The mangled form carries
    # more information than a name built with `make_qualified_name` so it
    # is passed through for `swift-demangle` to deal with later.
    if isinstance(symbol, bytes):
        symbol = symbol.decode('utf-8', 'replace')
    return results.success(symbol)


def _demangle_rust(symbol):
    return librustdemangle.demangle(symbol)


def _select_rust_strategy():
    if librustdemangle.available:
        return _demangle_rust
    return demangle_legacy


class LanguageDescriptor(namedtuple('_LanguageDescriptor', [
        'language', 'separator', 'has_functions', 'strategy'])):
    """Operations for one language.  A `separator` of `None` means the
    language has no scopes and qualified names are just the leaf name.
    """
    __slots__ = ()

    @property
    def name(self):
        return self.language.value

    def make_qualified_name(self, parent_name, name):
        if self.separator is None:
            return name
        return make_qualified_name_with_separator(
            parent_name, self.separator, name)

    def qualify(self, *names):
        """Builds a qualified name out of a chain of scopes, outermost
        first.
        """
        return reduce(self.make_qualified_name, names, '')

    def demangle_name(self, symbol):
        """Demangles `symbol` and returns a `DemangleResult`."""
        try:
            rv = self.strategy(symbol)
        except Exception:
            LOGGER.exception('Demangler for %s failed on %r',
                             self.name, symbol)
            return results.FAILURE
        if rv.outcome is results.DemangleOutcome.FAILURE:
            LOGGER.debug('Could not demangle %s symbol %r',
                         self.name, symbol)
        elif rv.outcome is results.DemangleOutcome.UNSUPPORTED:
            LOGGER.debug('Demangling %s symbols is not supported',
                         self.name)
        return rv

    def __repr__(self):
        return '<LanguageDescriptor %r>' % self.name


CPLUSPLUS = LanguageDescriptor(Language.CPLUSPLUS, '::', True,
                               _demangle_cpp)
JAVA = LanguageDescriptor(Language.JAVA, '.', True, _not_applicable)
SWIFT = LanguageDescriptor(Language.SWIFT, '.', True, _demangle_swift)
RUST = LanguageDescriptor(Language.RUST, '.', True, _select_rust_strategy())
ASSEMBLER = LanguageDescriptor(Language.ASSEMBLER, None, False,
                               _not_applicable)


LANGUAGES = MappingProxyType({
    Language.CPLUSPLUS: CPLUSPLUS,
    Language.JAVA: JAVA,
    Language.SWIFT: SWIFT,
    Language.RUST: RUST,
    Language.ASSEMBLER: ASSEMBLER,
})

_aliases = MappingProxyType({
    'cpp': Language.CPLUSPLUS,
    'c++': Language.CPLUSPLUS,
    'cplusplus': Language.CPLUSPLUS,
    'java': Language.JAVA,
    'swift': Language.SWIFT,
    'rust': Language.RUST,
    'asm': Language.ASSEMBLER,
    'assembler': Language.ASSEMBLER,
})


def get_language(tag):
    """Looks up the descriptor for a language.  `tag` can be a `Language`,
    a descriptor or one of the string names (``cpp``, ``rust``, ...).
    """
    if isinstance(tag, LanguageDescriptor):
        return tag
    if isinstance(tag, Language):
        return LANGUAGES[tag]
    if isinstance(tag, str):
        lang = _aliases.get(tag.lower())
        if lang is not None:
            return LANGUAGES[lang]
    raise UnknownLanguage('Unknown language %r' % (tag,))
