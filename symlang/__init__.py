from symlang.results import DemangleOutcome, DemangleResult
from symlang.language import Language, LanguageDescriptor, LANGUAGES, \
    get_language, make_qualified_name_with_separator, CPLUSPLUS, JAVA, \
    SWIFT, RUST, ASSEMBLER
from symlang.rust_legacy import ESCAPES, decode_legacy, demangle_legacy, \
    unescape
from symlang.demangle import demangle_symbol, demangle_cpp_symbol, \
    demangle_rust_symbol, demangle_swift_symbol, make_qualified_name, \
    guess_language
from symlang.exceptions import DemangleError, LibraryNotFound, \
    UnknownLanguage, StructureMismatch, UnknownEscape


__all__ = [
    # results
    'DemangleOutcome',
    'DemangleResult',

    # language
    'Language',
    'LanguageDescriptor',
    'LANGUAGES',
    'get_language',
    'make_qualified_name_with_separator',
    'CPLUSPLUS',
    'JAVA',
    'SWIFT',
    'RUST',
    'ASSEMBLER',

    # rust_legacy
    'ESCAPES',
    'decode_legacy',
    'demangle_legacy',
    'unescape',

    # demangle
    'demangle_symbol',
    'demangle_cpp_symbol',
    'demangle_rust_symbol',
    'demangle_swift_symbol',
    'make_qualified_name',
    'guess_language',

    # exceptions
    'DemangleError',
    'LibraryNotFound',
    'UnknownLanguage',
    'StructureMismatch',
    'UnknownEscape',
]
