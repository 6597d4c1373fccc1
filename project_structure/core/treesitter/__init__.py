"""
Tree-sitter integration for ProjectStructure.

Provides grammar loading, parsing and the signature extraction engine.
"""

from .parser import parse_source, get_parser
from .languages import SUPPORTED_LANGUAGES, get_language
from .typescript_extractor import parse_signatures, parse_file

__all__ = [
    "parse_source",
    "get_parser",
    "SUPPORTED_LANGUAGES",
    "get_language",
    "parse_signatures",
    "parse_file",
]
