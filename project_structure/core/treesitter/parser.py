"""
Tree-sitter parser facade with cached parser instances.
"""

from functools import lru_cache
from pathlib import PurePath

from tree_sitter import Parser, Tree

from .languages import SUPPORTED_LANGUAGES, get_language

TYPESCRIPT_SUFFIXES = {".ts", ".mts", ".cts"}
TSX_SUFFIXES = {".tsx", ".js", ".jsx", ".mjs", ".cjs"}
VIEW_TEMPLATE_SUFFIXES = {".tsx", ".jsx"}


@lru_cache(maxsize=len(SUPPORTED_LANGUAGES))
def get_parser(language_id: str) -> Parser:
    return Parser(get_language(language_id))


def language_for_path(file_path: str) -> str:
    # .d.ts and friends end in .ts, so the suffix alone decides
    suffix = PurePath(file_path).suffix.lower()
    if suffix in TYPESCRIPT_SUFFIXES:
        return "typescript"
    return "tsx"


def is_view_template(file_path: str) -> bool:
    return PurePath(file_path).suffix.lower() in VIEW_TEMPLATE_SUFFIXES


def parse_source(source: str, language_id: str) -> Tree:
    parser = get_parser(language_id)
    return parser.parse(bytes(source, "utf-8"))
