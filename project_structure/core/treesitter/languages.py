"""
Grammar loading for the TypeScript family.

Two grammars cover every supported suffix: plain TypeScript, and TSX, which
also accepts JSX and so plain JavaScript.
"""

from functools import lru_cache

from tree_sitter import Language

from tree_sitter_typescript import language_typescript, language_tsx

_GRAMMARS = {
    "typescript": language_typescript,
    "tsx": language_tsx,
}
SUPPORTED_LANGUAGES = tuple(_GRAMMARS)


@lru_cache(maxsize=None)
def get_language(language_id: str) -> Language:
    grammar = _GRAMMARS.get(language_id)
    if grammar is None:
        raise ValueError(f"Unsupported language: {language_id}")
    return Language(grammar())
