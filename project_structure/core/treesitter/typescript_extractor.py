"""
Tree-sitter-based signature extractor for TypeScript/JavaScript files.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence, Union

from ..models import ParseResult
from .parser import is_view_template, language_for_path, parse_source
from .procedure_detector import DEFAULT_ROUTER_FACTORIES
from .type_renderer import DEFAULT_TYPE_DEPTH
from .typescript_adapter import extract_signatures


def parse_signatures(
    source_text: str,
    file_path: str,
    type_depth: int = DEFAULT_TYPE_DEPTH,
    router_factories: Sequence[str] = DEFAULT_ROUTER_FACTORIES,
) -> ParseResult:
    """
    Extract function, procedure and type signatures from one file's source.

    Args:
        source_text: File contents.
        file_path: Path recorded on every signature; its suffix selects the
                   grammar and whether the component heuristic applies.
        type_depth: Nesting levels of type expressions rendered before
                    collapsing to a placeholder.
        router_factories: Callee names that define a procedure router.

    Returns:
        ParseResult with functions and types in discovery order.
    """
    if type_depth < 0:
        raise ValueError(f"type_depth must be non-negative, got {type_depth}")
    tree = parse_source(source_text, language_for_path(file_path))
    return extract_signatures(
        tree,
        file_path,
        type_depth=type_depth,
        router_factories=tuple(router_factories),
        view_template=is_view_template(file_path),
    )


def parse_file(
    file_path: Union[str, Path],
    type_depth: int = DEFAULT_TYPE_DEPTH,
    router_factories: Sequence[str] = DEFAULT_ROUTER_FACTORIES,
) -> ParseResult:
    path = Path(file_path)
    source = path.read_text(encoding="utf-8")
    return parse_signatures(source, str(path), type_depth=type_depth, router_factories=router_factories)
