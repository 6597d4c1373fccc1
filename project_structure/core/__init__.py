"""
Signature extraction for TypeScript/JavaScript sources.

Key Features:
- Function, method and arrow-function signatures with export and parent info
- tRPC procedure detection inside router definitions
- Interface, type alias, enum, class and namespace summaries with depth-limited types
- Project scanning and markdown rendering of the results
"""

from .models import (
    FunctionSignature,
    Parameter,
    ParseResult,
    ProcedureKind,
    TypeKind,
    TypeSignature,
)
from .treesitter import parse_file, parse_signatures

__all__ = [
    'FunctionSignature',
    'Parameter',
    'ParseResult',
    'ProcedureKind',
    'TypeKind',
    'TypeSignature',
    'parse_file',
    'parse_signatures',
]
