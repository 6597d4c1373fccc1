"""
Core data models for signatures extracted from TypeScript/JavaScript syntax trees.

This module contains pure data structures for representing signatures
without any extraction logic.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class ProcedureKind(str, Enum):
    QUERY = "query"
    MUTATION = "mutation"


class TypeKind(str, Enum):
    INTERFACE = "interface"
    TYPE_ALIAS = "type-alias"
    ENUM = "enum"
    CLASS = "class"
    NAMESPACE = "namespace"
    MODULE = "module"


@dataclass(frozen=True)
class Parameter:
    name: str
    type_text: str


@dataclass(frozen=True)
class FunctionSignature:
    """One callable declaration or router procedure."""
    name: str
    parameters: Tuple[Parameter, ...]
    return_type: str
    full_signature: str
    file_path: str
    is_exported: bool = False
    parent_name: Optional[str] = None
    is_procedure: bool = False
    procedure_kind: Optional[ProcedureKind] = None
    has_input: bool = False
    input_schema_name: Optional[str] = None # Set when .input() received a bare identifier
    input_schema_text: Optional[str] = None # Raw argument text otherwise

    def __post_init__(self):
        if self.is_procedure and self.procedure_kind is None:
            raise ValueError(f"Procedure '{self.name}' has no procedure kind")

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["parameters"] = [asdict(p) for p in self.parameters]
        data["procedure_kind"] = self.procedure_kind.value if self.procedure_kind else None
        return data


@dataclass(frozen=True)
class TypeSignature:
    """One type-level declaration (interface, alias, enum, class, namespace, module)."""
    name: str
    kind: TypeKind
    full_signature: str
    file_path: str
    is_exported: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["kind"] = self.kind.value
        return data


@dataclass
class ParseResult:
    """Signatures of one file, each list in pre-order discovery order."""
    functions: List[FunctionSignature] = field(default_factory=list)
    types: List[TypeSignature] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "functions": [f.to_dict() for f in self.functions],
            "types": [t.to_dict() for t in self.types],
        }
