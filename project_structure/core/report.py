"""
Markdown rendering of extracted signatures, grouped by file.
"""

from __future__ import annotations

import os
from typing import Dict, List, Optional, Sequence, TypeVar, Union

from .models import FunctionSignature, TypeSignature

REPORT_HEADER = "# Function Signatures and tRPC Procedures"
UNKNOWN_ROUTER = "Unknown Router"

Signature = TypeVar("Signature", FunctionSignature, TypeSignature)


def group_by_file(signatures: Sequence[Signature]) -> Dict[str, List[Signature]]:
    grouped: Dict[str, List[Signature]] = {}
    for signature in signatures:
        grouped.setdefault(signature.file_path, []).append(signature)
    return grouped


def generate_markdown(
    functions: Sequence[FunctionSignature],
    root: Union[str, os.PathLike],
    exported_only: bool = False,
    types: Optional[Sequence[TypeSignature]] = None,
) -> str:
    """
    Render signatures as a markdown document, one section per file.

    Procedures are listed per router first, then the remaining functions,
    then type declarations. With `exported_only`, procedures are kept
    regardless of export status.
    """
    types = list(types or [])
    if not functions and not types:
        return f"{REPORT_HEADER}\n\nNo functions or procedures found."

    if exported_only:
        functions = [sig for sig in functions if sig.is_exported or sig.is_procedure]
        types = [sig for sig in types if sig.is_exported]

    if not functions and not types:
        return f"{REPORT_HEADER}\n\nNo exported functions or procedures found."

    functions_by_file = group_by_file(functions)
    types_by_file = group_by_file(types)

    markdown = f"{REPORT_HEADER}\n\n"
    for file_path in sorted(set(functions_by_file) | set(types_by_file)):
        markdown += f"## {os.path.relpath(file_path, root)}\n\n"
        file_functions = functions_by_file.get(file_path, [])

        procedures_by_router: Dict[str, List[FunctionSignature]] = {}
        for proc in (sig for sig in file_functions if sig.is_procedure):
            procedures_by_router.setdefault(proc.parent_name or UNKNOWN_ROUTER, []).append(proc)

        for router_name, procedures in procedures_by_router.items():
            markdown += f"### Router: {router_name}\n"
            markdown += "\n".join(f"- {proc.full_signature}" for proc in procedures)
            markdown += "\n\n"

        regular_functions = [sig for sig in file_functions if not sig.is_procedure]
        if regular_functions:
            if procedures_by_router:
                markdown += "### Other Functions\n"
            markdown += "\n".join(sig.full_signature for sig in regular_functions) + "\n\n"

        file_types = types_by_file.get(file_path, [])
        if file_types:
            markdown += "### Types\n"
            markdown += "\n".join(sig.full_signature for sig in file_types) + "\n\n"

    return markdown.strip() + "\n"


def summarize(
    markdown: str,
    files_scanned: int,
    functions: Sequence[FunctionSignature],
    types: Sequence[TypeSignature] = (),
    exported_only: bool = False,
    blacklist: Sequence[str] = (),
) -> str:
    """Wrap a generated document with scan statistics."""
    procedure_count = sum(1 for sig in functions if sig.is_procedure)
    function_count = len(functions) - procedure_count
    files_with_signatures = len(set(group_by_file(functions)) | set(group_by_file(types)))

    lines = [
        "Generated structure document:",
        "",
        "Summary:",
        f"- Scanned {files_scanned} code files",
        f"- Found {function_count} function signatures, {procedure_count} tRPC procedures "
        f"and {len(types)} type definitions in {files_with_signatures} files",
    ]
    if exported_only:
        lines.append("- Displaying only exported functions and all procedures")
    if blacklist:
        lines.append(f"- Scan Patterns Blacklisted: {', '.join(blacklist)}")
    lines.extend(["", "Full document:", "----------------", "", markdown])
    return "\n".join(lines)
