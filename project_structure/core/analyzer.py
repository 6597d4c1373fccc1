"""
Project-level orchestration: discover files, parse each one, aggregate.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import ProjectStructureConfig
from .file_scanner import discover_files
from .models import FunctionSignature, TypeSignature
from .report import generate_markdown, summarize
from .treesitter.typescript_extractor import parse_file


@dataclass
class AnalysisResult:
    root: Path
    files: List[str] = field(default_factory=list)
    functions: List[FunctionSignature] = field(default_factory=list)
    types: List[TypeSignature] = field(default_factory=list)
    failed_files: List[str] = field(default_factory=list)

    @property
    def procedure_count(self) -> int:
        return sum(1 for sig in self.functions if sig.is_procedure)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root": str(self.root),
            "files": list(self.files),
            "functions": [sig.to_dict() for sig in self.functions],
            "types": [sig.to_dict() for sig in self.types],
            "failed_files": list(self.failed_files),
        }


class ProjectAnalyzer:
    """Runs signature extraction over every source file of a project."""

    def __init__(self, config: ProjectStructureConfig, enable_performance_monitoring: bool = True):
        self.config = config
        self.enable_performance_monitoring = enable_performance_monitoring
        self.performance_metrics = {
            "total_files": 0,
            "failed_files": 0,
            "total_functions": 0,
            "total_types": 0,
            "processing_time": 0.0,
        }

    def analyze(self, root: Optional[Path] = None) -> AnalysisResult:
        root = Path(root) if root is not None else self.config.require_workspace()
        logging.info(f"Scanning directory: {root}")
        if self.config.blacklist:
            logging.info(f"Blacklist patterns: {', '.join(self.config.blacklist)}")

        result = AnalysisResult(root=root, files=discover_files(root, self.config.blacklist))
        for file_path in result.files:
            self.extract_from_file(file_path, result)
        return result

    def extract_from_file(self, file_path: str, result: AnalysisResult) -> bool:
        """Parse one file into `result`; a failure is logged and the file skipped."""
        start_time = time.time()
        try:
            parsed = parse_file(
                file_path,
                type_depth=self.config.type_depth,
                router_factories=self.config.router_factories,
            )
        except Exception as e:
            logging.warning(f"Error parsing file {file_path}: {e}")
            result.failed_files.append(file_path)
            if self.enable_performance_monitoring:
                self.performance_metrics["failed_files"] += 1
            return False

        result.functions.extend(parsed.functions)
        if self.config.include_types:
            result.types.extend(parsed.types)

        if self.enable_performance_monitoring:
            self.performance_metrics["total_files"] += 1
            self.performance_metrics["total_functions"] += len(parsed.functions)
            self.performance_metrics["total_types"] += len(parsed.types)
            self.performance_metrics["processing_time"] += time.time() - start_time
        return True

    def render(self, result: AnalysisResult) -> str:
        markdown = generate_markdown(
            result.functions,
            result.root,
            exported_only=self.config.exported_only,
            types=result.types,
        )
        return summarize(
            markdown,
            files_scanned=len(result.files),
            functions=result.functions,
            types=result.types,
            exported_only=self.config.exported_only,
            blacklist=self.config.blacklist,
        )
