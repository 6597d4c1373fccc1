from mcp.server.fastmcp import FastMCP
import asyncio
import logging
import sys
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator
from pathlib import Path
from dataclasses import dataclass
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from project_structure.core.analyzer import ProjectAnalyzer
from project_structure.core.config import (
    ProjectStructureConfig,
    WorkspaceError,
    parse_blacklist_arg,
    resolve_workspace,
)
from project_structure.core.treesitter import parse_file
from project_structure.core.treesitter.type_renderer import DEFAULT_TYPE_DEPTH


class MCPError(Exception):
    """Custom MCP error with code and hint."""

    def __init__(self, code: int, message: str, hint: str = ""):
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = {"hint": hint} if hint else {}


class PingResponse(BaseModel):
    status: str
    echoed: str


class StructureResponse(BaseModel):
    text: str
    files_scanned: int = 0
    function_count: int = 0
    procedure_count: int = 0
    type_count: int = 0


class FileSignaturesResponse(BaseModel):
    file_path: str
    functions: List[Dict[str, Any]]
    types: List[Dict[str, Any]]


# Global logger for MCP
logger = logging.getLogger("mcp")
logger.addHandler(logging.StreamHandler(sys.stderr))
logger.setLevel(logging.INFO)


@dataclass
class AppContext:
    config: Optional[ProjectStructureConfig] = None


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[AppContext]:
    config = getattr(server, 'config', None)
    if config is None:
        logger.info("No config provided to server, using defaults")
    try:
        yield AppContext(config=config)
    finally:
        logger.info("Server shutdown")


server = FastMCP("ProjectStructureMCP", lifespan=lifespan)


def _server_config() -> ProjectStructureConfig:
    config = getattr(server, 'config', None)
    return config if config is not None else ProjectStructureConfig()


def build_structure_document(config: ProjectStructureConfig) -> StructureResponse:
    """Scan the configured workspace and render the structure document."""
    analyzer = ProjectAnalyzer(config)
    result = analyzer.analyze()

    if not result.files:
        return StructureResponse(text="No code files found.")

    return StructureResponse(
        text=analyzer.render(result),
        files_scanned=len(result.files),
        function_count=len(result.functions) - result.procedure_count,
        procedure_count=result.procedure_count,
        type_count=len(result.types),
    )


@server.tool(name="ping")
async def ping_tool(message: str = Field(description="Message to echo")) -> PingResponse:
    """
    Simple ping tool to echo a message.
    """
    return PingResponse(status="ok", echoed=message)


@server.tool(
    name="get-project-structure",
    description=(
        "Extracts function signatures, tRPC procedures and type definitions from "
        "JavaScript/TypeScript for better understanding of the project. You should always "
        "use this tool before starting any coding session after user asks for something"
    ),
)
async def get_project_structure() -> StructureResponse:
    config = _server_config()

    try:
        workspace = resolve_workspace(argv=sys.argv)
    except WorkspaceError as e:
        if not config.workspace:
            return StructureResponse(text=str(e))
        workspace = config.require_workspace()

    blacklist = config.blacklist or parse_blacklist_arg(sys.argv)
    scan_config = config.model_copy(update={"workspace": str(workspace), "blacklist": blacklist})

    try:
        return await asyncio.to_thread(build_structure_document, scan_config)
    except Exception as e:
        logger.error(f"Error generating structure document: {e}")
        return StructureResponse(text=f"Error generating structure document: {e}")


@server.tool(name="get-file-signatures")
async def get_file_signatures(
    file_path: str = Field(description="Absolute path of a TypeScript/JavaScript file"),
    type_depth: int = Field(default=DEFAULT_TYPE_DEPTH, description="Nesting levels of types to render"),
) -> FileSignaturesResponse:
    """
    Extract the function, procedure and type signatures of a single file.
    """
    path = Path(file_path)
    if not path.is_file():
        raise MCPError(4001, f"File not found: {file_path}", "Pass an absolute path to an existing source file")
    if type_depth < 0:
        raise MCPError(4001, "Invalid parameters", "type_depth must be non-negative")

    config = _server_config()
    parsed = parse_file(path, type_depth=type_depth, router_factories=config.router_factories)
    return FileSignaturesResponse(
        file_path=str(path),
        functions=[sig.to_dict() for sig in parsed.functions],
        types=[sig.to_dict() for sig in parsed.types],
    )
