import os
import yaml
import logging
from typing import List, Optional, Dict, Any, Mapping, Sequence
from pathlib import Path
from pydantic import BaseModel, Field, field_validator

from project_structure.core.treesitter.procedure_detector import DEFAULT_ROUTER_FACTORIES
from project_structure.core.treesitter.type_renderer import DEFAULT_TYPE_DEPTH

# Default configuration values
DEFAULT_CONFIG_PATH = "project-structure.config.yaml"
DEFAULT_WORKSPACE = None
DEFAULT_BLACKLIST: List[str] = []
DEFAULT_EXPORTED_ONLY = False
DEFAULT_INCLUDE_TYPES = True

WORKSPACE_ENV_VAR = "WORKSPACE_FOLDER_PATHS"
WORKSPACE_ARG = "--workspace"
BLACKLIST_ARG = "--blacklist"


class WorkspaceError(ValueError):
    """Raised when no usable workspace root can be resolved."""


class ProjectStructureConfig(BaseModel):
    """
    Central configuration model for ProjectStructure.
    """
    workspace: Optional[str] = Field(default=DEFAULT_WORKSPACE)
    blacklist: List[str] = Field(default_factory=lambda: list(DEFAULT_BLACKLIST))
    type_depth: int = Field(default=DEFAULT_TYPE_DEPTH)
    exported_only: bool = DEFAULT_EXPORTED_ONLY
    include_types: bool = DEFAULT_INCLUDE_TYPES
    router_factories: List[str] = Field(default_factory=lambda: list(DEFAULT_ROUTER_FACTORIES))

    # Allow extra fields for flexibility
    class Config:
        extra = "allow"

    @field_validator("type_depth")
    @classmethod
    def _check_type_depth(cls, value: int) -> int:
        if value < 0:
            raise ValueError("type_depth must be non-negative")
        return value

    @field_validator("blacklist", mode="before")
    @classmethod
    def _split_blacklist(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_blacklist_value(value)
        return value

    def require_workspace(self) -> Path:
        if not self.workspace:
            raise WorkspaceError("workspace must be set in config to scan a project")
        return Path(self.workspace).resolve()


def load_config(
    config_path: Optional[str] = None,
    cli_args: Optional[Dict[str, Any]] = None
) -> ProjectStructureConfig:
    """
    Load configuration from file and overrides.

    Priority:
    1. CLI Arguments (if provided and not None)
    2. Config File (if provided or found at default path)
    3. Default Values

    Args:
        config_path: Path to the YAML config file. If None, tries 'project-structure.config.yaml'.
        cli_args: Dictionary of CLI arguments to override config values.

    Returns:
        ProjectStructureConfig: The resolved configuration object.
    """
    config_data: Dict[str, Any] = {}

    target_path = config_path if config_path else DEFAULT_CONFIG_PATH
    path_obj = Path(target_path)

    if path_obj.exists() and path_obj.is_file():
        try:
            with open(path_obj, 'r', encoding='utf-8') as f:
                file_data = yaml.safe_load(f)
                if file_data:
                    config_data.update(file_data)
            logging.info(f"Loaded configuration from {target_path}")
        except (OSError, yaml.YAMLError) as e:
            logging.warning(f"Failed to load config file {target_path}: {e}")
    elif config_path:
        logging.warning(f"Config file not found at explicit path: {config_path}")
    else:
        logging.info(f"No config file found at {DEFAULT_CONFIG_PATH}, using defaults.")

    if cli_args:
        for key, value in cli_args.items():
            if value is not None:
                config_data[key] = value

    return ProjectStructureConfig(**config_data)


def parse_blacklist_value(value: str) -> List[str]:
    """Split a comma-separated blacklist, dropping blanks."""
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_blacklist_arg(argv: Sequence[str]) -> List[str]:
    """Blacklist entries from a `--blacklist a,b` pair in argv."""
    if BLACKLIST_ARG in argv:
        index = list(argv).index(BLACKLIST_ARG)
        if index + 1 < len(argv):
            return parse_blacklist_value(argv[index + 1])
    return []


def resolve_workspace(env: Optional[Mapping[str, str]] = None, argv: Optional[Sequence[str]] = None) -> Path:
    """
    Resolve the directory to scan.

    The WORKSPACE_FOLDER_PATHS environment variable wins when it names an
    existing absolute directory; otherwise `--workspace <path>` in argv must.
    """
    env = os.environ if env is None else env
    argv = [] if argv is None else list(argv)

    candidate = env.get(WORKSPACE_ENV_VAR)
    if candidate and os.path.isabs(candidate) and os.path.exists(candidate):
        return Path(candidate)

    if WORKSPACE_ARG in argv:
        index = argv.index(WORKSPACE_ARG)
        if index + 1 < len(argv) and argv[index + 1]:
            candidate_path = argv[index + 1]
            if os.path.isabs(candidate_path) and os.path.exists(candidate_path):
                return Path(candidate_path)
            raise WorkspaceError(
                "Error: The --workspace path provided is invalid. Please fix the path and try again."
            )

    raise WorkspaceError(
        "Error: WORKSPACE_FOLDER_PATHS env variable or --workspace argument is missing or invalid. "
        "Please set a valid absolute path."
    )
