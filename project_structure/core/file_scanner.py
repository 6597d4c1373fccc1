"""
Discovery of TypeScript/JavaScript source files under a project root.

Exclusions use gitignore-style patterns matched with pathspec.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

import pathspec

from .treesitter.parser import TSX_SUFFIXES, TYPESCRIPT_SUFFIXES

SOURCE_EXTENSIONS = TYPESCRIPT_SUFFIXES | TSX_SUFFIXES

EXCLUDED_DIRECTORIES = [
    "node_modules", "dist", "build", ".next", ".turbo", ".cache", ".yarn", ".pnpm",
    ".eslintcache", ".vite", ".output", ".vercel", ".firebase", ".aws-sam",
    ".serverless", ".tmp", ".temp", ".idea", ".vscode", ".history", ".git",
    ".husky", ".storybook", ".config", ".settings", ".local", ".DS_Store",
    ".coverage", ".nyc_output", ".svelte-kit", ".expo", ".expo-shared",
    ".cypress", ".playwright", ".test", ".test-results", ".reports",
    ".snapshots", ".mocks", ".cache-loader",
]

# ShadCN-style generated UI components add a lot of noise
DEFAULT_EXCLUDE_PATTERNS = (
    [f"**/{name}/**" for name in EXCLUDED_DIRECTORIES]
    + ["**/src/components/ui/**", "**/.env*/**"]
)

_WILDCARDS = ("*", "?", "[")


def normalize_blacklist_pattern(entry: str) -> str:
    """
    Turn a user blacklist entry into a glob:

    - globs and paths with '/' are kept as given (minus a leading './')
    - names with a dot are treated as files anywhere: '**/<name>'
    - bare names are treated as folders anywhere: '**/<name>/**'
    """
    entry = entry.strip().replace("\\", "/")
    while entry.startswith("./"):
        entry = entry[2:]
    if any(ch in entry for ch in _WILDCARDS) or "/" in entry:
        return entry
    if "." in entry:
        return f"**/{entry}"
    return f"**/{entry}/**"


def build_exclude_spec(blacklist: Optional[Iterable[str]] = None) -> pathspec.PathSpec:
    patterns = list(DEFAULT_EXCLUDE_PATTERNS)
    patterns.extend(normalize_blacklist_pattern(entry) for entry in (blacklist or []) if entry.strip())
    return pathspec.PathSpec.from_lines("gitwildmatch", patterns)


def discover_files(root: Union[str, Path], blacklist: Optional[Iterable[str]] = None) -> List[str]:
    """
    Find all source files under `root`, honoring the fixed exclusions plus
    the caller's blacklist.

    Returns:
        Sorted absolute paths.
    """
    root_path = Path(root)
    if not root_path.is_absolute():
        root_path = Path.cwd() / root_path
    root_path = root_path.resolve()

    if not root_path.is_dir():
        raise FileNotFoundError(f"Directory not found: {root_path}")

    spec = build_exclude_spec(blacklist)
    files = set()
    for file_path in root_path.rglob("*"):
        if file_path.suffix not in SOURCE_EXTENSIONS or not file_path.is_file():
            continue
        relative = file_path.relative_to(root_path).as_posix()
        if spec.match_file(relative):
            continue
        files.add(str(file_path))

    logging.info(f"Found {len(files)} source files to analyze under {root_path}.")
    return sorted(files)
