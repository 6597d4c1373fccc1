"""
Command line entry point: scan a project or parse a single file.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from project_structure.core.analyzer import ProjectAnalyzer
from project_structure.core.config import load_config, parse_blacklist_value
from project_structure.core.treesitter import parse_file


def _add_common_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", help="Path to configuration YAML file (default: project-structure.config.yaml)")
    parser.add_argument("--type-depth", type=int,
                        help="Nesting levels of types to render before collapsing to '...' (default: 2).")


def _run_scan(args: argparse.Namespace) -> int:
    cli_overrides = {}
    if args.directory:
        cli_overrides['workspace'] = str(Path(args.directory).resolve())
    if args.type_depth is not None:
        cli_overrides['type_depth'] = args.type_depth
    if args.blacklist:
        cli_overrides['blacklist'] = args.blacklist
    if args.exported_only:
        cli_overrides['exported_only'] = True
    if args.no_types:
        cli_overrides['include_types'] = False

    config = load_config(config_path=args.config, cli_args=cli_overrides)
    root_dir = Path(config.workspace).resolve() if config.workspace else Path.cwd()
    if not root_dir.is_dir():
        print(f"❌ Error: {root_dir} is not a valid directory for analysis.", file=sys.stderr)
        return 1

    analyzer = ProjectAnalyzer(config)
    result = analyzer.analyze(root_dir)

    if args.format == "json":
        print(json.dumps(result.to_dict(), indent=2))
    elif not result.files:
        print("No code files found.")
    else:
        print(analyzer.render(result))

    if result.failed_files:
        print(f"⚠️  {len(result.failed_files)} files could not be parsed.", file=sys.stderr)
    return 0


def _run_parse(args: argparse.Namespace) -> int:
    file_path = Path(args.file)
    if not file_path.is_file():
        print(f"❌ Error: File not found: {file_path}", file=sys.stderr)
        return 1

    config = load_config(config_path=args.config)
    type_depth = args.type_depth if args.type_depth is not None else config.type_depth
    parsed = parse_file(file_path, type_depth=type_depth, router_factories=config.router_factories)
    print(json.dumps(parsed.to_dict(), indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="ProjectStructure CLI: function, tRPC procedure and type signatures of TS/JS projects."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    scan = subparsers.add_parser("scan", help="Scan a project and print its structure document")
    scan.add_argument(
        "directory",
        nargs='?',
        default=None,
        help="Path to the project directory. If not provided, uses 'workspace' from config or the current directory.",
    )
    _add_common_flags(scan)
    scan.add_argument("--exported-only", action="store_true",
                      help="Only list exported functions and types (procedures are always listed).")
    scan.add_argument("--blacklist", type=parse_blacklist_value,
                      help="Comma-separated folders, files or globs to exclude from scanning.")
    scan.add_argument("--format", choices=["markdown", "json"], default="markdown",
                      help="Output format.")
    scan.add_argument("--no-types", action="store_true",
                      help="Do not list type declarations.")
    scan.set_defaults(func=_run_scan)

    parse = subparsers.add_parser("parse", help="Print the signatures of a single file as JSON")
    parse.add_argument("file", help="Path to a TypeScript/JavaScript source file")
    _add_common_flags(parse)
    parse.set_defaults(func=_run_parse)

    return parser


def main():
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args()

    logging.basicConfig(level=logging.WARNING, stream=sys.stderr)

    try:
        exit_code = args.func(args)
        sys.exit(exit_code)
    except Exception as e:
        print(f"\n❌ An unexpected error occurred: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc(file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
