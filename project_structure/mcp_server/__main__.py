import argparse
import logging
import sys
import asyncio
from project_structure.mcp_server.server import server
from project_structure.core.config import load_config, parse_blacklist_value

def main():
    parser = argparse.ArgumentParser(
        description="ProjectStructure MCP Server - Function, procedure and type signatures for TS/JS projects",
        epilog="Example: python -m project_structure.mcp_server --workspace /abs/path/to/project"
    )
    parser.add_argument(
        "--config",
        help="Path to configuration YAML file (default: project-structure.config.yaml)"
    )
    parser.add_argument(
        "--workspace",
        help="Absolute path of the project to scan (WORKSPACE_FOLDER_PATHS takes precedence)"
    )
    parser.add_argument(
        "--blacklist",
        type=parse_blacklist_value,
        help="Comma-separated folders, files or globs to exclude from scanning"
    )

    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, stream=sys.stderr)

    # The workspace is resolved per tool call so WORKSPACE_FOLDER_PATHS can win
    cli_args = {k: v for k, v in vars(args).items() if v is not None and k not in ("config", "workspace")}
    server.config = load_config(config_path=args.config, cli_args=cli_args)

    logging.info(f"Server starting with config: {server.config.model_dump()}")
    logging.info("Server running on stdio")
    try:
        asyncio.run(server.run_stdio_async())
    except KeyboardInterrupt:
        logging.info("Server stopped")

if __name__ == "__main__":
    main()
