"""
api-desk command line: run any frontend command from a shell.

    api-desk list_collections
    api-desk get_collection --args '{"id": "abc"}'
    api-desk proxy_request --args '{"url": "https://example.test", "method": "get"}'
    api-desk import_collection --args-file args.json
    api-desk commands

The result envelope is printed as JSON; the exit status is 0 on success and
1 on failure.
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any

from api_desk.services.commands import CommandService, execute_command, get_command_registry
from api_desk.utils.logger import configure_from_env, get_logger

logger = get_logger()


def _load_args(args: argparse.Namespace) -> dict[str, Any]:
    if args.args_file:
        with open(args.args_file, "r", encoding="utf-8") as f:
            raw = f.read()
    else:
        raw = args.args or "{}"
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("command arguments must be a JSON object")
    return data


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="api-desk", description="api-desk backend commands")
    parser.add_argument("--data-dir", help="Data root (overrides API_DESK_DATA_DIR)")
    parser.add_argument("--log-level", help="Logging level (overrides API_DESK_LOG_LEVEL)")
    parser.add_argument("command", help="Command name, or 'commands' to list them")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--args", help="Command arguments as a JSON object")
    group.add_argument("--args-file", help="Path to a JSON file holding the command arguments")
    parser.add_argument("--compact", action="store_true", help="Print the envelope on one line")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.data_dir:
        os.environ["API_DESK_DATA_DIR"] = str(Path(args.data_dir).expanduser())
    if args.log_level:
        os.environ["API_DESK_LOG_LEVEL"] = args.log_level
    configure_from_env()

    service = CommandService.for_data_root()

    if args.command == "commands":
        print("\n".join(sorted(get_command_registry(service))))
        return 0

    try:
        command_args = _load_args(args)
    except (OSError, ValueError) as e:
        logger.error("Could not read arguments for %s: %s", args.command, e)
        envelope: dict[str, Any] = {
            "success": False,
            "message": f"Invalid arguments: {e}",
            "error": str(e),
            "error_type": "InvalidArguments",
        }
    else:
        envelope = execute_command(args.command, command_args, service)

    indent = None if args.compact else 2
    print(json.dumps(envelope, ensure_ascii=False, indent=indent))
    return 0 if envelope.get("success") else 1


if __name__ == "__main__":
    sys.exit(main())
