from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from .core import PreconditionError, get_cached_settings
from .llm import QueryStyle, generate_query
from .schema import extract
from .storage import JsonFileStorage, StoragePort, Workspace

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    settings = get_cached_settings()
    parser = argparse.ArgumentParser(
        prog="query-genie",
        description="Generate SQL or Rails Active Record queries from a schema and a request",
    )
    parser.add_argument(
        "--state",
        default=settings.state_path,
        help="Path to the saved API key/schema state file",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Generate a query")
    gen.add_argument("style", choices=[s.value for s in QueryStyle])
    gen.add_argument("prompt", help="Natural-language request, e.g. 'list all organizations'")
    gen.add_argument(
        "--schema-file",
        help="Import this schema file (replacing the saved schema) before generating",
    )

    key = sub.add_parser("key", help="Manage the saved API key")
    key_sub = key.add_subparsers(dest="action", required=True)
    key_set = key_sub.add_parser("set")
    key_set.add_argument("value")
    key_sub.add_parser("clear")

    schema = sub.add_parser("schema", help="Manage the saved schema text")
    schema_sub = schema.add_subparsers(dest="action", required=True)
    schema_import = schema_sub.add_parser("import", help="Replace the saved schema with a file")
    schema_import.add_argument("path")
    schema_sub.add_parser("show", help="Print the saved schema text")
    schema_sub.add_parser("summary", help="Print the extracted schema summary")
    schema_sub.add_parser("clear", help="Forget the saved schema")

    return parser


def _run_generate(args: argparse.Namespace, workspace: Workspace) -> int:
    if args.schema_file:
        workspace.import_schema_file(args.schema_file)

    try:
        result = generate_query(args.style, args.prompt, workspace.schema_text, workspace.api_key)
    except PreconditionError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    print(f"# {result.title}")
    if not result.ok:
        print(result.error, file=sys.stderr)
        return 1
    print(result.output)
    return 0


def _run_key(args: argparse.Namespace, workspace: Workspace) -> int:
    if args.action == "set":
        workspace.save_api_key(args.value)
        print("API key saved")
    else:
        workspace.clear_api_key()
        print("API key cleared")
    return 0


def _run_schema(args: argparse.Namespace, workspace: Workspace) -> int:
    if args.action == "import":
        text = workspace.import_schema_file(args.path)
        print(f"Imported {len(text)} chars from {args.path}")
    elif args.action == "show":
        print(workspace.schema_text)
    elif args.action == "summary":
        print(extract(workspace.schema_text).summary)
    else:
        workspace.clear_schema()
        print("Schema cleared")
    return 0


def main(argv: Sequence[str] | None = None, storage: StoragePort | None = None) -> int:
    settings = get_cached_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args = build_parser().parse_args(argv)
    workspace = Workspace(storage or JsonFileStorage(args.state))

    if args.command == "generate":
        return _run_generate(args, workspace)
    if args.command == "key":
        return _run_key(args, workspace)
    return _run_schema(args, workspace)


if __name__ == "__main__":
    sys.exit(main())
