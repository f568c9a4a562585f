"""
Argument parsing for the remote-resources command line.
"""

import argparse
from pathlib import Path

from ..models.resource import RESOURCE_TYPES


def add_global_arguments(parser: argparse.ArgumentParser) -> None:
    """Add configuration and logging arguments."""
    parser.add_argument(
        "-c", "--config", type=Path, help="Configuration file (YAML or JSON)"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--structured-logs",
        action="store_true",
        help="Emit log records as JSON lines",
    )


def add_resource_commands(subparsers: "argparse._SubParsersAction") -> None:
    """Add the single-resource subcommands."""
    get = subparsers.add_parser("get", help="Retrieve a resource")
    get.add_argument("resource_id", help="Resource identifier, e.g. forecast/<24 chars>")

    delete = subparsers.add_parser("delete", help="Delete a resource")
    delete.add_argument("resource_id", help="Resource identifier")

    ready = subparsers.add_parser(
        "ready", help="Check whether a resource finished processing"
    )
    ready.add_argument("resource_id", help="Resource identifier")

    update = subparsers.add_parser("update", help="Update a resource")
    update.add_argument("resource_id", help="Resource identifier")
    update.add_argument("changes", help="Changes as a JSON object")

    listing = subparsers.add_parser("list", help="List resources of one type")
    listing.add_argument(
        "-t",
        "--type",
        dest="type_name",
        required=True,
        choices=sorted(RESOURCE_TYPES),
        help="Resource type to list",
    )
    listing.add_argument(
        "-q", "--query", help='Filter string, e.g. "limit=5;status.code=5"'
    )


def add_create_command(subparsers: "argparse._SubParsersAction") -> None:
    """Add the create subcommand."""
    creatable = sorted(
        name for name, resource_type in RESOURCE_TYPES.items() if resource_type.creatable
    )
    create = subparsers.add_parser(
        "create", help="Create a resource from its dependency"
    )
    create.add_argument("type_name", choices=creatable, help="Type to create")
    create.add_argument("dependency_id", help="Identifier of the dependency")
    create.add_argument("--input", dest="input_data", help="Input data as a JSON object")
    create.add_argument("--args", dest="create_args", help="Creation arguments as a JSON object")
    create.add_argument(
        "--interval",
        type=int,
        help="Milliseconds between dependency checks (0 skips the wait)",
    )
    create.add_argument(
        "--attempts", type=int, help="Maximum number of dependency checks"
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="remote-resources",
        description="Manage asynchronously processed remote resources",
    )
    add_global_arguments(parser)

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True
    add_resource_commands(subparsers)
    add_create_command(subparsers)
    return parser
