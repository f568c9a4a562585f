#!/usr/bin/env python3
"""
Command-line interface for the remote_resources library.

Every command prints the resulting document as JSON on stdout and exits with
status 0, or prints the error as JSON on stderr and exits with status 1.
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, List, Optional

from pydantic import ValidationError

from ..api import ResourceApi
from ..client import ResourceClient
from ..config.loader import ConfigLoader
from ..config.models import ClientConfig, LogLevel
from ..exceptions import ConfigurationError
from ..logging import setup_logging
from ..models.base import ErrorKind, ReadinessVerdict, ResourceResult
from ..models.resource import RESOURCE_TYPES, PollingPolicy
from ..validation import resource_type_of
from .parsers import create_parser

logger = logging.getLogger(__name__)


def print_json(data: Any, stream=None) -> None:
    print(json.dumps(data, indent=2, default=str), file=stream or sys.stdout)


def emit(result: ResourceResult) -> int:
    """Print a result and return the matching exit status."""
    if result.is_success:
        print_json(result.document)
        return 0

    print_json(
        {
            "error": result.error,
            "kind": result.error_kind.value if result.error_kind else None,
            "resource": result.resource_id,
            "status_code": result.status_code,
        },
        sys.stderr,
    )
    return 1


def client_for(api: ResourceApi, resource_id: str) -> Optional[ResourceClient]:
    type_name = resource_type_of(resource_id)
    if type_name is None or type_name not in RESOURCE_TYPES:
        return None
    return api.resource(type_name)


def parse_mapping(raw: Optional[str], label: str) -> Any:
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"{label} is not valid JSON: {e}") from e


def creation_policy(args: argparse.Namespace, config: ClientConfig) -> PollingPolicy:
    """Polling policy from --interval/--attempts over the configured one."""
    return PollingPolicy(
        interval_millis=(
            config.polling.interval_millis if args.interval is None else args.interval
        ),
        max_attempts=(
            config.polling.max_attempts if args.attempts is None else args.attempts
        ),
    )


async def run(args: argparse.Namespace, api: ResourceApi) -> int:
    """
    Execute one parsed command against ``api``.

    Args:
        args: Parsed command line
        api: API object the command runs against

    Returns:
        Process exit status
    """
    if args.command == "list":
        return emit(await api.resource(args.type_name).list(args.query))

    if args.command == "create":
        try:
            input_data = parse_mapping(args.input_data, "--input")
            create_args = parse_mapping(args.create_args, "--args")
            policy = creation_policy(args, api.config)
        except ValidationError as e:
            return emit(
                ResourceResult.failure(
                    ErrorKind.INVALID_INPUT,
                    f"Invalid polling options: {e.errors()[0]['msg']}",
                )
            )
        except ValueError as e:
            return emit(ResourceResult.failure(ErrorKind.INVALID_INPUT, str(e)))
        result = await api.resource(args.type_name).create(
            args.dependency_id, input_data, create_args, policy=policy
        )
        return emit(result)

    client = client_for(api, args.resource_id)
    if client is None:
        return emit(
            ResourceResult.failure(
                ErrorKind.INVALID_INPUT,
                f"Unrecognized resource id: {args.resource_id!r}",
            )
        )

    if args.command == "get":
        return emit(await client.get(args.resource_id))
    if args.command == "delete":
        return emit(await client.delete(args.resource_id))
    if args.command == "update":
        return emit(await client.update(args.resource_id, args.changes))
    if args.command == "ready":
        verdict = await client.readiness(args.resource_id)
        print_json({"resource": args.resource_id, "readiness": verdict.value})
        return 0 if verdict is ReadinessVerdict.READY else 1

    raise ValueError(f"Unknown command: {args.command}")


def configure(args: argparse.Namespace, loader: Optional[ConfigLoader] = None) -> ClientConfig:
    """Load configuration and set up logging for a CLI run."""
    config = (loader or ConfigLoader()).load_config(
        args.config, require_credentials=True
    )
    logging_config = config.logging.model_copy(
        update={
            "level": LogLevel.DEBUG if args.verbose else config.logging.level,
            "enable_structured": args.structured_logs or config.logging.enable_structured,
        }
    )
    setup_logging(logging_config)
    return config


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI function."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = configure(args)
    except ConfigurationError as e:
        print_json({"error": e.message, "kind": "configuration"}, sys.stderr)
        return 1

    async def _run() -> int:
        async with ResourceApi(config) as api:
            return await run(args, api)

    try:
        return asyncio.run(_run())
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 1


if __name__ == "__main__":
    sys.exit(main())
