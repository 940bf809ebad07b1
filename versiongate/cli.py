# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Command-line interface for versiongate.

This module provides the main CLI entry point for the versiongate tool,
offering commands to evaluate, inspect and prepare staged rollouts.

Commands:

    check: Decide whether a node should upgrade
    cursor: Convert a rollout percentage into a cursor
    candidate: Test whether a node falls inside a rollout
    validate: Validate a requirement document
    info: Show build metadata for this binary

Example:
    Check a node against the version server:
        ```bash
        $ versiongate check https://version.example.com/ \\
            --identity 0a1b...ff --current v1.0.0 --process storagenode
        ```

    Compute the cursor for a 12.5% rollout:
        ```bash
        $ versiongate cursor 12.5
        ```

    Validate a local requirement document:
        ```bash
        $ versiongate validate versions.yaml
        ```

Exit Codes:

- 0: Success
- 1: Error (invalid input, document, or network failure)

Note:
    The CLI uses argparse for command parsing (stdlib, zero dependencies).
    Each command has its own handler function (cmd_<command>).
    Verbose mode shows full tracebacks on errors for debugging.

"""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
import sys
import traceback

from versiongate.build_info import BuildInfo
from versiongate.core import check_node
from versiongate.exceptions import VersionGateError
from versiongate.logging import get_logger, set_global_logger
from versiongate.rollout import (
    RolloutConfig,
    RolloutCursor,
    is_candidate,
    percentage_to_cursor_legacy,
    percentage_to_cursor_precise,
)
from versiongate.validation import validate_document


def _parse_identity(text: str) -> bytes:
    try:
        return bytes.fromhex(text)
    except ValueError as err:
        raise VersionGateError(f"node identity must be hex: {err}") from err


def _report_error(err: Exception, args: argparse.Namespace) -> int:
    print(f"Error: {err}")
    if getattr(args, "verbose", False) or getattr(args, "debug", False):
        traceback.print_exc()
    return 1


def cmd_check(args: argparse.Namespace) -> int:
    """Handler for 'versiongate check' command.

    Loads the requirement document (file or URL), selects the requirement
    for the given process and decides whether the node should upgrade.

    Returns:
        Exit code (0 when a decision was made, 1 on error).

    """
    set_global_logger(get_logger(verbose=args.verbose, debug=args.debug))

    try:
        identity = _parse_identity(args.identity)
        result = check_node(
            args.source,
            identity=identity,
            current_version=args.current,
            process=args.process,
            path=args.path,
            timeout=args.timeout,
        )
    except VersionGateError as err:
        return _report_error(err, args)

    print("=" * 70)
    print("UPDATE DECISION")
    print("=" * 70)
    print(f"Source:          {result.source}")
    if result.process:
        print(f"Process:         {result.process}")
    print(f"Current Version: {result.current_version}")
    print(f"Action:          {result.action}")
    if result.target_version:
        print(f"Target Version:  {result.target_version}")
        print(f"Target URL:      {result.target_url}")
    print(f"Reason:          {result.reason}")
    print("=" * 70)

    return 0


def cmd_cursor(args: argparse.Namespace) -> int:
    """Handler for 'versiongate cursor' command."""
    try:
        if args.legacy:
            pct = int(args.percent)
            if pct != args.percent:
                print("Error: --legacy only accepts whole percentages")
                return 1
            cursor = percentage_to_cursor_legacy(pct)
        else:
            cursor = percentage_to_cursor_precise(args.percent)
    except (OverflowError, ValueError) as err:
        return _report_error(err, args)

    print(cursor.encode())
    return 0


def cmd_candidate(args: argparse.Namespace) -> int:
    """Handler for 'versiongate candidate' command.

    Prints "candidate" or "not a candidate"; the exit code is 0 either way.
    """
    try:
        identity = _parse_identity(args.identity)
        seed = RolloutCursor.decode(args.seed)
        if args.percent is not None:
            cursor = percentage_to_cursor_precise(args.percent)
        else:
            cursor = RolloutCursor.decode(args.cursor or "")
        candidate = is_candidate(identity, RolloutConfig(seed=seed, cursor=cursor))
    except (VersionGateError, ValueError) as err:
        return _report_error(err, args)

    print("candidate" if candidate else "not a candidate")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Handler for 'versiongate validate' command.

    Returns:
        Exit code (0 for a valid document, 1 for invalid).

    """
    set_global_logger(get_logger(verbose=args.verbose, debug=False))

    document_path = Path(args.document).resolve()
    print(f"Validating requirement document: {document_path}")
    print()

    result = validate_document(document_path)

    print("=" * 70)
    print("VALIDATION RESULTS")
    print("=" * 70)
    print(f"Document:      {result.document_path}")
    print(f"Status:        {result.status.upper()}")
    print(f"Requirements:  {result.process_count}")
    print()

    if result.warnings:
        print(f"Warnings ({len(result.warnings)}):")
        for warning in result.warnings:
            print(f"  [WARNING] {warning}")
        print()

    if result.errors:
        print(f"Errors ({len(result.errors)}):")
        for error in result.errors:
            print(f"  [X] {error}")
        print()

    print("=" * 70)

    if result.status == "valid":
        print()
        print("[SUCCESS] Document is valid!")
        return 0
    print()
    print(f"[FAILED] Document validation failed with {len(result.errors)} error(s).")
    return 1


def cmd_info(args: argparse.Namespace) -> int:
    """Handler for 'versiongate info' command."""
    logger = get_logger(verbose=args.verbose, debug=False)
    set_global_logger(logger)
    try:
        build = BuildInfo.from_environ()
    except VersionGateError as err:
        return _report_error(err, args)

    build.log(logger)
    if args.json:
        print(build.to_json())
    else:
        print(build, end="")
    return 0


def _package_version() -> str:
    try:
        return version("versiongate")
    except PackageNotFoundError:
        return "unknown"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="versiongate",
        description="versiongate - staged rollout update decisions for fleet nodes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"versiongate {_package_version()}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # 'check' command
    parser_check = subparsers.add_parser(
        "check",
        help="Decide whether a node should upgrade",
        description="Evaluate a requirement document (file or URL) for one node.",
    )
    parser_check.add_argument(
        "source",
        help="Path or http(s) URL of the requirement document",
    )
    parser_check.add_argument(
        "--identity",
        required=True,
        help="Node identity as hex",
    )
    parser_check.add_argument(
        "--current",
        required=True,
        help="Version the node currently runs (e.g. v1.0.0)",
    )
    parser_check.add_argument(
        "--process",
        default=None,
        help="Process name in a multi-process document (e.g. storagenode)",
    )
    parser_check.add_argument(
        "--path",
        default=None,
        help="JSONPath to the requirement inside the document (overrides --process)",
    )
    parser_check.add_argument(
        "--timeout",
        type=float,
        default=30,
        help="HTTP timeout in seconds when fetching from a URL (default: 30)",
    )
    parser_check.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show progress and decision details",
    )
    parser_check.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show hash positions and raw documents (implies --verbose)",
    )
    parser_check.set_defaults(func=cmd_check)

    # 'cursor' command
    parser_cursor = subparsers.add_parser(
        "cursor",
        help="Convert a rollout percentage into a cursor",
        description="Print the hex cursor for a percentage of nodes.",
    )
    parser_cursor.add_argument(
        "percent",
        type=float,
        help="Percentage of nodes in the rollout (0-100)",
    )
    parser_cursor.add_argument(
        "--legacy",
        action="store_true",
        help="Use the whole-percentage mapping",
    )
    parser_cursor.set_defaults(func=cmd_cursor)

    # 'candidate' command
    parser_candidate = subparsers.add_parser(
        "candidate",
        help="Test whether a node falls inside a rollout",
        description="Check rollout candidacy for a node identity.",
    )
    parser_candidate.add_argument("--identity", required=True, help="Node identity as hex")
    parser_candidate.add_argument("--seed", default="", help="Rollout seed as hex")
    cursor_group = parser_candidate.add_mutually_exclusive_group()
    cursor_group.add_argument(
        "--cursor",
        default=None,
        help="Rollout cursor as hex (default: empty, the zero cursor)",
    )
    cursor_group.add_argument(
        "--percent",
        type=float,
        default=None,
        help="Rollout percentage instead of a cursor",
    )
    parser_candidate.set_defaults(func=cmd_candidate)

    # 'validate' command
    parser_validate = subparsers.add_parser(
        "validate",
        help="Validate a requirement document (no network)",
        description="Check a requirement document for structural and value errors.",
    )
    parser_validate.add_argument("document", help="Path to the YAML/JSON document")
    parser_validate.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show validation progress and details",
    )
    parser_validate.set_defaults(func=cmd_validate)

    # 'info' command
    parser_info = subparsers.add_parser(
        "info",
        help="Show build metadata",
        description="Print the build metadata stamped into this binary's environment.",
    )
    parser_info.add_argument("--json", action="store_true", help="Print as JSON")
    parser_info.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Also log the build info line",
    )
    parser_info.set_defaults(func=cmd_info)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the versiongate CLI.

    This function is registered as the 'versiongate' console script in
    pyproject.toml.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
