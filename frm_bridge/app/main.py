"""
Command line entry point for the FRM bridge.

    frm-bridge validate <file>
    frm-bridge submit <file>
    frm-bridge domains

validate and submit load one JSON document, run it through a fresh
FrmContext and print the outcome JSON to stdout. domains prints the
catalogue of accepted metadata.domain values. Logs go to stderr; stdout carries only the
outcome.

Exit codes:
    0  ok / accepted
    1  schema violations (failure report on stderr)
    2  unreadable input, input shape, protocol or startup failure
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

import anyio

from frm_bridge.app.bridge import FrmContext
from frm_bridge.app.codec.result_codec import encode, render_acceptance, render_failure
from frm_bridge.app.config import BridgeConfig
from frm_bridge.app.domains import DOMAIN_CHOICES
from frm_bridge.app.errors import FrmBridgeError
from frm_bridge.app.events import CallSource, MemoryCallLog
from frm_bridge.app.schemas.outcomes import SubmissionAccepted, ValidationFailed

logger = logging.getLogger("frm_bridge")

EXIT_OK = 0
EXIT_VIOLATIONS = 1
EXIT_FAILURE = 2


# ---------------------------------------------------------------------------
# Presentation helpers
# ---------------------------------------------------------------------------

def pretty_json(data: Any) -> str:
    return json.dumps(
        data,
        ensure_ascii=False,
        allow_nan=False,
        indent=2,
        separators=(", ", ": "),
    )


def load_document(path: Path) -> Any:
    """Read and parse one JSON file. Shape is checked by the bridge."""
    return json.loads(path.read_text(encoding="utf-8"))


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def list_domains() -> int:
    """Print the accepted metadata.domain values with labels and descriptions."""
    print(pretty_json([choice.model_dump() for choice in DOMAIN_CHOICES]))
    return EXIT_OK


async def run_command(command: str, document: Any, config: BridgeConfig) -> int:
    call_log = MemoryCallLog()

    async with FrmContext.from_config(
        config, emitter=call_log, source=CallSource.CLI
    ) as context:
        if command == "submit":
            outcome = await context.call_submit(document)
        else:
            outcome = await context.call_validate(document)

    print(pretty_json(encode(outcome).structured))

    if isinstance(outcome, ValidationFailed):
        print(render_failure(outcome, config.ISSUE_DISPLAY_LIMIT), file=sys.stderr)
        return EXIT_VIOLATIONS

    if isinstance(outcome, SubmissionAccepted):
        print(render_acceptance(outcome), file=sys.stderr)
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="frm-bridge",
        description="Validate or submit Formal Reasoning Mode documents",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    validate = subparsers.add_parser(
        "validate", help="Check a document against the FRM schema"
    )
    validate.add_argument("file", type=Path, help="Path to the FRM JSON document")

    submit = subparsers.add_parser(
        "submit", help="Validate and accept a document as a case"
    )
    submit.add_argument("file", type=Path, help="Path to the FRM JSON document")

    subparsers.add_parser(
        "domains", help="List the accepted metadata.domain values"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "domains":
        return list_domains()

    try:
        config = BridgeConfig.from_env()
    except ValueError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    logging.basicConfig(
        level=config.log_level_number,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    try:
        document = load_document(args.file)
    except OSError as exc:
        logger.error("cli: cannot read %s: %s", args.file, exc)
        return EXIT_FAILURE
    except json.JSONDecodeError as exc:
        logger.error("cli: %s is not valid JSON: %s", args.file, exc)
        return EXIT_FAILURE

    try:
        return anyio.run(run_command, args.command, document, config)
    except FrmBridgeError as exc:
        logger.error("cli: %s (%s)", exc, exc.code)
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
