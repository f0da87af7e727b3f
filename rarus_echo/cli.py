"""Command-line interface for the Echo transcription client.

WHY: Submitting a file, checking its status, or peeking at the queue
should not require writing a script. The CLI exposes the common service
calls as subcommands.

HOW: argparse with one subcommand per operation. Credentials come from
the environment (RARUS_ECHO_* or .env). Results are printed as JSON on
stdout; progress and errors go to stderr.

RULES:
- Subcommands: submit, transcript, status, queue
- Exit code 0 on success, 1 on EchoError or configuration error
- --verbose turns on DEBUG logging for the rarus_echo loggers
- Status output goes to stderr (not stdout) so results can be piped
"""

from __future__ import annotations

import argparse
import dataclasses
import enum
import json
import logging
import sys
from datetime import datetime
from typing import Any, List, Optional

from rarus_echo.api.enums import Language, TaskType
from rarus_echo.api.options import TranscriptionOptions
from rarus_echo.client import EchoClient
from rarus_echo.core.errors import EchoError, ValidationError


def _status(msg: str) -> None:
    """Print a status message to stderr."""
    print(msg, file=sys.stderr, flush=True)


def _to_jsonable(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _to_jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {k: _to_jsonable(v) for k, v in value.items()}
    return value


def _print_result(result: Any) -> None:
    print(json.dumps(_to_jsonable(result), ensure_ascii=False, indent=2))


def _run(args: argparse.Namespace, client: EchoClient) -> None:
    if args.command == "submit":
        options = TranscriptionOptions(
            task_type=args.task_type,
            language=args.language,
            censor=args.censor,
            speakers_correction=args.speakers_correction,
            store_file=args.store_file,
            low_priority=args.low_priority,
        )
        _status("Submitting {} file(s)...".format(len(args.files)))
        _print_result(client.transcription.submit(args.files, options))
    elif args.command == "transcript":
        _print_result(client.transcription.get_transcript(args.file_id))
    elif args.command == "status":
        _print_result(client.status.get_by_file_id(args.file_id))
    elif args.command == "queue":
        info = client.queue.get_info()
        _status(str(info))
        _print_result(info)


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    Kept separate from main() so tests can inspect the parser without
    touching the network.
    """
    parser = argparse.ArgumentParser(
        prog="rarus-echo",
        description="Submit media files to the Echo transcription API and query results.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    submit = subparsers.add_parser("submit", help="Upload files for transcription.")
    submit.add_argument("files", nargs="+", help="Audio or video files to upload.")
    submit.add_argument(
        "--task-type",
        choices=TaskType.values(),
        default=TaskType.TRANSCRIPTION.value,
        help="Processing type (default: %(default)s).",
    )
    submit.add_argument(
        "--language",
        choices=Language.values(),
        default=Language.AUTO.value,
        help="Spoken language (default: %(default)s).",
    )
    submit.add_argument("--censor", action="store_true", help="Mask profanity.")
    submit.add_argument(
        "--speakers-correction",
        action="store_true",
        help="Enable speaker correction.",
    )
    submit.add_argument(
        "--store-file",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Keep the uploaded file on the server (default: %(default)s).",
    )
    submit.add_argument("--low-priority", action="store_true", help="Queue with low priority.")

    transcript = subparsers.add_parser("transcript", help="Fetch a transcript by file id.")
    transcript.add_argument("file_id")

    status = subparsers.add_parser("status", help="Show processing status of a file.")
    status.add_argument("file_id")

    subparsers.add_parser("queue", help="Show queue statistics.")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for ``rarus-echo`` and ``python -m rarus_echo``.

    argv=None means use sys.argv; an explicit list is for testing.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        with EchoClient.from_environment() as client:
            _run(args, client)
    except ValidationError as e:
        print("Error: {}".format(e), file=sys.stderr)
        if e.errors:
            print(e.errors_as_string(), file=sys.stderr)
        return 1
    except (EchoError, ValueError) as e:
        # ValueError: missing or malformed credentials
        print("Error: {}".format(e), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
