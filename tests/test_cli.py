"""Tests for the argparse CLI."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import pytest

from rarus_echo.api.models import QueueInfoResult, TranscriptSubmitResult
from rarus_echo.cli import build_parser, main
from rarus_echo.core.errors import FieldError, ValidationError


def _fake_client(**attrs) -> MagicMock:
    client = MagicMock()
    client.__enter__.return_value = client
    for name, value in attrs.items():
        parent, method = name.split("__")
        getattr(getattr(client, parent), method).return_value = value
    return client


class TestParser:

    def test_submit_defaults(self):
        """submit uses the default task type and language."""
        args = build_parser().parse_args(["submit", "a.mp3", "b.wav"])
        assert args.files == ["a.mp3", "b.wav"]
        assert args.task_type == "transcription"
        assert args.language == "auto"
        assert args.store_file is True
        assert args.censor is False

    def test_submit_flags(self):
        """submit flags map onto the parsed options."""
        args = build_parser().parse_args([
            "submit", "a.mp3", "--task-type", "diarization", "--language", "ru",
            "--censor", "--no-store-file", "--low-priority",
        ])
        assert args.task_type == "diarization"
        assert args.store_file is False
        assert args.low_priority is True

    def test_command_required(self):
        """Running without a subcommand is an error."""
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_invalid_language(self):
        """Unknown languages are rejected by argparse."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["submit", "a.mp3", "--language", "xx"])


class TestMain:

    def test_queue_prints_json(self, capsys):
        """queue prints the queue info as JSON."""
        client = _fake_client(queue__get_info=QueueInfoResult(files_count=1.0))
        with patch("rarus_echo.cli.EchoClient.from_environment", return_value=client):
            assert main(["queue"]) == 0
        out = json.loads(capsys.readouterr().out)
        assert out["files_count"] == 1.0

    def test_submit_passes_options(self, capsys):
        """submit passes the paths and options to the client."""
        client = _fake_client(transcription__submit=TranscriptSubmitResult(file_ids=["x"]))
        with patch("rarus_echo.cli.EchoClient.from_environment", return_value=client):
            assert main(["submit", "a.mp3", "--language", "en"]) == 0
        paths, options = client.transcription.submit.call_args[0]
        assert paths == ["a.mp3"]
        assert options.language.value == "en"
        assert json.loads(capsys.readouterr().out) == {"file_ids": ["x"]}

    def test_missing_credentials_exit_code(self, capsys):
        """Missing credentials exit with code 1 and name the variable."""
        assert main(["queue"]) == 1
        assert "RARUS_ECHO_API_KEY" in capsys.readouterr().err

    def test_validation_error_details_on_stderr(self, capsys):
        """Field errors from a 422 are printed to stderr."""
        client = _fake_client()
        client.status.get_by_file_id.side_effect = ValidationError(
            "bad", [FieldError("query.file_id", "not a uuid", "uuid_parsing")]
        )
        with patch("rarus_echo.cli.EchoClient.from_environment", return_value=client):
            assert main(["status", "nope"]) == 1
        err = capsys.readouterr().err
        assert "Field 'query.file_id': not a uuid" in err
