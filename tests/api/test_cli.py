from __future__ import annotations

import pytest

from epidraw.__main__ import build_parser, main


def test_cli_init_only_succeeds() -> None:
    assert main(["--init-only", "--degree", "3", "--size", "640x480", "--log-level", "WARNING"]) == 0


def test_cli_reports_invalid_arguments(capsys) -> None:
    assert main(["--init-only", "--max-points", "0", "--log-level", "WARNING"]) == 2
    assert "epidraw:" in capsys.readouterr().err


def test_cli_rejects_malformed_size() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--size", "big"])


def test_cli_parses_size() -> None:
    args = build_parser().parse_args(["--size", "1024X768"])
    assert args.size == (1024, 768)
