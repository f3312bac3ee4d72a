# tests/test_cli.py
"""
Tests for the ``python -m php_reflection`` entry point.
"""

import io
import logging

import pytest

from php_reflection.__main__ import EXIT_ERROR, EXIT_INFRA, EXIT_OK, configure_logging, main
from tests.conftest import BROKEN_EVENTS, SAMPLE_EVENTS


@pytest.fixture
def events_file(tmp_path):
    path = tmp_path / "events.sexp"
    path.write_text(SAMPLE_EVENTS, encoding="utf-8")
    return path


class TestMain:

    def test_summary(self, events_file):
        out = io.StringIO()
        assert main([str(events_file)], out=out) == EXIT_OK
        assert out.getvalue().splitlines() == [
            "+global\ttypes=0\tfunctions=1",
            "app\ttypes=3\tfunctions=0",
            "vendor::lib\ttypes=1\tfunctions=0",
        ]

    def test_missing_events_file(self, tmp_path):
        assert main([str(tmp_path / "absent.sexp")], out=io.StringIO()) == EXIT_INFRA

    def test_broken_events(self, tmp_path):
        path = tmp_path / "broken.sexp"
        path.write_text(BROKEN_EVENTS, encoding="utf-8")
        assert main([str(path)], out=io.StringIO()) == EXIT_ERROR

    def test_internal_types_table(self, tmp_path):
        events = tmp_path / "events.sexp"
        events.write_text("(class Widget)", encoding="utf-8")
        table = tmp_path / "types.sexp"
        table.write_text("(+gui Widget)", encoding="utf-8")
        out = io.StringIO()
        assert main([str(events), "--internal-types", str(table)], out=out) == EXIT_OK
        assert out.getvalue() == "+gui\ttypes=1\tfunctions=0\n"

    def test_malformed_internal_types_table(self, tmp_path, events_file):
        table = tmp_path / "types.sexp"
        table.write_text("(+gui Widget", encoding="utf-8")
        args = [str(events_file), "--internal-types", str(table)]
        assert main(args, out=io.StringIO()) == EXIT_INFRA

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--version"])
        assert exc.value.code == 0
        assert "php-reflection" in capsys.readouterr().out


class TestConfigureLogging:

    def test_single_handler_across_runs(self, events_file):
        main([str(events_file)], out=io.StringIO())
        main([str(events_file), "-v"], out=io.StringIO())
        logger = logging.getLogger("php_reflection")
        assert len(logger.handlers) == 1
        assert logger.level == logging.INFO

    def test_verbosity_levels(self):
        configure_logging(0)
        assert logging.getLogger("php_reflection").level == logging.WARNING
        configure_logging(2)
        assert logging.getLogger("php_reflection").level == logging.DEBUG
