"""Unit tests for the console helpers (microsvc.utils)."""

from __future__ import annotations

from pathlib import Path

import pytest

from microsvc.utils import (
    print_error,
    print_info,
    print_next_steps,
    print_success,
    print_summary_table,
    print_warning,
)

pytestmark = pytest.mark.unit


def _output(console) -> str:
    return console.file.getvalue()


class TestMessageHelpers:
    @pytest.mark.parametrize(
        "helper", [print_success, print_error, print_warning, print_info]
    )
    def test_message_printed(self, helper, quiet_console):
        helper("Generating files", quiet_console)
        assert "Generating files" in _output(quiet_console)

    def test_info_prefix(self, quiet_console):
        print_info("package.json", quiet_console)
        assert _output(quiet_console) == "  + package.json\n"

    def test_markup_is_escaped(self, quiet_console):
        print_error("Allowed values: [express]", quiet_console)
        assert "[express]" in _output(quiet_console)


class TestSummaryTable:
    def test_rows_rendered(self, quiet_console):
        rows = [("Service name", "orders-service"), ("Framework", "Express")]
        print_summary_table(rows, title="Project summary", out=quiet_console)
        text = _output(quiet_console)
        assert "Project summary" in text
        assert "orders-service" in text
        assert "Express" in text

    def test_empty_rows(self, quiet_console):
        print_summary_table([], out=quiet_console)
        assert "Summary" in _output(quiet_console)


class TestNextSteps:
    def test_instructions(self, quiet_console):
        print_next_steps(Path("orders-service"), quiet_console)
        text = _output(quiet_console)
        assert "Success! Microservice scaffold created." in text
        assert "npm install" in text
        assert "npm test" in text
        assert "orders-service" in text
