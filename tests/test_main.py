"""Tests for the command-line entry point."""

import main as cli
from booking_core.workflows import BookingWorkflow
from tests.conftest import TODAY


class TestSlotsCommand:
    def test_malformed_date_prints_usage(self, capsys, monkeypatch):
        def fail_build():
            raise AssertionError("workflow must not be built for a bad date")

        monkeypatch.setattr(cli, "_build_workflow", fail_build)
        assert cli.main(["slots", "26/10/2026"]) == 2

        out = capsys.readouterr().out
        assert "Invalid date '26/10/2026'" in out
        assert "Usage:" in out

    def test_lists_open_slots(self, capsys, monkeypatch, store, notifier):
        monkeypatch.setattr(
            cli, "_build_workflow",
            lambda: BookingWorkflow(store, notifier, today=lambda: TODAY, enforce_unique_slots=False),
        )
        assert cli.main(["slots", "2026-10-26"]) == 0

        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 16
        assert (lines[0], lines[-1]) == ("09:00 AM", "04:30 PM")

    def test_no_command_prints_usage(self, capsys):
        assert cli.main([]) == 1
        assert "Usage:" in capsys.readouterr().out
