"""Tests for the rotating diagnostic log."""

import json

from discussions_core.diagnostics import DiagnosticLog
from discussions_core.errors import NetworkError


def _error(n=0):
    error = NetworkError(f"failure {n}", suggestions=["Check your internet connection"])
    error.context = {"operation": "list discussions", "repository": "o/r"}
    return error


class TestDiagnosticLog:
    def test_writes_json_record_with_environment(self, tmp_path):
        log = DiagnosticLog(tmp_path)

        path = log.write(_error())

        record = json.loads(path.read_text())
        assert record["type"] == "NETWORK_ERROR"
        assert record["context"]["operation"] == "list discussions"
        assert set(record["environment"]) == {"python", "platform", "cwd"}

    def test_keeps_ten_most_recent(self, tmp_path):
        log = DiagnosticLog(tmp_path)
        paths = [log.write(_error(n)) for n in range(11)]

        remaining = log.records()
        assert len(remaining) == 10
        assert remaining == paths[1:]
        assert not paths[0].exists()

    def test_lexical_order_is_creation_order(self, tmp_path):
        log = DiagnosticLog(tmp_path)
        paths = [log.write(_error(n)) for n in range(5)]
        assert sorted(paths) == paths

    def test_ignores_unrelated_files(self, tmp_path):
        (tmp_path / "notes.txt").write_text("keep")
        log = DiagnosticLog(tmp_path, keep=1)
        log.write(_error(1))
        log.write(_error(2))
        assert (tmp_path / "notes.txt").exists()
        assert len(log.records()) == 1

    def test_failure_is_swallowed(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("")
        assert DiagnosticLog(blocker / "logs").write(_error()) is None

    def test_unserializable_details_fall_back_to_str(self, tmp_path):
        error = _error()
        error.details = {"exc": object()}
        assert DiagnosticLog(tmp_path).write(error) is not None
