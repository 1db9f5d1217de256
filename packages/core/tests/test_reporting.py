"""Tests for the human-readable failure report."""

from rich.console import Console

from discussions_core.errors import ApiError, NetworkError
from discussions_core.reporting import render_error


def _render(error, **kwargs):
    console = Console(record=True, width=120)
    render_error(error, console=console, **kwargs)
    return console.export_text()


def _error():
    error = ApiError("Could not resolve [repo]", details=[{"type": "NOT_FOUND"}], suggestions=["Check the name"])
    error.context = {"operation": "show discussion", "repository": "o/r", "discussion_id": "4"}
    return error


class TestRenderError:
    def test_includes_label_message_context_and_suggestions(self):
        output = _render(_error(), debug=False)
        assert "API Error" in output
        assert "Could not resolve [repo]" in output
        assert "Operation: show discussion" in output
        assert "Repository: o/r" in output
        assert "Discussion: #4" in output
        assert "Check the name" in output

    def test_details_hidden_without_debug(self):
        output = _render(_error(), debug=False)
        assert "NOT_FOUND" not in output
        assert "DEBUG=1" in output

    def test_details_shown_with_debug(self):
        assert "NOT_FOUND" in _render(_error(), debug=True)

    def test_debug_read_from_environment(self, monkeypatch):
        monkeypatch.setenv("DEBUG", "1")
        assert "NOT_FOUND" in _render(_error())

    def test_network_tip(self):
        assert "often temporary" in _render(NetworkError("down"), debug=False)
