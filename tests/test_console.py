"""Tests for console output helpers."""

from __future__ import annotations

import io

from rich.console import Console

from drivefs.config import Settings
from drivefs.console import Output


def make_output() -> tuple[Output, io.StringIO]:
    """Create an Output writing to an in-memory buffer."""
    buffer = io.StringIO()
    console = Console(file=buffer, width=120, color_system=None)
    return Output(console), buffer


class TestOutput:
    """Tests for Output."""

    def test_status_messages(self) -> None:
        """Test each status helper prefixes its glyph."""
        output, buffer = make_output()

        output.show_success("done")
        output.show_error("failed")
        output.show_warning("careful")

        assert buffer.getvalue().splitlines() == ["✓ done", "✗ failed", "! careful"]

    def test_show_text_is_verbatim(self) -> None:
        """Test file content is not interpreted as markup."""
        output, buffer = make_output()

        output.show_text("[bold]not markup[/bold]\n")

        assert buffer.getvalue() == "[bold]not markup[/bold]\n"

    def test_show_settings(self) -> None:
        """Test every setting appears in the table."""
        output, buffer = make_output()

        output.show_settings(Settings(backend="memory", root_folder_id="abc"))

        text = buffer.getvalue()
        assert "root_folder_id" in text
        assert "abc" in text
        assert "memory" in text
