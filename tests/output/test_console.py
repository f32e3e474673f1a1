"""Tests for the Rich console factory and theme."""

from __future__ import annotations

from facetctl.output.console import FACET_THEME, count_style, create_console, get_output


class TestConsole:
    def test_renders_to_buffer(self) -> None:
        console = create_console()
        console.print("hello")
        assert get_output(console) == "hello\n"

    def test_no_ansi_when_not_a_terminal(self) -> None:
        console = create_console()
        console.print("[facet.ok]OK[/facet.ok]")
        assert "\x1b[" not in get_output(console)

    def test_width_override(self) -> None:
        assert create_console(width=40).width == 40

    def test_theme_styles(self) -> None:
        for name in ("facet.ok", "facet.error", "facet.wire", "facet.selected"):
            assert name in FACET_THEME.styles


class TestCountStyle:
    def test_no_data(self) -> None:
        assert count_style(None) == "facet.empty"

    def test_zero(self) -> None:
        assert count_style(0) == "facet.empty"

    def test_positive(self) -> None:
        assert count_style(3) == "facet.count"
