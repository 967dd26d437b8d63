from rich.console import Console

from excuses.tui.model import ClientState
from excuses.tui.theme import RAINBOW_COLORS, theme_for
from excuses.tui.view import HELP_BOTTOM, HELP_TOP, render


def render_text(state: ClientState) -> str:
    console = Console(record=True, width=state.width, force_terminal=False)
    console.print(render(state))
    return console.export_text()


def test_loading_has_priority_over_error_and_quote() -> None:
    text = render_text(ClientState(loading=True, err="down", quote="hidden", spinner_frame=1))
    assert "/ Loading..." in text
    assert "down" not in text
    assert "hidden" not in text
    assert HELP_TOP not in text


def test_error_has_priority_over_quote() -> None:
    text = render_text(ClientState(loading=False, err="connection refused", quote="hidden"))
    assert "Error: connection refused" in text
    assert "hidden" not in text
    assert HELP_BOTTOM not in text


def test_ready_shows_quote_and_help() -> None:
    text = render_text(ClientState(loading=False, quote="  C'est la faute de DNS.  "))
    lines = [line.strip("│ ") for line in text.splitlines()]
    assert "C'est la faute de DNS." in lines
    assert HELP_TOP in lines
    assert HELP_BOTTOM in lines
    assert lines.index(HELP_TOP) < lines.index(HELP_BOTTOM)


def test_frame_uses_viewport_width_and_rounded_border() -> None:
    text = render_text(ClientState(loading=False, quote="x", width=50))
    lines = text.splitlines()
    assert lines[0].startswith("╭")
    assert lines[-1].startswith("╰")
    assert all(len(line) == 50 for line in lines)


def test_render_is_pure() -> None:
    state = ClientState(loading=False, quote="same", color_seed=3)
    before = ClientState(**vars(state))
    render(state)
    assert state == before


def test_theme_is_derived_from_seed() -> None:
    assert theme_for(0).color == RAINBOW_COLORS[0]
    assert theme_for(len(RAINBOW_COLORS) + 2).color == RAINBOW_COLORS[2]
    assert theme_for(4) == theme_for(4)
    assert theme_for(1).quote.bold and theme_for(1).quote.italic
