"""
Renderer: maps a ClientState to a rich renderable.

Priority of the three modes: loading, then error, then the quote with its
help lines.
"""
from typing import Optional
from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.text import Text
from excuses.tui.model import ClientState
from excuses.tui.theme import ThemeTokens, theme_for

SPINNER_FRAMES = ("|", "/", "-", "\\")
HELP_TOP = "← Previous (h) • Next (l) → • Random (r)"
HELP_BOTTOM = "First (a) • Last (e) • q to quit"
# border plus one column of padding on each side
BORDER_PADDING = 4
MIN_WIDTH = BORDER_PADDING + 1

def spinner_text(frame: int) -> str:
    return SPINNER_FRAMES[frame % len(SPINNER_FRAMES)]

def render(state: ClientState, theme: Optional[ThemeTokens] = None) -> RenderableType:
    theme = theme or theme_for(state.color_seed)

    if state.loading:
        body: RenderableType = Text(
            f"{spinner_text(state.spinner_frame)} Loading...",
            style=theme.spinner,
            justify="center",
        )
    elif state.err is not None:
        body = Text(f"Error: {state.err}", style=theme.quote, justify="center")
    else:
        body = Group(
            Text(state.quote.strip(), style=theme.quote, justify="center"),
            Text(""),
            Text(HELP_TOP, style=theme.help, justify="center"),
            Text(HELP_BOTTOM, style=theme.help, justify="center"),
        )

    return Panel(
        body,
        box=box.ROUNDED,
        border_style=theme.border,
        width=max(state.width, MIN_WIDTH),
        padding=(0, 1),
    )
