"""
Color theme for the TUI.

The theme is a pure function of a seed: the navigator re-rolls the seed on
every navigation action and the renderer derives its styles from it.
"""
from dataclasses import dataclass
from rich.style import Style

# Pride flag colors
RAINBOW_COLORS = (
    "#e60000",  # Red
    "#ff8e00",  # Orange
    "#ffef00",  # Yellow
    "#00821b",  # Green
    "#004bff",  # Blue
    "#780089",  # Purple
)

@dataclass(frozen=True)
class ThemeTokens:
    color: str
    border: Style
    quote: Style
    help: Style
    spinner: Style

def theme_for(seed: int) -> ThemeTokens:
    """
    Example:
        >>> theme_for(7).color
        '#ff8e00'
    """
    color = RAINBOW_COLORS[seed % len(RAINBOW_COLORS)]
    return ThemeTokens(
        color=color,
        border=Style(color=color),
        quote=Style(color=color, bold=True, italic=True),
        help=Style(color=color),
        spinner=Style(color=color),
    )
