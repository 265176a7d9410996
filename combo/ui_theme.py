"""UI theme definitions and selection helpers.

Themes are ANSI SGR prefixes for the four kinds of rows the picker draws:
the command header, the query prompt, plain items, and the highlighted item.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the picker renderer."""

    name: str
    header: str
    prompt: str
    item: str
    item_selected: str
    reset: str


DEFAULT_THEME = UITheme(
    name="default",
    header="\033[37;40m",
    prompt="\033[30;42m",
    item="\033[37;40m",
    item_selected="\033[30;44m",
    reset="\033[0m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    header="\033[1;38;5;45m",
    prompt="\033[38;5;16;48;5;81m",
    item="\033[38;5;252m",
    item_selected="\033[1;38;5;16;48;5;39m",
    reset="\033[0m",
)

# Colourless, but the highlighted row stays visible through reverse video.
PLAIN_THEME = UITheme(
    name="plain",
    header="",
    prompt="",
    item="",
    item_selected="\033[7m",
    reset="\033[0m",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
