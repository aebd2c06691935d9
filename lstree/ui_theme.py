"""UI theme definitions and selection helpers.

Themes are ANSI palettes keyed by semantic role (branch glyphs, entry kinds,
summary lines). Rendering code only ever asks a theme for a role, so turning
color off is just a matter of selecting the plain palette.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    tree_branch: str
    tree_root: str
    tree_dir: str
    tree_link: str
    tree_link_target: str
    tree_exec: str
    tree_file_image: str
    tree_file_archive: str
    tree_file_config: str
    tree_file_source: str
    tree_file_default: str
    summary: str
    elapsed: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    tree_branch="\033[2;38;5;245m",
    tree_root="\033[1m",
    tree_dir="\033[1;34m",
    tree_link="\033[3;36m",
    tree_link_target="\033[3;34m",
    tree_exec="\033[32m",
    tree_file_image="\033[35m",
    tree_file_archive="\033[31m",
    tree_file_config="\033[33m",
    tree_file_source="\033[38;5;110m",
    tree_file_default="",
    summary="\033[1m",
    elapsed="\033[2;38;5;250m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    tree_branch="\033[2;38;5;31m",
    tree_root="\033[1;38;5;45m",
    tree_dir="\033[1;38;5;45m",
    tree_link="\033[3;38;5;153m",
    tree_link_target="\033[3;38;5;39m",
    tree_exec="\033[38;5;84m",
    tree_file_image="\033[38;5;177m",
    tree_file_archive="\033[38;5;215m",
    tree_file_config="\033[38;5;229m",
    tree_file_source="\033[38;5;117m",
    tree_file_default="\033[38;5;252m",
    summary="\033[1;38;5;45m",
    elapsed="\033[2;38;5;110m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    tree_branch="",
    tree_root="",
    tree_dir="",
    tree_link="",
    tree_link_target="",
    tree_exec="",
    tree_file_image="",
    tree_file_archive="",
    tree_file_config="",
    tree_file_source="",
    tree_file_default="",
    summary="",
    elapsed="",
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
