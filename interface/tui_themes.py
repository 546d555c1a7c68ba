#!/usr/bin/env python3
"""TUI themes and styling."""

from typing import Dict

from prompt_toolkit.styles import Style


THEMES: Dict[str, Dict[str, str]] = {
    "dark-olive": {
        "": "#d7dfe6",
        "status.ok": "#9ad974 bold",
        "status.fail": "#e06c75 bold",
        "text": "#d7dfe6",
        "text.dim": "#97a0a9",
        "text.body": "#8d95a0",
        "selected": "bg:#3b3b3b #d7dfe6 bold",
        "selected.ok": "bg:#3b3b3b #9ad974 bold",
        "header": "#ffb347 bold",
        "border": "#4b525a",
        "editor": "bg:#262a2f #d7dfe6",
        "editor.label": "#ffb347",
        "dialog": "#f0c674 bold",
        "spinner": "#e06c75 bold",
        "key": "#e06c75 bold",
    },
    "dark-contrast": {
        "": "#e8eaec",
        "status.ok": "#b8f171 bold",
        "status.fail": "#ff6b6b bold",
        "text": "#e8eaec",
        "text.dim": "#a7b0ba",
        "text.body": "#939aa4",
        "selected": "bg:#3d4047 #e8eaec bold",
        "selected.ok": "bg:#3d4047 #b8f171 bold",
        "header": "#ffb347 bold",
        "border": "#5a6169",
        "editor": "bg:#2b2e33 #e8eaec",
        "editor.label": "#ffb347",
        "dialog": "#f0c674 bold",
        "spinner": "#ff5156 bold",
        "key": "#ff5156 bold",
    },
}

DEFAULT_THEME = "dark-olive"


def get_theme_palette(theme: str) -> Dict[str, str]:
    """Get theme palette, falling back to default if theme not found."""
    base = THEMES.get(theme)
    if not base:
        base = THEMES[DEFAULT_THEME]
    return dict(base)


def build_style(theme: str) -> Style:
    """Build Style object from theme name."""
    palette = get_theme_palette(theme)
    return Style.from_dict(palette)
