"""Questionary / prompt_toolkit styles for the CMS console.

Row pickers and confirmations share one palette so every interactive
prompt looks the same across resources.
"""

from __future__ import annotations

from prompt_toolkit.styles import Style

_BASE = {
    "qmark": "bold ansicyan",
    "question": "bold ansibrightcyan",
    "separator": "ansibrightblack",
    "instruction": "ansibrightblack",
    "error": "bold ansired",
    "disabled": "ansibrightblack",
}

QUESTIONARY_STYLE_PICK = Style.from_dict(
    {
        **_BASE,
        "answer": "bold ansigreen",
        "pointer": "bold ansigreen",
        "highlighted": "bold ansigreen",
        "selected": "bold ansigreen",
    }
)

QUESTIONARY_STYLE_CONFIRM = Style.from_dict(
    {
        **_BASE,
        "question": "bold ansibrightred",
        "answer": "bold ansibrightred",
        "pointer": "bold ansibrightred",
        "highlighted": "bold ansibrightred",
        "selected": "bold ansibrightred",
    }
)
