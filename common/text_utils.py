"""
common/text_utils.py
====================

Text helpers shared across apps.

Exported symbols
────────────────
• standard_sort_key(text) → tuple    "Finder-style" ordering key

The ordering mirrors what users expect from a file browser list: accents and
letter case are ignored, and runs of digits compare by numeric value, so
"Group 2" sorts before "Group 10" and "équipe" next to "Equipe".
"""

from __future__ import annotations

import re
import unicodedata
from typing import Final

_DIGITS_RE: Final[re.Pattern[str]] = re.compile(r"(\d+)")


def _fold(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


def standard_sort_key(text: str | None) -> tuple[tuple[int, int | str], ...]:
    """
    Build a sort key for *text*.

    Each chunk is tagged so that numbers and words never get compared with each
    other directly (which would raise ``TypeError``); numbers sort before words
    at the same position.
    """
    if not text:
        return ()
    key: list[tuple[int, int | str]] = []
    for chunk in _DIGITS_RE.split(_fold(text)):
        if not chunk:
            continue
        if chunk.isdigit():
            key.append((0, int(chunk)))
        else:
            key.append((1, chunk))
    return tuple(key)
