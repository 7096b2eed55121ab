"""
flows/states.py

State identifier matching and display-name helpers.

The backing CSV and the UI-facing slug/display forms disagree on case and
separator conventions. Matching tries a fixed list of variants and the first
one present in the data wins.
"""

from __future__ import annotations

import re
from typing import Callable, Collection

from flows.errors import StateNotFoundError

_WHITESPACE_RUN = re.compile(r"\s+")
_UNDERSCORE_RUN = re.compile(r"_+")
_DIAGNOSTIC_SAMPLE_SIZE = 10

STATE_VARIANTS: tuple[tuple[str, Callable[[str], str]], ...] = (
    ("exact", lambda value: value),
    ("upper", str.upper),
    ("lower", str.lower),
    ("spaces_to_underscores", lambda value: _WHITESPACE_RUN.sub("_", value)),
    ("underscores_to_spaces", lambda value: _UNDERSCORE_RUN.sub(" ", value)),
)


def match_state(requested: str, available: Collection[str]) -> str:
    """
    Return the stored state value matching ``requested``.

    Raises StateNotFoundError carrying a sample of available values.
    """

    candidate_base = (requested or "").strip()
    if candidate_base:
        for _, transform in STATE_VARIANTS:
            candidate = transform(candidate_base)
            if candidate in available:
                return candidate

    raise StateNotFoundError(
        requested=requested,
        sample=list(available)[:_DIAGNOSTIC_SAMPLE_SIZE],
    )


def to_slug(state_name: str) -> str:
    return _WHITESPACE_RUN.sub("-", state_name.strip().lower())


def state_from_slug(slug: str) -> str:
    """Turn ``west-bengal`` into ``West Bengal``."""
    return " ".join(word[:1].upper() + word[1:] for word in slug.split("-") if word)


def state_for_api(state_name: str) -> str:
    return state_name.strip().upper()


def state_for_file(state_name: str) -> str:
    """Format a state name the way per-state crop calendar files are named."""
    return _WHITESPACE_RUN.sub("_", state_name.strip().upper())


def resolve_slug(slug: str | None, available: Collection[str]) -> str | None:
    """
    Map a URL slug such as ``west-bengal`` back to a listed state, or None.
    """

    if not slug:
        return None
    try:
        return match_state(state_from_slug(slug), available)
    except StateNotFoundError:
        return None
