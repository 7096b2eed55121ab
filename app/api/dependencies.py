"""
app/api/dependencies.py

Shared FastAPI dependencies for request validation.
"""

from __future__ import annotations

from fastapi import Query


def get_state_query(
    state: str | None = Query(
        default=None,
        description="State identifier in any case or separator variant, e.g. BIHAR, bihar, West_Bengal.",
    ),
) -> str | None:
    """
    Return the trimmed ``state`` query parameter, or None when blank.
    """

    if state is None:
        return None
    stripped = state.strip()
    return stripped or None
