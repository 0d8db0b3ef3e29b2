"""Symbol adapter - Drop symbols that take no part in traceability."""

from __future__ import annotations

from typing import Iterable

from tracegrid.keywords import PLANNING_FILE_KINDS
from tracegrid.matrix.models import Symbol


def to_trace_symbols(symbols: Iterable[Symbol]) -> list[Symbol]:
    """Return the symbols whose source unit is not a planning artifact.

    Symbols declared in sprint (``.spr``) and agent (``.agt``) files never
    reach the matrix.
    """
    return [s for s in symbols if s.file_kind not in PLANNING_FILE_KINDS]


__all__ = ["to_trace_symbols"]
