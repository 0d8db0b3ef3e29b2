"""Grouping - Partition symbols into display groups by kind.

Groups are ordered by display name so the matrix layout does not depend on
the order in which the indexer discovered symbols.
"""

from __future__ import annotations

from typing import Iterable, Literal

from tracegrid.matrix.models import Symbol, SymbolGroup

Role = Literal["row", "column"]

DISPLAY_NAMES: dict[str, str] = {
    "requirement": "Requirements",
    "testcase": "Test Cases",
    "function": "Functions",
    "feature": "Features",
    "block": "Blocks",
    "config": "Configurations",
    "productline": "Product Lines",
    "featureset": "Feature Sets",
    "variantset": "Variant Sets",
    "configset": "Config Sets",
    "functionset": "Function Sets",
    "requirementset": "Requirement Sets",
    "testset": "Test Sets",
    "sprint": "Sprints",
    "agent": "Agents",
}

PALETTE: tuple[str, ...] = (
    "#FF6B6B", "#4ECDC4", "#45B7D1", "#96CEB4", "#FECA57",
    "#FF9FF3", "#54A0FF", "#5F27CD", "#00D2D3", "#FF9F43",
    "#10AC84", "#EE5A24", "#0984E3", "#A29BFE", "#FD79A8",
)  # fmt: skip


def display_name(kind: str) -> str:
    """Human readable plural name for a symbol kind."""
    if kind in DISPLAY_NAMES:
        return DISPLAY_NAMES[kind]
    return kind[:1].upper() + kind[1:]


def color_for(index: int) -> str:
    """Palette color for the group at ``index``, cycling through the palette."""
    return PALETTE[index % len(PALETTE)]


def group_symbols(symbols: Iterable[Symbol], role: Role = "row") -> list[SymbolGroup]:
    """Group symbols by kind.

    Args:
        symbols: Symbols to partition.
        role: "row" or "column". Both roles currently group identically.

    Returns:
        One group per distinct kind, sorted by display name. Members are
        sorted by name, then by qualified id; colors follow the order kinds
        first appear.
    """
    by_kind: dict[str, list[Symbol]] = {}
    for symbol in symbols:
        by_kind.setdefault(symbol.kind, []).append(symbol)

    groups = [
        SymbolGroup(
            kind=kind,
            display_name=display_name(kind),
            symbols=tuple(sorted(members, key=lambda s: (s.name, s.id))),
            color=color_for(index),
        )
        for index, (kind, members) in enumerate(by_kind.items())
    ]
    return sorted(groups, key=lambda g: g.display_name)


def filter_groups(groups: Iterable[SymbolGroup], kinds: Iterable[str]) -> list[SymbolGroup]:
    """Keep only groups whose kind is listed; an empty listing keeps all."""
    wanted = set(kinds)
    if not wanted:
        return list(groups)
    return [g for g in groups if g.kind in wanted]


__all__ = [
    "DISPLAY_NAMES",
    "PALETTE",
    "display_name",
    "color_for",
    "group_symbols",
    "filter_groups",
]
