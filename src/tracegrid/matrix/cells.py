"""Cells - Relations from one source symbol to one target symbol.

A relation property value names its targets as a comma separated list,
optionally prefixed by a reference qualifier::

    implements ref function FnX, FnY
    satisfies ref ReqA
"""

from __future__ import annotations

import re
from typing import AbstractSet, Collection, Iterator, Mapping

from tracegrid.matrix.models import MatrixCell, Symbol

_QUALIFIED_REF = re.compile(r"^ref\s+\w+\s+")
_BARE_REF = re.compile(r"^ref\s+")


def parse_reference(value: str) -> list[str]:
    """Split a relation value into target identifiers.

    Strips a leading ``ref <kind>`` or ``ref`` qualifier, then splits on
    commas. Empty tokens are discarded, so a malformed value yields ``[]``.
    """
    cleaned = _BARE_REF.sub("", _QUALIFIED_REF.sub("", value)).strip()
    return [token.strip() for token in cleaned.split(",") if token.strip()]


def iter_references(
    symbol: Symbol,
    catalog: Collection[str],
    relation_types: Collection[str] = (),
) -> Iterator[tuple[str, str, str]]:
    """Yield ``(relation, raw value, target identifier)`` for every reference.

    Only properties named in ``catalog`` are read; when ``relation_types``
    is non-empty, only those relations are read.
    """
    for prop_name, values in symbol.properties.items():
        if prop_name not in catalog:
            continue
        if relation_types and prop_name not in relation_types:
            continue
        for value in values:
            for target_id in parse_reference(value):
                yield prop_name, value, target_id


def build_cell(
    source: Symbol,
    target: Symbol,
    target_lookup: Mapping[str, Symbol] | AbstractSet[str],
    catalog: Collection[str],
    relation_types: Collection[str] = (),
) -> MatrixCell:
    """Build the cell describing every reference from ``source`` to ``target``.

    Args:
        source: Row symbol whose properties are scanned.
        target: Column symbol being referenced.
        target_lookup: Names that resolve to a known target symbol.
        catalog: Relation property names.
        relation_types: Restrict to these relations (empty = all).

    Returns:
        The cell. It is valid only if every matched reference resolves;
        one unresolved reference taints the whole cell.
    """
    relationships: list[str] = []
    raw_values: list[str] = []
    valid_count = 0

    for relation, value, target_id in iter_references(source, catalog, relation_types):
        if target_id != target.name:
            continue
        relationships.append(relation)
        raw_values.append(value)
        if target_id in target_lookup:
            valid_count += 1

    count = len(relationships)
    distinct = tuple(dict.fromkeys(relationships))
    return MatrixCell(
        relationships=distinct,
        is_valid=count == 0 or valid_count == count,
        count=count,
        raw_values=tuple(raw_values),
        tooltip=cell_tooltip(source, target, distinct, raw_values),
    )


def cell_tooltip(
    source: Symbol,
    target: Symbol,
    relationships: Collection[str],
    raw_values: Collection[str],
) -> str:
    """Three-line hover summary for a cell."""
    if not relationships:
        return f"No relationships from {source.name} to {target.name}"
    lines = [
        f"{source.name} → {target.name}",
        f"Relationships: {', '.join(relationships)}",
    ]
    if raw_values:
        lines.append(f"Raw values: {', '.join(raw_values)}")
    return "\n".join(lines)


__all__ = [
    "parse_reference",
    "iter_references",
    "build_cell",
    "cell_tooltip",
]
