"""Relationship catalog - Property names that denote cross-references.

The catalog is computed lazily from a keyword table the first time it is
consulted and then shared read-only by the builder and the filter engine.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from tracegrid.keywords import FILE_TYPES, FileTypeKeywords


class RelationshipCatalog:
    """Relation-typed keyword names across every artifact file kind.

    Args:
        file_types: Keyword table to read (defaults to the built-in table).
        extra_relations: Additional relation names, e.g. from keyword
            extensions declared in configuration.
    """

    def __init__(
        self,
        file_types: Iterable[FileTypeKeywords] | None = None,
        extra_relations: Iterable[str] = (),
    ) -> None:
        self._file_types = tuple(FILE_TYPES if file_types is None else file_types)
        self._extra_relations = tuple(extra_relations)
        self._names: tuple[str, ...] | None = None
        self._lookup: frozenset[str] = frozenset()

    @classmethod
    def from_names(cls, names: Iterable[str]) -> RelationshipCatalog:
        """Build a catalog from an explicit list of relation names."""
        return cls(file_types=(), extra_relations=names)

    def _load(self) -> tuple[str, ...]:
        if self._names is None:
            ordered: dict[str, None] = {}
            for file_type in self._file_types:
                for name in file_type.relation_names():
                    ordered.setdefault(name)
            for name in self._extra_relations:
                ordered.setdefault(name)
            self._names = tuple(ordered)
            self._lookup = frozenset(self._names)
        return self._names

    @property
    def names(self) -> tuple[str, ...]:
        """Relation names in table order, each listed once."""
        return self._load()

    def __contains__(self, name: object) -> bool:
        self._load()
        return name in self._lookup

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)

    def __len__(self) -> int:
        return len(self.names)

    def __repr__(self) -> str:
        return f"RelationshipCatalog({list(self.names)!r})"


__all__ = ["RelationshipCatalog"]
