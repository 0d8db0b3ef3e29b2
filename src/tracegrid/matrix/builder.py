"""Matrix builder - Assemble a MatrixData from a symbol set.

The pipeline runs strictly downward::

    adapter -> grouping -> (kind filter) -> cascading reduction
            -> grid build -> coverage

Every build produces a fresh, immutable MatrixData; nothing is shared
between builds except the relationship catalog.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Sequence

from tracegrid.matrix.adapter import to_trace_symbols
from tracegrid.matrix.catalog import RelationshipCatalog
from tracegrid.matrix.cells import build_cell
from tracegrid.matrix.coverage import find_dangling_references, summarize
from tracegrid.matrix.filtering import reduce_groups
from tracegrid.matrix.grouping import filter_groups, group_symbols
from tracegrid.matrix.models import (
    MatrixCell,
    MatrixData,
    MatrixFilter,
    MatrixMetadata,
    Symbol,
    SymbolGroup,
    flatten_groups,
)

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "TraceGrid: Traceability Matrix"
DEFAULT_DESCRIPTION = "Complete relationship matrix for project traceability analysis"

Grid = tuple[tuple[MatrixCell, ...], ...]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. ``...T12:00:00.000Z``."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc).replace(tzinfo=None)
    return moment.isoformat(timespec="milliseconds") + "Z"


class MatrixBuilder:
    """Build traceability matrices against a shared relationship catalog.

    Args:
        catalog: Relation property names, shared read-only across builds.
        title: Title recorded in the matrix metadata.
        description: Description recorded in the matrix metadata.
        clock: Returns the generation time; defaults to the current UTC time.
    """

    def __init__(
        self,
        catalog: RelationshipCatalog | None = None,
        title: str = DEFAULT_TITLE,
        description: str = DEFAULT_DESCRIPTION,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.catalog = catalog if catalog is not None else RelationshipCatalog()
        self.title = title
        self.description = description
        self._clock = clock or utc_now

    def build(
        self,
        symbols: Sequence[Symbol],
        source_file: str = "",
        matrix_filter: MatrixFilter | None = None,
    ) -> MatrixData:
        """Build the complete matrix for a symbol set.

        Args:
            symbols: Every symbol supplied by the indexer.
            source_file: Reference to the unit the build was requested from.
            matrix_filter: Optional filter narrowing groups and cells.

        Returns:
            MatrixData with groups, grid, summary and metadata.
        """
        logger.info(
            "Building traceability matrix from %d symbols%s",
            len(symbols),
            " with filters" if matrix_filter else "",
        )
        trace_symbols = to_trace_symbols(symbols)

        row_groups = group_symbols(trace_symbols, "row")
        column_groups = group_symbols(trace_symbols, "column")
        if matrix_filter is not None:
            row_groups = filter_groups(row_groups, matrix_filter.source_types)
            column_groups = filter_groups(column_groups, matrix_filter.target_types)

        row_groups, column_groups, grid = self.build_grid(
            row_groups, column_groups, matrix_filter
        )

        relation_types = matrix_filter.relationship_types if matrix_filter else ()
        dangling = find_dangling_references(
            flatten_groups(row_groups),
            {symbol.name for symbol in symbols},
            self.catalog,
            relation_types,
        )
        summary = summarize(row_groups, column_groups, grid, dangling)

        metadata = MatrixMetadata(
            title=self.title,
            description=self.description,
            source_file=source_file,
            generated_at=format_timestamp(self._clock()),
            symbol_count=len(symbols),
            relationship_types=self.catalog.names,
        )

        logger.info(
            "Matrix complete: %d row groups, %d column groups, %d relationships",
            len(row_groups),
            len(column_groups),
            summary.total_relationships,
        )
        return MatrixData(
            row_groups=tuple(row_groups),
            column_groups=tuple(column_groups),
            matrix=grid,
            summary=summary,
            metadata=metadata,
        )

    def build_grid(
        self,
        row_groups: Sequence[SymbolGroup],
        column_groups: Sequence[SymbolGroup],
        matrix_filter: MatrixFilter | None = None,
    ) -> tuple[list[SymbolGroup], list[SymbolGroup], Grid]:
        """Compute the cell grid, reducing the groups first when filtered.

        Returns:
            ``(row_groups, column_groups, grid)`` where the groups are the
            possibly reduced groups the grid is aligned to. The grid has one
            row per row symbol and one cell per column symbol.
        """
        row_groups = list(row_groups)
        column_groups = list(column_groups)
        relation_types: tuple[str, ...] = ()

        if matrix_filter is not None:
            relation_types = matrix_filter.relationship_types
            if matrix_filter.reduces:
                row_groups, column_groups = reduce_groups(
                    row_groups, column_groups, self.catalog, matrix_filter
                )

        rows = flatten_groups(row_groups)
        columns = flatten_groups(column_groups)
        target_lookup = {symbol.name: symbol for symbol in columns}

        grid = tuple(
            tuple(
                build_cell(source, target, target_lookup, self.catalog, relation_types)
                for target in columns
            )
            for source in rows
        )
        logger.debug("Built %dx%d grid", len(rows), len(columns))
        return row_groups, column_groups, grid


__all__ = [
    "DEFAULT_TITLE",
    "DEFAULT_DESCRIPTION",
    "MatrixBuilder",
    "format_timestamp",
]
