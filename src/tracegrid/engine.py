"""
tracegrid.engine - Rebuild and export requests from a rendering host.

The engine owns the relationship catalog and the most recent complete
matrix. A rebuild replaces that matrix only once it is fully computed, so a
consumer sees either the previous matrix or the next one.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Callable

from tracegrid.config import resolve_symbol_index
from tracegrid.errors import SymbolSourceUnavailableError
from tracegrid.matrix.builder import DEFAULT_DESCRIPTION, DEFAULT_TITLE, MatrixBuilder
from tracegrid.matrix.catalog import RelationshipCatalog
from tracegrid.matrix.export import export_matrix
from tracegrid.matrix.models import ExportOptions, MatrixData, MatrixFilter
from tracegrid.sources import JsonSymbolSource, SymbolSource

logger = logging.getLogger(__name__)


class TraceabilityEngine:
    """Build and export traceability matrices for one symbol source.

    Args:
        source: Upstream symbol source. Builds fail while it is missing.
        catalog: Relation names; the built-in keyword table by default.
        title: Matrix title for metadata.
        description: Matrix description for metadata.
        source_file: Reference recorded as the matrix's source.
        clock: Generation-time provider, mainly for tests.
    """

    def __init__(
        self,
        source: SymbolSource | None,
        catalog: RelationshipCatalog | None = None,
        title: str = DEFAULT_TITLE,
        description: str = DEFAULT_DESCRIPTION,
        source_file: str = "",
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.source = source
        self.source_file = source_file
        self.builder = MatrixBuilder(
            catalog=catalog, title=title, description=description, clock=clock
        )
        self._current: MatrixData | None = None

    @classmethod
    def from_config(
        cls, config: dict[str, Any], symbols_path: Path | None = None
    ) -> TraceabilityEngine:
        """Create an engine reading the JSON symbol index named in ``config``."""
        index = resolve_symbol_index(config, symbols_path)
        matrix_config = config.get("matrix", {})
        catalog = RelationshipCatalog(
            extra_relations=config.get("catalog", {}).get("extra_relations", [])
        )
        return cls(
            source=JsonSymbolSource(index),
            catalog=catalog,
            title=matrix_config.get("title", DEFAULT_TITLE),
            description=matrix_config.get("description", DEFAULT_DESCRIPTION),
            source_file=str(index),
        )

    @property
    def catalog(self) -> RelationshipCatalog:
        return self.builder.catalog

    @property
    def current(self) -> MatrixData | None:
        """The most recent complete matrix, or None before the first build."""
        return self._current

    def build(self, matrix_filter: MatrixFilter | None = None) -> MatrixData:
        """Rebuild the matrix from the current symbol set.

        Raises:
            SymbolSourceUnavailableError: If there is no source or it fails.
                The previous matrix stays current.
        """
        if self.source is None:
            raise SymbolSourceUnavailableError("Symbol source is not available")

        symbols = self.source.get_symbols()
        data = self.builder.build(symbols, self.source_file, matrix_filter)
        self._current = data
        return data

    def export(
        self, options: ExportOptions | None = None, data: MatrixData | None = None
    ) -> str:
        """Serialize a matrix, building one first if none exists yet."""
        if data is None:
            data = self._current if self._current is not None else self.build()
        logger.debug("Exporting matrix as %s", (options or ExportOptions()).format.value)
        return export_matrix(data, options)


__all__ = ["TraceabilityEngine"]
