"""
tracegrid.sources - Upstream symbol sources.

The engine never parses model files itself. It asks a SymbolSource for the
symbols an indexer already extracted.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Protocol

from tracegrid.errors import SymbolSourceUnavailableError
from tracegrid.matrix.models import Symbol


class SymbolSource(Protocol):
    """Anything that can supply the current symbol set."""

    def get_symbols(self) -> list[Symbol]: ...


class StaticSymbolSource:
    """Serve a fixed, in-memory list of symbols."""

    def __init__(self, symbols: Iterable[Symbol]) -> None:
        self._symbols = list(symbols)

    def get_symbols(self) -> list[Symbol]:
        return list(self._symbols)


def symbol_from_dict(data: dict[str, Any]) -> Symbol:
    """Create a Symbol from one entry of an indexer dump.

    ``properties`` may be an object of name to values, or a list of
    ``[name, values]`` pairs when order or repeated names matter.
    """
    return Symbol.create(
        name=data["name"],
        kind=data["kind"],
        source=data.get("source", ""),
        definition=data.get("definition", "def"),
        properties=data.get("properties") or {},
    )


class JsonSymbolSource:
    """Read symbols from an indexer dump file.

    The file holds ``{"symbols": [...]}`` (or a bare list) of entries with
    ``name``, ``kind``, ``source``, ``definition`` and ``properties``. It is
    re-read on every call so each rebuild sees the current index.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def get_symbols(self) -> list[Symbol]:
        try:
            content = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise SymbolSourceUnavailableError(
                f"Cannot read symbol index: {e}", location=str(self.path)
            ) from e

        try:
            data = json.loads(content)
            entries = data["symbols"] if isinstance(data, dict) else data
            return [symbol_from_dict(entry) for entry in entries]
        except (ValueError, KeyError, TypeError) as e:
            raise SymbolSourceUnavailableError(
                f"Malformed symbol index {self.path}: {e}", location=str(self.path)
            ) from e


__all__ = [
    "SymbolSource",
    "StaticSymbolSource",
    "JsonSymbolSource",
    "symbol_from_dict",
]
