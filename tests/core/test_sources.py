"""Tests for symbol sources."""

import json

import pytest

from tracegrid.errors import SymbolSourceUnavailableError
from tracegrid.matrix import DefinitionType
from tracegrid.sources import JsonSymbolSource, StaticSymbolSource, symbol_from_dict
from tests.core.matrix_test_helpers import make_symbol


class TestStaticSymbolSource:
    def test_returns_copy(self):
        symbols = [make_symbol("ReqA", "requirement")]
        source = StaticSymbolSource(symbols)

        result = source.get_symbols()
        result.clear()

        assert len(source.get_symbols()) == 1


class TestSymbolFromDict:
    def test_full_entry(self):
        symbol = symbol_from_dict(
            {
                "name": "ReqA",
                "kind": "requirement",
                "source": "model/system.req",
                "definition": "hdef",
                "properties": {"implements": ["ref function FnX"], "name": "Brake"},
            }
        )

        assert symbol.id == "model/system.req:ReqA"
        assert symbol.definition is DefinitionType.HEADER
        assert symbol.properties["implements"] == ("ref function FnX",)
        assert symbol.properties["name"] == ("Brake",)

    def test_pair_list_merges_repeated_properties(self):
        symbol = symbol_from_dict(
            {
                "name": "ReqA",
                "kind": "requirement",
                "properties": [
                    ["implements", ["ref function FnX"]],
                    ["implements", ["ref function FnY"]],
                ],
            }
        )

        assert symbol.properties["implements"] == ("ref function FnX", "ref function FnY")

    def test_defaults(self):
        symbol = symbol_from_dict({"name": "FnX", "kind": "function"})

        assert symbol.source == ""
        assert symbol.definition is DefinitionType.DEFINITION
        assert dict(symbol.properties) == {}


class TestJsonSymbolSource:
    def test_reads_wrapped_list(self, tmp_path):
        path = tmp_path / "symbols.json"
        path.write_text(json.dumps({"symbols": [{"name": "ReqA", "kind": "requirement"}]}))

        symbols = JsonSymbolSource(path).get_symbols()

        assert [s.name for s in symbols] == ["ReqA"]

    def test_reads_bare_list(self, tmp_path):
        path = tmp_path / "symbols.json"
        path.write_text(json.dumps([{"name": "FnX", "kind": "function"}]))

        assert [s.kind for s in JsonSymbolSource(path).get_symbols()] == ["function"]

    def test_rereads_on_every_call(self, tmp_path):
        path = tmp_path / "symbols.json"
        path.write_text("[]")
        source = JsonSymbolSource(path)
        assert source.get_symbols() == []

        path.write_text(json.dumps([{"name": "FnX", "kind": "function"}]))

        assert len(source.get_symbols()) == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(SymbolSourceUnavailableError, match="Cannot read symbol index"):
            JsonSymbolSource(tmp_path / "nope.json").get_symbols()

    @pytest.mark.parametrize(
        "content",
        ["{not json", '{"entries": []}', '[{"kind": "requirement"}]', "42"],
    )
    def test_malformed_index(self, tmp_path, content):
        path = tmp_path / "symbols.json"
        path.write_text(content)

        with pytest.raises(SymbolSourceUnavailableError, match="Malformed symbol index"):
            JsonSymbolSource(path).get_symbols()
