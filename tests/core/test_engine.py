"""Tests for TraceabilityEngine."""

import json

import pytest

from tracegrid import (
    ExportFormat,
    ExportOptions,
    MatrixFilter,
    StaticSymbolSource,
    SymbolSourceUnavailableError,
    TraceabilityEngine,
)
from tracegrid.config import load_config
from tests.core.matrix_test_helpers import FIXED_TIME, make_symbol


class FailingSource:
    def get_symbols(self):
        raise SymbolSourceUnavailableError("indexer offline")


def _engine(symbols, **kwargs):
    return TraceabilityEngine(
        StaticSymbolSource(symbols), clock=lambda: FIXED_TIME, **kwargs
    )


class TestBuild:
    def test_build_sets_current(self, req_fn_symbols):
        engine = _engine(req_fn_symbols)
        assert engine.current is None

        data = engine.build()

        assert engine.current is data
        assert data.summary.total_relationships == 1

    def test_no_source(self):
        engine = TraceabilityEngine(None)

        with pytest.raises(SymbolSourceUnavailableError):
            engine.build()
        assert engine.current is None

    def test_failed_rebuild_keeps_previous_matrix(self, req_fn_symbols):
        engine = _engine(req_fn_symbols)
        previous = engine.build()

        engine.source = FailingSource()
        with pytest.raises(SymbolSourceUnavailableError, match="indexer offline"):
            engine.build()

        assert engine.current is previous

    def test_rebuild_sees_new_symbols(self, req_fn_symbols):
        engine = _engine(req_fn_symbols)
        engine.build()

        engine.source = StaticSymbolSource(
            req_fn_symbols + [make_symbol("TC1", "testcase", satisfies="ref requirement ReqA")]
        )
        data = engine.build()

        assert data.summary.total_relationships == 2
        assert engine.current is data

    def test_filter_passed_through(self, project_symbols):
        engine = _engine(project_symbols)

        data = engine.build(MatrixFilter(relationship_types=("satisfies",)))

        assert [s.name for s in data.row_symbols] == ["TC1"]

    def test_source_file_recorded(self, req_fn_symbols):
        engine = _engine(req_fn_symbols, source_file="model/system.req")

        assert engine.build().metadata.source_file == "model/system.req"


class TestExport:
    def test_builds_on_demand(self, req_fn_symbols):
        engine = _engine(req_fn_symbols)

        output = engine.export()

        assert output.startswith("TraceGrid Traceability Matrix\n")
        assert engine.current is not None

    def test_exports_current_matrix(self, project_symbols):
        engine = _engine(project_symbols)
        engine.build(MatrixFilter(relationship_types=("implements",)))

        payload = json.loads(engine.export(ExportOptions(format=ExportFormat.JSON)))

        assert payload["summary"]["total_relationships"] == 3

    def test_exports_given_matrix(self, req_fn_symbols, project_symbols):
        engine = _engine(project_symbols)
        other = _engine(req_fn_symbols).build()

        output = engine.export(data=other)

        assert "Symbol Count,2" in output
        assert engine.current is None


class TestFromConfig:
    def test_reads_index_relative_to_config(self, tmp_path):
        (tmp_path / "build").mkdir()
        (tmp_path / "build" / "symbols.json").write_text(
            json.dumps(
                {
                    "symbols": [
                        {
                            "name": "ReqA",
                            "kind": "requirement",
                            "source": "model/system.req",
                            "properties": {"verifiedby": ["ref testcase TC1"]},
                        },
                        {"name": "TC1", "kind": "testcase", "source": "model/system.tst"},
                    ]
                }
            )
        )
        config_path = tmp_path / ".tracegrid.toml"
        config_path.write_text(
            '[symbols]\nindex = "build/symbols.json"\n\n'
            '[matrix]\ntitle = "Brake System"\n\n'
            '[catalog]\nextra_relations = ["verifiedby"]\n'
        )

        engine = TraceabilityEngine.from_config(load_config(config_path))
        data = engine.build()

        assert "verifiedby" in engine.catalog
        assert data.metadata.title == "Brake System"
        assert data.metadata.source_file == str(tmp_path / "build" / "symbols.json")
        assert data.cell_for("ReqA", "TC1").relationships == ("verifiedby",)

    def test_missing_index(self, tmp_path):
        engine = TraceabilityEngine.from_config(load_config(), tmp_path / "absent.json")

        with pytest.raises(SymbolSourceUnavailableError) as exc_info:
            engine.build()
        assert exc_info.value.location == str(tmp_path / "absent.json")
