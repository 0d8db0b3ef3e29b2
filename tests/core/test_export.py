"""Tests for matrix export."""

import csv
import io
import json

import pytest

from tracegrid.matrix import ExportFormat, ExportOptions, MatrixBuilder, MatrixFilter
from tracegrid.matrix.export import (
    NO_RELATIONSHIPS,
    export_matrix,
    serialize_matrix,
    to_csv,
    to_json,
    to_markdown,
)
from tests.core.matrix_test_helpers import FIXED_TIME, FIXED_TIMESTAMP, make_symbol

REQ_TO_FN = MatrixFilter(source_types=("requirement",), target_types=("function",))

EXPECTED_CSV = """\
TraceGrid Traceability Matrix
Title,TraceGrid: Traceability Matrix
Description,Complete relationship matrix for project traceability analysis
Source File,model/system.req
Generated At,2024-05-01T12:00:00.000Z
Symbol Count,2

Summary
Total Relationships,1
Valid Relationships,1
Broken Relationships,0
Coverage Percentage,100%

Relationship Types
implements,1

Traceability Matrix
Source \\ Target,FnX
ReqA,implements
"""


@pytest.fixture
def req_fn_matrix(builder, req_fn_symbols):
    return builder.build(req_fn_symbols, "model/system.req", REQ_TO_FN)


class TestCsv:
    def test_full_document(self, req_fn_matrix):
        assert to_csv(req_fn_matrix) == EXPECTED_CSV

    def test_without_metadata(self, req_fn_matrix):
        output = to_csv(req_fn_matrix, ExportOptions(include_metadata=False))

        assert output.startswith("Summary\n")
        assert "Generated At" not in output

    def test_without_summary(self, req_fn_matrix):
        output = to_csv(req_fn_matrix, ExportOptions(include_summary=False))

        assert "Total Relationships" not in output
        assert "Symbol Count,2\n\nTraceability Matrix\n" in output

    def test_matrix_only(self, req_fn_matrix):
        output = to_csv(
            req_fn_matrix, ExportOptions(include_metadata=False, include_summary=False)
        )

        assert output == "Traceability Matrix\nSource \\ Target,FnX\nReqA,implements\n"

    def test_placeholder_when_nothing_relates(self, builder):
        data = builder.build([make_symbol("ReqA", "requirement")])

        lines = to_csv(data).splitlines()

        assert lines[-2:] == ["Traceability Matrix", NO_RELATIONSHIPS]
        assert "Source \\ Target" not in lines[-1]

    def test_placeholder_when_filter_empties_matrix(self, builder, project_symbols):
        data = builder.build(
            project_symbols, matrix_filter=MatrixFilter(show_valid=False, show_empty=False)
        )

        assert to_csv(data).endswith(f"Traceability Matrix\n{NO_RELATIONSHIPS}\n")

    def test_empty_cells_are_blank(self, builder, project_symbols):
        data = builder.build(project_symbols)

        rows = list(csv.reader(io.StringIO(to_csv(data))))
        header_idx = rows.index(["Traceability Matrix"]) + 1
        header = rows[header_idx]
        tc2 = next(r for r in rows[header_idx + 1 :] if r[0] == "TC2")

        assert header[0] == "Source \\ Target"
        assert header[1:] == ["BlkCore", "FnX", "FnY", "ReqA", "ReqB", "TC1", "TC2"]
        assert tc2[1:] == [""] * 7

    def test_multiple_relations_joined(self, builder):
        symbols = [
            make_symbol("FnA", "function", enables="ref feature F1", allocatedto="ref block F1"),
            make_symbol("F1", "feature"),
        ]

        output = to_csv(builder.build(symbols))

        assert "FnA,enables; allocatedto,\n" in output

    def test_special_characters_round_trip(self, req_fn_symbols):
        title = 'Trace "A", B'
        description = "line one\nline two"
        builder = MatrixBuilder(title=title, description=description, clock=lambda: FIXED_TIME)

        output = to_csv(builder.build(req_fn_symbols))
        rows = list(csv.reader(io.StringIO(output)))

        assert 'Title,"Trace ""A"", B"' in output
        assert ["Title", title] in rows
        assert ["Description", description] in rows

    def test_carriage_return_is_quoted(self, req_fn_symbols):
        title = "Brake\rSystem"
        builder = MatrixBuilder(title=title, clock=lambda: FIXED_TIME)

        output = to_csv(builder.build(req_fn_symbols))
        rows = list(csv.reader(io.StringIO(output)))

        assert "\"Brake\rSystem\"" in output
        assert ["Title", title] in rows
        assert rows[0] == ["TraceGrid Traceability Matrix"]

    def test_deterministic_apart_from_timestamp(self, req_fn_symbols):
        first = MatrixBuilder(clock=lambda: FIXED_TIME).build(req_fn_symbols)
        second = MatrixBuilder().build(req_fn_symbols)

        def strip_time(text):
            return [line for line in text.splitlines() if not line.startswith("Generated At")]

        assert strip_time(to_csv(first)) == strip_time(to_csv(second))


class TestJson:
    def test_structure(self, req_fn_matrix):
        payload = json.loads(to_json(req_fn_matrix))

        assert payload["row_groups"][0]["symbols"] == ["ReqA"]
        assert payload["column_groups"][0]["display_name"] == "Functions"
        assert payload["matrix"] == [
            [
                {
                    "relationships": ["implements"],
                    "is_valid": True,
                    "count": 1,
                    "raw_values": ["ref function FnX"],
                }
            ]
        ]
        assert payload["summary"]["coverage_pct"] == 100
        assert payload["metadata"]["generated_at"] == FIXED_TIMESTAMP

    def test_dangling_and_orphans(self, builder, project_symbols):
        summary = serialize_matrix(builder.build(project_symbols))["summary"]

        assert summary["dangling_references"] == [
            {"source": "ReqB", "relation": "implements", "target": "FnZ"}
        ]
        assert [s["name"] for s in summary["orphaned_symbols"]] == ["ReqB", "TC1", "TC2"]
        assert summary["orphaned_symbols"][0]["id"] == "model/system.req:ReqB"

    def test_optional_blocks(self, req_fn_matrix):
        payload = serialize_matrix(
            req_fn_matrix, ExportOptions(include_metadata=False, include_summary=False)
        )

        assert set(payload) == {"row_groups", "column_groups", "matrix"}


class TestMarkdown:
    def test_table(self, req_fn_matrix):
        output = to_markdown(req_fn_matrix)

        assert output.startswith("# TraceGrid: Traceability Matrix\n")
        assert "- Coverage: 100%" in output
        assert "| Source \\ Target | FnX |\n|---|---|\n| ReqA | implements |" in output

    def test_placeholder(self, builder):
        output = to_markdown(builder.build([]))

        assert f"*{NO_RELATIONSHIPS}*" in output
        assert "|---|" not in output


class TestExportMatrix:
    @pytest.mark.parametrize(
        "fmt,marker",
        [
            (ExportFormat.CSV, "TraceGrid Traceability Matrix"),
            (ExportFormat.JSON, '"row_groups"'),
            (ExportFormat.MARKDOWN, "## Traceability Matrix"),
        ],
    )
    def test_dispatch(self, req_fn_matrix, fmt, marker):
        assert marker in export_matrix(req_fn_matrix, ExportOptions(format=fmt))

    def test_defaults_to_csv(self, req_fn_matrix):
        assert export_matrix(req_fn_matrix) == EXPECTED_CSV
