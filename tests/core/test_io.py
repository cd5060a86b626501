import math

import pytest
import requests

from src.core.errors import LoadError
from src.core.io import (
    ExpressionRecord,
    load,
    parse_expression_frame,
    parse_expression_records,
    parse_gene_catalog,
    records_to_frame,
)


def test_parse_expression_records_keeps_one_record_per_line(expression_text):
    records = parse_expression_records(expression_text)

    line_count = len(expression_text.strip().split("\n"))
    assert len(records) == line_count - 1
    assert records[0] == ExpressionRecord("GENE1", "T", "A", 10.0, 50.0)
    assert records[-1] == ExpressionRecord("GENE3", "B", "B", 1.5, 10.0)
    assert all(isinstance(r.avg_expressing, float) for r in records)


def test_malformed_numbers_and_short_rows_become_nan():
    text = "header\nGENE1\tT\tA\tabc\t50\r\nGENE2\tT\tB\t3\n"

    records = parse_expression_records(text)

    assert len(records) == 2
    assert math.isnan(records[0].avg_expressing)
    assert records[0].pct_express == 50.0
    assert records[1].avg_expressing == 3.0
    assert math.isnan(records[1].pct_express)


def test_header_only_yields_no_rows():
    df = parse_expression_frame("GeneName\tCellType\tCondition\tAvgExpressing\tPctExpress\n")

    assert df.empty
    assert list(df.columns) == ["gene_name", "cell_type", "condition", "avg_expressing", "pct_express"]


def test_parse_gene_catalog_drops_blank_lines(catalog_text):
    catalog = parse_gene_catalog(catalog_text)

    assert list(catalog) == ["GENE1", "GENE2", "GENE3", "GENE10", "ACTB"]
    assert "GENE3" in catalog
    assert "" not in catalog


def test_records_to_frame_preserves_values(records):
    df = records_to_frame(records)

    assert len(df) == len(records)
    assert df.loc[2, "gene_name"] == "GENE2"
    assert df.loc[2, "avg_expressing"] == 30.0


def test_load_reads_local_files(data_files):
    expression_path, catalog_path = data_files

    data = load(expression_path, catalog_path)

    assert len(data.records) == 5
    assert len(data.catalog) == 5
    assert data.expression_source == str(expression_path)
    assert data.genes_with_data == {"GENE1", "GENE2", "GENE3"}


def test_load_fails_when_any_source_is_missing(data_files, tmp_path):
    expression_path, _ = data_files

    with pytest.raises(LoadError, match="No se pudo leer"):
        load(expression_path, tmp_path / "missing.txt")


class _FakeResponse:
    def __init__(self, text: str, status_code: int = 200) -> None:
        self.text = text
        self.status_code = status_code

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400


def test_load_fetches_urls(monkeypatch, expression_text, catalog_text):
    pages = {
        "https://example.org/expr.tsv": _FakeResponse(expression_text),
        "https://example.org/genes.txt": _FakeResponse(catalog_text),
    }
    monkeypatch.setattr(requests, "get", lambda url, **kwargs: pages[url])

    data = load("https://example.org/expr.tsv", "https://example.org/genes.txt")

    assert len(data.records) == 5
    assert data.catalog[0] == "GENE1"


def test_load_reports_failure_status(monkeypatch, expression_text):
    pages = {
        "https://example.org/expr.tsv": _FakeResponse(expression_text),
        "https://example.org/genes.txt": _FakeResponse("Not found", status_code=404),
    }
    monkeypatch.setattr(requests, "get", lambda url, **kwargs: pages[url])

    with pytest.raises(LoadError, match="404"):
        load("https://example.org/expr.tsv", "https://example.org/genes.txt")


def test_load_wraps_network_errors(monkeypatch, data_files):
    def boom(url, **kwargs):
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(requests, "get", boom)
    _, catalog_path = data_files

    with pytest.raises(LoadError, match="connection refused"):
        load("http://unreachable.invalid/expr.tsv", catalog_path)
