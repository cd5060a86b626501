import math

import pytest

from src.core.aggregation import AggregatedCell, aggregate, category_domains
from src.core.io import parse_expression_records


def test_single_gene_keeps_source_values():
    records = parse_expression_records(
        "GeneName\tCellType\tCondition\tAvgExpressing\tPctExpress\n"
        "GENE1\tT\tA\t10\t50\n"
        "GENE1\tT\tB\t20\t80\n"
    )

    cells = aggregate(records, {"GENE1"})

    assert cells == [
        AggregatedCell("T", "A", 10.0, 50.0, ("GENE1",)),
        AggregatedCell("T", "B", 20.0, 80.0, ("GENE1",)),
    ]


def test_multiple_genes_average_shared_pairs(records):
    cells = aggregate(records, ["GENE1", "GENE2"])

    by_pair = {(c.cell_type, c.condition): c for c in cells}
    shared = by_pair[("T", "A")]
    assert shared.mean_avg_expressing == pytest.approx((10 + 30) / 2, abs=1e-9)
    assert shared.mean_pct_express == pytest.approx((50 + 70) / 2, abs=1e-9)
    assert shared.contributing_genes == ("GENE1", "GENE2")


def test_missing_pair_is_averaged_over_present_records_only(records):
    cells = aggregate(records, ["GENE1", "GENE2"])

    by_pair = {(c.cell_type, c.condition): c for c in cells}
    assert by_pair[("T", "B")].mean_avg_expressing == 20.0
    assert by_pair[("T", "B")].contributing_genes == ("GENE1",)
    assert by_pair[("B", "A")].contributing_genes == ("GENE2",)


def test_output_is_sorted_by_cell_type_then_condition(records):
    cells = aggregate(records, ["GENE3", "GENE2", "GENE1"])

    keys = [(c.cell_type, c.condition) for c in cells]
    assert keys == sorted(keys)
    assert keys == [("B", "A"), ("B", "B"), ("T", "A"), ("T", "B")]


def test_no_matching_genes_gives_empty_result(records):
    assert aggregate(records, ["UNKNOWN"]) == []
    assert aggregate(records, []) == []


def test_nan_values_are_skipped_by_the_mean():
    records = parse_expression_records(
        "h\n"
        "GENE1\tT\tA\tnope\t50\n"
        "GENE2\tT\tA\t4\t30\n"
    )

    (cell,) = aggregate(records, ["GENE1", "GENE2"])

    assert cell.mean_avg_expressing == 4.0
    assert cell.mean_pct_express == 40.0
    assert not math.isnan(cell.mean_avg_expressing)


def test_category_domains_only_cover_selected_genes(records):
    cell_types, conditions = category_domains(records, ["GENE1"])

    assert cell_types == ["T"]
    assert conditions == ["A", "B"]
