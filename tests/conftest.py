import sys
from pathlib import Path
from typing import Tuple

import pytest

# ``src`` vive en la raíz del repositorio y ``app`` dentro de ``web_app``.
_ROOT = Path(__file__).resolve().parents[1]
for _path in (_ROOT, _ROOT / "web_app"):
    if str(_path) not in sys.path:
        sys.path.insert(0, str(_path))


EXPRESSION_TSV = "\n".join(
    [
        "GeneName\tCellType\tCondition\tAvgExpressing\tPctExpress",
        "GENE1\tT\tA\t10\t50",
        "GENE1\tT\tB\t20\t80",
        "GENE2\tT\tA\t30\t70",
        "GENE2\tB\tA\t4\t20",
        "GENE3\tB\tB\t1.5\t10",
    ]
) + "\n"

CATALOG_TXT = "GENE1\nGENE2\n\nGENE3\nGENE10\nACTB\n"


class FakeClock:
    """Reloj manual para probar banners con expiración."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def expression_text() -> str:
    return EXPRESSION_TSV


@pytest.fixture()
def catalog_text() -> str:
    return CATALOG_TXT


@pytest.fixture()
def data_files(tmp_path) -> Tuple[Path, Path]:
    expression = tmp_path / "Gene_Expression_Summary_by_Condition.tsv"
    catalog = tmp_path / "gene_list_unique.txt"
    expression.write_text(EXPRESSION_TSV, encoding="utf-8")
    catalog.write_text(CATALOG_TXT, encoding="utf-8")
    return expression, catalog


@pytest.fixture()
def records(expression_text):
    from src.core.io import parse_expression_records

    return parse_expression_records(expression_text)


@pytest.fixture()
def expression_data(records, catalog_text):
    from src.core.io import ExpressionData, parse_gene_catalog

    return ExpressionData(records=records, catalog=parse_gene_catalog(catalog_text))


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def viewer(expression_data, clock):
    from src.core.viewer import GeneExpressionViewer

    return GeneExpressionViewer(expression_data, clock=clock)
