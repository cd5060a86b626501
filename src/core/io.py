from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple, Union

import pandas as pd
import requests

from src.core.errors import LoadError
from src.core.selection import GeneCatalog

LOGGER = logging.getLogger(__name__)

Source = Union[str, Path]

EXPRESSION_COLUMNS: Tuple[str, ...] = (
    "gene_name",
    "cell_type",
    "condition",
    "avg_expressing",
    "pct_express",
)
_NUMERIC_COLUMNS = ("avg_expressing", "pct_express")

HEADERS = {
    "Accept": "text/plain, text/tab-separated-values, */*",
    "User-Agent": "GeneExpressionViewer/0.1 (streamlit app)",
}


@dataclass(frozen=True)
class ExpressionRecord:
    gene_name: str
    cell_type: str
    condition: str
    avg_expressing: float
    pct_express: float


@dataclass(frozen=True)
class ExpressionData:
    records: Tuple[ExpressionRecord, ...]
    catalog: GeneCatalog
    expression_source: str = ""
    catalog_source: str = ""

    @property
    def genes_with_data(self) -> set[str]:
        return {r.gene_name for r in self.records}


def _is_url(source: Source) -> bool:
    return str(source).lower().startswith(("http://", "https://"))


def read_source(source: Source, timeout: float = 10.0) -> str:
    """Return the text behind a URL or a local path; any failure becomes ``LoadError``."""
    if _is_url(source):
        try:
            response = requests.get(str(source), headers=HEADERS, timeout=timeout)
        except requests.RequestException as exc:
            raise LoadError(f"No se pudo acceder a {source}: {exc}") from exc
        if not response.ok:
            raise LoadError(f"{source} respondió con estado {response.status_code}")
        return response.text

    path = Path(source)
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise LoadError(f"No se pudo leer {path}: {exc}") from exc


def _split_row(line: str) -> List[object]:
    values: List[object] = line.rstrip("\r").split("\t")[: len(EXPRESSION_COLUMNS)]
    # Missing trailing fields stay absent; numeric ones end up as NaN.
    values.extend([None] * (len(EXPRESSION_COLUMNS) - len(values)))
    return values


def parse_expression_frame(text: str) -> pd.DataFrame:
    """
    Parse the tab-separated expression summary into a DataFrame.

    - The first line is a header and is discarded.
    - Each remaining line yields exactly one row, split into the five fixed columns.
    - Non-numeric values in the two metric columns become NaN instead of raising.
    """
    lines = text.strip().split("\n")
    rows = [_split_row(line) for line in lines[1:]]
    df = pd.DataFrame(rows, columns=list(EXPRESSION_COLUMNS))
    for column in EXPRESSION_COLUMNS:
        if column in _NUMERIC_COLUMNS:
            df[column] = pd.to_numeric(df[column], errors="coerce").astype(float)
        else:
            df[column] = df[column].where(df[column].notna(), "").astype(str)
    return df


def parse_expression_records(text: str) -> Tuple[ExpressionRecord, ...]:
    df = parse_expression_frame(text)
    return tuple(
        ExpressionRecord(
            gene_name=row.gene_name,
            cell_type=row.cell_type,
            condition=row.condition,
            avg_expressing=float(row.avg_expressing),
            pct_express=float(row.pct_express),
        )
        for row in df.itertuples(index=False)
    )


def parse_gene_catalog(text: str) -> GeneCatalog:
    names = [line.strip("\r") for line in text.strip().split("\n")]
    return GeneCatalog(name for name in names if name)


def records_to_frame(records: Iterable[ExpressionRecord]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            (r.gene_name, r.cell_type, r.condition, r.avg_expressing, r.pct_express)
            for r in records
        ],
        columns=list(EXPRESSION_COLUMNS),
    )


def load(
    expression_source: Source,
    catalog_source: Source,
    *,
    timeout: float = 10.0,
) -> ExpressionData:
    """
    Fetch both sources concurrently and parse them once both have arrived.

    If either source fails the whole load fails with ``LoadError``; nothing is
    returned for the source that did succeed.
    """
    sources: Sequence[Source] = (expression_source, catalog_source)
    with ThreadPoolExecutor(max_workers=len(sources)) as ex:
        futures = [ex.submit(read_source, source, timeout) for source in sources]
        expression_text, catalog_text = [future.result() for future in futures]

    records = parse_expression_records(expression_text)
    catalog = parse_gene_catalog(catalog_text)
    LOGGER.info(
        "Datos cargados: %d registros de %s, %d genes en %s",
        len(records),
        expression_source,
        len(catalog),
        catalog_source,
    )
    return ExpressionData(
        records=records,
        catalog=catalog,
        expression_source=str(expression_source),
        catalog_source=str(catalog_source),
    )
