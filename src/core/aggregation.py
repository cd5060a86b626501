from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

import pandas as pd

from src.core.io import ExpressionRecord, records_to_frame

_GROUP_KEYS = ["cell_type", "condition"]


@dataclass(frozen=True)
class AggregatedCell:
    cell_type: str
    condition: str
    mean_avg_expressing: float
    mean_pct_express: float
    contributing_genes: Tuple[str, ...]


def filter_selected(records: Iterable[ExpressionRecord], selection: Iterable[str]) -> pd.DataFrame:
    """Rows of ``records`` whose gene belongs to ``selection``, as a DataFrame."""
    df = records_to_frame(records)
    return df[df["gene_name"].isin(list(selection))].copy()


def _per_record_cells(df: pd.DataFrame) -> List[AggregatedCell]:
    ordered = df.sort_values(_GROUP_KEYS, kind="stable")
    return [
        AggregatedCell(
            cell_type=row.cell_type,
            condition=row.condition,
            mean_avg_expressing=float(row.avg_expressing),
            mean_pct_express=float(row.pct_express),
            contributing_genes=(row.gene_name,),
        )
        for row in ordered.itertuples(index=False)
    ]


def _grouped_cells(df: pd.DataFrame) -> List[AggregatedCell]:
    cells: List[AggregatedCell] = []
    for (cell_type, condition), group in df.groupby(_GROUP_KEYS, sort=True):
        # Plain mean; NaN values are skipped so absent data is never imputed.
        cells.append(
            AggregatedCell(
                cell_type=str(cell_type),
                condition=str(condition),
                mean_avg_expressing=float(group["avg_expressing"].mean()),
                mean_pct_express=float(group["pct_express"].mean()),
                contributing_genes=tuple(group["gene_name"].tolist()),
            )
        )
    return cells


def aggregate(records: Sequence[ExpressionRecord], selection: Iterable[str]) -> List[AggregatedCell]:
    """
    Resolve the selected genes into one cell per (cell type, condition).

    - A single selected gene keeps every source record as its own cell, values untouched.
    - Several genes are grouped by (cell type, condition) and averaged with an
      unweighted arithmetic mean over the records present for that pair.
    - Output is sorted by cell type, then condition. No matches gives an empty list.
    """
    genes = list(dict.fromkeys(selection))
    if not genes:
        return []
    subset = filter_selected(records, genes)
    if subset.empty:
        return []
    if len(genes) == 1:
        return _per_record_cells(subset)
    return _grouped_cells(subset)


def category_domains(records: Sequence[ExpressionRecord], selection: Iterable[str]) -> Tuple[List[str], List[str]]:
    """Sorted distinct (cell types, conditions) among the records of the selected genes."""
    subset = filter_selected(records, selection)
    cell_types = sorted(subset["cell_type"].unique().tolist())
    conditions = sorted(subset["condition"].unique().tolist())
    return cell_types, conditions
