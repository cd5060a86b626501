from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from src.core.aggregation import AggregatedCell, aggregate, category_domains
from src.core.errors import LoadError, SelectionError
from src.core.io import ExpressionData, ExpressionRecord, Source, load
from src.core.selection import GeneCatalog, SelectionSet

LOGGER = logging.getLogger(__name__)

TRANSIENT_BANNER_SECONDS = 5.0
SUGGESTION_LIMIT = 10


@dataclass(frozen=True)
class Banner:
    message: str
    level: str = "error"
    persistent: bool = False
    expires_at: Optional[float] = None

    def is_active(self, now: float) -> bool:
        if self.persistent or self.expires_at is None:
            return True
        return now < self.expires_at


@dataclass(frozen=True)
class DotPlot:
    """Everything needed to draw one plot request."""

    cells: Tuple[AggregatedCell, ...]
    genes: Tuple[str, ...]
    cell_types: Tuple[str, ...]
    conditions: Tuple[str, ...]

    @property
    def title(self) -> str:
        return f"Expression: {', '.join(self.genes)}"


class GeneExpressionViewer:
    """
    Single in-memory viewer instance.

    Each public ``on_*`` method handles one discrete UI event synchronously and
    leaves the viewer ready to be re-rendered; nothing reacts implicitly.
    """

    def __init__(
        self,
        data: Optional[ExpressionData] = None,
        *,
        banner_seconds: float = TRANSIENT_BANNER_SECONDS,
        suggestion_limit: int = SUGGESTION_LIMIT,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.data = data
        self.selection = SelectionSet()
        self.plot: Optional[DotPlot] = None
        self.input_value = ""
        self.suggestions: List[str] = []
        self.banner_seconds = float(banner_seconds)
        self.suggestion_limit = int(suggestion_limit)
        self._clock = clock
        self._banners: List[Banner] = []

    # --- data ---

    @property
    def records(self) -> Sequence[ExpressionRecord]:
        return self.data.records if self.data is not None else ()

    @property
    def catalog(self) -> GeneCatalog:
        return self.data.catalog if self.data is not None else GeneCatalog()

    @property
    def is_loaded(self) -> bool:
        return self.data is not None

    def load_data(self, expression_source: Source, catalog_source: Source, *, timeout: float = 10.0) -> bool:
        """Load both sources; on failure the previous data is kept and a persistent banner is shown."""
        try:
            data = load(expression_source, catalog_source, timeout=timeout)
        except LoadError as exc:
            LOGGER.error("Fallo al cargar datos: %s", exc)
            self.show_error(f"Error al cargar los datos: {exc}", persistent=True)
            return False
        self.data = data
        return True

    # --- banners ---

    def show_error(self, message: str, *, persistent: bool = False, level: str = "error") -> Banner:
        expires_at = None if persistent else self._clock() + self.banner_seconds
        banner = Banner(message=message, level=level, persistent=persistent, expires_at=expires_at)
        self._banners.append(banner)
        return banner

    def active_banners(self) -> List[Banner]:
        now = self._clock()
        self._banners = [b for b in self._banners if b.is_active(now)]
        return list(self._banners)

    def drain_banners(self) -> List[Banner]:
        """Active banners to display now; transient ones are handed out only once."""
        banners = self.active_banners()
        self._banners = [b for b in banners if b.persistent]
        return banners

    # --- selection handlers ---

    def add_gene(self, gene: str) -> bool:
        return self.selection.add(gene)

    def remove_gene(self, gene: str) -> bool:
        return self.selection.remove(gene)

    def on_input(self, text: str) -> List[str]:
        self.input_value = text or ""
        self.suggestions = self.catalog.suggest(self.input_value, self.suggestion_limit)
        return self.suggestions

    def on_suggestion_selected(self, gene: str) -> None:
        self.add_gene(gene)
        self._reset_input()

    def on_submit(self, text: str) -> Optional[str]:
        """Enter pressed in the gene input: add the typed gene if the catalog knows it."""
        gene = self.catalog.resolve(text)
        if gene is None:
            return None
        self.add_gene(gene)
        self._reset_input()
        return gene

    def on_remove(self, gene: str) -> None:
        self.remove_gene(gene)

    def on_clear(self) -> None:
        self.selection.clear()
        self.plot = None
        self._reset_input()

    def _reset_input(self) -> None:
        self.input_value = ""
        self.suggestions = []

    # --- plotting ---

    def build_plot(self) -> DotPlot:
        if not self.selection:
            raise SelectionError("Selecciona al menos un gen.")
        genes = self.selection.as_list()
        cells = aggregate(self.records, genes)
        if not cells:
            raise SelectionError("No se encontraron datos para los genes seleccionados.")
        cell_types, conditions = category_domains(self.records, genes)
        return DotPlot(
            cells=tuple(cells),
            genes=tuple(genes),
            cell_types=tuple(cell_types),
            conditions=tuple(conditions),
        )

    def on_plot(self) -> Optional[DotPlot]:
        """Plot button: replace the plot, or leave it untouched and show a transient banner."""
        try:
            plot = self.build_plot()
        except SelectionError as exc:
            LOGGER.info("Solicitud de gráfico rechazada: %s", exc)
            self.show_error(str(exc))
            return None
        LOGGER.info("Gráfico generado para %s (%d puntos)", ", ".join(plot.genes), len(plot.cells))
        self.plot = plot
        return plot
