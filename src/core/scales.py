"""Visual encodings for the dot plot: band positions, dot color and dot radius.

The scales follow the usual d3 semantics:

- ``BandScale``: ``scaleBand().padding(p)`` (inner and outer padding equal, bands centered).
- ``SequentialColorScale``: ``scaleSequential`` over ``[0, max]`` with a Plotly palette.
- ``SqrtScale``: ``scaleSqrt`` so that dot *area* is proportional to the input value.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np
from plotly.colors import sample_colorscale

from src.core.aggregation import AggregatedCell

DEFAULT_PADDING = 0.1
DEFAULT_PALETTE = "Blues"
PCT_DOMAIN: Tuple[float, float] = (0.0, 100.0)
TRANSPARENT = "rgba(0,0,0,0)"


class BandScale:
    """Maps each category to the start of a sub-interval of ``range_``."""

    def __init__(
        self,
        domain: Sequence[str],
        range_: Tuple[float, float],
        padding: float = DEFAULT_PADDING,
    ) -> None:
        self.domain: List[str] = list(dict.fromkeys(domain))
        self.range = (float(range_[0]), float(range_[1]))
        self.padding = float(padding)

        r0, r1 = self.range
        reverse = r1 < r0
        start, stop = (r1, r0) if reverse else (r0, r1)
        n = len(self.domain)
        step = (stop - start) / max(1.0, n - self.padding + self.padding * 2)
        start += (stop - start - step * (n - self.padding)) * 0.5
        self.step = step
        self.bandwidth = step * (1 - self.padding)

        starts = [start + step * i for i in range(n)]
        if reverse:
            starts.reverse()
        self._starts: Dict[str, float] = dict(zip(self.domain, starts))

    def __call__(self, value: str) -> Optional[float]:
        return self._starts.get(value)

    def center(self, value: str) -> Optional[float]:
        start = self(value)
        return None if start is None else start + self.bandwidth / 2

    def centers(self) -> List[float]:
        return [self._starts[v] + self.bandwidth / 2 for v in self.domain]


class SequentialColorScale:
    """Continuous ``[lower, upper] -> palette`` mapping, clamped at both ends."""

    def __init__(self, upper: float, palette: str = DEFAULT_PALETTE, lower: float = 0.0) -> None:
        upper = float(upper) if upper is not None and math.isfinite(float(upper)) else lower
        self.domain = (float(lower), upper)
        self.palette = palette

    def normalize(self, value: float) -> float:
        lower, upper = self.domain
        if upper == lower:
            return 0.5
        t = (float(value) - lower) / (upper - lower)
        return min(1.0, max(0.0, t))

    def __call__(self, value: float) -> str:
        if value is None or math.isnan(float(value)):
            return TRANSPARENT
        return sample_colorscale(self.palette, [self.normalize(value)])[0]

    def stops(self, n_stops: int = 10) -> List[Tuple[float, str]]:
        """``n_stops`` equal intervals over the domain: ``(offset 0..1, color)`` pairs, ends included."""
        lower, upper = self.domain
        offsets = np.linspace(0.0, 1.0, n_stops + 1)
        return [(float(t), self(lower + t * (upper - lower))) for t in offsets]


class SqrtScale:
    """Square-root scale: ``sqrt`` of the domain mapped linearly onto the range."""

    def __init__(self, domain: Tuple[float, float] = PCT_DOMAIN, range_: Tuple[float, float] = (0.0, 1.0)) -> None:
        self.domain = (float(domain[0]), float(domain[1]))
        self.range = (float(range_[0]), float(range_[1]))

    @staticmethod
    def _sqrt(x: float) -> float:
        return math.copysign(math.sqrt(abs(x)), x)

    def __call__(self, value: float) -> float:
        if value is None or math.isnan(float(value)):
            return 0.0
        d0, d1 = (self._sqrt(v) for v in self.domain)
        r0, r1 = self.range
        if d1 == d0:
            return r0
        t = (self._sqrt(float(value)) - d0) / (d1 - d0)
        # Un radio negativo no es dibujable.
        return max(0.0, r0 + t * (r1 - r0))


@dataclass(frozen=True)
class DotPlotScales:
    x: BandScale
    y: BandScale
    color: SequentialColorScale
    size: SqrtScale

    @property
    def max_radius(self) -> float:
        return self.size(PCT_DOMAIN[1])


def max_expression(cells: Iterable[AggregatedCell]) -> float:
    values = np.array([c.mean_avg_expressing for c in cells], dtype=float)
    values = values[~np.isnan(values)]
    return float(values.max()) if values.size else 0.0


def build_scales(
    cells: Sequence[AggregatedCell],
    cell_types: Sequence[str],
    conditions: Sequence[str],
    *,
    width: float,
    height: float,
    padding: float = DEFAULT_PADDING,
    palette: str = DEFAULT_PALETTE,
) -> DotPlotScales:
    """
    Compute every scale for one plot.

    Conditions run along x over ``[0, width]``; cell types along y over ``[0, height]``.
    The color domain always starts at 0 and the size domain is fixed to 0-100 %.
    """
    x = BandScale(sorted(conditions), (0.0, width), padding=padding)
    y = BandScale(sorted(cell_types), (0.0, height), padding=padding)
    color = SequentialColorScale(max_expression(cells), palette=palette)
    size = SqrtScale(PCT_DOMAIN, (0.0, min(x.bandwidth, y.bandwidth) / 2))
    return DotPlotScales(x=x, y=y, color=color, size=size)
