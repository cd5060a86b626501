from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Sequence, Tuple


class GeneCatalog(Sequence[str]):
    """Ordered, immutable list of known gene names used for autocomplete and validation."""

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._names: Tuple[str, ...] = tuple(dict.fromkeys(names))
        self._members = frozenset(self._names)

    def __getitem__(self, index):  # type: ignore[override]
        return self._names[index]

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._members

    def __eq__(self, other: object) -> bool:
        if isinstance(other, GeneCatalog):
            return self._names == other._names
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._names)

    def __repr__(self) -> str:
        return f"GeneCatalog({len(self._names)} genes)"

    def suggest(self, prefix: str, limit: int = 10) -> List[str]:
        """Catalog names starting with ``prefix`` (case-insensitive), in catalog order."""
        needle = (prefix or "").strip().upper()
        if not needle:
            return []
        matches: List[str] = []
        for name in self._names:
            if name.upper().startswith(needle):
                matches.append(name)
                if len(matches) >= limit:
                    break
        return matches

    def resolve(self, text: str) -> Optional[str]:
        """Upper-case typed text and return it when it is a known gene."""
        candidate = (text or "").strip().upper()
        if candidate and candidate in self._members:
            return candidate
        return None


class SelectionSet:
    """Genes currently chosen for plotting; insertion order is kept for display."""

    def __init__(self, genes: Iterable[str] = ()) -> None:
        self._genes: dict[str, None] = {}
        for gene in genes:
            self.add(gene)

    def add(self, gene: str) -> bool:
        if gene in self._genes:
            return False
        self._genes[gene] = None
        return True

    def remove(self, gene: str) -> bool:
        if gene not in self._genes:
            return False
        del self._genes[gene]
        return True

    def clear(self) -> None:
        self._genes.clear()

    def __contains__(self, gene: object) -> bool:
        return gene in self._genes

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._genes))

    def __len__(self) -> int:
        return len(self._genes)

    def __bool__(self) -> bool:
        return bool(self._genes)

    def __repr__(self) -> str:
        return f"SelectionSet({list(self._genes)!r})"

    def as_list(self) -> List[str]:
        return list(self._genes)
