"""Candidate neighbour shapes (movement models) for grid search."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List, Type

from ..core.node import Coord


class Neighborhood(ABC):
    """Produce candidate neighbour positions for a cell.

    Candidates may fall outside the grid; the grid lookup rejects them.
    """

    name: str = "abstract"

    @abstractmethod
    def candidate_positions(self, x: int, y: int) -> List[Coord]:
        raise NotImplementedError


class LegacyNeighborhood(Neighborhood):
    """Asymmetric 8-neighbourhood with lower-bound guards only.

    For ``(x, y)`` the candidates are, in order:

    * column ``x + 1``, rows ``y - 1 .. y + 1`` with ``row > 0``
    * ``(x, y + 1)``
    * if ``x - 1 > 0``: column ``x - 1``, rows ``y - 1 .. y + 1`` with ``row > 0``
    * if ``y - 1 > 0``: ``(x, y - 1)``

    Row 0 is therefore never entered from a neighbour, and column 0 only
    from within column 0.
    """

    name = "legacy"

    def candidate_positions(self, x: int, y: int) -> List[Coord]:
        candidates = self._column(x + 1, y)
        candidates.append((x, y + 1))
        if x - 1 > 0:
            candidates.extend(self._column(x - 1, y))
        if y - 1 > 0:
            candidates.append((x, y - 1))
        return candidates

    @staticmethod
    def _column(x: int, y: int) -> List[Coord]:
        return [(x, row) for row in range(y - 1, y + 2) if row > 0]


class MooreNeighborhood(Neighborhood):
    """All eight surrounding cells."""

    name = "moore"

    def candidate_positions(self, x: int, y: int) -> List[Coord]:
        return [
            (x + dx, y + dy)
            for dx in (-1, 0, 1)
            for dy in (-1, 0, 1)
            if dx or dy
        ]


class VonNeumannNeighborhood(Neighborhood):
    """The four orthogonally adjacent cells."""

    name = "von_neumann"

    def candidate_positions(self, x: int, y: int) -> List[Coord]:
        return [(x + 1, y), (x, y + 1), (x - 1, y), (x, y - 1)]


_NEIGHBORHOODS: Dict[str, Type[Neighborhood]] = {
    cls.name: cls
    for cls in (LegacyNeighborhood, MooreNeighborhood, VonNeumannNeighborhood)
}

DEFAULT_NEIGHBORHOOD = LegacyNeighborhood.name


def get_neighborhood(name: str) -> Neighborhood:
    """Return a new movement model registered under ``name``."""

    try:
        return _NEIGHBORHOODS[name.lower()]()
    except KeyError:
        known = ", ".join(sorted(_NEIGHBORHOODS))
        raise ValueError(f"Unknown neighborhood: {name} (expected one of {known})") from None


def available_neighborhoods() -> list[str]:
    return sorted(_NEIGHBORHOODS)


__all__ = [
    "Neighborhood",
    "LegacyNeighborhood",
    "MooreNeighborhood",
    "VonNeumannNeighborhood",
    "DEFAULT_NEIGHBORHOOD",
    "get_neighborhood",
    "available_neighborhoods",
]
