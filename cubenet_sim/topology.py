"""Face adjacency table of a canonical die.

Canonical orientation of every face is the one it has in this cross net,
where all six faces are drawn with rotation 0:

        [1]
    [5] [2] [3] [4]
        [6]

A stored fact ``(F, d, G, r)`` reads: leaving face F through its local
edge ``d`` enters face G, and G unfolded flat next to an unrotated F
appears rotated by ``r`` clockwise quarter turns.
"""

from __future__ import annotations

from dataclasses import dataclass

from .rotation import DIRECTIONS, DOWN, LEFT, RIGHT, UP, compose, invert, opposite

N_FACES = 6
FACE_IDS = tuple(range(1, N_FACES + 1))


class TopologyError(RuntimeError):
    """Raised when an adjacency table is not a closed cube topology."""


@dataclass(frozen=True)
class Face:
    face_id: int
    rotation: int = 0

    def rotated(self, turns: int) -> "Face":
        return Face(self.face_id, compose(self.rotation, turns))


@dataclass(frozen=True)
class EdgeFact:
    source: int
    direction: int
    target: int
    rotation: int

    def inverse(self) -> "EdgeFact":
        back = opposite(compose(self.direction, invert(self.rotation)))
        return EdgeFact(self.target, back, self.source, invert(self.rotation))


class CubeTopology:
    """Immutable lookup of ``(face_id, local direction) -> Face``."""

    def __init__(self, facts: list[EdgeFact] | tuple[EdgeFact, ...], face_ids: tuple[int, ...] = FACE_IDS):
        self.face_ids = tuple(face_ids)
        self.facts = tuple(facts)
        self._table = self._build_table()

    def _build_table(self) -> dict[tuple[int, int], Face]:
        table: dict[tuple[int, int], Face] = {}
        for fact in self.facts:
            for entry in (fact, fact.inverse()):
                if entry.source not in self.face_ids or entry.target not in self.face_ids:
                    raise TopologyError(f"Unknown face in fact {entry}")
                if entry.source == entry.target:
                    raise TopologyError(f"Face {entry.source} cannot neighbour itself")
                key = (entry.source, entry.direction)
                face = Face(entry.target, entry.rotation)
                known = table.get(key)
                if known is not None and known != face:
                    raise TopologyError(
                        f"Conflicting edge for face {key[0]} direction {key[1]}: {known} vs {face}"
                    )
                table[key] = face

        expected = len(self.face_ids) * len(DIRECTIONS)
        if len(table) != expected:
            missing = sorted(
                (f, d) for f in self.face_ids for d in DIRECTIONS if (f, d) not in table
            )
            raise TopologyError(f"Expected {expected} directed edges, got {len(table)}; missing {missing}")

        for f in self.face_ids:
            neighbours = {table[(f, d)].face_id for d in DIRECTIONS}
            if len(neighbours) != len(DIRECTIONS):
                raise TopologyError(f"Face {f} must touch four distinct faces, got {sorted(neighbours)}")
        return table

    def face_next_to(self, face_id: int, direction: int) -> Face:
        return self._table[(face_id, direction % 4)]

    def __len__(self) -> int:
        return len(self._table)


# One fact per cube edge; the other twelve directed edges are derived.
_DIE_FACTS = (
    EdgeFact(1, DOWN, 2, 0),
    EdgeFact(2, LEFT, 5, 0),
    EdgeFact(2, RIGHT, 3, 0),
    EdgeFact(3, RIGHT, 4, 0),
    EdgeFact(4, RIGHT, 5, 0),
    EdgeFact(2, DOWN, 6, 0),
    EdgeFact(1, LEFT, 5, 1),
    EdgeFact(1, RIGHT, 3, 3),
    EdgeFact(1, UP, 4, 2),
    EdgeFact(6, LEFT, 5, 3),
    EdgeFact(6, RIGHT, 3, 1),
    EdgeFact(6, DOWN, 4, 2),
)

CANONICAL_DIE = CubeTopology(_DIE_FACTS)
