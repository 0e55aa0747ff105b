"""Cell grid of a cube net together with its resolved face table."""

from __future__ import annotations

from typing import Any

import numpy as np

from .net_codec import Cell, NetValidationError, detect_face_size, parse_grid
from .resolver import AbsoluteFace, resolve_faces
from .topology import CANONICAL_DIE, CubeTopology, Face


class FaceLookupError(RuntimeError):
    """Raised when a position or face id has no resolved face."""


class CubeNetMap:
    """Read-only net grid. Positions are ``(x, y)``, 0-based, y downward."""

    def __init__(
        self,
        cells: np.ndarray,
        face_size: int | None = None,
        topology: CubeTopology = CANONICAL_DIE,
    ):
        cells = np.asarray(cells, dtype=np.int8)
        if cells.ndim != 2:
            raise NetValidationError(f"Net grid must be 2D, got shape {cells.shape}")
        if face_size is None:
            face_size = detect_face_size(cells)

        self.face_size = face_size
        self.topology = topology
        self._cells = cells.copy()
        self._cells.setflags(write=False)
        self._faces = resolve_faces(self._cells, face_size, topology)
        self._by_id = {f.face_id: f for f in self._faces.values()}

    @classmethod
    def from_text(cls, text: str, face_size: int | None = None, topology: CubeTopology = CANONICAL_DIE) -> "CubeNetMap":
        return cls(parse_grid(text), face_size=face_size, topology=topology)

    @property
    def height(self) -> int:
        return int(self._cells.shape[0])

    @property
    def width(self) -> int:
        return int(self._cells.shape[1])

    @property
    def cells(self) -> np.ndarray:
        return self._cells

    @property
    def faces(self) -> tuple[AbsoluteFace, ...]:
        return tuple(sorted(self._faces.values(), key=lambda f: f.face_id))

    def cell_at(self, pos: tuple[int, int]) -> Cell:
        x, y = pos
        if x < 0 or y < 0 or x >= self.width or y >= self.height:
            return Cell.EMPTY
        return Cell(int(self._cells[y, x]))

    def root_of(self, pos: tuple[int, int]) -> tuple[int, int]:
        x, y = pos
        return x - x % self.face_size, y - y % self.face_size

    def absolute_face_at(self, pos: tuple[int, int]) -> AbsoluteFace:
        face = self._faces.get(self.root_of(pos))
        if face is None or not face.contains(pos):
            raise FaceLookupError(f"No face covers position {pos}")
        return face

    def face_at(self, pos: tuple[int, int]) -> Face:
        return self.absolute_face_at(pos).face

    def absolute_face(self, face_id: int) -> AbsoluteFace:
        face = self._by_id.get(face_id)
        if face is None:
            raise FaceLookupError(f"Unknown face id {face_id}")
        return face

    def start_position(self) -> tuple[int, int]:
        """Leftmost open cell of the first face in reading order.

        Starts at that face's top-left corner and skips walls to the right.
        """
        rx, ry = min(self._faces, key=lambda root: (root[1], root[0]))
        for x in range(rx, self.width):
            if self.cell_at((x, ry)) == Cell.PATH:
                return x, ry
        raise NetValidationError(f"No open cell right of the first face at {(rx, ry)}")

    def describe(self) -> dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "face_size": self.face_size,
            "faces": [f.to_dict() for f in self.faces],
        }
