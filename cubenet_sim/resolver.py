"""Discover which die face each block of a flat net is, and how it is turned."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass

import numpy as np

from .net_codec import Cell, NetValidationError, validate_face_size
from .rotation import DIRECTION_VECTORS, DIRECTIONS, compose, invert
from .topology import CANONICAL_DIE, N_FACES, CubeTopology, Face


class MalformedNetError(NetValidationError):
    """Raised when a grid does not fold into a cube."""


@dataclass(frozen=True)
class AbsoluteFace:
    face: Face
    root: tuple[int, int]
    size: int

    @property
    def face_id(self) -> int:
        return self.face.face_id

    @property
    def rotation(self) -> int:
        return self.face.rotation

    def contains(self, pos: tuple[int, int]) -> bool:
        x, y = pos
        rx, ry = self.root
        return rx <= x < rx + self.size and ry <= y < ry + self.size

    def to_dict(self) -> dict:
        return {
            "face_id": self.face_id,
            "rotation": self.rotation,
            "root": list(self.root),
            "size": self.size,
        }


def _block_filled(cells: np.ndarray, block: tuple[int, int], face_size: int) -> bool:
    bx, by = block
    rows, cols = cells.shape[0] // face_size, cells.shape[1] // face_size
    if not (0 <= bx < cols and 0 <= by < rows):
        return False
    return cells[by * face_size, bx * face_size] != Cell.EMPTY


def _first_block(cells: np.ndarray, face_size: int) -> tuple[int, int]:
    rows, cols = cells.shape[0] // face_size, cells.shape[1] // face_size
    for by in range(rows):
        for bx in range(cols):
            if _block_filled(cells, (bx, by), face_size):
                return bx, by
    raise MalformedNetError("Net has no faces")


def resolve_faces(
    cells: np.ndarray,
    face_size: int,
    topology: CubeTopology = CANONICAL_DIE,
) -> dict[tuple[int, int], AbsoluteFace]:
    """Assign a die face and rotation to every face-sized block of the net.

    Blocks are visited breadth-first from the first filled block in reading
    order, seeded as face 1 with rotation 0. A block reached through a flat
    edge takes the neighbour the topology gives for the edge direction in
    the current face's own frame, turned by the current face's rotation.

    Returns a mapping of grid root ``(x, y)`` to AbsoluteFace.
    """
    cells = np.asarray(cells)
    validate_face_size(cells, face_size)

    start = _first_block(cells, face_size)
    found: dict[tuple[int, int], Face] = {start: Face(topology.face_ids[0], 0)}
    q: deque[tuple[int, int]] = deque([start])

    while q:
        block = q.popleft()
        face = found[block]
        for direction in DIRECTIONS:
            dx, dy = DIRECTION_VECTORS[direction]
            neighbour = (block[0] + dx, block[1] + dy)
            if not _block_filled(cells, neighbour, face_size):
                continue

            local = compose(direction, invert(face.rotation))
            expected = topology.face_next_to(face.face_id, local).rotated(face.rotation)
            known = found.get(neighbour)
            if known is None:
                found[neighbour] = expected
                q.append(neighbour)
            elif known != expected:
                raise MalformedNetError(
                    f"Block {neighbour} folds inconsistently: {known} vs {expected}"
                )

    faces = {
        (bx * face_size, by * face_size): AbsoluteFace(face, (bx * face_size, by * face_size), face_size)
        for (bx, by), face in found.items()
    }
    _check_faces(faces)
    return faces


def _check_faces(faces: dict[tuple[int, int], AbsoluteFace]) -> None:
    if len(faces) != N_FACES:
        raise MalformedNetError(f"Expected {N_FACES} connected faces, got {len(faces)}")
    ids = [f.face_id for f in faces.values()]
    if len(set(ids)) != N_FACES:
        raise MalformedNetError(f"Net folds two blocks onto the same face: {sorted(ids)}")
