"""Agent walking a cube net, either wrapping flat or folding over cube edges."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .net_codec import Cell, validate_command
from .net_map import CubeNetMap
from .rotation import (
    DIRECTION_NAMES,
    DIRECTION_VECTORS,
    RIGHT,
    compose,
    invert,
    rotate_direction,
    rotate_point,
)


class WalkerInvariantError(RuntimeError):
    """Raised when a move lands somewhere the face table says cannot exist."""


class AdvanceMode(str, Enum):
    WRAP = "wrap"
    FOLD = "fold"


@dataclass
class AgentState:
    position: tuple[int, int]
    heading: int = RIGHT

    def password(self) -> int:
        x, y = self.position
        return 1000 * (y + 1) + 4 * (x + 1) + self.heading

    def to_dict(self) -> dict:
        return {
            "x": self.position[0],
            "y": self.position[1],
            "heading": self.heading,
            "heading_name": DIRECTION_NAMES[self.heading],
            "password": self.password(),
        }


class Walker:
    def __init__(
        self,
        net_map: CubeNetMap,
        mode: AdvanceMode | str = AdvanceMode.FOLD,
        state: AgentState | None = None,
    ):
        self.net_map = net_map
        self.mode = AdvanceMode(mode)
        self.state = state if state is not None else AgentState(net_map.start_position(), RIGHT)
        self._advance = self.advance_fold if self.mode is AdvanceMode.FOLD else self.advance_wrap

    @property
    def position(self) -> tuple[int, int]:
        return self.state.position

    @property
    def heading(self) -> int:
        return self.state.heading

    def password(self) -> int:
        return self.state.password()

    def rotate_right(self) -> None:
        self.state.heading = rotate_direction(self.state.heading, 1)

    def rotate_left(self) -> None:
        self.state.heading = rotate_direction(self.state.heading, -1)

    def advance(self, distance: int) -> None:
        self._advance(distance)

    def apply(self, command: int | str) -> None:
        command = validate_command(command)
        if command == "R":
            self.rotate_right()
        elif command == "L":
            self.rotate_left()
        else:
            self.advance(command)

    def advance_wrap(self, distance: int) -> None:
        """Move forward, re-entering from the far side of the same row or column."""
        net = self.net_map
        dx, dy = DIRECTION_VECTORS[self.state.heading]
        for _ in range(distance):
            x, y = self.state.position
            nxt = (x + dx, y + dy)
            if net.cell_at(nxt) == Cell.EMPTY:
                back = self.state.position
                while net.cell_at((back[0] - dx, back[1] - dy)) != Cell.EMPTY:
                    back = (back[0] - dx, back[1] - dy)
                nxt = back
            if net.cell_at(nxt) == Cell.WALL:
                break
            self.state.position = nxt

    def advance_fold(self, distance: int) -> None:
        """Move forward, crossing cube edges onto the folded neighbour face."""
        for _ in range(distance):
            nxt, heading = self._fold_step()
            cell = self.net_map.cell_at(nxt)
            if cell == Cell.WALL:
                break
            if cell != Cell.PATH:
                raise WalkerInvariantError(f"Step from {self.state.position} landed on {cell.name} at {nxt}")
            self.state.position = nxt
            self.state.heading = heading

    def _fold_step(self) -> tuple[tuple[int, int], int]:
        net = self.net_map
        heading = self.state.heading
        x, y = self.state.position
        dx, dy = DIRECTION_VECTORS[heading]
        candidate = (x + dx, y + dy)
        if net.cell_at(candidate) != Cell.EMPTY:
            return candidate, heading

        current = net.face_at(self.state.position)
        local = compose(heading, invert(current.rotation))
        target = net.topology.face_next_to(current.face_id, local)
        expected = compose(target.rotation, current.rotation)
        dest = net.absolute_face(target.face_id)
        diff = compose(dest.rotation, invert(expected))

        size = net.face_size
        # Candidate offset as if the target face were unfolded flat beside this one.
        offset = (candidate[0] % size, candidate[1] % size)
        ox, oy = rotate_point(offset, diff, size)
        landed = (dest.root[0] + ox, dest.root[1] + oy)
        if net.cell_at(landed) == Cell.EMPTY:
            raise WalkerInvariantError(
                f"Crossing from face {current.face_id} to {target.face_id} landed off the net at {landed}"
            )
        return landed, rotate_direction(heading, diff)
