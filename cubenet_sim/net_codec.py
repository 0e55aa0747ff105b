"""Parsing and validation helpers for net grids and command strings."""

from __future__ import annotations

import math
import re
from enum import IntEnum
from typing import Iterable

import numpy as np


class Cell(IntEnum):
    EMPTY = 0
    PATH = 1
    WALL = 2


CELL_CHARS = {" ": Cell.EMPTY, ".": Cell.PATH, "#": Cell.WALL}

TURN_TOKENS = ("R", "L")
_COMMAND_TOKEN = re.compile(r"\d+|[RL]")


class NetValidationError(ValueError):
    """Raised when a net grid or command string is invalid."""


def parse_grid(source: str | Iterable[str]) -> np.ndarray:
    """Parse net text into a ``(height, width)`` int8 array of Cell values."""
    lines = source.splitlines() if isinstance(source, str) else [line.rstrip("\r\n") for line in source]
    while lines and not lines[-1].strip():
        lines.pop()
    while lines and not lines[0].strip():
        lines.pop(0)
    if not lines:
        raise NetValidationError("Net grid is empty")

    width = max(len(line) for line in lines)
    cells = np.zeros((len(lines), width), dtype=np.int8)
    for y, line in enumerate(lines):
        for x, ch in enumerate(line):
            cell = CELL_CHARS.get(ch)
            if cell is None:
                raise NetValidationError(f"Invalid character {ch!r} at row {y}, column {x}")
            cells[y, x] = cell
    return cells


def split_puzzle_input(text: str) -> tuple[str, str]:
    """Split puzzle text into the map block and the command line.

    The map ends at the first blank line after it starts; the first
    non-blank line after that holds the commands.
    """
    lines = text.splitlines()
    start = 0
    while start < len(lines) and not lines[start].strip():
        start += 1
    end = start
    while end < len(lines) and lines[end].strip():
        end += 1

    command_text = ""
    for line in lines[end:]:
        if line.strip():
            command_text = line.strip()
            break
    return "\n".join(lines[start:end]), command_text


def parse_commands(text: str) -> list[int | str]:
    text = text.strip()
    commands: list[int | str] = []
    pos = 0
    while pos < len(text):
        m = _COMMAND_TOKEN.match(text, pos)
        if m is None:
            raise NetValidationError(f"Unknown command {text[pos]!r} at offset {pos}")
        token = m.group(0)
        commands.append(token if token in TURN_TOKENS else int(token))
        pos = m.end()
    return commands


def validate_command(command: int | str) -> int | str:
    if isinstance(command, bool):
        raise NetValidationError("Command must be a non-negative distance or one of 'R', 'L'")
    if isinstance(command, int):
        if command < 0:
            raise NetValidationError("Distance must be non-negative")
        return command
    if isinstance(command, str) and command in TURN_TOKENS:
        return command
    raise NetValidationError("Command must be a non-negative distance or one of 'R', 'L'")


def validate_face_size(cells: np.ndarray, face_size: int) -> int:
    """Check that ``face_size`` tiles the net into exactly six full faces."""
    arr = np.asarray(cells)
    height, width = arr.shape
    if not isinstance(face_size, int) or face_size <= 0:
        raise NetValidationError("Face size must be a positive integer")
    if height % face_size != 0 or width % face_size != 0:
        raise NetValidationError(
            f"Face size {face_size} does not divide grid dimensions {width}x{height}"
        )

    blocks = arr.reshape(height // face_size, face_size, width // face_size, face_size)
    filled = (blocks != Cell.EMPTY).sum(axis=(1, 3))
    full = filled == face_size * face_size
    if np.any((filled != 0) & ~full):
        raise NetValidationError(f"Face size {face_size} leaves partially filled blocks")

    n_faces = int(full.sum())
    if n_faces != 6:
        raise NetValidationError(f"Net must contain 6 faces of size {face_size}, got {n_faces}")
    return face_size


def detect_face_size(cells: np.ndarray) -> int:
    """Return the face side length implied by the non-empty cell count."""
    arr = np.asarray(cells)
    filled = int((arr != Cell.EMPTY).sum())
    if filled == 0 or filled % 6 != 0:
        raise NetValidationError(f"Net has {filled} non-empty cells, not six square faces")
    face_size = math.isqrt(filled // 6)
    if face_size * face_size * 6 != filled:
        raise NetValidationError(f"Net has {filled} non-empty cells, not six square faces")
    return validate_face_size(arr, face_size)
