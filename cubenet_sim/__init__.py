"""Cube net folding and surface walking simulator."""

from .engine import CubeNetEngine, solve
from .net_map import CubeNetMap
from .topology import CANONICAL_DIE, CubeTopology, Face
from .walker import AdvanceMode, AgentState, Walker

__all__ = [
    "CANONICAL_DIE",
    "AdvanceMode",
    "AgentState",
    "CubeNetEngine",
    "CubeNetMap",
    "CubeTopology",
    "Face",
    "Walker",
    "solve",
]
