"""Command-driven simulation engine around a single walker."""

from __future__ import annotations

import threading
from typing import Any, Iterable

from tqdm import tqdm

from .net_codec import parse_commands, split_puzzle_input, validate_command
from .net_map import CubeNetMap
from .walker import AdvanceMode, AgentState, Walker


class CubeNetEngine:
    """Thread-safe walker session over one cube net."""

    def __init__(self, net_map: CubeNetMap, mode: AdvanceMode | str = AdvanceMode.FOLD):
        self.net_map = net_map
        self.mode = AdvanceMode(mode)
        self._lock = threading.RLock()
        self._walker = Walker(net_map, self.mode)
        self.step_count = 0
        self.history: list[int | str] = []

    def get_state(self) -> AgentState:
        with self._lock:
            s = self._walker.state
            return AgentState(s.position, s.heading)

    def password(self) -> int:
        with self._lock:
            return self._walker.password()

    def reset(self) -> AgentState:
        with self._lock:
            self._walker = Walker(self.net_map, self.mode)
            self.step_count = 0
            self.history = []
            return self.get_state()

    def step(self, command: int | str) -> AgentState:
        command = validate_command(command)
        with self._lock:
            self._walker.apply(command)
            self.step_count += 1
            self.history.append(command)
            return self.get_state()

    def run(self, commands: str | Iterable[int | str], progress: bool = False) -> AgentState:
        if isinstance(commands, str):
            commands = parse_commands(commands)
        commands = [validate_command(c) for c in commands]

        with self._lock:
            bar = tqdm(commands, desc=f"walk {self.mode.value}", unit="cmd", disable=not progress)
            for command in bar:
                self.step(command)
            bar.close()
            return self.get_state()

    def state_payload(self) -> dict[str, Any]:
        with self._lock:
            payload = self.get_state().to_dict()
            payload["mode"] = self.mode.value
            payload["step_count"] = self.step_count
            payload["face_id"] = self.net_map.face_at(self._walker.position).face_id
            return payload


def solve(
    text: str,
    mode: AdvanceMode | str = AdvanceMode.FOLD,
    face_size: int | None = None,
    progress: bool = False,
) -> int:
    """Return the password for a full puzzle input (net, blank line, commands)."""
    grid_text, command_text = split_puzzle_input(text)
    engine = CubeNetEngine(CubeNetMap.from_text(grid_text, face_size=face_size), mode=mode)
    engine.run(command_text, progress=progress)
    return engine.password()
