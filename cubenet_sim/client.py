"""HTTP client for the cube net walker server."""

from __future__ import annotations

import json
from urllib import request


class CubeNetAPIClient:
    def __init__(self, host: str = "127.0.0.1", port: int = 8000, timeout: float = 10.0):
        self.base = f"http://{host}:{port}"
        self.timeout = timeout

    def _call(self, method: str, path: str, payload: dict | None = None) -> dict:
        data = None
        headers = {}
        if payload is not None:
            data = json.dumps(payload).encode("utf-8")
            headers["Content-Type"] = "application/json"
        req = request.Request(url=f"{self.base}{path}", method=method, data=data, headers=headers)
        with request.urlopen(req, timeout=self.timeout) as resp:
            return json.loads(resp.read().decode("utf-8"))

    def health(self) -> dict:
        return self._call("GET", "/health")

    def get_state(self) -> dict:
        return self._call("GET", "/state")

    def faces(self) -> list[dict]:
        return self._call("GET", "/faces")["faces"]

    def reset(self) -> dict:
        return self._call("POST", "/reset", {})

    def step(self, command: int | str) -> dict:
        return self._call("POST", "/step", {"command": command})

    def run(self, commands: str | list) -> dict:
        return self._call("POST", "/run", {"commands": commands})

    def password(self) -> int:
        return int(self.get_state()["password"])
