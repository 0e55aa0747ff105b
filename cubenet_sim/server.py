"""HTTP API server for the cube net walker."""

from __future__ import annotations

import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any

from .engine import CubeNetEngine
from .net_codec import NetValidationError


class CubeNetHTTPServer:
    def __init__(self, engine: CubeNetEngine, host: str = "127.0.0.1", port: int = 8000):
        self.engine = engine
        self._lock = threading.RLock()

        handler_cls = self._build_handler()
        self.httpd = ThreadingHTTPServer((host, port), handler_cls)
        self.host, self.port = self.httpd.server_address

    def _build_handler(self):
        parent = self

        class Handler(BaseHTTPRequestHandler):
            server_version = "CubeNetSim/1.0"

            def log_message(self, fmt: str, *args):
                return

            def _send_json(self, code: int, payload: dict[str, Any]):
                body = json.dumps(payload).encode("utf-8")
                self.send_response(code)
                self.send_header("Content-Type", "application/json")
                self.send_header("Content-Length", str(len(body)))
                self.end_headers()
                self.wfile.write(body)

            def _read_json(self) -> dict[str, Any]:
                length = int(self.headers.get("Content-Length", "0"))
                if length == 0:
                    return {}
                data = self.rfile.read(length)
                try:
                    obj = json.loads(data.decode("utf-8"))
                except json.JSONDecodeError as exc:
                    raise NetValidationError(f"Invalid JSON body: {exc}") from exc
                if not isinstance(obj, dict):
                    raise NetValidationError("JSON body must be an object")
                return obj

            def do_GET(self):
                with parent._lock:
                    if self.path == "/health":
                        self._send_json(
                            200,
                            {
                                "mode": parent.engine.mode.value,
                                "face_size": parent.engine.net_map.face_size,
                                "ready": True,
                            },
                        )
                        return

                    if self.path == "/state":
                        self._send_json(200, parent.engine.state_payload())
                        return

                    if self.path == "/faces":
                        self._send_json(200, parent.engine.net_map.describe())
                        return

                self._send_json(404, {"error": "Not Found"})

            def do_POST(self):
                try:
                    body = self._read_json()
                    with parent._lock:
                        if self.path == "/reset":
                            parent.engine.reset()
                            self._send_json(200, parent.engine.state_payload())
                            return

                        if self.path == "/step":
                            if "command" not in body:
                                raise NetValidationError("Missing required field: command")
                            parent.engine.step(body["command"])
                            payload = parent.engine.state_payload()
                            payload["command"] = body["command"]
                            self._send_json(200, payload)
                            return

                        if self.path == "/run":
                            commands = body.get("commands")
                            if not isinstance(commands, (str, list)):
                                raise NetValidationError("commands must be a string or a list")
                            parent.engine.run(commands)
                            self._send_json(200, parent.engine.state_payload())
                            return

                except NetValidationError as exc:
                    self._send_json(400, {"error": str(exc)})
                    return

                self._send_json(404, {"error": "Not Found"})

        return Handler

    def serve_forever(self):
        self.httpd.serve_forever()

    def start_background(self, daemon: bool = True) -> threading.Thread:
        thread = threading.Thread(target=self.serve_forever, daemon=daemon)
        thread.start()
        return thread

    def shutdown(self):
        self.httpd.shutdown()
        self.httpd.server_close()
