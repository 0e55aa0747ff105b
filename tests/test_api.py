import json
import threading
import time
import unittest
from urllib import error, request

from cubenet_sim.client import CubeNetAPIClient
from cubenet_sim.engine import CubeNetEngine
from cubenet_sim.net_map import CubeNetMap
from cubenet_sim.server import CubeNetHTTPServer

from sample_nets import SAMPLE_COMMANDS, SAMPLE_NET


def http_json(method: str, url: str, payload: dict | None = None):
    data = None
    headers = {}
    if payload is not None:
        data = json.dumps(payload).encode("utf-8")
        headers["Content-Type"] = "application/json"
    req = request.Request(url=url, method=method, data=data, headers=headers)
    with request.urlopen(req, timeout=2.0) as resp:
        body = resp.read().decode("utf-8")
        return resp.status, json.loads(body)


class TestAPI(unittest.TestCase):
    def setUp(self):
        self.engine = CubeNetEngine(CubeNetMap.from_text(SAMPLE_NET), mode="fold")
        self.server = CubeNetHTTPServer(engine=self.engine, host="127.0.0.1", port=0)
        self.thread = threading.Thread(target=self.server.serve_forever, daemon=True)
        self.thread.start()
        time.sleep(0.05)
        self.base = f"http://{self.server.host}:{self.server.port}"
        self.client = CubeNetAPIClient(host=self.server.host, port=self.server.port, timeout=2.0)

    def tearDown(self):
        self.server.shutdown()
        self.thread.join(timeout=1.0)

    def test_health(self):
        status, out = http_json("GET", f"{self.base}/health")
        self.assertEqual(status, 200)
        self.assertEqual(out, {"mode": "fold", "face_size": 4, "ready": True})

    def test_step_applies_command(self):
        status, out = http_json("POST", f"{self.base}/step", {"command": 10})
        self.assertEqual(status, 200)
        self.assertEqual(out["command"], 10)
        self.assertEqual((out["x"], out["y"]), (10, 0))
        self.assertEqual(out["step_count"], 1)

    def test_run_and_reset_through_client(self):
        out = self.client.run(SAMPLE_COMMANDS)
        self.assertEqual(out["password"], 5031)
        self.assertEqual(self.client.password(), 5031)

        out = self.client.reset()
        self.assertEqual((out["x"], out["y"], out["heading"]), (8, 0, 0))
        self.assertEqual(out["step_count"], 0)

    def test_faces(self):
        faces = self.client.faces()
        self.assertEqual(len(faces), 6)
        self.assertEqual(faces[0], {"face_id": 1, "rotation": 0, "root": [8, 0], "size": 4})

    def test_invalid_command_returns_400(self):
        req = request.Request(
            url=f"{self.base}/step",
            method="POST",
            data=json.dumps({"command": "U"}).encode("utf-8"),
            headers={"Content-Type": "application/json"},
        )
        with self.assertRaises(error.HTTPError) as ctx:
            request.urlopen(req, timeout=2.0)
        self.assertEqual(ctx.exception.code, 400)

    def test_missing_commands_returns_400(self):
        with self.assertRaises(error.HTTPError) as ctx:
            self.client._call("POST", "/run", {})
        self.assertEqual(ctx.exception.code, 400)

    def test_unknown_path_returns_404(self):
        with self.assertRaises(error.HTTPError) as ctx:
            self.client._call("GET", "/nope")
        self.assertEqual(ctx.exception.code, 404)


if __name__ == "__main__":
    unittest.main()
