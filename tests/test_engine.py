import unittest

from cubenet_sim.engine import CubeNetEngine, solve
from cubenet_sim.net_codec import NetValidationError
from cubenet_sim.net_map import CubeNetMap
from cubenet_sim.rotation import DOWN, RIGHT
from cubenet_sim.walker import AdvanceMode

from sample_nets import SAMPLE_COMMANDS, SAMPLE_INPUT, SAMPLE_NET


class TestEngine(unittest.TestCase):
    def setUp(self):
        self.net = CubeNetMap.from_text(SAMPLE_NET)

    def test_solve_sample(self):
        self.assertEqual(solve(SAMPLE_INPUT, mode="fold"), 5031)
        self.assertEqual(solve(SAMPLE_INPUT, mode="wrap"), 6032)
        self.assertEqual(solve(SAMPLE_INPUT, mode=AdvanceMode.FOLD, face_size=4), 5031)

    def test_step_tracks_history(self):
        engine = CubeNetEngine(self.net)
        engine.step(10)
        state = engine.step("R")
        self.assertEqual(state.position, (10, 0))
        self.assertEqual(state.heading, DOWN)
        self.assertEqual(engine.step_count, 2)
        self.assertEqual(engine.history, [10, "R"])

    def test_run_accepts_string_and_list(self):
        e1 = CubeNetEngine(self.net, mode="wrap")
        e2 = CubeNetEngine(self.net, mode="wrap")
        s1 = e1.run(SAMPLE_COMMANDS)
        s2 = e2.run([10, "R", 5, "L", 5, "R", 10, "L", 4, "R", 5, "L", 5])
        self.assertEqual(s1, s2)
        self.assertEqual(e1.password(), 6032)

    def test_run_with_progress_bar(self):
        engine = CubeNetEngine(self.net)
        engine.run(SAMPLE_COMMANDS, progress=True)
        self.assertEqual(engine.password(), 5031)

    def test_reset(self):
        engine = CubeNetEngine(self.net)
        engine.run(SAMPLE_COMMANDS)
        state = engine.reset()
        self.assertEqual(state.position, (8, 0))
        self.assertEqual(state.heading, RIGHT)
        self.assertEqual(engine.step_count, 0)
        self.assertEqual(engine.history, [])

    def test_returned_state_is_a_copy(self):
        engine = CubeNetEngine(self.net)
        state = engine.get_state()
        state.heading = DOWN
        self.assertEqual(engine.get_state().heading, RIGHT)

    def test_invalid_command(self):
        engine = CubeNetEngine(self.net)
        with self.assertRaises(NetValidationError):
            engine.step("X")
        with self.assertRaises(NetValidationError):
            engine.run("5Q")
        self.assertEqual(engine.step_count, 0)

    def test_state_payload(self):
        engine = CubeNetEngine(self.net, mode="fold")
        engine.run(SAMPLE_COMMANDS)
        payload = engine.state_payload()
        self.assertEqual(payload["x"], 6)
        self.assertEqual(payload["y"], 4)
        self.assertEqual(payload["heading_name"], "up")
        self.assertEqual(payload["password"], 5031)
        self.assertEqual(payload["mode"], "fold")
        self.assertEqual(payload["step_count"], 13)
        self.assertEqual(payload["face_id"], 5)


if __name__ == "__main__":
    unittest.main()
