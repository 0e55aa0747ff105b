import unittest

from cubenet_sim.rotation import (
    DIRECTION_VECTORS,
    DIRECTIONS,
    DOWN,
    LEFT,
    RIGHT,
    UP,
    compose,
    invert,
    opposite,
    rotate_direction,
    rotate_point,
    rotate_vector,
)


class TestRotation(unittest.TestCase):
    def test_clockwise_order(self):
        self.assertEqual(rotate_direction(RIGHT, 1), DOWN)
        self.assertEqual(rotate_direction(DOWN, 1), LEFT)
        self.assertEqual(rotate_direction(LEFT, 1), UP)
        self.assertEqual(rotate_direction(UP, 1), RIGHT)
        self.assertEqual(rotate_direction(RIGHT, -1), UP)

    def test_four_quarter_turns_are_identity(self):
        for d in DIRECTIONS:
            self.assertEqual(rotate_direction(d, 4), d)
            self.assertEqual(rotate_vector(DIRECTION_VECTORS[d], 4), DIRECTION_VECTORS[d])

    def test_group_laws(self):
        for a in range(4):
            self.assertEqual(compose(a, invert(a)), 0)
            self.assertEqual(compose(a, 0), a)
            for b in range(4):
                self.assertEqual(compose(a, b), compose(b, a))
                for c in range(4):
                    self.assertEqual(compose(compose(a, b), c), compose(a, compose(b, c)))

    def test_rotate_vector_agrees_with_direction_rotation(self):
        for d in DIRECTIONS:
            for k in range(-4, 5):
                rotated = rotate_vector(DIRECTION_VECTORS[d], k)
                self.assertEqual(rotated, DIRECTION_VECTORS[rotate_direction(d, k)], msg=f"d={d} k={k}")

    def test_opposite(self):
        self.assertEqual(opposite(RIGHT), LEFT)
        self.assertEqual(opposite(UP), DOWN)

    def test_rotate_point_quarter_turn(self):
        size = 4
        for i in range(size):
            for j in range(size):
                self.assertEqual(rotate_point((i, j), 1, size), (size - 1 - j, i))

    def test_rotate_point_composes(self):
        for size in (1, 2, 3, 5):
            for i in range(size):
                for j in range(size):
                    p = (i, j)
                    self.assertEqual(rotate_point(p, 0, size), p)
                    self.assertEqual(rotate_point(p, 4, size), p)
                    twice = rotate_point(rotate_point(p, 1, size), 1, size)
                    self.assertEqual(twice, rotate_point(p, 2, size))
                    self.assertEqual(rotate_point(p, 2, size), (size - 1 - i, size - 1 - j))

    def test_rotate_point_corners(self):
        self.assertEqual(rotate_point((0, 0), 1, 4), (3, 0))
        self.assertEqual(rotate_point((3, 0), 1, 4), (3, 3))
        self.assertEqual(rotate_point((0, 0), 3, 4), (0, 3))


if __name__ == "__main__":
    unittest.main()
