# tests/test_extract/test_linalg.py
import unittest

from zxopt.linalg import Mat2


class _Recorder:
    def __init__(self):
        self.ops = []

    def row_add(self, r0, r1):
        self.ops.append((r0, r1))


class TestMat2(unittest.TestCase):
    def test_row_add(self):
        m = Mat2([[1, 0, 1], [0, 1, 1]])
        m.row_add(0, 1)
        self.assertEqual(m.data, [[1, 0, 1], [1, 1, 0]])
        self.assertEqual(m.row_weight(1), 2)

    def test_xor_rows(self):
        m = Mat2([[1, 1, 0], [0, 1, 1], [1, 1, 1]])
        self.assertEqual(m.xor_rows([0, 2]), [0, 0, 1])
        self.assertEqual(m.xor_rows([]), [0, 0, 0])

    def test_rank(self):
        self.assertEqual(Mat2([[1, 1], [1, 1]]).rank(), 1)
        self.assertEqual(Mat2([[1, 1, 0], [0, 1, 1], [1, 1, 1]]).rank(), 3)
        self.assertEqual(Mat2.zeros(2, 3).rank(), 0)

    def test_full_reduce_gives_identity(self):
        m = Mat2([[1, 1, 0], [0, 1, 1], [1, 1, 1]])
        m.gauss(full_reduce=True)
        self.assertEqual(m, Mat2([[1, 0, 0], [0, 1, 0], [0, 0, 1]]))

    def test_operations_are_replayed(self):
        original = Mat2([[0, 1, 1], [1, 1, 0], [1, 0, 0]])
        m = original.copy()
        rec = _Recorder()
        m.gauss(full_reduce=True, x=rec)
        replay = original.copy()
        for r0, r1 in rec.ops:
            replay.row_add(r0, r1)
        self.assertEqual(replay, m)
        self.assertNotEqual(original, m)
