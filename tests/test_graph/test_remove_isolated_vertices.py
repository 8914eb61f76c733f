# tests/test_graph/test_remove_isolated_vertices.py
from fractions import Fraction
import cmath
import math

from zxopt.tensor import compare_tensors
from zxopt.utils import EdgeType, VertexType

from tests.helpers import make_wire_graph
from tests.test_graph._base_unittest import GraphUnitTestCase


class TestRemoveIsolatedVertices(GraphUnitTestCase):
    def test_single_spider_becomes_scalar(self):
        g = self.g
        g.add_spider(VertexType.Z, Fraction(1, 2))
        g.remove_isolated_vertices()
        self.assertEqual(g.num_vertices(), 0)
        self.assertTrue(cmath.isclose(g.scalar.to_number(), 1 + 1j))

    def test_pi_spider_makes_scalar_zero(self):
        g = self.g
        g.add_spider(VertexType.X, 1)
        g.remove_isolated_vertices()
        self.assertTrue(g.scalar.is_zero)

    def test_h_box_contributes_its_phase(self):
        g = self.g
        g.add_vertex(VertexType.H_BOX, phase=Fraction(1, 2))
        g.remove_isolated_vertices()
        self.assertTrue(cmath.isclose(g.scalar.to_number(), 1j))

    def test_boundaries_are_kept(self):
        g = self.g
        g.add_vertices(2)
        g.remove_isolated_vertices()
        self.assertEqual(g.num_vertices(), 2)

    def test_connected_pairs(self):
        g = self.g
        a, b = self.make_pair(VertexType.Z, VertexType.X)
        g.set_phase(a, Fraction(1, 4))
        g.add_edge((a, b))
        g.remove_isolated_vertices()
        self.assertEqual(g.num_vertices(), 0)
        # (1 + e^{i pi/4} + 1 - e^{i pi/4}) / sqrt(2)
        self.assertTrue(cmath.isclose(g.scalar.to_number(), math.sqrt(2)))

    def test_pair_with_h_box_is_kept(self):
        g = self.g
        a, h = self.make_pair(VertexType.Z, VertexType.H_BOX)
        g.add_edge((a, h))
        g.remove_isolated_vertices()
        self.assertEqual(g.num_vertices(), 2)

    def test_value_is_preserved(self):
        for et in (EdgeType.SIMPLE, EdgeType.HADAMARD):
            for kinds in ((VertexType.Z, VertexType.Z), (VertexType.Z, VertexType.X)):
                with self.subTest(edge=et, kinds=kinds):
                    g = make_wire_graph(1)
                    a = g.add_spider(kinds[0], Fraction(3, 4))
                    b = g.add_spider(kinds[1], Fraction(1, 2))
                    g.add_edge((a, b), et)
                    g.add_spider(VertexType.Z, Fraction(1, 3))
                    h = g.copy()
                    h.remove_isolated_vertices()
                    self.assertEqual(h.num_vertices(), 2)
                    self.assertTrue(compare_tensors(g, h, preserve_scalar=True))
