# tests/test_graph/test_vertices.py
from fractions import Fraction

from zxopt.errors import BoundaryViolation, InvalidReference
from zxopt.utils import EdgeType, VertexType

from tests.test_graph._base_unittest import GraphUnitTestCase


class TestVertices(GraphUnitTestCase):
    def test_add_vertices_are_boundaries(self):
        vs = self.g.add_vertices(3)
        self.assertEqual(vs, [0, 1, 2])
        for v in vs:
            self.assertEqual(self.g.type(v), VertexType.BOUNDARY)
            self.assertEqual(self.g.phase(v), 0)

    def test_identities_are_never_reused(self):
        g = self.g
        v0 = g.add_spider(VertexType.Z)
        v1 = g.add_spider(VertexType.X)
        g.remove_vertex(v1)
        v2 = g.add_spider(VertexType.Z)
        self.assertEqual((v0, v1, v2), (0, 1, 2))
        self.assertEqual(g.vindex(), 3)
        self.assertEqual(g.vertex_set(), {0, 2})

    def test_vertex_data(self):
        g = self.g
        v = g.add_vertex(VertexType.Z, qubit=2, row=5, phase=Fraction(1, 4))
        self.assertEqual(g.qubit(v), 2)
        self.assertEqual(g.row(v), 5)
        g.set_qubit(v, 1)
        g.set_row(v, 7)
        self.assertEqual((g.qubit(v), g.row(v)), (1, 7))
        w = g.add_spider(VertexType.X)
        self.assertEqual((g.qubit(w), g.row(w)), (-1, -1))

    def test_phases_are_normalised(self):
        g = self.g
        v = g.add_spider(VertexType.Z, Fraction(5, 2))
        self.assertEqual(g.phase(v), Fraction(1, 2))
        g.add_to_phase(v, Fraction(3, 2))
        self.assertEqual(g.phase(v), 0)
        g.set_phase(v, -1)
        self.assertEqual(g.phase(v), 1)

    def test_float_phase_is_refused(self):
        with self.assertRaises(TypeError):
            self.g.add_spider(VertexType.Z, 0.25)
        v = self.g.add_spider(VertexType.Z)
        with self.assertRaises(TypeError):
            self.g.set_phase(v, 0.5)

    def test_h_box_defaults_to_hadamard(self):
        h = self.g.add_vertex(VertexType.H_BOX)
        self.assertEqual(self.g.phase(h), 1)

    def test_boundary_cannot_carry_a_phase(self):
        with self.assertRaises(BoundaryViolation):
            self.g.add_vertex(VertexType.BOUNDARY, phase=Fraction(1, 2))
        b = self.g.add_vertex(VertexType.BOUNDARY)
        with self.assertRaises(BoundaryViolation):
            self.g.set_phase(b, 1)

    def test_remove_vertex_removes_edges(self):
        g = self.g
        a, b, c = self.make_line(VertexType.Z, VertexType.X, VertexType.Z)
        g.add_edges([(a, b), (b, c)])
        g.add_edge((a, c), EdgeType.HADAMARD)
        g.remove_vertex(b)
        self.assertEqual(g.num_edges(), 1)
        self.assertEqual(g.neighbors(a), {c})
        with self.assertRaises(InvalidReference):
            g.neighbors(b)

    def test_remove_boundary_is_refused(self):
        g = self.g
        b, z = self.make_line(VertexType.BOUNDARY, VertexType.Z)
        with self.assertRaises(BoundaryViolation):
            g.remove_vertex(b)
        with self.assertRaises(BoundaryViolation):
            g.remove_vertices([z, b])
        # nothing is removed when one of the vertices is refused
        self.assertTrue(g.contains(z))

    def test_remove_unknown_vertex(self):
        with self.assertRaises(InvalidReference):
            self.g.remove_vertex(5)

    def test_degree_and_incident_edges(self):
        g = self.g
        a, b, c = self.make_line(VertexType.Z, VertexType.Z, VertexType.Z)
        g.add_edges([(a, b), (a, c)], EdgeType.HADAMARD)
        self.assertEqual(g.vertex_degree(a), 2)
        self.assertEqual(sorted(g.incident_edges(a)), [(a, b), (a, c)])
        self.assertEqual(g.edge_set(), {(a, b), (a, c)})

    def test_copy_is_independent(self):
        g = self.g
        a, b = self.make_pair()
        g.add_edge((a, b))
        g.scalar.add_power(3)
        h = g.copy()
        h.remove_vertex(b)
        h.set_phase(a, 1)
        h.scalar.add_power(1)
        self.assertTrue(g.connected(a, b))
        self.assertEqual(g.phase(a), 0)
        self.assertEqual(g.scalar.power2, 3)
        self.assertEqual(h.vindex(), g.vindex())
