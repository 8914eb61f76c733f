# tests/test_rules/test_id_hadamard.py
from fractions import Fraction

from zxopt.errors import RuleMismatch
from zxopt.graph import GraphS
from zxopt.rules import (
    Match, RuleKind, apply_rule, match_hadamard_parallel, match_ids_parallel,
)
from zxopt.utils import EdgeType, VertexType

from tests.helpers import make_spider_chain, make_wire_graph
from tests.test_rules._base_unittest import RuleUnitTestCase


class TestIdentityRemoval(RuleUnitTestCase):
    def test_remove_id_between_hadamards(self):
        g = make_spider_chain([Fraction(1, 2), 0, Fraction(1, 4)],
                              [EdgeType.HADAMARD, EdgeType.HADAMARD])
        run = self.apply_parallel(g, match_ids_parallel, "id", expected_matches=1)
        self.assert_sound(run)
        h = run.graph_after
        self.assertEqual(h.edge_type((1, 3)), EdgeType.SIMPLE)

    def test_remove_id_mixed_edges(self):
        g = make_spider_chain([Fraction(1, 2), 0, Fraction(1, 4)],
                              [EdgeType.SIMPLE, EdgeType.HADAMARD])
        run = self.apply_parallel(g, match_ids_parallel, "id", expected_matches=1)
        self.assert_sound(run)
        self.assertEqual(run.graph_after.edge_type((1, 3)), EdgeType.HADAMARD)

    def test_id_next_to_boundary(self):
        g = make_spider_chain([0], [])
        run = self.apply_parallel(g, match_ids_parallel, "id", expected_matches=1)
        self.assert_sound(run)
        h = run.graph_after
        self.assertEqual(h.num_vertices(), 2)
        self.assertTrue(h.connected(*h.inputs(), *h.outputs()))

    def test_ids_sharing_neighbours(self):
        g = GraphS()
        i = g.add_vertex(VertexType.BOUNDARY, 0, 0)
        a = g.add_vertex(VertexType.Z, 0, 1, Fraction(1, 4))
        u = g.add_vertex(VertexType.Z, 0, 2)
        v = g.add_vertex(VertexType.Z, 1, 2)
        b = g.add_vertex(VertexType.Z, 0, 3, Fraction(1, 2))
        o = g.add_vertex(VertexType.BOUNDARY, 0, 4)
        g.add_edges([(i, a), (a, u), (u, b), (a, v), (v, b), (b, o)])
        g.set_inputs([i])
        g.set_outputs([o])
        # both would reconnect a and b
        run = self.apply_parallel(g, match_ids_parallel, "id", expected_matches=1)
        self.assert_sound(run)

    def test_cancelling_edge_leaves_no_isolated_spiders(self):
        g = make_wire_graph(1)
        a = g.add_vertex(VertexType.Z, 1, 1, Fraction(1, 4))
        v = g.add_vertex(VertexType.Z, 1, 2)
        b = g.add_vertex(VertexType.Z, 1, 3, Fraction(1, 2))
        g.add_edge((a, b), EdgeType.HADAMARD)
        g.add_edge((a, v))
        g.add_edge((v, b), EdgeType.HADAMARD)
        run = self.apply_parallel(g, match_ids_parallel, "id", expected_matches=1)
        self.assert_sound(run)
        # the new Hadamard edge cancels a-b, both spiders end up in the scalar
        self.assertEqual(run.graph_after.num_vertices(), 2)

    def test_phase_blocks_id(self):
        g = make_spider_chain([Fraction(1, 4)], [])
        self.assertEqual(match_ids_parallel(g), [])
        with self.assertRaises(RuleMismatch):
            apply_rule(g, Match(RuleKind.ID, (1,)))


class TestHadamardMarker(RuleUnitTestCase):
    def test_h_box_becomes_hadamard_edge(self):
        g = make_spider_chain([Fraction(1, 4), 1, Fraction(1, 2)],
                              [EdgeType.SIMPLE, EdgeType.SIMPLE],
                              kinds=[VertexType.Z, VertexType.H_BOX, VertexType.Z])
        run = self.apply_parallel(g, match_hadamard_parallel, "hadamard", expected_matches=1)
        self.assert_sound(run)
        h = run.graph_after
        self.assertEqual(h.edge_type((1, 3)), EdgeType.HADAMARD)
        self.assertEqual(h.scalar.power2, 1)

    def test_double_hadamard_is_a_simple_edge(self):
        g = make_spider_chain([Fraction(1, 4), 1, Fraction(1, 2)],
                              [EdgeType.HADAMARD, EdgeType.SIMPLE],
                              kinds=[VertexType.Z, VertexType.H_BOX, VertexType.Z])
        run = self.apply_parallel(g, match_hadamard_parallel, "hadamard", expected_matches=1)
        self.assert_sound(run)
        self.assertEqual(run.graph_after.edge_type((1, 3)), EdgeType.SIMPLE)

    def test_consecutive_h_boxes(self):
        g = make_spider_chain([0, 1, 1, 0], [EdgeType.SIMPLE] * 3,
                              kinds=[VertexType.Z, VertexType.H_BOX, VertexType.H_BOX, VertexType.Z])
        run = self.apply_parallel(g, match_hadamard_parallel, "hadamard", expected_matches=1)
        self.assert_sound(run)

    def test_h_box_parallel_to_hadamard_edge(self):
        g = make_wire_graph(1)
        a = g.add_vertex(VertexType.Z, 1, 1, Fraction(1, 4))
        h = g.add_vertex(VertexType.H_BOX, 1, 2, 1)
        b = g.add_vertex(VertexType.Z, 1, 3)
        g.add_edges([(a, h), (h, b)])
        g.add_edge((a, b), EdgeType.HADAMARD)
        run = self.apply_parallel(g, match_hadamard_parallel, "hadamard", expected_matches=1)
        self.assert_sound(run)
        self.assertEqual(run.graph_after.num_vertices(), 2)

    def test_h_box_with_other_phase_is_not_matched(self):
        g = make_spider_chain([0, Fraction(1, 2), 0], [EdgeType.SIMPLE] * 2,
                              kinds=[VertexType.Z, VertexType.H_BOX, VertexType.Z])
        self.assertEqual(match_hadamard_parallel(g), [])
