# tests/test_rules/test_spider.py
from fractions import Fraction

from zxopt.errors import RuleMismatch
from zxopt.rules import Match, RuleKind, apply_rule, check_spider, match_spider_parallel
from zxopt.utils import EdgeType, VertexType

from tests.helpers import make_spider_chain
from tests.test_rules._base_unittest import RuleUnitTestCase


class TestSpiderFusion(RuleUnitTestCase):
    def test_fuse_two_z_spiders(self):
        g = make_spider_chain([Fraction(1, 4), Fraction(1, 2)], [EdgeType.SIMPLE])
        run = self.apply_parallel(g, match_spider_parallel, "spider", expected_matches=1)
        self.assert_sound(run)
        h = run.graph_after
        spiders = [v for v in h.vertices() if h.type(v) == VertexType.Z]
        self.assertEqual(len(spiders), 1)
        self.assertEqual(h.phase(spiders[0]), Fraction(3, 4))

    def test_fuse_two_x_spiders(self):
        g = make_spider_chain([Fraction(1, 2), Fraction(3, 2)], [EdgeType.SIMPLE],
                              kinds=[VertexType.X, VertexType.X])
        run = self.apply_parallel(g, match_spider_parallel, "spider", expected_matches=1)
        self.assert_sound(run)
        self.assertEqual(run.graph_after.num_vertices(), 3)

    def test_different_colours_do_not_fuse(self):
        g = make_spider_chain([0, 0], [EdgeType.SIMPLE], kinds=[VertexType.Z, VertexType.X])
        self.assertEqual(match_spider_parallel(g), [])

    def test_hadamard_edge_does_not_fuse(self):
        g = make_spider_chain([0, 0], [EdgeType.HADAMARD])
        self.assertEqual(match_spider_parallel(g), [])

    def test_fusion_merges_parallel_edges(self):
        # z0 and z1 share a neighbour z2 through Hadamard edges, which cancel
        # after fusion and leave z2 isolated
        g = make_spider_chain([Fraction(1, 4), 0], [EdgeType.SIMPLE])
        z0, z1 = 1, 2
        z2 = g.add_spider(VertexType.Z, Fraction(1, 2))
        g.add_edges([(z0, z2), (z1, z2)], EdgeType.HADAMARD)
        run = self.apply_parallel(g, match_spider_parallel, "spider", expected_matches=1)
        self.assert_sound(run)
        self.assertFalse(run.graph_after.contains(z2))

    def test_chain_matches_do_not_interact(self):
        g = make_spider_chain([Fraction(1, 4)] * 4, [EdgeType.SIMPLE] * 3)
        matches = match_spider_parallel(g)
        self.assertEqual(len(matches), 1)
        self.assertEqual(len(match_spider_parallel(g, num=0)), 0)
        run = self.apply_parallel(g, match_spider_parallel, "spider")
        self.assert_sound(run)

    def test_filter(self):
        g = make_spider_chain([0, 0, 0], [EdgeType.SIMPLE] * 2)
        matches = match_spider_parallel(g, matchf=lambda e: e == (2, 3))
        self.assertEqual(matches, [Match(RuleKind.SPIDER, (2, 3))])

    def test_mismatch(self):
        g = make_spider_chain([0, 0], [EdgeType.HADAMARD])
        self.assertFalse(check_spider(g, 1, 2))
        with self.assertRaises(RuleMismatch) as ctx:
            apply_rule(g, Match(RuleKind.SPIDER, (1, 2)))
        self.assertEqual(ctx.exception.vertices, (1, 2))
        # the graph is untouched
        self.assertEqual(g.num_vertices(), 4)

    def test_boundary_does_not_fuse(self):
        g = make_spider_chain([0], [])
        with self.assertRaises(ValueError):
            apply_rule(g, Match(RuleKind.SPIDER, (0, 1)))
