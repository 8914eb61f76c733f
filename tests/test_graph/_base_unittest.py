# tests/test_graph/_base_unittest.py
import unittest

from zxopt.graph import Graph
from zxopt.utils import VertexType, EdgeType


class GraphUnitTestCase(unittest.TestCase):
    """
    Base for unittests of the in-memory graph backend
    """

    def setUp(self):
        self.g = Graph()

    def make_line(self, *types):
        """Adds one vertex per type on qubit 0, in consecutive rows."""
        return [self.g.add_vertex(ty, 0, r) for r, ty in enumerate(types)]

    def make_pair(self, t1=VertexType.Z, t2=VertexType.Z):
        v1 = self.g.add_vertex(t1, 0, 1)
        v2 = self.g.add_vertex(t2, 0, 2)
        return v1, v2


if __name__ == "__main__":
    unittest.main()
