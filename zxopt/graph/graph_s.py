# zxopt - ZX-diagram simplification and circuit extraction
#         for quantum circuit optimization

# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#    http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from fractions import Fraction
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple

from ..errors import BoundaryViolation, InvalidReference
from ..scalar import Scalar
from ..utils import EdgeType, FractionLike, VertexType, phase_to_str, to_phase, vertex_is_zx

VT = int
ET = Tuple[int, int]

__all__ = ['GraphS', 'VT', 'ET']


class GraphS(object):
    """In-memory ZX-diagram.

    Vertices are dense integer identities handed out by a counter and never
    reused. Adjacency is a dict of dicts mapping a neighbour to the type of the
    (unique) edge between the two vertices. Parallel edges are merged on
    insertion, see :meth:`add_edge_table`.

    A graph instance must not be shared between threads without external
    synchronisation.
    """
    backend = 'simple'

    def __init__(self) -> None:
        self.graph: Dict[VT, Dict[VT, EdgeType]] = dict()
        self._vindex: int = 0
        self.nedges: int = 0
        self.ty: Dict[VT, VertexType] = dict()
        self._phase: Dict[VT, Fraction] = dict()
        self._qindex: Dict[VT, int] = dict()
        self._rindex: Dict[VT, int] = dict()
        self._inputs: Tuple[VT, ...] = tuple()
        self._outputs: Tuple[VT, ...] = tuple()
        self.scalar: Scalar = Scalar()

    def __str__(self) -> str:
        return "Graph({} vertices, {} edges)".format(
            str(self.num_vertices()), str(self.num_edges()))

    def __repr__(self) -> str:
        return str(self)

    def stats(self) -> str:
        """Returns a small summary of the vertex and edge counts per type."""
        counts = {t: 0 for t in VertexType}
        for v in self.vertices():
            counts[self.ty[v]] += 1
        hadamard = sum(1 for e in self.edges() if self.edge_type(e) == EdgeType.HADAMARD)
        s = "Graph({} vertices, {} edges)\n".format(self.num_vertices(), self.num_edges())
        s += "  " + ", ".join("{}: {}".format(t.name, n) for t, n in counts.items()) + "\n"
        s += "  simple edges: {}, hadamard edges: {}".format(self.num_edges() - hadamard, hadamard)
        return s

    def copy(self) -> 'GraphS':
        g = GraphS()
        g.graph = {v: dict(d) for v, d in self.graph.items()}
        g._vindex = self._vindex
        g.nedges = self.nedges
        g.ty = dict(self.ty)
        g._phase = dict(self._phase)
        g._qindex = dict(self._qindex)
        g._rindex = dict(self._rindex)
        g._inputs = self._inputs
        g._outputs = self._outputs
        g.scalar = self.scalar.copy()
        return g

    def _check_vertex(self, v: VT) -> None:
        if v not in self.graph:
            raise InvalidReference(f"Vertex {v} does not exist")

    def _check_not_boundary(self, v: VT) -> None:
        if self.ty[v] == VertexType.BOUNDARY:
            raise BoundaryViolation(f"Vertex {v} is a boundary vertex")

    def vindex(self) -> int:
        """The index given to the next vertex added to the graph."""
        return self._vindex

    def depth(self) -> int:
        if not self._rindex:
            return -1
        return max(self._rindex.values())

    # Vertices

    def add_vertices(self, amount: int) -> List[VT]:
        """Adds ``amount`` boundary vertices and returns their identities."""
        vs = list(range(self._vindex, self._vindex + amount))
        for v in vs:
            self.graph[v] = dict()
            self.ty[v] = VertexType.BOUNDARY
            self._phase[v] = Fraction(0)
        self._vindex += amount
        return vs

    def add_vertex(
            self,
            ty: VertexType = VertexType.BOUNDARY,
            qubit: int = -1,
            row: int = -1,
            phase: Optional[FractionLike] = None
            ) -> VT:
        """Add a single vertex to the graph and return its index."""
        if phase is None:
            phase = Fraction(1) if ty == VertexType.H_BOX else Fraction(0)
        phase = to_phase(phase)
        if ty == VertexType.BOUNDARY and phase != 0:
            raise BoundaryViolation("Boundary vertices cannot carry a phase")
        v = self.add_vertices(1)[0]
        self.ty[v] = VertexType(ty)
        self._phase[v] = phase
        if qubit != -1:
            self._qindex[v] = qubit
        if row != -1:
            self._rindex[v] = row
        return v

    def add_spider(self, kind: VertexType, phase: FractionLike = 0) -> VT:
        """Allocates a fresh spider of the given kind and phase."""
        return self.add_vertex(kind, phase=phase)

    def remove_vertices(self, vertices: Iterable[VT]) -> None:
        vertices = list(vertices)
        for v in vertices:
            self._check_vertex(v)
            self._check_not_boundary(v)
        for v in vertices:
            if v in self.graph:
                self._remove_vertex(v)

    def remove_vertex(self, vertex: VT) -> None:
        """Removes the vertex and all its incident edges."""
        self._check_vertex(vertex)
        self._check_not_boundary(vertex)
        self._remove_vertex(vertex)

    def remove_spider(self, vertex: VT) -> None:
        self.remove_vertex(vertex)

    def _remove_vertex(self, v: VT) -> None:
        for n in self.graph[v]:
            del self.graph[n][v]
            self.nedges -= 1
        del self.graph[v]
        del self.ty[v]
        del self._phase[v]
        self._qindex.pop(v, None)
        self._rindex.pop(v, None)

    def remove_isolated_vertices(self) -> None:
        """Deletes all vertices and vertex pairs that are not connected to any other vertex.

        Their value is multiplied into the scalar of the graph. Pairs of
        connected degree-1 spiders are only removed when both are Z or X spiders.
        """
        rem: Set[VT] = set()
        for v in list(self.vertices()):
            if v in rem:
                continue
            t = self.ty[v]
            if t == VertexType.BOUNDARY:
                continue
            d = self.vertex_degree(v)
            if d == 0:
                rem.add(v)
                if t == VertexType.H_BOX:
                    self.scalar.add_phase(self._phase[v])
                else:
                    self.scalar.add_node(self._phase[v])
            elif d == 1:
                w = next(iter(self.graph[v]))
                if self.vertex_degree(w) != 1 or not (vertex_is_zx(t) and vertex_is_zx(self.ty[w])):
                    continue
                rem.add(v)
                rem.add(w)
                et = self.graph[v][w]
                p1, p2 = self._phase[v], self._phase[w]
                if (t == self.ty[w]) == (et == EdgeType.SIMPLE):
                    self.scalar.add_node(p1 + p2)
                else:
                    self.scalar.add_spider_pair(p1, p2)
        for v in rem:
            self._remove_vertex(v)

    def vertices(self) -> Iterator[VT]:
        return iter(list(self.graph.keys()))

    def vertex_set(self) -> Set[VT]:
        return set(self.graph.keys())

    def num_vertices(self) -> int:
        return len(self.graph)

    def contains(self, v: VT) -> bool:
        return v in self.graph

    def neighbors(self, vertex: VT) -> Set[VT]:
        """Returns the set of neighbours of ``vertex``."""
        self._check_vertex(vertex)
        return set(self.graph[vertex].keys())

    def vertex_degree(self, vertex: VT) -> int:
        self._check_vertex(vertex)
        return len(self.graph[vertex])

    def degree(self, vertex: VT) -> int:
        return self.vertex_degree(vertex)

    def incident_edges(self, vertex: VT) -> List[ET]:
        self._check_vertex(vertex)
        return [self.edge(vertex, n) for n in self.graph[vertex]]

    # Edges

    def edge(self, s: VT, t: VT) -> ET:
        """Returns the canonical edge key of the pair, independently of order."""
        return (s, t) if s < t else (t, s)

    def edge_st(self, edge: ET) -> Tuple[VT, VT]:
        return edge

    def edge_s(self, edge: ET) -> VT:
        return edge[0]

    def edge_t(self, edge: ET) -> VT:
        return edge[1]

    def edges(self) -> Iterator[ET]:
        for v0, adj in list(self.graph.items()):
            for v1 in adj:
                if v1 > v0:
                    yield (v0, v1)

    def edge_set(self) -> Set[ET]:
        return set(self.edges())

    def num_edges(self) -> int:
        return self.nedges

    def connected(self, v1: VT, v2: VT) -> bool:
        self._check_vertex(v1)
        self._check_vertex(v2)
        return v2 in self.graph[v1]

    def edge_type(self, e: ET) -> Optional[EdgeType]:
        """Returns the type of the edge, or ``None`` when the vertices are not connected."""
        v1, v2 = e
        self._check_vertex(v1)
        self._check_vertex(v2)
        return self.graph[v1].get(v2)

    def set_edge_type(self, e: ET, t: EdgeType) -> None:
        v1, v2 = e
        if not self.connected(v1, v2):
            raise InvalidReference(f"Vertices {v1} and {v2} are not connected")
        self.graph[v1][v2] = EdgeType(t)
        self.graph[v2][v1] = EdgeType(t)

    def add_edge(self, edge: ET, edgetype: EdgeType = EdgeType.SIMPLE) -> ET:
        """Adds a single edge of the given type and returns its key.

        If the vertices are already connected, the edges are merged following
        the rules of :meth:`add_edge_table`.
        """
        s, t = edge
        if edgetype == EdgeType.SIMPLE:
            self.add_edge_table({self.edge(s, t): [1, 0]})
        else:
            self.add_edge_table({self.edge(s, t): [0, 1]})
        return self.edge(s, t)

    def add_edges(self, edges: Iterable[ET], edgetype: EdgeType = EdgeType.SIMPLE) -> None:
        etab: Dict[ET, List[int]] = dict()
        for s, t in edges:
            e = self.edge(s, t)
            counts = etab.setdefault(e, [0, 0])
            if edgetype == EdgeType.SIMPLE:
                counts[0] += 1
            else:
                counts[1] += 1
        self.add_edge_table(etab)

    def _set_edge(self, v1: VT, v2: VT, et: Optional[EdgeType]) -> None:
        connected = v2 in self.graph[v1]
        if et is None:
            if connected:
                del self.graph[v1][v2]
                del self.graph[v2][v1]
                self.nedges -= 1
            return
        if not connected:
            self.nedges += 1
        self.graph[v1][v2] = et
        self.graph[v2][v1] = et

    def add_edge_table(self, etab: Dict[ET, List[int]]) -> None:
        """Takes a dictionary mapping ``(source, target) --> (#edges, #h-edges)``
        specifying that ``#edges`` regular edges and ``#h-edges`` Hadamard edges
        must be added between source and target, merged with whatever edge
        already connects them.

        Parallel edges are reduced with the rules of the ZX-calculus: between
        spiders of the same colour regular edges fuse and Hadamard edges cancel
        in pairs, between spiders of different colours it is the other way
        around. Every reduction contributes to the scalar of the graph.
        """
        for e in etab:
            v1, v2 = e
            self._check_vertex(v1)
            self._check_vertex(v2)
            if v1 == v2:
                raise InvalidReference(f"Self-loop on vertex {v1} cannot be stored as an edge")

        for e, (n1, n2) in etab.items():
            v1, v2 = e
            t1 = self.ty[v1]
            t2 = self.ty[v2]
            conn_type = self.graph[v1].get(v2)
            if conn_type == EdgeType.SIMPLE:
                n1 += 1
            elif conn_type == EdgeType.HADAMARD:
                n2 += 1

            if n1 + n2 <= 1:
                if n1 == 1:
                    new_type: Optional[EdgeType] = EdgeType.SIMPLE
                elif n2 == 1:
                    new_type = EdgeType.HADAMARD
                else:
                    new_type = None
            elif not (vertex_is_zx(t1) and vertex_is_zx(t2)):
                raise InvalidReference(
                    f"Parallel edges between {v1} ({t1.name}) and {v2} ({t2.name}) are not supported")
            elif t1 == t2:
                n1 = int(bool(n1))
                pairs, n2 = divmod(n2, 2)
                self.scalar.add_power(-2 * pairs)
                if n1 != 0 and n2 != 0:
                    new_type = EdgeType.SIMPLE
                    self.add_to_phase(v1, 1)
                    self.scalar.add_power(-1)
                elif n1 != 0:
                    new_type = EdgeType.SIMPLE
                elif n2 != 0:
                    new_type = EdgeType.HADAMARD
                else:
                    new_type = None
            else:
                pairs, n1 = divmod(n1, 2)
                n2 = int(bool(n2))
                self.scalar.add_power(-2 * pairs)
                if n1 != 0 and n2 != 0:
                    new_type = EdgeType.HADAMARD
                    self.add_to_phase(v1, 1)
                    self.scalar.add_power(-1)
                elif n1 != 0:
                    new_type = EdgeType.SIMPLE
                elif n2 != 0:
                    new_type = EdgeType.HADAMARD
                else:
                    new_type = None

            self._set_edge(v1, v2, new_type)

    def remove_edge(self, edge: ET) -> None:
        s, t = edge
        if not self.connected(s, t):
            raise InvalidReference(f"Vertices {s} and {t} are not connected")
        self._set_edge(s, t, None)

    def remove_edges(self, edges: Iterable[ET]) -> None:
        for e in edges:
            self.remove_edge(e)

    # Vertex data

    def type(self, vertex: VT) -> VertexType:
        self._check_vertex(vertex)
        return self.ty[vertex]

    def types(self) -> Dict[VT, VertexType]:
        return self.ty

    def set_type(self, vertex: VT, t: VertexType) -> None:
        self._check_vertex(vertex)
        if VertexType.BOUNDARY in (self.ty[vertex], t) and self.ty[vertex] != t:
            if vertex in self._inputs or vertex in self._outputs:
                raise BoundaryViolation(f"Vertex {vertex} is an input or output")
        self.ty[vertex] = VertexType(t)

    def phase(self, vertex: VT) -> Fraction:
        self._check_vertex(vertex)
        return self._phase[vertex]

    def phases(self) -> Dict[VT, Fraction]:
        return self._phase

    def set_phase(self, vertex: VT, phase: FractionLike) -> None:
        self._check_vertex(vertex)
        self._check_not_boundary(vertex)
        self._phase[vertex] = to_phase(phase)

    def add_to_phase(self, vertex: VT, phase: FractionLike) -> None:
        self.set_phase(vertex, self.phase(vertex) + to_phase(phase))

    def qubit(self, vertex: VT) -> int:
        self._check_vertex(vertex)
        return self._qindex.get(vertex, -1)

    def set_qubit(self, vertex: VT, q: int) -> None:
        self._check_vertex(vertex)
        self._qindex[vertex] = q

    def row(self, vertex: VT) -> int:
        self._check_vertex(vertex)
        return self._rindex.get(vertex, -1)

    def set_row(self, vertex: VT, r: int) -> None:
        self._check_vertex(vertex)
        self._rindex[vertex] = r

    def vertex_str(self, vertex: VT) -> str:
        return "{}({}, {})".format(self.ty[vertex].name, vertex, phase_to_str(self._phase[vertex]))

    # Boundaries

    def inputs(self) -> Tuple[VT, ...]:
        return self._inputs

    def outputs(self) -> Tuple[VT, ...]:
        return self._outputs

    def num_inputs(self) -> int:
        return len(self._inputs)

    def num_outputs(self) -> int:
        return len(self._outputs)

    def qubit_count(self) -> int:
        return max(len(self._inputs), len(self._outputs))

    def set_inputs(self, inputs: Iterable[VT]) -> None:
        inputs = tuple(inputs)
        self._check_boundaries(inputs)
        self._inputs = inputs

    def set_outputs(self, outputs: Iterable[VT]) -> None:
        outputs = tuple(outputs)
        self._check_boundaries(outputs)
        self._outputs = outputs

    def _check_boundaries(self, vs: Tuple[VT, ...]) -> None:
        for v in vs:
            self._check_vertex(v)
            if self.ty[v] != VertexType.BOUNDARY:
                raise InvalidReference(f"Vertex {v} is not of boundary type")
        if len(set(vs)) != len(vs):
            raise InvalidReference(f"Duplicate boundary vertex in {vs}")

    def is_boundary(self, vertex: VT) -> bool:
        return self.type(vertex) == VertexType.BOUNDARY
