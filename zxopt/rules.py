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

"""
This module contains the rewrite rules on ZX-diagrams.

Each rewrite rule consists of three functions: a predicate, a matcher and a
rewriter.

``check_<rule>(g, *vertices)`` decides whether the rule applies at the given
spiders. It only inspects those spiders and their neighbourhood.

``match_<rule>_parallel(g, vertexf/matchf, num)`` finds as many
non-interacting places where the rule can be applied. The optional filter
function restricts the candidate vertices (or edges, for the rules that are
centred on an edge). The matches are returned as :class:`Match` values.

``<rule>(g, match)`` computes the rewrite as a :class:`GraphEdit` without
touching ``g``. It raises :class:`~zxopt.errors.RuleMismatch` when the
predicate does not hold. The edit is applied with :func:`apply_edit`.

Matches returned by one call of a matcher do not interact, so their edits can
all be computed on the same graph, merged with :meth:`GraphEdit.merge` and
applied at once. This is what :func:`apply_matches` and
:func:`zxopt.simplify.simp` do.
"""

__all__ = [
    'RuleKind',
    'Match',
    'GraphEdit',
    'RuleDef',
    'RULES',
    'check_spider', 'match_spider_parallel', 'spider',
    'check_id', 'match_ids_parallel', 'remove_id',
    'check_lcomp', 'match_lcomp_parallel', 'lcomp',
    'check_pivot', 'match_pivot_parallel', 'pivot',
    'check_hadamard', 'match_hadamard_parallel', 'hadamard',
    'check_match',
    'rewrite',
    'apply_edit',
    'apply_rule',
    'apply_matches',
]

from dataclasses import dataclass, field
from enum import Enum
from fractions import Fraction
from typing import Callable, Dict, List, NamedTuple, Optional, Set, Tuple

from .errors import InvalidReference, RuleMismatch
from .graph.graph_s import ET, VT, GraphS
from .scalar import Scalar
from .utils import EdgeType, VertexType, phase_is_pauli, phase_is_proper_clifford, to_phase, vertex_is_zx


class RuleKind(str, Enum):
    """The closed set of rewrite rules. The values are the names used in
    :attr:`zxopt.config.EngineConfig.rule_order`."""
    HADAMARD = "hadamard"
    SPIDER = "spider"
    ID = "id"
    PIVOT = "pivot"
    LCOMP = "lcomp"


@dataclass(frozen=True)
class Match:
    """A place where a rule applies: the rule and the spiders it is centred on."""
    rule: RuleKind
    vertices: Tuple[VT, ...]


@dataclass
class GraphEdit:
    """The result of a rewrite, to be applied with :func:`apply_edit`.

    :param etab: Edges to add, in the format of :meth:`GraphS.add_edge_table`.
    :param rem_verts: Spiders to remove.
    :param rem_edges: Edges to remove.
    :param phases: Phases to add to spiders, as multiples of pi.
    :param scalar: Factor to multiply into the scalar of the graph.
    :param check_isolated_vertices: Whether the rewrite can leave isolated
       spiders behind that should be removed afterwards.
    """
    etab: Dict[ET, List[int]] = field(default_factory=dict)
    rem_verts: List[VT] = field(default_factory=list)
    rem_edges: List[ET] = field(default_factory=list)
    phases: Dict[VT, Fraction] = field(default_factory=dict)
    scalar: Scalar = field(default_factory=Scalar)
    check_isolated_vertices: bool = False

    def add_edges(self, e: ET, simple: int = 0, hadamard: int = 0) -> None:
        counts = self.etab.setdefault(e, [0, 0])
        counts[0] += simple
        counts[1] += hadamard

    def add_phase(self, v: VT, phase: Fraction) -> None:
        self.phases[v] = self.phases.get(v, Fraction(0)) + phase

    def merge(self, other: 'GraphEdit') -> 'GraphEdit':
        """Combines the edit with the edit of a non-interacting match."""
        for e, (n1, n2) in other.etab.items():
            self.add_edges(e, n1, n2)
        self.rem_verts.extend(other.rem_verts)
        self.rem_edges.extend(other.rem_edges)
        for v, p in other.phases.items():
            self.add_phase(v, p)
        self.scalar.mult_with_scalar(other.scalar)
        self.check_isolated_vertices = self.check_isolated_vertices or other.check_isolated_vertices
        return self


def _filtered_vertices(g: GraphS, vertexf: Optional[Callable[[VT], bool]]) -> List[VT]:
    if vertexf is not None:
        return sorted(v for v in g.vertices() if vertexf(v))
    return sorted(g.vertices())


def _filtered_edges(g: GraphS, matchf: Optional[Callable[[ET], bool]]) -> List[ET]:
    if matchf is not None:
        return sorted(e for e in g.edges() if matchf(e))
    return sorted(g.edges())


# Spider fusion

def check_spider(g: GraphS, v0: VT, v1: VT) -> bool:
    """Two spiders of the same colour connected by a regular edge."""
    if v0 == v1 or not (g.contains(v0) and g.contains(v1)):
        return False
    if not (g.type(v0) == g.type(v1) and vertex_is_zx(g.type(v0))):
        return False
    if g.edge_type(g.edge(v0, v1)) != EdgeType.SIMPLE:
        return False
    # edges of v1 are moved onto v0, which can only merge with spider edges
    for n in g.neighbors(v0) & g.neighbors(v1):
        if not vertex_is_zx(g.type(n)):
            return False
    return True


def match_spider_parallel(
        g: GraphS,
        matchf: Optional[Callable[[ET], bool]] = None,
        num: int = -1
        ) -> List[Match]:
    """Finds non-interacting matchings of the spider fusion rule.

    :param g: An instance of a ZX-graph.
    :param matchf: An optional filtering function for candidate edges, should
       return True if the edge should be considered for matchings. Passing None
       will consider all edges.
    :param num: Maximal amount of matchings to find. If -1 (the default)
       tries to find as many as possible.
    """
    candidates = _filtered_edges(g, matchf)
    taken: Set[ET] = set()
    m: List[Match] = []
    for e in candidates:
        if num != -1 and len(m) >= num:
            break
        if e in taken:
            continue
        v0, v1 = g.edge_st(e)
        if not check_spider(g, v0, v1):
            continue
        m.append(Match(RuleKind.SPIDER, (v0, v1)))
        for n in g.neighbors(v0) | g.neighbors(v1):
            taken.update(g.incident_edges(n))
    return m


def spider(g: GraphS, match: Match) -> GraphEdit:
    """Fuses the second spider of the match into the first one."""
    v0, v1 = match.vertices
    if not check_spider(g, v0, v1):
        raise RuleMismatch(RuleKind.SPIDER, match.vertices)
    edit = GraphEdit(check_isolated_vertices=True)
    edit.add_phase(v0, g.phase(v1))
    edit.rem_verts.append(v1)
    for n in g.neighbors(v1):
        if n == v0:
            continue
        if g.edge_type(g.edge(v1, n)) == EdgeType.SIMPLE:
            edit.add_edges(g.edge(v0, n), simple=1)
        else:
            edit.add_edges(g.edge(v0, n), hadamard=1)
    return edit


# Identity removal

def check_id(g: GraphS, v: VT) -> bool:
    """A phase-free spider with exactly two neighbours."""
    if not g.contains(v):
        return False
    if not vertex_is_zx(g.type(v)) or g.phase(v) != 0:
        return False
    vn = g.neighbors(v)
    if len(vn) != 2:
        return False
    v0, v1 = sorted(vn)
    if g.connected(v0, v1) and not (vertex_is_zx(g.type(v0)) and vertex_is_zx(g.type(v1))):
        return False
    return True


def match_ids_parallel(
        g: GraphS,
        vertexf: Optional[Callable[[VT], bool]] = None,
        num: int = -1
        ) -> List[Match]:
    """Finds non-interacting identity spiders.

    :param g: An instance of a ZX-graph.
    :param vertexf: An optional filtering function for candidate vertices.
    :param num: Maximal amount of matchings to find, -1 for as many as possible.
    """
    taken: Set[VT] = set()
    # two matches reconnecting the same pair would create parallel edges
    pairs: Set[Tuple[VT, ...]] = set()
    m: List[Match] = []
    for v in _filtered_vertices(g, vertexf):
        if num != -1 and len(m) >= num:
            break
        if v in taken or not check_id(g, v):
            continue
        pair = tuple(sorted(g.neighbors(v)))
        if pair in pairs:
            continue
        pairs.add(pair)
        m.append(Match(RuleKind.ID, (v,)))
        taken.add(v)
        taken.update(g.neighbors(v))
    return m


def remove_id(g: GraphS, match: Match) -> GraphEdit:
    """Removes the identity spider and connects its two neighbours."""
    (v,) = match.vertices
    if not check_id(g, v):
        raise RuleMismatch(RuleKind.ID, match.vertices)
    v0, v1 = sorted(g.neighbors(v))
    edit = GraphEdit(check_isolated_vertices=True)
    edit.rem_verts.append(v)
    if g.edge_type(g.edge(v, v0)) == g.edge_type(g.edge(v, v1)):
        edit.add_edges(g.edge(v0, v1), simple=1)
    else:
        edit.add_edges(g.edge(v0, v1), hadamard=1)
    return edit


# Local complementation

def check_lcomp(g: GraphS, v: VT) -> bool:
    """A Z-spider with phase ±pi/2 whose edges all go to Z-spiders through Hadamards."""
    if not g.contains(v):
        return False
    if g.type(v) != VertexType.Z or not phase_is_proper_clifford(g.phase(v)):
        return False
    for n in g.neighbors(v):
        if g.type(n) != VertexType.Z:
            return False
        if g.edge_type(g.edge(v, n)) != EdgeType.HADAMARD:
            return False
    return True


def match_lcomp_parallel(
        g: GraphS,
        vertexf: Optional[Callable[[VT], bool]] = None,
        num: int = -1
        ) -> List[Match]:
    """Finds non-interacting matchings of the local complementation rule.

    :param g: An instance of a ZX-graph.
    :param vertexf: An optional filtering function for candidate vertices.
    :param num: Maximal amount of matchings to find, -1 for as many as possible.
    """
    taken: Set[VT] = set()
    m: List[Match] = []
    for v in _filtered_vertices(g, vertexf):
        if num != -1 and len(m) >= num:
            break
        if v in taken or not check_lcomp(g, v):
            continue
        m.append(Match(RuleKind.LCOMP, (v,)))
        taken.add(v)
        taken.update(g.neighbors(v))
    return m


def lcomp(g: GraphS, match: Match) -> GraphEdit:
    """Removes the spider by complementing its neighbourhood. See "Graph
    Theoretic Simplification of Quantum Circuits using the ZX calculus"
    (arXiv:1902.03178) for the details of the rewrite."""
    (v,) = match.vertices
    if not check_lcomp(g, v):
        raise RuleMismatch(RuleKind.LCOMP, match.vertices)
    p = g.phase(v)
    vn = sorted(g.neighbors(v))
    n = len(vn)
    edit = GraphEdit(check_isolated_vertices=True)
    edit.rem_verts.append(v)
    edit.scalar.add_phase(Fraction(1, 4) if p == Fraction(1, 2) else Fraction(7, 4))
    edit.scalar.add_power((n - 2) * (n - 1) // 2)
    for i in range(n):
        edit.add_phase(vn[i], -p)
        for j in range(i + 1, n):
            edit.add_edges(g.edge(vn[i], vn[j]), hadamard=1)
    return edit


# Pivoting

def check_pivot(g: GraphS, v0: VT, v1: VT) -> bool:
    """Two Z-spiders with Pauli phases, connected by a Hadamard edge, whose
    other edges all go to Z-spiders through Hadamards."""
    if v0 == v1 or not (g.contains(v0) and g.contains(v1)):
        return False
    if g.edge_type(g.edge(v0, v1)) != EdgeType.HADAMARD:
        return False
    for v in (v0, v1):
        if g.type(v) != VertexType.Z or not phase_is_pauli(g.phase(v)):
            return False
        for n in g.neighbors(v):
            if g.type(n) != VertexType.Z:
                return False
            if g.edge_type(g.edge(v, n)) != EdgeType.HADAMARD:
                return False
    return True


def match_pivot_parallel(
        g: GraphS,
        matchf: Optional[Callable[[ET], bool]] = None,
        num: int = -1
        ) -> List[Match]:
    """Finds non-interacting matchings of the interior pivot rule.

    :param g: An instance of a ZX-graph.
    :param matchf: An optional filtering function for candidate edges.
    :param num: Maximal amount of matchings to find, -1 for as many as possible.
    """
    taken: Set[ET] = set()
    m: List[Match] = []
    for e in _filtered_edges(g, matchf):
        if num != -1 and len(m) >= num:
            break
        if e in taken:
            continue
        v0, v1 = g.edge_st(e)
        if not check_pivot(g, v0, v1):
            continue
        m.append(Match(RuleKind.PIVOT, (v0, v1)))
        for n in g.neighbors(v0) | g.neighbors(v1):
            taken.update(g.incident_edges(n))
    return m


def pivot(g: GraphS, match: Match) -> GraphEdit:
    """Removes both spiders of the match by pivoting along their edge.

    The remaining neighbours are split in three classes: those only adjacent
    to the first spider, those only adjacent to the second and those adjacent
    to both. Every pair of vertices from two different classes gets its
    connectivity toggled.
    """
    v0, v1 = match.vertices
    if not check_pivot(g, v0, v1):
        raise RuleMismatch(RuleKind.PIVOT, match.vertices)
    n0 = g.neighbors(v0) - {v1}
    n1 = g.neighbors(v1) - {v0}
    n2 = n0 & n1
    n0 = n0 - n2
    n1 = n1 - n2
    k0, k1, k2 = len(n0), len(n1), len(n2)

    edit = GraphEdit(check_isolated_vertices=True)
    edit.rem_verts.extend([v0, v1])
    edit.scalar.add_power(k0 * k2 + k1 * k2 + k0 * k1)
    edit.scalar.add_power(-(k0 + k1 + 2 * k2 - 1))
    if g.phase(v0) and g.phase(v1):
        edit.scalar.add_phase(Fraction(1))

    for v in n2:
        edit.add_phase(v, Fraction(1))
    a0, a1 = g.phase(v0), g.phase(v1)
    if a0:
        for v in n1 | n2:
            edit.add_phase(v, a0)
    if a1:
        for v in n0 | n2:
            edit.add_phase(v, a1)

    for left, right in ((n0, n1), (n1, n2), (n0, n2)):
        for s in sorted(left):
            for t in sorted(right):
                edit.add_edges(g.edge(s, t), hadamard=1)
    return edit


# Hadamard markers

def check_hadamard(g: GraphS, h: VT) -> bool:
    """An arity-2 H-box with phase pi, which is a Hadamard gate."""
    if not g.contains(h):
        return False
    if g.type(h) != VertexType.H_BOX or g.phase(h) != 1:
        return False
    hn = g.neighbors(h)
    if len(hn) != 2:
        return False
    v0, v1 = sorted(hn)
    if g.connected(v0, v1) and not (vertex_is_zx(g.type(v0)) and vertex_is_zx(g.type(v1))):
        return False
    return True


def match_hadamard_parallel(
        g: GraphS,
        vertexf: Optional[Callable[[VT], bool]] = None,
        num: int = -1
        ) -> List[Match]:
    """Finds non-interacting Hadamard markers that can become Hadamard edges."""
    taken: Set[VT] = set()
    pairs: Set[Tuple[VT, ...]] = set()
    m: List[Match] = []
    for h in _filtered_vertices(g, vertexf):
        if num != -1 and len(m) >= num:
            break
        if h in taken or not check_hadamard(g, h):
            continue
        pair = tuple(sorted(g.neighbors(h)))
        if pair in pairs:
            continue
        pairs.add(pair)
        m.append(Match(RuleKind.HADAMARD, (h,)))
        taken.add(h)
        taken.update(g.neighbors(h))
    return m


def hadamard(g: GraphS, match: Match) -> GraphEdit:
    """Replaces the H-box by a Hadamard edge between its neighbours."""
    (h,) = match.vertices
    if not check_hadamard(g, h):
        raise RuleMismatch(RuleKind.HADAMARD, match.vertices)
    v0, v1 = sorted(g.neighbors(h))
    # the H-box is sqrt(2) times the unitary Hadamard carried by an edge
    count = 1
    for n in (v0, v1):
        if g.edge_type(g.edge(h, n)) == EdgeType.HADAMARD:
            count += 1
    edit = GraphEdit(check_isolated_vertices=True)
    edit.rem_verts.append(h)
    edit.scalar.add_power(1)
    if count % 2 == 1:
        edit.add_edges(g.edge(v0, v1), hadamard=1)
    else:
        edit.add_edges(g.edge(v0, v1), simple=1)
    return edit


class RuleDef(NamedTuple):
    check: Callable[..., bool]
    match: Callable[..., List[Match]]
    rewrite: Callable[[GraphS, Match], GraphEdit]


RULES: Dict[RuleKind, RuleDef] = {
    RuleKind.SPIDER: RuleDef(check_spider, match_spider_parallel, spider),
    RuleKind.ID: RuleDef(check_id, match_ids_parallel, remove_id),
    RuleKind.LCOMP: RuleDef(check_lcomp, match_lcomp_parallel, lcomp),
    RuleKind.PIVOT: RuleDef(check_pivot, match_pivot_parallel, pivot),
    RuleKind.HADAMARD: RuleDef(check_hadamard, match_hadamard_parallel, hadamard),
}


def check_match(g: GraphS, match: Match) -> bool:
    return RULES[RuleKind(match.rule)].check(g, *match.vertices)


def rewrite(g: GraphS, match: Match) -> GraphEdit:
    """Computes the edit of a single match without changing ``g``."""
    return RULES[RuleKind(match.rule)].rewrite(g, match)


def apply_edit(g: GraphS, edit: GraphEdit) -> None:
    """Applies a :class:`GraphEdit` to ``g`` in place."""
    for v in edit.rem_verts:
        if not g.contains(v):
            raise InvalidReference(f"Vertex {v} does not exist")
    for v, p in edit.phases.items():
        g.add_to_phase(v, to_phase(p))
    g.add_edge_table(edit.etab)
    g.remove_edges(edit.rem_edges)
    g.remove_vertices(edit.rem_verts)
    g.scalar.mult_with_scalar(edit.scalar)
    if edit.check_isolated_vertices:
        g.remove_isolated_vertices()


def apply_rule(g: GraphS, match: Match) -> None:
    """Checks the match, computes its rewrite and applies it to ``g``."""
    apply_edit(g, rewrite(g, match))


def apply_matches(g: GraphS, matches: List[Match]) -> None:
    """Applies a list of non-interacting matches, as returned by a single
    call of a matcher, in one step."""
    if not matches:
        return
    edit = GraphEdit()
    for m in matches:
        edit.merge(rewrite(g, m))
    apply_edit(g, edit)
