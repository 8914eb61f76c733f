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
Simplification strategies for ZX-diagrams.

The strategies repeatedly look for matches of the rewrite rules in
:mod:`zxopt.rules` and apply them in place until no more matches are found,
or until the rewrite limit or the caller's :class:`~zxopt.budget.Budget` runs
out. A budget running out is not an error: the diagram is simply left
partially reduced, which is still equal to the original up to its scalar.

Main procedures:
- :func:`reduce`: priority-ordered reduction driven by an :class:`EngineConfig`
- :func:`full_reduce`: the same with the default full configuration
- :func:`interior_clifford_simp`: the classic pass structure of pyzx
- :func:`to_graph_like`: normal form expected by the circuit extractor

Example usage:
    from zxopt.circuit import Circuit
    from zxopt.simplify import full_reduce

    g = Circuit.from_gates(2, [("HAD", 0), ("CNOT", 0, 1)]).to_graph()
    stats = full_reduce(g, quiet=False)
    print(stats)
"""

__all__ = [
    'Stats',
    'simp',
    'to_gh',
    'spider_simp',
    'id_simp',
    'lcomp_simp',
    'pivot_simp',
    'hadamard_simp',
    'interior_clifford_simp',
    'clifford_simp',
    'reduce',
    'full_reduce',
    'insert_identity',
    'normalize_boundaries',
    'to_graph_like',
    'is_graph_like',
]

from typing import Callable, Dict, List, Optional

from .budget import Budget
from .config import EngineConfig, SimplifyMode
from .graph.graph_s import ET, VT, GraphS
from .rules import (
    Match,
    RuleKind,
    RULES,
    apply_matches,
    match_hadamard_parallel,
    match_ids_parallel,
    match_lcomp_parallel,
    match_pivot_parallel,
    match_spider_parallel,
)
from .utils import EdgeType, VertexType, toggle_edge


class Stats:
    """Statistics tracker for rewrite operations."""

    def __init__(self) -> None:
        self.num_rewrites: Dict[str, int] = {}

    def count_rewrites(self, rule: str, n: int) -> None:
        """Record that n rewrites of the given rule were applied."""
        if rule in self.num_rewrites:
            self.num_rewrites[rule] += n
        else:
            self.num_rewrites[rule] = n

    @property
    def total(self) -> int:
        return sum(self.num_rewrites.values())

    def __str__(self) -> str:
        s = "REWRITES\n"
        nt = 0
        for r, n in self.num_rewrites.items():
            nt += n
            s += "%s %s\n" % (str(n).rjust(6), r)
        s += "%s TOTAL" % str(nt).rjust(6)
        return s


def simp(
    g: GraphS,
    name: str,
    match: Callable[..., List[Match]],
    quiet: bool = True,
    stats: Optional[Stats] = None,
    budget: Optional[Budget] = None,
    limit: Optional[int] = None
) -> int:
    """
    Helper method for constructing simplification strategies from the rules
    in :mod:`zxopt.rules`. It uses the ``match`` function to find matches, and
    applies them all at once. This is repeated until no more matches are found.

    Args:
        g: The graph that needs to be simplified
        name: The name to display if ``quiet`` is False
        match: One of the ``match_*_parallel`` functions of :mod:`zxopt.rules`
        quiet: If False, print progress information
        stats: Optional statistics tracker
        budget: Optional budget, one step is spent per rewrite
        limit: Maximal number of rewrites to apply in this call

    Returns:
        The number of rewrites that were applied
    """
    i = 0
    total = 0
    while True:
        if budget is not None and budget.exhausted:
            break
        room = _room(budget, None if limit is None else limit - total)
        if room == 0:
            break
        matches = match(g, num=-1 if room is None else room)
        if not matches:
            break
        apply_matches(g, matches)
        if budget is not None:
            budget.spend(len(matches))
        total += len(matches)
        i += 1
        if not quiet:
            if i == 1:
                print("{}: ".format(name), end='')
            print(len(matches), end='')
            print('. ', end='')
    if not quiet and i > 0:
        print(' {!s} iterations'.format(i))
    if stats is not None and total > 0:
        stats.count_rewrites(name, total)
    return total


def _room(budget: Optional[Budget], left: Optional[int]) -> Optional[int]:
    rooms = [r for r in (left, None if budget is None else budget.remaining) if r is not None]
    if not rooms:
        return None
    return max(0, min(rooms))


def to_gh(g: GraphS, quiet: bool = True) -> None:
    """
    Turns every red node into a green node by applying a Hadamard to the edges incident to red nodes.

    Args:
        g: The graph to modify in place
        quiet: If False, print the number of recoloured spiders
    """
    count = 0
    for v in g.vertices():
        if g.type(v) == VertexType.X:
            g.set_type(v, VertexType.Z)
            for e in g.incident_edges(v):
                g.set_edge_type(e, toggle_edge(g.edge_type(e)))
            count += 1
    if not quiet and count > 0:
        print(f"to_gh: recoloured {count} spiders")


def spider_simp(g: GraphS, matchf: Optional[Callable[[ET], bool]] = None,
                quiet: bool = True, stats: Optional[Stats] = None,
                budget: Optional[Budget] = None) -> int:
    """Fuses adjacent spiders of the same color."""
    return simp(g, 'spider_simp', lambda g, num: match_spider_parallel(g, matchf, num),
                quiet=quiet, stats=stats, budget=budget)


def id_simp(g: GraphS, vertexf: Optional[Callable[[VT], bool]] = None,
            quiet: bool = True, stats: Optional[Stats] = None,
            budget: Optional[Budget] = None) -> int:
    return simp(g, 'id_simp', lambda g, num: match_ids_parallel(g, vertexf, num),
                quiet=quiet, stats=stats, budget=budget)


def lcomp_simp(g: GraphS, vertexf: Optional[Callable[[VT], bool]] = None,
               quiet: bool = True, stats: Optional[Stats] = None,
               budget: Optional[Budget] = None) -> int:
    return simp(g, 'lcomp_simp', lambda g, num: match_lcomp_parallel(g, vertexf, num),
                quiet=quiet, stats=stats, budget=budget)


def pivot_simp(g: GraphS, matchf: Optional[Callable[[ET], bool]] = None,
               quiet: bool = True, stats: Optional[Stats] = None,
               budget: Optional[Budget] = None) -> int:
    return simp(g, 'pivot_simp', lambda g, num: match_pivot_parallel(g, matchf, num),
                quiet=quiet, stats=stats, budget=budget)


def hadamard_simp(g: GraphS, vertexf: Optional[Callable[[VT], bool]] = None,
                  quiet: bool = True, stats: Optional[Stats] = None,
                  budget: Optional[Budget] = None) -> int:
    """Turns arity-2 H-boxes into Hadamard edges."""
    return simp(g, 'hadamard_simp', lambda g, num: match_hadamard_parallel(g, vertexf, num),
                quiet=quiet, stats=stats, budget=budget)


def interior_clifford_simp(
    g: GraphS,
    quiet: bool = True,
    stats: Optional[Stats] = None,
    budget: Optional[Budget] = None
) -> bool:
    """
    Repeatedly apply interior Clifford simplifications until none apply.
    This includes spider fusion, identity removal, pivot, and local complementation.

    Args:
        g: The graph to simplify in place
        quiet: If False, print progress information
        stats: Optional statistics tracker
        budget: Optional budget checked between rewrites

    Returns:
        True if any rewrites were applied, False otherwise
    """
    spider_simp(g, quiet=quiet, stats=stats, budget=budget)
    to_gh(g, quiet=quiet)
    applied_any = False
    while True:
        if budget is not None and budget.exhausted:
            break
        i1 = id_simp(g, quiet=quiet, stats=stats, budget=budget)
        i2 = spider_simp(g, quiet=quiet, stats=stats, budget=budget)
        i3 = pivot_simp(g, quiet=quiet, stats=stats, budget=budget)
        i4 = lcomp_simp(g, quiet=quiet, stats=stats, budget=budget)
        if not (i1 or i2 or i3 or i4):
            break
        applied_any = True
    return applied_any


def clifford_simp(
    g: GraphS,
    quiet: bool = True,
    stats: Optional[Stats] = None,
    budget: Optional[Budget] = None
) -> bool:
    """Removes the Hadamard markers, then runs :func:`interior_clifford_simp`."""
    had = hadamard_simp(g, quiet=quiet, stats=stats, budget=budget)
    return interior_clifford_simp(g, quiet=quiet, stats=stats, budget=budget) or had > 0


def reduce(
    g: GraphS,
    config: Optional[EngineConfig] = None,
    budget: Optional[Budget] = None,
    stats: Optional[Stats] = None,
    quiet: bool = True
) -> Stats:
    """
    Priority-ordered reduction of ``g`` in place.

    After recolouring to green spiders, the rules of ``config.rule_order``
    are tried in order. As soon as one of them matches, its matches are
    applied and the search starts again from the first rule. The reduction
    stops at a fixed point, when ``config.max_rewrites`` rewrites have been
    applied in bounded mode, or when the budget is exhausted.

    Every rule removes at least one spider, so the fixed point is always
    reached.

    Args:
        g: The graph to simplify in place
        config: Engine configuration, the full default configuration if None
        budget: Optional budget checked between rewrites
        stats: Optional statistics tracker, a new one is created if None
        quiet: If False, print progress information

    Returns:
        The statistics tracker with the rewrite counts
    """
    if config is None:
        config = EngineConfig.full()
    if stats is None:
        stats = Stats()
    limit = config.max_rewrites if config.mode == SimplifyMode.BOUNDED else None

    to_gh(g, quiet=quiet)
    applied = 0
    rounds = 0
    while True:
        if budget is not None and budget.exhausted:
            if not quiet:
                print("reduce: budget exhausted after {} rewrites".format(applied))
            break
        if limit is not None and applied >= limit:
            break
        progress = False
        for name in config.rule_order:
            rule = RuleKind(name)
            n = simp(g, name, RULES[rule].match, quiet=quiet, stats=stats, budget=budget,
                     limit=None if limit is None else limit - applied)
            if n > 0:
                applied += n
                progress = True
                break
        if not progress:
            break
        rounds += 1
    if not quiet:
        print("reduce: {} rewrites in {} rounds".format(applied, rounds))
    return stats


def full_reduce(
    g: GraphS,
    quiet: bool = True,
    stats: Optional[Stats] = None,
    budget: Optional[Budget] = None
) -> Stats:
    """Reduces ``g`` to a fixed point of all the rules, see :func:`reduce`."""
    return reduce(g, EngineConfig.full(), budget=budget, stats=stats, quiet=quiet)


def insert_identity(g: GraphS, v: VT, b: VT) -> VT:
    """Puts a phase-free spider on the edge between ``v`` and ``b``.

    The new spider is connected to ``v`` by a Hadamard edge and to ``b`` by an
    edge of the opposite type of the original one, so the diagram keeps its
    value and ``v`` stays graph-like.

    Returns:
        The identity of the inserted spider
    """
    et = g.edge_type(g.edge(v, b))
    if et is None:
        raise ValueError(f"Vertices {v} and {b} are not connected")
    q = g.qubit(b) if g.qubit(b) != -1 else g.qubit(v)
    s = g.add_vertex(VertexType.Z, qubit=q, row=g.row(b))
    g.remove_edge(g.edge(v, b))
    g.add_edge(g.edge(b, s), toggle_edge(et))
    g.add_edge(g.edge(s, v), EdgeType.HADAMARD)
    return s


def normalize_boundaries(g: GraphS) -> int:
    """Makes every boundary the only boundary neighbour of a spider.

    Boundaries connected directly to each other, and spiders adjacent to more
    than one boundary, get phase-free spiders inserted on their boundary
    edges. Outputs keep their neighbour. Returns the number of inserted spiders.
    """
    count = 0
    outputs = set(g.outputs())
    for b in list(g.outputs()) + list(g.inputs()):
        for n in list(g.neighbors(b)):
            if g.type(n) == VertexType.BOUNDARY:
                insert_identity(g, n, b)
                count += 1
    for v in sorted(g.vertices()):
        if g.type(v) == VertexType.BOUNDARY:
            continue
        bs = sorted((n for n in g.neighbors(v) if g.type(n) == VertexType.BOUNDARY),
                    key=lambda n: (n not in outputs, n))
        for b in bs[1:]:
            insert_identity(g, v, b)
            count += 1
    return count


def is_graph_like(g: GraphS) -> bool:
    """Checks that all spiders are green, spiders are only connected by
    Hadamard edges, and every boundary is the single boundary neighbour of a
    spider."""
    for v in g.vertices():
        t = g.type(v)
        if t == VertexType.BOUNDARY:
            ns = g.neighbors(v)
            if len(ns) != 1:
                return False
            n = next(iter(ns))
            if g.type(n) != VertexType.Z:
                return False
            continue
        if t != VertexType.Z:
            return False
        boundaries = 0
        for n in g.neighbors(v):
            if g.type(n) == VertexType.BOUNDARY:
                boundaries += 1
            elif g.edge_type(g.edge(v, n)) != EdgeType.HADAMARD:
                return False
        if boundaries > 1:
            return False
    return True


def to_graph_like(g: GraphS, quiet: bool = True, stats: Optional[Stats] = None) -> None:
    """Puts a ZX-diagram in graph-like form: Hadamard markers are turned into
    Hadamard edges, all spiders are recoloured green and fused, and the
    boundaries are normalised with :func:`normalize_boundaries`."""
    hadamard_simp(g, quiet=quiet, stats=stats)
    to_gh(g, quiet=quiet)
    spider_simp(g, quiet=quiet, stats=stats)
    n = normalize_boundaries(g)
    if not quiet and n > 0:
        print(f"to_graph_like: inserted {n} identity spiders")
