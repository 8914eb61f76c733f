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
Extraction of circuits from graph-like ZX-diagrams.

The extractor works backwards from the outputs. It keeps a *frontier*: for
every output qubit, the spider adjacent to that output. Gates are peeled off
the frontier and prepended to the circuit until every frontier spider is
connected to exactly one input. The remaining wiring between inputs and
frontier is returned as a qubit permutation.

When no frontier spider can be advanced (the STUCK state), the frontier is
unlocked with CNOTs found by an exact search over subsets of rows of the
biadjacency matrix between the frontier and its neighbours. The number of
subsets examined is capped by :attr:`EngineConfig.search_cap`; beyond it the
extractor either raises :class:`~zxopt.errors.ExtractionIntractable` or falls
back to Gaussian elimination, depending on :attr:`EngineConfig.allow_fallback`.
"""

__all__ = [
    'ExtractionState',
    'ExtractionResult',
    'Extractor',
    'extract_circuit',
    'peephole',
    'bi_adj',
]

import itertools
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Set, Tuple

import numpy as np

from .budget import Budget
from .circuit import CNOT, CZ, HAD, Circuit, Gate, ZPhase
from .config import EngineConfig
from .errors import Cancelled, ExtractionIntractable, ZXError
from .graph.graph_s import VT, GraphS
from .linalg import Mat2
from .simplify import insert_identity, to_graph_like
from .tensor import permutation_matrix
from .utils import EdgeType, VertexType


class ExtractionState(str, Enum):
    INITIALIZING = "initializing"
    EXTRACTING = "extracting"
    STUCK = "stuck"
    DONE = "done"


@dataclass
class ExtractionResult:
    """Outcome of :func:`extract_circuit`.

    :param circuit: The extracted circuit.
    :param permutation: ``permutation[i] = q`` when input ``i`` ends up on wire
       ``q``. The diagram equals ``circuit.to_matrix() @ P(permutation)`` up to
       a global factor.
    :param state: Final state of the extractor, always ``DONE``.
    :param stuck_count: Number of times the frontier had to be unlocked with CNOTs.
    :param subsets_examined: Total number of row subsets examined by the search.
    :param used_fallback: Whether Gaussian elimination was used at least once.
    """
    circuit: Circuit
    permutation: List[int]
    state: ExtractionState
    stuck_count: int = 0
    subsets_examined: int = 0
    used_fallback: bool = False

    def permutation_matrix(self) -> np.ndarray:
        return permutation_matrix(self.permutation)

    def to_matrix(self) -> np.ndarray:
        """The unitary represented by the result, circuit after permutation."""
        return self.circuit.to_matrix() @ self.permutation_matrix()


def bi_adj(g: GraphS, vs: Sequence[VT], ws: Sequence[VT]) -> Mat2:
    """Returns the biadjacency matrix between the vertices ``vs`` (rows) and ``ws`` (columns)."""
    return Mat2([[1 if g.connected(v, w) else 0 for w in ws] for v in vs])


class _CNOTRecorder(object):
    def __init__(self) -> None:
        self.ops: List[Tuple[int, int]] = []

    def row_add(self, r0: int, r1: int) -> None:
        self.ops.append((r0, r1))


class Extractor(object):
    """Stateful circuit extraction of a single graph-like diagram.

    The diagram is consumed: spiders are removed from it as gates are
    extracted. Use :func:`extract_circuit` to work on a copy.
    """

    def __init__(self, g: GraphS, config: Optional[EngineConfig] = None,
                 budget: Optional[Budget] = None, quiet: bool = True) -> None:
        self.g = g
        self.config = config if config is not None else EngineConfig()
        self.budget = budget
        self.quiet = quiet
        self.state = ExtractionState.INITIALIZING
        self.circuit = Circuit(g.num_outputs())
        self.frontier: Dict[int, VT] = {}
        self.stuck_count = 0
        self.subsets_examined = 0
        self.used_fallback = False

    def _log(self, msg: str) -> None:
        if not self.quiet:
            print(msg)

    # Initialisation

    def init_frontier(self) -> None:
        g = self.g
        if g.num_inputs() != g.num_outputs():
            raise ZXError("Only diagrams with as many inputs as outputs can be extracted, "
                          "got {} inputs and {} outputs".format(g.num_inputs(), g.num_outputs()))
        to_graph_like(g, quiet=self.quiet)
        g.remove_isolated_vertices()
        for q, o in enumerate(g.outputs()):
            ns = g.neighbors(o)
            if len(ns) != 1:
                raise ZXError("Output {} should have exactly one neighbour".format(o))
            v = next(iter(ns))
            if g.type(v) != VertexType.Z:
                raise ZXError("Output {} is not connected to a spider".format(o))
            self.frontier[q] = v
        self.state = ExtractionState.EXTRACTING

    # Extraction steps

    def _output_neighbor(self, q: int) -> VT:
        return self.g.outputs()[q]

    def _interior_neighbors(self, v: VT, q: int) -> Set[VT]:
        return self.g.neighbors(v) - {self._output_neighbor(q)}

    def is_finished(self, q: int) -> bool:
        ns = self._interior_neighbors(self.frontier[q], q)
        return len(ns) == 1 and next(iter(ns)) in self.g.inputs()

    def extract_hadamards_and_phases(self) -> None:
        g = self.g
        for q in sorted(self.frontier):
            v = self.frontier[q]
            e = g.edge(v, self._output_neighbor(q))
            if g.edge_type(e) == EdgeType.HADAMARD:
                self.circuit.prepend_gate(HAD(q))
                g.set_edge_type(e, EdgeType.SIMPLE)
            if g.phase(v) != 0:
                self.circuit.prepend_gate(ZPhase(q, g.phase(v)))
                g.set_phase(v, 0)

    def extract_czs(self) -> None:
        g = self.g
        qs = sorted(self.frontier)
        for i, q1 in enumerate(qs):
            for q2 in qs[i + 1:]:
                v1, v2 = self.frontier[q1], self.frontier[q2]
                if g.connected(v1, v2):
                    if g.edge_type(g.edge(v1, v2)) != EdgeType.HADAMARD:
                        raise ZXError("Frontier spiders {} and {} are connected by a regular edge".format(v1, v2))
                    self.circuit.prepend_gate(CZ(q1, q2))
                    g.remove_edge(g.edge(v1, v2))

    def process_frontier(self) -> bool:
        """Advances every frontier spider that has a single interior neighbour.
        Returns whether any spider was advanced."""
        g = self.g
        inputs = set(g.inputs())
        progress = False
        for q in sorted(self.frontier):
            if self.is_finished(q):
                continue
            v = self.frontier[q]
            ns = self._interior_neighbors(v, q)
            if len(ns) != 1:
                continue
            w = next(iter(ns))
            if w in self.frontier.values():
                # becomes a CZ in the next round
                continue
            o = self._output_neighbor(q)
            # o - v -H- w with v phase free is o -H- w
            g.remove_vertex(v)
            g.add_edge(g.edge(w, o), EdgeType.HADAMARD)
            self.frontier[q] = w
            progress = True
            ins = [n for n in g.neighbors(w) if n in inputs]
            if ins and len(g.neighbors(w)) > 2:
                insert_identity(g, w, ins[0])
        return progress

    # Unlocking a stuck frontier

    def _row_add(self, rows: List[int], r0: int, r1: int) -> None:
        """Adds the neighbourhood of frontier row ``r0`` to row ``r1`` by
        prepending a CNOT with control on the qubit of ``r1``."""
        g = self.g
        q0, q1 = rows[r0], rows[r1]
        v0, v1 = self.frontier[q0], self.frontier[q1]
        for w in self._interior_neighbors(v0, q0):
            if g.connected(v1, w):
                g.remove_edge(g.edge(v1, w))
            else:
                g.add_edge(g.edge(v1, w), EdgeType.HADAMARD)
        self.circuit.prepend_gate(CNOT(q1, q0))

    def unlock(self) -> None:
        self.state = ExtractionState.STUCK
        self.stuck_count += 1
        g = self.g
        rows = [q for q in sorted(self.frontier) if not self.is_finished(q)]
        cols = sorted(set().union(*(self._interior_neighbors(self.frontier[q], q) for q in rows)))
        for w in cols:
            if g.type(w) == VertexType.BOUNDARY:
                raise ZXError("Frontier spider is connected to input {} and other spiders".format(w))
        m = bi_adj(g, [self.frontier[q] for q in rows], cols)
        k = len(rows)
        self._log("extract: stuck with a frontier of {} spiders and {} neighbours".format(k, len(cols)))

        subset = self._search(m, k)
        if subset is not None:
            target = subset[0]
            for r in subset[1:]:
                self._row_add(rows, r, target)
            self.state = ExtractionState.EXTRACTING
            return

        self.used_fallback = True
        self._log("extract: search cap exceeded, falling back to gaussian elimination")
        rec = _CNOTRecorder()
        m.gauss(full_reduce=True, x=rec)
        for r0, r1 in rec.ops:
            self._row_add(rows, r0, r1)
        if not any(m.row_weight(r) == 1 for r in range(m.rows())):
            raise ZXError("No extractable vertex found: the diagram has no gflow")
        self.state = ExtractionState.EXTRACTING

    def _search(self, m: Mat2, k: int) -> Optional[Tuple[int, ...]]:
        """Smallest set of rows whose sum has a single 1, trying at most
        ``search_cap`` subsets. Returns None when the cap is exceeded and the
        fallback is allowed."""
        cap = self.config.search_cap
        examined = 0
        for size in range(1, k + 1):
            for subset in itertools.combinations(range(k), size):
                if examined >= cap:
                    self.subsets_examined += examined
                    if self.config.allow_fallback:
                        return None
                    raise ExtractionIntractable(cap, k)
                examined += 1
                if sum(m.xor_rows(subset)) == 1:
                    self.subsets_examined += examined
                    return subset
        self.subsets_examined += examined
        raise ZXError("No extractable vertex found: the diagram has no gflow")

    # Main loop

    def _check_budget(self) -> None:
        if self.budget is None:
            return
        if self.budget.exhausted:
            raise Cancelled("Extraction cancelled: {!r}".format(self.budget))
        self.budget.spend(1)

    def run(self) -> ExtractionResult:
        self.init_frontier()
        g = self.g
        while True:
            self._check_budget()
            self.extract_hadamards_and_phases()
            self.extract_czs()
            if all(self.is_finished(q) for q in self.frontier):
                break
            if self.process_frontier():
                continue
            self.unlock()

        inputs = list(g.inputs())
        perm = [-1] * len(inputs)
        for q in sorted(self.frontier):
            v = self.frontier[q]
            i = next(iter(self._interior_neighbors(v, q)))
            if g.edge_type(g.edge(v, i)) == EdgeType.HADAMARD:
                self.circuit.prepend_gate(HAD(q))
            perm[inputs.index(i)] = q
        leftover = g.num_vertices() - len(self.frontier) - g.num_inputs() - g.num_outputs()
        if leftover != 0:
            raise ZXError("{} spiders are left over after extraction".format(leftover))

        self.circuit.gates = peephole(self.circuit.gates)
        self.state = ExtractionState.DONE
        self._log("extract: done, {} gates, {} times stuck".format(len(self.circuit.gates), self.stuck_count))
        return ExtractionResult(self.circuit, perm, self.state, self.stuck_count,
                                self.subsets_examined, self.used_fallback)


def extract_circuit(
        g: GraphS,
        config: Optional[EngineConfig] = None,
        budget: Optional[Budget] = None,
        quiet: bool = True
        ) -> ExtractionResult:
    """Extracts a circuit and output permutation from a unitary ZX-diagram.

    The diagram is first put in graph-like form. It is not modified: the
    extraction works on a copy.

    Raises:
        ExtractionIntractable: the frontier search exceeded ``config.search_cap``
            and ``config.allow_fallback`` is False.
        Cancelled: the budget ran out before the extraction was done.
    """
    return Extractor(g.copy(), config, budget, quiet).run()


def _next_on(gates: List[Gate], i: int, q: int) -> Optional[int]:
    for j in range(i + 1, len(gates)):
        if q in gates[j].qubits():
            return j
    return None


def _prev_on(gates: List[Gate], i: int, q: int) -> Optional[int]:
    for j in range(i - 1, -1, -1):
        if q in gates[j].qubits():
            return j
    return None


def peephole(gates: List[Gate]) -> List[Gate]:
    """Cancels Hadamard pairs and turns ``H(t) CZ(c,t) H(t)`` into ``CNOT(c,t)``."""
    gates = list(gates)
    changed = True
    while changed:
        changed = False
        for i, gate in enumerate(gates):
            if isinstance(gate, HAD):
                j = _next_on(gates, i, gate.target)
                if j is not None and isinstance(gates[j], HAD):
                    del gates[j]
                    del gates[i]
                    changed = True
                    break
            elif isinstance(gate, CZ):
                for c, t in (gate.qubits(), tuple(reversed(gate.qubits()))):
                    p = _prev_on(gates, i, t)
                    n = _next_on(gates, i, t)
                    if p is not None and n is not None and \
                            isinstance(gates[p], HAD) and isinstance(gates[n], HAD):
                        gates[i] = CNOT(c, t)
                        del gates[n]
                        del gates[p]
                        changed = True
                        break
                if changed:
                    break
    return gates
