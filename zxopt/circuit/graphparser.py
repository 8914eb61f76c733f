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
from typing import TYPE_CHECKING, Dict, List

from ..graph.graph_s import GraphS, VT
from ..utils import EdgeType, VertexType
from .gates import CNOT, CZ, HAD, SWAP, XPhase, ZPhase

if TYPE_CHECKING:
    from . import Circuit

__all__ = ['circuit_to_graph']


def circuit_to_graph(c: 'Circuit') -> GraphS:
    """Turns the circuit into a ZX-diagram.

    Every qubit gets an input and an output boundary. Phase gates become
    spiders of the matching colour, Hadamards become arity-2 H-boxes, CNOTs
    are a Z-spider on the control connected to an X-spider on the target and
    CZs two Z-spiders connected by a Hadamard edge. SWAPs only exchange the
    wires. The scalar is set so that the diagram equals the circuit exactly.
    """
    g = GraphS()
    qs: Dict[int, VT] = {}
    rs: Dict[int, int] = {}
    inputs: List[VT] = []
    for q in range(c.qubits):
        v = g.add_vertex(VertexType.BOUNDARY, q, 0)
        inputs.append(v)
        qs[q] = v
        rs[q] = 1

    def add_spider(ty: VertexType, q: int, phase: Fraction, row: int) -> VT:
        v = g.add_vertex(ty, q, row, phase)
        g.add_edge(g.edge(qs[q], v), EdgeType.SIMPLE)
        qs[q] = v
        rs[q] = row + 1
        return v

    for gate in c.to_basic_gates().gates:
        if isinstance(gate, ZPhase):
            add_spider(VertexType.Z, gate.target, gate.phase, rs[gate.target])
        elif isinstance(gate, XPhase):
            add_spider(VertexType.X, gate.target, gate.phase, rs[gate.target])
        elif isinstance(gate, HAD):
            add_spider(VertexType.H_BOX, gate.target, Fraction(1), rs[gate.target])
            # the arity-2 H-box is sqrt(2) times the Hadamard gate
            g.scalar.add_power(-1)
        elif isinstance(gate, (CNOT, CZ)):
            ctrl, tgt = gate.qubits()
            r = max(rs[ctrl], rs[tgt])
            v1 = add_spider(VertexType.Z, ctrl, Fraction(0), r)
            if isinstance(gate, CNOT):
                v2 = add_spider(VertexType.X, tgt, Fraction(0), r)
                g.add_edge(g.edge(v1, v2), EdgeType.SIMPLE)
            else:
                v2 = add_spider(VertexType.Z, tgt, Fraction(0), r)
                g.add_edge(g.edge(v1, v2), EdgeType.HADAMARD)
            g.scalar.add_power(1)
        elif isinstance(gate, SWAP):
            a, b = gate.qubits()
            qs[a], qs[b] = qs[b], qs[a]
            rs[a] = rs[b] = max(rs[a], rs[b])
        else:
            raise TypeError("Unknown gate {!s}".format(gate))

    r = max(rs.values()) if rs else 1
    outputs: List[VT] = []
    for q in range(c.qubits):
        o = g.add_vertex(VertexType.BOUNDARY, q, r)
        g.add_edge(g.edge(qs[q], o), EdgeType.SIMPLE)
        outputs.append(o)
    g.set_inputs(inputs)
    g.set_outputs(outputs)
    return g
