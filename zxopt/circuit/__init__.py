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

"""Quantum circuits as ordered lists of gates."""

from typing import Any, Dict, Iterable, List, Sequence, Tuple, Union

import numpy as np

from ..graph.graph_s import GraphS
from .gates import (
    Gate, ZPhase, Z, S, T, XPhase, NOT, YPhase, Y, HAD, CNOT, CZ, SWAP, CCZ, TOF, gate_types,
)

__all__ = [
    'Circuit', 'Gate', 'ZPhase', 'Z', 'S', 'T', 'XPhase', 'NOT', 'YPhase', 'Y',
    'HAD', 'CNOT', 'CZ', 'SWAP', 'CCZ', 'TOF', 'gate_types', 'apply_matrix',
]


def apply_matrix(mat: np.ndarray, gm: np.ndarray, qubits: Sequence[int], n: int) -> np.ndarray:
    """Multiplies the ``2^n x m`` matrix ``mat`` from the left by the gate
    matrix ``gm`` acting on ``qubits``. Qubit 0 is the most significant bit."""
    k = len(qubits)
    t = mat.reshape([2] * n + [-1])
    gt = gm.reshape([2] * (2 * k))
    t = np.tensordot(gt, t, axes=(list(range(k, 2 * k)), list(qubits)))
    t = np.moveaxis(t, list(range(k)), list(qubits))
    return t.reshape(2 ** n, -1)


class Circuit(object):
    """Class for representing quantum circuits.

    :param qubit_amount: Number of qubits of the circuit.
    """

    def __init__(self, qubit_amount: int) -> None:
        if qubit_amount < 0:
            raise ValueError("A circuit needs a non-negative number of qubits")
        self.qubits = qubit_amount
        self.gates: List[Gate] = []

    @classmethod
    def from_gates(cls, qubit_amount: int, gates: Iterable[Union[Gate, Tuple[Any, ...]]]) -> 'Circuit':
        """Builds a circuit from gates or ``(name, *args)`` tuples."""
        c = cls(qubit_amount)
        for g in gates:
            if isinstance(g, Gate):
                c.add_gate(g)
            else:
                c.add_gate(*g)
        return c

    def __str__(self) -> str:
        return "Circuit({!s} qubits, {!s} gates)".format(self.qubits, len(self.gates))

    def __repr__(self) -> str:
        return str(self)

    def __len__(self) -> int:
        return len(self.gates)

    def __iter__(self):
        return iter(self.gates)

    def copy(self) -> 'Circuit':
        c = Circuit(self.qubits)
        c.gates = [g.copy() for g in self.gates]
        return c

    def _make_gate(self, gate: Union[Gate, str], *args: Any, **kwargs: Any) -> Gate:
        if isinstance(gate, str):
            if gate not in gate_types:
                raise TypeError("Unknown gate {!s}".format(gate))
            gate = gate_types[gate](*args, **kwargs)
        elif not isinstance(gate, Gate):
            raise TypeError("Unknown gate {!r}".format(gate))
        for q in gate.qubits():
            if q >= self.qubits:
                raise ValueError("Gate {!s} acts outside of a circuit of {} qubits".format(gate, self.qubits))
        return gate

    def add_gate(self, gate: Union[Gate, str], *args: Any, **kwargs: Any) -> None:
        """Adds a gate to the end of the circuit. ``gate`` can either be
        an instance of a :class:`Gate`, or it can be the name of a gate,
        in which case additional arguments should be given.

        Example::

            circuit.add_gate("CNOT", 1, 4) # adds a CNOT gate with control 1 and target 4
            circuit.add_gate("ZPhase", 2, phase=Fraction(3,4)) # Adds a ZPhase gate on qubit 2 with phase 3/4
        """
        self.gates.append(self._make_gate(gate, *args, **kwargs))

    def prepend_gate(self, gate: Union[Gate, str], *args: Any, **kwargs: Any) -> None:
        """The same as add_gate, but adds the gate to the start of the circuit."""
        self.gates.insert(0, self._make_gate(gate, *args, **kwargs))

    def add_gates(self, gates: Iterable[Gate]) -> None:
        for g in gates:
            self.add_gate(g)

    def add_circuit(self, circ: 'Circuit', mask: Union[Sequence[int], None] = None) -> None:
        """Adds the gates of another circuit to this one. If ``mask`` is given,
        qubit ``i`` of ``circ`` is mapped to qubit ``mask[i]``."""
        if mask is None:
            if circ.qubits > self.qubits:
                raise ValueError("Circuit does not fit")
            self.gates.extend(g.copy() for g in circ.gates)
            return
        if len(mask) != circ.qubits:
            raise ValueError("Mask size does not match qubits of the circuit")
        mapping: Dict[int, int] = {i: q for i, q in enumerate(mask)}
        for g in circ.gates:
            self.add_gate(g.reposition(mapping))

    def to_basic_gates(self) -> 'Circuit':
        """Returns a new circuit with every gate expanded in terms of
        ``ZPhase``, ``XPhase``, ``HAD``, ``CNOT``, ``CZ`` and ``SWAP``."""
        c = Circuit(self.qubits)
        for g in self.gates:
            c.gates.extend(g.to_basic_gates())
        return c

    def tcount(self) -> int:
        """Returns the amount of T-gates necessary to implement this circuit."""
        return sum(g.tcount() for g in self.gates)

    def twoqubitcount(self) -> int:
        """Returns the amount of 2-qubit gates in the circuit."""
        return sum(1 for g in self.gates if g.is_two_qubit())

    def stats_dict(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for g in self.gates:
            counts[g.name] = counts.get(g.name, 0) + 1
        return counts

    def stats(self) -> str:
        """Returns a human readable string giving some statistics on the
        gate counts of the circuit."""
        s = "Circuit on {} qubits with {} gates.\n".format(self.qubits, len(self.gates))
        s += "        {} is the T-count\n".format(self.tcount())
        s += "        {} are two-qubit gates".format(self.twoqubitcount())
        for name, n in sorted(self.stats_dict().items()):
            s += "\n        {} {}".format(n, name)
        return s

    def to_graph(self) -> GraphS:
        """Turns the circuit into a ZX-Graph."""
        from .graphparser import circuit_to_graph
        return circuit_to_graph(self)

    def to_matrix(self) -> np.ndarray:
        """Returns the ``2^n x 2^n`` unitary of the circuit, qubit 0 most significant."""
        dim = 2 ** self.qubits
        mat = np.eye(dim, dtype=complex)
        for g in self.gates:
            mat = apply_matrix(mat, g.matrix(), g.qubits(), self.qubits)
        return mat
