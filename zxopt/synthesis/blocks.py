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

"""Grouping of circuit gates into one- and two-qubit blocks, and lowering of
whole circuits to a native gate set block by block."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np

from ..circuit import Circuit, Gate, apply_matrix
from .kak import synthesize_one_qubit, synthesize_two_qubit
from .native import IBM, NativeCircuit, NativeGateSet

__all__ = ['Block', 'collect_blocks', 'lower_circuit']


@dataclass
class Block:
    """Consecutive gates acting on one or two qubits. The qubits are in increasing order."""
    qubits: Tuple[int, ...]
    gates: List[Gate] = field(default_factory=list)

    def matrix(self) -> np.ndarray:
        """Unitary of the block on ``qubits``, first qubit most significant."""
        local = {q: i for i, q in enumerate(self.qubits)}
        n = len(self.qubits)
        mat = np.eye(2 ** n, dtype=complex)
        for g in self.gates:
            mat = apply_matrix(mat, g.matrix(), [local[q] for q in g.qubits()], n)
        return mat


def _flatten(circuit: Circuit) -> List[Gate]:
    gates: List[Gate] = []
    for g in circuit.gates:
        if len(g.qubits()) > 2:
            gates.extend(g.to_basic_gates())
        else:
            gates.append(g)
    return gates


def collect_blocks(circuit: Circuit) -> List[Block]:
    """Partitions the gates of ``circuit`` into blocks of at most two qubits.

    Every two-qubit gate starts a new block on its pair of qubits unless the
    block open on that pair is still going. Single-qubit gates join the block
    open on their qubit, or wait for the next block on it. Gates acting on
    three qubits are lowered to basic gates first.

    The blocks are returned in an order in which they can be applied.
    """
    blocks: List[Block] = []
    open_block: Dict[int, Optional[Block]] = {q: None for q in range(circuit.qubits)}
    pending: Dict[int, List[Gate]] = {q: [] for q in range(circuit.qubits)}

    for g in _flatten(circuit):
        qs = g.qubits()
        if len(qs) == 1:
            q = qs[0]
            if open_block[q] is not None:
                open_block[q].gates.append(g)
            else:
                pending[q].append(g)
            continue
        a, b = qs
        current = open_block[a]
        if current is not None and current is open_block[b]:
            current.gates.append(g)
            continue
        for q in (a, b):
            old = open_block[q]
            if old is not None:
                for oq in old.qubits:
                    open_block[oq] = None
        block = Block((min(a, b), max(a, b)), pending[a] + pending[b] + [g])
        pending[a], pending[b] = [], []
        open_block[a] = open_block[b] = block
        blocks.append(block)

    for q in range(circuit.qubits):
        if pending[q]:
            blocks.append(Block((q,), pending[q]))
    return blocks


def lower_circuit(circuit: Circuit, gateset: NativeGateSet = IBM,
                  tolerance: float = 1e-9) -> NativeCircuit:
    """Rewrites ``circuit`` in the gates of ``gateset``.

    Every two-qubit block is resynthesised with at most three entangling
    gates, and every single-qubit block with at most three rotations. The
    result has the same matrix as ``circuit``, global phase included.
    """
    out = NativeCircuit(circuit.qubits)
    for block in collect_blocks(circuit):
        if len(block.qubits) == 2:
            sub = synthesize_two_qubit(block.matrix(), gateset, tolerance)
        else:
            sub = synthesize_one_qubit(block.matrix(), tolerance)
        out.add_circuit(sub, block.qubits)
    return out
