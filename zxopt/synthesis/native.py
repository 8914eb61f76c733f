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
Backend-native gate sets and circuits.

A native circuit is a flat list of :class:`NativeGate` with real rotation
angles, plus a global phase. Two gate sets are provided:

- :data:`IBM`: ``rz``, ``ry`` and the fixed-angle entangler ``cx``
- :data:`IONQ`: ``rz``, ``ry`` and the arbitrary-angle entangler ``rxx``
"""

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from ..circuit import apply_matrix

__all__ = ['NativeGate', 'NativeCircuit', 'NativeGateSet', 'IBM', 'IONQ', 'gate_sets']


def rz_matrix(theta: float) -> np.ndarray:
    return np.diag([np.exp(-0.5j * theta), np.exp(0.5j * theta)])


def ry_matrix(theta: float) -> np.ndarray:
    c, s = math.cos(theta / 2), math.sin(theta / 2)
    return np.array([[c, -s], [s, c]], dtype=complex)


def rxx_matrix(theta: float) -> np.ndarray:
    c, s = math.cos(theta / 2), math.sin(theta / 2)
    m = np.eye(4, dtype=complex) * c
    m[0, 3] = m[1, 2] = m[2, 1] = m[3, 0] = -1j * s
    return m


CX_MATRIX = np.array([[1, 0, 0, 0], [0, 1, 0, 0], [0, 0, 0, 1], [0, 0, 1, 0]], dtype=complex)


@dataclass(frozen=True)
class NativeGate:
    """A gate of a native gate set.

    ``rz(t) = exp(-i t Z/2)``, ``ry(t) = exp(-i t Y/2)``,
    ``rxx(t) = exp(-i t XX/2)`` and ``cx`` has its control on ``qubits[0]``.
    """
    name: str
    qubits: Tuple[int, ...]
    angle: Optional[float] = None

    def __str__(self) -> str:
        args = ", ".join(str(q) for q in self.qubits)
        if self.angle is not None:
            args += ", {:.6f}".format(self.angle)
        return "{}({})".format(self.name, args)

    def is_entangling(self) -> bool:
        return len(self.qubits) == 2

    def reposition(self, mapping: Dict[int, int]) -> 'NativeGate':
        return NativeGate(self.name, tuple(mapping[q] for q in self.qubits), self.angle)

    def matrix(self) -> np.ndarray:
        if self.name == 'rz':
            return rz_matrix(self.angle)
        if self.name == 'ry':
            return ry_matrix(self.angle)
        if self.name == 'rxx':
            return rxx_matrix(self.angle)
        if self.name == 'cx':
            return CX_MATRIX.copy()
        raise ValueError("Unknown native gate {}".format(self.name))


@dataclass
class NativeCircuit:
    """A circuit of native gates. ``to_matrix`` includes ``global_phase``."""
    qubits: int
    gates: List[NativeGate] = field(default_factory=list)
    global_phase: float = 0.0

    def add_gate(self, name: str, qubits: Sequence[int], angle: Optional[float] = None) -> None:
        self.gates.append(NativeGate(name, tuple(qubits), angle))

    def add_circuit(self, other: 'NativeCircuit', mask: Optional[Sequence[int]] = None) -> None:
        """Appends ``other``, mapping its qubit ``i`` to ``mask[i]``."""
        mapping = {i: (i if mask is None else mask[i]) for i in range(other.qubits)}
        self.gates.extend(g.reposition(mapping) for g in other.gates)
        self.global_phase = (self.global_phase + other.global_phase) % (2 * math.pi)

    def entangling_count(self) -> int:
        return sum(1 for g in self.gates if g.is_entangling())

    def counts(self) -> Dict[str, int]:
        c: Dict[str, int] = {}
        for g in self.gates:
            c[g.name] = c.get(g.name, 0) + 1
        return c

    def to_matrix(self) -> np.ndarray:
        dim = 2 ** self.qubits
        mat = np.eye(dim, dtype=complex)
        for g in self.gates:
            mat = apply_matrix(mat, g.matrix(), g.qubits, self.qubits)
        return np.exp(1j * self.global_phase) * mat

    def __len__(self) -> int:
        return len(self.gates)

    def __str__(self) -> str:
        return "NativeCircuit({} qubits, {} gates, {} entangling)".format(
            self.qubits, len(self.gates), self.entangling_count())


@dataclass(frozen=True)
class NativeGateSet:
    """Description of a backend's native gates.

    :param name: Name of the gate set.
    :param entangler: Name of the two-qubit gate, ``cx`` or ``rxx``.
    :param arbitrary_angle: Whether the entangler takes a continuous angle.
    """
    name: str
    entangler: str
    arbitrary_angle: bool
    one_qubit: Tuple[str, ...] = ('rz', 'ry')


IBM = NativeGateSet('ibm', 'cx', arbitrary_angle=False)
IONQ = NativeGateSet('ionq', 'rxx', arbitrary_angle=True)

gate_sets: Dict[str, NativeGateSet] = {'ibm': IBM, 'ionq': IONQ}
