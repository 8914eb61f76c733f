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
The gates a :class:`~zxopt.circuit.Circuit` can hold.

Phases are given as exact multiples of pi. Every gate knows its dense matrix
(on its own qubits, first qubit most significant) and how to lower itself to
the basic gate set ``ZPhase``, ``XPhase``, ``HAD``, ``CNOT``, ``CZ`` and
``SWAP`` that the diagram construction understands.
"""

import copy
import math
from fractions import Fraction
from typing import Dict, List, Tuple, Type

import numpy as np

from ..utils import FractionLike, phase_to_str, to_phase

__all__ = [
    'Gate', 'ZPhase', 'Z', 'S', 'T', 'XPhase', 'NOT', 'YPhase', 'Y', 'HAD',
    'CNOT', 'CZ', 'SWAP', 'CCZ', 'TOF', 'gate_types',
]

_H = np.array([[1, 1], [1, -1]], dtype=complex) / math.sqrt(2)


def _zphase_matrix(phase: Fraction) -> np.ndarray:
    return np.diag([1, np.exp(1j * math.pi * float(phase))]).astype(complex)


class Gate(object):
    """Base class for the gates of a circuit."""
    name = 'BaseGate'
    basic = True

    def __init__(self, *qubits: int) -> None:
        for q in qubits:
            if isinstance(q, bool) or not isinstance(q, int) or q < 0:
                raise TypeError(f"Qubit indices must be non-negative integers, got {q!r}")
        if len(set(qubits)) != len(qubits):
            raise ValueError(f"{self.name} acts on repeated qubits {qubits}")
        self._qubits: Tuple[int, ...] = tuple(qubits)

    def qubits(self) -> Tuple[int, ...]:
        return self._qubits

    @property
    def target(self) -> int:
        return self._qubits[-1]

    def _params(self) -> List[str]:
        return [str(q) for q in self._qubits]

    def __str__(self) -> str:
        return "{}({})".format(self.name, ", ".join(self._params()))

    def __repr__(self) -> str:
        return str(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Gate):
            return False
        return type(self) is type(other) and self._qubits == other._qubits and \
            getattr(self, 'phase', None) == getattr(other, 'phase', None)

    def __hash__(self) -> int:
        return hash((self.name, self._qubits, getattr(self, 'phase', None)))

    def copy(self) -> 'Gate':
        return copy.copy(self)

    def reposition(self, mapping: Dict[int, int]) -> 'Gate':
        """Returns a copy acting on the qubits ``mapping[q]``."""
        g = self.copy()
        g._qubits = tuple(mapping[q] for q in self._qubits)
        return g

    def to_basic_gates(self) -> List['Gate']:
        return [self]

    def matrix(self) -> np.ndarray:
        raise NotImplementedError

    def tcount(self) -> int:
        return sum(g.tcount() for g in self.to_basic_gates()) if not self.basic else 0

    def is_two_qubit(self) -> bool:
        return len(self._qubits) == 2


class ZPhase(Gate):
    name = 'ZPhase'

    def __init__(self, target: int, phase: FractionLike) -> None:
        super().__init__(target)
        self.phase = to_phase(phase)

    def _params(self) -> List[str]:
        return [str(self.target), "phase=" + phase_to_str(self.phase)]

    def matrix(self) -> np.ndarray:
        return _zphase_matrix(self.phase)

    def tcount(self) -> int:
        return 1 if self.phase.denominator > 2 else 0


class Z(ZPhase):
    name = 'Z'

    def __init__(self, target: int) -> None:
        super().__init__(target, 1)

    def _params(self) -> List[str]:
        return [str(self.target)]


class S(ZPhase):
    name = 'S'

    def __init__(self, target: int, adjoint: bool = False) -> None:
        super().__init__(target, Fraction(3, 2) if adjoint else Fraction(1, 2))
        self.adjoint = adjoint

    def _params(self) -> List[str]:
        return [str(self.target)] + (["adjoint"] if self.adjoint else [])


class T(ZPhase):
    name = 'T'

    def __init__(self, target: int, adjoint: bool = False) -> None:
        super().__init__(target, Fraction(7, 4) if adjoint else Fraction(1, 4))
        self.adjoint = adjoint

    def _params(self) -> List[str]:
        return [str(self.target)] + (["adjoint"] if self.adjoint else [])


class XPhase(Gate):
    name = 'XPhase'

    def __init__(self, target: int, phase: FractionLike) -> None:
        super().__init__(target)
        self.phase = to_phase(phase)

    def _params(self) -> List[str]:
        return [str(self.target), "phase=" + phase_to_str(self.phase)]

    def matrix(self) -> np.ndarray:
        return _H @ _zphase_matrix(self.phase) @ _H

    def tcount(self) -> int:
        return 1 if self.phase.denominator > 2 else 0


class NOT(XPhase):
    name = 'NOT'

    def __init__(self, target: int) -> None:
        super().__init__(target, 1)

    def _params(self) -> List[str]:
        return [str(self.target)]


class YPhase(Gate):
    """Rotation around the Y axis, equal to ``S XPhase(phase) S^dagger``."""
    name = 'YPhase'
    basic = False

    def __init__(self, target: int, phase: FractionLike) -> None:
        super().__init__(target)
        self.phase = to_phase(phase)

    def _params(self) -> List[str]:
        return [str(self.target), "phase=" + phase_to_str(self.phase)]

    def matrix(self) -> np.ndarray:
        s = _zphase_matrix(Fraction(1, 2))
        return s @ XPhase(0, self.phase).matrix() @ s.conj().T

    def to_basic_gates(self) -> List[Gate]:
        t = self.target
        return [ZPhase(t, Fraction(3, 2)), XPhase(t, self.phase), ZPhase(t, Fraction(1, 2))]


class Y(Gate):
    """Pauli Y. Lowered to ``Z`` followed by ``NOT`` up to a global phase of ``i``."""
    name = 'Y'
    basic = False

    def __init__(self, target: int) -> None:
        super().__init__(target)

    def matrix(self) -> np.ndarray:
        return np.array([[0, -1j], [1j, 0]], dtype=complex)

    def to_basic_gates(self) -> List[Gate]:
        return [ZPhase(self.target, 1), XPhase(self.target, 1)]


class HAD(Gate):
    name = 'HAD'

    def __init__(self, target: int) -> None:
        super().__init__(target)

    def matrix(self) -> np.ndarray:
        return _H.copy()


class CNOT(Gate):
    name = 'CNOT'

    def __init__(self, control: int, target: int) -> None:
        super().__init__(control, target)

    @property
    def control(self) -> int:
        return self._qubits[0]

    def matrix(self) -> np.ndarray:
        m = np.eye(4, dtype=complex)
        m[[2, 3]] = m[[3, 2]]
        return m


class CZ(Gate):
    name = 'CZ'

    def __init__(self, control: int, target: int) -> None:
        super().__init__(control, target)

    @property
    def control(self) -> int:
        return self._qubits[0]

    def matrix(self) -> np.ndarray:
        return np.diag([1, 1, 1, -1]).astype(complex)


class SWAP(Gate):
    name = 'SWAP'

    def __init__(self, control: int, target: int) -> None:
        super().__init__(control, target)

    @property
    def control(self) -> int:
        return self._qubits[0]

    def matrix(self) -> np.ndarray:
        m = np.eye(4, dtype=complex)
        m[[1, 2]] = m[[2, 1]]
        return m

    def to_cnots(self) -> List[Gate]:
        c, t = self._qubits
        return [CNOT(c, t), CNOT(t, c), CNOT(c, t)]


class CCZ(Gate):
    """Doubly controlled Z. Lowered to 7 T gates and 10 CNOTs by writing the
    phase ``abc`` as a combination of the parities of ``a``, ``b`` and ``c``."""
    name = 'CCZ'
    basic = False

    def __init__(self, ctrl1: int, ctrl2: int, target: int) -> None:
        super().__init__(ctrl1, ctrl2, target)

    def matrix(self) -> np.ndarray:
        m = np.eye(8, dtype=complex)
        m[7, 7] = -1
        return m

    def to_basic_gates(self) -> List[Gate]:
        a, b, c = self._qubits
        tdg = Fraction(7, 4)
        gates: List[Gate] = [ZPhase(a, Fraction(1, 4)), ZPhase(b, Fraction(1, 4)), ZPhase(c, Fraction(1, 4))]
        for ctrl, tgt in ((a, b), (a, c), (b, c)):
            gates += [CNOT(ctrl, tgt), ZPhase(tgt, tdg), CNOT(ctrl, tgt)]
        gates += [CNOT(a, c), CNOT(b, c), ZPhase(c, Fraction(1, 4)), CNOT(b, c), CNOT(a, c)]
        return gates


class TOF(Gate):
    """Toffoli gate, a CCZ conjugated by Hadamards on the target."""
    name = 'TOF'
    basic = False

    def __init__(self, ctrl1: int, ctrl2: int, target: int) -> None:
        super().__init__(ctrl1, ctrl2, target)

    def matrix(self) -> np.ndarray:
        m = np.eye(8, dtype=complex)
        m[[6, 7]] = m[[7, 6]]
        return m

    def to_basic_gates(self) -> List[Gate]:
        a, b, c = self._qubits
        return [HAD(c)] + CCZ(a, b, c).to_basic_gates() + [HAD(c)]


gate_types: Dict[str, Type[Gate]] = {
    "ZPhase": ZPhase,
    "RZ": ZPhase,
    "Z": Z,
    "S": S,
    "T": T,
    "XPhase": XPhase,
    "RX": XPhase,
    "NOT": NOT,
    "X": NOT,
    "YPhase": YPhase,
    "RY": YPhase,
    "Y": Y,
    "HAD": HAD,
    "H": HAD,
    "CNOT": CNOT,
    "CX": CNOT,
    "CZ": CZ,
    "SWAP": SWAP,
    "CCZ": CCZ,
    "TOF": TOF,
    "CCX": TOF,
}
