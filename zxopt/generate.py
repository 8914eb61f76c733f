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

"""Random circuit generators, mostly useful for testing and benchmarking."""

import random
from fractions import Fraction
from typing import Optional

from .circuit import CNOT, CZ, HAD, Circuit, ZPhase

__all__ = ['CNOT_HAD_PHASE_circuit', 'phase_poly_circuit', 'cliffordT', 'cliffords']


def _rng(seed: Optional[int]) -> random.Random:
    return random.Random(seed)


def phase_poly_circuit(qubits: int, depth: int, p_cnot: float = 0.5,
                       seed: Optional[int] = None) -> Circuit:
    """Random circuit of CNOTs and Z-phase gates with phases multiples of pi/4.

    :param qubits: Number of qubits, at least 2 when CNOTs are requested.
    :param depth: Number of gates.
    :param p_cnot: Probability that a gate is a CNOT.
    :param seed: Seed of the random generator.
    """
    rng = _rng(seed)
    c = Circuit(qubits)
    for _ in range(depth):
        if qubits > 1 and rng.random() < p_cnot:
            ctrl, tgt = rng.sample(range(qubits), 2)
            c.add_gate(CNOT(ctrl, tgt))
        else:
            c.add_gate(ZPhase(rng.randrange(qubits), Fraction(rng.randrange(1, 8), 4)))
    return c


def CNOT_HAD_PHASE_circuit(qubits: int, depth: int, p_had: float = 0.2, p_t: float = 0.2,
                           clifford: bool = False, seed: Optional[int] = None) -> Circuit:
    """Construct a random circuit consisting of CNOT, HAD and phase gates.
    The default phase gate is the T gate, but if ``clifford=True``, then
    this is replaced by the S gate.

    :param qubits: number of qubits of the circuit
    :param depth: number of gates in the circuit
    :param p_had: probability that each gate is a Hadamard gate
    :param p_t: probability that each gate is a T gate (or if ``clifford`` is set, S gate)
    :param clifford: when set to True, the phase gates are S gates instead of T gates.
    :param seed: Seed of the random generator.
    """
    rng = _rng(seed)
    p_cnot = 1 - p_had - p_t
    c = Circuit(qubits)
    phase = Fraction(1, 2) if clifford else Fraction(1, 4)
    for _ in range(depth):
        r = rng.random()
        if r > 1 - p_had:
            c.add_gate(HAD(rng.randrange(qubits)))
        elif r > 1 - p_had - p_t:
            c.add_gate(ZPhase(rng.randrange(qubits), phase))
        elif qubits > 1 and p_cnot > 0:
            ctrl, tgt = rng.sample(range(qubits), 2)
            c.add_gate(CNOT(ctrl, tgt))
    return c


def cliffordT(qubits: int, depth: int, p_t: Optional[float] = None,
              seed: Optional[int] = None) -> Circuit:
    """Generates a random circuit of Clifford+T gates: CNOTs, CZs, Hadamards,
    S gates and T gates.

    :param p_t: Probability of a T gate; by default the Clifford gates and
       the T gate are equally likely.
    """
    rng = _rng(seed)
    if p_t is None:
        p_t = 0.2
    p_s = p_h = p_cz = (1 - p_t) / 4
    c = Circuit(qubits)
    for _ in range(depth):
        r = rng.random()
        q = rng.randrange(qubits)
        if r < p_t:
            c.add_gate(ZPhase(q, Fraction(rng.choice([1, 7]), 4)))
        elif r < p_t + p_s:
            c.add_gate(ZPhase(q, Fraction(rng.choice([1, 3]), 2)))
        elif r < p_t + p_s + p_h or qubits < 2:
            c.add_gate(HAD(q))
        elif r < p_t + p_s + p_h + p_cz:
            c.add_gate(CZ(*rng.sample(range(qubits), 2)))
        else:
            c.add_gate(CNOT(*rng.sample(range(qubits), 2)))
    return c


def cliffords(qubits: int, depth: int, seed: Optional[int] = None) -> Circuit:
    """Random Clifford circuit."""
    return cliffordT(qubits, depth, p_t=0, seed=seed)
