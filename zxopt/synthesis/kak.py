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
Cartan (KAK) decomposition of two-qubit unitaries and their synthesis into
native gates.

Every two-qubit unitary can be written as

.. math::

    U = e^{i\\phi} (A_0 \\otimes A_1) \\exp(i(a XX + b YY + c ZZ)) (B_0 \\otimes B_1)

The decomposition works in the magic basis, in which the local gates
:math:`SU(2) \\otimes SU(2)` are exactly the real orthogonal matrices and the
interaction :math:`\\exp(i(a XX + b YY + c ZZ))` is diagonal.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np
from scipy.linalg import expm

from ..errors import UnsupportedBlock
from .native import IBM, NativeCircuit, NativeGateSet, ry_matrix, rz_matrix

__all__ = [
    'KAKDecomposition',
    'kak_decompose',
    'euler_zyz',
    'kron_factor',
    'synthesize_one_qubit',
    'synthesize_two_qubit',
]

MAGIC = np.array([[1, 0, 0, 1j],
                  [0, 1j, 1, 0],
                  [0, 1j, -1, 0],
                  [1, 0, 0, -1j]], dtype=complex) / math.sqrt(2)
MAGIC_DAG = MAGIC.conj().T

_X = np.array([[0, 1], [1, 0]], dtype=complex)
_Y = np.array([[0, -1j], [1j, 0]], dtype=complex)
_Z = np.array([[1, 0], [0, -1]], dtype=complex)
XX = np.kron(_X, _X)
YY = np.kron(_Y, _Y)
ZZ = np.kron(_Z, _Z)

_S = np.diag([1, 1j])
_H = np.array([[1, 1], [1, -1]], dtype=complex) / math.sqrt(2)
_RX90 = (np.eye(2) - 1j * _X) / math.sqrt(2)
_I2 = np.eye(2, dtype=complex)

# C with C Z C^dagger = +-X, +-Y, Z
_ZZ_FRAMES = (_H, _S @ _H, _I2)


def interaction_matrix(a: float, b: float, c: float) -> np.ndarray:
    """``exp(i(a XX + b YY + c ZZ))``."""
    return expm(1j * (a * XX + b * YY + c * ZZ))


@dataclass
class KAKDecomposition:
    """Result of :func:`kak_decompose`.

    :param global_phase: :math:`\\phi`.
    :param interaction: The coefficients ``(a, b, c)``.
    :param after: The local gates ``(A0, A1)`` applied after the interaction.
    :param before: The local gates ``(B0, B1)`` applied before the interaction.
    """
    global_phase: float
    interaction: Tuple[float, float, float]
    after: Tuple[np.ndarray, np.ndarray]
    before: Tuple[np.ndarray, np.ndarray]

    def to_matrix(self) -> np.ndarray:
        a, b, c = self.interaction
        return (np.exp(1j * self.global_phase)
                * np.kron(*self.after) @ interaction_matrix(a, b, c) @ np.kron(*self.before))


def _check_unitary(u: np.ndarray, dim: int, tolerance: float) -> np.ndarray:
    u = np.asarray(u, dtype=complex)
    if u.shape != (dim, dim):
        raise UnsupportedBlock("Expected a {0}x{0} matrix, got shape {1}".format(dim, u.shape))
    if not np.all(np.isfinite(u)):
        raise UnsupportedBlock("Matrix has non-finite entries")
    err = np.max(np.abs(u.conj().T @ u - np.eye(dim)))
    if err > tolerance:
        raise UnsupportedBlock("Matrix is not unitary (deviation {:.3e} > {:.1e})".format(err, tolerance))
    return u


def kron_factor(m: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Splits a 4x4 tensor product ``m = A0 (x) A1`` into ``A0`` and ``A1``,
    normalised so that ``det(A0) = 1``."""
    r = m.reshape(2, 2, 2, 2).transpose(0, 2, 1, 3).reshape(4, 4)
    u, s, vh = np.linalg.svd(r)
    a0 = math.sqrt(s[0]) * u[:, 0].reshape(2, 2)
    a1 = math.sqrt(s[0]) * vh[0, :].reshape(2, 2)
    g = np.sqrt(np.linalg.det(a0))
    return a0 / g, a1 * g


def _diagonalize_symmetric_unitary(s: np.ndarray, tolerance: float,
                                   rng: np.random.Generator) -> np.ndarray:
    """Real orthogonal ``P`` with ``det(P) = 1`` and ``P^T s P`` diagonal.

    The real and imaginary parts of a symmetric unitary commute, so a random
    real combination of them shares their eigenvectors.
    """
    re, im = s.real, s.imag
    threshold = max(1e3 * tolerance, 1e-7)
    for _ in range(16):
        x, y = rng.normal(size=2)
        _, p = np.linalg.eigh(x * re + y * im)
        d = p.T @ s @ p
        if np.max(np.abs(d - np.diag(np.diag(d)))) < threshold:
            if np.linalg.det(p) < 0:
                p[:, 0] = -p[:, 0]
            return p
    raise UnsupportedBlock("Could not diagonalise the block in the magic basis")


def kak_decompose(u: np.ndarray, tolerance: float = 1e-9, seed: Optional[int] = 0) -> KAKDecomposition:
    """Computes the KAK decomposition of a two-qubit unitary.

    :param u: 4x4 unitary, qubit 0 as the most significant bit.
    :param tolerance: Allowed deviation from unitarity.
    :param seed: Seed of the random combination used to diagonalise; the
       result is deterministic for a fixed seed.
    :raises UnsupportedBlock: the input is not a 4x4 unitary.
    """
    u = _check_unitary(u, 4, tolerance)
    det_phase = np.angle(np.linalg.det(u)) / 4
    u_special = u * np.exp(-1j * det_phase)

    up = MAGIC_DAG @ u_special @ MAGIC
    p = _diagonalize_symmetric_unitary(up.T @ up, tolerance, np.random.default_rng(seed))
    d = np.diag(p.T @ up.T @ up @ p)
    theta = np.angle(d) / 2
    k1 = up @ p @ np.diag(np.exp(-1j * theta))
    if np.linalg.det(k1).real < 0:
        theta[0] += math.pi
        k1[:, 0] = -k1[:, 0]

    after = kron_factor(MAGIC @ k1 @ MAGIC_DAG)
    before = kron_factor(MAGIC @ p.T @ MAGIC_DAG)

    t0, t1, t2, t3 = theta
    phi = (t0 + t1 + t2 + t3) / 4
    a = (t0 + t1 - t2 - t3) / 4
    b = (t1 + t3 - t0 - t2) / 4
    c = (t0 + t3 - t1 - t2) / 4

    # phase left over by the factorisation
    approx = np.kron(*after) @ MAGIC @ np.diag(np.exp(1j * theta)) @ MAGIC_DAG @ np.kron(*before)
    sign = np.vdot(approx, u_special)
    extra = np.angle(sign)
    phase = det_phase + phi + extra

    # exp(i(t + k pi/2) PP) = i^k (P (x) P)^k exp(i t PP), so every coefficient
    # is brought into [-pi/4, pi/4] and the Paulis join the local gates after
    a0, a1 = after
    coefficients = []
    for t, pauli in ((a, _X), (b, _Y), (c, _Z)):
        k = int(round(t / (math.pi / 2)))
        coefficients.append(float(t - k * math.pi / 2))
        if k % 2:
            a0 = a0 @ pauli
            a1 = a1 @ pauli
        phase += k * math.pi / 2
    return KAKDecomposition(float(phase), tuple(coefficients), (a0, a1), before)


def euler_zyz(v: np.ndarray) -> Tuple[float, float, float, float]:
    """Compute the angles of a 2x2 unitary as ``e^{i delta} Rz(alpha) Ry(beta) Rz(gamma)``.

    Returns:
        tuple: ``(alpha, beta, gamma, delta)``
    """
    det = np.linalg.det(v)
    delta = np.angle(det) / 2
    w = v * np.exp(-1j * delta)
    abs_b = min(abs(w[1, 0]), 1.0)
    beta = 2 * math.atan2(abs_b, abs(w[0, 0]))
    half_sum = np.angle(w[1, 1]) if abs(w[1, 1]) > 1e-12 else 0.0
    half_diff = np.angle(w[1, 0]) if abs(w[1, 0]) > 1e-12 else 0.0
    alpha = half_sum + half_diff
    gamma = half_sum - half_diff
    return float(alpha), float(beta), float(gamma), float(delta)


class _Builder(object):
    """Collects single-qubit matrices between entangling gates and emits them
    as Euler rotations."""

    def __init__(self, tolerance: float, qubits: int = 2) -> None:
        self.circuit = NativeCircuit(qubits)
        self.pending: List[np.ndarray] = [np.eye(2, dtype=complex) for _ in range(qubits)]
        self.tolerance = tolerance

    def local(self, q: int, m: np.ndarray) -> None:
        self.pending[q] = m @ self.pending[q]

    def _rotation(self, name: str, q: int, angle: float) -> None:
        angle = math.remainder(angle, 4 * math.pi)
        if abs(angle) < self.tolerance:
            return
        if abs(abs(angle) - 2 * math.pi) < self.tolerance:
            # a full turn is -I
            self.circuit.global_phase += math.pi
            return
        self.circuit.add_gate(name, (q,), angle)

    def flush(self, q: int) -> None:
        alpha, beta, gamma, delta = euler_zyz(self.pending[q])
        self.circuit.global_phase += delta
        self._rotation('rz', q, gamma)
        self._rotation('ry', q, beta)
        self._rotation('rz', q, alpha)
        self.pending[q] = np.eye(2, dtype=complex)

    def entangle(self, name: str, qubits: Tuple[int, int], angle: Optional[float] = None) -> None:
        self.flush(0)
        self.flush(1)
        self.circuit.add_gate(name, qubits, angle)

    def finish(self, global_phase: float) -> NativeCircuit:
        for q in range(len(self.pending)):
            self.flush(q)
        self.circuit.global_phase = (self.circuit.global_phase + global_phase) % (2 * math.pi)
        return self.circuit


def synthesize_one_qubit(v: np.ndarray, tolerance: float = 1e-9) -> NativeCircuit:
    """``rz``/``ry``/``rz`` rotations implementing a 2x2 unitary on qubit 0."""
    v = _check_unitary(v, 2, tolerance)
    b = _Builder(tolerance, qubits=1)
    b.local(0, v)
    return b.finish(0.0)


def _is_trivial(theta: float, tolerance: float) -> bool:
    return abs(math.sin(theta)) < tolerance


def _is_cz_class(interaction: Tuple[float, float, float], tolerance: float) -> bool:
    """One coefficient at +-pi/4 and the others zero: a CNOT up to local gates."""
    strong = [t for t in interaction if not _is_trivial(t, tolerance)]
    return len(strong) == 1 and abs(abs(strong[0]) - math.pi / 4) < tolerance


def _one_entangler(builder: _Builder, gateset: NativeGateSet, axis: int, t: float) -> float:
    """Emits exp(i t PP) for t = +-pi/4 with a single CX and returns the
    global phase it leaves.

    exp(i s pi/4 ZZ) = e^{-i s pi/4} (exp(i s pi/4 Z) (x) exp(i s pi/4 Z)) CZ, and
    CZ is a CX with Hadamards on the target.
    """
    s = 1 if t > 0 else -1
    frame = _ZZ_FRAMES[axis]
    for q in (0, 1):
        builder.local(q, frame.conj().T)
    builder.local(1, _H)
    builder.entangle(gateset.entangler, (0, 1))
    builder.local(1, _H)
    for q in (0, 1):
        builder.local(q, rz_matrix(-s * math.pi / 2))
        builder.local(q, frame)
    return -s * math.pi / 4


def _two_entanglers(builder: _Builder, gateset: NativeGateSet,
                    a: float, b: float, c: float, tolerance: float) -> None:
    """Emits an interaction with a zero coefficient using two CX.

    CX(0,1) (exp(i p X) (x) exp(i q Z)) CX(0,1) = exp(i(p XX + q ZZ)); a local
    frame moves XX and ZZ onto the two remaining Pauli pairs.
    """
    if _is_trivial(b, tolerance):
        frame, p, q = _I2, a, c
    elif _is_trivial(a, tolerance):
        # S X S^dagger = Y
        frame, p, q = _S, b, c
    else:
        # RX90 Z RX90^dagger = -Y
        frame, p, q = _RX90, a, b
    for qubit in (0, 1):
        builder.local(qubit, frame.conj().T)
    builder.entangle(gateset.entangler, (0, 1))
    builder.local(0, math.cos(p) * _I2 + 1j * math.sin(p) * _X)
    builder.local(1, rz_matrix(-2 * q))
    builder.entangle(gateset.entangler, (0, 1))
    for qubit in (0, 1):
        builder.local(qubit, frame)


def synthesize_two_qubit(u: np.ndarray, gateset: NativeGateSet = IBM,
                         tolerance: float = 1e-9) -> NativeCircuit:
    """Synthesises a two-qubit unitary into at most three entangling gates of
    ``gateset``, with ``rz``/``ry`` single-qubit rotations in between.

    The global phase of the result is set so that its ``to_matrix()``
    reproduces ``u``.

    :raises UnsupportedBlock: the input is not a 4x4 unitary.
    """
    kak = kak_decompose(u, tolerance)
    a, b, c = kak.interaction
    phase = kak.global_phase
    builder = _Builder(tolerance)
    builder.local(0, kak.before[0])
    builder.local(1, kak.before[1])

    if all(_is_trivial(t, tolerance) for t in (a, b, c)):
        # exp(i(aXX + bYY + cZZ)) is +-I
        phase += sum(math.pi for t in (a, b, c) if math.cos(t) < 0)
    elif gateset.arbitrary_angle:
        # exp(i t PP) = rxx(-2t) conjugated into the PP basis, the terms commute
        for t, conj in ((c, _H), (b, _S)):
            if _is_trivial(t, tolerance):
                if math.cos(t) < 0:
                    phase += math.pi
                continue
            builder.local(0, conj.conj().T)
            builder.local(1, conj.conj().T)
            builder.entangle(gateset.entangler, (0, 1), -2 * t)
            builder.local(0, conj)
            builder.local(1, conj)
        if _is_trivial(a, tolerance):
            if math.cos(a) < 0:
                phase += math.pi
        else:
            builder.entangle(gateset.entangler, (0, 1), -2 * a)
    elif _is_cz_class(kak.interaction, tolerance):
        axis = next(i for i, t in enumerate(kak.interaction) if not _is_trivial(t, tolerance))
        phase += _one_entangler(builder, gateset, axis, kak.interaction[axis])
    elif sum(not _is_trivial(t, tolerance) for t in (a, b, c)) <= 2:
        _two_entanglers(builder, gateset, a, b, c, tolerance)
    else:
        # exp(i(aXX + bYY + cZZ)) = e^{i pi/4} (I (x) S) CX(1,0) (e^{i t1 Z} (x) e^{i t2 Y})
        #                                CX(0,1) (I (x) e^{i t3 Y}) CX(1,0) (S^dagger (x) I)
        t1 = c - math.pi / 4
        t2 = math.pi / 4 - a
        t3 = b - math.pi / 4
        builder.local(0, _S.conj().T)
        builder.entangle(gateset.entangler, (1, 0))
        builder.local(1, ry_matrix(-2 * t3))
        builder.entangle(gateset.entangler, (0, 1))
        builder.local(0, rz_matrix(-2 * t1))
        builder.local(1, ry_matrix(-2 * t2))
        builder.entangle(gateset.entangler, (1, 0))
        builder.local(1, _S)
        phase += math.pi / 4

    builder.local(0, kak.after[0])
    builder.local(1, kak.after[1])
    return builder.finish(phase)
