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
Dense tensor evaluation of ZX-diagrams and circuits.

This is the reference semantics used to check rewrites and extraction. The
tensors grow exponentially with the width of the diagram, so this is only
meant for diagrams of a handful of qubits.

The matrix of a diagram has the outputs as rows and the inputs as columns,
with the first input/output as the most significant bit, which is the same
convention as :meth:`zxopt.circuit.Circuit.to_matrix`.
"""

import cmath
import math
from typing import Any, Dict, List, Sequence, Tuple, Union

import numpy as np

from .circuit import Circuit
from .graph.graph_s import ET, VT, GraphS
from .utils import EdgeType, VertexType

__all__ = ['tensorfy', 'tensor_to_matrix', 'compare_tensors', 'permutation_matrix', 'is_unitary']

_H = np.array([[1, 1], [1, -1]], dtype=complex) / math.sqrt(2)

Leg = Tuple[str, Any]


def Z_to_tensor(arity: int, phase: float) -> np.ndarray:
    m = np.zeros([2] * arity, dtype=complex)
    if arity == 0:
        return np.array(1 + cmath.exp(1j * phase), dtype=complex)
    m[(0,) * arity] = 1
    m[(1,) * arity] = cmath.exp(1j * phase)
    return m


def X_to_tensor(arity: int, phase: float) -> np.ndarray:
    m = Z_to_tensor(arity, phase)
    for i in range(arity):
        m = np.moveaxis(np.tensordot(_H, m, axes=(1, i)), 0, i)
    return m


def H_to_tensor(arity: int, phase: float) -> np.ndarray:
    m = np.ones([2] * arity, dtype=complex)
    m[(1,) * arity] = cmath.exp(1j * phase)
    return m


def _vertex_order(g: GraphS) -> List[VT]:
    def key(v: VT) -> Tuple[int, int, int]:
        r = g.row(v)
        return (r if r != -1 else 1 << 30, g.qubit(v), v)
    inputs = list(g.inputs())
    rest = sorted((v for v in g.vertices() if v not in set(inputs)), key=key)
    return inputs + rest


def tensorfy(g: GraphS, preserve_scalar: bool = True) -> np.ndarray:
    """Takes in a Graph and outputs a multidimensional numpy array
    representing the linear map the ZX-diagram implements, with one axis per
    output followed by one axis per input.

    The vertices are contracted one by one in the order of their rows, which
    keeps the intermediate tensors small for diagrams coming from circuits.
    """
    tensor = np.array(1, dtype=complex)
    legs: List[Leg] = []
    done = set()
    for v in _vertex_order(g):
        t = g.type(v)
        neigh = sorted(g.neighbors(v))
        arity = len(neigh)
        if t == VertexType.BOUNDARY:
            if arity != 1:
                raise ValueError("Boundary {} should have exactly one neighbour".format(v))
            vt = np.eye(2, dtype=complex)
            vlegs: List[Leg] = [('e', g.edge(v, neigh[0])), ('b', v)]
        else:
            phase = math.pi * float(g.phase(v))
            if t == VertexType.Z:
                vt = Z_to_tensor(arity, phase)
            elif t == VertexType.X:
                vt = X_to_tensor(arity, phase)
            elif t == VertexType.H_BOX:
                vt = H_to_tensor(arity, phase)
            else:
                raise ValueError("Vertex {} has unknown type {}".format(v, t))
            vlegs = [('e', g.edge(v, n)) for n in neigh]

        # Hadamard edges are put on the side of the vertex that closes them
        for i, n in enumerate(neigh):
            if n in done and g.edge_type(g.edge(v, n)) == EdgeType.HADAMARD:
                vt = np.moveaxis(np.tensordot(_H, vt, axes=(1, i)), 0, i)

        shared = [leg for leg in vlegs if leg[0] == 'e' and leg in legs]
        axes_t = [legs.index(leg) for leg in shared]
        axes_v = [vlegs.index(leg) for leg in shared]
        tensor = np.tensordot(tensor, vt, axes=(axes_t, axes_v))
        legs = [leg for leg in legs if leg not in shared] + [leg for leg in vlegs if leg not in shared]
        done.add(v)

    order = [legs.index(('b', o)) for o in g.outputs()] + [legs.index(('b', i)) for i in g.inputs()]
    if len(order) != len(legs):
        raise ValueError("Diagram has open edges that are not inputs or outputs")
    tensor = np.transpose(tensor, order) if order else tensor
    if preserve_scalar:
        tensor = tensor * g.scalar.to_number()
    return tensor


def tensor_to_matrix(t: np.ndarray, inputs: int, outputs: int) -> np.ndarray:
    """Takes a tensor generated by :func:`tensorfy` and turns it into a matrix."""
    return np.reshape(t, (2 ** outputs, 2 ** inputs))


def _to_matrix(x: Union[GraphS, Circuit, np.ndarray], preserve_scalar: bool) -> np.ndarray:
    if isinstance(x, GraphS):
        return tensor_to_matrix(tensorfy(x, preserve_scalar), x.num_inputs(), x.num_outputs())
    if isinstance(x, Circuit):
        return x.to_matrix()
    return np.asarray(x, dtype=complex)


def compare_tensors(
        t1: Union[GraphS, Circuit, np.ndarray],
        t2: Union[GraphS, Circuit, np.ndarray],
        preserve_scalar: bool = False,
        tolerance: float = 1e-7
        ) -> bool:
    """Returns True if ``t1`` and ``t2`` represent equal linear maps, up to a
    non-zero global factor unless ``preserve_scalar`` is True. Diagrams and
    circuits are evaluated first."""
    m1 = _to_matrix(t1, preserve_scalar)
    m2 = _to_matrix(t2, preserve_scalar)
    if m1.shape != m2.shape:
        m1 = m1.reshape(-1)
        m2 = m2.reshape(-1)
        if m1.shape != m2.shape:
            return False
    if preserve_scalar:
        return bool(np.allclose(m1, m2, atol=tolerance))
    idx = np.unravel_index(np.argmax(np.abs(m1)), m1.shape)
    if abs(m1[idx]) < tolerance:
        return bool(np.allclose(m2, 0, atol=tolerance))
    if abs(m2[idx]) < tolerance:
        return False
    factor = m2[idx] / m1[idx]
    return bool(np.allclose(m1 * factor, m2, atol=tolerance * max(1.0, abs(factor))))


def permutation_matrix(perm: Sequence[int]) -> np.ndarray:
    """The unitary that routes input ``i`` to wire ``perm[i]``, with qubit 0
    as the most significant bit."""
    n = len(perm)
    if sorted(perm) != list(range(n)):
        raise ValueError("{} is not a permutation".format(list(perm)))
    dim = 2 ** n
    p = np.zeros((dim, dim), dtype=complex)
    for x in range(dim):
        y = 0
        for i in range(n):
            if (x >> (n - 1 - i)) & 1:
                y |= 1 << (n - 1 - perm[i])
        p[y, x] = 1
    return p


def is_unitary(m: np.ndarray, tolerance: float = 1e-9) -> bool:
    m = np.asarray(m)
    if m.ndim != 2 or m.shape[0] != m.shape[1]:
        return False
    return bool(np.allclose(m.conj().T @ m, np.eye(m.shape[0]), atol=tolerance))
