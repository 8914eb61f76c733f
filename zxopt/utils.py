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

from enum import IntEnum
from fractions import Fraction
from typing import Union

from typing_extensions import TypeAlias

FractionLike: TypeAlias = Union[Fraction, int]


class VertexType(IntEnum):
    """Type of a vertex in the graph."""
    BOUNDARY = 0
    Z = 1
    X = 2
    H_BOX = 3


def vertex_is_zx(ty: VertexType) -> bool:
    """Check if a vertex type corresponds to a green or red spider."""
    return ty in (VertexType.Z, VertexType.X)


def toggle_vertex(ty: VertexType) -> VertexType:
    """Swap the X and Z vertex types."""
    if not vertex_is_zx(ty):
        return ty
    return VertexType.Z if ty == VertexType.X else VertexType.X


class EdgeType(IntEnum):
    """Type of an edge in the graph."""
    SIMPLE = 1
    HADAMARD = 2


def toggle_edge(ty: EdgeType) -> EdgeType:
    """Swap the regular and Hadamard edge types."""
    return EdgeType.HADAMARD if ty == EdgeType.SIMPLE else EdgeType.SIMPLE


def to_phase(phase: FractionLike) -> Fraction:
    """Normalises a phase, given as a multiple of pi, to a Fraction in [0, 2).

    Floating point phases are refused: two spiders whose phases are only
    approximately equal would silently stop matching the rewrite rules.
    """
    if isinstance(phase, bool) or not isinstance(phase, (Fraction, int)):
        raise TypeError(
            f"Phases must be exact multiples of pi (int or Fraction), got {phase!r}")
    return Fraction(phase) % 2


def phase_is_pauli(phase: FractionLike) -> bool:
    return phase in (0, 1)


def phase_is_proper_clifford(phase: FractionLike) -> bool:
    return phase in (Fraction(1, 2), Fraction(3, 2))


def phase_to_str(phase: FractionLike) -> str:
    """Readable representation of a phase, e.g. ``3π/4``."""
    if phase is None:
        return "0"
    phase = Fraction(phase)
    if phase == 0:
        return "0"
    num = "" if phase.numerator == 1 else str(phase.numerator)
    if phase.denominator == 1:
        return f"{num}π"
    return f"{num}π/{phase.denominator}"
