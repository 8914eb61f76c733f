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

"""The global scalar carried by every diagram.

Rewrites only preserve the represented linear map up to a non-zero number.
Each rewrite reports that number as a :class:`Scalar`, which the diagram
multiplies into its own ``scalar`` attribute. The factor is kept as an exact
power of ``sqrt(2)`` and an exact phase wherever possible, with a complex
``floatfactor`` only for non-Clifford leftovers.
"""

import cmath
import math
from fractions import Fraction

from .utils import FractionLike

__all__ = ['Scalar']


class Scalar(object):
    """Represents ``sqrt(2)^power2 * e^(i*pi*phase) * floatfactor`` or zero."""

    def __init__(self) -> None:
        self.power2: int = 0
        self.phase: Fraction = Fraction(0)
        self.floatfactor: complex = 1.0
        self.is_zero: bool = False

    def __repr__(self) -> str:
        return "Scalar({})".format(self.to_string())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Scalar):
            return NotImplemented
        return cmath.isclose(self.to_number(), other.to_number(), abs_tol=1e-12)

    def copy(self) -> 'Scalar':
        s = Scalar()
        s.power2 = self.power2
        s.phase = self.phase
        s.floatfactor = self.floatfactor
        s.is_zero = self.is_zero
        return s

    def to_number(self) -> complex:
        if self.is_zero:
            return 0
        val = cmath.exp(1j * math.pi * float(self.phase))
        val *= math.sqrt(2) ** self.power2
        return complex(val * self.floatfactor)

    def to_string(self) -> str:
        if self.is_zero:
            return "0"
        s = "sqrt(2)^{:d}".format(self.power2)
        if self.phase:
            s += " exp(i {}π)".format(self.phase)
        if self.floatfactor != 1:
            s += " {:.6f}".format(self.floatfactor)
        return s

    def set_unknown(self) -> None:
        self.power2 = 0
        self.phase = Fraction(0)
        self.floatfactor = 1.0
        self.is_zero = False

    def add_power(self, n: int) -> None:
        """Multiplies the scalar by ``sqrt(2)^n``."""
        self.power2 += n

    def add_phase(self, phase: FractionLike) -> None:
        """Multiplies the scalar by ``e^(i*pi*phase)``."""
        self.phase = (self.phase + phase) % 2

    def add_float(self, f: complex) -> None:
        if f == 0:
            self.is_zero = True
            return
        self.floatfactor *= f

    def mult_with_scalar(self, other: 'Scalar') -> None:
        """Multiplies two instances of Scalar together."""
        self.power2 += other.power2
        self.phase = (self.phase + other.phase) % 2
        self.floatfactor *= other.floatfactor
        if other.is_zero:
            self.is_zero = True

    def add_node(self, node: FractionLike) -> None:
        """A solitary spider with phase ``node`` is equal to ``1 + e^(i*pi*node)``."""
        node = Fraction(node) % 2
        if node == 0:
            self.add_power(2)
        elif node == 1:
            self.is_zero = True
        elif node == Fraction(1, 2):
            self.add_power(1)
            self.add_phase(Fraction(1, 4))
        elif node == Fraction(3, 2):
            self.add_power(1)
            self.add_phase(Fraction(7, 4))
        else:
            self.add_float(1 + cmath.exp(1j * math.pi * float(node)))

    def add_spider_pair(self, p1: FractionLike, p2: FractionLike) -> None:
        """Add the scalar of a connected pair of spiders ``(p1)-H-(p2)``,
        which equals ``(1 + e^(i*pi*p1) + e^(i*pi*p2) - e^(i*pi*(p1+p2))) / sqrt(2)``."""
        p1 = Fraction(p1) % 2
        p2 = Fraction(p2) % 2
        if p1 in (0, 1) and p2 in (0, 1):
            self.add_power(1)
            if p1 == 1 and p2 == 1:
                self.add_phase(1)
            return
        e1 = cmath.exp(1j * math.pi * float(p1))
        e2 = cmath.exp(1j * math.pi * float(p2))
        self.add_power(-1)
        self.add_float(1 + e1 + e2 - e1 * e2)
