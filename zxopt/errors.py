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
Exceptions raised by the diagram engine.

Only :class:`ExtractionIntractable` (and :class:`Cancelled`, when the caller
runs out of budget) are expected during normal operation. The others signal a
malformed request or a bug in the calling code and should not be caught.
"""

__all__ = [
    'ZXError',
    'InvalidReference',
    'BoundaryViolation',
    'RuleMismatch',
    'ExtractionIntractable',
    'UnsupportedBlock',
    'Cancelled',
]


class ZXError(Exception):
    """Base class of every error raised by zxopt."""


class InvalidReference(ZXError, ValueError):
    """A graph edit named a vertex that does not exist, or asked for an edge
    that cannot be represented."""


class BoundaryViolation(ZXError, ValueError):
    """Attempt to remove or mutate a boundary vertex."""


class RuleMismatch(ZXError, ValueError):
    """A rewrite was applied to vertices that do not match its pattern."""

    def __init__(self, rule, vertices) -> None:
        self.rule = rule
        self.vertices = tuple(vertices)
        super().__init__(f"Rule {rule} does not match vertices {self.vertices}")


class ExtractionIntractable(ZXError):
    """The extraction search cap was exceeded while the frontier was stuck."""

    def __init__(self, cap: int, frontier_size: int) -> None:
        self.cap = cap
        self.frontier_size = frontier_size
        super().__init__(
            f"Extraction search exceeded its cap of {cap} candidate row "
            f"combinations on a frontier of size {frontier_size}. Retry with a "
            f"cap of at least {2**frontier_size - 1} or allow the linear fallback.")


class UnsupportedBlock(ZXError):
    """A block handed to gate synthesis is not a two-qubit unitary."""


class Cancelled(ZXError):
    """The caller-supplied budget ran out during an operation that cannot
    return a partial result."""
