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

"""ZX-diagram simplification and circuit extraction for quantum circuit optimization."""

__version__ = "0.1.0"

from .utils import VertexType, EdgeType, toggle_edge
from .errors import (
    ZXError, InvalidReference, BoundaryViolation, RuleMismatch,
    ExtractionIntractable, UnsupportedBlock, Cancelled,
)
from .scalar import Scalar
from .budget import Budget
from .config import EngineConfig, SimplifyMode
from .graph import Graph, GraphS
from .circuit import Circuit
from .rules import RuleKind, Match, GraphEdit, apply_rule
from .simplify import (
    Stats, reduce, full_reduce, interior_clifford_simp, clifford_simp, to_gh,
    spider_simp, id_simp, lcomp_simp, pivot_simp, hadamard_simp, to_graph_like,
    is_graph_like,
)
from .extract import ExtractionState, ExtractionResult, extract_circuit
from .tensor import tensorfy, compare_tensors, tensor_to_matrix
from .synthesis import (
    NativeCircuit, NativeGateSet, IBM, IONQ, kak_decompose,
    synthesize_two_qubit, lower_circuit,
)
from .pipeline import OptimizeResult, optimize, optimize_many, transpile
from . import generate
