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
End-to-end optimisation of circuits.

:func:`optimize` converts a circuit to a ZX-diagram, reduces it according to
an :class:`~zxopt.config.EngineConfig` and extracts an equivalent circuit and
qubit permutation. :func:`transpile` additionally lowers the extracted
circuit to a native gate set. :func:`optimize_many` runs independent circuits
in a process pool; every run owns its diagram so nothing is shared.
"""

__all__ = ['OptimizeResult', 'PIPELINE_DEFAULTS', 'optimize', 'optimize_many', 'transpile']

from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .budget import Budget
from .circuit import Circuit
from .config import EngineConfig
from .extract import ExtractionResult, extract_circuit
from .simplify import Stats, reduce
from .synthesis import IBM, NativeCircuit, NativeGateSet, lower_circuit
from .tensor import permutation_matrix

# configuration of the pipeline functions when none is given, with the Gaussian fallback enabled
PIPELINE_DEFAULTS = EngineConfig(allow_fallback=True)


@dataclass
class OptimizeResult:
    circuit: Circuit
    permutation: List[int]
    stats: Stats
    extraction: ExtractionResult

    def to_matrix(self) -> np.ndarray:
        return self.circuit.to_matrix() @ permutation_matrix(self.permutation)


def _budget_for(config: EngineConfig, budget: Optional[Budget]) -> Optional[Budget]:
    if budget is None and config.time_limit is not None:
        return Budget(time_limit=config.time_limit)
    return budget


def optimize(circuit: Circuit, config: Optional[EngineConfig] = None,
             budget: Optional[Budget] = None, quiet: bool = True) -> OptimizeResult:
    """Simplifies ``circuit`` with the ZX-calculus and extracts it again.

    The result equals the input circuit up to a global phase once the
    returned permutation is applied first:
    ``circuit.to_matrix() ~ result.circuit.to_matrix() @ P(result.permutation)``.

    If no budget is given but ``config.time_limit`` is set, a budget with that
    deadline is used. Running out of budget during the reduction leaves a
    partially reduced diagram, which is still extracted; running out during
    extraction raises :class:`~zxopt.errors.Cancelled`.
    """
    if config is None:
        config = PIPELINE_DEFAULTS
    budget = _budget_for(config, budget)
    g = circuit.to_graph()
    stats = reduce(g, config, budget=budget, quiet=quiet)
    if not quiet:
        print(stats)
    result = extract_circuit(g, config, budget=budget, quiet=quiet)
    return OptimizeResult(result.circuit, result.permutation, stats, result)


def transpile(circuit: Circuit, gateset: NativeGateSet = IBM,
              config: Optional[EngineConfig] = None,
              budget: Optional[Budget] = None) -> Tuple[NativeCircuit, List[int]]:
    """Optimises ``circuit`` and lowers the result to ``gateset``.

    Returns the native circuit and the qubit permutation to apply before it.
    """
    if config is None:
        config = PIPELINE_DEFAULTS
    result = optimize(circuit, config, budget)
    native = lower_circuit(result.circuit, gateset, config.tolerance)
    return native, result.permutation


def _optimize_worker(args: Tuple[Circuit, EngineConfig]) -> OptimizeResult:
    circuit, config = args
    return optimize(circuit, config)


def optimize_many(circuits: Sequence[Circuit], config: Optional[EngineConfig] = None,
                  max_workers: Optional[int] = None) -> List[OptimizeResult]:
    """Optimises independent circuits, in parallel processes unless
    ``max_workers == 1``. Results are returned in input order."""
    if config is None:
        config = PIPELINE_DEFAULTS
    jobs = [(c, config) for c in circuits]
    if max_workers == 1 or len(jobs) <= 1:
        return [_optimize_worker(job) for job in jobs]
    with ProcessPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(_optimize_worker, jobs))
