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

"""Gate synthesis: KAK decomposition of two-qubit blocks and lowering to
backend-native gate sets."""

from .native import NativeGate, NativeCircuit, NativeGateSet, IBM, IONQ, gate_sets
from .kak import (
    KAKDecomposition, kak_decompose, euler_zyz, kron_factor,
    synthesize_one_qubit, synthesize_two_qubit,
)
from .blocks import Block, collect_blocks, lower_circuit

__all__ = [
    'NativeGate', 'NativeCircuit', 'NativeGateSet', 'IBM', 'IONQ', 'gate_sets',
    'KAKDecomposition', 'kak_decompose', 'euler_zyz', 'kron_factor',
    'synthesize_one_qubit', 'synthesize_two_qubit',
    'Block', 'collect_blocks', 'lower_circuit',
]
