# tests/test_extract/_base_unittest.py
import unittest

from zxopt.generate import cliffordT, CNOT_HAD_PHASE_circuit, phase_poly_circuit
from zxopt.tensor import compare_tensors


class ExtractUnitTestCase(unittest.TestCase):
    """
    Base for extraction tests. Circuits are kept small enough for dense
    tensor comparison.
    """

    def random_circuits(self, qubits=3, depth=30, seeds=range(5)):
        for seed in seeds:
            yield f"cliffordT-{seed}", cliffordT(qubits, depth, seed=seed)
            yield f"cnot-had-phase-{seed}", CNOT_HAD_PHASE_circuit(qubits, depth, seed=seed)
            yield f"phase-poly-{seed}", phase_poly_circuit(qubits, depth, seed=seed)

    def assert_extracted(self, original, result):
        """``original`` is a circuit or diagram, ``result`` an ExtractionResult."""
        self.assertEqual(sorted(result.permutation), list(range(result.circuit.qubits)))
        self.assertTrue(compare_tensors(original, result.to_matrix()),
                        f"extracted circuit differs: {result.circuit.gates} perm {result.permutation}")


if __name__ == "__main__":
    unittest.main()
