# tests/test_synthesis/_base_unittest.py
import unittest

import numpy as np
from scipy.stats import unitary_group


class SynthesisUnitTestCase(unittest.TestCase):
    """
    Base for gate synthesis tests. Random unitaries are drawn from the Haar
    measure with fixed seeds.
    """

    ATOL = 1e-8

    def random_unitary(self, dim, seed):
        return unitary_group.rvs(dim, random_state=seed)

    def random_local(self, seed):
        """A tensor product of two random single-qubit unitaries."""
        return np.kron(self.random_unitary(2, seed), self.random_unitary(2, seed + 1000))

    def assert_matrix_close(self, actual, expected, msg=None):
        self.assertTrue(np.allclose(actual, expected, atol=self.ATOL),
                        msg or f"max deviation {np.max(np.abs(actual - expected)):.3e}")

    def assert_native(self, circuit, gateset):
        allowed = set(gateset.one_qubit) | {gateset.entangler}
        self.assertTrue(set(circuit.counts()) <= allowed,
                        f"{circuit.counts()} uses gates outside {sorted(allowed)}")


if __name__ == "__main__":
    unittest.main()
