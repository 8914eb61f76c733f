# tests/test_rules/_base_unittest.py
import unittest

from zxopt.rules import apply_matches

from tests.helpers import run_rule, validate_rule_result


class RuleUnitTestCase(unittest.TestCase):
    """
    Base for rewrite rule tests: every rewrite is run on a copy of the graph
    and checked against the original with the tensor evaluator.
    """

    def apply_parallel(self, g, matcher, name, expected_matches=None):
        found = []

        def rule_fn(graph):
            matches = matcher(graph)
            found.extend(matches)
            apply_matches(graph, matches)
            return matches

        run = run_rule(g, rule_fn, name)
        if expected_matches is not None:
            self.assertEqual(len(found), expected_matches,
                             f"{name}: expected {expected_matches} matches, got {found}")
        return run

    def assert_sound(self, run, preserve_scalar=True):
        report = validate_rule_result(run, preserve_scalar=preserve_scalar)
        self.assertTrue(report["tensors_equal"], f"{run.name} changed the diagram")
        self.assertTrue(report["inputs_unchanged"], f"{run.name} changed the inputs")
        self.assertTrue(report["outputs_unchanged"], f"{run.name} changed the outputs")
        self.assertTrue(report["boundary_degrees"], f"{run.name} broke a boundary")


if __name__ == "__main__":
    unittest.main()
