from dataclasses import dataclass
from fractions import Fraction
from typing import Any, Callable, Optional
import time

from zxopt.graph.graph_s import GraphS
from zxopt.tensor import compare_tensors
from zxopt.utils import VertexType, EdgeType


@dataclass
class RuleRunResult:
    name: str
    elapsed_s: float
    return_value: Any
    original_graph: GraphS
    graph_after: GraphS
    stats_before: Optional[str]
    stats_after: Optional[str]


def run_rule(
    graph: GraphS,
    rule_fn: Callable[[GraphS], Any],
    name: str,
    print_results: bool = False,
) -> RuleRunResult:
    """
    Runs a rewrite on a copy of ``graph`` and keeps both versions around for
    validation.
    """
    original = graph.copy()
    g = graph.copy()
    stats_before = g.stats()

    start = time.perf_counter()
    return_value = rule_fn(g)
    elapsed_s = time.perf_counter() - start

    stats_after = g.stats()

    if print_results:
        print(f"\n{name}")
        print(f"  time:   {elapsed_s:.6f}s")
        print(f"  before: {stats_before}")
        print(f"  after:  {stats_after}")
        print(f"  return: {return_value}")

    return RuleRunResult(
        name=name,
        elapsed_s=elapsed_s,
        return_value=return_value,
        original_graph=original,
        graph_after=g,
        stats_before=stats_before,
        stats_after=stats_after,
    )


def validate_rule_result(
    run: RuleRunResult,
    preserve_scalar: bool = True,
    max_tensor_qubits: int = 6,
) -> dict:
    """
    Semantic checks of a rewrite on small diagrams: equal tensors, unchanged
    boundaries and boundaries of degree one.
    """
    qubits = run.original_graph.qubit_count()
    if qubits > max_tensor_qubits:
        raise ValueError(
            f"Tensor comparison is intended only for small tests. "
            f"Got qubits={qubits}, max_tensor_qubits={max_tensor_qubits}."
        )
    report = {
        "tensors_equal": compare_tensors(
            run.original_graph, run.graph_after, preserve_scalar=preserve_scalar),
        "inputs_unchanged": run.original_graph.inputs() == run.graph_after.inputs(),
        "outputs_unchanged": run.original_graph.outputs() == run.graph_after.outputs(),
    }
    try:
        assert_boundary_degrees_are_one(run.graph_after, run.name)
        report["boundary_degrees"] = True
    except AssertionError:
        report["boundary_degrees"] = False
    return report


def assert_boundary_degrees_are_one(g: GraphS, label: str = "graph") -> None:
    for b in list(g.inputs()) + list(g.outputs()):
        d = g.vertex_degree(b)
        assert d == 1, f"{label}: boundary {b} has degree {d}"


def make_wire_graph(qubits: int = 1) -> GraphS:
    """Inputs connected straight to outputs."""
    g = GraphS()
    ins = [g.add_vertex(VertexType.BOUNDARY, q, 0) for q in range(qubits)]
    outs = [g.add_vertex(VertexType.BOUNDARY, q, 1) for q in range(qubits)]
    for i, o in zip(ins, outs):
        g.add_edge((i, o))
    g.set_inputs(ins)
    g.set_outputs(outs)
    return g


def make_spider_chain(phases, edge_types, kinds=None) -> GraphS:
    """
    A single qubit ``in - s0 - s1 - ... - out``. ``edge_types`` gives the
    types of the edges between consecutive spiders.
    """
    if kinds is None:
        kinds = [VertexType.Z] * len(phases)
    g = GraphS()
    i = g.add_vertex(VertexType.BOUNDARY, 0, 0)
    vs = [g.add_vertex(k, 0, n + 1, p) for n, (k, p) in enumerate(zip(kinds, phases))]
    o = g.add_vertex(VertexType.BOUNDARY, 0, len(vs) + 1)
    g.add_edge((i, vs[0]))
    for (a, b), et in zip(zip(vs, vs[1:]), edge_types):
        g.add_edge((a, b), et)
    g.add_edge((vs[-1], o))
    g.set_inputs([i])
    g.set_outputs([o])
    return g


def make_stuck_diagram() -> GraphS:
    """
    A graph-like 3-qubit diagram whose frontier cannot advance without CNOTs.

    Inputs feed phase-free spiders a, b, c. The output spiders f0, f1, f2 are
    Hadamard-connected to {a, b}, {b, c} and {a, b, c}; the biadjacency
    matrix is invertible and only the sum of rows 0 and 2 has weight one.
    """
    g = GraphS()
    ins = [g.add_vertex(VertexType.BOUNDARY, q, 0) for q in range(3)]
    bottom = [g.add_vertex(VertexType.Z, q, 1) for q in range(3)]
    top = [g.add_vertex(VertexType.Z, q, 2) for q in range(3)]
    outs = [g.add_vertex(VertexType.BOUNDARY, q, 3) for q in range(3)]
    for i, v in zip(ins, bottom):
        g.add_edge((i, v))
    for f, o in zip(top, outs):
        g.add_edge((f, o))
    a, b, c = bottom
    f0, f1, f2 = top
    for s, t in [(f0, a), (f0, b), (f1, b), (f1, c), (f2, a), (f2, b), (f2, c)]:
        g.add_edge((s, t), EdgeType.HADAMARD)
    g.set_inputs(ins)
    g.set_outputs(outs)
    return g


T = Fraction(1, 4)
S = Fraction(1, 2)
