#!/usr/bin/env python3
"""Benchmark script for inlinecheck performance testing.

Outputs results in JSON format compatible with github-action-benchmark.
"""

from __future__ import annotations

import argparse
import json
import time
from pathlib import Path


def benchmark_import_time() -> float:
    """Measure import time of inlinecheck package."""
    start = time.perf_counter()
    import inlinecheck  # noqa: F401

    return time.perf_counter() - start


def benchmark_node_creation() -> float:
    """Measure creation time of validated nodes."""
    from inlinecheck.domain.model.nodes import BinaryOp, BinaryOperator, Param, Return, Variable

    start = time.perf_counter()
    for _ in range(10000):
        Param(name="a", declared_type="int")
        Return(BinaryOp(BinaryOperator.PLUS, Variable("a"), Variable("b")))
    return time.perf_counter() - start


def benchmark_analysis() -> float:
    """Measure purity analysis of a mid-sized callable body."""
    from inlinecheck import PurityAnalyzer
    from inlinecheck.domain.model.nodes import (
        ArrayDimFetch,
        Assign,
        BinaryOp,
        BinaryOperator,
        Closure,
        Expression,
        Literal,
        Param,
        Return,
        Variable,
    )

    stmts = tuple(
        Expression(
            Assign(
                Variable(f"v{i}"),
                BinaryOp(
                    BinaryOperator.PLUS,
                    ArrayDimFetch(Variable("data"), Literal(f"k{i}")),
                    Variable("n"),
                ),
            )
        )
        for i in range(50)
    )
    closure = Closure(
        params=(Param("data", "array"), Param("n", "int")),
        stmts=(*stmts, Return(Variable("v0"))),
    )
    analyzer = PurityAnalyzer()

    start = time.perf_counter()
    for _ in range(1000):
        analyzer.is_pure(closure)
    return time.perf_counter() - start


def main() -> None:
    """Run benchmarks and output results."""
    parser = argparse.ArgumentParser(description="Run inlinecheck benchmarks")
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("benchmark-results.json"),
        help="Output file for benchmark results",
    )
    args = parser.parse_args()

    results = [
        {"name": "Import Time", "unit": "seconds", "value": benchmark_import_time()},
        {
            "name": "Node Creation (10k iterations)",
            "unit": "seconds",
            "value": benchmark_node_creation(),
        },
        {
            "name": "Purity Analysis (1k callables)",
            "unit": "seconds",
            "value": benchmark_analysis(),
        },
    ]

    # Write results
    args.output.write_text(json.dumps(results, indent=2))
    print(f"Benchmark results written to {args.output}")
    for r in results:
        print(f"  {r['name']}: {r['value']:.4f} {r['unit']}")


if __name__ == "__main__":
    main()
