#!/usr/bin/env python3
"""Benchmark script for decoratable dispatch overhead.

Outputs results in JSON format compatible with github-action-benchmark.
"""

from __future__ import annotations

import argparse
import json
import time
from pathlib import Path


def benchmark_import_time() -> float:
    """Measure import time of decoratable package."""
    start = time.perf_counter()
    import decoratable  # noqa: F401

    return time.perf_counter() - start


def _passthrough(wrapped, ctx):  # type: ignore[no-untyped-def]
    """Decorator adding nothing but a call frame."""
    return wrapped


def _build_classes() -> tuple[type, type]:
    """Plain and decorated classes with the same members."""
    from decoratable import Decoratable, MappingNamespace, description, member

    class Plain:
        def __init__(self) -> None:
            self.value = 1

        def step(self) -> int:
            return self.value

    class Decorated(Decoratable, decorators=MappingNamespace({"passthrough": _passthrough})):
        value = member(1, description="GetDecorator = @passthrough SetDecorator = @passthrough")

        @description("Decorator = @passthrough")
        def step(self) -> int:
            return self.value

    return Plain, Decorated


def benchmark_access(obj: object, iterations: int) -> float:
    """Measure read, write and call of one member set."""
    start = time.perf_counter()
    for i in range(iterations):
        _ = obj.value  # type: ignore[attr-defined]
        obj.value = i  # type: ignore[attr-defined]
        obj.step()  # type: ignore[attr-defined]
    return time.perf_counter() - start


def benchmark_decoration(cls: type, iterations: int) -> float:
    """Measure construction (chain installation included)."""
    start = time.perf_counter()
    for _ in range(iterations):
        cls()
    return time.perf_counter() - start


def main() -> None:
    """Run benchmarks and output results."""
    parser = argparse.ArgumentParser(description="Run decoratable benchmarks")
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("benchmark-results.json"),
        help="Output file for benchmark results",
    )
    parser.add_argument(
        "--iterations",
        type=int,
        default=10000,
        help="Iterations per access benchmark",
    )
    args = parser.parse_args()

    results = []

    # Import time
    import_time = benchmark_import_time()
    results.append(
        {
            "name": "Import Time",
            "unit": "seconds",
            "value": import_time,
        }
    )

    plain_cls, decorated_cls = _build_classes()
    n = args.iterations

    # Access overhead
    plain_time = benchmark_access(plain_cls(), n)
    decorated_time = benchmark_access(decorated_cls(), n)
    results.append({"name": f"Plain Access ({n} iterations)", "unit": "seconds", "value": plain_time})
    results.append({"name": f"Decorated Access ({n} iterations)", "unit": "seconds", "value": decorated_time})
    results.append(
        {
            "name": "Dispatch Overhead Ratio",
            "unit": "x",
            "value": decorated_time / plain_time if plain_time else 0.0,
        }
    )

    # Construction with chain installation
    construction_time = benchmark_decoration(decorated_cls, n // 10)
    results.append(
        {
            "name": f"Decorated Construction ({n // 10} instances)",
            "unit": "seconds",
            "value": construction_time,
        }
    )

    # Write results
    args.output.write_text(json.dumps(results, indent=2))
    print(f"Benchmark results written to {args.output}")
    for r in results:
        print(f"  {r['name']}: {r['value']:.4f} {r['unit']}")


if __name__ == "__main__":
    main()
