"""Benchmark: layout and frame latency (p50/p95/mean).

The layout is recomputed on every redraw, so its per-call latency bounds
how responsive a resize or hide feels.  Measured on the projects tab of
the demo data with two hidden columns.
"""
from __future__ import annotations

import json
import time
from collections.abc import Callable
from pathlib import Path

import housetab
from housetab.app import Session

_WARMUP: int = 100
_ITERATIONS: int = 2_000
_WIDTH: int = 100


def _projects_session() -> Session:
    session = housetab.open_session()
    tab = session.switch_tab("projects")
    session.hide_column(tab, "Type")
    session.hide_column(tab, "Budget")
    return session


def _measure(operation: str, call: Callable[[], object], iterations: int) -> dict[str, object]:
    for _ in range(min(_WARMUP, iterations)):
        call()

    latencies_ms: list[float] = []
    for _ in range(iterations):
        t0 = time.perf_counter()
        call()
        latencies_ms.append((time.perf_counter() - t0) * 1000)

    sorted_lats = sorted(latencies_ms)
    n = len(sorted_lats)
    total = sum(latencies_ms) / 1000

    result: dict[str, object] = {
        "operation": operation,
        "iterations": iterations,
        "total_seconds": round(total, 4),
        "ops_per_second": round(iterations / total, 1) if total else 0.0,
        "avg_latency_ms": round(sum(latencies_ms) / n, 4),
        "p50_ms": round(sorted_lats[int(n * 0.50)], 4),
        "p95_ms": round(sorted_lats[min(int(n * 0.95), n - 1)], 4),
    }
    print(
        f"[bench_latency] {result['operation']}: "
        f"p50={result['p50_ms']:.4f}ms  p95={result['p95_ms']:.4f}ms  "
        f"mean={result['avg_latency_ms']:.4f}ms"
    )
    return result


def bench_layout_latency(iterations: int = _ITERATIONS) -> dict[str, object]:
    """Benchmark :meth:`Session.layout` on the projects tab.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms, p50_ms, p95_ms.
    """
    session = _projects_session()
    tab = session.active_tab
    return _measure("layout_projects", lambda: session.layout(tab, _WIDTH), iterations)


def bench_frame_latency(iterations: int = _ITERATIONS) -> dict[str, object]:
    """Benchmark a full :meth:`Session.frame` render of the projects tab."""
    session = _projects_session()
    tab = session.active_tab
    return _measure("frame_projects", lambda: session.frame(tab, _WIDTH), iterations)


if __name__ == "__main__":
    results = [bench_layout_latency(), bench_frame_latency()]
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "latency_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(results, fh, indent=2)
    print(f"Results saved to {output_path}")
