"""Benchmark: Store save/find throughput and pattern deletion cost.

Measures save+find round-trips per second against the in-memory store,
then times a ``delete_by_pattern`` sweep over half of the keyspace.
"""
from __future__ import annotations

import sys
import time
from datetime import datetime, timedelta, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from session_store.store.memory import MemoryStore

_ITERATIONS: int = 20_000


def bench_save_find_throughput() -> dict[str, object]:
    """Benchmark MemoryStore save+find round-trip throughput.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms, p99_latency_ms.
    """
    store = MemoryStore()
    expiry = datetime.now(timezone.utc) + timedelta(hours=1)
    payload = b"x" * 256

    latencies_ms: list[float] = []
    for i in range(_ITERATIONS):
        t0 = time.perf_counter()
        store.save(f"bench_{i}", payload, expiry)
        store.find(f"bench_{i}")
        latencies_ms.append((time.perf_counter() - t0) * 1000)

    total = sum(latencies_ms) / 1000
    sorted_lats = sorted(latencies_ms)
    n = len(sorted_lats)

    result: dict[str, object] = {
        "operation": "store_save_find_throughput",
        "iterations": _ITERATIONS,
        "total_seconds": round(total, 4),
        "ops_per_second": round(_ITERATIONS / total, 1),
        "avg_latency_ms": round(sum(latencies_ms) / n, 4),
        "p99_latency_ms": round(sorted_lats[min(int(n * 0.99), n - 1)], 4),
    }
    print(
        f"[bench_store_throughput] {result['operation']}: "
        f"{result['ops_per_second']:,.0f} ops/sec  "
        f"avg {result['avg_latency_ms']:.4f} ms"
    )
    return result


def bench_delete_by_pattern() -> dict[str, object]:
    """Time removal of half of a populated keyspace by token prefix."""
    store = MemoryStore()
    expiry = datetime.now(timezone.utc) + timedelta(hours=1)
    for i in range(_ITERATIONS):
        group = "even" if i % 2 == 0 else "odd"
        store.save(f"{group}_{i}", b"v", expiry)

    t0 = time.perf_counter()
    store.delete_by_pattern("even_")
    elapsed = time.perf_counter() - t0

    result: dict[str, object] = {
        "operation": "store_delete_by_pattern",
        "keys_before": _ITERATIONS,
        "keys_after": len(store),
        "total_seconds": round(elapsed, 4),
    }
    print(
        f"[bench_store_throughput] {result['operation']}: "
        f"{result['keys_before']} -> {result['keys_after']} keys "
        f"in {result['total_seconds']} s"
    )
    return result


if __name__ == "__main__":
    bench_save_find_throughput()
    bench_delete_by_pattern()
