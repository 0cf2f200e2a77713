#!/usr/bin/env python3
"""Benchmark script for lineheat performance testing.

Outputs results in JSON format compatible with github-action-benchmark.
"""

from __future__ import annotations

import argparse
import json
import threading
import time
from pathlib import Path


def benchmark_import_time() -> float:
    """Measure import time of lineheat package."""
    start = time.perf_counter()
    import lineheat  # noqa: F401

    return time.perf_counter() - start


def benchmark_increments(shard_count: int, threads: int, per_thread: int) -> float:
    """Measure concurrent increments over a small hot key set."""
    from lineheat.application.counters.store import CounterStore
    from lineheat.domain.model.location_key import LocationKey

    store = CounterStore(shard_count)
    keys = [LocationKey(file="app.py", line=line) for line in range(1, 65)]

    def worker() -> None:
        for i in range(per_thread):
            store.increment(keys[i % len(keys)])

    workers = [threading.Thread(target=worker) for _ in range(threads)]
    start = time.perf_counter()
    for t in workers:
        t.start()
    for t in workers:
        t.join()
    elapsed = time.perf_counter() - start

    expected = threads * per_thread
    actual = sum(store.counts().values())
    if actual != expected:
        raise RuntimeError(f"lost updates: expected {expected}, got {actual}")
    return elapsed


def benchmark_stats(lines: int) -> float:
    """Measure stats() over a populated store."""
    from lineheat.application.counters.store import CounterStore
    from lineheat.domain.model.location_key import LocationKey

    store = CounterStore()
    for line in range(1, lines + 1):
        for _ in range(line % 7 + 1):
            store.increment(LocationKey(file=f"mod{line % 20}.py", line=line))

    start = time.perf_counter()
    store.stats(top_n=20)
    return time.perf_counter() - start


def main() -> None:
    """Run benchmarks and output results."""
    parser = argparse.ArgumentParser(description="Run lineheat benchmarks")
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("benchmark-results.json"),
        help="Output file for benchmark results",
    )
    parser.add_argument("--threads", type=int, default=8, help="Concurrent writer threads")
    parser.add_argument("--per-thread", type=int, default=50_000, help="Increments per thread")
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

    # Single global lock vs sharded
    for shard_count in (1, 16):
        elapsed = benchmark_increments(shard_count, args.threads, args.per_thread)
        results.append(
            {
                "name": f"Increments ({args.threads}x{args.per_thread}, {shard_count} shards)",
                "unit": "seconds",
                "value": elapsed,
            }
        )

    # Stats over 20k distinct lines
    stats_time = benchmark_stats(20_000)
    results.append(
        {
            "name": "Stats (20k lines)",
            "unit": "seconds",
            "value": stats_time,
        }
    )

    # Write results
    args.output.write_text(json.dumps(results, indent=2))
    print(f"Benchmark results written to {args.output}")
    for r in results:
        print(f"  {r['name']}: {r['value']:.4f} {r['unit']}")


if __name__ == "__main__":
    main()
