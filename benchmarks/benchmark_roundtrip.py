#!/usr/bin/env python3
# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Benchmarks for ddex-xml detection, decode, encode and round trips.

Run with: python benchmarks/benchmark_roundtrip.py [corpus_dir]

The corpus directory defaults to DDEX_CORPUS_DIR (tests/data).
"""

import sys
import time
from pathlib import Path

from ddex_xml import MessageSniffer, Settings, build_registry, validate_round_trip
from ddex_xml.corpus import discover, load_samples, run_integrity


def benchmark_registry():
    """Benchmark registry construction and lookups."""
    print("\n=== Registry Benchmarks ===")

    start = time.perf_counter()
    for _ in range(100):
        build_registry()
    elapsed = time.perf_counter() - start
    print(f"build_registry (100x): {elapsed*1000:.2f}ms ({elapsed/100*1000:.2f}ms/op)")

    registry = build_registry()
    start = time.perf_counter()
    for _ in range(10000):
        registry.lookup('ern', '432')
    elapsed = time.perf_counter() - start
    print(f"lookup (10k): {elapsed*1000:.2f}ms ({elapsed/10000*1e6:.2f}µs/op)")
    return registry


def benchmark_documents(registry, samples, iterations=100):
    """Benchmark each pipeline stage per sample document."""
    print("\n=== Document Benchmarks ===")
    sniffer = MessageSniffer(registry)

    for name, data in samples.items():
        print(f"\n{name} ({len(data)} bytes)")

        start = time.perf_counter()
        for _ in range(iterations):
            sniffer.detect(data)
        elapsed = time.perf_counter() - start
        print(f"  detect ({iterations}x): {elapsed/iterations*1e6:.2f}µs/op")

        start = time.perf_counter()
        for _ in range(iterations):
            message, _, _ = sniffer.parse_any(data)
        elapsed = time.perf_counter() - start
        mb_per_s = len(data) * iterations / elapsed / 1e6
        print(f"  parse_any ({iterations}x): {elapsed/iterations*1000:.3f}ms/op ({mb_per_s:.2f} MB/s)")

        start = time.perf_counter()
        for _ in range(iterations):
            message.encode()
        elapsed = time.perf_counter() - start
        print(f"  encode ({iterations}x): {elapsed/iterations*1000:.3f}ms/op")

        start = time.perf_counter()
        comparison = validate_round_trip(data, sniffer.round_trip)
        elapsed = time.perf_counter() - start
        status = 'ok' if comparison.success else 'DIFFERS'
        print(f"  validate_round_trip: {elapsed*1000:.3f}ms [{status}]")


def benchmark_parallel(registry, samples, workers):
    """Benchmark a parallel integrity run over all samples."""
    print(f"\n=== Parallel Integrity ({workers} workers) ===")
    batch = {f'{name}#{i}': data for i in range(20) for name, data in samples.items()}

    start = time.perf_counter()
    results = run_integrity(batch, registry, workers=1)
    sequential = time.perf_counter() - start
    print(f"sequential ({len(batch)} docs): {sequential*1000:.2f}ms")

    start = time.perf_counter()
    results = run_integrity(batch, registry, workers=workers)
    parallel = time.perf_counter() - start
    failed = sum(1 for r in results.values() if not r.ok)
    print(f"parallel ({len(batch)} docs): {parallel*1000:.2f}ms, {failed} failed")


def main():
    """Run all benchmarks."""
    settings = Settings.from_env()
    corpus_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else settings.corpus_dir

    print("=" * 60)
    print("ddex-xml Benchmarks")
    print("=" * 60)

    registry = benchmark_registry()

    samples = {}
    for family, versions in discover(corpus_dir).items():
        for version in versions:
            for name, data in load_samples(corpus_dir, family, version).items():
                samples[f'{family}/{version}/{name}'] = data
    if not samples:
        print(f"\nNo samples found in {corpus_dir}")
        return

    benchmark_documents(registry, samples)
    benchmark_parallel(registry, samples, settings.workers)

    print("\n" + "=" * 60)
    print("Benchmarks completed")
    print("=" * 60)


if __name__ == '__main__':
    main()
