#!/usr/bin/env python3
from __future__ import annotations

import argparse
import math
import statistics
import sys
import time
from pathlib import Path
from typing import Callable

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "python"))

from peco import AttributeAccessor, CatalogRegistry, PecoBase  # noqa: E402


class Row(PecoBase):
    ident: int = 0
    name: str = ""
    price: float = 0.0
    quantity: int = 0
    active: bool = True


def _percentile(sorted_values: list[float], percentile: float) -> float:
    if not sorted_values:
        raise ValueError("no values to summarize")
    if percentile <= 0.0:
        return sorted_values[0]
    if percentile >= 1.0:
        return sorted_values[-1]
    index = (len(sorted_values) - 1) * percentile
    low = int(math.floor(index))
    high = int(math.ceil(index))
    if low == high:
        return sorted_values[low]
    weight = index - low
    return sorted_values[low] + (sorted_values[high] - sorted_values[low]) * weight


def _run_once(read_all: Callable[[], object], reads: int) -> float:
    start = time.perf_counter()
    for _ in range(reads):
        read_all()
    end = time.perf_counter()
    return (end - start) * 1000.0


def _strategies(row: Row) -> dict[str, Callable[[], object]]:
    acc = AttributeAccessor(row, CatalogRegistry())
    names = [d.name for d in acc.catalog]
    positions = range(len(names))

    def positional() -> object:
        return [acc.get(i) for i in positions]

    def named() -> object:
        return [acc.get(name) for name in names]

    def iterated() -> object:
        return list(acc.iterate())

    def mixin() -> object:
        return list(row)

    def reflective() -> object:
        return [getattr(row, name) for name in names]

    return {
        "positional": positional,
        "named": named,
        "iterated": iterated,
        "mixin": mixin,
        "reflective": reflective,
    }


def _summarize(label: str, samples: list[float]) -> None:
    samples.sort()
    mean = statistics.fmean(samples)
    median = statistics.median(samples)
    p95 = _percentile(samples, 0.95)
    stdev = statistics.pstdev(samples)
    print(
        f"{label}: mean {mean:.3f} ms, median {median:.3f} ms, p95 {p95:.3f} ms, "
        f"stdev {stdev:.3f} ms, min {samples[0]:.3f} ms, max {samples[-1]:.3f} ms"
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Benchmark catalog-backed attribute reads against getattr.",
    )
    parser.add_argument("--iterations", type=int, default=30)
    parser.add_argument("--warmup", type=int, default=5)
    parser.add_argument(
        "--reads",
        type=int,
        default=10000,
        help="Full-row reads per sample.",
    )
    parser.add_argument(
        "strategy",
        nargs="*",
        help="Strategies to run; default: all.",
    )
    args = parser.parse_args(argv)

    if args.iterations <= 0:
        parser.error("--iterations must be positive")
    if args.warmup < 0:
        parser.error("--warmup cannot be negative")
    if args.reads <= 0:
        parser.error("--reads must be positive")

    strategies = _strategies(Row())
    selected = args.strategy or list(strategies)
    unknown = [name for name in selected if name not in strategies]
    if unknown:
        parser.error(f"unknown strategy: {', '.join(unknown)}")

    print(f"reads: {args.reads} warmup: {args.warmup} iterations: {args.iterations}")
    for name in selected:
        read_all = strategies[name]
        for _ in range(args.warmup):
            _run_once(read_all, args.reads)
        samples = [_run_once(read_all, args.reads) for _ in range(args.iterations)]
        _summarize(name, samples)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
