#!/usr/bin/env python3
"""Quick perf benchmark for lexing, parsing and running a pipeline preset."""

from __future__ import annotations

import argparse
import cProfile
import io
import pstats
import statistics
import time
from pathlib import Path

from tqdm import tqdm

from lunaveil.config import PRESETS, load_config, load_preset
from lunaveil.pipeline import Pipeline


def _collect_lua_files(root: Path) -> list[Path]:
    files = sorted(root.rglob("*.lua"))
    return [path for path in files if path.is_file()]


def _run_once(
    sources: list[bytes],
    pipeline: Pipeline,
    *,
    label: str,
    show_progress: bool,
) -> tuple[float, int, int]:
    start = time.perf_counter()
    total_statements = 0
    total_warnings = 0
    iterator = tqdm(sources, desc=label, unit="file") if show_progress else sources
    for source in iterator:
        result = pipeline.apply(source)
        total_statements += len(result.block.statements)
        total_warnings += len(result.warnings)
    duration = time.perf_counter() - start
    return duration, total_statements, total_warnings


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark pipeline throughput over a directory of Lua files")
    parser.add_argument("root", type=Path, help="Directory searched recursively for .lua files")
    parser.add_argument("--preset", choices=sorted(PRESETS), default="Minify", help="Preset to run")
    parser.add_argument("--config", type=Path, default=None, help="JSON config file (overrides --preset)")
    parser.add_argument("--runs", type=int, default=5, help="Measured runs")
    parser.add_argument("--warmups", type=int, default=1, help="Warmup runs")
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable tqdm progress bars (useful for pure timing)",
    )
    parser.add_argument("--profile", action="store_true", help="Run cProfile and print top hotspots")
    parser.add_argument("--profile-top", type=int, default=30, help="Number of cProfile rows to print")
    args = parser.parse_args()

    root: Path = args.root
    if not root.is_dir():
        raise SystemExit(f"Invalid root directory: {root}")
    files = _collect_lua_files(root)
    if not files:
        raise SystemExit(f"No .lua files found under {root}")
    sources = [path.read_bytes() for path in files]

    config = load_config(args.config) if args.config else load_preset(args.preset)
    show_progress = not args.no_progress

    def _benchmark() -> tuple[list[float], int, int]:
        for warmup_idx in range(max(args.warmups, 0)):
            _run_once(
                sources,
                Pipeline.from_config(config),
                label=f"warmup {warmup_idx + 1}/{max(args.warmups, 0)}",
                show_progress=show_progress,
            )

        timings: list[float] = []
        statements = 0
        warnings = 0
        for run_idx in range(max(args.runs, 1)):
            duration, statements, warnings = _run_once(
                sources,
                Pipeline.from_config(config),
                label=f"run {run_idx + 1}/{max(args.runs, 1)}",
                show_progress=show_progress,
            )
            timings.append(duration)
        return timings, statements, warnings

    if args.profile:
        profiler = cProfile.Profile()
        profiler.enable()
        timings, statements, warnings = _benchmark()
        profiler.disable()
        stream = io.StringIO()
        pstats.Stats(profiler, stream=stream).sort_stats("tottime").print_stats(max(args.profile_top, 1))
        print("\n[cProfile top functions]")
        print(stream.getvalue())
    else:
        timings, statements, warnings = _benchmark()

    mean = statistics.mean(timings)
    print(f"Dataset: {root}")
    print(f"Files: {len(files)}")
    print(f"Steps: {', '.join(step.name for step in config.steps) or '(none)'}")
    print(f"Statements: {statements}")
    print(f"Warnings: {warnings}")
    print(f"Runs: {len(timings)} (warmups={max(args.warmups, 0)})")
    print(f"Best:   {min(timings):.4f}s")
    print(f"Median: {statistics.median(timings):.4f}s")
    print(f"Mean:   {mean:.4f}s")
    print(f"Worst:  {max(timings):.4f}s")
    print(f"Files/s (mean): {len(files) / mean:.1f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
