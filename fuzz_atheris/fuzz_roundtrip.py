#!/usr/bin/env python3
"""Parse/Stringify Roundtrip Fuzzer (Atheris).

Targets: proplexengine.parse_lines, proplexengine.stringify,
         proplexengine.parse

Invariants:
- parse_lines never raises for str input
- Pairs survive stringify then parse_lines, for every folding width,
  indent, key separator, newline and escape mode
- parse(stringify(tree)) == tree for flat trees

Pattern Routing:
Deterministic round-robin from a weighted schedule. Pattern selection is
independent of fuzzed bytes to avoid coverage-guided mutation bias.

Usage:
    python fuzz_atheris/fuzz_roundtrip.py -max_total_time=60

Requires Python 3.13+.
"""

from __future__ import annotations

import argparse
import atexit
import gc
import json
import os
import sys
import time
from dataclasses import dataclass, field

import atheris
import psutil

with atheris.instrument_imports():
    from proplexengine import (
        Pair,
        SerializationValidationError,
        StringifyOptions,
        parse,
        parse_lines,
        stringify,
    )

GC_INTERVAL = 256

# Pattern weights: (name, weight)
_PATTERN_WEIGHTS: tuple[tuple[str, int], ...] = (
    ("raw_text", 30),
    ("constructed_pairs", 40),
    ("flat_tree", 15),
    ("structural_chars", 15),
)

_STRUCTURAL = " \t\f\r\n\\=:#!u0aZ"


def _build_schedule(weights: tuple[tuple[str, int], ...]) -> tuple[str, ...]:
    schedule: list[str] = []
    for name, weight in weights:
        schedule.extend([name] * weight)
    return tuple(schedule)


_PATTERN_SCHEDULE = _build_schedule(_PATTERN_WEIGHTS)


class RoundtripFuzzError(Exception):
    """Raised when a roundtrip invariant is violated."""


@dataclass
class FuzzerState:
    """Observability state for one fuzzing session."""

    iterations: int = 0
    findings: int = 0
    checkpoint_interval: int = 500
    initial_memory_mb: float = 0.0
    peak_memory_mb: float = 0.0
    start_time: float = field(default_factory=time.perf_counter)
    pattern_coverage: dict[str, int] = field(default_factory=dict)
    error_counts: dict[str, int] = field(default_factory=dict)


_state = FuzzerState()
_process = psutil.Process(os.getpid())


def _memory_mb() -> float:
    return _process.memory_info().rss / (1024 * 1024)


def _emit_report() -> None:
    report = {
        "iterations": _state.iterations,
        "findings": _state.findings,
        "elapsed_s": round(time.perf_counter() - _state.start_time, 2),
        "initial_memory_mb": round(_state.initial_memory_mb, 1),
        "peak_memory_mb": round(_state.peak_memory_mb, 1),
        "pattern_coverage": _state.pattern_coverage,
        "error_counts": _state.error_counts,
    }
    print(f"[roundtrip] {json.dumps(report, sort_keys=True)}", file=sys.stderr)


atexit.register(_emit_report)


# --- Input generation ---


def _gen_options(fdp: atheris.FuzzedDataProvider) -> StringifyOptions:
    width_kind = fdp.ConsumeIntInRange(0, 2)
    line_width: int | None
    if width_kind == 0:
        line_width = None
    elif width_kind == 1:
        line_width = fdp.ConsumeIntInRange(1, 24)
    else:
        line_width = 80
    return StringifyOptions(
        indent=fdp.PickValueInList(["    ", "\t", " ", ""]),
        key_sep=fdp.PickValueInList([" = ", "=", ": ", ":"]),
        latin1=fdp.ConsumeBool(),
        line_width=line_width,
        newline=fdp.PickValueInList(["\n", "\r\n", "\r"]),
        fold_chars=fdp.PickValueInList(["\f\t .", "", ",", " =:"]),
    )


def _gen_text(fdp: atheris.FuzzedDataProvider, max_len: int) -> str:
    # Lone surrogates cannot survive a \u escape roundtrip.
    return fdp.ConsumeUnicodeNoSurrogates(fdp.ConsumeIntInRange(0, max_len))


def _gen_structural(fdp: atheris.FuzzedDataProvider, max_len: int) -> str:
    length = fdp.ConsumeIntInRange(0, max_len)
    return "".join(fdp.PickValueInList(list(_STRUCTURAL)) for _ in range(length))


def _pairs(lines: list[object]) -> list[tuple[str, str]]:
    return [(line.key, line.value) for line in lines if isinstance(line, Pair)]


# --- Pattern handlers ---


def _check_pairs(
    expected: list[tuple[str, str]], text: str, label: str
) -> None:
    actual = _pairs(parse_lines(text))
    if actual != expected:
        msg = (
            f"{label}: pairs changed\n"
            f"  expected={expected!r}\n  actual={actual!r}\n  text={text!r}"
        )
        raise RoundtripFuzzError(msg)


def _fuzz_raw_text(fdp: atheris.FuzzedDataProvider, source: str) -> None:
    lines = parse_lines(source)
    _check_pairs(_pairs(lines), stringify(lines, _gen_options(fdp)), "raw_text")


def _fuzz_constructed_pairs(fdp: atheris.FuzzedDataProvider) -> None:
    count = fdp.ConsumeIntInRange(1, 6)
    entries = [(_gen_text(fdp, 24), _gen_text(fdp, 80)) for _ in range(count)]
    _check_pairs(entries, stringify(entries, _gen_options(fdp)), "constructed_pairs")


def _fuzz_flat_tree(fdp: atheris.FuzzedDataProvider) -> None:
    tree = {_gen_text(fdp, 16): _gen_text(fdp, 40) for _ in range(fdp.ConsumeIntInRange(0, 6))}
    result = parse(stringify(tree, _gen_options(fdp)))
    if result != tree:
        msg = f"flat_tree: tree changed\n  expected={tree!r}\n  actual={result!r}"
        raise RoundtripFuzzError(msg)


def test_one_input(data: bytes) -> None:
    """Atheris entry point: fuzz the parse/stringify roundtrip."""
    if _state.iterations == 0:
        _state.initial_memory_mb = _memory_mb()

    _state.iterations += 1
    if _state.iterations % _state.checkpoint_interval == 0:
        _emit_report()

    fdp = atheris.FuzzedDataProvider(data)
    pattern = _PATTERN_SCHEDULE[_state.iterations % len(_PATTERN_SCHEDULE)]
    _state.pattern_coverage[pattern] = _state.pattern_coverage.get(pattern, 0) + 1

    try:
        match pattern:
            case "raw_text":
                _fuzz_raw_text(fdp, _gen_text(fdp, 512))
            case "structural_chars":
                _fuzz_raw_text(fdp, _gen_structural(fdp, 256))
            case "constructed_pairs":
                _fuzz_constructed_pairs(fdp)
            case _:
                _fuzz_flat_tree(fdp)

    except RoundtripFuzzError:
        _state.findings += 1
        raise

    except SerializationValidationError as e:
        # Constructed input is always writable.
        msg = f"{pattern}: unexpected rejection: {e}"
        raise RoundtripFuzzError(msg) from e

    finally:
        if _state.iterations % GC_INTERVAL == 0:
            gc.collect()
        if _state.iterations % 100 == 0:
            _state.peak_memory_mb = max(_state.peak_memory_mb, _memory_mb())


def main() -> None:
    """Run the roundtrip fuzzer with CLI support."""
    parser = argparse.ArgumentParser(
        description="Parse/stringify roundtrip fuzzer using Atheris/libFuzzer",
        epilog="All unrecognized arguments are passed to libFuzzer.",
    )
    parser.add_argument(
        "--checkpoint-interval", type=int, default=500,
        help="Emit report every N iterations (default: 500)",
    )

    args, remaining = parser.parse_known_args()
    _state.checkpoint_interval = args.checkpoint_interval

    if not any(arg.startswith("-rss_limit_mb") for arg in remaining):
        remaining.append("-rss_limit_mb=4096")

    sys.argv = [sys.argv[0], *remaining]

    atheris.Setup(sys.argv, test_one_input)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
