from __future__ import annotations

import argparse
import statistics
import time
from dataclasses import dataclass

import retriever
from retriever.diagnostics import DiagnosticSink

TYPE_VALUES: dict[str, object] = {
    "string": "string value",
    "array": [0, 1, 2],
    "object": {"a": 1},
}
DEFAULTS: dict[str, object] = {
    "string": "",
    "array": [],
    "object": {},
}


class _CountingSink(DiagnosticSink):
    def __init__(self) -> None:
        self.messages = 0

    def emit(self, level: str, message: str) -> None:
        self.messages += 1


@dataclass(frozen=True)
class ObjectShape:
    breadth: int
    depth: int

    def validate(self) -> None:
        if self.breadth < 1:
            raise ValueError("breadth must be >= 1")
        if self.depth < 2:
            raise ValueError("depth must be >= 2")


@dataclass(frozen=True)
class Scenario:
    name: str
    value_type: str
    default: object
    wrong_path: bool


def build_path(prefix: str, count: int) -> str:
    return ".".join(f"{prefix}{index + 1}" for index in range(count))


def build_paths(shape: ObjectShape, value_type: str) -> list[str]:
    paths: list[str] = []
    for b in range(shape.breadth):
        prefix = f"a{b}"
        for d in range(1, shape.depth):
            paths.append(f"{build_path(prefix, d)}.{value_type}")
    return paths


def build_object(shape: ObjectShape, value_type: str) -> dict[str, object]:
    """Nest ``depth`` levels per branch with a typed value at every level."""

    shape.validate()
    document: dict[str, object] = {}
    for b in range(shape.breadth):
        prefix = f"a{b}"
        document[f"{prefix}1"] = {}
        count = 1
        for _ in range(shape.depth):
            working = retriever.get(document, build_path(prefix, count), {})
            assert isinstance(working, dict)
            working[value_type] = TYPE_VALUES[value_type]
            count += 1
            working[f"{prefix}{count}"] = {}
    return document


def build_scenarios() -> list[Scenario]:
    scenarios: list[Scenario] = []
    for value_type in TYPE_VALUES:
        scenarios.append(
            Scenario(f"access {value_type}", value_type, DEFAULTS[value_type], False)
        )
    for value_type in TYPE_VALUES:
        # None is its own type tag, so every lookup mismatches
        scenarios.append(
            Scenario(f"access {value_type} with wrong default", value_type, None, False)
        )
    for value_type in TYPE_VALUES:
        scenarios.append(
            Scenario(
                f"access {value_type} with wrong path",
                value_type,
                DEFAULTS[value_type],
                True,
            )
        )
    return scenarios


def measure(
    accessor: str,
    document: dict[str, object],
    paths: list[str],
    scenario: Scenario,
    *,
    calls: int,
    repeats: int,
) -> list[float]:
    if repeats < 1:
        raise ValueError("repeats must be >= 1")
    lookup = getattr(retriever, accessor)
    if scenario.wrong_path:
        paths = [f"{path}asdf" for path in paths]
    samples: list[float] = []
    for _ in range(repeats):
        started = time.perf_counter()
        for index in range(calls):
            lookup(document, paths[index % len(paths)], scenario.default)
        samples.append(time.perf_counter() - started)
    return samples


def _percentile(samples: list[float], quantile: float) -> float:
    if not samples:
        raise ValueError("samples must be non-empty")
    if quantile <= 0.0:
        return min(samples)
    if quantile >= 1.0:
        return max(samples)
    ordered = sorted(samples)
    scaled = quantile * (len(ordered) - 1)
    lower = int(scaled)
    upper = min(lower + 1, len(ordered) - 1)
    if lower == upper:
        return ordered[lower]
    fraction = scaled - lower
    return ordered[lower] * (1.0 - fraction) + ordered[upper] * fraction


def _format_ms(seconds: float) -> str:
    return f"{seconds * 1000.0:,.2f} ms"


def _print_summary(label: str, samples: list[float]) -> None:
    print(f"  {label}")
    print(f"    mean:   {_format_ms(statistics.mean(samples))}")
    print(f"    median: {_format_ms(statistics.median(samples))}")
    print(f"    p95:    {_format_ms(_percentile(samples, 0.95))}")
    print(f"    min:    {_format_ms(min(samples))}")
    print(f"    max:    {_format_ms(max(samples))}")


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Benchmark get()/need() over nested objects of varying shape."
    )
    parser.add_argument("--calls", type=int, default=5_000)
    parser.add_argument("--repeats", type=int, default=3)
    parser.add_argument(
        "--shape",
        action="append",
        default=None,
        metavar="BREADTHxDEPTH",
        help="Object shape to benchmark; may be repeated (default: 500x25, 200x10, 10x5).",
    )
    return parser.parse_args()


def _parse_shape(raw: str) -> ObjectShape:
    breadth, _, depth = raw.lower().partition("x")
    shape = ObjectShape(breadth=int(breadth), depth=int(depth))
    shape.validate()
    return shape


def main() -> None:
    args = _parse_args()
    shapes = [_parse_shape(raw) for raw in args.shape or ["500x25", "200x10", "10x5"]]

    retriever.start_logging(_CountingSink())
    for accessor in ("need", "get"):
        print(f"\n### {accessor}() ###")
        for scenario in build_scenarios():
            print(f"\n{scenario.name}")
            for shape in shapes:
                document = build_object(shape, scenario.value_type)
                paths = build_paths(shape, scenario.value_type)
                samples = measure(
                    accessor,
                    document,
                    paths,
                    scenario,
                    calls=args.calls,
                    repeats=args.repeats,
                )
                _print_summary(
                    f"calls:{args.calls}, breadth:{shape.breadth}, depth:{shape.depth}",
                    samples,
                )
    retriever.end_logging(summary_only=True)


if __name__ == "__main__":
    main()
