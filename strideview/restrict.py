"""Timing of element-wise addition through raw storage and through views.

Python has no pointer aliasing qualifiers.  The accessor here therefore
gives the same element access as the default one.  The benchmark still runs
every variant separately, so each timing stands by itself.
"""

from __future__ import annotations

import argparse
import operator
import time
from typing import Any, Callable, MutableSequence, Optional, Sequence

from strideview.layouts import LayoutRightMapping, dextents
from strideview.span import MdSpan


class RestrictAccessor:
    """Element access into storage assumed not to alias any other storage."""

    __slots__ = ()

    def access(self, data: Sequence[Any], i: int) -> Any:
        """Element ``i`` of ``data``."""
        i = operator.index(i)
        if not 0 <= i < len(data):
            raise IndexError(f"index {i} out of range for storage of {len(data)}")
        return data[i]

    def offset(self, data: Sequence[Any], i: int) -> Sequence[Any]:
        """Storage starting at element ``i``."""
        i = operator.index(i)
        if not 0 <= i <= len(data):
            raise IndexError(f"offset {i} out of range for storage of {len(data)}")
        return data[i:]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RestrictAccessor):
            return NotImplemented
        return True

    def __hash__(self) -> int:
        return hash(RestrictAccessor)

    def __repr__(self) -> str:
        return "RestrictAccessor()"


def _check_raw_lengths(x: Sequence[Any], y: Sequence[Any], z: Sequence[Any]) -> int:
    n = len(z)
    if len(x) != n or len(y) != n:
        raise ValueError(f"lengths differ: x={len(x)}, y={len(y)}, z={n}")
    return n


def _check_span_extents(x: MdSpan, y: MdSpan, z: MdSpan) -> int:
    for name, span in (("x", x), ("y", y), ("z", z)):
        if span.rank() != 1:
            raise ValueError(f"{name} must be a rank-1 view, got rank {span.rank()}")
    n = z.extent(0)
    if x.extent(0) != n or y.extent(0) != n:
        raise ValueError(
            f"extents differ: x={x.extent(0)}, y={y.extent(0)}, z={n}"
        )
    return n


def add_raw(x: Sequence[Any], y: Sequence[Any], z: MutableSequence[Any]) -> None:
    """Store ``x[i] + y[i]`` into ``z[i]`` for storage of equal length."""
    _check_raw_lengths(x, y, z)
    z[:] = [a + b for a, b in zip(x, y)]


def add_span(x: MdSpan, y: MdSpan, z: MdSpan) -> None:
    """Store ``x[i] + y[i]`` into ``z[i]`` for rank-1 views of equal extent."""
    _check_span_extents(x, y, z)
    for idx in z.indices():
        z[idx] = x[idx] + y[idx]


def _check_trials(num_trials: int) -> int:
    num_trials = operator.index(num_trials)
    if num_trials < 0:
        raise ValueError(f"number of trials must be non-negative, got {num_trials}")
    return num_trials


def _time_trials(num_trials: int, step: Callable[[], None]) -> float:
    tick = time.perf_counter()
    for _ in range(num_trials):
        step()
    return time.perf_counter() - tick


def _span(data: MutableSequence[Any]) -> MdSpan:
    return MdSpan(data, LayoutRightMapping(dextents(len(data))))


def benchmark_add_raw(num_trials: int, x: Sequence[Any], y: Sequence[Any],
                      z: MutableSequence[Any]) -> float:
    """Seconds taken to run ``add_raw(x, y, z)`` ``num_trials`` times."""
    num_trials = _check_trials(num_trials)
    _check_raw_lengths(x, y, z)
    return _time_trials(num_trials, lambda: add_raw(x, y, z))


def benchmark_add_span(num_trials: int, x: MutableSequence[Any],
                       y: MutableSequence[Any], z: MutableSequence[Any]) -> float:
    """Seconds taken to wrap the storage in views and add them ``num_trials`` times."""
    num_trials = _check_trials(num_trials)
    _check_raw_lengths(x, y, z)
    tick = time.perf_counter()
    x2, y2, z2 = _span(x), _span(y), _span(z)
    for _ in range(num_trials):
        add_span(x2, y2, z2)
    return time.perf_counter() - tick


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Time each addition variant and print the results."""
    parser = argparse.ArgumentParser(
        prog="main",
        description="Time element-wise addition through raw storage and views.",
    )
    parser.add_argument("n", type=int, help="number of elements per array")
    parser.add_argument("num_trials", type=int, help="number of repetitions")
    args = parser.parse_args(argv)
    n, num_trials = args.n, args.num_trials
    if n < 0:
        parser.error(f"n must be non-negative, got {n}")
    if num_trials < 0:
        parser.error(f"num_trials must be non-negative, got {num_trials}")

    x = [0.0] * n
    y = [0.0] * n
    z = [0.0] * n

    warmup_result = benchmark_add_raw(num_trials, x, y, z)
    restrict_mdspan_result = benchmark_add_span(num_trials, x, y, z)
    mdspan_result = benchmark_add_span(num_trials, x, y, z)
    raw_result = benchmark_add_raw(num_trials, x, y, z)
    restrict_raw_result = benchmark_add_raw(num_trials, x, y, z)
    unrestrict_raw_result = benchmark_add_raw(num_trials, x, y, z)

    print(f"num_trials: {num_trials}, n: {n}")
    print("Total time (unit: second):")
    print(f"  warmup: {warmup_result}")
    print(f"  restrict_mdspan: {restrict_mdspan_result}")
    print(f"  mdspan: {mdspan_result}")
    print(f"  raw_mdspan: {raw_result}")
    print(f"  restrict_raw: {restrict_raw_result}")
    print(f"  unrestrict_raw: {unrestrict_raw_result}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())