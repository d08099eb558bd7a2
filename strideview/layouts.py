"""Extents and the column-major (left) and row-major (right) layout mappings."""

from __future__ import annotations

import math
import operator
from dataclasses import dataclass, field
from itertools import accumulate
from typing import Iterable, Iterator, Optional, Sequence

#: Marker for an extent whose value is only known at run time.
dynamic_extent = None


def _as_extent(value: object) -> int:
    number = operator.index(value)
    if number < 0:
        raise ValueError(f"extent must be non-negative, got {number}")
    return number


class Extents:
    """A multidimensional index space with static and run-time extents.

    ``static_extents`` holds one entry per dimension: a non-negative integer
    for an extent fixed up front, or ``dynamic_extent`` for one supplied at
    construction.  ``dynamic_values`` either lists the dynamic extents only,
    in order, or lists every extent, in which case the static ones must match.
    """

    __slots__ = ("_static", "_values")

    def __init__(
        self,
        static_extents: Iterable[Optional[int]] = (),
        dynamic_values: Iterable[int] = (),
    ) -> None:
        static = tuple(
            None if s is dynamic_extent else _as_extent(s) for s in static_extents
        )
        given = tuple(_as_extent(v) for v in dynamic_values)
        n_dynamic = sum(s is None for s in static)

        if len(given) == n_dynamic:
            supplied = iter(given)
            values = tuple(next(supplied) if s is None else s for s in static)
        elif len(given) == len(static):
            for r, (s, v) in enumerate(zip(static, given)):
                if s is not None and s != v:
                    raise ValueError(
                        f"extent {r} is static with value {s}, got {v}"
                    )
            values = given
        else:
            raise ValueError(
                f"expected {n_dynamic} dynamic or {len(static)} total extents, "
                f"got {len(given)}"
            )
        self._static = static
        self._values = values

    def rank(self) -> int:
        """Number of dimensions."""
        return len(self._static)

    def rank_dynamic(self) -> int:
        """Number of dimensions whose extent is given at run time."""
        return sum(s is None for s in self._static)

    def extent(self, r: int) -> int:
        """Extent of dimension ``r``."""
        self._check_rank_index(r)
        return self._values[r]

    def static_extent(self, r: int) -> Optional[int]:
        """Static extent of dimension ``r``, or ``dynamic_extent``."""
        self._check_rank_index(r)
        return self._static[r]

    def converted(self, static_extents: Sequence[Optional[int]]) -> "Extents":
        """Return the same index space described by another static pattern."""
        pattern = tuple(static_extents)
        if len(pattern) != self.rank():
            raise ValueError(
                f"cannot convert extents of rank {self.rank()} to rank {len(pattern)}"
            )
        return Extents(pattern, self._values)

    def _check_rank_index(self, r: int) -> None:
        if not 0 <= r < len(self._static):
            raise IndexError(f"dimension {r} out of range for rank {self.rank()}")

    def __iter__(self) -> Iterator[int]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Extents):
            return NotImplemented
        return self._values == other._values

    def __hash__(self) -> int:
        return hash(self._values)

    def __repr__(self) -> str:
        pattern = ", ".join("dyn" if s is None else str(s) for s in self._static)
        return f"Extents([{pattern}], values={list(self._values)})"


def dextents(*args: int) -> Extents:
    """Extents whose every dimension is dynamic."""
    return Extents((dynamic_extent,) * len(args), args)


def _left_strides(extents: Extents) -> tuple:
    values = tuple(extents)
    if not values:
        return ()
    return tuple(accumulate(values[:-1], operator.mul, initial=1))


def _right_strides(extents: Extents) -> tuple:
    values = tuple(extents)
    if not values:
        return ()
    reversed_strides = accumulate(reversed(values[1:]), operator.mul, initial=1)
    return tuple(reversed(tuple(reversed_strides)))


def _check_extents(extents: object) -> None:
    if not isinstance(extents, Extents):
        raise TypeError("a layout mapping needs an Extents instance")


def _stride_at(strides: tuple, rank: int, r: int) -> int:
    if not 0 <= r < len(strides):
        raise IndexError(f"dimension {r} out of range for rank {rank}")
    return strides[r]


def _offset(strides: tuple, rank: int, args: tuple) -> int:
    if len(args) != rank:
        raise TypeError(f"expected {rank} indices, got {len(args)}")
    return sum(operator.index(i) * s for i, s in zip(args, strides))


def _convert(cls, other):
    if isinstance(other, cls):
        return cls(other.extents)
    if isinstance(other, (LayoutLeftMapping, LayoutRightMapping)):
        if other.extents.rank() > 1:
            raise TypeError(
                f"{type(other).__name__} of rank {other.extents.rank()} "
                f"cannot be converted to {cls.__name__}"
            )
        return cls(other.extents)
    result = cls(other.extents)
    for r in range(result.extents.rank()):
        if other.stride(r) != result.stride(r):
            raise ValueError(
                f"cannot convert a strided mapping to {cls.__name__}: "
                "invalid strides"
            )
    return result


@dataclass(frozen=True)
class LayoutLeftMapping:
    """Column-major mapping: the leftmost index varies fastest."""

    extents: Extents
    _strides: tuple = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        _check_extents(self.extents)
        object.__setattr__(self, "_strides", _left_strides(self.extents))

    @classmethod
    def from_mapping(cls, other):
        """Build a left layout over the extents of another mapping.

        A right layout converts only up to rank one; any other mapping
        exposing ``extents`` and ``stride`` must already have left strides.
        """
        return _convert(cls, other)

    def required_span_size(self) -> int:
        """Number of elements the underlying storage must hold."""
        return math.prod(self.extents)

    def stride(self, r: int) -> int:
        """Distance in the storage between neighbours along dimension ``r``."""
        return _stride_at(self._strides, self.extents.rank(), r)

    def is_unique(self) -> bool:
        return True

    def is_exhaustive(self) -> bool:
        return True

    def is_strided(self) -> bool:
        return True

    def __call__(self, *args: int) -> int:
        return _offset(self._strides, self.extents.rank(), args)


@dataclass(frozen=True)
class LayoutRightMapping:
    """Row-major mapping: the rightmost index varies fastest."""

    extents: Extents
    _strides: tuple = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        _check_extents(self.extents)
        object.__setattr__(self, "_strides", _right_strides(self.extents))

    @classmethod
    def from_mapping(cls, other):
        """Build a right layout over the extents of another mapping.

        A left layout converts only up to rank one; any other mapping
        exposing ``extents`` and ``stride`` must already have right strides.
        """
        return _convert(cls, other)

    def required_span_size(self) -> int:
        """Number of elements the underlying storage must hold."""
        return math.prod(self.extents)

    def stride(self, r: int) -> int:
        """Distance in the storage between neighbours along dimension ``r``."""
        return _stride_at(self._strides, self.extents.rank(), r)

    def is_unique(self) -> bool:
        return True

    def is_exhaustive(self) -> bool:
        return True

    def is_strided(self) -> bool:
        return True

    def __call__(self, *args: int) -> int:
        return _offset(self._strides, self.extents.rank(), args)