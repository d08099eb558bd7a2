"""A multidimensional view over flat storage, addressed through a layout mapping."""

from __future__ import annotations

import argparse
import math
import operator
from itertools import count, product
from typing import Any, MutableSequence, Optional, Sequence

from strideview.layouts import (
    Extents,
    LayoutLeftMapping,
    LayoutRightMapping,
    dextents,
)


class MdSpan:
    """A non-owning multidimensional view of ``data`` laid out by ``mapping``.

    ``mapping`` is any object with an ``extents`` attribute and a call taking
    one index per dimension and returning a storage offset.  A bare
    ``Extents`` is accepted too and laid out row-major.
    """

    __slots__ = ("_data", "_mapping")

    def __init__(self, data: MutableSequence[Any], mapping: Any) -> None:
        if isinstance(mapping, Extents):
            mapping = LayoutRightMapping(mapping)
        needed = mapping.required_span_size()
        if len(data) < needed:
            raise ValueError(
                f"storage holds {len(data)} elements, the mapping needs {needed}"
            )
        self._data = data
        self._mapping = mapping

    @property
    def data(self) -> MutableSequence[Any]:
        """The underlying storage."""
        return self._data

    @property
    def mapping(self) -> Any:
        """The layout mapping."""
        return self._mapping

    @property
    def extents(self) -> Extents:
        """The index space of the view."""
        return self._mapping.extents

    def rank(self) -> int:
        """Number of dimensions."""
        return self.extents.rank()

    def rank_dynamic(self) -> int:
        """Number of dimensions whose extent is given at run time."""
        return self.extents.rank_dynamic()

    def extent(self, r: int) -> int:
        """Extent of dimension ``r``."""
        return self.extents.extent(r)

    def size(self) -> int:
        """Number of elements in the index space."""
        return math.prod(self.extents)

    def _offset(self, index: Any) -> int:
        if isinstance(index, tuple):
            indices = index
        elif isinstance(index, Sequence) and not isinstance(index, (str, bytes)):
            indices = tuple(index)
        else:
            indices = (index,)
        if len(indices) != self.rank():
            raise TypeError(f"expected {self.rank()} indices, got {len(indices)}")
        checked = []
        for r, i in enumerate(indices):
            i = operator.index(i)
            if not 0 <= i < self.extent(r):
                raise IndexError(
                    f"index {i} out of range for dimension {r} "
                    f"of extent {self.extent(r)}"
                )
            checked.append(i)
        return self._mapping(*checked)

    def __getitem__(self, index: Any) -> Any:
        return self._data[self._offset(index)]

    def __setitem__(self, index: Any, value: Any) -> None:
        self._data[self._offset(index)] = value

    def indices(self):
        """All multidimensional indices, rightmost varying fastest."""
        return product(*(range(e) for e in self.extents))

    def __repr__(self) -> str:
        return f"MdSpan(extents={self.extents!r}, mapping={type(self._mapping).__name__})"


def _require_rank_two(span: MdSpan) -> None:
    if span.rank() != 2:
        raise ValueError(f"expected a rank-2 view, got rank {span.rank()}")


def dot_product(a: MdSpan, b: MdSpan) -> Any:
    """Sum of element-wise products of two rank-2 views of equal shape."""
    _require_rank_two(a)
    _require_rank_two(b)
    if tuple(a.extents) != tuple(b.extents):
        raise ValueError(
            f"shapes differ: {tuple(a.extents)} and {tuple(b.extents)}"
        )
    return sum(a[idx] * b[idx] for idx in a.indices())


def fill_in_order(a: MdSpan) -> None:
    """Assign 0, 1, 2, ... to a rank-2 view in row-by-row index order."""
    _require_rank_two(a)
    for value, idx in zip(count(), a.indices()):
        a[idx] = value


_ROWS = 3
_COLS = 3


def _dot_example() -> None:
    a = MdSpan([0] * (_ROWS * _COLS), LayoutRightMapping(dextents(_ROWS, _COLS)))
    b = MdSpan([0] * (_ROWS * _COLS), LayoutLeftMapping(dextents(_ROWS, _COLS)))
    fill_in_order(a)
    fill_in_order(b)
    print(dot_product(a, b))

    static = Extents((_ROWS, _COLS))
    a = MdSpan([0] * 100, LayoutRightMapping(static))
    b = MdSpan([0] * 100, LayoutRightMapping(static))
    fill_in_order(a)
    fill_in_order(b)
    print(dot_product(a, b))


def _grid_example() -> None:
    d = [0, 5, 1, 3, 8, 4, 2, 7, 6]
    m = MdSpan(d, Extents((3, 3)))
    for i, j in m.indices():
        print(f"m({i}, {j}) == {m[i, j]}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the dot-product or the grid-printing example."""
    parser = argparse.ArgumentParser(description="Multidimensional view examples.")
    parser.add_argument(
        "example", nargs="?", choices=("dot", "grid"), default="dot",
        help="which example to run",
    )
    args = parser.parse_args(argv)
    if args.example == "dot":
        _dot_example()
    else:
        _grid_example()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())