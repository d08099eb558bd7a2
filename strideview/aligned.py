"""Over-aligned array storage and an accessor that relies on that alignment."""

from __future__ import annotations

import operator
from typing import Any

import numpy as np

#: Element type the aligned-storage examples work with.
DEFAULT_DTYPE = np.dtype(np.float32)

#: Smallest over-alignment, in elements, the examples ask for.
MIN_OVERALIGNMENT_FACTOR = 8

#: Byte alignment the examples ask for: eight single-precision floats.
MIN_BYTE_ALIGNMENT = MIN_OVERALIGNMENT_FACTOR * DEFAULT_DTYPE.itemsize


def is_nonzero_power_of_two(x: int) -> bool:
    """Whether ``x`` is a positive power of two."""
    x = operator.index(x)
    return x > 0 and (x & (x - 1)) == 0


def valid_byte_alignment(byte_alignment: int, element_alignment: int) -> bool:
    """Whether ``byte_alignment`` is a power of two no less than ``element_alignment``."""
    return is_nonzero_power_of_two(byte_alignment) and byte_alignment >= element_alignment


def _address(array: Any) -> int:
    return array.__array_interface__["data"][0]


def _check_alignment(byte_alignment: int, itemsize: int, element_alignment: int) -> int:
    byte_alignment = operator.index(byte_alignment)
    if not valid_byte_alignment(byte_alignment, element_alignment):
        raise ValueError(
            "byte_alignment must be a power of two no less than the minimum "
            f"required alignment of the element type ({element_alignment}), "
            f"got {byte_alignment}"
        )
    if byte_alignment < itemsize:
        raise ValueError(
            f"byte_alignment must be at least the element size ({itemsize}), "
            f"got {byte_alignment}"
        )
    if byte_alignment % itemsize != 0:
        raise ValueError(
            f"byte_alignment ({byte_alignment}) must be a multiple of the "
            f"element size ({itemsize})"
        )
    return byte_alignment


def _check_count(count: int) -> int:
    count = operator.index(count)
    if count < 0:
        raise ValueError(f"element count must be non-negative, got {count}")
    return count


class AlignedAccessor:
    """Element access into storage whose first element is ``byte_alignment``-aligned.

    Arrays exposing a memory address are checked on every access; storage
    without one is used as given.
    """

    __slots__ = ("byte_alignment", "itemsize")

    def __init__(self, byte_alignment: int = MIN_BYTE_ALIGNMENT,
                 itemsize: int = DEFAULT_DTYPE.itemsize) -> None:
        itemsize = operator.index(itemsize)
        if itemsize <= 0:
            raise ValueError(f"itemsize must be positive, got {itemsize}")
        self.byte_alignment = _check_alignment(byte_alignment, itemsize, itemsize)
        self.itemsize = itemsize

    def _require_aligned(self, data: Any) -> None:
        if hasattr(data, "__array_interface__"):
            address = _address(data)
            if address % self.byte_alignment != 0:
                raise ValueError(
                    f"storage at address {address:#x} is not aligned to "
                    f"{self.byte_alignment} bytes"
                )

    def access(self, data: Any, i: int) -> Any:
        """Element ``i`` of the aligned storage ``data``."""
        self._require_aligned(data)
        return data[operator.index(i)]

    def offset(self, data: Any, i: int) -> Any:
        """Storage starting at element ``i``; no alignment is promised for it."""
        return data[operator.index(i):]

    def __repr__(self) -> str:
        return (f"AlignedAccessor(byte_alignment={self.byte_alignment}, "
                f"itemsize={self.itemsize})")


class AlignedArray:
    """An owned one-dimensional array whose first element is over-aligned."""

    __slots__ = ("_buffer", "_view", "byte_alignment")

    def __init__(self, count: int, byte_alignment: int = MIN_BYTE_ALIGNMENT,
                 dtype: Any = DEFAULT_DTYPE) -> None:
        dt = np.dtype(dtype)
        count = _check_count(count)
        self.byte_alignment = _check_alignment(byte_alignment, dt.itemsize, dt.alignment)
        nbytes = count * dt.itemsize
        self._buffer = np.empty(nbytes + self.byte_alignment, dtype=np.uint8)
        start = (-_address(self._buffer)) % self.byte_alignment
        self._view = self._buffer[start:start + nbytes].view(dt)

    def data(self) -> np.ndarray:
        """The aligned elements, as a writable array view."""
        return self._view

    def __len__(self) -> int:
        return len(self._view)

    def __repr__(self) -> str:
        return (f"AlignedArray(count={len(self._view)}, "
                f"byte_alignment={self.byte_alignment}, dtype={self._view.dtype})")


def unaligned_array(count: int, dtype: Any = DEFAULT_DTYPE) -> np.ndarray:
    """An array aligned to its element size but deliberately not to twice that.

    Keeps the allocator's own over-alignment from flattering comparisons
    with over-aligned storage.
    """
    dt = np.dtype(dtype)
    count = _check_count(count)
    itemsize = dt.itemsize
    buffer = np.empty((count + 2) * itemsize, dtype=np.uint8)
    base = _address(buffer)
    start = (-base) % itemsize
    if (base + start) % (2 * itemsize) == 0:
        start += itemsize
    return buffer[start:start + count * itemsize].view(dt)