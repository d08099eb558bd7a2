"""A two-dimensional tiled layout: tiles column-major, elements row-major inside."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Optional, Sequence

from strideview.layouts import Extents, LayoutRightMapping, dextents
from strideview.span import MdSpan


def _ceil_div(a: int, b: int) -> int:
    return a // b + (a % b != 0)


@dataclass(frozen=True)
class SimpleTileLayout2D:
    """Mapping of a rank-2 index space onto fixed-size tiles.

    Tiles are ordered column-major; elements within a tile row-major.
    Partial tiles at the edges are padded, so storage may hold unused slots.
    """

    extents: Extents
    row_tile: int
    col_tile: int

    def __post_init__(self) -> None:
        if self.extents.rank() != 2:
            raise ValueError("SimpleTileLayout2D needs rank-2 extents")
        if self.row_tile <= 0 or self.col_tile <= 0:
            raise ValueError("tile sizes must be positive")
        if self.extents.extent(0) <= 0 or self.extents.extent(1) <= 0:
            raise ValueError("extents must be positive")

    def n_row_tiles(self) -> int:
        """Number of tiles along the rows."""
        return _ceil_div(self.extents.extent(0), self.row_tile)

    def n_column_tiles(self) -> int:
        """Number of tiles along the columns."""
        return _ceil_div(self.extents.extent(1), self.col_tile)

    def tile_size(self) -> int:
        """Number of storage slots per tile."""
        return self.row_tile * self.col_tile

    def tile_offset(self, row: int, col: int) -> int:
        """Storage offset of the tile holding ``(row, col)``."""
        col_tile = col // self.col_tile
        row_tile = row // self.row_tile
        return (col_tile * self.n_row_tiles() + row_tile) * self.tile_size()

    def offset_in_tile(self, row: int, col: int) -> int:
        """Offset of ``(row, col)`` within its tile."""
        return (row % self.row_tile) * self.col_tile + col % self.col_tile

    def required_span_size(self) -> int:
        return self.n_row_tiles() * self.n_column_tiles() * self.tile_size()

    def is_unique(self) -> bool:
        return True

    def is_exhaustive(self) -> bool:
        return (
            self.extents.extent(0) % self.row_tile == 0
            and self.extents.extent(1) % self.col_tile == 0
        )

    def is_strided(self) -> bool:
        return False

    def __call__(self, row: int, col: int) -> int:
        return self.tile_offset(row, col) + self.offset_in_tile(row, col)


_FILLER = -1
DATA_ROW_MAJOR = [1, 2, 3, 4, 5, 6, 7, 8, 9, 10]
DATA_TILED = [
    1, 2, 3, 6, 7, 8, _FILLER, _FILLER, _FILLER,
    4, 5, _FILLER, 9, 10, _FILLER, _FILLER, _FILLER, _FILLER,
]


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Check a hand-tiled 2x5 array against its row-major original."""
    argparse.ArgumentParser(description="Tiled layout check.").parse_args(argv)
    n_rows, n_cols = 2, 5
    tiled = MdSpan(list(DATA_TILED), SimpleTileLayout2D(dextents(n_rows, n_cols), 3, 3))
    row_major = MdSpan(list(DATA_ROW_MAJOR), LayoutRightMapping(dextents(n_rows, n_cols)))
    failures = 0
    for irow, icol in tiled.indices():
        if tiled[irow, icol] != row_major[irow, icol]:
            print(f"Mismatch for entry {irow}, {icol}:")
            print(f"  tiled({irow}, {icol}) = {tiled[irow, icol]}")
            print(f"  row_major({irow}, {icol}) = {row_major[irow, icol]}")
            failures += 1
    if failures == 0:
        print("Success! SimpleTiledLayout2D works as expected.")
        return 0
    return 1


if __name__ == "__main__":
    raise SystemExit(main())