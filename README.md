# strideview

strideview gives multidimensional views over flat buffers. A view combines
three parts:

- **extents**: the shape. Each dimension is either fixed up front or given at
  run time.
- **a layout mapping**: the rule that turns a multi-index into a flat offset.
- **the data**: any flat, indexable sequence, such as a list or a numpy array.

## Installation

```
pip install strideview
```

The only runtime dependency is numpy. The test suite needs pytest
(`pip install strideview[test]`).

## Extents and layouts (`strideview.layouts`)

```python
from strideview.layouts import Extents, LayoutLeftMapping, LayoutRightMapping, dextents

ext = dextents(3, 4, 5)            # every dimension given at run time
left = LayoutLeftMapping(ext)      # column-major: the first index varies fastest
right = LayoutRightMapping(ext)    # row-major: the last index varies fastest

left(1, 2, 3)                      # 1 + 2*3 + 3*12 == 43
right(1, 2, 3)                     # 1*20 + 2*5 + 3 == 33
right.required_span_size()         # 60
left.stride(2)                     # 12
```

`Extents(static_extents, dynamic_values)` mixes fixed and run-time
dimensions. Each entry of `static_extents` is a non-negative integer or
`dynamic_extent` (which is `None`). `dynamic_values` either lists only the
run-time extents, in order, or lists every extent, in which case the fixed
ones must match. Anything else raises `ValueError`. An `Extents` offers
`rank()`, `rank_dynamic()`, `extent(r)`, `static_extent(r)` and
`converted(static_extents)`, which describes the same shape with another
fixed/run-time pattern. It iterates over its extent values, and two
`Extents` compare equal when their values are equal.

Both mappings report `is_unique()`, `is_exhaustive()` and `is_strided()` as
true. `from_mapping(other)` builds a mapping over the extents of another
mapping:

- a left mapping converts to a left mapping, and a right one to a right one,
  without restriction;
- a left mapping converts to a right one, or the other way round, only up to
  rank one, and otherwise raises `TypeError`;
- any other object that has `extents` and `stride(r)` converts only if its
  strides already match the target layout, and otherwise raises `ValueError`.

## Views (`strideview.span`)

```python
from strideview.layouts import LayoutRightMapping, dextents
from strideview.span import MdSpan, dot_product, fill_in_order

data = [0] * 9
a = MdSpan(data, LayoutRightMapping(dextents(3, 3)))
fill_in_order(a)
a[1, 2]          # 5
a[0, 1] = 42
a.size()         # 9
dot_product(a, a)
```

`MdSpan(data, mapping)` accepts any mapping that has `extents`,
`required_span_size()` and a call that takes one index per dimension. If you
pass a bare `Extents`, the view uses a row-major layout. The constructor
raises `ValueError` when `data` is shorter than the mapping needs.

An index may be a tuple, any other sequence, or a single integer for rank
one. Indexing checks each index against its extent and raises `IndexError`
when one is out of range. A wrong number of indices raises `TypeError`.
`indices()` yields every multi-index with the last index varying fastest.
The view reads and writes the buffer it was given and never copies the data.

`fill_in_order(a)` writes 0, 1, 2, … into a rank-2 view in that index order.
`dot_product(a, b)` sums the element-wise products of two rank-2 views of the
same shape. The two views may use different layouts.

## Tiled layout (`strideview.tiled`)

`SimpleTileLayout2D(extents, row_tile, col_tile)` maps a rank-2 shape onto
fixed-size tiles. The tiles are ordered column-major, and the elements inside
each tile row-major. Partial tiles at the edges are padded. Because of that
padding, `is_exhaustive()` is true only when the tile sizes divide the
extents exactly. `is_strided()` is always false. The helpers `n_row_tiles()`,
`n_column_tiles()`, `tile_size()`, `tile_offset(row, col)` and
`offset_in_tile(row, col)` expose the arithmetic. The layout can serve as the
mapping of an `MdSpan`.

## Aligned storage (`strideview.aligned`, `strideview.aligned_bench`)

- `AlignedArray(count, byte_alignment, dtype)` owns a numpy buffer whose first
  element starts at the given byte alignment. `data()` returns a writable view
  of the elements. The alignment must be a power of two. It must also be no
  less than the element's alignment and a multiple of its size. Otherwise the
  constructor raises `ValueError`.
- `unaligned_array(count, dtype)` returns an array aligned to its element size
  but deliberately not to twice that.
- `AlignedAccessor(byte_alignment, itemsize)` has `access(data, i)` and
  `offset(data, i)`. `access` raises `ValueError` when a numpy array's address
  is not aligned.
- `is_nonzero_power_of_two(x)` and `valid_byte_alignment(byte_alignment,
  element_alignment)` are the checks used above.

`strideview.aligned_bench` provides the following:

- `add_arrays(x, y, z)` stores `x[i] + y[i]` into `z`. It accepts numpy
  arrays, rank-1 views or lists.
- `set_elements_of_arrays(x, y, z)` fills the three arguments with 1, 2 and 0.
- `benchmark_add(num_trials, x, y, z)` returns the elapsed seconds.

## Addition through views (`strideview.restrict`)

- `RestrictAccessor` offers bounds-checked `access(data, i)` and
  `offset(data, i)`. Python has no aliasing qualifiers, so it behaves like
  plain element access.
- `add_raw(x, y, z)` adds flat sequences, and `add_span(x, y, z)` adds rank-1
  views.
- `benchmark_add_raw` and `benchmark_add_span` time the two functions above.

## Commands

```
strideview-span [dot|grid]                  # dot products of row- and column-major views (default), or print a 3x3 grid
strideview-tiled                            # check a tiled view against a row-major one; exit status 1 on mismatch
strideview-aligned-bench <n> <num_trials>   # time vector addition on aligned and unaligned buffers
strideview-restrict-bench <n> <num_trials>  # time vector addition on raw lists and on views
```

## What it does not do

- There is no general strided layout class. Strided mappings only come in
  through `from_mapping`, from objects you supply.
- There is no sub-view slicing.
- `MdSpan` does not take an accessor. The accessor classes stand on their own.
- The benchmarks measure Python and numpy overhead. They do not measure
  compiler vectorisation, so alignment and aliasing make little difference to
  the timings.