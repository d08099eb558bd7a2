"""Multidimensional views over flat buffers: extents, left/right and tiled layouts, aligned storage and addition benchmarks."""

__version__ = "0.1.0"

__all__ = ["layouts", "span", "tiled", "aligned", "aligned_bench", "restrict"]