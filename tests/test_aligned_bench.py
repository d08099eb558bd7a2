import numpy as np
import pytest

from strideview.aligned import AlignedArray, unaligned_array
from strideview.aligned_bench import (
    add_arrays,
    benchmark_add,
    main,
    set_elements_of_arrays,
)
from strideview.layouts import LayoutRightMapping, dextents
from strideview.span import MdSpan


def _span(values):
    return MdSpan(values, LayoutRightMapping(dextents(len(values))))


def test_set_elements_of_arrays_numpy():
    x = AlignedArray(6).data()
    y = AlignedArray(6).data()
    z = AlignedArray(6).data()
    x[:] = 9.0
    y[:] = 9.0
    z[:] = 9.0
    set_elements_of_arrays(x, y, z)
    assert x.tolist() == [1.0] * 6
    assert y.tolist() == [2.0] * 6
    assert z.tolist() == [0.0] * 6


def test_set_elements_of_arrays_lists():
    x, y, z = [5] * 4, [5] * 4, [5] * 4
    set_elements_of_arrays(x, y, z)
    assert x == [1.0] * 4
    assert y == [2.0] * 4
    assert z == [0.0] * 4


def test_add_arrays_numpy_matches_elementwise_sum():
    x, y, z = (unaligned_array(7) for _ in range(3))
    x[:] = np.arange(7)
    y[:] = np.arange(7) * 2
    z[:] = 0
    add_arrays(x, y, z)
    assert np.array_equal(z, x + y)


def test_add_arrays_lists():
    x, y, z = [1, 2, 3], [10, 20, 30], [0, 0, 0]
    add_arrays(x, y, z)
    assert all(c == a + b for a, b, c in zip(x, y, z))


def test_add_arrays_spans_write_through_to_storage():
    xs, ys, zs = [1.0, 2.0, 3.0], [4.0, 5.0, 6.0], [0.0, 0.0, 0.0]
    add_arrays(_span(xs), _span(ys), _span(zs))
    assert zs == [a + b for a, b in zip(xs, ys)]


def test_add_arrays_rejects_mismatched_lengths():
    with pytest.raises(ValueError):
        add_arrays([1, 2], [1, 2, 3], [0, 0])


def test_add_arrays_rejects_rank_two_view():
    view = MdSpan([0] * 4, LayoutRightMapping(dextents(2, 2)))
    with pytest.raises(ValueError):
        add_arrays(view, view, view)


def test_benchmark_add_runs_addition():
    x, y, z = (AlignedArray(5).data() for _ in range(3))
    set_elements_of_arrays(x, y, z)
    elapsed = benchmark_add(3, x, y, z)
    assert elapsed >= 0.0
    assert np.array_equal(z, x + y)


def test_benchmark_add_zero_trials_leaves_output():
    x, y, z = [1.0, 1.0], [2.0, 2.0], [0.0, 0.0]
    elapsed = benchmark_add(0, x, y, z)
    assert elapsed >= 0.0
    assert z == [0.0, 0.0]


def test_benchmark_add_rejects_negative_trials():
    with pytest.raises(ValueError):
        benchmark_add(-1, [1.0], [2.0], [0.0])


def test_main_prints_report(capsys):
    assert main(["4", "2"]) == 0
    out = capsys.readouterr().out
    assert "Number of trials: 2" in out
    assert "Number of loop iterations per trial: 4" in out
    assert "aligned mdspan:" in out
    assert "unaligned raw:" in out


def test_main_requires_two_arguments():
    with pytest.raises(SystemExit):
        main(["4"])


def test_main_rejects_non_integer():
    with pytest.raises(SystemExit):
        main(["four", "2"])


def test_main_rejects_negative_size():
    with pytest.raises(ValueError):
        main(["-3", "1"])