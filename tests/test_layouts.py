import pytest

from strideview.layouts import (
    Extents,
    LayoutLeftMapping,
    LayoutRightMapping,
    dextents,
    dynamic_extent,
)

dyn = dynamic_extent


class _StridedMapping:
    """Minimal strided mapping used as a conversion source and target."""

    def __init__(self, extents, strides):
        self.extents = extents
        self._strides = tuple(strides)

    @classmethod
    def from_mapping(cls, other):
        return cls(other.extents, [other.stride(r) for r in range(other.extents.rank())])

    def stride(self, r):
        return self._strides[r]


# ---------------------------------------------------------------------------
# 3D mapping cases

_PATTERNS_3D = [
    ((3, 4, 5), ()),
    ((5, 4, 3), ()),
    ((3, 4, dyn), (5,)),
    ((5, 4, dyn), (3,)),
    ((3, dyn, 5), (4,)),
    ((5, dyn, 3), (4,)),
    ((dyn, 4, 5), (3,)),
    ((dyn, 4, 3), (5,)),
    ((dyn, dyn, 5), (3, 4)),
    ((dyn, dyn, 3), (5, 4)),
    ((dyn, 4, dyn), (3, 5)),
    ((dyn, 4, dyn), (5, 3)),
    ((3, dyn, dyn), (4, 5)),
    ((5, dyn, dyn), (4, 3)),
    ((dyn, dyn, dyn), (3, 4, 5)),
    ((dyn, dyn, dyn), (5, 4, 3)),
]

_CASES_3D = [
    (layout, static, dynamic)
    for layout in (LayoutLeftMapping, LayoutRightMapping)
    for static, dynamic in _PATTERNS_3D
]


def _expected(mapping, i, j, k):
    e = mapping.extents
    if isinstance(mapping, LayoutLeftMapping):
        return i + j * e.extent(0) + k * e.extent(0) * e.extent(1)
    return k + j * e.extent(2) + i * e.extent(1) * e.extent(2)


@pytest.mark.parametrize("layout,static,dynamic", _CASES_3D)
def test_mapping_works(layout, static, dynamic):
    mapping = layout(Extents(static, dynamic))
    e = mapping.extents
    for i in range(e.extent(0)):
        for j in range(e.extent(1)):
            for k in range(e.extent(2)):
                assert mapping(i, j, k) == _expected(mapping, i, j, k)


@pytest.mark.parametrize("layout,static,dynamic", _CASES_3D)
def test_required_span_size_works(layout, static, dynamic):
    assert layout(Extents(static, dynamic)).required_span_size() == 3 * 4 * 5


@pytest.mark.parametrize("layout,static,dynamic", _CASES_3D)
def test_mapping_is_a_bijection_onto_span(layout, static, dynamic):
    mapping = layout(Extents(static, dynamic))
    e = mapping.extents
    offsets = {
        mapping(i, j, k)
        for i in range(e.extent(0))
        for j in range(e.extent(1))
        for k in range(e.extent(2))
    }
    assert offsets == set(range(mapping.required_span_size()))


# ---------------------------------------------------------------------------
# Conversion cases

_SAME_LAYOUT_CASES = [
    ((dyn,), (5,), (5,)),
    ((), (), ()),
    ((5,), (dyn,), (5,)),
    ((dyn, dyn), (5, 10), (5, 10)),
    ((dyn, dyn), (5, dyn), (5, 0)),
    ((dyn, 10), (5, 10), (5, 10)),
    ((5, dyn), (5, 10), (5, 10)),
    ((5, dyn), (5, dyn), (5, 10)),
    ((dyn, 10, 15, dyn, 25), (5, 10, dyn, 20, dyn), (5, 10, 15, 20, 25)),
    ((5, 10, 15, 20, 25), (5, 10, dyn, 20, dyn), (5, 10, 15, 20, 25)),
    ((dyn, dyn, dyn, dyn, dyn), (5, 10, dyn, 20, dyn), (5, 10, 15, 20, 25)),
    ((5, 10, 15, 20, 25), (5, 10, 15, 20, 25), (5, 10, 15, 20, 25)),
]


def _assert_same_geometry(map1, map2, pattern1, sizes):
    assert map1.extents == Extents(pattern1, sizes)
    for r in range(len(sizes)):
        assert map1.extents.extent(r) == map2.extents.extent(r)
        assert map1.stride(r) == map2.stride(r)


@pytest.mark.parametrize("layout", [LayoutLeftMapping, LayoutRightMapping])
@pytest.mark.parametrize("pattern1,pattern2,sizes", _SAME_LAYOUT_CASES)
def test_same_layout_conversion(layout, pattern1, pattern2, sizes):
    map2 = layout(Extents(pattern2, sizes))
    map1 = layout.from_mapping(map2)
    map1 = layout(map1.extents.converted(pattern1))
    _assert_same_geometry(map1, map2, pattern1, sizes)


@pytest.mark.parametrize("source", [LayoutLeftMapping, LayoutRightMapping])
@pytest.mark.parametrize("pattern1,pattern2,sizes", _SAME_LAYOUT_CASES)
def test_to_strided_conversion(source, pattern1, pattern2, sizes):
    map2 = source(Extents(pattern2, sizes))
    map1 = _StridedMapping.from_mapping(map2)
    map1.extents = map1.extents.converted(pattern1)
    _assert_same_geometry(map1, map2, pattern1, sizes)


@pytest.mark.parametrize("target", [LayoutLeftMapping, LayoutRightMapping])
@pytest.mark.parametrize("pattern1,pattern2,sizes", _SAME_LAYOUT_CASES)
def test_from_strided_conversion(target, pattern1, pattern2, sizes):
    map2 = _StridedMapping.from_mapping(target(Extents(pattern2, sizes)))
    map1 = target.from_mapping(map2)
    map1 = target(map1.extents.converted(pattern1))
    _assert_same_geometry(map1, map2, pattern1, sizes)


@pytest.mark.parametrize(
    "target,source,pattern1,pattern2,sizes",
    [
        (LayoutRightMapping, LayoutLeftMapping, (dyn,), (5,), (5,)),
        (LayoutRightMapping, LayoutLeftMapping, (5,), (dyn,), (5,)),
        (LayoutLeftMapping, LayoutRightMapping, (dyn,), (5,), (5,)),
        (LayoutLeftMapping, LayoutRightMapping, (5,), (dyn,), (5,)),
        (LayoutRightMapping, LayoutLeftMapping, (), (), ()),
        (LayoutLeftMapping, LayoutRightMapping, (), (), ()),
    ],
)
def test_left_right_conversion(target, source, pattern1, pattern2, sizes):
    map2 = source(Extents(pattern2, sizes))
    map1 = target.from_mapping(map2)
    assert isinstance(map1, target)
    _assert_same_geometry(map1, map2, pattern1, sizes)


@pytest.mark.parametrize(
    "target,source",
    [(LayoutLeftMapping, LayoutRightMapping), (LayoutRightMapping, LayoutLeftMapping)],
)
def test_left_right_conversion_rejected_above_rank_one(target, source):
    with pytest.raises(TypeError):
        target.from_mapping(source(dextents(5, 10)))


def test_strided_to_left_with_invalid_strides_raises():
    strided = _StridedMapping(dextents(5, 10), (10, 1))
    with pytest.raises(ValueError):
        LayoutLeftMapping.from_mapping(strided)


def test_strided_to_right_with_invalid_strides_raises():
    strided = _StridedMapping(dextents(5, 10), (1, 5))
    with pytest.raises(ValueError):
        LayoutRightMapping.from_mapping(strided)


# ---------------------------------------------------------------------------
# Extents and mapping details


def test_extents_rank_and_static_pattern():
    e = Extents((3, dyn, 5), (4,))
    assert e.rank() == 3
    assert e.rank_dynamic() == 1
    assert [e.extent(r) for r in range(3)] == [3, 4, 5]
    assert [e.static_extent(r) for r in range(3)] == [3, None, 5]


def test_extents_accept_all_values():
    assert Extents((3, dyn), (3, 7)) == Extents((3, dyn), (7,))


def test_extents_reject_static_mismatch():
    with pytest.raises(ValueError):
        Extents((3, dyn), (4, 7))


def test_extents_reject_wrong_count():
    with pytest.raises(ValueError):
        Extents((dyn, dyn, dyn), (1, 2))


def test_extents_reject_negative():
    with pytest.raises(ValueError):
        dextents(-1)


def test_extent_out_of_range():
    with pytest.raises(IndexError):
        dextents(2, 3).extent(2)


def test_converted_rank_mismatch():
    with pytest.raises(ValueError):
        dextents(2, 3).converted((2,))


def test_converted_static_mismatch():
    with pytest.raises(ValueError):
        dextents(2, 3).converted((2, 4))


def test_dextents_all_dynamic():
    e = dextents(2, 3, 4)
    assert e.rank_dynamic() == 3
    assert list(e) == [2, 3, 4]


def test_left_strides():
    m = LayoutLeftMapping(Extents((3, 4, 5)))
    assert [m.stride(r) for r in range(3)] == [1, 3, 12]


def test_right_strides():
    m = LayoutRightMapping(Extents((3, 4, 5)))
    assert [m.stride(r) for r in range(3)] == [20, 5, 1]


def test_rank_zero_mapping():
    m = LayoutLeftMapping(Extents())
    assert m() == 0
    assert m.required_span_size() == 1


def test_wrong_index_count_raises():
    with pytest.raises(TypeError):
        LayoutRightMapping(dextents(2, 3))(1)


def test_stride_out_of_range_raises():
    with pytest.raises(IndexError):
        LayoutLeftMapping(dextents(2, 3)).stride(2)


def test_mapping_properties():
    m = LayoutRightMapping(dextents(2, 3))
    assert (m.is_unique(), m.is_exhaustive(), m.is_strided()) == (True, True, True)


def test_mapping_equality_ignores_static_pattern():
    assert LayoutLeftMapping(Extents((5, 10))) == LayoutLeftMapping(dextents(5, 10))
    assert LayoutLeftMapping(dextents(5, 10)) != LayoutLeftMapping(dextents(5, 11))


def test_mapping_requires_extents():
    with pytest.raises(TypeError):
        LayoutLeftMapping((2, 3))