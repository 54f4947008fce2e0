import pytest

from TDS_pieMenu.angleAllocator import (
    LayoutError, allocate, angular_distance, back_link_of, compute_item_angles,
)
from TDS_pieMenu.menuNode import build_tree


def _assert_valid(angles, count):
    assert len(angles) == count
    for a in angles:
        assert 0.0 <= a < 360.0
    for i in range(count):
        for j in range(i + 1, count):
            assert angular_distance(angles[i], angles[j]) > 1e-6


def test_four_free_items_start_at_top():
    assert compute_item_angles([None] * 4) == pytest.approx([0, 90, 180, 270])


def test_empty_list():
    assert compute_item_angles([]) == []


def test_single_item_without_back_link():
    assert compute_item_angles([None]) == [0.0]


def test_two_anchors_split_wedges():
    angles = compute_item_angles([None, 10.0, None, 200.0, None])
    gap = 170.0 / 3
    assert angles[1] == 10.0
    assert angles[3] == 200.0
    assert angles[2] == pytest.approx(105.0)
    assert angles[4] == pytest.approx(200.0 + gap)
    assert angles[0] == pytest.approx(200.0 + 2 * gap)


@pytest.mark.parametrize("fixed", [
    [None, None, 45.0, None, None, None],
    [0.0, None, None, 180.0],
    [None, 90.0, None, 270.0, None],
    [30.0, 60.0, 90.0],
    [None, None, None, None, None, None, None, 359.0],
])
def test_fixed_angles_are_kept(fixed):
    angles = compute_item_angles(fixed)
    _assert_valid(angles, len(fixed))
    for given, got in zip(fixed, angles):
        if given is not None:
            assert got == given


@pytest.mark.parametrize("fixed", [
    [90.0, 45.0],
    [None, 100.0, None, 100.0],
    [10.0, None, 5.0, None],
    [None, 270.0, 90.0, None, None],
])
def test_not_increasing_fails(fixed):
    with pytest.raises(LayoutError):
        compute_item_angles(fixed)


@pytest.mark.parametrize("bad", [-1.0, 360.0, 720.5, float("nan"), float("inf")])
def test_out_of_range_fails(bad):
    with pytest.raises(LayoutError):
        compute_item_angles([None, bad, None])


@pytest.mark.parametrize("threshold", [0.0, 0.25, 0.5, 1.0])
def test_back_link_collision_fails(threshold):
    with pytest.raises(LayoutError):
        compute_item_angles([None, 180.0, None], back_link_angle=180.0, threshold=threshold)


def test_back_link_collision_inside_threshold():
    with pytest.raises(LayoutError):
        compute_item_angles([None, 180.5, None], back_link_angle=180.0, threshold=1.0)
    # wraps around 0
    with pytest.raises(LayoutError):
        compute_item_angles([359.7, None], back_link_angle=0.2, threshold=1.0)


def test_back_link_outside_threshold_ok():
    angles = compute_item_angles([None, 182.0, None], back_link_angle=180.0, threshold=1.0)
    assert angles[1] == 182.0
    _assert_valid(angles, 3)


def test_first_free_angle_faces_away_from_back_link():
    # one item: directly opposite the back-link
    assert compute_item_angles([None], back_link_angle=90.0) == pytest.approx([270.0])
    # three items with the parent at the bottom: the first one goes to the top
    angles = compute_item_angles([None, None, None], back_link_angle=180.0)
    assert angles == pytest.approx([0.0, 90.0, 270.0])


@pytest.mark.parametrize("back_link", [0.0, 45.0, 135.0, 180.0, 300.0])
@pytest.mark.parametrize("count", [1, 2, 3, 5, 8])
def test_back_link_keeps_a_free_slot(back_link, count):
    angles = compute_item_angles([None] * count, back_link_angle=back_link)
    _assert_valid(angles, count)
    slot = 360.0 / (count + 1)
    for a in angles:
        assert angular_distance(a, back_link) >= slot / 2 - 1e-6


def test_recomputing_fixed_layout_is_stable():
    first = compute_item_angles([None] * 6)
    assert compute_item_angles(first) == pytest.approx(first)

    first = compute_item_angles([10.0, None, None, 200.0, None])
    assert compute_item_angles(first) == pytest.approx(first)

    first = compute_item_angles([None, None, None], back_link_angle=180.0)
    assert compute_item_angles(first, back_link_angle=180.0) == pytest.approx(first)


def test_back_link_of():
    assert back_link_of(0.0) == 180.0
    assert back_link_of(270.0) == 90.0


def _tree(children):
    return build_tree({"name": "root", "children": children})


def test_allocate_recurses_with_back_link():
    root = _tree([
        {"name": "a", "children": [{"name": "a0"}]},
        {"name": "b"},
    ])
    allocate(root.children)
    a, b = root.children
    assert a.angle == 0.0
    assert b.angle == 180.0
    # only child of "a" points away from the back-link at 180
    assert a.children[0].angle == pytest.approx(0.0)


def test_allocate_is_all_or_nothing():
    root = _tree([
        {"name": "a", "children": [{"name": "a0"}, {"name": "a1"}]},
        {"name": "b", "children": [
            {"name": "b0", "angle": 200.0},
            {"name": "b1", "angle": 100.0},
        ]},
    ])
    with pytest.raises(LayoutError):
        allocate(root.children)
    for node in (root.children[0], root.children[0].children[0], root.children[0].children[1]):
        assert node.angle is None


def test_allocate_rejects_child_fixed_on_back_link():
    root = _tree([
        {"name": "a", "angle": 0.0, "children": [{"name": "a0", "angle": 180.0}]},
        {"name": "b"},
    ])
    with pytest.raises(LayoutError):
        allocate(root.children)
