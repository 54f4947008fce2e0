"""Direction assignment for the items of a pie menu level.

Angles are in degrees, 0 is at the top, 90 on the right, 180 at the bottom.
Items carrying a fixed angle keep it, all other items are spread evenly in the
wedges between consecutive fixed angles. If the level has a back-link to its
parent, the back-link direction gets a slot of its own so no item overlaps it.
"""
import logging
import math

from .menuNode import PieMenuError

logger = logging.getLogger(__name__)

DEFAULT_COLLISION_THRESHOLD = 1.0


class LayoutError(PieMenuError):
    pass


def angular_distance(a: float, b: float) -> float:
    d = abs(a - b) % 360.0
    return min(d, 360.0 - d)


def back_link_of(angle: float) -> float:
    return (angle + 180.0) % 360.0


def _validate(fixed, back_link_angle, threshold):
    for i, (index, angle) in enumerate(fixed):
        if not math.isfinite(angle) or not 0.0 <= angle < 360.0:
            raise LayoutError(f"fixed angle {angle} of item {index} is outside [0, 360)")
        if i > 0 and angle <= fixed[i - 1][1]:
            raise LayoutError(
                f"fixed angles must increase: item {index} has {angle} after {fixed[i - 1][1]}")

    if back_link_angle is None:
        return
    for index, angle in fixed:
        dist = angular_distance(angle, back_link_angle)
        if dist == 0.0 or dist < threshold:
            raise LayoutError(
                f"fixed angle {angle} of item {index} collides with the parent link at {back_link_angle}")


def _first_angle(count, back_link_angle):
    # no back-link: first item goes to the top
    if back_link_angle is None:
        return 0.0

    # one slot per item plus one for the back-link, take the one facing away from it
    step = 360.0 / (count + 1)
    best, best_dist = 0.0, -1.0
    for i in range(count):
        candidate = (back_link_angle + (i + 1) * step) % 360.0
        dist = angular_distance(candidate, back_link_angle)
        if dist > best_dist:
            best, best_dist = candidate, dist
    return best


def compute_item_angles(fixed_angles, back_link_angle=None, threshold=DEFAULT_COLLISION_THRESHOLD):
    """Compute one angle per entry of ``fixed_angles``.

    ``fixed_angles`` has one entry per sibling: the fixed angle or None.
    Returns a new list of floats. Raises LayoutError when the fixed angles are
    out of range, not strictly increasing or too close to the back-link.
    """
    count = len(fixed_angles)
    if count == 0:
        return []

    fixed = [(i, float(a)) for i, a in enumerate(fixed_angles) if a is not None]
    _validate(fixed, back_link_angle, threshold)

    angles = [None] * count
    if not fixed:
        fixed = [(0, _first_angle(count, back_link_angle))]

    for i, (begin_index, begin_angle) in enumerate(fixed):
        end_index, end_angle = fixed[(i + 1) % len(fixed)]
        angles[begin_index] = begin_angle

        if end_angle <= begin_angle:
            end_angle += 360.0

        item_count = (end_index - begin_index - 1 + count) % count

        parent_in_wedge = False
        parent = None
        if back_link_angle is not None:
            parent = back_link_angle
            if parent < begin_angle:
                parent += 360.0
            parent_in_wedge = begin_angle < parent < end_angle
            if parent_in_wedge:
                item_count += 1

        gap = (end_angle - begin_angle) / (item_count + 1)

        index = (begin_index + 1) % count
        step = 1
        gap_required = parent_in_wedge
        while index != end_index:
            item_angle = begin_angle + gap * step

            # skip one slot so the back-link keeps the one nearest to it
            if gap_required and item_angle + gap / 2 - parent > 0:
                step += 1
                item_angle = begin_angle + gap * step
                gap_required = False

            angles[index] = item_angle % 360.0
            index = (index + 1) % count
            step += 1

    return angles


def _collect(siblings, back_link_angle, threshold, out):
    angles = compute_item_angles([s.fixed_angle for s in siblings], back_link_angle, threshold)
    for node, angle in zip(siblings, angles):
        out[id(node)] = (node, angle)
    for node, angle in zip(siblings, angles):
        if node.children:
            _collect(node.children, back_link_of(angle), threshold, out)


def allocate(siblings, back_link_angle=None, threshold=DEFAULT_COLLISION_THRESHOLD):
    """Assign ``angle`` on every node of ``siblings`` and, recursively, on their children.

    Nothing is written unless the whole tree could be laid out.
    """
    scratch = {}
    try:
        _collect(siblings, back_link_angle, threshold, scratch)
    except LayoutError as e:
        logger.warning("[PieMenu] Invalid angles: %s", e)
        raise

    for node, angle in scratch.values():
        node.angle = angle
    return [s.angle for s in siblings]
