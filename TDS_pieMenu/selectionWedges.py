import logging
import math

from .angleAllocator import angular_distance

logger = logging.getLogger(__name__)

CENTER_HIT = -1
PARENT_HIT = -2


def pointer_angle(center, pos) -> float:
    """Direction from center to pos, 0 at the top and growing clockwise (screen y down)."""
    dx = pos[0] - center[0]
    dy = pos[1] - center[1]
    return (math.degrees(math.atan2(dx, -dy)) + 360) % 360


def pointer_distance(center, pos) -> float:
    return math.hypot(pos[0] - center[0], pos[1] - center[1])


class SelectionWedges(object):
    """Turns pointer positions around the active center into item indices.

    Each item owns the directions that are closer to it than to any other
    item or to the back-link.
    """

    def __init__(self, inner_radius=50.0):
        self.inner_radius = inner_radius
        self.item_angles = []
        self.parent_angle = None
        self.hovered = CENTER_HIT

    def set_item_angles(self, angles, parent_angle=None):
        self.item_angles = list(angles)
        self.parent_angle = parent_angle
        self.hovered = CENTER_HIT

    def hit(self, center, pos):
        if pointer_distance(center, pos) <= self.inner_radius:
            return CENTER_HIT
        if not self.item_angles and self.parent_angle is None:
            return CENTER_HIT

        angle = pointer_angle(center, pos)
        best, best_dist = CENTER_HIT, 361.0
        for index, item_angle in enumerate(self.item_angles):
            dist = angular_distance(angle, item_angle)
            if dist < best_dist:
                best, best_dist = index, dist
        if self.parent_angle is not None and angular_distance(angle, self.parent_angle) < best_dist:
            best = PARENT_HIT
        return best

    def on_motion(self, center, pos):
        """Returns the new hit if it changed since the last call, else None."""
        current = self.hit(center, pos)
        if current == self.hovered:
            return None
        self.hovered = current
        logger.debug("hovered wedge -> %s", current)
        return current

    def on_release(self, center, pos):
        """Returns the hit to select, or None for a release in the center."""
        current = self.hit(center, pos)
        self.hovered = current
        if current == CENTER_HIT:
            return None
        return current
