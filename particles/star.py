import math
from pygame.math import Vector2 as v2
from typing import Tuple

DEPTH_FLOOR = 0.0001
CONTAINMENT_RADIUS = math.sqrt(2)


def world_to_screen(coord: v2, width: float, height: float) -> v2:
    """Project a world coordinate to pixels.

    Width scales both axes so the unit square keeps its aspect, then the
    result is moved to the middle of the viewport.
    """
    return v2(coord) * width + v2(width / 2, height / 2)


class Star:
    """
    A single star of the warp field.

    The star keeps last frame's depth and position next to the current ones,
    the pair is what gets drawn as a streak.
    """

    def __init__(self, coord=(0, 0), distance: float = 0.0):
        self.previous_depth = 0.0
        self.previous_position = v2(0, 0)
        self.current_depth = float(distance)
        self.current_position = v2(coord)

    def advance(self, distance: float):
        """Move the star closer to the viewer by distance."""
        self.previous_depth = self.current_depth
        self.previous_position = v2(self.current_position)

        self.current_depth = max(DEPTH_FLOOR, self.previous_depth - distance)

        # shrinking depth pushes the star outwards, faster the closer it gets
        scale = self.previous_depth / self.current_depth
        self.current_position = self.previous_position * scale

    def expired(self) -> bool:
        return (self.current_position.length() > CONTAINMENT_RADIUS
                or self.current_depth <= DEPTH_FLOOR)

    def emit_segment(self, width: float, height: float, color=(255, 255, 255)) -> Tuple[v2, v2, tuple]:
        start = world_to_screen(self.previous_position, width, height)
        end = world_to_screen(self.current_position, width, height)

        diff = end - start
        # zero length on frames where the star did not move, nothing to normalize
        if diff.length_squared() > 0:
            end += diff / diff.length()

        return start, end, tuple(color)

    def __repr__(self):
        return f"Star(depth={self.current_depth:.4f}, pos=({self.current_position.x:.4f}, {self.current_position.y:.4f}))"
