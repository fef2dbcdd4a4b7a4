import math
import numpy as np
from pygame.math import Vector2 as v2
from typing import List, Optional, Tuple

from particles.star import Star


class InvalidConfigError(ValueError):
    pass


def _positive(name, value):
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value) or value <= 0:
        raise InvalidConfigError(f"{name} must be a positive number, got {value!r}")
    return value


def _color(color):
    if not isinstance(color, (list, tuple)) or len(color) not in (3, 4):
        raise InvalidConfigError(f"color must be an RGB(A) tuple, got {color!r}")
    for c in color:
        if isinstance(c, bool) or not isinstance(c, (int, float)) or not 0 <= c <= 255:
            raise InvalidConfigError(f"color values must be numbers in 0-255, got {color!r}")
    return tuple(int(c) for c in color)


class StarField:
    """
    Spawns, moves and culls the stars of the warp effect.

    Every update runs three phases in a fixed order: stale stars are removed,
    new stars are spawned and then every star, the fresh ones included, is
    advanced once. Draw turns the current state into screen space line
    segments without touching it.

    Args:
        starsPerSecond: How many stars to spawn per second of simulation
        distancePerSecond: How fast the stars recede, in world units
        framerate: Simulation steps per second
        minDistance, maxDistance: Spawn depth range, 0 < min < max
        width, height: Viewport used by draw when no size is given
        color: Colour of every segment
        seed: Seed for the field's own random generator, None for entropy
        accumulateSpawns: Carry the fractional spawn remainder between frames
    """

    def __init__(self, starsPerSecond, distancePerSecond, framerate, minDistance, maxDistance,
                 width, height, color=(255, 255, 255), seed: Optional[int] = None,
                 accumulateSpawns: bool = False):

        self._starsPerSecond = _positive("starsPerSecond", starsPerSecond)
        self._distancePerSecond = _positive("distancePerSecond", distancePerSecond)

        if isinstance(framerate, bool) or not isinstance(framerate, int) or framerate <= 0:
            raise InvalidConfigError(f"framerate must be a positive integer, got {framerate!r}")
        self._framerate = framerate

        self._minDistance = _positive("minDistance", minDistance)
        self._maxDistance = _positive("maxDistance", maxDistance)
        if self._minDistance >= self._maxDistance:
            raise InvalidConfigError(
                f"minDistance must be smaller than maxDistance, got {minDistance!r} >= {maxDistance!r}")

        self._width = _positive("width", width)
        self._height = _positive("height", height)

        self._color = _color(color)

        if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int) or seed < 0):
            raise InvalidConfigError(f"seed must be None or a non-negative integer, got {seed!r}")
        self._seed = seed

        if not isinstance(accumulateSpawns, bool):
            raise InvalidConfigError(f"accumulateSpawns must be true or false, got {accumulateSpawns!r}")
        self._accumulateSpawns = accumulateSpawns

        self.rng = np.random.default_rng(seed)
        self._spawnRemainder = 0.0

        self.stars: List[Star] = []
        self.frame = 0
        self.spawned_total = 0
        self.despawned_total = 0

    @property
    def starsPerSecond(self):
        return self._starsPerSecond

    @property
    def distancePerSecond(self):
        return self._distancePerSecond

    @property
    def framerate(self):
        return self._framerate

    @property
    def minDistance(self):
        return self._minDistance

    @property
    def maxDistance(self):
        return self._maxDistance

    @property
    def res(self):
        return v2(self._width, self._height)

    @property
    def color(self):
        return self._color

    @property
    def seed(self):
        return self._seed

    @property
    def accumulateSpawns(self):
        return self._accumulateSpawns

    @property
    def starsPerFrame(self) -> float:
        return self._starsPerSecond / self._framerate

    @property
    def distancePerFrame(self) -> float:
        return self._distancePerSecond / self._framerate

    def __len__(self):
        return len(self.stars)

    def __iter__(self):
        return iter(self.stars)

    def update(self):
        self.despawn_stars()
        self.spawn_new_stars()
        self.move_stars()
        self.frame += 1

    def despawn_stars(self) -> int:
        """Swap-remove expired stars walking backwards, order is not kept."""
        removed = 0
        for i in range(len(self.stars) - 1, -1, -1):
            if self.stars[i].expired():
                self.stars[i] = self.stars[-1]
                self.stars.pop()
                removed += 1

        self.despawned_total += removed
        return removed

    def spawn_new_stars(self) -> int:
        perFrame = self.starsPerFrame

        if self._accumulateSpawns:
            self._spawnRemainder += perFrame
            count = int(self._spawnRemainder)
            self._spawnRemainder -= count
        elif perFrame >= 1:
            # remainder is dropped, 1.5 per frame spawns one
            count = int(perFrame)
        else:
            count = 1 if self.rng.random() < perFrame else 0

        for _ in range(count):
            self.spawn_star()
        return count

    def spawn_star(self) -> Star:
        coord = (self.rng.random() - 0.5, self.rng.random() - 0.5)
        distance = self.rng.random() * (self._maxDistance - self._minDistance) + self._minDistance

        star = Star(coord, distance)
        self.stars.append(star)
        self.spawned_total += 1
        return star

    def move_stars(self):
        distance = self.distancePerFrame
        for star in self.stars:
            star.advance(distance)

    def draw(self, res=None) -> List[Tuple[v2, v2, tuple]]:
        if res is None:
            width, height = self._width, self._height
        else:
            width = _positive("width", res[0])
            height = _positive("height", res[1])

        return [star.emit_segment(width, height, self._color) for star in self.stars]

    def __repr__(self):
        return f"StarField(stars={len(self.stars)}, frame={self.frame}, perFrame={self.starsPerFrame:.3f})"
