"""Grid ray casting: finding the first wall a ray meets."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .settings import SCREEN_WIDTH, TILE_SIZE

if TYPE_CHECKING:
    from .player import Player
    from .scenefile import Scene

TWO_PI = 2 * math.pi


@dataclass(frozen=True)
class RayHit:
    """Where one ray met a wall.

    ``angle`` is the ray's angle as cast (not normalized), ``distance`` the
    raw distance from the eye, ``horizontal`` tells whether the wall was met
    on a horizontal grid line, and ``x``/``y`` give the point of contact.
    """

    angle: float
    distance: float
    horizontal: bool
    x: float
    y: float


def normalize(angle: float) -> float:
    """Bring an angle that is at most one turn out of range back into [0, 2*pi]."""
    if angle < 0:
        return angle + TWO_PI
    if angle > TWO_PI:
        return angle - TWO_PI
    return angle


def _divide(numerator: float, denominator: float) -> float:
    """Divide with IEEE results for a zero denominator."""
    try:
        return numerator / denominator
    except ZeroDivisionError:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def check_orientation(
    angle: float, next_inter: float, delta: float, horizontal: bool
) -> tuple[float, float, int]:
    """Adjust the first intersection and step for the ray's direction.

    Returns ``(next_inter, delta, corrector)``: when the ray goes towards
    growing coordinates the first intersection moves one tile forward and the
    corrector is 1; otherwise the step is reversed and the corrector is -1.
    """
    if horizontal:
        forward = 0 < angle < math.pi
    else:
        forward = not (math.pi / 2 < angle < 3 * math.pi / 2)
    if forward:
        return next_inter + TILE_SIZE, delta, 1
    return next_inter, -delta, -1


def is_down_or_left(angle: float, horizontal: bool) -> bool:
    """For ``horizontal``, whether y grows along the ray; otherwise whether x shrinks."""
    if horizontal:
        return 0 < angle < math.pi
    return math.pi / 2 < angle < 3 * math.pi / 2


def _is_wall(x: float, y: float, grid: list[str], width: int, height: int) -> bool:
    if not (math.isfinite(x) and math.isfinite(y)):
        return True
    if x < 0 or y < 0:
        return True
    col = math.floor(x / TILE_SIZE)
    row = math.floor(y / TILE_SIZE)
    if col > width - 1 or row > height - 1:
        return True
    line = grid[row]
    return col < len(line) and line[col] == "1"


def is_wall(x: float, y: float, scene: Scene) -> bool:
    """True if the pixel position lies in a wall or outside the map."""
    return _is_wall(x, y, scene.grid, scene.width, scene.height)


def _distance(x0: float, y0: float, x1: float, y1: float) -> float:
    dx = x1 - x0
    dy = y1 - y0
    return math.sqrt(dx * dx + dy * dy)


def horizontal_intersection(
    scene: Scene, x: float, y: float, angle: float
) -> tuple[float, float, float]:
    """Follow a ray across horizontal grid lines until it meets a wall.

    ``angle`` must already be normalized.  Returns ``(hit_x, hit_y, distance)``.
    """
    grid, width, height = scene.grid, scene.width, scene.height
    tangent = math.tan(angle)
    x_delta = _divide(TILE_SIZE, tangent)
    y_start = float(math.floor(y / TILE_SIZE) * TILE_SIZE)
    y_next, y_delta, corrector = check_orientation(
        angle, y_start, float(TILE_SIZE), True
    )
    x_next = x + _divide(y_next - y, tangent)
    leftwards = is_down_or_left(angle, False)
    if (leftwards and x_delta > 0) or (not leftwards and x_delta < 0):
        x_delta = -x_delta
    while not _is_wall(x_next, y_next + corrector, grid, width, height):
        x_next += x_delta
        y_next += y_delta
    return x_next, y_next, _distance(x, y, x_next, y_next)


def vertical_intersection(
    scene: Scene, x: float, y: float, angle: float
) -> tuple[float, float, float]:
    """Follow a ray across vertical grid lines until it meets a wall.

    ``angle`` must already be normalized.  Returns ``(hit_x, hit_y, distance)``.
    """
    grid, width, height = scene.grid, scene.width, scene.height
    tangent = math.tan(angle)
    y_delta = TILE_SIZE * tangent
    x_start = float(math.floor(x / TILE_SIZE) * TILE_SIZE)
    x_next, x_delta, corrector = check_orientation(
        angle, x_start, float(TILE_SIZE), False
    )
    y_next = y + (x_next - x) * tangent
    downwards = is_down_or_left(angle, True)
    if (downwards and y_delta < 0) or (not downwards and y_delta > 0):
        y_delta = -y_delta
    while not _is_wall(x_next + corrector, y_next, grid, width, height):
        x_next += x_delta
        y_next += y_delta
    return x_next, y_next, _distance(x, y, x_next, y_next)


def cast_ray(scene: Scene, x: float, y: float, angle: float) -> RayHit:
    """Cast one ray from ``(x, y)`` and keep the nearer of the two intersections."""
    norm = normalize(angle)
    hx, hy, h_dist = horizontal_intersection(scene, x, y, norm)
    vx, vy, v_dist = vertical_intersection(scene, x, y, norm)
    if h_dist < v_dist:
        return RayHit(angle=angle, distance=h_dist, horizontal=True, x=hx, y=hy)
    return RayHit(angle=angle, distance=v_dist, horizontal=False, x=vx, y=vy)


def cast_rays(scene: Scene, player: Player, width: int = SCREEN_WIDTH) -> list[RayHit]:
    """Cast one ray per screen column, sweeping the player's field of view."""
    angle = player.angle - player.fov / 2
    step = player.fov / width
    hits = []
    for _ in range(width):
        hits.append(cast_ray(scene, player.x, player.y, angle))
        angle += step
    return hits