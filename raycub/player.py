"""The player: where it stands, where it looks and how keys move it."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum

from .raycast import normalize
from .scenefile import PLAYER_CHARS, MapError
from .settings import FOV, PLAYER_SPEED, ROTATION_SPEED, TILE_SIZE


class Key(IntEnum):
    """Key codes the game reacts to (X11 keysyms)."""

    A = 0x61
    D = 0x64
    S = 0x73
    W = 0x77
    LEFT = 0xFF51
    RIGHT = 0xFF53
    ESCAPE = 0xFF1B


_HEADINGS = {
    "N": (0, 1, math.pi / 2),
    "E": (1, 0, 0.0),
    "S": (0, -1, 3 * math.pi / 2),
    "W": (-1, 0, math.pi),
}


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def _blocked(grid: list[str], row: int, col: int) -> bool:
    """True for wall cells; cells outside the grid count as walls."""
    if 0 <= row < len(grid) and 0 <= col < len(grid[row]):
        return grid[row][col] == "1"
    return True


@dataclass
class Player:
    """Player state: grid cell, facing, pixel position and held keys.

    ``strafe`` is 1 for right and -1 for left, ``walk`` 1 for forward and
    -1 for back, ``rot_dir`` 1 for turning right and -1 for left.
    """

    pos_x: int = 0
    pos_y: int = 0
    dir_x: int = 0
    dir_y: int = 0
    x: float = 0.0
    y: float = 0.0
    angle: float = 0.0
    fov: float = FOV * math.pi / 180
    rot_dir: int = 0
    strafe: int = 0
    walk: int = 0

    def rotate(self) -> None:
        """Turn by one rotation step in the held direction."""
        if self.rot_dir == 1:
            self.angle = normalize(self.angle + ROTATION_SPEED)
        else:
            self.angle = normalize(self.angle - ROTATION_SPEED)

    def _move(self, grid: list[str], move_x: float, move_y: float) -> None:
        new_x = _round_half_away(self.x + move_x)
        new_y = _round_half_away(self.y + move_y)
        col = int(new_x / TILE_SIZE)
        row = int(new_y / TILE_SIZE)
        cur_col = math.floor(self.x / TILE_SIZE)
        cur_row = math.floor(self.y / TILE_SIZE)
        if not (
            _blocked(grid, row, col)
            or _blocked(grid, row, cur_col)
            or _blocked(grid, cur_row, col)
        ):
            self.x = new_x
            self.y = new_y

    def step(self, grid: list[str]) -> None:
        """Apply one frame of turning and movement; walls stop the move."""
        if self.rot_dir:
            self.rotate()
        move_x = 0.0
        move_y = 0.0
        sin_a = math.sin(self.angle)
        cos_a = math.cos(self.angle)
        if self.strafe:
            if self.strafe == 1:
                move_x, move_y = -sin_a * PLAYER_SPEED, cos_a * PLAYER_SPEED
            else:
                move_x, move_y = sin_a * PLAYER_SPEED, -cos_a * PLAYER_SPEED
        if self.walk:
            if self.walk == 1:
                move_x, move_y = cos_a * PLAYER_SPEED, sin_a * PLAYER_SPEED
            else:
                move_x, move_y = -cos_a * PLAYER_SPEED, -sin_a * PLAYER_SPEED
        self._move(grid, move_x, move_y)

    def key_down(self, key: int) -> bool:
        """Record a pressed key; returns True when the key asks to quit."""
        try:
            key = Key(key)
        except ValueError:
            return False
        if key is Key.A:
            self.strafe = -1
        elif key is Key.D:
            self.strafe = 1
        elif key is Key.S:
            self.walk = -1
        elif key is Key.W:
            self.walk = 1
        elif key is Key.LEFT:
            self.rot_dir = -1
        elif key is Key.RIGHT:
            self.rot_dir = 1
        return key is Key.ESCAPE

    def key_up(self, key: int) -> None:
        """Forget a released key."""
        if key in (Key.A, Key.D):
            self.strafe = 0
        if key in (Key.S, Key.W):
            self.walk = 0
        if key in (Key.LEFT, Key.RIGHT):
            self.rot_dir = 0


def is_player_char(c: str) -> bool:
    """True for the map characters that mark the start position."""
    return len(c) == 1 and c in PLAYER_CHARS


def find_player(grid: list[str]) -> Player:
    """Place the player on the single start cell of the grid.

    Raises MapError when the grid holds an unknown character or not exactly
    one start cell.
    """
    found = None
    for row, line in enumerate(grid):
        for col, c in enumerate(line):
            if c in ("0", "1", "\n"):
                continue
            if not is_player_char(c) or found is not None:
                raise MapError("Issue initiating player")
            found = (col, row, c)
    if found is None:
        raise MapError("Issue initiating player")
    col, row, c = found
    dir_x, dir_y, angle = _HEADINGS[c]
    return Player(
        pos_x=col,
        pos_y=row,
        dir_x=dir_x,
        dir_y=dir_y,
        x=float(TILE_SIZE * col + TILE_SIZE // 2),
        y=float(TILE_SIZE * row + TILE_SIZE // 2),
        angle=angle,
        fov=FOV * math.pi / 180,
    )