"""Drawing the 3D view: textures, wall slices, floor and ceiling."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
import pygame

from .raycast import RayHit, cast_rays, normalize
from .scenefile import MapError
from .settings import SCREEN_HEIGHT, SCREEN_WIDTH, TILE_SIZE

if TYPE_CHECKING:
    from .player import Player
    from .scenefile import Scene


def pack_rgb(rgb: tuple[int, int, int]) -> int:
    """Pack an RGB triple into an opaque 0xAARRGGBB pixel value."""
    red, green, blue = rgb
    return 255 << 24 | red << 16 | green << 8 | blue


@dataclass
class Texture:
    """A wall texture as a (height, width) array of packed pixels."""

    pixels: np.ndarray

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])


@dataclass
class Textures:
    """The four wall textures of a scene."""

    north: Texture
    south: Texture
    west: Texture
    east: Texture

    def pick(self, hit: RayHit) -> Texture:
        """Choose the texture for the wall side the ray met."""
        angle = normalize(hit.angle)
        if hit.horizontal:
            return self.north if 0 < angle < math.pi else self.south
        if math.pi / 2 < angle < 3 * math.pi / 2:
            return self.west
        return self.east


def load_texture(path: str | os.PathLike) -> Texture:
    """Load an image file as a texture; raises MapError if it cannot be read."""
    try:
        surface = pygame.image.load(os.fspath(path))
        rgb = pygame.surfarray.array3d(surface)
    except (pygame.error, OSError, ValueError) as exc:
        raise MapError(f"Cannot load texture {os.fspath(path)!r}") from exc
    rgb = rgb.transpose(1, 0, 2).astype(np.uint32)
    pixels = (
        np.uint32(0xFF000000)
        | (rgb[:, :, 0] << 16)
        | (rgb[:, :, 1] << 8)
        | rgb[:, :, 2]
    ).astype(np.uint32)
    return Texture(pixels=pixels)


def load_textures(scene: Scene) -> Textures:
    """Load the four textures a scene names."""
    try:
        return Textures(
            north=load_texture(scene.north),
            south=load_texture(scene.south),
            west=load_texture(scene.west),
            east=load_texture(scene.east),
        )
    except MapError as exc:
        raise MapError("Issue initiating textures") from exc


def texture_x_offset(texture: Texture, hit: RayHit) -> int:
    """Texture column for the point where the ray met the wall."""
    coord = hit.x if hit.horizontal else hit.y
    scaled = coord * (texture.width // TILE_SIZE)
    if not math.isfinite(scaled):
        return 0
    return int(math.fmod(scaled, texture.width))


def _draw_wall(
    frame: np.ndarray,
    column: int,
    hit: RayHit,
    textures: Textures,
    top: float,
    bottom: float,
    wall_height: float,
) -> None:
    if top >= bottom:
        return
    half_h = frame.shape[0] // 2
    texture = textures.pick(hit)
    factor = texture.height / wall_height
    x_offset = texture_x_offset(texture, hit)
    x_offset = min(max(x_offset, 0), texture.width - 1)
    y_start = (top - half_h + wall_height / 2) * factor
    if not y_start > 0:
        y_start = 0.0
    steps = np.arange(math.ceil(bottom - top) + 1)
    steps = steps[top + steps < bottom]
    rows = (top + steps).astype(np.int64)
    ys = np.minimum(y_start + steps * factor, texture.height - 1).astype(np.int64)
    frame[rows, column] = texture.pixels[ys, x_offset]


def render_column(
    frame: np.ndarray,
    column: int,
    hit: RayHit,
    player: Player,
    textures: Textures,
    floor: tuple[int, int, int],
    ceiling: tuple[int, int, int],
) -> None:
    """Draw one screen column: the wall slice, then floor and ceiling."""
    height, width = frame.shape
    half_h = height // 2
    distance = hit.distance * math.cos(normalize(hit.angle - player.angle))
    projection = (width // 2) / math.tan(player.fov / 2)
    wall_height = TILE_SIZE / distance * projection if distance > 0 else math.inf
    bottom = min(half_h + wall_height / 2, float(height))
    top = max(half_h - wall_height / 2, 0.0)
    _draw_wall(frame, column, hit, textures, top, bottom, wall_height)
    frame[int(bottom):, column] = pack_rgb(floor)
    top_row = int(top)
    if top_row > 0:
        frame[1 : top_row + 1, column] = pack_rgb(ceiling)


def render_frame(scene: Scene, player: Player, textures: Textures) -> np.ndarray:
    """Render the whole view as a (height, width) array of packed pixels."""
    frame = np.zeros((SCREEN_HEIGHT, SCREEN_WIDTH), dtype=np.uint32)
    for column, hit in enumerate(cast_rays(scene, player, SCREEN_WIDTH)):
        render_column(frame, column, hit, player, textures, scene.floor, scene.ceiling)
    return frame