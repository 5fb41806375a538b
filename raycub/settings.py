"""Fixed parameters of the engine: screen size, grid scale and player speeds."""

MAP_WIDTH = 24
MAP_HEIGHT = 24

SCREEN_WIDTH = 1280
SCREEN_HEIGHT = 960

TILE_SIZE = 32
FOV = 60
ROTATION_SPEED = 0.04
PLAYER_SPEED = 4

WINDOW_TITLE = "Cub3D"