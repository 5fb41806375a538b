"""A textured raycasting engine for .cub scene files: parsing, ray casting, rendering and a pygame game loop."""

__version__ = "0.1.0"
__all__ = ["__version__"]