# raycub

A first-person raycasting engine. It loads a `.cub` scene file and lets you
walk around a textured maze in a pygame window.

## Installing

```
pip install .
```

To run the tests, install the `test` extra and run `pytest`:

```
pip install .[test]
pytest
```

## Playing

```
raycub path/to/level.cub
```

The command takes exactly one argument, the scene file. The window is
1280×960.

Controls:

- `W` / `S`: move forward / backward
- `A` / `D`: strafe left / right
- Left / Right arrows: turn
- `Escape` or closing the window: quit

Walls stop the player. When the file cannot be read, is not a `.cub` file, is
malformed, or names a texture that cannot be loaded, an error message is
printed and the command exits with status 1.

## Scene files

A `.cub` file holds six settings followed by the map. The settings can come in
any order and may be separated by blank lines:

```
NO ./textures/north.png
SO ./textures/south.png
WE ./textures/west.png
EA ./textures/east.png
F 220,100,0
C 225,30,0

111111
100101
1010N1
111111
```

- `NO`, `SO`, `WE`, `EA`: paths to the wall textures, one per side. Any image
  format pygame can load will do.
- `F`, `C`: floor and ceiling colours as `R,G,B`, each 0–255.
- The map uses `1` for walls, `0` for floor, spaces for empty space, and
  exactly one of `N`, `S`, `E`, `W` for where the player starts and the
  direction the player faces.

The map has to be closed. Every row must start and end with a wall, and no
floor cell may reach the edge of the map or open onto empty space. The map may
not contain blank lines. Spaces are treated as walls once the map has been
checked.

## Using it as a library

```python
from raycub.scenefile import load_scene, MapError
from raycub.player import find_player
from raycub.raycast import cast_rays

scene = load_scene("level.cub")       # raises MapError on a bad file
player = find_player(scene.grid)      # raises MapError without one start cell
hits = cast_rays(scene, player, 320)  # one RayHit per column
```

- `raycub.scenefile`: `load_scene` and `parse_scene_lines` build a `Scene`
  with its grid, four texture paths and the floor and ceiling colours. They
  raise `MapError` when the file cannot be used.
- `raycub.player`: `Player` holds position, facing and held keys.
  `key_down` and `key_up` take `Key` codes, and `step(grid)` applies one frame
  of turning and movement.
- `raycub.raycast`: `cast_ray` and `cast_rays` return `RayHit` values with the
  distance to the wall, the side that was hit and the point of contact.
- `raycub.render`: `load_textures(scene)` loads the four textures.
  `render_frame(scene, player, textures)` returns the view as a
  (height, width) numpy array of packed `0xAARRGGBB` pixels.
- `raycub.game`: `Game(scene, textures).tick()` advances one frame and
  returns the rendered view. `run(path)` opens the window and plays the scene.
- `raycub.settings`: screen size, tile size, field of view and movement
  speeds.