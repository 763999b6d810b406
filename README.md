# cubraycaster

A small first-person raycaster. You give it a `.cub` scene file and it opens
a 960×720 window titled `cub3D` in which you walk around a textured maze.
Walls are found with a DDA ray cast per screen column and drawn with one of
four PNG textures, chosen by the face of the wall that was hit; the top two
thirds of the screen are filled with the ceiling colour and the last third
with the floor colour before the walls are drawn over them.

## Installing

```
pip install .
```

This installs `numpy`, `pillow` and `pygame`. The tests need `pytest`
(`pip install .[test]`).

## Playing

```
cubraycaster path/to/scene.cub
```

| Key                 | Action          |
|---------------------|-----------------|
| `W` / Up arrow      | move forward    |
| `S` / Down arrow    | move backward   |
| `A` / Left arrow    | turn left       |
| `D` / Right arrow   | turn right      |
| `Esc`               | quit            |

Closing the window also quits. Movement is blocked by wall cells and slides
along them.

When the scene cannot be used, the command writes `Error` and then the reason
on the next line to standard error and exits with status 1. Given no scene
file, or more than one, it prints a usage line the same way.

## The scene format

The file name must end in `cub` (normally `.cub`). Blank lines are ignored.
The first six non-blank lines hold the identifiers; every line after them is
the map.

```
NO ./textures/north.png
SO ./textures/south.png
WE ./textures/west.png
EA ./textures/east.png

F 220,100,0
C 225,30,0

111111
100001
10N001
100001
111111
```

* `NO` or `N`, `SO` or `S`, `WE` or `W`, `EA` or `E`, followed by a path:
  the north, south, west and east wall textures. The path must end in `png`.
  Each side may be given only once (`N` and `NO` name the same side), and an
  identifier with no path is an error. The four textures must all come before
  the first colour line.
* `F` and `C`, followed by a space and `R,G,B`: the floor and ceiling
  colours. Each value may hold only digits and spaces and must lie between
  0 and 255; there must be exactly three values, and each colour only once.
  Because of how values are read, a component written as exactly `1` is
  rejected as out of range.
* The map may hold only `1` (wall), `0` (floor), spaces, and exactly one
  of `N`, `S`, `E`, `W`: the player's start cell and the direction they face.
  None of the six identifier lines may start with `1`.
* Every floor or blank cell the player can reach from the start must stay
  clear of the first and last row and of the first and last column of its
  own row; otherwise the map is rejected as not enclosed by walls.

Texture files are only opened when the game starts; a path that cannot be
read or an image that cannot be loaded is reported as an error then.

## As a library

```python
from cubraycaster.scene import parse_scene
from cubraycaster.raycast import Camera

scene = parse_scene(open("maps/simple.cub").read())
camera = Camera.from_player(scene.player_x, scene.player_y, scene.facing)
grid = [list(row) for row in scene.map_rows]
hit = camera.cast(grid, column=480, width=960, height=720)
print(hit.side, hit.perp_wall_dist, hit.draw_start, hit.draw_end)
```

* `cubraycaster.scene`: `parse_scene(text)` and `load_scene(path)` return a
  frozen `Scene` (texture paths, `floor` and `ceiling` as `Color`,
  `map_rows`, `player_x`, `player_y`, `facing`, and the `height`, `width`
  and `textures` properties). Also `Color` (with `packed()` giving
  `0xRRGGBBAA`), `check_extension`, `check_color_range` and
  `check_rgb_values`.
* `cubraycaster.mapcheck`: `check_map_content`, `check_walls`,
  `find_player`, `flood_fill`, `is_player`, `max_line_len`, and
  `format_map`, which renders a map with a space after every cell.
* `cubraycaster.raycast`: `Camera` (`from_player`, `cast`, `move_forward`,
  `move_backward`, `rotate_left`, `rotate_right`, `pixel_position`), the
  `RayHit` it returns, and `Side`.
* `cubraycaster.render`: `Texture` (`load`, `rgba`), `load_textures`,
  `reverse_bits`, `draw_ceiling_floor`, `draw_column` and `render_frame`,
  which draw into a `uint8` array of shape `(height, width, 4)`.
* `cubraycaster.minimap`: `draw_2d_map`, `draw_square`, `draw_line`,
  `draw_player`, `check_put_pixel` and `Axis`, for a top-down map drawn
  with 64 pixels per cell into the same kind of array. They raise
  `ValueError` when a drawing does not fit.
* `cubraycaster.text`: `atoi`, `split` and `trim`, the string helpers the
  scene reader uses.
* `cubraycaster.app`: `main(argv=None)`, `run(scene)` and `fill_map(rows)`.
* `cubraycaster.errors`: `SceneError`, raised for every rejected scene, and
  `format_error` / `report_error`, which produce the `Error` report.

## What it does not do

The game window shows only the first-person view. The top-down map in
`cubraycaster.minimap` can be drawn into an array, but the window never
displays it. There are no sprites, doors, sound or mouse look.