"""Reading and validating ``.cub`` scene files.

A scene file holds four texture lines (``NO``, ``SO``, ``WE``, ``EA``), two
colour lines (``F`` and ``C``) and then the map grid.  Grid rows keep the
trailing newline they were read with, since the enclosure checks treat the
newline as a cell of its own.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path

PLAYER_CHARS = "NSEW"
MAP_CHARS = "01" + PLAYER_CHARS + " "
_DIGITS = "0123456789"
_RGB_PART = re.compile(r"[^0-9]*([0-9]*)")


class MapError(ValueError):
    """Raised when a scene file cannot be used."""


@dataclass
class Scene:
    """Everything a scene file describes."""

    grid: list[str]
    north: str
    south: str
    west: str
    east: str
    floor: tuple[int, int, int]
    ceiling: tuple[int, int, int]

    @property
    def height(self) -> int:
        return len(self.grid)

    @property
    def width(self) -> int:
        return map_width(self.grid)


def _cell(grid: list[str], row: int, col: int) -> str:
    """Return the character at ``(row, col)``, or ``""`` outside the grid."""
    if 0 <= row < len(grid) and 0 <= col < len(grid[row]):
        return grid[row][col]
    return ""


def _first_line(text: str) -> str:
    return text.split("\n", 1)[0]


def _skip_spaces(line: str) -> str:
    return line.lstrip(" ")


def is_empty(line: str) -> bool:
    """True if the line holds nothing but spaces before its newline."""
    return all(c == " " for c in _first_line(line))


def is_valid_char(c: str) -> bool:
    """True for characters allowed inside the map grid."""
    return len(c) == 1 and c in MAP_CHARS


def is_valid_color_content(text: str, key: str) -> bool:
    """Check that a colour line holds only its key, digits, spaces and two commas."""
    commas = 0
    groups = 0
    previous = None
    for c in text:
        if c != key and c not in " \n" and c not in _DIGITS and c != ",":
            return False
        if c == ",":
            commas += 1
        elif c in _DIGITS and previous is not None and previous not in _DIGITS:
            groups += 1
        previous = c
    return commas == 2 and groups <= 3


def check_row(line: str) -> bool:
    """True if the row, ignoring spaces, starts and ends with a wall."""
    stripped = _skip_spaces(line)
    if stripped and stripped[0] != "1":
        return False
    return _first_line(line).rstrip(" ").endswith("1")


def check_file_extension(path: str | os.PathLike) -> bool:
    """True if the path names a ``.cub`` file."""
    return os.fspath(path).endswith(".cub")


def find_texture_line(lines: list[str], key: str) -> str | None:
    """Return the first line starting with ``key`` (after spaces), from the key on."""
    for line in lines:
        rest = _skip_spaces(line)
        if rest.startswith(key):
            return rest
    return None


def trim_path(line: str | None, prefix: str) -> str | None:
    """Strip the key and surrounding blanks from a texture line."""
    if line is None:
        return None
    text = line.lstrip(" \n").strip("\n")
    common = len(os.path.commonprefix([text, prefix]))
    return text[common:].lstrip(" \n").strip(" ")


def parse_rgb(line: str) -> tuple[int, int, int]:
    """Read three 0-255 integers from a colour line.

    Raises ValueError when a component is missing or out of range.
    """
    values = []
    pos = 0
    for _ in range(3):
        match = _RGB_PART.match(line, pos)
        digits = match.group(1)
        if not digits:
            raise ValueError(f"missing colour component in {line!r}")
        value = int(digits)
        if value > 255:
            raise ValueError(f"colour component {value} out of range")
        values.append(value)
        pos = match.end()
    return values[0], values[1], values[2]


def find_color(lines: list[str], key: str) -> tuple[int, int, int] | None:
    """Return the colour of the first well-formed line starting with ``key``.

    Returns None when no such line exists; raises ValueError when the
    line found holds an out-of-range component.
    """
    for line in lines:
        rest = _skip_spaces(line)
        if rest.startswith(key) and is_valid_color_content(rest, key[0]):
            return parse_rgb(rest)
    return None


def extract_map(lines: list[str]) -> list[str]:
    """Return the lines after the six settings lines and the blanks after them."""
    index = 0
    settings = 0
    while index < len(lines) and settings != 6:
        if not is_empty(lines[index]):
            settings += 1
        index += 1
    while index < len(lines) and is_empty(lines[index]):
        index += 1
    return list(lines[index:])


def _is_leak(c: str) -> bool:
    return bool(c) and c != "1" and c not in PLAYER_CHARS


def _find_vertical_zeros(grid: list[str], row: int, col: int, step: int) -> bool:
    while _cell(grid, row, col) == " ":
        row += step
    return _is_leak(_cell(grid, row, col))


def _find_horizontal_zeros(grid: list[str], row: int, col: int, step: int) -> bool:
    col += step
    while _cell(grid, row, col) == " ":
        if _find_vertical_zeros(grid, row, col, 1) or _find_vertical_zeros(
            grid, row, col, -1
        ):
            return True
        col += step
    return _is_leak(_cell(grid, row, col))


def check_space_edges(grid: list[str], row: int) -> bool:
    """True if the first or last row lets the inside of the map reach the outside."""
    step = 1 if row == 0 else -1
    for col, c in enumerate(grid[row]):
        if c == "0":
            return True
        if c != " ":
            continue
        offset = step
        while _cell(grid, row + offset, col) == " ":
            if _find_horizontal_zeros(
                grid, row + offset, col, -1
            ) or _find_horizontal_zeros(grid, row + offset, col, 1):
                return True
            offset += step
        beyond = _cell(grid, row + offset, col)
        if beyond and beyond != "1":
            return True
    return False


def check_valid_map(grid: list[str]) -> None:
    """Check characters, row walls and the top and bottom edges of the grid."""
    height = len(grid)
    for i, row in enumerate(grid):
        for c in _first_line(row):
            if i in (0, height - 1) and c != "1" and check_space_edges(grid, i):
                raise MapError("Map is not enclosed.")
            if not is_valid_char(c):
                raise MapError("Wrong Character.")
            if not check_row(row):
                raise MapError("Issue reading map.")


def replace_spaces_with_ones(grid: list[str]) -> list[str]:
    """Return the grid with every space turned into a wall."""
    return [row.replace(" ", "1") for row in grid]


def check_zeros_out_of_bounds(grid: list[str]) -> None:
    """Reject floor cells whose row above or below is too short to close them."""
    last = len(grid) - 1
    for i, row in enumerate(grid):
        if not 0 < i < last:
            continue
        for j, c in enumerate(row):
            if c == "0" and (not _cell(grid, i - 1, j) or not _cell(grid, i + 1, j)):
                raise MapError("Map is not enclosed.")


def check_map_is_together(grid: list[str]) -> None:
    """Reject grids with a non-empty row after an empty one."""
    seen_empty = False
    for row in grid:
        if is_empty(row):
            seen_empty = True
        elif seen_empty:
            raise MapError("Map is not together.")


def map_width(grid: list[str]) -> int:
    """Length of the longest row, newline included."""
    return max((len(row) for row in grid), default=0)


def parse_scene_lines(lines: list[str]) -> Scene:
    """Build and validate a scene from the lines of a scene file."""
    if not lines:
        raise MapError("Empty map")
    north = trim_path(find_texture_line(lines, "NO "), "NO")
    south = trim_path(find_texture_line(lines, "SO "), "SO")
    west = trim_path(find_texture_line(lines, "WE "), "WE")
    east = trim_path(find_texture_line(lines, "EA "), "EA")
    if not (north and south and west and east):
        raise MapError("Texture paths are incorrect")
    try:
        floor = find_color(lines, "F ")
        ceiling = find_color(lines, "C ")
    except ValueError as exc:
        raise MapError("Colors are incorrect") from exc
    if floor is None or ceiling is None:
        raise MapError("Colors are incorrect")
    grid = extract_map(lines)
    check_valid_map(grid)
    grid = replace_spaces_with_ones(grid)
    check_zeros_out_of_bounds(grid)
    check_map_is_together(grid)
    return Scene(
        grid=grid,
        north=north,
        south=south,
        west=west,
        east=east,
        floor=floor,
        ceiling=ceiling,
    )


def _split_lines(text: str) -> list[str]:
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def load_scene(path: str | os.PathLike) -> Scene:
    """Read, parse and validate the scene file at ``path``."""
    if not check_file_extension(path):
        raise MapError("Issue with the file")
    try:
        text = Path(path).read_text(encoding="utf-8", errors="surrogateescape")
    except OSError as exc:
        raise MapError("Issue with the file") from exc
    return parse_scene_lines(_split_lines(text))