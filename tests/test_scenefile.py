import pytest

from raycub.scenefile import (
    MapError,
    Scene,
    check_file_extension,
    check_map_is_together,
    check_row,
    check_space_edges,
    check_valid_map,
    check_zeros_out_of_bounds,
    extract_map,
    find_color,
    find_texture_line,
    is_empty,
    is_valid_char,
    is_valid_color_content,
    load_scene,
    map_width,
    parse_rgb,
    parse_scene_lines,
    replace_spaces_with_ones,
    trim_path,
)

MAP_ROWS = [
    "111111\n",
    "100001\n",
    "10N001\n",
    "111111\n",
]

SCENE_LINES = [
    "NO ./textures/north.xpm\n",
    "SO ./textures/south.xpm\n",
    "WE ./textures/west.xpm\n",
    "EA ./textures/east.xpm\n",
    "\n",
    "F 220,100,0\n",
    "C 225,30,0\n",
    "\n",
] + MAP_ROWS


@pytest.mark.parametrize(
    "line, expected",
    [("   \n", True), ("  1 \n", False), ("\t\n", False), ("\n  x", True), ("", True)],
)
def test_is_empty(line, expected):
    assert is_empty(line) is expected


@pytest.mark.parametrize(
    "c, expected",
    [("0", True), ("1", True), ("N", True), ("W", True), (" ", True), ("X", False), ("\n", False)],
)
def test_is_valid_char(c, expected):
    assert is_valid_char(c) is expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("F 220,100,0\n", True),
        ("F 1,2\n", False),
        ("F 1,2,3,4\n", False),
        ("F 1a,2,3\n", False),
        ("F 1 2,3,4\n", False),
    ],
)
def test_is_valid_color_content(text, expected):
    assert is_valid_color_content(text, "F") is expected


@pytest.mark.parametrize(
    "line, expected",
    [("  1001  \n", True), ("1000\n", False), (" 0111\n", False), ("   \n", False)],
)
def test_check_row(line, expected):
    assert check_row(line) is expected


@pytest.mark.parametrize(
    "path, expected",
    [("maps/level.cub", True), ("level.cubx", False), ("level.txt", False)],
)
def test_check_file_extension(path, expected):
    assert check_file_extension(path) is expected


def test_find_texture_line_skips_leading_spaces():
    lines = ["F 1,2,3\n", "  NO ./a.xpm\n"]
    assert find_texture_line(lines, "NO ") == "NO ./a.xpm\n"
    assert find_texture_line(lines, "SO ") is None


def test_trim_path_strips_key_and_blanks():
    assert trim_path("NO   ./path/to.xpm  \n", "NO") == "./path/to.xpm"
    assert trim_path(None, "NO") is None


def test_parse_rgb_reads_three_components():
    assert parse_rgb("F 220,100,0\n") == (220, 100, 0)


@pytest.mark.parametrize("line", ["F 256,0,0\n", "F 1,2\n"])
def test_parse_rgb_rejects_bad_components(line):
    with pytest.raises(ValueError):
        parse_rgb(line)


def test_find_color():
    assert find_color(SCENE_LINES, "C ") == (225, 30, 0)
    assert find_color(["F 1,2,3,x\n"], "F ") is None
    with pytest.raises(ValueError):
        find_color(["F 300,2,3\n"], "F ")


def test_extract_map_returns_grid_rows():
    assert extract_map(SCENE_LINES) == MAP_ROWS


def test_check_space_edges_open_and_closed():
    assert check_space_edges(["1 1\n", "101\n", "111\n"], 0) is True
    assert check_space_edges(["1 1\n", "111\n"], 0) is False


def test_check_valid_map_wrong_character():
    with pytest.raises(MapError) as excinfo:
        check_valid_map(["111\n", "1X1\n", "111\n"])
    assert "Wrong Character." in str(excinfo.value)


def test_check_valid_map_open_row():
    with pytest.raises(MapError) as excinfo:
        check_valid_map(["111\n", "100\n", "111\n"])
    assert "Issue reading map." in str(excinfo.value)


def test_check_valid_map_open_edge():
    with pytest.raises(MapError) as excinfo:
        check_valid_map(["101\n", "101\n", "111\n"])
    assert "Map is not enclosed." in str(excinfo.value)


def test_replace_spaces_with_ones_keeps_lengths():
    grid = [" 1 \n", "1 1\n"]
    replaced = replace_spaces_with_ones(grid)
    assert all(" " not in row for row in replaced)
    assert [len(r) for r in replaced] == [len(r) for r in grid]


def test_check_zeros_out_of_bounds_short_row():
    with pytest.raises(MapError) as excinfo:
        check_zeros_out_of_bounds(["1\n", "1001\n", "1111\n"])
    assert "Map is not enclosed." in str(excinfo.value)


def test_check_map_is_together():
    with pytest.raises(MapError) as excinfo:
        check_map_is_together(["111\n", "\n", "111\n"])
    assert "Map is not together." in str(excinfo.value)


def test_map_width():
    assert map_width(["1\n", "111\n"]) == len("111\n")
    assert map_width([]) == 0


def test_parse_scene_lines_builds_scene():
    scene = parse_scene_lines(SCENE_LINES)
    assert scene.north == "./textures/north.xpm"
    assert scene.east == "./textures/east.xpm"
    assert scene.floor == (220, 100, 0)
    assert scene.ceiling == (225, 30, 0)
    assert scene.grid == MAP_ROWS
    assert scene.height == len(MAP_ROWS)
    assert scene.width == len(MAP_ROWS[0])


def test_parse_scene_lines_missing_texture():
    with pytest.raises(MapError) as excinfo:
        parse_scene_lines(SCENE_LINES[1:])
    assert "Texture paths are incorrect" in str(excinfo.value)


def test_parse_scene_lines_bad_color():
    lines = [line.replace("F 220", "F 999") for line in SCENE_LINES]
    with pytest.raises(MapError) as excinfo:
        parse_scene_lines(lines)
    assert "Colors are incorrect" in str(excinfo.value)


def test_parse_scene_lines_empty():
    with pytest.raises(MapError) as excinfo:
        parse_scene_lines([])
    assert "Empty map" in str(excinfo.value)


def test_parse_scene_lines_split_map():
    with pytest.raises(MapError) as excinfo:
        parse_scene_lines(SCENE_LINES + ["\n", "111111\n"])
    assert "Map is not together." in str(excinfo.value)


def test_load_scene_round_trip(tmp_path):
    path = tmp_path / "level.cub"
    path.write_text("".join(SCENE_LINES), encoding="utf-8")
    scene = load_scene(path)
    assert isinstance(scene, Scene)
    assert scene == parse_scene_lines(SCENE_LINES)


def test_load_scene_wrong_extension(tmp_path):
    path = tmp_path / "level.txt"
    path.write_text("".join(SCENE_LINES), encoding="utf-8")
    with pytest.raises(MapError) as excinfo:
        load_scene(path)
    assert "Issue with the file" in str(excinfo.value)


def test_load_scene_missing_file(tmp_path):
    with pytest.raises(MapError) as excinfo:
        load_scene(tmp_path / "absent.cub")
    assert "Issue with the file" in str(excinfo.value)