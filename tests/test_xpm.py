import pytest

from cubcaster.core import CubError
from cubcaster.xpm import Texture, load_texture, parse_xpm

RED = 0xFF0000
GREEN = 0x00FF00

SAMPLE = [
    "/* XPM */\n",
    "static char *wall_xpm[] = {\n",
    "/* columns rows colors chars-per-pixel */\n",
    '"2 2 2 1 ",\n',
    '"a c #FF0000",\n',
    '"b c #00FF00",\n',
    "/* pixels */\n",
    '"ab",\n',
    '"ba"\n',
    "};\n",
]


def _with(index, line):
    lines = list(SAMPLE)
    lines[index] = line
    return lines


def test_parse_sample_dimensions():
    texture = parse_xpm(SAMPLE)
    assert (texture.width, texture.height) == (2, 2)


def test_parse_sample_pixels():
    texture = parse_xpm(SAMPLE)
    assert texture.pixels == [[RED, GREEN], [GREEN, RED]]


def test_parse_sample_colors():
    texture = parse_xpm(SAMPLE)
    assert texture.colors == {"a": RED, "b": GREEN}


def test_lines_without_newlines():
    texture = parse_xpm([line.rstrip("\n") for line in SAMPLE])
    assert texture.pixels == parse_xpm(SAMPLE).pixels


def test_unknown_key_gives_minus_one():
    texture = parse_xpm(_with(7, '"az",\n'))
    assert texture.pixels[0] == [RED, -1]


def test_duplicate_key_last_wins():
    texture = parse_xpm(_with(5, '"a c #00FF00",\n'))
    assert texture.colors["a"] == GREEN
    assert texture.pixels[0][0] == GREEN


def test_missing_rows_stay_zero():
    texture = parse_xpm(SAMPLE[:8])
    assert texture.pixels == [[RED, GREEN], [0, 0]]


def test_two_char_keys():
    lines = [
        "/* XPM */",
        "static char *x[] = {",
        "/* header */",
        '"3 1 2 2",',
        '"aa c #000001",',
        '"ab c #000002",',
        "/* pixels */",
        '"aaabaa"',
    ]
    texture = parse_xpm(lines)
    assert texture.pixels == [[1, 2, 1]]


def test_lines_after_pixels_ignored():
    texture = parse_xpm(SAMPLE + ["garbage\n", '"zz",\n'])
    assert texture.pixels == [[RED, GREEN], [GREEN, RED]]


@pytest.mark.parametrize(
    "header",
    ['"2 2 2",\n', '"2 2 2 1 5",\n', '"2 x 2 1",\n', '"2 -2 2 1",\n'],
)
def test_bad_header(header):
    with pytest.raises(CubError):
        parse_xpm(_with(3, header))


def test_header_overflow():
    with pytest.raises(CubError):
        parse_xpm(_with(3, '"99999999999 2 2 1",\n'))


@pytest.mark.parametrize(
    "color_line",
    ['"a c #ff0000",\n', '"a x #FF0000",\n', '"a c #FF00",\n', '"a c None",\n'],
)
def test_bad_color_line(color_line):
    with pytest.raises(CubError):
        parse_xpm(_with(4, color_line))


@pytest.mark.parametrize("row", ['"abb",\n', '"a",\n', '"ab"};\n'])
def test_bad_pixel_row(row):
    with pytest.raises(CubError):
        parse_xpm(_with(7, row))


def test_too_short_for_header():
    with pytest.raises(CubError):
        parse_xpm(SAMPLE[:3])


def test_load_texture_roundtrip(tmp_path):
    path = tmp_path / "wall.xpm"
    path.write_text("".join(SAMPLE), encoding="latin-1")
    texture = load_texture(path)
    assert texture == parse_xpm(SAMPLE)


def test_load_texture_strips_newline_from_path(tmp_path):
    path = tmp_path / "wall.xpm"
    path.write_text("".join(SAMPLE), encoding="latin-1")
    texture = load_texture(str(path) + "\n")
    assert texture.pixels == [[RED, GREEN], [GREEN, RED]]


def test_load_texture_wrong_extension(tmp_path):
    path = tmp_path / "wall.png"
    path.write_text("".join(SAMPLE), encoding="latin-1")
    with pytest.raises(CubError):
        load_texture(path)


def test_load_texture_missing_file(tmp_path):
    with pytest.raises(CubError):
        load_texture(tmp_path / "absent.xpm")


def test_texture_equality_uses_pixels():
    first = Texture(1, 1, [[5]], {"a": 5})
    second = Texture(1, 1, [[6]], {"a": 5})
    assert first != second
    assert first == Texture(1, 1, [[5]], {"a": 5})