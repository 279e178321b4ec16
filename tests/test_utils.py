import pytest

from snippad.utils import blend_over, hex_to_rgb, offset_to_tkindex, rgb_to_hex, span_tkindices


@pytest.mark.parametrize(
    "content, offset, expected",
    [
        ("A\U0001F60AB", 2, "1.3"),
        ("A\U0001F60AB", 3, "1.4"),
        ("A\U0001F60AB\nC", 4, "2.0"),
        ("", 0, "1.0"),
    ],
)
def test_offset_to_tkindex_counts_utf16_units(content, offset, expected):
    assert offset_to_tkindex(content, offset) == expected


def test_span_tkindices_maps_each_span():
    content = ".a {\n  color: red;\n}"

    assert span_tkindices(content, [(0, 2, "selector"), (7, 12, "property")]) == [
        ("1.0", "1.2", "selector"),
        ("2.2", "2.7", "property"),
    ]


@pytest.mark.parametrize(
    "value, expected",
    [("#ffffff", (255, 255, 255)), ("4f46e5", (79, 70, 229)), ("#abc", (170, 187, 204))],
)
def test_hex_to_rgb(value, expected):
    assert hex_to_rgb(value) == expected


def test_hex_to_rgb_rejects_bad_length():
    with pytest.raises(ValueError):
        hex_to_rgb("#abcd")


def test_rgb_to_hex_clamps_and_rounds():
    assert rgb_to_hex(79, 70, 229) == "#4f46e5"
    assert rgb_to_hex(-3, 300, 127.6) == "#00ff80"


def test_blend_over_composites_on_background():
    assert blend_over((0, 0, 0), 1, "#ffffff") == "#000000"
    assert blend_over((0, 0, 0), 0, "#ffffff") == "#ffffff"
    assert blend_over((0, 0, 0), 0.5, "#ffffff") == "#808080"
    assert blend_over((255, 0, 0), 2, "#000000") == "#ff0000"
