import pytest

from treectx.source import get_span_text, split_lines


LINES = [
    "class Foo {",
    "    int bar;",
    "}",
]


def test_split_lines_matches_parser_rows():
    assert split_lines("a\nb\r\nc") == ["a", "b", "c"]
    assert split_lines("a\n") == ["a", ""]
    assert split_lines("") == [""]
    # form feeds and other separators do not start a new row
    assert split_lines("a\x0cb") == ["a\x0cb"]


def test_single_row_span():
    assert get_span_text(LINES, (1, 4), (1, 7)) == "int"
    assert get_span_text(LINES, (0, 0), (0, 5)) == "class"


def test_multi_row_span_concatenates_rows():
    expected = LINES[0][6:] + LINES[1] + LINES[2][:1]
    assert get_span_text(LINES, (0, 6), (2, 1)) == expected
    assert get_span_text(LINES, (0, 6), (2, 1)) == "Foo {    int bar;}"


def test_two_row_span_has_no_middle():
    assert get_span_text(LINES, (1, 8), (2, 0)) == "bar;"


def test_zero_length_span_is_empty():
    assert get_span_text(LINES, (1, 3), (1, 3)) == ""
    assert get_span_text(LINES, (2, 1), (2, 1)) == ""


def test_span_at_line_end_is_allowed():
    assert get_span_text(LINES, (0, 10), (0, 11)) == "{"


@pytest.mark.parametrize(
    "start,end",
    [
        ((3, 0), (3, 1)),  # row past the end
        ((0, 0), (5, 0)),
        ((1, 0), (1, 40)),  # column past the line
        ((0, 12), (1, 0)),
        ((-1, 0), (0, 1)),
    ],
)
def test_out_of_bounds_span_raises(start, end):
    with pytest.raises(IndexError):
        get_span_text(LINES, start, end)


def test_slicing_does_not_mutate_lines():
    lines = list(LINES)
    get_span_text(lines, (0, 2), (2, 1))
    assert lines == LINES


def test_slice_is_idempotent():
    text = get_span_text(LINES, (0, 6), (1, 8))
    again = split_lines(text)
    last = len(again) - 1
    assert get_span_text(again, (0, 0), (last, len(again[last]))) == text
