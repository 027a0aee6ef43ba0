from typing import List, Sequence, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from treectx.parsers import SyntaxNode

Point = Tuple[int, int]


def split_lines(text: str) -> List[str]:
    """
    Split source text into the line array used for span slicing.

    Only ``"\\n"`` terminates a line, matching the row numbering of the
    parser. A single trailing ``"\\r"`` is dropped from each line.
    """
    lines = text.split("\n")
    return [ln[:-1] if ln.endswith("\r") else ln for ln in lines]


def _check_point(lines: Sequence[str], point: Point) -> None:
    row, column = point
    if row < 0 or row >= len(lines):
        raise IndexError(f"row {row} outside source of {len(lines)} lines")
    if column < 0 or column > len(lines[row]):
        raise IndexError(
            f"column {column} outside line {row} of length {len(lines[row])}"
        )


def get_span_text(lines: Sequence[str], start: Point, end: Point) -> str:
    """
    Return the exact source text between *start* and *end*.

    Both points are ``(row, column)`` pairs into *lines*. Rows of a
    multi-line span are concatenated without a separator. Raises
    ``IndexError`` when either point falls outside *lines*.
    """
    _check_point(lines, start)
    _check_point(lines, end)

    start_row, start_col = start
    end_row, end_col = end

    if start_row == end_row:
        return lines[start_row][start_col:end_col]

    parts: List[str] = [lines[start_row][start_col:]]
    for row in range(start_row + 1, end_row):
        parts.append(lines[row])
    parts.append(lines[end_row][:end_col])
    return "".join(parts)


def get_node_text(node: "SyntaxNode", lines: Sequence[str]) -> str:
    """
    Get text of the syntax node
    """
    return get_span_text(lines, tuple(node.start_point), tuple(node.end_point))
