from dataclasses import dataclass

from sitegen.codeblock import (
    StyledIdx,
    color_highlighted_lines,
    find_line_boundaries,
    highlighted_lines,
    perform_split,
)


@dataclass(frozen=True)
class Style:
    foreground: str = "fg"
    background: str = "bg"


PLAIN = Style()
OTHER = Style(foreground="other")
HL = "highlight"

CODE = "foo\nbar\nbar\nbaz\n"


def split_code(styled):
    return perform_split(styled, find_line_boundaries(styled))


def test_boundaries_point_at_newlines():
    styled = [(PLAIN, "foo\nb"), (OTHER, "ar\nbaz")]
    boundaries = find_line_boundaries(styled)
    assert len(boundaries) == 2
    for b in boundaries:
        assert styled[b.vec_idx][1][b.str_idx] == "\n"
    assert boundaries == sorted(boundaries)


def test_styled_idx_orders_by_item_then_position():
    assert StyledIdx(0, 9) < StyledIdx(1, 0)
    assert StyledIdx(1, 2) < StyledIdx(1, 3)


def test_split_keeps_text_and_styles():
    styled = [(PLAIN, "foo\nb"), (OTHER, "ar\nbaz\n"), (PLAIN, "end")]
    result = split_code(styled)
    assert "".join(text for _, text in result) == "".join(text for _, text in styled)
    for _style, text in result:
        assert text
        assert "\n" not in text[:-1]
    assert {style for style, _ in result} == {PLAIN, OTHER}


def test_split_puts_newline_at_end_of_line():
    result = split_code([(PLAIN, CODE)])
    assert [text for _, text in result] == ["foo\n", "bar\n", "bar\n", "baz\n"]


def test_split_without_boundaries_is_identity():
    styled = [(PLAIN, "abc"), (OTHER, "def")]
    assert perform_split(styled, []) == styled


def test_highlighted_lines_single_line():
    assert highlighted_lines([(2, 2)], 5) == {1}


def test_highlighted_lines_clamps_end_and_zero_start():
    assert highlighted_lines([(3, 4294967295)], 5) == highlighted_lines([(3, 5)], 5)
    assert highlighted_lines([(0, 3)], 5) == highlighted_lines([(1, 3)], 5)


def test_highlighted_lines_overlap_is_union():
    combined = highlighted_lines([(2, 3), (1, 2)], 5)
    assert combined == highlighted_lines([(2, 3)], 5) | highlighted_lines([(1, 2)], 5)


def test_color_no_lines_leaves_styles():
    styled = split_code([(PLAIN, CODE)])
    assert color_highlighted_lines(styled, set(), HL) == styled


def test_color_marks_second_line():
    styled = split_code([(PLAIN, CODE)])
    num_lines = len(find_line_boundaries([(PLAIN, CODE)])) + 1
    lines = highlighted_lines([(2, 2)], num_lines)
    result = color_highlighted_lines(styled, lines, HL)
    marked = [text for style, text in result if style.background == HL]
    assert marked == ["bar\n"]
    assert [text for _, text in result] == [text for _, text in styled]


def test_color_all_lines():
    styled = split_code([(PLAIN, CODE)])
    result = color_highlighted_lines(styled, highlighted_lines([(1, 4)], 5), HL)
    assert all(style.background == HL for style, _ in result)
    assert all(style.foreground == "fg" for style, _ in result)