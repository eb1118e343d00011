"""Tests for reading order and line grouping."""

from chunk_ordering import group_lines, line_text, sort_chunks


def test_sort_reading_order(make_chunk):
    chunks = [
        make_chunk("row2-right", 100, 500, 140, 512),
        make_chunk("row1-right", 100, 600, 140, 612),
        make_chunk("row2-left", 0, 500, 40, 512),
        make_chunk("row1-left", 0, 600.4, 40, 612),
    ]
    ordered = sort_chunks(chunks)
    assert [c.text for c in ordered] == ["row1-left", "row1-right", "row2-left", "row2-right"]
    assert sort_chunks(ordered) == ordered


def test_sort_does_not_mutate_input(make_chunk):
    chunks = [make_chunk("b", 0, 0, 5, 5), make_chunk("a", 0, 100, 5, 105)]
    sort_chunks(chunks)
    assert [c.text for c in chunks] == ["b", "a"]


def test_group_lines_tolerant(make_chunk):
    chunks = [
        make_chunk("Total", 0, 100.1, 30, 110),
        make_chunk("Name", 0, 200, 30, 210),
        make_chunk("42", 80, 100.8, 90, 110),
        make_chunk("Value", 80, 200, 110, 210),
    ]
    lines = group_lines(chunks)
    assert [[c.text for c in line] for line in lines] == [["Name", "Value"], ["Total", "42"]]


def test_group_lines_exact_splits_jitter(make_chunk):
    chunks = [
        make_chunk("a", 0, 100.1, 10, 110),
        make_chunk("b", 20, 100.8, 30, 110),
        make_chunk("c", 40, 100.1, 50, 110),
    ]
    lines = group_lines(chunks, exact=True)
    assert [[c.text for c in line] for line in lines] == [["a", "c"], ["b"]]


def test_group_lines_empty():
    assert group_lines([]) == []


def test_line_text_spacing(make_chunk):
    lines = group_lines([
        make_chunk("Tot", 0, 100, 15, 110, char_space_width=4),
        make_chunk("al", 15.5, 100, 25, 110, char_space_width=4),
        make_chunk("42", 40, 100, 50, 110, char_space_width=4),
    ])
    assert line_text(lines[0]) == "Total 42"
