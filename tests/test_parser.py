"""Tests for the textual tag scanner."""

from parser import TAG_KINDS, find_next_tag, find_tag_pos, get_tag_text, tag_end


class TestFindTagPos:
    def test_plain_tag(self):
        assert find_tag_pos("<svg><rect/></svg>", 0, "rect") == 5

    def test_namespaced_tag_points_at_colon(self):
        assert find_tag_pos("<svg:svg><svg:rect/>", 0, "rect") == 13

    def test_uppercase_tag(self):
        assert find_tag_pos('<RECT x="1"/>', 0, "rect") == 0

    def test_missing_tag(self):
        assert find_tag_pos("<svg></svg>", 0, "circle") == -1

    def test_search_starts_at_cursor(self):
        assert find_tag_pos("<rect/><rect/>", 1, "rect") == 7

    def test_earliest_of_plain_and_namespaced(self):
        text = "<svg:circle/><circle/>"
        assert find_tag_pos(text, 0, "circle") == 4


class TestFindNextTag:
    def test_picks_earliest_kind(self):
        assert find_next_tag("<svg><circle/><rect/></svg>", 0) == (5, "circle")

    def test_polyline_is_not_a_line(self):
        assert find_next_tag('<polyline points=""/>', 0) == (0, "polyline")

    def test_nothing_found(self):
        assert find_next_tag("<svg><desc>plain</desc></svg>", 0) == (-1, None)

    def test_group_kind_is_supported(self):
        assert "g" in TAG_KINDS
        assert find_next_tag("<svg><g></g></svg>", 0) == (5, "g")


class TestTagText:
    def test_missing_terminator_runs_to_end(self):
        assert tag_end("<rect x='1'/>", 0, ",") == len("<rect x='1'/>")

    def test_tag_text_runs_past_terminator(self):
        text = '<svg width="160" height="120"><polygon points="0,0,10,0"/>'
        tag, end = get_tag_text(text, 30, ",")
        assert end == text.index(",")
        assert tag == '<polygon points="0,0,10,0"/>'

    def test_tag_text_near_start_is_cut_short(self):
        """The slice length is the terminator's position, not its distance from the start."""
        tag, end = get_tag_text('<svg><polygon points="0,0,10,0"/>', 5, ",")
        assert end == 23
        assert tag == '<polygon points="0,0,10'

    def test_tag_text_at_document_start(self):
        tag, end = get_tag_text("<line/><rect/>", 0, ">")
        assert (tag, end) == ("<line/", 6)
