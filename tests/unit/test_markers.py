"""Unit tests for [N] marker helpers."""

from __future__ import annotations

from deferred_citations.models import CitationData
from deferred_citations.parsing.markers import get_citation_marker_ids, replace_deferred_markers


class TestGetCitationMarkerIds:
    def test_order_and_repeats(self):
        assert get_citation_marker_ids("A [2] then [1], again [2] and [3].") == [2, 1, 2, 3]

    def test_no_markers(self):
        assert get_citation_marker_ids("Plain text with [brackets] and [ 1 ].") == []

    def test_multi_digit_ids(self):
        assert get_citation_marker_ids("See [10] and [123].") == [10, 123]

    def test_adjacent_markers(self):
        assert get_citation_marker_ids("Claim [1][2][3].") == [1, 2, 3]

    def test_non_string_input(self):
        assert get_citation_marker_ids(None) == []


class TestReplaceDeferredMarkers:
    def test_removes_markers_by_default(self):
        text = "Revenue grew 45% [1] in Q4 [2]."
        assert replace_deferred_markers(text) == "Revenue grew 45%  in Q4 ."

    def test_anchor_text_substitution(self):
        text = "Revenue grew 45% [1] in Q4 [2]."
        citation_map = {
            1: CitationData(id=1, anchor_text="45%"),
            2: CitationData(id=2, anchor_text="Q4 2024"),
        }
        result = replace_deferred_markers(text, citation_map=citation_map, show_anchor_text=True)
        assert result == "Revenue grew 45% 45% in Q4 Q4 2024."

    def test_missing_ids_become_empty(self):
        citation_map = {1: CitationData(id=1, anchor_text="found")}
        result = replace_deferred_markers(
            "Test [1] and [99].", citation_map=citation_map, show_anchor_text=True
        )
        assert result == "Test found and ."

    def test_record_without_anchor_text(self):
        citation_map = {1: CitationData(id=1, full_phrase="no anchor")}
        result = replace_deferred_markers("X [1].", citation_map=citation_map, show_anchor_text=True)
        assert result == "X ."

    def test_map_without_show_anchor_text_removes(self):
        citation_map = {1: CitationData(id=1, anchor_text="hidden")}
        assert replace_deferred_markers("X [1].", citation_map=citation_map) == "X ."

    def test_replacer_takes_precedence(self):
        citation_map = {1: CitationData(id=1, anchor_text="ignored")}
        result = replace_deferred_markers(
            "Test [1] and [2].",
            citation_map=citation_map,
            show_anchor_text=True,
            replacer=lambda marker_id, record: f"(ref{marker_id})",
        )
        assert result == "Test (ref1) and (ref2)."

    def test_text_without_markers_unchanged(self):
        text = "Nothing cited here [a]."
        assert replace_deferred_markers(text) == text

    def test_replacer_receives_looked_up_record(self):
        citation_map = {1: CitationData(id=1, full_phrase="Revenue grew 45%")}
        seen = []

        def _render(marker_id, record):
            seen.append((marker_id, record))
            return record.full_phrase if record is not None else "?"

        result = replace_deferred_markers("A [1] B [2].", citation_map=citation_map, replacer=_render)
        assert result == "A Revenue grew 45% B ?."
        assert seen == [(1, citation_map[1]), (2, None)]

    def test_plain_dict_records(self):
        citation_map = {1: {"id": 1, "anchor_text": "45%"}, 2: {"id": 2, "anchor_text": 7}}
        result = replace_deferred_markers("A [1] B [2].", citation_map=citation_map, show_anchor_text=True)
        assert result == "A 45% B ."


class TestOversizedMarkers:
    HUGE = "[" + "9" * 5000 + "]"

    def test_not_reported_as_marker(self):
        assert get_citation_marker_ids(f"x {self.HUGE} y [2]") == [2]

    def test_left_in_place_by_replacement(self):
        text = f"x {self.HUGE} y [2]"
        assert replace_deferred_markers(text) == f"x {self.HUGE} y "

    def test_eighteen_digit_id_still_a_marker(self):
        assert get_citation_marker_ids("[" + "9" * 18 + "]") == [10**18 - 1]
