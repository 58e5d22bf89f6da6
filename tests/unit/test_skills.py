"""Tests for the citation parsing agent skill."""

from __future__ import annotations

from deferred_citations.skills.citations import citation_payload

RESPONSE = (
    "Revenue was $1B [1].\n"
    "<<<CITATION_DATA>>>\n"
    '{"abc123": [{"n": 1, "f": "Revenue: $1B", "k": "$1B", "p": "0_0", "l": [2, 1]}]}\n'
    "<<<END_CITATION_DATA>>>"
)


class TestCitationPayload:
    def test_success(self):
        payload = citation_payload(RESPONSE)
        assert payload["success"] is True
        assert payload["visibleText"] == "Revenue was $1B [1]."
        assert payload["markerIds"] == [1]
        assert payload["citations"] == [
            {
                "attachmentId": "abc123",
                "fullPhrase": "Revenue: $1B",
                "anchorText": "$1B",
                "pageNumber": 1,
                "startPageId": "page_number_1_index_0",
                "lineIds": [1, 2],
                "citationNumber": 1,
            }
        ]
        assert "error" not in payload

    def test_invalid_input(self):
        payload = citation_payload("")
        assert payload["success"] is False
        assert payload["citations"] == []
        assert "Invalid input" in payload["error"]

    def test_plain_text(self):
        payload = citation_payload("No block [3].")
        assert payload["success"] is True
        assert payload["markerIds"] == [3]
        assert payload["citations"] == []
