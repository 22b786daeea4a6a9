"""Tests for text-piece collection from Gemini responses."""

import re

from app.backend.services.ai import collect_text_pieces, join_text_pieces


class TestCollectTextPieces:
    """Tests for collect_text_pieces."""

    def test_top_level_match_then_nested_match(self):
        """Test fragments come out in pre-order."""
        value = {"output": "hello", "nested": {"text": "world"}}
        assert collect_text_pieces(value) == ["hello", "world"]

    def test_raw_string(self):
        """Test a bare string is a single fragment."""
        assert collect_text_pieces("just text") == ["just text"]

    def test_list_elements_in_order(self):
        """Test list elements are walked in order."""
        value = ["a", {"message": "b"}, ["c", {"content": "d"}]]
        assert collect_text_pieces(value) == ["a", "b", "c", "d"]

    def test_key_match_is_case_insensitive_substring(self):
        """Test keys containing the markers in any case match."""
        value = {
            "TEXT": "1",
            "finalOutput": "2",
            "systemMessage": "3",
            "ContentBody": "4",
        }
        assert collect_text_pieces(value) == ["1", "2", "3", "4"]

    def test_non_matching_string_values_are_ignored(self):
        """Test strings under unrelated keys are not fragments."""
        value = {"role": "model", "finishReason": "STOP", "text": "kept"}
        assert collect_text_pieces(value) == ["kept"]

    def test_non_matching_keys_are_still_walked(self):
        """Test nested matches under unrelated keys are found."""
        value = {"candidates": [{"content": {"parts": [{"text": "deep"}]}}]}
        assert collect_text_pieces(value) == ["deep"]

    def test_matching_key_with_nested_value_is_walked(self):
        """Test a matching key holding a mapping is recursed into."""
        value = {"content": {"parts": [{"text": "x"}, {"text": "y"}]}}
        assert collect_text_pieces(value) == ["x", "y"]

    def test_duplicates_are_kept(self):
        """Test equal fragments are not deduplicated."""
        value = [{"text": "same"}, {"text": "same"}]
        assert collect_text_pieces(value) == ["same", "same"]

    def test_empty_string_under_matching_key_is_kept(self):
        """Test an empty text value still counts as a fragment."""
        assert collect_text_pieces({"text": ""}) == [""]

    def test_no_matches_returns_empty(self):
        """Test values without matching keys or raw strings yield nothing."""
        value = {"usage": {"tokens": 12}, "flags": [True, None, 3.5]}
        assert collect_text_pieces(value) == []

    def test_absent_and_scalar_values(self):
        """Test None, numbers and empty inputs yield nothing."""
        assert collect_text_pieces(None) == []
        assert collect_text_pieces(42) == []
        assert collect_text_pieces("") == []
        assert collect_text_pieces({}) == []
        assert collect_text_pieces([]) == []

    def test_appends_to_existing_list(self):
        """Test results are appended to a passed-in list."""
        pieces = ["first"]
        result = collect_text_pieces({"text": "second"}, pieces)
        assert result is pieces
        assert pieces == ["first", "second"]

    def test_skip_excludes_subtree(self):
        """Test the skipped object is not visited."""
        candidate = {"content": {"parts": [{"text": "inside"}]}}
        response = {"candidates": [candidate], "outputNote": "outside"}
        assert collect_text_pieces(response, skip=candidate) == ["outside"]

    def test_custom_key_pattern(self):
        """Test the key heuristic can be swapped."""
        pattern = re.compile(r"^body$", re.IGNORECASE)
        value = {"body": "yes", "text": "no"}
        assert collect_text_pieces(value, key_pattern=pattern) == ["yes"]


class TestJoinTextPieces:
    """Tests for join_text_pieces."""

    def test_joins_with_newlines_and_trims(self):
        assert join_text_pieces(["  {\"a\":", "1}  "]) == '{"a":\n1}'

    def test_empty(self):
        assert join_text_pieces([]) == ""
