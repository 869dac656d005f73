"""Tests for the title sanitizer."""

import pytest

from ghdigest.engines.digest.sanitizer import sanitize_title


class TestSanitizeTitle:
    def test_strips_markup(self):
        assert sanitize_title("Fix bug!! <script>") == "Fix bug script"

    def test_keeps_allowed_punctuation(self):
        title = "feat(api): add /v2 routes; docs & tests + cleanup - 1.0"
        assert sanitize_title(title) == title

    def test_collapses_whitespace(self):
        assert sanitize_title("a   b") == "a b"

    def test_newlines_and_tabs_removed_not_spaced(self):
        assert sanitize_title("one\ntwo\tthree") == "onetwothree"

    def test_non_ascii_removed(self):
        assert sanitize_title("café ☕ time") == "caf time"

    def test_does_not_trim(self):
        assert sanitize_title("  padded  ") == " padded "

    @pytest.mark.parametrize("title", ["", "!!!", "`*_[]`"])
    def test_can_become_empty(self, title):
        assert sanitize_title(title) == ""

    def test_idempotent(self):
        once = sanitize_title("Weird  [title] with `code` and   gaps")
        assert sanitize_title(once) == once
