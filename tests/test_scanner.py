"""Tests for the pre-render username scanner and metadata merge."""

from sitementions.scanner import merge_usernames, scan_usernames


class TestScanUsernames:
    """Test scan_usernames()."""

    def test_none_is_noop(self) -> None:
        assert scan_usernames(None) == []

    def test_empty_text(self) -> None:
        assert scan_usernames("") == []

    def test_mentions_in_order_of_first_appearance(self) -> None:
        assert scan_usernames("cc @bob, @alice and @bob again") == ["bob", "alice"]

    def test_requires_preceding_whitespace(self) -> None:
        """An address like me@example.com is not a mention."""
        assert scan_usernames("write to me@example.com or ping @alice") == ["alice"]

    def test_not_anchored_at_start_of_text(self) -> None:
        """A mention at offset 0 has no preceding whitespace and is skipped."""
        assert scan_usernames("@alice said hi to @bob") == ["bob"]

    def test_newline_and_tab_count_as_whitespace(self) -> None:
        assert scan_usernames("first\n@alice\tthen\t@bob") == ["alice", "bob"]

    def test_hyphenated_and_underscored_names(self) -> None:
        assert scan_usernames("by @jane-doe and @john_smith") == ["jane-doe", "john_smith"]

    def test_case_sensitive(self) -> None:
        assert scan_usernames(" @Alice @alice") == ["Alice", "alice"]

    def test_name_stops_at_punctuation(self) -> None:
        assert scan_usernames("thanks @alice! and @bob.") == ["alice", "bob"]

    def test_non_ascii_letters_end_the_name(self) -> None:
        assert scan_usernames("hi @josé and @bob") == ["jos", "bob"]


class TestMergeUsernames:
    """Test merge_usernames()."""

    def test_none_existing(self) -> None:
        assert merge_usernames(None, ["alice", "bob"]) == ["alice", "bob"]

    def test_keeps_existing_order_and_appends_new(self) -> None:
        assert merge_usernames(["carol", "alice"], ["alice", "bob"]) == ["carol", "alice", "bob"]

    def test_idempotent(self) -> None:
        once = merge_usernames(["carol"], ["alice", "bob"])
        twice = merge_usernames(once, ["alice", "bob"])
        assert twice == once == ["carol", "alice", "bob"]

    def test_never_removes_entries(self) -> None:
        assert merge_usernames(["carol"], []) == ["carol"]

    def test_returns_new_list(self) -> None:
        existing = ["carol"]
        merged = merge_usernames(existing, ["alice"])
        assert existing == ["carol"]
        assert merged is not existing
