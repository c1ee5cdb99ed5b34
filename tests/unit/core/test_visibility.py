"""Unit tests for visibility checks and shared note discovery."""

import pytest

from src.diaryx.core.frontmatter import parse_document
from src.diaryx.core.visibility import can_view, find_shared_with, to_visibility_list


class Dummy:
    def __init__(self, **kwargs):
        self.__dict__.update(kwargs)


def shared_row(note_id, emails, last_modified=100, term="friends", source_name=None):
    markdown = (
        "---\n"
        f"visibility: [{term}]\n"
        "visibility_emails:\n"
        f"  {term}: [{', '.join(emails)}]\n"
        "---\n"
        f"Note {note_id}"
    )
    return Dummy(id=note_id, markdown=markdown, source_name=source_name, last_modified=last_modified)


class TestToVisibilityList:
    def test_scalar(self):
        assert to_visibility_list(" friends ") == ["friends"]

    def test_list_drops_blank_entries(self):
        assert to_visibility_list(["a", " ", None, " b "]) == ["a", "b"]

    @pytest.mark.parametrize("value", [None, "", "   ", 3, {"a": 1}])
    def test_other_values_are_empty(self, value):
        assert to_visibility_list(value) == []


class TestCanView:
    note = parse_document(
        "---\n"
        "visibility: [friends]\n"
        "visibility_emails:\n"
        "  friends: [alice@x.com]\n"
        "---\n"
        "Hello"
    )

    def test_listed_email_can_view(self):
        assert can_view(self.note, "alice@x.com") is True

    def test_unlisted_email_cannot_view(self):
        assert can_view(self.note, "bob@x.com") is False

    @pytest.mark.parametrize("email", ["Alice@X.com", "ALICE@X.COM", "  alice@x.com  "])
    def test_email_case_and_whitespace_are_ignored(self, email):
        assert can_view(self.note, email) is True

    def test_note_without_visibility_is_private(self):
        note = parse_document("---\nvisibility_emails:\n  friends: [alice@x.com]\n---\nHi")
        assert can_view(note, "alice@x.com") is False

    def test_term_keys_match_case_insensitively(self):
        note = parse_document(
            "---\nvisibility: Friends\nvisibility_emails:\n  FRIENDS: [Alice@X.com]\n---\nHi"
        )
        assert can_view(note, "alice@x.com") is True

    def test_any_term_grants_access(self):
        note = parse_document(
            "---\n"
            "visibility: [work, family]\n"
            "visibility_emails:\n"
            "  work: [boss@x.com]\n"
            "  family:\n"
            "    - mom@x.com\n"
            "---\n"
        )
        assert can_view(note, "mom@x.com") is True
        assert can_view(note, "boss@x.com") is True
        assert can_view(note, "other@x.com") is False

    def test_term_without_email_list_denies(self):
        note = parse_document("---\nvisibility: public\n---\nHi")
        assert can_view(note, "anyone@x.com") is False


class TestFindSharedWith:
    def test_filters_out_non_matching_rows(self):
        rows = [
            shared_row("a", ["bob@x.com"]),
            shared_row("b", ["carol@x.com", "bob@x.com.evil"]),
            Dummy(id="c", markdown="mentions bob@x.com but has no metadata", source_name=None, last_modified=1),
        ]
        notes = find_shared_with("bob@x.com", rows)
        assert [n.id for n in notes] == ["a"]

    def test_ties_sort_by_id(self):
        rows = [shared_row("b", ["bob@x.com"]), shared_row("a", ["bob@x.com"])]
        assert [n.id for n in find_shared_with("bob@x.com", rows)] == ["a", "b"]

    def test_newest_first(self):
        rows = [
            shared_row("old", ["bob@x.com"], last_modified=10),
            shared_row("new", ["bob@x.com"], last_modified=30),
            shared_row("mid", ["bob@x.com"], last_modified=20),
        ]
        assert [n.id for n in find_shared_with("bob@x.com", rows)] == ["new", "mid", "old"]

    def test_duplicate_ids_keep_first_row(self):
        rows = [
            shared_row("n1", ["bob@x.com"], source_name="first.md"),
            shared_row("n1", ["bob@x.com"], source_name="second.md"),
        ]
        notes = find_shared_with("bob@x.com", rows)
        assert len(notes) == 1
        assert notes[0].source_name == "first.md"

    def test_stored_values_override_parsed_ones(self):
        notes = find_shared_with("bob@x.com", [shared_row("n1", ["bob@x.com"], 1234, source_name="n1.md")])
        assert notes[0].last_modified == 1234
        assert notes[0].source_name == "n1.md"
        assert notes[0].body == "Note n1"

    def test_non_finite_stored_timestamp_falls_back_to_now(self):
        notes = find_shared_with("bob@x.com", [shared_row("n1", ["bob@x.com"], float("nan"))])
        assert notes[0].last_modified > 0

    def test_broken_row_is_skipped(self, caplog):
        rows = [
            Dummy(id="broken", markdown=None, source_name=None, last_modified=5),
            shared_row("ok", ["bob@x.com"]),
        ]
        notes = find_shared_with("bob@x.com", rows)
        assert [n.id for n in notes] == ["ok"]
        assert "broken" in caplog.text

    def test_no_candidates(self):
        assert find_shared_with("bob@x.com", []) == []
