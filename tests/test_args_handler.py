"""Tests for command line parsing and dispatch."""
import pytest

from notebook.cli.args_handler import ParsedArgs, parse_args
from notebook.exceptions import ErrorCode, ValidationError
from tests.fakes import RecordingService


class TestParseArgs:
    """Tests for parse_args()."""

    def test_separator_splits_tags_from_text(self):
        parsed = parse_args(["a", "b", "c", "--", "hello", "world"])
        assert parsed.tag_names == ["a", "b", "c"]
        assert parsed.note_text == "hello world"
        assert parsed.today is False

    def test_last_token_becomes_text(self):
        parsed = parse_args(["tag1", "note body"])
        assert parsed.tag_names == ["tag1"]
        assert parsed.note_text == "note body"
        assert parsed.today is False

    def test_today_flag(self):
        parsed = parse_args(["today", "tag1"])
        assert parsed.tag_names == ["tag1"]
        assert parsed.note_text == ""
        assert parsed.today is True

    def test_today_anywhere_before_separator(self):
        parsed = parse_args(["work", "today", "home"])
        assert parsed.today is True
        assert "today" not in parsed.tag_names
        # Two names left, so the last one is the text
        assert parsed.tag_names == ["work"]
        assert parsed.note_text == "home"

    def test_today_after_separator_is_text(self):
        parsed = parse_args(["work", "--", "done", "today"])
        assert parsed.today is False
        assert parsed.note_text == "done today"

    def test_single_tag(self):
        parsed = parse_args(["work"])
        assert parsed.tag_names == ["work"]
        assert parsed.note_text == ""

    def test_three_tags_without_separator(self):
        parsed = parse_args(["a", "b", "c"])
        assert parsed.tag_names == ["a", "b"]
        assert parsed.note_text == "c"

    def test_separator_with_nothing_after(self):
        """A trailing "--" keeps every name as a tag and leaves no text."""
        parsed = parse_args(["a", "b", "--"])
        assert parsed.tag_names == ["a", "b"]
        assert parsed.note_text == ""
        assert parsed.today is False

    def test_separator_with_nothing_after_lists_first_tag(self):
        service = RecordingService()
        parse_args(["a", "b", "--"]).dispatch(service)
        assert service.calls == [("list_notes", "a")]

    def test_second_separator_is_part_of_text(self):
        parsed = parse_args(["a", "--", "x", "--", "y"])
        assert parsed.tag_names == ["a"]
        assert parsed.note_text == "x -- y"

    def test_empty(self):
        parsed = parse_args([])
        assert parsed == ParsedArgs()

    def test_empty_strings_are_tag_names(self):
        parsed = parse_args(["", "--", "text"])
        assert parsed.tag_names == [""]
        assert parsed.note_text == "text"

    @pytest.mark.parametrize("tokens", [
        ["today", "x"],
        ["x", "today"],
        ["today", "x", "y", "--", "z"],
        ["a", "today", "b", "c"],
    ])
    def test_today_never_in_tags(self, tokens):
        parsed = parse_args(tokens)
        assert parsed.today is True
        assert "today" not in parsed.tag_names


class TestDispatch:
    """Tests for ParsedArgs.dispatch() priority order."""

    def test_today_lists_first_tag_only(self):
        service = RecordingService()
        ParsedArgs(tag_names=["a", "b"], note_text="ignored", today=True).dispatch(service)
        assert service.calls == [("list_today_notes", "a")]

    def test_tags_and_text_save(self):
        service = RecordingService()
        ParsedArgs(tag_names=["a", "b"], note_text="hi").dispatch(service)
        assert service.calls == [("save_note", ["a", "b"], "hi")]

    def test_tag_without_text_lists(self):
        service = RecordingService()
        ParsedArgs(tag_names=["a", "b"]).dispatch(service)
        assert service.calls == [("list_notes", "a")]

    def test_nothing_raises(self):
        service = RecordingService()
        with pytest.raises(ValidationError) as exc_info:
            ParsedArgs(note_text="orphan text").dispatch(service)
        assert exc_info.value.code == ErrorCode.EMPTY_ARGUMENTS
        assert exc_info.value.field == "tag_names"
        assert "must not be empty" in exc_info.value.message
        assert service.calls == []

    def test_today_without_tags_raises(self):
        with pytest.raises(ValidationError):
            ParsedArgs(today=True).dispatch(RecordingService())

    def test_end_to_end_parse_and_dispatch(self):
        service = RecordingService()
        parse_args(["work", "buy milk"]).dispatch(service)
        assert service.calls == [("save_note", ["work"], "buy milk")]
