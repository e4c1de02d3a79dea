"""Command line argument handling.

Tokens are split into tag names, note text and a "today" flag:

    notebook [today] TAG... [-- NOTE_TEXT]
    notebook TAG NOTE_TEXT
    notebook TAG
"""

from dataclasses import dataclass, field
from typing import List, Sequence

from notebook.exceptions import ErrorCode, ValidationError
from notebook.services.tag_service import TagService

TODAY_TOKEN = "today"
TEXT_SEPARATOR = "--"


@dataclass
class ParsedArgs:
    """Result of splitting the command line."""

    tag_names: List[str] = field(default_factory=list)
    note_text: str = ""
    today: bool = False

    def dispatch(self, service: TagService) -> None:
        """Run the single command these arguments ask for."""
        if self.today and self.tag_names:
            service.list_today_notes(self.tag_names[0])
            return

        if self.tag_names and self.note_text:
            service.save_note(self.tag_names, self.note_text)
            return

        if self.tag_names:
            service.list_notes(self.tag_names[0])
            return

        raise ValidationError(
            "arguments and text must not be empty",
            field="tag_names",
            code=ErrorCode.EMPTY_ARGUMENTS,
        )


def parse_args(tokens: Sequence[str]) -> ParsedArgs:
    """Split raw tokens into tag names, note text and the today flag.

    "today" anywhere before "--" sets the flag. Everything after "--" is the
    note text. Without "--", two or more names mean the last one is the
    note text; with "--" and nothing after it there is no note text.
    """
    tag_names: List[str] = []
    note_text = ""
    today = False
    separator_seen = False

    for i, token in enumerate(tokens):
        if token == TODAY_TOKEN:
            today = True
            continue

        if token == TEXT_SEPARATOR:
            separator_seen = True
            note_text = " ".join(tokens[i + 1:])
            break

        tag_names.append(token)

    if not separator_seen and len(tag_names) > 1:
        note_text = tag_names.pop()

    return ParsedArgs(tag_names=tag_names, note_text=note_text, today=today)
