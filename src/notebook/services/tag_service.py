"""Service layer turning notebook commands into repository calls.

Output is plain text meant for a terminal. Every error coming back from
the repository is written to the error log before being re-raised.
"""

import logging
import sys
from typing import Callable, List, Optional, TextIO, TypeVar

from notebook.exceptions import ErrorCode, NotebookError, ValidationError
from notebook.models.schema import Note
from notebook.observability import ErrorLogger, timed_operation
from notebook.storage.tag_repository import TagRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Note text that lists the given tags instead of being saved
LIST_ALL_KEYWORD = "all"


class TagService:
    """Commands over tags and notes."""

    def __init__(
        self,
        repository: TagRepository,
        error_logger: ErrorLogger,
        out: Optional[TextIO] = None,
    ):
        self.repository = repository
        self.error_logger = error_logger
        self.out = out

    def _print(self, line: str) -> None:
        print(line, file=self.out if self.out is not None else sys.stdout)

    def _call(self, func: Callable[..., T], *args) -> T:
        """Run a repository call, logging any failure before re-raising."""
        try:
            return func(*args)
        except NotebookError as e:
            self.error_logger.log_error(e)
            raise

    def save_note(self, tag_names: List[str], text: str) -> Optional[Note]:
        """Save a note under every given tag.

        The text "all" is a request to list the notes of each tag instead.

        Returns:
            The created Note, or None when the tags were listed.
        """
        if not tag_names or not text:
            raise ValidationError(
                "arguments and text must not be empty",
                field="tag_names" if not tag_names else "note_text",
                code=ErrorCode.EMPTY_ARGUMENTS,
            )

        if text == LIST_ALL_KEYWORD:
            for tag_name in tag_names:
                self.list_notes(tag_name)
            return None

        with timed_operation("save_note", tags=len(tag_names)):
            note = self._call(self.repository.add_note_to_tags, tag_names, text)

        self._print(f"Note '{text}' added to tags: {tag_names}")
        return note

    def list_notes(self, tag_name: str) -> List[Note]:
        """Print every note attached to a tag."""
        with timed_operation("list_notes", tag=tag_name) as op:
            notes = self._call(self.repository.get_notes_by_tag, tag_name)
            op["result_count"] = len(notes)

        if not notes:
            self._print(f"No notes for tag '{tag_name}'.")
            return notes

        self._print(f"Notes for tag '{tag_name}':")
        for note in notes:
            self._print(f"- {note.text}")
        return notes

    def list_today_notes(self, tag_name: str) -> List[Note]:
        """Print the notes attached to a tag that were made today."""
        with timed_operation("list_today_notes", tag=tag_name) as op:
            notes = self._call(self.repository.get_today_notes_by_tag, tag_name)
            op["result_count"] = len(notes)

        if not notes:
            self._print(f"No notes made today for tag '{tag_name}'.")
            return notes

        self._print(f"Notes made today for tag '{tag_name}':")
        for note in notes:
            self._print(f"- {note.text}")
        return notes

    def list_tags(self) -> List[str]:
        """Print the name of every tag."""
        tags = self._call(self.repository.get_all)
        if not tags:
            self._print("No tags.")
        for tag in tags:
            self._print(tag.name)
        return [tag.name for tag in tags]

    def delete_tag(self, tag_name: str) -> None:
        """Delete a tag, keeping its notes."""
        deleted = self._call(self.repository.delete, tag_name)
        logger.debug(f"delete_tag '{tag_name}': {deleted} row(s)")
        self._print(f"Tag '{tag_name}' deleted.")

    def delete_all(self) -> None:
        """Delete every note and every tag."""
        self._call(self.repository.delete_all_notes_and_tags)
        self._print("All notes and tags deleted.")
