"""Test doubles for the notebook service layer.

- Never mock SQLAlchemy - always use a real SQLite database
- Fakes record what they were given so tests can inspect it
"""
from typing import List


class RecordingErrorLogger:
    """Error logger that keeps errors in memory."""

    def __init__(self) -> None:
        self.errors: List[BaseException] = []

    def log_error(self, err: BaseException) -> None:
        self.errors.append(err)

    @property
    def messages(self) -> List[str]:
        return [str(err) for err in self.errors]


class RecordingService:
    """Stands in for TagService and records which command was run."""

    def __init__(self) -> None:
        self.calls: List[tuple] = []

    def save_note(self, tag_names, text):
        self.calls.append(("save_note", list(tag_names), text))

    def list_notes(self, tag_name):
        self.calls.append(("list_notes", tag_name))

    def list_today_notes(self, tag_name):
        self.calls.append(("list_today_notes", tag_name))
