"""Storage layer for the notebook CLI."""

from notebook.storage.tag_repository import TagRepository

__all__ = [
    "TagRepository",
]
