"""Domain models for the notebook CLI.

These are detached copies of database rows, safe to use after the
session that loaded them has closed.
"""

import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class Tag(BaseModel):
    """A named label notes can be attached to."""

    id: Optional[int] = Field(default=None, description="Database ID")
    name: str = Field(..., description="Tag name")

    model_config = {"frozen": True}

    def __str__(self) -> str:
        """Return string representation of tag."""
        return self.name


class Note(BaseModel):
    """A free-text note attached to one or more tags."""

    id: Optional[int] = Field(default=None, description="Database ID")
    text: str = Field(..., description="Note body")
    created_at: datetime.datetime = Field(
        default_factory=datetime.datetime.now,
        description="Creation time (local)"
    )
    tags: List[str] = Field(default_factory=list, description="Tag names")

    model_config = {"frozen": True}

    def __str__(self) -> str:
        """Return string representation of note."""
        return self.text
