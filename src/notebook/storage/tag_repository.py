"""Repository for tags and the notes attached to them."""
import datetime
import logging
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from notebook.exceptions import ErrorCode, StorageError, TagNotFoundError
from notebook.models.db_models import DBNote, DBTag, tag_notes
from notebook.models.schema import Note, Tag

logger = logging.getLogger(__name__)


def start_of_today() -> datetime.datetime:
    """Local midnight of the current day."""
    return datetime.datetime.combine(datetime.date.today(), datetime.time.min)


class TagRepository:
    """Repository for managing tags and their notes.

    Every database failure is surfaced as a StorageError with the
    original exception chained.
    """

    def __init__(self, session_factory):
        """Initialize the tag repository.

        Args:
            session_factory: SQLAlchemy session factory for database operations.
        """
        self.session_factory = session_factory

    def get_or_create(self, tag_name: str) -> Tag:
        """Get an existing tag or create a new one.

        Args:
            tag_name: The name of the tag.

        Returns:
            The Tag object.
        """
        try:
            with self.session_factory() as session:
                db_tag = session.scalar(select(DBTag).where(DBTag.name == tag_name))
                if db_tag is None:
                    db_tag = DBTag(name=tag_name)
                    session.add(db_tag)
                    session.commit()
                    logger.debug(f"Created tag '{tag_name}' (id={db_tag.id})")
                return db_tag.to_schema()
        except SQLAlchemyError as e:
            raise StorageError(
                f"Failed to get or create tag '{tag_name}'",
                operation="get_or_create",
                code=ErrorCode.STORAGE_WRITE_FAILED,
                original_error=e,
            ) from e

    def get(self, tag_name: str) -> Tag:
        """Get a tag by name.

        Raises:
            TagNotFoundError: If no tag has this name.
        """
        try:
            with self.session_factory() as session:
                db_tag = session.scalar(select(DBTag).where(DBTag.name == tag_name))
                if db_tag is None:
                    raise TagNotFoundError(tag_name)
                return db_tag.to_schema()
        except SQLAlchemyError as e:
            raise StorageError(
                f"Failed to read tag '{tag_name}'",
                operation="get",
                original_error=e,
            ) from e

    def get_all(self) -> List[Tag]:
        """Get all tags in the system."""
        try:
            with self.session_factory() as session:
                db_tags = session.scalars(select(DBTag).order_by(DBTag.id)).all()
                return [tag.to_schema() for tag in db_tags]
        except SQLAlchemyError as e:
            raise StorageError(
                "Failed to list tags", operation="get_all", original_error=e
            ) from e

    def add_note_to_tags(self, tag_names: List[str], text: str) -> Note:
        """Create one note attached to every named tag.

        Missing tags are created first, each in its own transaction, so they
        survive even if the note insert fails afterwards. The note and all
        of its associations are written in a single transaction.

        Args:
            tag_names: Names of the tags to attach the note to.
            text: The note body.

        Returns:
            The created Note.
        """
        tag_ids = []
        for name in tag_names:
            tag = self.get_or_create(name)
            if tag.id not in tag_ids:
                tag_ids.append(tag.id)

        try:
            with self.session_factory() as session:
                db_tags = session.scalars(
                    select(DBTag).where(DBTag.id.in_(tag_ids))
                ).all()
                db_note = DBNote(text=text, tags=list(db_tags))
                session.add(db_note)
                session.commit()
                logger.debug(
                    f"Created note {db_note.id} with {len(db_tags)} tag(s)"
                )
                return db_note.to_schema()
        except SQLAlchemyError as e:
            raise StorageError(
                "Failed to save note",
                operation="add_note_to_tags",
                code=ErrorCode.STORAGE_WRITE_FAILED,
                original_error=e,
            ) from e

    def get_notes_by_tag(self, tag_name: str) -> List[Note]:
        """Get all notes attached to a tag.

        Raises:
            TagNotFoundError: If no tag has this name.
        """
        try:
            with self.session_factory() as session:
                db_tag = session.scalar(select(DBTag).where(DBTag.name == tag_name))
                if db_tag is None:
                    raise TagNotFoundError(tag_name)

                db_notes = session.scalars(
                    select(DBNote)
                    .join(tag_notes, DBNote.id == tag_notes.c.note_id)
                    .where(tag_notes.c.tag_id == db_tag.id)
                    .options(selectinload(DBNote.tags))
                    .order_by(DBNote.created_at, DBNote.id)
                ).all()
                return [note.to_schema() for note in db_notes]
        except SQLAlchemyError as e:
            raise StorageError(
                f"Failed to list notes for tag '{tag_name}'",
                operation="get_notes_by_tag",
                original_error=e,
            ) from e

    def get_today_notes_by_tag(self, tag_name: str) -> List[Note]:
        """Get notes attached to a tag that were created today.

        "Today" starts at local midnight, evaluated when the method is
        called. An unknown tag simply has no notes.
        """
        since = start_of_today()
        try:
            with self.session_factory() as session:
                db_notes = session.scalars(
                    select(DBNote)
                    .join(tag_notes, DBNote.id == tag_notes.c.note_id)
                    .join(DBTag, DBTag.id == tag_notes.c.tag_id)
                    .where(DBTag.name == tag_name)
                    .where(DBNote.created_at >= since)
                    .options(selectinload(DBNote.tags))
                    .order_by(DBNote.created_at, DBNote.id)
                ).all()
                return [note.to_schema() for note in db_notes]
        except SQLAlchemyError as e:
            raise StorageError(
                f"Failed to list today's notes for tag '{tag_name}'",
                operation="get_today_notes_by_tag",
                original_error=e,
            ) from e

    def delete(self, tag_name: str) -> int:
        """Delete a tag and its note associations.

        The notes themselves are kept. Deleting an unknown tag is not an
        error.

        Returns:
            Number of tags deleted (0 or 1).
        """
        try:
            with self.session_factory() as session:
                db_tags = session.scalars(
                    select(DBTag).where(DBTag.name == tag_name)
                ).all()
                for db_tag in db_tags:
                    session.delete(db_tag)
                session.commit()
                return len(db_tags)
        except SQLAlchemyError as e:
            raise StorageError(
                f"Failed to delete tag '{tag_name}'",
                operation="delete",
                code=ErrorCode.STORAGE_DELETE_FAILED,
                original_error=e,
            ) from e

    def delete_all_notes_and_tags(self) -> None:
        """Delete every association, then every note, then every tag.

        Each phase commits separately; a failure part way through leaves
        the earlier phases applied.
        """
        try:
            with self.session_factory() as session:
                session.execute(delete(tag_notes))
                session.commit()

                session.execute(delete(DBNote))
                session.commit()

                session.execute(delete(DBTag))
                session.commit()
        except SQLAlchemyError as e:
            raise StorageError(
                "Failed to delete all notes and tags",
                operation="delete_all_notes_and_tags",
                code=ErrorCode.STORAGE_DELETE_FAILED,
                original_error=e,
            ) from e
