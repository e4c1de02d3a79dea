"""SQLAlchemy database models for the notebook CLI."""
import datetime

from sqlalchemy import (Column, DateTime, ForeignKey, Integer, String, Table,
                        Text, create_engine, event)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship, sessionmaker

from notebook.config import config
from notebook.models.schema import Note, Tag

# Create base class for SQLAlchemy models
Base = declarative_base()

# Association table for tags and notes
tag_notes = Table(
    "tag_notes",
    Base.metadata,
    Column(
        "tag_id", Integer, ForeignKey("tags.id", ondelete="CASCADE"),
        primary_key=True
    ),
    Column(
        "note_id", Integer, ForeignKey("notes.id", ondelete="CASCADE"),
        primary_key=True
    ),
)


class DBTag(Base):
    """Database model for a tag."""
    __tablename__ = "tags"
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), unique=True, nullable=False)

    # Relationships
    notes = relationship(
        "DBNote", secondary=tag_notes, back_populates="tags"
    )

    def to_schema(self) -> Tag:
        """Detach into a domain Tag."""
        return Tag(id=self.id, name=self.name)

    def __repr__(self) -> str:
        """Return string representation of tag."""
        return f"<Tag(id={self.id}, name='{self.name}')>"


class DBNote(Base):
    """Database model for a note."""
    __tablename__ = "notes"
    id = Column(Integer, primary_key=True, autoincrement=True)
    text = Column(Text, nullable=False)
    created_at = Column(
        DateTime, default=datetime.datetime.now, nullable=False, index=True
    )

    # Relationships
    tags = relationship(
        "DBTag", secondary=tag_notes, back_populates="notes"
    )

    def to_schema(self) -> Note:
        """Detach into a domain Note (loads the tag names)."""
        return Note(
            id=self.id,
            text=self.text,
            created_at=self.created_at,
            tags=[tag.name for tag in self.tags],
        )

    def __repr__(self) -> str:
        """Return string representation of note."""
        return f"<Note(id={self.id}, text='{self.text[:30]}')>"


def create_db_engine(url: str = None, connect_args: dict = None) -> Engine:
    """Create an engine for the configured database.

    SQLite connections get foreign key enforcement switched on so the
    ON DELETE CASCADE rules of tag_notes apply there too.
    """
    if url is None:
        url = config.get_db_url()
        if connect_args is None:
            connect_args = config.get_connect_args()

    engine = create_engine(url, connect_args=connect_args or {}, pool_pre_ping=True)

    if engine.dialect.name == "sqlite":
        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def init_db(engine: Engine = None) -> Engine:
    """Create the schema if it does not exist yet and return the engine."""
    if engine is None:
        engine = create_db_engine()
    Base.metadata.create_all(engine)
    return engine


def get_session_factory(engine: Engine = None):
    """Get a session factory for the database."""
    if engine is None:
        engine = create_db_engine()
    return sessionmaker(bind=engine, expire_on_commit=False)
