#!/usr/bin/env python
"""Main entry point for the notebook CLI.

Modules that read the configuration are imported inside main() so an
invalid setting is reported like any other error instead of failing at
import time.
"""
import logging
import sys
from typing import List, Optional

from notebook.exceptions import ErrorCode, NotebookError, StorageError


def connect_database(settings, error_logger):
    """Create the engine and make sure the schema exists."""
    from sqlalchemy.exc import SQLAlchemyError

    from notebook.models.db_models import create_db_engine, init_db

    logger = logging.getLogger(__name__)
    try:
        engine = init_db(
            create_db_engine(settings.get_db_url(), settings.get_connect_args())
        )
    except SQLAlchemyError as e:
        error = StorageError(
            "Failed to connect to the database",
            operation="connect",
            code=ErrorCode.STORAGE_CONNECTION_FAILED,
            original_error=e,
        )
        error_logger.log_error(error)
        raise error from e
    logger.info("Database connected successfully.")
    return engine


def main(argv: Optional[List[str]] = None) -> int:
    """Run one notebook command and return the exit code."""
    tokens = sys.argv[1:] if argv is None else argv

    try:
        from notebook.config import load_config

        settings = load_config()
    except NotebookError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    from notebook.cli.args_handler import parse_args
    from notebook.models.db_models import get_session_factory
    from notebook.observability import FileErrorLogger, configure_logging
    from notebook.services.tag_service import TagService
    from notebook.storage.tag_repository import TagRepository

    configure_logging(level=getattr(logging, settings.log_level, logging.WARNING))
    logger = logging.getLogger(__name__)

    try:
        error_logger = FileErrorLogger(settings.get_log_dir())
    except OSError as e:
        print(f"Error: cannot open log file: {e}", file=sys.stderr)
        return 1

    engine = None
    try:
        engine = connect_database(settings, error_logger)
        service = TagService(
            repository=TagRepository(get_session_factory(engine)),
            error_logger=error_logger,
        )
        parse_args(tokens).dispatch(service)
    except NotebookError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    finally:
        if engine is not None:
            engine.dispose()
        error_logger.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
