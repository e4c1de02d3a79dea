"""Configuration module for the notebook CLI."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.engine import URL, make_url

from notebook.exceptions import ConfigurationError

# Load environment variables from the project root .env file.
# Anchored to __file__ so it works regardless of the process CWD.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
load_dotenv(_PROJECT_ROOT / ".env")

# User-level config, lives alongside the logs
_USER_ENV = Path.home() / ".notebook" / ".env"
load_dotenv(_USER_ENV)


logger = logging.getLogger(__name__)


class NotebookConfig(BaseModel):
    """Configuration for the notebook CLI."""

    # Database connection parts (used when database_url is not set)
    db_host: str = Field(
        default_factory=lambda: os.getenv("NOTEBOOK_DB_HOST", "localhost")
    )
    db_user: str = Field(
        default_factory=lambda: os.getenv("NOTEBOOK_DB_USER", "postgres")
    )
    db_password: str = Field(
        default_factory=lambda: os.getenv("NOTEBOOK_DB_PASSWORD", "admin")
    )
    db_name: str = Field(default_factory=lambda: os.getenv("NOTEBOOK_DB_NAME", "z"))
    db_port: int = Field(
        default_factory=lambda: os.getenv("NOTEBOOK_DB_PORT", "5445"),
        validate_default=True,
    )
    db_sslmode: str = Field(
        default_factory=lambda: os.getenv("NOTEBOOK_DB_SSLMODE", "disable")
    )
    db_timezone: str = Field(
        default_factory=lambda: os.getenv("NOTEBOOK_DB_TIMEZONE", "Europe/Moscow")
    )
    # Full SQLAlchemy URL; takes precedence over the parts above
    database_url: Optional[str] = Field(
        default_factory=lambda: os.getenv("NOTEBOOK_DATABASE_URL") or None
    )
    # Error log location (app.log is created inside)
    log_dir: Path = Field(
        default_factory=lambda: Path(
            os.getenv("NOTEBOOK_LOG_DIR", str(Path.home() / ".notebook" / "logs"))
        ).expanduser()
    )
    log_level: str = Field(
        default_factory=lambda: os.getenv("NOTEBOOK_LOG_LEVEL", "WARNING"),
        validate_default=True,
    )

    model_config = {"validate_assignment": True}

    @field_validator("db_port", mode="before")
    @classmethod
    def _parse_port(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip()
            if not value.isdigit():
                raise ValueError(f"db_port must be a number, got '{value}'")
            return int(value)
        return value

    @field_validator("db_port")
    @classmethod
    def _validate_port(cls, value: int) -> int:
        if not 0 < value < 65536:
            raise ValueError("db_port must be between 1 and 65535")
        return value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value}")
        return value

    def get_db_url(self) -> str:
        """Get the database URL.

        NOTEBOOK_DATABASE_URL wins when set; otherwise a PostgreSQL URL is
        assembled from the individual connection settings.
        """
        if self.database_url:
            return self.database_url
        url = URL.create(
            "postgresql+psycopg2",
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )
        return url.render_as_string(hide_password=False)

    def get_connect_args(self) -> Dict[str, Any]:
        """Driver-level connection arguments for the configured backend."""
        backend = make_url(self.get_db_url()).get_backend_name()
        if backend != "postgresql":
            return {}
        return {
            "sslmode": self.db_sslmode,
            "options": f"-c timezone={self.db_timezone}",
        }

    def get_log_dir(self) -> Path:
        """Get the error log directory, creating it if needed."""
        self.log_dir.mkdir(parents=True, exist_ok=True)
        return self.log_dir


def load_config() -> NotebookConfig:
    """Build the configuration from the current environment.

    Raises:
        ConfigurationError: If a setting has an invalid value.
    """
    try:
        return NotebookConfig()
    except PydanticValidationError as e:
        first = e.errors()[0]
        config_key = ".".join(str(part) for part in first["loc"]) or None
        raise ConfigurationError(
            f"Invalid configuration: {first['msg']}",
            config_key=config_key,
        ) from e


# Create a global config instance
config = load_config()
