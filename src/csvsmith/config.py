"""Configuration management for csvsmith."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    """Parse a true/false flag from an environment variable."""
    return os.getenv(name, default).lower() == "true"


def _parse_line_terminator() -> str:
    """Parse the record terminator, accepting escaped forms like '\\r\\n'."""
    value = os.getenv("CSV_LINE_TERMINATOR")
    if not value:
        return "\r\n"
    return value.replace("\\r", "\r").replace("\\n", "\n")


class Settings(BaseModel):
    """Application settings."""

    # CSV dialect used for both reading and writing
    csv_delimiter: str = os.getenv("CSV_DELIMITER", ",")
    csv_quote_char: str = os.getenv("CSV_QUOTE_CHAR", '"')
    csv_line_terminator: str = _parse_line_terminator()
    csv_encoding: str = os.getenv("CSV_ENCODING", "utf-8")

    # Header validation
    csv_allow_duplicate_header_names: bool = _env_flag("CSV_ALLOW_DUPLICATE_HEADER_NAMES", "false")
    csv_allow_missing_column_names: bool = _env_flag("CSV_ALLOW_MISSING_COLUMN_NAMES", "false")

    # Staging and publishing
    temp_file_suffix: str = os.getenv("TEMP_FILE_SUFFIX", ".tmp")
    fsync_on_publish: bool = _env_flag("FSYNC_ON_PUBLISH", "true")
    preserve_permissions: bool = _env_flag("PRESERVE_PERMISSIONS", "true")

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    debug: bool = _env_flag("DEBUG", "false")


settings = Settings()
