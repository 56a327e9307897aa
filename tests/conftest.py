"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from csvsmith.config import Settings
from csvsmith.engine import CsvRewriter

INPUT_DATA = (
    "id,foo,bar,baz\r\n"
    "1,alpha,apple,orange\r\n"
    '2,beta,pear,"orange, blood"\r\n'
    '3,"gamma ""quoted""",apple,orange\r\n'
    '4,delta,apples,"multi\nline"\r\n'
)

REPLACE_APPLE_WITH_LIME = (
    "id,foo,bar,baz\r\n"
    "1,alpha,lime,orange\r\n"
    '2,beta,pear,"orange, blood"\r\n'
    '3,"gamma ""quoted""",lime,orange\r\n'
    '4,delta,apples,"multi\nline"\r\n'
)

REPLACE_ORANGE_WITH_BANANA = (
    "id,foo,bar,baz\r\n"
    "1,alpha,apple,banana\r\n"
    '2,beta,pear,"orange, blood"\r\n'
    '3,"gamma ""quoted""",apple,banana\r\n'
    '4,delta,apples,"multi\nline"\r\n'
)

INVALID_DATA = (
    "id,name,id\r\n"
    "1,apple,2\r\n"
)


@pytest.fixture
def test_settings() -> Settings:
    """Create settings with test values."""
    return Settings(
        csv_delimiter=",",
        csv_quote_char='"',
        csv_line_terminator="\r\n",
        csv_encoding="utf-8",
        csv_allow_duplicate_header_names=False,
        csv_allow_missing_column_names=False,
        temp_file_suffix=".tmp",
        fsync_on_publish=True,
        preserve_permissions=True,
    )


@pytest.fixture
def rewriter(test_settings: Settings) -> CsvRewriter:
    """Create a CsvRewriter with the default RFC 4180 dialect."""
    return CsvRewriter(config=test_settings)


@pytest.fixture
def write_csv(tmp_path: Path):
    """Write CSV text (or raw bytes) to a file in a fresh directory."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()

    def _write(content, name: str = "Input Data.csv") -> Path:
        path = data_dir / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_bytes(content.encode("utf-8"))
        return path

    return _write


@pytest.fixture
def csv_file(write_csv) -> Path:
    """Deploy a copy of the standard input data."""
    return write_csv(INPUT_DATA)


def directory_listing(path: Path) -> list[str]:
    """Names of every entry in the directory holding ``path``."""
    return sorted(entry.name for entry in path.parent.iterdir())
