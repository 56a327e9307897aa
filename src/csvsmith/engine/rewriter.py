"""Transactional in-place rewriting of a CSV column."""

import csv
import logging
import os
import shutil
import sys
import tempfile
from pathlib import Path
from typing import IO, Iterator, Optional, Union

from ..config import Settings, settings as default_settings
from .errors import InvalidFormatError, RewriteIOError, SourceNotFoundError, UpdateError
from .models import CsvFormat, UpdateRequest, UpdateResult
from .transformer import RowTransformer

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def _lift_field_size_limit() -> None:
    """Remove the csv module's default cap on the length of a single field."""
    limit = sys.maxsize
    while True:
        try:
            csv.field_size_limit(limit)
            return
        except OverflowError:
            limit //= 10


class CsvRewriter:
    """
    Performs a find and replace in one column of a CSV file, in place.

    The rewritten CSV is streamed to a temporary file in the same directory as
    the source, which then replaces the source with a single ``os.replace``.
    The source is either left byte-for-byte untouched or fully replaced, and
    the temporary file never outlives the call, whatever the outcome.
    """

    def __init__(
        self,
        csv_format: Optional[CsvFormat] = None,
        config: Optional[Settings] = None,
    ):
        self.config = config or default_settings
        self.csv_format = csv_format or CsvFormat.from_settings(self.config)

    def update(
        self,
        path: PathLike,
        column: str,
        old_value: str,
        new_value: str,
        dry_run: bool = False,
    ) -> UpdateResult:
        """
        Replace ``old_value`` with ``new_value`` wherever it is the exact value
        of ``column``.

        Args:
            path: The CSV file to rewrite
            column: Header name of the column to search
            old_value: The value to replace (exact, case-sensitive match)
            new_value: The replacement value
            dry_run: Count matches without writing anything

        Returns:
            UpdateResult; ``modified`` is False when the column is absent or
            on a dry run

        Raises:
            pydantic.ValidationError: If an argument is missing or not a string
            SourceNotFoundError: If the source cannot be opened for reading
            InvalidFormatError: If the header or a record is invalid
            RewriteIOError: If staging, writing or publishing fails
        """
        request = UpdateRequest(
            path=path, column=column, old_value=old_value, new_value=new_value
        )
        return self.execute(request, dry_run=dry_run)

    def execute(self, request: UpdateRequest, dry_run: bool = False) -> UpdateResult:
        """Run a validated update request."""
        path = request.path
        logger.info(
            f"Updating {path}: column '{request.column}' "
            f"('{request.old_value}' -> '{request.new_value}'){' [dry run]' if dry_run else ''}"
        )

        temp_path: Optional[Path] = None
        try:
            with self._open_source(path) as source:
                reader = self._reader(source)
                header = self._read_header(reader, path)

                # Nothing to do if the file doesn't contain the column
                if request.column not in header:
                    logger.info(f"Column '{request.column}' not in header of {path}, leaving it unchanged")
                    return UpdateResult(
                        path=path, column=request.column, modified=False,
                        dry_run=dry_run, header=header,
                    )

                transformer = RowTransformer(
                    header, request.column, request.old_value, request.new_value
                )

                if dry_run:
                    rows_read, rows_replaced = self._count_matches(reader, transformer, path)
                    logger.info(f"Dry run: {rows_replaced} of {rows_read} rows would change in {path}")
                    return UpdateResult(
                        path=path, column=request.column, modified=False,
                        rows_read=rows_read, rows_replaced=rows_replaced,
                        dry_run=True, header=header,
                    )

                temp_path = self._create_temp_file(path)
                rows_read, rows_replaced = self._write_output(
                    reader, transformer, temp_path, path
                )

            self._publish(temp_path, path)
        except BaseException as exc:
            if temp_path is not None:
                self._discard(temp_path)
            if isinstance(exc, UpdateError):
                logger.error(f"Update failed: {exc}")
            raise

        logger.info(f"Replaced {rows_replaced} of {rows_read} rows in {path}")
        return UpdateResult(
            path=path, column=request.column, modified=True,
            rows_read=rows_read, rows_replaced=rows_replaced, header=header,
        )

    def read_header(self, path: PathLike) -> list[str]:
        """Read and validate the header of a CSV file without modifying it."""
        path = Path(path)
        with self._open_source(path) as source:
            reader = self._reader(source)
            return self._read_header(reader, path)

    def _reader(self, source: IO[str]):
        _lift_field_size_limit()
        return csv.reader(source, **self.csv_format.reader_options())

    def _open_source(self, path: Path) -> IO[str]:
        try:
            return open(path, "r", encoding=self.csv_format.encoding, newline="")
        except OSError as e:
            raise SourceNotFoundError(
                f"Cannot open source file for reading: {e.strerror or e}", path
            ) from e

    def _read_header(self, reader, path: Path) -> list[str]:
        """Read the first record and check it is a usable header."""
        try:
            header = next(reader, None)
        except csv.Error as e:
            raise InvalidFormatError(f"Malformed header: {e}", path, reader.line_num) from e
        except UnicodeDecodeError as e:
            raise InvalidFormatError(
                f"Header is not valid {self.csv_format.encoding}", path, reader.line_num
            ) from e
        except OSError as e:
            raise RewriteIOError(f"Failed reading source file: {e}", path) from e

        if header is None:
            return []
        if not header:
            # A blank first line is a header with one missing name
            header = [""]

        seen = set()
        for name in header:
            if not name.strip():
                if not self.csv_format.allow_missing_column_names:
                    raise InvalidFormatError(
                        f"A header name is missing in {header}", path, reader.line_num
                    )
                continue
            if name in seen and not self.csv_format.allow_duplicate_header_names:
                raise InvalidFormatError(
                    f"The header contains a duplicate name '{name}' in {header}", path, reader.line_num
                )
            seen.add(name)

        return header

    def _records(self, reader, width: int, path: Path) -> Iterator[list[str]]:
        """Yield data records, checking each against the header width."""
        while True:
            try:
                values = next(reader)
            except StopIteration:
                return
            except csv.Error as e:
                raise InvalidFormatError(f"Malformed record: {e}", path, reader.line_num) from e
            except UnicodeDecodeError as e:
                raise InvalidFormatError(
                    f"Record is not valid {self.csv_format.encoding}", path, reader.line_num
                ) from e
            except OSError as e:
                raise RewriteIOError(f"Failed reading source file: {e}", path) from e

            if not values:
                # A blank line is a single empty value
                values = [""]

            if len(values) != width:
                raise InvalidFormatError(
                    f"Record has {len(values)} fields but the header has {width}",
                    path,
                    reader.line_num,
                )
            yield values

    def _count_matches(
        self, reader, transformer: RowTransformer, path: Path
    ) -> tuple[int, int]:
        rows_read = rows_replaced = 0
        for values in self._records(reader, len(transformer.header), path):
            rows_read += 1
            if transformer.matches(values):
                rows_replaced += 1
        return rows_read, rows_replaced

    def _create_temp_file(self, path: Path) -> Path:
        """Create an empty, uniquely named file next to the source."""
        try:
            fd, name = tempfile.mkstemp(
                dir=str(path.parent),
                prefix=f".{path.name}.",
                suffix=self.config.temp_file_suffix,
            )
        except OSError as e:
            raise RewriteIOError(
                f"Cannot create temporary file in {path.parent}: {e.strerror or e}", path
            ) from e
        os.close(fd)
        logger.debug(f"Staging output in {name}")
        return Path(name)

    def _write_output(
        self, reader, transformer: RowTransformer, temp_path: Path, path: Path
    ) -> tuple[int, int]:
        """Stream every record through the transformer into the temp file."""
        rows_read = rows_replaced = 0
        try:
            with open(
                temp_path, "w", encoding=self.csv_format.encoding, newline=""
            ) as target:
                writer = csv.writer(target, **self.csv_format.writer_options())
                writer.writerow(transformer.header)

                for values in self._records(reader, len(transformer.header), path):
                    rows_read += 1
                    if transformer.matches(values):
                        rows_replaced += 1
                    writer.writerow(transformer.apply(values))

                target.flush()
                if self.config.fsync_on_publish:
                    os.fsync(target.fileno())
        except UnicodeEncodeError as e:
            raise InvalidFormatError(
                f"Value cannot be encoded as {self.csv_format.encoding}", path, reader.line_num
            ) from e
        except csv.Error as e:
            raise InvalidFormatError(f"Cannot encode record: {e}", path, reader.line_num) from e
        except OSError as e:
            raise RewriteIOError(f"Failed writing temporary file {temp_path}: {e}", path) from e

        return rows_read, rows_replaced

    def _publish(self, temp_path: Path, path: Path) -> None:
        """Atomically replace the source with the rewritten file."""
        try:
            if self.config.preserve_permissions:
                shutil.copymode(path, temp_path)
            os.replace(temp_path, path)
        except OSError as e:
            raise RewriteIOError(
                f"Cannot replace source file with rewritten output: {e.strerror or e}", path
            ) from e
        logger.debug(f"Published {temp_path} over {path}")

    def _discard(self, temp_path: Path) -> None:
        # Never let a cleanup failure hide the error being raised
        try:
            temp_path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not remove temporary file {temp_path}: {e}")


def update_row_values(
    path: PathLike, column: str, old_value: str, new_value: str
) -> UpdateResult:
    """Find and replace a value in one column of a CSV file, in place."""
    return CsvRewriter().update(path, column, old_value, new_value)
