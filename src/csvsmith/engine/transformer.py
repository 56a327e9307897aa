"""Exact-match value replacement for a single CSV row."""

from typing import Mapping, Sequence

Row = dict[str, str]


def transform_row(
    row: Mapping[str, str], column: str, old_value: str, new_value: str
) -> Row:
    """
    Replace the value of ``column`` when it equals ``old_value`` exactly.

    The comparison is case-sensitive and untrimmed. The input mapping is left
    untouched; a new row in the same column order is returned.

    Raises:
        KeyError: If ``column`` is not present in the row.
    """
    updated = dict(row)
    if updated[column] == old_value:
        updated[column] = new_value
    return updated


class RowTransformer:
    """
    Applies one column/old/new replacement to decoded records of a file.

    Records are handled as field sequences in header order, so the column is
    resolved to a position once, against the header, instead of per row.
    When a header repeats a name, the first occurrence is the target.
    """

    def __init__(
        self, header: Sequence[str], column: str, old_value: str, new_value: str
    ):
        if column not in header:
            raise KeyError(column)
        self.header = list(header)
        self.column = column
        self.old_value = old_value
        self.new_value = new_value
        self.index = self.header.index(column)

    def matches(self, values: Sequence[str]) -> bool:
        """Whether the record's target value would be replaced."""
        return values[self.index] == self.old_value

    def apply(self, values: Sequence[str]) -> list[str]:
        """Return the record's output values; the input is not modified."""
        output = list(values)
        if output[self.index] == self.old_value:
            output[self.index] = self.new_value
        return output

    def apply_row(self, row: Mapping[str, str]) -> Row:
        """Mapping form of ``apply``, for rows keyed by header name."""
        return transform_row(row, self.column, self.old_value, self.new_value)
