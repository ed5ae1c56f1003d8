import csv
from ..dataclasses import Grid

DELIMITER = ","
QUOTE = '"'
LINE_TERMINATOR = "\n"
_NEEDS_QUOTING = (DELIMITER, QUOTE, "\n", "\r")


def escape_field(field: str) -> str:
    """
    Quote a single CSV field when it contains a comma, a double quote or a line break.
    Embedded double quotes are doubled. Same rule as csv.QUOTE_MINIMAL.
    """
    if any(ch in field for ch in _NEEDS_QUOTING):
        return QUOTE + field.replace(QUOTE, QUOTE * 2) + QUOTE
    return field


class CsvSerializer:
    """Renders a Grid as CSV text: comma separated, every row terminated by a newline."""

    def serialize(self, grid: Grid) -> str:
        if grid.is_empty:
            return ""
        if grid.column_count == 0:
            # rows without cells; a DataFrame cannot hold them
            return LINE_TERMINATOR * grid.row_count
        return grid.to_dataframe(use_header=False).to_csv(
            index=False,
            header=False,
            sep=DELIMITER,
            quotechar=QUOTE,
            quoting=csv.QUOTE_MINIMAL,
            lineterminator=LINE_TERMINATOR,
        )
