from typing import TypedDict


class TableMeta(TypedDict):
    depth: int                  # number of enclosing tables, 0 for top-level
    source_rows: int            # <tr> elements read from the markup
    rows_detected: int          # grid rows, including rows added for trailing rowspans
    columns_detected: int
    header_rows: int            # rows made only of <th> cells
