import logging
from ..dataclasses import Cell, Grid, PendingSpan, SourceRow, Table, TraceEvent
from ..types import TraceSink

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class GridBuilder:
    """
    Resolves colspan/rowspan of one table into a rectangular grid.

    Cells carried down by a rowspan are tracked per column as PendingSpans.
    A pending span always wins over a source cell that would start on (or extend
    over) its column: the cell's placement skips past it.
    """

    def __init__(self, trace: TraceSink | None = None):
        self.trace = trace

    def build(self, table: Table) -> Grid:
        pending: dict[int, PendingSpan] = {}
        rows: list[list[str]] = []
        header_rows: list[bool] = []

        source_rows = list(table.rows)
        current_row_index = 0
        while current_row_index < len(source_rows) or pending:
            if current_row_index < len(source_rows):
                source_row = source_rows[current_row_index]
            else:
                # rowspans reaching past the last <tr> still get their rows
                source_row = SourceRow()
            row = self._build_row(source_row, pending, table.index, current_row_index)
            rows.append(row)
            header_rows.append(source_row.is_header)
            self._emit(
                "row_processed",
                table.index,
                row=current_row_index,
                width=len(row),
                cells=len(source_row.cells),
            )
            current_row_index += 1

        if current_row_index > len(source_rows):
            logger.debug(
                f"Table {table.index}: added {current_row_index - len(source_rows)} row(s) for trailing rowspans"
            )

        return Grid.from_rows(rows, header_rows)

    def _build_row(
            self,
            source_row: SourceRow,
            pending: dict[int, PendingSpan],
            table_index: int,
            row_index: int,
    ) -> list[str]:
        row: list[str] = []
        cells = list(source_row.cells)
        next_cell = 0
        # spans registered while walking this row sit left of the cursor,
        # so only spans from earlier rows can lie ahead of it
        last_pending = max(pending, default=-1)

        while next_cell < len(cells) or len(row) <= last_pending:
            if len(row) in pending:
                self._place_pending(row, pending, table_index, row_index)
                continue

            if next_cell >= len(cells):
                # gap left of a span that starts further right
                row.append("")
                continue

            self._place_cell(row, cells[next_cell], pending, table_index, row_index)
            next_cell += 1

        return row

    def _place_cell(
            self,
            row: list[str],
            cell: Cell,
            pending: dict[int, PendingSpan],
            table_index: int,
            row_index: int,
    ) -> None:
        placed = 0
        while placed < cell.col_span:
            if len(row) in pending:
                self._place_pending(row, pending, table_index, row_index)
                continue
            if cell.row_span > 1:
                pending[len(row)] = PendingSpan(remaining=cell.row_span - 1, text=cell.text)
            row.append(cell.text)
            placed += 1

    def _place_pending(
            self,
            row: list[str],
            pending: dict[int, PendingSpan],
            table_index: int,
            row_index: int,
    ) -> None:
        column = len(row)
        span = pending[column]
        row.append(span.text)
        span.remaining -= 1
        if span.remaining <= 0:
            del pending[column]
        self._emit("span_resolved", table_index, row=row_index, column=column, remaining=span.remaining)

    def _emit(self, kind, table_index: int, **data) -> None:
        if self.trace is not None:
            self.trace(TraceEvent(kind=kind, table_index=table_index, data=data))
