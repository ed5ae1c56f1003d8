import logging
from concurrent.futures import ThreadPoolExecutor
from .._base import BaseExtractor
from ...builders.grid import GridBuilder
from ...dataclasses import ExtractedTable, Table, TraceEvent
from ...types import TableConfig, TraceSink, TreeNode
from ._meta import TableMeta
from .locator import TableLocator

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class TableExtractor(BaseExtractor):

    def __init__(self, trace: TraceSink | None = None):
        self.trace = trace
        self._grid_builder = GridBuilder(trace=trace)

    def extract(self, root: TreeNode, config: TableConfig | None = None) -> list[ExtractedTable]:
        if not config:
            config = {}
        locator = TableLocator(
            nested_table_text=config.get("nested_table_text", "include"),
            trace=self.trace,
        )
        tables = locator.locate(root)
        max_workers = config.get("max_workers", 1)

        if max_workers > 1:
            # tables share no state; map() hands results back in document order
            with ThreadPoolExecutor(max_workers=max_workers) as pool:
                results = list(pool.map(self._extract_one, tables))
        else:
            results = [self._extract_one(table) for table in tables]

        extracted = [r for r in results if r is not None]
        if config.get("skip_empty_tables", False):
            extracted = [r for r in extracted if not r.grid.is_empty]
        return extracted

    def _extract_one(self, table: Table) -> ExtractedTable | None:
        try:
            grid = self._grid_builder.build(table)
        except Exception as e:
            # Skip this table if it's malformed, but don't break extraction
            logger.warning(f"Table {table.index} skipped: {type(e).__name__}: {e}")
            if self.trace is not None:
                self.trace(TraceEvent(
                    kind="table_failed",
                    table_index=table.index,
                    data={"error": f"{type(e).__name__}: {e}"},
                ))
            return None

        meta: TableMeta = {
            "depth": table.depth,
            "source_rows": len(table.rows),
            "rows_detected": grid.row_count,
            "columns_detected": grid.column_count,
            "header_rows": sum(grid.header_rows),
        }
        return ExtractedTable(index=table.index, grid=grid, meta=dict(meta))
