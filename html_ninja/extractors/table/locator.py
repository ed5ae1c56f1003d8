import logging
from typing import Iterator
from ...dataclasses import Cell, SourceRow, Table, TraceEvent
from ...types import NestedTextPolicy, TraceSink, TreeNode

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

TABLE_TAG = "table"
ROW_TAG = "tr"
CELL_TAGS = {"td", "th"}
HEADER_CELL_TAG = "th"
LINE_BREAK_TAG = "br"
NON_TEXT_TAGS = {"script", "style", "template"}


class TableLocator:
    """
    Finds every <table> in a document tree, nested ones included, and reads its rows and cells.

    Tables come out in document order (an outer table before the tables inside it).
    A <tr> belongs to its nearest enclosing <table>, so rows of nested tables never
    leak into the outer table.
    """

    def __init__(self, nested_table_text: NestedTextPolicy = "include", trace: TraceSink | None = None):
        if nested_table_text not in ("include", "exclude"):
            raise ValueError(f"nested_table_text must be 'include' or 'exclude', got {nested_table_text!r}")
        self.nested_table_text = nested_table_text
        self.trace = trace

    def locate(self, root: TreeNode) -> Iterator[Table]:
        index = 0
        # (node, number of enclosing tables)
        stack: list[tuple[TreeNode, int]] = [(root, 0)]
        while stack:
            node, depth = stack.pop()
            if node.tag_name() == TABLE_TAG:
                index += 1
                table = self._read_table(node, index=index, depth=depth)
                logger.debug(f"Found table {index} (depth {depth}, {len(table.rows)} rows)")
                if self.trace is not None:
                    self.trace(TraceEvent(
                        kind="table_found",
                        table_index=index,
                        data={"depth": depth, "rows": len(table.rows)},
                    ))
                yield table
                depth += 1

            for child in reversed(node.children()):
                if child.tag_name() is not None:
                    stack.append((child, depth))

    def _read_table(self, table_node: TreeNode, index: int, depth: int) -> Table:
        rows = tuple(
            SourceRow(cells=tuple(self._read_cells(row_node)))
            for row_node in self._iter_rows(table_node)
        )
        return Table(rows=rows, index=index, depth=depth)

    def _iter_rows(self, table_node: TreeNode) -> Iterator[TreeNode]:
        stack = list(reversed(table_node.children()))
        while stack:
            node = stack.pop()
            tag = node.tag_name()
            if tag is None or tag == TABLE_TAG:
                continue
            if tag == ROW_TAG:
                yield node
            stack.extend(reversed(node.children()))

    def _read_cells(self, row_node: TreeNode) -> Iterator[Cell]:
        for child in row_node.children():
            tag = child.tag_name()
            if tag not in CELL_TAGS:
                continue
            yield Cell.from_attributes(
                text=self._cell_text(child),
                attributes=child.attributes(),
                is_header=tag == HEADER_CELL_TAG,
            )

    def _cell_text(self, cell_node: TreeNode) -> str:
        """
        Concatenate the text of every descendant in document order.
        <br> counts as a line break; inner tables are skipped under the "exclude" policy.
        """
        parts: list[str] = []
        stack = list(reversed(cell_node.children()))
        while stack:
            node = stack.pop()
            tag = node.tag_name()
            if tag is None:
                parts.append(node.text_content())
                continue
            if tag in NON_TEXT_TAGS:
                continue
            if tag == TABLE_TAG and self.nested_table_text == "exclude":
                continue
            if tag == LINE_BREAK_TAG:
                parts.append("\n")
            stack.extend(reversed(node.children()))
        return "".join(parts)
