import re
from bs4 import BeautifulSoup
from dataclasses import dataclass, field
import pandas as pd
from typing import Any, Iterable, Literal, Mapping, Optional, Sequence
from .config.constants import MAX_COLSPAN, MAX_ROWSPAN

TraceKind = Literal["table_found", "row_processed", "span_resolved", "table_failed"]

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Collapse whitespace runs (including line breaks) to a single space and strip."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def parse_span(value: Optional[str], limit: int) -> int:
    """
    Parse a colspan/rowspan attribute value.
    Missing or non-integer values give 1; zero and negatives clamp to 1; values above `limit` clamp to it.
    """
    if value is None:
        return 1
    try:
        span = int(str(value).strip())
    except ValueError:
        return 1
    return min(max(span, 1), limit)


@dataclass(frozen=True)
class Cell:
    """
    One logical table cell: flattened text plus its span extents.
    """
    text: str
    col_span: int = 1
    row_span: int = 1
    is_header: bool = False

    def __post_init__(self):
        # keep the >= 1 invariant even when constructed directly
        if self.col_span < 1:
            object.__setattr__(self, "col_span", 1)
        if self.row_span < 1:
            object.__setattr__(self, "row_span", 1)

    @classmethod
    def from_attributes(cls, text: str, attributes: Mapping[str, str], is_header: bool = False) -> "Cell":
        return cls(
            text=normalize_text(text),
            col_span=parse_span(attributes.get("colspan"), MAX_COLSPAN),
            row_span=parse_span(attributes.get("rowspan"), MAX_ROWSPAN),
            is_header=is_header,
        )


@dataclass
class PendingSpan:
    # rows still to be filled below the originating cell
    remaining: int
    text: str


@dataclass(frozen=True)
class SourceRow:
    cells: tuple[Cell, ...] = ()

    @property
    def is_header(self) -> bool:
        return bool(self.cells) and all(c.is_header for c in self.cells)


@dataclass(frozen=True)
class Table:
    """
    Rows and cells of a single table element, as they appear in the markup.
    `index` is the 1-based document-order position, `depth` the number of enclosing tables.
    """
    rows: tuple[SourceRow, ...] = ()
    index: int = 1
    depth: int = 0

    @classmethod
    def from_texts(cls, rows: Iterable[Iterable[str]], index: int = 1) -> "Table":
        """Build a span-free table from plain strings."""
        return cls(
            rows=tuple(SourceRow(tuple(Cell(text) for text in row)) for row in rows),
            index=index,
        )


@dataclass(frozen=True)
class Grid:
    """
    Normalized rectangular matrix of cell text for one table, after span resolution.
    """
    rows: tuple[tuple[str, ...], ...] = ()
    header_rows: tuple[bool, ...] = ()

    def __post_init__(self):
        widths = {len(row) for row in self.rows}
        if len(widths) > 1:
            raise ValueError(f"Grid rows must have equal length, got widths {sorted(widths)}")
        if not self.header_rows:
            object.__setattr__(self, "header_rows", tuple(False for _ in self.rows))
        elif len(self.header_rows) != len(self.rows):
            raise ValueError("header_rows must align with rows")

    @classmethod
    def from_rows(
            cls,
            rows: Sequence[Sequence[str]],
            header_rows: Sequence[bool] | None = None
    ) -> "Grid":
        """Right-pad ragged rows with empty strings and freeze them into a Grid."""
        width = max((len(row) for row in rows), default=0)
        padded = tuple(tuple(row) + ("",) * (width - len(row)) for row in rows)
        return cls(rows=padded, header_rows=tuple(header_rows or ()))

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def to_lists(self) -> list[list[str]]:
        return [list(row) for row in self.rows]

    def to_dataframe(self, use_header: bool = True) -> pd.DataFrame:
        """
        Returns the grid as a DataFrame of strings.
        When `use_header` is set and the first row is made only of header cells,
        that row becomes the column labels.
        """
        rows = self.to_lists()
        if use_header and rows and self.header_rows[0]:
            return pd.DataFrame(rows[1:], columns=rows[0], dtype=str)
        return pd.DataFrame(rows, dtype=str)

    def stringify(self) -> str:
        return "\n".join(" | ".join(row) for row in self.rows)


@dataclass(frozen=True)
class TraceEvent:
    kind: TraceKind
    table_index: int
    data: dict[str, Any] = field(default_factory=dict)


@dataclass
class HtmlContext:

    source: str
    html: str
    root: BeautifulSoup


@dataclass
class ExtractedTable:
    """
    A table that made it through grid building, ready for serialization.
    """
    index: int
    grid: Grid
    meta: dict[str, Any] = field(default_factory=dict)


@dataclass
class ParsedHtml:
    """
    Represents a fully processed HTML document: every extracted table in document order.
    """
    source: str
    tables: list[ExtractedTable] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def stringify(self) -> str:
        """
        Returns all tables as text, separated by blank lines, in document order.
        """
        return "\n\n".join(filter(None, (t.grid.stringify() for t in self.tables)))

    def to_dict(self) -> dict:
        """
        Converts the ParsedHtml into a serializable dictionary.
        """
        return {
            "source": self.source,
            "metadata": self.metadata,
            "tables": [
                {
                    "index": t.index,
                    "rows": t.grid.to_lists(),
                    "header_rows": list(t.grid.header_rows),
                    "meta": t.meta,
                }
                for t in self.tables
            ],
        }
