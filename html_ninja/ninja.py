import logging
from bs4 import BeautifulSoup
from bs4.element import Tag
from pathlib import Path
from typing import Iterable, Iterator, Protocol
from .builders.html_context import HtmlContextBuilder
from .dataclasses import ExtractedTable, HtmlContext, ParsedHtml
from .exc import HtmlNinjaError, HtmlNinjaParsingError
from .extractors.table._soup import SoupNode
from .extractors.table.extractor import TableExtractor
from .serializers.csv_text import CsvSerializer
from .types import ExtractorConfig, TraceSink, TreeNode

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class TableWriter(Protocol):

    def write(self, index: int, text: str) -> Path: ...


class HtmlNinja:

    def __init__(self, trace: TraceSink | None = None):
        self.trace = trace
        self.table_extractor = TableExtractor(trace=trace)
        self.serializer = CsvSerializer()

    def parse(self, source: str | Path, extractor_config: ExtractorConfig | None = None) -> ParsedHtml:
        if not extractor_config:
            extractor_config = {}
        try:
            ctx = self._build_context(source=source, extractor_config=extractor_config)
            return self._parse(ctx=ctx, extractor_config=extractor_config)
        except HtmlNinjaError:
            raise
        except Exception as e:
            raise HtmlNinjaParsingError(f"Unexpected error while extracting tables from {source}: {e}") from e

    def extract(
            self,
            root: BeautifulSoup | Tag | TreeNode,
            extractor_config: ExtractorConfig | None = None
    ) -> list[ExtractedTable]:
        """Extract every table below `root`, in document order."""
        if not extractor_config:
            extractor_config = {}
        if isinstance(root, Tag):
            root = SoupNode.wrap(root)
        return self.table_extractor.extract(root, config=extractor_config.get("tables", {}))

    def iter_csv(self, tables: Iterable[ExtractedTable]) -> Iterator[tuple[int, str]]:
        """Yield `(index, csv_text)` for each table, in the order given."""
        for table in tables:
            yield table.index, self.serializer.serialize(table.grid)

    def save(self, parsed: ParsedHtml, writer: TableWriter) -> list[Path]:
        """Hand each table's CSV text to `writer`, once per table."""
        paths: list[Path] = []
        for index, text in self.iter_csv(parsed.tables):
            paths.append(writer.write(index, text))
        logger.debug(f"Saved {len(paths)} tables from {parsed.source}")
        return paths

    def _parse(self, ctx: HtmlContext, extractor_config: ExtractorConfig) -> ParsedHtml:
        tables = self.extract(ctx.root, extractor_config=extractor_config)
        logger.debug(f"Extracted {len(tables)} tables. Building ParsedHtml object...")
        return ParsedHtml(
            source=ctx.source,
            tables=tables,
            metadata=self._metadata(ctx, tables),
        )

    def _metadata(self, ctx: HtmlContext, tables: list[ExtractedTable]) -> dict:
        title = ctx.root.title.get_text(strip=True) if ctx.root.title else None
        meta = {
            "source": ctx.source,
            "title": title or None,
            "html_length": len(ctx.html),
            "table_count": len(tables),
        }
        return {k: v for k, v in meta.items() if v is not None}

    def _build_context(self, source: str | Path, extractor_config: ExtractorConfig) -> HtmlContext:
        """Read or fetch the source and return it parsed, inside an HtmlContext."""
        return HtmlContextBuilder().build(source, extractor_config=extractor_config)
