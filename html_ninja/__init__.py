from .dataclasses import Cell, ExtractedTable, Grid, ParsedHtml, Table, TraceEvent
from .ninja import HtmlNinja
from .serializers.csv_text import CsvSerializer, escape_field
from .types import ExtractorConfig, TableConfig
from .exc import HtmlNinjaError
from .writers.csv_files import CsvFileWriter

__all__ = [
    'Cell',
    'CsvFileWriter',
    'CsvSerializer',
    'ExtractedTable',
    'ExtractorConfig',
    'Grid',
    'HtmlNinja',
    'HtmlNinjaError',
    'ParsedHtml',
    'Table',
    'TableConfig',
    'TraceEvent',
    'escape_field',
]
