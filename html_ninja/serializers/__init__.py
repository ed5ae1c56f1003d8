from .csv_text import CsvSerializer, escape_field

__all__ = [
    'CsvSerializer',
    'escape_field',
]
