from .csv_files import CsvFileWriter

__all__ = [
    'CsvFileWriter',
]
