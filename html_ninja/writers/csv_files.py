import logging
from pathlib import Path
from ..config.constants import CSV_ENCODING, TABLE_FILENAME_TEMPLATE
from ..exc import HtmlNinjaWriteError

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class CsvFileWriter:
    """
    Writes one CSV file per table into `output_dir`, named from `filename_template`
    (`{index}` is the table's 1-based position in the document).
    """

    def __init__(self, output_dir: Path, filename_template: str = TABLE_FILENAME_TEMPLATE):
        self.output_dir = Path(output_dir)
        self.filename_template = filename_template

    def path_for(self, index: int) -> Path:
        return self.output_dir / self.filename_template.format(index=index)

    def write(self, index: int, text: str) -> Path:
        path = self.path_for(index)
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            path.write_bytes(text.encode(CSV_ENCODING))
        except OSError as e:
            raise HtmlNinjaWriteError(f"Cannot write {path}: {e}") from e
        logger.debug(f"Wrote CSV file {path}")
        return path
