from bs4 import BeautifulSoup
from bs4 import FeatureNotFound
import logging
from pathlib import Path
import requests
from typing import Any
from ..config.constants import (
    DEBUG_PREVIEW_CHARS,
    DEFAULT_FILE_ENCODING,
    DEFAULT_PARSER_FEATURES,
    DEFAULT_REQUEST_TIMEOUT,
    URL_SCHEMES,
)
from ..dataclasses import HtmlContext
from ..exc import HtmlNinjaFetchError, HtmlNinjaParsingError
from ..types import ExtractorConfig

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def is_url(source: str) -> bool:
    return source.startswith(URL_SCHEMES)


class HtmlContextBuilder:

    def build(self, source: str | Path, extractor_config: ExtractorConfig | None = None) -> HtmlContext:
        if not extractor_config:
            extractor_config = {}
        source = str(source)
        if is_url(source):
            html = self._fetch_url(source, config=dict(extractor_config.get("requests", {})))
        else:
            html = self._read_file(Path(source), config=extractor_config.get("file", {}))
        logger.debug(f"Fetched {len(html)} characters from {source}: {html[:DEBUG_PREVIEW_CHARS]!r}")

        return HtmlContext(
            source=source,
            html=html,
            root=self._parse(html, source, config=extractor_config.get("beautifulsoup", {})),
        )

    def _fetch_url(self, url: str, config: dict[str, Any]) -> str:
        config.setdefault("timeout", DEFAULT_REQUEST_TIMEOUT)
        try:
            response = requests.get(url, **config)
            response.raise_for_status()
            return response.text
        except requests.HTTPError as e:
            raise HtmlNinjaFetchError(f"HTTP error fetching {url}: {e}") from e
        except requests.RequestException as e:
            raise HtmlNinjaFetchError(f"Failed to fetch URL {url}: {e}") from e

    def _read_file(self, path: Path, config: dict[str, Any]) -> str:
        encoding = config.get("encoding", DEFAULT_FILE_ENCODING)
        try:
            return path.read_text(encoding=encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise HtmlNinjaFetchError(f"Failed to read file {path}: {e}") from e
        except LookupError as e:
            raise HtmlNinjaFetchError(f"Unknown encoding `{encoding}` for {path}: {e}") from e

    def _parse(self, html: str, source: str, config: dict[str, Any]) -> BeautifulSoup:
        features = config.get("features", DEFAULT_PARSER_FEATURES)
        try:
            return BeautifulSoup(html, features)
        except FeatureNotFound as e:
            raise HtmlNinjaParsingError(f"HTML parser `{features}` is not installed: {e}") from e
        except Exception as e:
            raise HtmlNinjaParsingError(f"Failed to parse HTML from {source}: {e}") from e
