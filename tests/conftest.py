import pytest
from bs4 import BeautifulSoup
from html_ninja import HtmlNinja
from html_ninja.config.constants import DEFAULT_PARSER_FEATURES
from html_ninja.extractors.table._soup import SoupNode


@pytest.fixture
def soup_root():
    def _build(html: str, features: str = DEFAULT_PARSER_FEATURES) -> SoupNode:
        return SoupNode.wrap(BeautifulSoup(html, features))
    return _build


@pytest.fixture
def ninja():
    return HtmlNinja()


@pytest.fixture
def html_file(tmp_path):
    def _write(html: str, name: str = "page.html"):
        path = tmp_path / name
        path.write_text(html, encoding="utf-8")
        return path
    return _write
