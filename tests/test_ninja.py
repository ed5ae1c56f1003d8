import pytest
import requests
from html_ninja import CsvFileWriter, HtmlNinja
from html_ninja.builders.grid import GridBuilder
from html_ninja.exc import HtmlNinjaFetchError, HtmlNinjaParsingError

TWO_TABLES = """
<html>
  <head><title>Quarterly numbers</title></head>
  <body>
    <table>
      <tr><th>Region</th><th>Sales</th></tr>
      <tr><td>North</td><td>1,200</td></tr>
    </table>
    <p>between</p>
    <table>
      <tr><td colspan="abc">B1</td><td colspan="0">B2</td></tr>
      <tr><td rowspan="2">B3</td><td>B4</td></tr>
      <tr><td>B5</td></tr>
    </table>
  </body>
</html>
"""


class FakeResponse:

    def __init__(self, text, status_error=None):
        self.text = text
        self._status_error = status_error

    def raise_for_status(self):
        if self._status_error:
            raise self._status_error


def test_parse_file(ninja, html_file):
    parsed = ninja.parse(html_file(TWO_TABLES))

    assert [t.index for t in parsed.tables] == [1, 2]
    assert parsed.tables[0].grid.to_lists() == [["Region", "Sales"], ["North", "1,200"]]
    assert parsed.tables[1].grid.to_lists() == [["B1", "B2"], ["B3", "B4"], ["B3", "B5"]]
    assert parsed.metadata["title"] == "Quarterly numbers"
    assert parsed.metadata["table_count"] == 2


def test_iter_csv_pairs_in_document_order(ninja, html_file):
    parsed = ninja.parse(html_file(TWO_TABLES))
    assert list(ninja.iter_csv(parsed.tables)) == [
        (1, 'Region,Sales\nNorth,"1,200"\n'),
        (2, "B1,B2\nB3,B4\nB3,B5\n"),
    ]


def test_document_without_tables(ninja, html_file):
    parsed = ninja.parse(html_file("<html><body><p>nothing</p></body></html>"))
    assert parsed.tables == []
    assert list(ninja.iter_csv(parsed.tables)) == []


def test_empty_table_is_kept_by_default(ninja, soup_root):
    tables = ninja.extract(soup_root("<table></table><table><tr><td>x</td></tr></table>"))
    assert [t.index for t in tables] == [1, 2]
    assert list(ninja.iter_csv(tables))[0] == (1, "")


def test_skip_empty_tables(ninja, soup_root):
    tables = ninja.extract(
        soup_root("<table></table><table><tr><td>x</td></tr></table>"),
        {"tables": {"skip_empty_tables": True}},
    )
    assert [t.index for t in tables] == [2]


def test_extract_accepts_beautifulsoup_objects(ninja):
    from bs4 import BeautifulSoup
    soup = BeautifulSoup("<table><tr><td>a</td></tr></table>", "html.parser")
    [table] = ninja.extract(soup)
    assert table.grid.to_lists() == [["a"]]


def test_nested_table_policies(ninja, soup_root):
    html = (
        "<table><tr><td>outer</td><td><table><tr><td>inner</td></tr></table></td></tr></table>"
    )
    included = ninja.extract(soup_root(html))
    excluded = ninja.extract(soup_root(html), {"tables": {"nested_table_text": "exclude"}})

    assert included[0].grid.to_lists() == [["outer", "inner"]]
    assert excluded[0].grid.to_lists() == [["outer", ""]]
    assert included[1].grid.to_lists() == excluded[1].grid.to_lists() == [["inner"]]
    assert included[1].meta["depth"] == 1


def test_failing_table_does_not_stop_others(soup_root, monkeypatch):
    original = GridBuilder.build

    def flaky(self, table):
        if table.index == 1:
            raise RuntimeError("boom")
        return original(self, table)

    monkeypatch.setattr(GridBuilder, "build", flaky)
    events = []
    tables = HtmlNinja(trace=events.append).extract(
        soup_root("<table><tr><td>a</td></tr></table><table><tr><td>b</td></tr></table>")
    )

    assert [t.index for t in tables] == [2]
    failed = [e for e in events if e.kind == "table_failed"]
    assert len(failed) == 1
    assert failed[0].table_index == 1
    assert "boom" in failed[0].data["error"]


def test_parallel_extraction_matches_sequential(ninja, soup_root):
    html = "".join(
        f"<table><tr><td rowspan='2'>t{i}</td><td>x</td></tr><tr><td>y{i}</td></tr></table>"
        for i in range(12)
    )
    sequential = ninja.extract(soup_root(html))
    parallel = ninja.extract(soup_root(html), {"tables": {"max_workers": 4}})
    assert [(t.index, t.grid) for t in parallel] == [(t.index, t.grid) for t in sequential]


def test_trace_does_not_change_results(html_file):
    path = html_file(TWO_TABLES)
    events = []
    traced = HtmlNinja(trace=events.append).parse(path)
    plain = HtmlNinja().parse(path)

    assert [t.grid for t in traced.tables] == [t.grid for t in plain.tables]
    kinds = {e.kind for e in events}
    assert {"table_found", "row_processed", "span_resolved"} <= kinds


def test_save_writes_one_file_per_table(ninja, html_file, tmp_path):
    parsed = ninja.parse(html_file(TWO_TABLES))
    out = tmp_path / "csv"
    paths = ninja.save(parsed, CsvFileWriter(out))

    assert [p.name for p in paths] == ["table_1.csv", "table_2.csv"]
    assert (out / "table_2.csv").read_text(encoding="utf-8") == "B1,B2\nB3,B4\nB3,B5\n"


def test_save_calls_writer_once_per_table(ninja, html_file, tmp_path):
    calls = []

    class RecordingWriter:
        def write(self, index, text):
            calls.append((index, text))
            return tmp_path / f"{index}.csv"

    ninja.save(ninja.parse(html_file(TWO_TABLES)), RecordingWriter())
    assert [index for index, _ in calls] == [1, 2]


def test_parse_url(ninja, monkeypatch):
    seen = {}

    def fake_get(url, **kwargs):
        seen["url"] = url
        seen["kwargs"] = kwargs
        return FakeResponse("<table><tr><td>remote</td></tr></table>")

    monkeypatch.setattr("html_ninja.builders.html_context.requests.get", fake_get)
    parsed = ninja.parse("https://example.com/page.html", {"requests": {"headers": {"User-Agent": "t"}}})

    assert parsed.source == "https://example.com/page.html"
    assert parsed.tables[0].grid.to_lists() == [["remote"]]
    assert seen["kwargs"]["timeout"] == 30.0
    assert seen["kwargs"]["headers"] == {"User-Agent": "t"}


def test_url_connection_error(ninja, monkeypatch):
    def fake_get(url, **kwargs):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr("html_ninja.builders.html_context.requests.get", fake_get)
    with pytest.raises(HtmlNinjaFetchError, match="refused"):
        ninja.parse("http://example.invalid/")


def test_url_http_error(ninja, monkeypatch):
    def fake_get(url, **kwargs):
        return FakeResponse("", status_error=requests.HTTPError("404 Client Error"))

    monkeypatch.setattr("html_ninja.builders.html_context.requests.get", fake_get)
    with pytest.raises(HtmlNinjaFetchError, match="404"):
        ninja.parse("http://example.com/missing")


def test_missing_file(ninja, tmp_path):
    with pytest.raises(HtmlNinjaFetchError):
        ninja.parse(tmp_path / "nope.html")


def test_unknown_parser_features(ninja, html_file):
    with pytest.raises(HtmlNinjaParsingError):
        ninja.parse(html_file(TWO_TABLES), {"beautifulsoup": {"features": "no-such-parser"}})


def test_to_dataframe_uses_header_row(ninja, html_file):
    parsed = ninja.parse(html_file(TWO_TABLES))
    df = parsed.tables[0].grid.to_dataframe()
    assert df.columns.tolist() == ["Region", "Sales"]
    assert df.iloc[0].tolist() == ["North", "1,200"]

    raw = parsed.tables[0].grid.to_dataframe(use_header=False)
    assert raw.shape == (2, 2)


def test_to_dict(ninja, html_file):
    data = ninja.parse(html_file(TWO_TABLES)).to_dict()
    assert data["tables"][0]["rows"][0] == ["Region", "Sales"]
    assert data["tables"][0]["header_rows"] == [True, False]
    assert data["tables"][1]["meta"]["rows_detected"] == 3


def test_unknown_file_encoding(ninja, html_file):
    with pytest.raises(HtmlNinjaFetchError, match="no-such-codec"):
        ninja.parse(html_file(TWO_TABLES), {"file": {"encoding": "no-such-codec"}})


def test_unexpected_fetch_errors_are_wrapped(ninja, monkeypatch):
    def fake_get(url, **kwargs):
        raise TypeError("get() got an unexpected keyword argument 'bogus'")

    monkeypatch.setattr("html_ninja.builders.html_context.requests.get", fake_get)
    with pytest.raises(HtmlNinjaParsingError, match="bogus"):
        ninja.parse("https://example.com/", {"requests": {"bogus": 1}})


def test_table_without_end_tags(ninja, html_file):
    parsed = ninja.parse(html_file("<table><tr><td>a<td>b<tr><td>c<td>d</table>"))
    assert [t.grid.to_lists() for t in parsed.tables] == [[["a", "b"], ["c", "d"]]]
