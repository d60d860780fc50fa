import io

import httpx
import pytest

from sse_merge._client import HttpConfig, TranscriptHttpClient
from sse_merge._errors import EmptyInputError, TranscriptFetchError
from sse_merge.sources import FileSource, StdinSource, StringSource, UrlSource, parse_line_range


def test_string_source():
    assert StringSource("data: {}").read_text() == "data: {}"


def test_string_source_empty_raises():
    with pytest.raises(EmptyInputError) as exc:
        StringSource("  \n", label="Clipboard").read_text()

    assert "Clipboard is empty" in str(exc.value)


def test_file_source_reads_whole_file(tmp_path):
    f = tmp_path / "capture.txt"
    f.write_text("data: {\"x\": 1}\n", encoding="utf-8")

    assert FileSource(f).read_text() == "data: {\"x\": 1}\n"


def test_file_source_line_range(tmp_path):
    f = tmp_path / "capture.txt"
    f.write_text("l1\nl2\nl3\nl4\n", encoding="utf-8")

    assert FileSource(f, start_line=2, end_line=3).read_text() == "l2\nl3"
    assert FileSource(f, start_line=3).read_text() == "l3\nl4\n"
    assert FileSource(f, end_line=1).read_text() == "l1"


def test_file_source_empty_selection_raises(tmp_path):
    f = tmp_path / "capture.txt"
    f.write_text("l1\n\n\n", encoding="utf-8")

    with pytest.raises(EmptyInputError):
        FileSource(f, start_line=2, end_line=3).read_text()


def test_stdin_source_uses_given_stream():
    assert StdinSource(io.StringIO("data: 1\n")).read_text() == "data: 1\n"


def test_stdin_source_empty_raises():
    with pytest.raises(EmptyInputError):
        StdinSource(io.StringIO("")).read_text()


def test_url_source_fetches_text():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="data: {\"a\": 1}\n"))
    client = TranscriptHttpClient(config=HttpConfig(), transport=transport)

    assert UrlSource("https://example.com/t", client).read_text() == "data: {\"a\": 1}\n"


def test_url_source_propagates_fetch_errors():
    transport = httpx.MockTransport(lambda request: httpx.Response(404, text="nope"))
    client = TranscriptHttpClient(config=HttpConfig(), transport=transport)

    with pytest.raises(TranscriptFetchError):
        UrlSource("https://example.com/t", client).read_text()


@pytest.mark.parametrize(
    "value,expected",
    [("2:5", (2, 5)), ("3:", (3, None)), (":4", (None, 4)), ("7:7", (7, 7))],
)
def test_parse_line_range(value, expected):
    assert parse_line_range(value) == expected


@pytest.mark.parametrize("value", ["5", "a:b", "0:3", "5:2"])
def test_parse_line_range_rejects_invalid(value):
    with pytest.raises(ValueError):
        parse_line_range(value)


def test_file_source_replaces_invalid_utf8(tmp_path):
    f = tmp_path / "capture.txt"
    f.write_bytes(b"\xff\ndata: {\"x\": 1}\n")

    assert FileSource(f).read_text() == "\ufffd\ndata: {\"x\": 1}\n"
