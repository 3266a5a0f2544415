import urllib.error

import pytest

from shopifygql.files import download_file, read_file


def test_read_file_returns_content(tmp_path):
    path = tmp_path / "data.txt"
    path.write_text("hello\nworld\n", encoding="utf-8")
    assert read_file(path) == "hello\nworld\n"


def test_read_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_file(tmp_path / "absent.txt")


def test_download_copies_body(tmp_path):
    source = tmp_path / "source.jsonl"
    body = b'{"id":"gid://shopify/Product/1"}\n'
    source.write_bytes(body)
    target = tmp_path / "target.jsonl"
    download_file(target, source.as_uri())
    assert target.read_bytes() == body


def test_download_overwrites_existing(tmp_path):
    source = tmp_path / "source.txt"
    source.write_bytes(b"new")
    target = tmp_path / "target.txt"
    target.write_bytes(b"old content that is longer")
    download_file(target, source.as_uri())
    assert target.read_bytes() == b"new"


def test_download_round_trips_through_read_file(tmp_path):
    source = tmp_path / "source.txt"
    source.write_text("line one\nline two\n", encoding="utf-8")
    target = tmp_path / "copy.txt"
    download_file(target, source.as_uri())
    assert read_file(target) == read_file(source)


def test_download_missing_source_raises(tmp_path):
    missing = tmp_path / "missing.txt"
    with pytest.raises(urllib.error.URLError):
        download_file(tmp_path / "out.txt", missing.as_uri())