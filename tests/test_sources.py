"""Tests for reading the input URL list."""

from __future__ import annotations

import pytest

from wikicorpus.scraper.sources import read_urls


class TestReadUrls:
    def test_trims_and_skips_blank_lines(self, tmp_path) -> None:
        path = tmp_path / "urls.txt"
        path.write_text(
            "  https://en.wikipedia.org/wiki/A  \n\n\t\nhttps://en.wikipedia.org/wiki/B\r\n",
            encoding="utf-8",
        )
        assert read_urls(path) == [
            "https://en.wikipedia.org/wiki/A",
            "https://en.wikipedia.org/wiki/B",
        ]

    def test_preserves_order_and_duplicates(self, tmp_path) -> None:
        path = tmp_path / "urls.txt"
        path.write_text("b\na\nb\n", encoding="utf-8")
        assert read_urls(path) == ["b", "a", "b"]

    def test_no_validation_of_content(self, tmp_path) -> None:
        path = tmp_path / "urls.txt"
        path.write_text("# not a comment\nnot a url\n", encoding="utf-8")
        assert read_urls(path) == ["# not a comment", "not a url"]

    def test_empty_file(self, tmp_path) -> None:
        path = tmp_path / "urls.txt"
        path.write_text("", encoding="utf-8")
        assert read_urls(path) == []

    def test_missing_file_raises(self, tmp_path) -> None:
        with pytest.raises(OSError):
            read_urls(tmp_path / "nope.txt")
