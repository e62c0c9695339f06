"""Scraper package — URL source, fetch, extraction and NDJSON output."""

from wikicorpus.scraper.crawler import crawl
from wikicorpus.scraper.extractor import extract_record, extract_text, normalise_text
from wikicorpus.scraper.fetcher import fetch_url
from wikicorpus.scraper.models import CrawlStats, RawPage, Record
from wikicorpus.scraper.sink import NdjsonSink
from wikicorpus.scraper.sources import read_urls

__all__ = [
    "crawl",
    "fetch_url",
    "extract_text",
    "extract_record",
    "normalise_text",
    "read_urls",
    "NdjsonSink",
    "RawPage",
    "Record",
    "CrawlStats",
]
