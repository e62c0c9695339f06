"""wikicorpus — build an NDJSON text corpus from a list of Wikipedia articles."""

__version__ = "1.0.0"
