"""
bkmerge - Bookmark Merger

Merges browser bookmark exports (Netscape bookmark HTML) into a single
file. Every URL is kept once, first occurrence wins, and links are grouped
into one folder per link label.

Example Usage:
    >>> from bkmerge import MergeStore, extract
    >>> store = MergeStore()
    >>> store.ingest(extract(open("chrome.html").read()))
    >>> store.ingest(extract(open("firefox.html").read()))
    >>> open("merged-bookmarks.html", "w").write(store.serialize())
"""

__version__ = "0.2.0"
__author__ = "bkmerge Contributors"

# Core pipeline
from bkmerge.models import LinkEntry
from bkmerge.extractor import extract, extract_file
from bkmerge.store import MergeStore
from bkmerge.exporters import render_html, export_file

# Sessions
from bkmerge.session import MergeSession, FileResult

# Configuration
from bkmerge.config import MergerConfig, get_config, init_config

# Errors
from bkmerge.errors import (
    BkmergeError,
    InvalidFileTypeError,
    MalformedDocumentError,
    EmptyMergeError,
)

__all__ = [
    # Core
    "LinkEntry",
    "extract",
    "extract_file",
    "MergeStore",
    "render_html",
    "export_file",
    # Sessions
    "MergeSession",
    "FileResult",
    # Config
    "MergerConfig",
    "get_config",
    "init_config",
    # Errors
    "BkmergeError",
    "InvalidFileTypeError",
    "MalformedDocumentError",
    "EmptyMergeError",
]
