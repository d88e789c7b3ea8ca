"""
Constants for bkmerge.

These constants are used by various modules for sensible defaults.
Most are also available via the config system.
"""

# Input
# lxml closes an open <a> when the next one starts, as browsers do
HTML_PARSER = "lxml"
ACCEPTED_EXTENSIONS = (".html",)
DEFAULT_ENCODING = "utf-8"

# Output
DEFAULT_OUTPUT_FILE = "merged-bookmarks.html"
DEFAULT_DOCUMENT_TITLE = "Bookmarks"
DEFAULT_HEADING = "Merged Bookmarks"

# Netscape bookmark file preamble
NETSCAPE_DOCTYPE = "<!DOCTYPE NETSCAPE-Bookmark-file-1>"
NETSCAPE_META = '<META HTTP-EQUIV="Content-Type" CONTENT="text/html; charset=UTF-8">'

# Serializer indentation (one level)
INDENT = "    "

# Concurrency
DEFAULT_MAX_WORKERS = 4
