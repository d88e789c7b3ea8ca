"""
Link extraction for browser bookmark exports.

Pulls (label, url) pairs out of Netscape bookmark HTML, or any HTML page,
by walking its anchor elements in document order. Folder structure is
ignored; only the link text and its target are kept.
"""
import logging
import re
from pathlib import Path
from typing import List, Union

from bs4 import BeautifulSoup, ParserRejectedMarkup

from bkmerge.constants import DEFAULT_ENCODING, HTML_PARSER
from bkmerge.errors import MalformedDocumentError
from bkmerge.models import LinkEntry

logger = logging.getLogger(__name__)

# Any start tag, end tag, comment or doctype
MARKUP_PATTERN = re.compile(r"<[A-Za-z!/]")


def extract(document_text: str, strict: bool = False, source: str = None) -> List[LinkEntry]:
    """
    Extract link entries from bookmark markup.

    Every <a> element with both a non-empty href and non-empty text
    content yields one LinkEntry. The label is the element's full text
    content, untrimmed. Anchors missing either are skipped.

    Args:
        document_text: Raw markup of the bookmark file
        strict: Raise MalformedDocumentError instead of degrading to an
            empty result when the input is not usable markup
        source: Name of the document, used in log and error messages

    Returns:
        Entries in document order
    """
    try:
        soup = BeautifulSoup(document_text, HTML_PARSER)
    except ParserRejectedMarkup as e:
        if strict:
            raise MalformedDocumentError(str(e), source) from e
        logger.warning(f"Parser rejected {source or 'document'}: {e}")
        return []

    if strict and document_text.strip() and not MARKUP_PATTERN.search(document_text):
        raise MalformedDocumentError("no markup elements found", source)

    entries = []
    for link in soup.find_all("a"):
        url = link.get("href")
        label = link.get_text()
        if url and label:
            entries.append(LinkEntry(label=label, url=url))

    logger.debug(f"Extracted {len(entries)} links from {source or 'document'}")
    return entries


def extract_file(path: Union[str, Path], strict: bool = False,
                 encoding: str = DEFAULT_ENCODING) -> List[LinkEntry]:
    """Read a bookmark file from disk and extract its links."""
    path = Path(path)
    with open(path, "r", encoding=encoding) as f:
        content = f.read()
    return extract(content, strict=strict, source=path.name)
