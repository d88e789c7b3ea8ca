"""
Merge store for bkmerge.

Accumulates link entries from any number of bookmark files, keeping every
URL at most once across all of them and grouping the survivors by label.
"""
import logging
from typing import Dict, Iterable, List

from bkmerge.constants import DEFAULT_DOCUMENT_TITLE, DEFAULT_HEADING
from bkmerge.exporters import render_html
from bkmerge.models import LinkEntry

logger = logging.getLogger(__name__)


class MergeStore:
    """
    Deduplicating accumulator of bookmarks grouped by label.

    The first occurrence of a URL wins; later occurrences from the same or
    any other file are dropped. A URL is recorded as seen in the same step
    that it is appended to its label's group.

    Example:
        >>> store = MergeStore()
        >>> store.ingest([LinkEntry("Docs", "https://a.com")])
        1
        >>> store.groups
        {'Docs': ['https://a.com']}
    """

    def __init__(self):
        self._seen = set()
        self._groups: Dict[str, List[str]] = {}

    def ingest(self, entries: Iterable[LinkEntry]) -> int:
        """
        Add entries whose URL has not been seen yet.

        Args:
            entries: Link entries in document order

        Returns:
            Number of entries added (duplicates are skipped silently)
        """
        added = 0
        for entry in entries:
            if entry.url in self._seen:
                logger.debug(f"Skipping duplicate URL: {entry.url}")
                continue

            self._seen.add(entry.url)
            self._groups.setdefault(entry.label, []).append(entry.url)
            added += 1

        return added

    def serialize(self, escape: bool = True, title: str = DEFAULT_DOCUMENT_TITLE,
                  heading: str = DEFAULT_HEADING) -> str:
        """Render the accumulated groups as a Netscape bookmark document."""
        return render_html(self._groups, escape=escape, title=title, heading=heading)

    @property
    def groups(self) -> Dict[str, List[str]]:
        """Copy of the label -> URLs mapping, in insertion order."""
        return {label: list(urls) for label, urls in self._groups.items()}

    @property
    def labels(self) -> List[str]:
        return list(self._groups)

    @property
    def label_count(self) -> int:
        return len(self._groups)

    @property
    def url_count(self) -> int:
        return len(self._seen)

    def clear(self):
        """Forget everything ingested so far."""
        self._seen.clear()
        self._groups.clear()

    def __contains__(self, url: str) -> bool:
        return url in self._seen

    def __len__(self) -> int:
        return len(self._groups)

    def __repr__(self) -> str:
        return f"<MergeStore(labels={self.label_count}, urls={self.url_count})>"
