"""
Data types shared by the extractor and the merge store.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class LinkEntry:
    """
    One (label, url) pair found in a bookmark document.

    Produced by the extractor for each anchor element and consumed by
    MergeStore.ingest; never persisted.
    """

    label: str
    url: str

    def to_dict(self) -> dict:
        return {"label": self.label, "url": self.url}
