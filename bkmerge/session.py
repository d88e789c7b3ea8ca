"""
Merge sessions.

A session owns one MergeStore for its lifetime. It screens incoming files
by name, reads accepted files concurrently, and feeds each file's links
into the store from the session's own thread, so the store only ever has
a single writer. When asked to merge it confirms with the caller, then
serializes the store and writes the merged document.
"""
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, IO, Iterable, List, Optional, Union

from bkmerge import notify
from bkmerge.config import MergerConfig, get_config
from bkmerge.errors import EmptyMergeError, InvalidFileTypeError, MalformedDocumentError
from bkmerge.exporters import export_file
from bkmerge.extractor import extract
from bkmerge.notify import Notifier, NotificationKind
from bkmerge.store import MergeStore

logger = logging.getLogger(__name__)

Source = Union[str, Path, IO]


@dataclass
class FileResult:
    """Outcome of offering one file to a session."""
    name: str
    status: NotificationKind
    found: int = 0
    added: int = 0
    error: Optional[str] = None

    @property
    def skipped(self) -> int:
        """Links found but dropped as duplicates."""
        return self.found - self.added

    @property
    def ok(self) -> bool:
        return self.status == NotificationKind.PARSE_SUCCESS


def confirmation_message(label_count: int) -> str:
    return f"Are you sure you want to merge {label_count} bookmark folders?"


def source_name(source: Source) -> str:
    """Best-effort file name of a path or file-like object."""
    if isinstance(source, (str, Path)):
        return Path(source).name
    name = getattr(source, "name", None)
    return Path(name).name if isinstance(name, str) else ""


def read_source(source: Source, encoding: str) -> str:
    """Read the full text of a path or file-like object."""
    if hasattr(source, "read"):
        data = source.read()
        return data.decode(encoding) if isinstance(data, bytes) else data
    with open(source, "r", encoding=encoding) as f:
        return f.read()


class MergeSession:
    """
    One merge from first file to written output.

    Usage:
        with MergeSession() as session:
            session.add_files(["chrome.html", "firefox.html"])
            session.merge(confirm=lambda n: True)
    """

    def __init__(self, config: MergerConfig = None, notifier: Notifier = None):
        self.config = config or get_config()
        self.notifier = notifier or Notifier()
        self.store = MergeStore()
        self.results: List[FileResult] = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        """End the session, discarding everything accumulated."""
        self.store.clear()
        self.results.clear()

    def check_file_type(self, name: str):
        """
        Raises:
            InvalidFileTypeError: If the name lacks an accepted extension
        """
        if not self.config.accepts(name):
            raise InvalidFileTypeError(name, self.config.accepted_extensions)

    def add_files(self, sources: Iterable[Source], ordered: bool = None) -> List[FileResult]:
        """
        Read, extract and ingest a batch of bookmark files.

        Files with the wrong extension are rejected up front. The rest are
        read in parallel and ingested one at a time as their reads finish
        (ordered=False), or in the order given (ordered=True). Which file
        keeps a URL that appears in several depends on ingest order.

        Args:
            sources: Paths or file-like objects with a name
            ordered: Ingest in submission order (default from config)

        Returns:
            One FileResult per source
        """
        if ordered is None:
            ordered = self.config.ordered_ingest

        results = []
        accepted = []
        for source in sources:
            name = source_name(source)
            try:
                self.check_file_type(name)
            except InvalidFileTypeError as e:
                results.append(self._reject(name, e))
                continue
            accepted.append((name, source))

        if accepted:
            workers = max(1, min(self.config.max_workers, len(accepted)))
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = {
                    executor.submit(read_source, source, self.config.encoding): name
                    for name, source in accepted
                }
                completed = list(futures) if ordered else as_completed(futures)
                for future in completed:
                    name = futures[future]
                    try:
                        text = future.result()
                    except (OSError, UnicodeDecodeError) as e:
                        logger.error(f"Failed to read {name}: {e}")
                        results.append(self._fail(name, f"Could not read file: {e}"))
                        continue
                    results.append(self._ingest(name, text))

        self.results.extend(results)
        return results

    def add_text(self, name: str, text: str) -> FileResult:
        """Ingest an already-read document under the given file name."""
        try:
            self.check_file_type(name)
        except InvalidFileTypeError as e:
            result = self._reject(name, e)
        else:
            result = self._ingest(name, text)
        self.results.append(result)
        return result

    def _ingest(self, name: str, text: str) -> FileResult:
        try:
            entries = extract(text, strict=self.config.strict_parsing, source=name)
        except MalformedDocumentError as e:
            logger.warning(str(e))
            return self._fail(name, e.reason)

        added = self.store.ingest(entries)
        logger.info(f"{name}: {len(entries)} links, {added} new, "
                    f"{len(entries) - added} duplicates")
        self.notifier.notify(notify.parse_success(name))
        return FileResult(name, NotificationKind.PARSE_SUCCESS, found=len(entries), added=added)

    def _reject(self, name: str, error: InvalidFileTypeError) -> FileResult:
        self.notifier.notify(notify.invalid_file_type(name))
        return FileResult(name, NotificationKind.INVALID_FILE_TYPE, error=str(error))

    def _fail(self, name: str, reason: str) -> FileResult:
        self.notifier.notify(notify.parse_failure(reason, name))
        return FileResult(name, NotificationKind.PARSE_FAILURE, error=reason)

    def serialize(self, escape: bool = None) -> str:
        """Render the store using the session's output settings."""
        if escape is None:
            escape = self.config.escape_output
        return self.store.serialize(
            escape=escape,
            title=self.config.document_title,
            heading=self.config.heading,
        )

    def merge(self, output: Union[str, Path] = None,
              confirm: Callable[[int], bool] = None,
              escape: bool = None) -> Optional[Path]:
        """
        Confirm, serialize and write the merged bookmark file.

        Args:
            output: Destination (defaults to config output_file)
            confirm: Called with the number of label groups; a false
                return cancels the merge. None skips confirmation, so
                callers that pass None must have obtained it already.
            escape: Override config escape_output

        Returns:
            Path written, or None if the merge was declined

        Raises:
            EmptyMergeError: If nothing has been ingested
        """
        label_count = self.store.label_count
        if label_count == 0:
            raise EmptyMergeError()

        if confirm is not None and not confirm(label_count):
            logger.info("Merge cancelled")
            return None

        document = self.serialize(escape)
        path = Path(output) if output else self.config.get_output_path()
        path = export_file(document, path, encoding=self.config.encoding)

        logger.info(f"Wrote {self.store.url_count} bookmarks in {label_count} folders to {path}")
        self.notifier.notify(notify.merge_success(str(path)))
        return path
